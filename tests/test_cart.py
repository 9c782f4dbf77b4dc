"""
Cart session: line edits, contract terms, promo codes, overrides.
"""

import asyncio
from decimal import Decimal

import pytest
from kungfu import Error, Ok

from quotecart.cart import (
    CartErrorKind,
    CartSession,
    SessionPool,
    attach,
    clear_override,
    override,
    select_term,
    term_of,
)
from quotecart.discounts import ContractTerm, MemoryRegistry
from quotecart.pricing import NO_DISCOUNT, Attached, Contracted, NoDiscount, Overridden


def ok_value(result: object) -> object:
    match result:
        case Ok(value):
            return value
        case _:
            pytest.fail(f"expected Ok, got {result!r}")


def error_kind(result: object) -> CartErrorKind:
    match result:
        case Error(e):
            return e.kind
        case _:
            pytest.fail(f"expected an error, got {result!r}")


# ═══════════════════════════════════════════════════════════════════════════════
# Transitions
# ═══════════════════════════════════════════════════════════════════════════════


class TestTransitions:
    def test_term_replaces_promo(self, registry: MemoryRegistry) -> None:
        offer = registry.get_discount("c12-25")
        mode = select_term(Attached("spring"), ContractTerm.TWELVE_MONTHS, offer)
        assert mode == Contracted(ContractTerm.TWELVE_MONTHS, "c12-25")

    def test_term_without_offer(self) -> None:
        assert select_term(NO_DISCOUNT, ContractTerm.SIX_MONTHS, None) == Contracted(ContractTerm.SIX_MONTHS)

    def test_dropping_term_does_not_restore_promo(self) -> None:
        mode = select_term(Contracted(ContractTerm.TWELVE_MONTHS, "c12-25"), ContractTerm.NONE, None)
        assert mode is NO_DISCOUNT

    def test_none_term_keeps_attached_offer(self) -> None:
        assert select_term(Attached("spring"), ContractTerm.NONE, None) == Attached("spring")

    def test_term_change_under_override_keeps_amount(self) -> None:
        mode = select_term(Overridden(Decimal("30")), ContractTerm.TWELVE_MONTHS, None)
        assert mode == Overridden(Decimal("30"), ContractTerm.TWELVE_MONTHS)
        assert term_of(mode) is ContractTerm.TWELVE_MONTHS

    def test_override_keeps_term(self) -> None:
        mode = override(Contracted(ContractTerm.SIX_MONTHS, "c6-50"), Decimal("5"))
        assert mode == Overridden(Decimal("5"), ContractTerm.SIX_MONTHS)

    def test_clear_override(self) -> None:
        assert clear_override(Overridden(Decimal("5"))) is NO_DISCOUNT
        assert clear_override(Overridden(Decimal("5"), ContractTerm.TWELVE_MONTHS)) == Contracted(
            ContractTerm.TWELVE_MONTHS
        )
        assert clear_override(Attached("spring")) == Attached("spring")

    def test_attach(self) -> None:
        assert attach("spring") == Attached("spring")
        assert isinstance(attach(None), NoDiscount)


# ═══════════════════════════════════════════════════════════════════════════════
# Session: lines
# ═══════════════════════════════════════════════════════════════════════════════


class TestLines:
    def test_add_same_product_bumps_quantity(self, session: CartSession) -> None:
        session.add_item("pro")
        session.add_item("pro")
        assert len(session) == 1
        assert session.items[0].quantity == 2

    def test_unknown_product(self, session: CartSession) -> None:
        assert error_kind(session.add_item("nope")) is CartErrorKind.PRODUCT_NOT_FOUND
        assert len(session) == 0

    def test_set_quantity_rejects_zero(self, session: CartSession) -> None:
        session.add_item("pro")
        assert error_kind(session.set_quantity("pro", 0)) is CartErrorKind.INVALID_QUANTITY
        assert session.items[0].quantity == 1

    def test_change_quantity_clamps_at_one(self, session: CartSession) -> None:
        session.add_item("pro")
        session.change_quantity("pro", 3)
        assert session.items[0].quantity == 4
        session.change_quantity("pro", -10)
        assert session.items[0].quantity == 1

    def test_remove(self, session: CartSession) -> None:
        session.add_item("pro")
        assert ok_value(session.remove_item("pro")) is None
        assert error_kind(session.remove_item("pro")) is CartErrorKind.ITEM_NOT_FOUND

    def test_clear(self, session: CartSession) -> None:
        session.add_item("pro")
        session.add_item("addon")
        session.clear()
        assert session.get_aggregate().final_total == Decimal("0")


# ═══════════════════════════════════════════════════════════════════════════════
# Session: pricing mechanisms
# ═══════════════════════════════════════════════════════════════════════════════


class TestPricingFlow:
    def test_worked_example(self, session: CartSession) -> None:
        session.add_item("pro")
        session.set_quantity("pro", 2)
        assert session.get_aggregate().final_total == Decimal("200")

        session.attach_discount("pro", "spring")
        agg = session.get_aggregate()
        assert agg.final_total == Decimal("150")
        assert agg.total_discount == Decimal("50")

        session.apply_override("pro", 30)
        agg = session.get_aggregate()
        assert agg.subtotal == Decimal("200")
        assert agg.final_total == Decimal("170")
        assert agg.total_discount == Decimal("30")

    def test_term_auto_selects_best_offer(self, session: CartSession) -> None:
        session.add_item("addon")
        session.set_contract_term("addon", ContractTerm.TWELVE_MONTHS)
        item = session.items[0]
        assert item.applied_discount_id == "c12-free"
        assert session.get_aggregate().final_total == Decimal("0")

    def test_term_clears_promo_code(self, session: CartSession) -> None:
        session.add_item("pro")
        session.apply_code("SPRING25")
        session.set_contract_term("pro", ContractTerm.TWELVE_MONTHS)
        assert session.items[0].applied_discount_id == "c12-25"

        session.set_contract_term("pro", ContractTerm.NONE)
        assert session.items[0].mode is NO_DISCOUNT

    def test_attach_rejected_on_committed_item(self, session: CartSession) -> None:
        session.add_item("pro")
        session.set_contract_term("pro", ContractTerm.SIX_MONTHS)
        assert error_kind(session.attach_discount("pro", "spring")) is CartErrorKind.ITEM_UNDER_CONTRACT

    def test_attach_rejects_ineligible(self, session: CartSession) -> None:
        session.add_item("addon")
        assert error_kind(session.attach_discount("addon", "pro15")) is CartErrorKind.DISCOUNT_NOT_ELIGIBLE
        assert error_kind(session.attach_discount("addon", "old")) is CartErrorKind.DISCOUNT_NOT_ELIGIBLE
        assert error_kind(session.attach_discount("addon", "c12-25")) is CartErrorKind.DISCOUNT_NOT_ELIGIBLE
        assert error_kind(session.attach_discount("addon", "missing")) is CartErrorKind.DISCOUNT_NOT_FOUND
        assert session.items[0].mode is NO_DISCOUNT

    def test_detach(self, session: CartSession) -> None:
        session.add_item("pro")
        session.attach_discount("pro", "spring")
        session.attach_discount("pro", None)
        assert session.items[0].mode is NO_DISCOUNT

    @pytest.mark.parametrize("amount", [-1, "-0.01", "NaN"])
    def test_bad_override_leaves_cart_alone(self, session: CartSession, amount: object) -> None:
        session.add_item("pro")
        session.attach_discount("pro", "spring")
        assert error_kind(session.apply_override("pro", amount)) is CartErrorKind.INVALID_OVERRIDE_AMOUNT
        assert session.items[0].mode == Attached("spring")

    def test_clear_override_restores_nothing(self, session: CartSession) -> None:
        session.add_item("pro")
        session.attach_discount("pro", "spring")
        session.apply_override("pro", 10)
        session.clear_override("pro")
        assert session.items[0].mode is NO_DISCOUNT
        assert session.get_aggregate().final_total == Decimal("100")

    def test_override_on_committed_item_keeps_term(self, session: CartSession) -> None:
        session.add_item("pro")
        session.set_contract_term("pro", ContractTerm.TWELVE_MONTHS)
        session.apply_override("pro", 20)
        assert session.items[0].contract_term is ContractTerm.TWELVE_MONTHS
        assert session.get_aggregate().final_total == Decimal("80")

    def test_applicable_discounts(self, session: CartSession) -> None:
        session.add_item("pro")
        match session.applicable_discounts("pro"):
            case Ok(found):
                assert [d.id for d in found] == ["spring", "pro15", "trial"]
            case Error(e):
                pytest.fail(e.message)


# ═══════════════════════════════════════════════════════════════════════════════
# Session: promo codes
# ═══════════════════════════════════════════════════════════════════════════════


class TestPromoCodes:
    def test_code_is_case_insensitive(self, session: CartSession) -> None:
        session.add_item("pro")
        session.add_item("addon")
        assert ok_value(session.apply_code("  spring25 ")) == 2

    @pytest.mark.parametrize(
        ("code", "kind"),
        [
            ("", CartErrorKind.CODE_EMPTY),
            ("   ", CartErrorKind.CODE_EMPTY),
            ("NOPE", CartErrorKind.INVALID_CODE),
            ("TERM25", CartErrorKind.NOT_APPLICABLE_VIA_CODE),
            ("OLD10", CartErrorKind.CODE_EXPIRED),
        ],
    )
    def test_rejections_leave_cart_unchanged(self, session: CartSession, code: str, kind: CartErrorKind) -> None:
        session.add_item("pro")
        session.attach_discount("pro", "pro15")
        before = session.items
        assert error_kind(session.apply_code(code)) is kind
        assert session.items == before

    def test_code_never_touches_committed_items(self, session: CartSession) -> None:
        session.add_item("pro")
        session.add_item("addon")
        session.set_contract_term("addon", ContractTerm.TWELVE_MONTHS)
        assert ok_value(session.apply_code("SPRING25")) == 1
        modes = {item.id: item.mode for item in session.items}
        assert modes["pro"] == Attached("spring")
        assert modes["addon"] == Contracted(ContractTerm.TWELVE_MONTHS, "c12-free")

    def test_no_eligible_items(self, session: CartSession) -> None:
        session.add_item("addon")
        assert error_kind(session.apply_code("PRO15")) is CartErrorKind.NO_ELIGIBLE_ITEMS

        session.set_contract_term("addon", ContractTerm.SIX_MONTHS)
        assert error_kind(session.apply_code("SPRING25")) is CartErrorKind.NO_ELIGIBLE_ITEMS

    def test_code_clears_override(self, session: CartSession) -> None:
        session.add_item("pro")
        session.apply_override("pro", 40)
        session.apply_code("SPRING25")
        assert session.items[0].custom_discount_value is None
        assert session.get_aggregate().final_total == Decimal("75")

    def test_targeted_code_only_hits_its_products(self, session: CartSession) -> None:
        session.add_item("pro")
        session.add_item("addon")
        assert ok_value(session.apply_code("pro15")) == 1
        assert session.get_aggregate().final_total == Decimal("135")


# ═══════════════════════════════════════════════════════════════════════════════
# Pool
# ═══════════════════════════════════════════════════════════════════════════════


class TestSessionPool:
    async def test_same_cart_same_session(self, pool: SessionPool) -> None:
        async with pool.acquire("a") as first:
            first.add_item("pro")
        async with pool.acquire("a") as again:
            assert len(again) == 1
        async with pool.acquire("b") as other:
            assert len(other) == 0
        assert "a" in pool

    async def test_access_is_serialized(self, pool: SessionPool) -> None:
        order: list[str] = []

        async def worker(name: str) -> None:
            async with pool.acquire("shared") as session:
                order.append(f"{name}:in")
                await asyncio.sleep(0.01)
                session.add_item("pro")
                order.append(f"{name}:out")

        await asyncio.gather(worker("one"), worker("two"))
        assert order == ["one:in", "one:out", "two:in", "two:out"]
        async with pool.acquire("shared") as session:
            assert session.items[0].quantity == 2

    async def test_discard(self, pool: SessionPool) -> None:
        async with pool.acquire("gone") as session:
            session.add_item("pro")
        await pool.discard("gone")
        assert "gone" not in pool

    async def test_discard_unknown_cart(self, pool: SessionPool) -> None:
        await pool.discard("never-seen")
        assert len(pool) == 0

    async def test_empty_cart_dropped_after_lookup(self, pool: SessionPool) -> None:
        async with pool.acquire("lookup") as session:
            assert len(session) == 0
            assert "lookup" in pool
        assert "lookup" not in pool
        assert len(pool) == 0

    async def test_cart_emptied_in_use_is_dropped(self, pool: SessionPool) -> None:
        async with pool.acquire("c") as session:
            session.add_item("pro")
        assert "c" in pool
        async with pool.acquire("c") as session:
            session.clear()
        assert "c" not in pool

    async def test_discard_keeps_one_owner_per_cart(self, pool: SessionPool) -> None:
        order: list[str] = []
        release = asyncio.Event()

        async def holder() -> None:
            async with pool.acquire("c") as session:
                session.add_item("pro")
                order.append("a:in")
                await release.wait()
                order.append("a:out")

        async def worker(name: str) -> None:
            async with pool.acquire("c") as session:
                order.append(f"{name}:in")
                session.add_item("addon")
                await asyncio.sleep(0)
                order.append(f"{name}:out")

        a = asyncio.create_task(holder())
        await asyncio.sleep(0)
        b = asyncio.create_task(worker("b"))
        await asyncio.sleep(0)
        gone = asyncio.create_task(pool.discard("c"))
        await asyncio.sleep(0)
        d = asyncio.create_task(worker("d"))
        await asyncio.sleep(0)

        assert not gone.done()
        release.set()
        await asyncio.gather(a, b, gone, d)

        assert order == ["a:in", "a:out", "b:in", "b:out", "d:in", "d:out"]
        async with pool.acquire("c") as session:
            assert [item.product.id for item in session.items] == ["addon"]
