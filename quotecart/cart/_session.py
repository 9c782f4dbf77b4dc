"""
Cart session — the engine's boundary towards the CRUD UI.

One session owns one cart. Every mutation is validated first and applied
only on success, so an Error leaves the cart exactly as it was.
Reads (aggregate, breakdown) are recomputed from scratch every time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from kungfu import Result, Ok, Error

from quotecart._types import Money, ZERO, to_money
from quotecart.cart._aggregate import (
    CartAggregate,
    LineBreakdown,
    line_breakdown,
    totals,
)
from quotecart.cart._errors import CartError, CartErrors
from quotecart.cart._promo import apply_code
from quotecart.cart import _transitions as T
from quotecart.catalog import Catalog
from quotecart.discounts import (
    ContractTerm,
    Discount,
    DiscountRegistry,
    applicable_discounts,
    is_applicable,
    select_contract_discount,
)
from quotecart.pricing import CartItem

logger = logging.getLogger("quotecart.cart")

type Clock = Callable[[], datetime]


class CartSession:
    """
    In-memory cart with the pricing rules applied on every action.

    Example:
        session = CartSession(catalog, registry)
        session.add_item("pro")
        session.set_contract_term("pro", ContractTerm.TWELVE_MONTHS)
        match session.apply_code("spring25"):
            case Ok(count):
                ...
            case Error(e):
                show(e.message)
        session.get_aggregate().rounded()
    """

    def __init__(
        self,
        catalog: Catalog,
        registry: DiscountRegistry,
        *,
        cart_id: str = "cart",
        clock: Clock = datetime.now,
        items: Iterable[CartItem] = (),
    ) -> None:
        self.cart_id = cart_id
        self._catalog = catalog
        self._registry = registry
        self._clock = clock
        self._items: dict[str, CartItem] = {item.id: item for item in items}

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items.values())

    @property
    def registry(self) -> DiscountRegistry:
        return self._registry

    def get_item(self, item_id: str) -> Result[CartItem, CartError]:
        item = self._items.get(item_id)
        if item is None:
            return Error(CartErrors.item_not_found(item_id))
        return Ok(item)

    def __len__(self) -> int:
        return len(self._items)

    def _put(self, item: CartItem) -> Result[CartItem, CartError]:
        self._items[item.id] = item
        return Ok(item)

    # ─────────────────────────────────────────────────────────────────────────
    # Lines
    # ─────────────────────────────────────────────────────────────────────────

    def add_item(self, product_id: str) -> Result[CartItem, CartError]:
        """Add one unit of product; adding a product already in the cart bumps its quantity."""
        existing = self._items.get(product_id)
        if existing is not None:
            return self._put(existing.with_quantity(existing.quantity + 1))

        product = self._catalog.get_product(product_id)
        if product is None:
            return Error(CartErrors.product_not_found(product_id))

        logger.debug("cart %s: add %s", self.cart_id, product_id)
        return self._put(CartItem(product=product))

    def remove_item(self, item_id: str) -> Result[None, CartError]:
        if self._items.pop(item_id, None) is None:
            return Error(CartErrors.item_not_found(item_id))
        logger.debug("cart %s: remove %s", self.cart_id, item_id)
        return Ok(None)

    def set_quantity(self, item_id: str, quantity: int) -> Result[CartItem, CartError]:
        match self.get_item(item_id):
            case Ok(item):
                if quantity < 1:
                    return Error(CartErrors.invalid_quantity(quantity))
                return self._put(item.with_quantity(quantity))
            case Error(e):
                return Error(e)

    def change_quantity(self, item_id: str, delta: int) -> Result[CartItem, CartError]:
        """Stepper buttons: +/- delta, never below 1."""
        match self.get_item(item_id):
            case Ok(item):
                return self._put(item.with_quantity(max(1, item.quantity + delta)))
            case Error(e):
                return Error(e)

    def clear(self) -> None:
        self._items.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Pricing mechanisms
    # ─────────────────────────────────────────────────────────────────────────

    def set_contract_term(self, item_id: str, term: ContractTerm) -> Result[CartItem, CartError]:
        """Commit to a term and auto-attach its best offer (clears a promo code)."""
        match self.get_item(item_id):
            case Ok(item):
                offer = (
                    select_contract_discount(self._registry, item.id, term.months)
                    if term is not ContractTerm.NONE
                    else None
                )
                logger.debug(
                    "cart %s: %s term %s, offer %s",
                    self.cart_id, item_id, term.value, offer.id if offer else None,
                )
                return self._put(item.with_mode(T.select_term(item.mode, term, offer)))
            case Error(e):
                return Error(e)

    def attach_discount(self, item_id: str, discount_id: str | None) -> Result[CartItem, CartError]:
        """
        Pick an offer from the eligible list (None to remove it).

        Committed items are rejected: their offer comes from the term selector.
        """
        match self.get_item(item_id):
            case Ok(item):
                return self._attach(item, discount_id)
            case Error(e):
                return Error(e)

    def _attach(self, item: CartItem, discount_id: str | None) -> Result[CartItem, CartError]:
        if item.contract_term is not ContractTerm.NONE:
            return Error(CartErrors.item_under_contract(item.id))

        if discount_id is not None:
            discount = self._registry.get_discount(discount_id)
            if discount is None:
                return Error(CartErrors.discount_not_found(discount_id))
            if not is_applicable(discount, item.id, self._clock()):
                return Error(CartErrors.discount_not_eligible(discount.name, item.id))

        return self._put(item.with_mode(T.attach(discount_id)))

    def apply_code(self, code: str) -> Result[int, CartError]:
        """Apply a promo code cart-wide. Ok carries how many items took it."""
        match apply_code(code, self.items, self._registry, self._clock()):
            case Ok(application):
                self._items = {item.id: item for item in application.items}
                logger.info(
                    "cart %s: code %s applied to %d item(s)",
                    self.cart_id, application.discount.code, application.applied_count,
                )
                return Ok(application.applied_count)
            case Error(e):
                logger.info("cart %s: code rejected (%s)", self.cart_id, e.kind.name)
                return Error(e)

    def apply_override(
        self,
        item_id: str,
        amount: Money | int | float | str,
    ) -> Result[CartItem, CartError]:
        """
        Manager flat-amount discount. Whether the actor may do this is decided upstream.
        """
        value = to_money(amount)
        match self.get_item(item_id):
            case Ok(item):
                if value.is_nan() or value < ZERO:
                    return Error(CartErrors.invalid_override_amount(value))
                logger.info("cart %s: override %s on %s", self.cart_id, value, item_id)
                return self._put(item.with_mode(T.override(item.mode, value)))
            case Error(e):
                return Error(e)

    def clear_override(self, item_id: str) -> Result[CartItem, CartError]:
        match self.get_item(item_id):
            case Ok(item):
                return self._put(item.with_mode(T.clear_override(item.mode)))
            case Error(e):
                return Error(e)

    # ─────────────────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────────────────

    def applicable_discounts(self, item_id: str) -> Result[tuple[Discount, ...], CartError]:
        match self.get_item(item_id):
            case Ok(item):
                return Ok(applicable_discounts(self._registry, item.id, self._clock()))
            case Error(e):
                return Error(e)

    def get_line_breakdown(self) -> tuple[LineBreakdown, ...]:
        return line_breakdown(self.items, self._registry)

    def get_aggregate(self) -> CartAggregate:
        return totals(self.get_line_breakdown())


__all__ = ("Clock", "CartSession")
