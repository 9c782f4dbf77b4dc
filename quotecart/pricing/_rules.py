"""
Precedence — ordered (predicate, price function) pairs.

The first rule whose predicate holds prices the item; the rest are skipped:

    1. manager_override   flat amount off, ignores any attached offer
    2. no_discount        list price
    3. percentage         percent off
    4. contract           months free or percent off, per Discount.effect
    5. fallback           list price (offer types with no pricing effect yet)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from quotecart._types import Money, ZERO, floor_zero
from quotecart.catalog import BillingCycle
from quotecart.discounts import ContractTerm, Discount, DiscountType, FreeMonths, PercentOff
from quotecart.pricing._types import CartItem, Overridden

type Predicate = Callable[[CartItem, Discount | None], bool]
type PriceFn = Callable[[CartItem, Discount | None], Money]

HUNDRED = Decimal(100)
MONTHS_PER_YEAR = 12


@dataclass(frozen=True, slots=True)
class Rule:
    name: str
    applies: Predicate
    price: PriceFn


# ═══════════════════════════════════════════════════════════════════════════════
# Price Functions
# ═══════════════════════════════════════════════════════════════════════════════


def percent_off(item: CartItem, pct: Money) -> Money:
    return floor_zero(item.item_total * (1 - pct / HUNDRED))


def months_free(item: CartItem, discount: Discount, count: Money) -> Money:
    """
    Waive `count` monthly payments, never more than the committed term.

    Note: Works on the current line total (one billing cycle × quantity),
    so large waivers floor at zero.
    """
    monthly = item.price / MONTHS_PER_YEAR if item.billing_cycle is BillingCycle.YEARLY else item.price
    term_months = discount.contract_term or (
        6 if item.contract_term is ContractTerm.SIX_MONTHS else 12
    )
    free = min(count, Decimal(term_months))
    waived = monthly * free * item.quantity
    return floor_zero(item.item_total - waived)


def _override_price(item: CartItem, _discount: Discount | None) -> Money:
    match item.mode:
        case Overridden(amount, _):
            return floor_zero(item.item_total - amount)
        case _:
            raise ValueError(f"manager_override priced an item without an override: {item.mode!r}")


def _list_price(item: CartItem, _discount: Discount | None) -> Money:
    return item.item_total


def _require(discount: Discount | None, rule: str) -> Discount:
    if discount is None:
        raise ValueError(f"{rule} priced an item without a discount")
    return discount


def _percentage_price(item: CartItem, discount: Discount | None) -> Money:
    return percent_off(item, _require(discount, "percentage").value)


def _contract_price(item: CartItem, discount: Discount | None) -> Money:
    offer = _require(discount, "contract")
    match offer.effect:
        case FreeMonths(count):
            return months_free(item, offer, count)
        case PercentOff(pct):
            return percent_off(item, pct)
        case _:
            return item.item_total


# ═══════════════════════════════════════════════════════════════════════════════
# Predicates
# ═══════════════════════════════════════════════════════════════════════════════


def _has_override(item: CartItem, _discount: Discount | None) -> bool:
    amount = item.custom_discount_value
    return amount is not None and amount >= ZERO


def _no_discount(_item: CartItem, discount: Discount | None) -> bool:
    return discount is None


def _of_type(kind: DiscountType) -> Predicate:
    def check(_item: CartItem, discount: Discount | None) -> bool:
        return discount is not None and discount.type is kind
    return check


def _always(_item: CartItem, _discount: Discount | None) -> bool:
    return True


# ═══════════════════════════════════════════════════════════════════════════════
# Precedence
# ═══════════════════════════════════════════════════════════════════════════════

PRECEDENCE: tuple[Rule, ...] = (
    Rule("manager_override", _has_override, _override_price),
    Rule("no_discount", _no_discount, _list_price),
    Rule("percentage", _of_type(DiscountType.PERCENTAGE), _percentage_price),
    Rule("contract", _of_type(DiscountType.CONTRACT), _contract_price),
    Rule("fallback", _always, _list_price),
)


def governing_rule(
    item: CartItem,
    discount: Discount | None,
    rules: tuple[Rule, ...] = PRECEDENCE,
) -> Rule:
    """First rule that applies. ValueError if the table has no catch-all."""
    for rule in rules:
        if rule.applies(item, discount):
            return rule
    raise ValueError("Precedence table matched nothing; add a catch-all rule")


def price(
    item: CartItem,
    discount: Discount | None,
    rules: tuple[Rule, ...] = PRECEDENCE,
) -> Money:
    """Discounted line price (non-negative)."""
    return governing_rule(item, discount, rules).price(item, discount)


__all__ = (
    "Predicate",
    "PriceFn",
    "Rule",
    "PRECEDENCE",
    "percent_off",
    "months_free",
    "governing_rule",
    "price",
)
