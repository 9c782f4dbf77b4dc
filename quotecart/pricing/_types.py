"""
Pricing types — cart items and their pricing mode.

A cart item has exactly one active pricing mechanism:

    NoDiscount                      list price
    Attached(discount_id)           promo picked from the list or typed as a code
    Contracted(term, discount_id?)  committed term, offer auto-selected (may be none)
    Overridden(amount, term)        manager flat amount, outranks everything
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from quotecart._types import Money
from quotecart.catalog import BillingCycle, Product
from quotecart.discounts import ContractTerm

# ═══════════════════════════════════════════════════════════════════════════════
# Pricing Mode
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class NoDiscount:
    pass


@dataclass(frozen=True, slots=True)
class Attached:
    discount_id: str


@dataclass(frozen=True, slots=True)
class Contracted:
    term: ContractTerm
    discount_id: str | None = None


@dataclass(frozen=True, slots=True)
class Overridden:
    """
    Manager override.

    Note: term survives the override so a committed item stays committed
    (promo codes keep skipping it, the order record keeps showing it).
    """

    amount: Money
    term: ContractTerm = ContractTerm.NONE


type PricingMode = NoDiscount | Attached | Contracted | Overridden

NO_DISCOUNT = NoDiscount()

# ═══════════════════════════════════════════════════════════════════════════════
# Cart Item
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CartItem:
    """Product snapshot + quantity + pricing mode. The item id is the product id."""

    product: Product
    quantity: int = 1
    mode: PricingMode = NO_DISCOUNT

    @property
    def id(self) -> str:
        return self.product.id

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def price(self) -> Money:
        return self.product.price

    @property
    def billing_cycle(self) -> BillingCycle:
        return self.product.billing_cycle

    @property
    def item_total(self) -> Money:
        """Undiscounted line total."""
        return self.product.price * self.quantity

    @property
    def applied_discount_id(self) -> str | None:
        match self.mode:
            case Attached(discount_id):
                return discount_id
            case Contracted(_, discount_id):
                return discount_id
            case _:
                return None

    @property
    def contract_term(self) -> ContractTerm:
        match self.mode:
            case Contracted(term, _) | Overridden(_, term):
                return term
            case _:
                return ContractTerm.NONE

    @property
    def custom_discount_value(self) -> Money | None:
        match self.mode:
            case Overridden(amount, _):
                return amount
            case _:
                return None

    def with_quantity(self, quantity: int) -> CartItem:
        return replace(self, quantity=quantity)

    def with_mode(self, mode: PricingMode) -> CartItem:
        return replace(self, mode=mode)


__all__ = (
    "NoDiscount",
    "Attached",
    "Contracted",
    "Overridden",
    "PricingMode",
    "NO_DISCOUNT",
    "CartItem",
)
