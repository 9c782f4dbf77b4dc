"""
Eligibility — which offers a product may carry.

Two entry points, two audiences:
- is_applicable / applicable_discounts: the generic picker (never CONTRACT).
- select_contract_discount: the contract-term selector (CONTRACT only).
"""

from __future__ import annotations

from datetime import datetime

from quotecart._types import Money
from quotecart.discounts._types import Discount, DiscountType
from quotecart.discounts._registry import DiscountRegistry


def is_applicable(discount: Discount, product_id: str, as_of: datetime) -> bool:
    """
    Whether the picker may offer discount for product_id at as_of.

    Note: All three conditions must hold. An offer expiring exactly at as_of
    is still applicable.
    """
    return (
        discount.covers(product_id)
        and (discount.type is not DiscountType.CONTRACT)
        and (discount.expires_at is None or discount.expires_at >= as_of)
    )


def applicable_discounts(
    registry: DiscountRegistry,
    product_id: str,
    as_of: datetime,
) -> tuple[Discount, ...]:
    """Eligible-list for the per-item picker, in registry order."""
    return tuple(
        d for d in registry.list_discounts() if is_applicable(d, product_id, as_of)
    )


def _contract_rank(discount: Discount, product_id: str) -> tuple[int, Money]:
    # Product-specific before blanket, then higher value first.
    return (0 if discount.targets(product_id) else 1, -discount.value)


def contract_candidates(
    registry: DiscountRegistry,
    product_id: str,
    term_months: int,
) -> list[Discount]:
    """CONTRACT offers for term_months covering product_id, best first."""
    candidates = [
        d
        for d in registry.list_discounts()
        if d.type is DiscountType.CONTRACT
        and d.contract_term == term_months
        and d.covers(product_id)
    ]
    # sorted() is stable: full ties keep registry order.
    return sorted(candidates, key=lambda d: _contract_rank(d, product_id))


def select_contract_discount(
    registry: DiscountRegistry,
    product_id: str,
    term_months: int,
) -> Discount | None:
    """Best CONTRACT offer for the term, or None when nothing matches."""
    candidates = contract_candidates(registry, product_id, term_months)
    return candidates[0] if candidates else None


__all__ = (
    "is_applicable",
    "applicable_discounts",
    "contract_candidates",
    "select_contract_discount",
)
