"""
Aggregation — cart totals and the per-line breakdown.

Sums are exact; round only what you display (CartAggregate.rounded()).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from quotecart._types import Money, ZERO, floor_zero, round_money
from quotecart.catalog import BillingCycle
from quotecart.discounts import ContractTerm, DiscountRegistry
from quotecart.pricing import CartItem, price, resolve_discount


@dataclass(frozen=True, slots=True)
class CartAggregate:
    subtotal: Money
    total_discount: Money
    final_total: Money

    def rounded(self, places: int = 2) -> CartAggregate:
        return CartAggregate(
            subtotal=round_money(self.subtotal, places),
            total_discount=round_money(self.total_discount, places),
            final_total=round_money(self.final_total, places),
        )


@dataclass(frozen=True, slots=True)
class LineBreakdown:
    item_id: str
    name: str
    quantity: int
    unit_price: Money
    billing_cycle: BillingCycle
    contract_term: ContractTerm
    undiscounted_total: Money
    discounted_total: Money
    applied_discount_name: str | None = None
    applied_discount_code: str | None = None
    override_amount: Money | None = None


def line_breakdown(
    items: Iterable[CartItem],
    registry: DiscountRegistry,
) -> tuple[LineBreakdown, ...]:
    lines: list[LineBreakdown] = []
    for item in items:
        discount = resolve_discount(item, registry)
        lines.append(LineBreakdown(
            item_id=item.id,
            name=item.name,
            quantity=item.quantity,
            unit_price=item.price,
            billing_cycle=item.billing_cycle,
            contract_term=item.contract_term,
            undiscounted_total=item.item_total,
            discounted_total=price(item, discount),
            applied_discount_name=discount.name if discount else None,
            applied_discount_code=discount.code if discount else None,
            override_amount=item.custom_discount_value,
        ))
    return tuple(lines)


def totals(lines: Iterable[LineBreakdown]) -> CartAggregate:
    subtotal = ZERO
    final_total = ZERO
    for line in lines:
        subtotal += line.undiscounted_total
        final_total += line.discounted_total
    return CartAggregate(
        subtotal=subtotal,
        total_discount=floor_zero(subtotal - final_total),
        final_total=final_total,
    )


def aggregate(items: Iterable[CartItem], registry: DiscountRegistry) -> CartAggregate:
    return totals(line_breakdown(items, registry))


__all__ = (
    "CartAggregate",
    "LineBreakdown",
    "line_breakdown",
    "totals",
    "aggregate",
)
