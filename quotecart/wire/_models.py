"""
Wire models — pydantic shapes for the HTTP surface.

Requests convert with to_domain(), responses with from_domain().
Money leaves the engine rounded for display; inputs stay exact.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from quotecart._config import Settings
from quotecart._types import round_money
from quotecart.cart import CartAggregate, CartSession, LineBreakdown
from quotecart.checkout import CheckoutReceipt, CheckoutRequest
from quotecart.discounts import ContractTerm, Discount, describe_commitment, describe_offer

# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


class AddItemIn(BaseModel):
    product_id: str


class SetQuantityIn(BaseModel):
    quantity: int


class ChangeQuantityIn(BaseModel):
    delta: int


class SetTermIn(BaseModel):
    term: ContractTerm


class AttachDiscountIn(BaseModel):
    discount_id: str | None = None


class ApplyCodeIn(BaseModel):
    code: str


class OverrideIn(BaseModel):
    amount: Decimal


class CheckoutIn(BaseModel):
    idempotency_key: str = Field(min_length=1)
    lead_id: str | None = None
    actor_name: str
    tenant_id: str = ""
    user_id: str | None = None
    lead_company: str | None = None
    auto_renew: bool = False

    def to_domain(self) -> CheckoutRequest:
        return CheckoutRequest(
            idempotency_key=self.idempotency_key,
            lead_id=self.lead_id,
            actor_name=self.actor_name,
            tenant_id=self.tenant_id,
            user_id=self.user_id,
            lead_company=self.lead_company,
            auto_renew=self.auto_renew,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class LineOut(BaseModel):
    item_id: str
    name: str
    quantity: int
    unit_price: Decimal
    billing_cycle: str
    contract_term: ContractTerm
    undiscounted_total: Decimal
    discounted_total: Decimal
    applied_discount_name: str | None = None
    applied_discount_code: str | None = None
    override_amount: Decimal | None = None

    @classmethod
    def from_domain(cls, line: LineBreakdown, places: int = 2) -> LineOut:
        return cls(
            item_id=line.item_id,
            name=line.name,
            quantity=line.quantity,
            unit_price=line.unit_price,
            billing_cycle=line.billing_cycle.value,
            contract_term=line.contract_term,
            undiscounted_total=round_money(line.undiscounted_total, places),
            discounted_total=round_money(line.discounted_total, places),
            applied_discount_name=line.applied_discount_name,
            applied_discount_code=line.applied_discount_code,
            override_amount=line.override_amount,
        )


class TotalsOut(BaseModel):
    subtotal: Decimal
    total_discount: Decimal
    final_total: Decimal

    @classmethod
    def from_domain(cls, agg: CartAggregate, places: int = 2) -> TotalsOut:
        shown = agg.rounded(places)
        return cls(
            subtotal=shown.subtotal,
            total_discount=shown.total_discount,
            final_total=shown.final_total,
        )


class CartOut(BaseModel):
    cart_id: str
    lines: list[LineOut]
    totals: TotalsOut

    @classmethod
    def from_domain(cls, session: CartSession, settings: Settings) -> CartOut:
        places = settings.display_places
        lines = session.get_line_breakdown()
        return cls(
            cart_id=session.cart_id,
            lines=[LineOut.from_domain(line, places) for line in lines],
            totals=TotalsOut.from_domain(session.get_aggregate(), places),
        )


class CodeAppliedOut(BaseModel):
    applied_count: int
    cart: CartOut


class DiscountOut(BaseModel):
    id: str
    name: str
    code: str
    type: str
    value: Decimal
    badge: str
    commitment: str
    expires_at: datetime | None = None

    @classmethod
    def from_domain(cls, discount: Discount) -> DiscountOut:
        return cls(
            id=discount.id,
            name=discount.name,
            code=discount.code,
            type=discount.type.value,
            value=discount.value,
            badge=describe_offer(discount),
            commitment=describe_commitment(discount),
            expires_at=discount.expires_at,
        )


class ReceiptOut(BaseModel):
    order_id: str
    lead_id: str
    interaction_id: str
    final_total: Decimal
    summary: str
    from_cache: bool

    @classmethod
    def from_domain(cls, receipt: CheckoutReceipt, places: int = 2) -> ReceiptOut:
        return cls(
            order_id=receipt.order.order_id,
            lead_id=receipt.order.lead_id,
            interaction_id=receipt.interaction.id,
            final_total=round_money(receipt.order.totals.final_total, places),
            summary=receipt.order.summary,
            from_cache=receipt.from_cache,
        )


class ScriptOut(BaseModel):
    script: str


class ErrorOut(BaseModel):
    error: str
    message: str


__all__ = (
    "AddItemIn",
    "SetQuantityIn",
    "ChangeQuantityIn",
    "SetTermIn",
    "AttachDiscountIn",
    "ApplyCodeIn",
    "OverrideIn",
    "CheckoutIn",
    "LineOut",
    "TotalsOut",
    "CartOut",
    "CodeAppliedOut",
    "DiscountOut",
    "ReceiptOut",
    "ScriptOut",
    "ErrorOut",
)
