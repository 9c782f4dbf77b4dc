"""
Transitions — how each cart action moves an item's pricing mode.

Pure: take the current mode, return the next one. Validation lives in the session.

    action               from                       to
    ─────────────────    ───────────────────────    ─────────────────────────────
    select term T≠NONE   NoDiscount/Attached/Contr  Contracted(T, best offer?)
    select term NONE     Contracted                 NoDiscount (promo not restored)
    select term any      Overridden(a, _)           Overridden(a, T)
    attach offer d       any uncommitted            Attached(d)
    attach none          any uncommitted            NoDiscount
    promo code d         any uncommitted            Attached(d)
    override a           any (term kept)            Overridden(a, term)
    clear override       Overridden(_, T)           Contracted(T) or NoDiscount
"""

from __future__ import annotations

from quotecart._types import Money
from quotecart.discounts import ContractTerm, Discount
from quotecart.pricing import (
    NO_DISCOUNT,
    Attached,
    Contracted,
    Overridden,
    PricingMode,
)


def term_of(mode: PricingMode) -> ContractTerm:
    match mode:
        case Contracted(term, _) | Overridden(_, term):
            return term
        case _:
            return ContractTerm.NONE


def select_term(mode: PricingMode, term: ContractTerm, offer: Discount | None) -> PricingMode:
    """offer is the winner of contract selection for term (ignored for NONE)."""
    match mode:
        case Overridden(amount, _):
            return Overridden(amount, term)
        case Contracted() if term is ContractTerm.NONE:
            return NO_DISCOUNT
        case _ if term is ContractTerm.NONE:
            return mode
        case _:
            return Contracted(term, offer.id if offer is not None else None)


def attach(discount_id: str | None) -> PricingMode:
    return Attached(discount_id) if discount_id is not None else NO_DISCOUNT


def override(mode: PricingMode, amount: Money) -> PricingMode:
    return Overridden(amount, term_of(mode))


def clear_override(mode: PricingMode) -> PricingMode:
    match mode:
        case Overridden(_, ContractTerm.NONE):
            return NO_DISCOUNT
        case Overridden(_, term):
            return Contracted(term)
        case _:
            return mode


__all__ = (
    "term_of",
    "select_term",
    "attach",
    "override",
    "clear_override",
)
