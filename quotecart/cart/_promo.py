"""
Promo codes — one typed code applied across the whole cart.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from kungfu import Result, Ok, Error

from quotecart.cart._errors import CartError, CartErrors
from quotecart.cart import _transitions as T
from quotecart.discounts import (
    ContractTerm,
    Discount,
    DiscountRegistry,
    DiscountType,
    is_applicable,
)
from quotecart.pricing import CartItem

logger = logging.getLogger("quotecart.cart.promo")


@dataclass(frozen=True, slots=True)
class CodeApplication:
    """Outcome of a successful code: the offer, the new items, how many took it."""

    discount: Discount
    items: tuple[CartItem, ...]
    applied_count: int


def normalize_code(code: str) -> str:
    return code.strip().upper()


def apply_code(
    code: str,
    items: Iterable[CartItem],
    registry: DiscountRegistry,
    as_of: datetime,
) -> Result[CodeApplication, CartError]:
    """
    Attach the offer behind `code` to every eligible item.

    Checks, in order: empty, unknown, CONTRACT-only, expired, nothing eligible.
    Items on a contract term are skipped; eligible items lose any manager override.
    Applying the same code twice re-attaches the same offer.
    """
    normalized = normalize_code(code)
    if not normalized:
        return Error(CartErrors.code_empty())

    discount = registry.get_discount_by_code(normalized)
    if discount is None:
        logger.info("promo code %r not found", normalized)
        return Error(CartErrors.invalid_code())

    if discount.type is DiscountType.CONTRACT:
        return Error(CartErrors.not_applicable_via_code())

    if discount.is_expired(as_of):
        return Error(CartErrors.code_expired())

    updated: list[CartItem] = []
    applied = 0
    for item in items:
        if item.contract_term is not ContractTerm.NONE or not is_applicable(discount, item.id, as_of):
            updated.append(item)
            continue
        updated.append(item.with_mode(T.attach(discount.id)))
        applied += 1

    if applied == 0:
        return Error(CartErrors.no_eligible_items())

    logger.debug("promo code %s attached to %d item(s)", normalized, applied)
    return Ok(CodeApplication(discount=discount, items=tuple(updated), applied_count=applied))


__all__ = ("CodeApplication", "normalize_code", "apply_code")
