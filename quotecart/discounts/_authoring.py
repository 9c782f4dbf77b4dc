"""
Authoring — turning the discount form into a registry Discount.

The contract effect (months free vs percent off) is decided here, once.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from quotecart._types import Money, to_money
from quotecart.discounts._types import (
    ALL_PRODUCTS,
    ContractEffect,
    Discount,
    DiscountType,
    FreeMonths,
    PercentOff,
    effect_from_name,
)

# ═══════════════════════════════════════════════════════════════════════════════
# Contract Presets
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ContractPreset:
    name: str
    contract_term: int
    value: Money
    effect: ContractEffect


CONTRACT_PRESETS: dict[str, ContractPreset] = {
    "6MO_50": ContractPreset("6 Months - 50% Off", 6, to_money(50), PercentOff(to_money(50))),
    "12MO_25": ContractPreset("12 Months - 25% Off", 12, to_money(25), PercentOff(to_money(25))),
    "12MO_3FREE": ContractPreset("12 Months - 3 Months Free", 12, to_money(3), FreeMonths(to_money(3))),
}


# ═══════════════════════════════════════════════════════════════════════════════
# author_discount()
# ═══════════════════════════════════════════════════════════════════════════════


def author_discount(
    *,
    id: str,
    name: str,
    code: str,
    type: DiscountType,
    value: Money | int | float | str,
    contract_term: int | None = None,
    product_ids: Iterable[str] = (),
    expires_at: datetime | None = None,
    effect: ContractEffect | None = None,
    currency: str | None = None,
) -> Discount:
    """
    Build a Discount the way the discount form submits it.

    - empty product selection → applies to ALL
    - contract_term is kept only for CONTRACT (and must be 6 or 12)
    - CUSTOM offers are manager-only
    - CONTRACT effect comes from `effect`, else from the legacy name convention

    Raises ValueError on a CONTRACT offer without a supported term.
    """
    amount = to_money(value)
    scope = frozenset(product_ids) or frozenset({ALL_PRODUCTS})

    term: int | None = None
    resolved_effect: ContractEffect | None = None
    if type is DiscountType.CONTRACT:
        if contract_term not in (6, 12):
            raise ValueError(f"Contract offers need a 6 or 12 month term, got {contract_term!r}")
        term = contract_term
        resolved_effect = effect if effect is not None else effect_from_name(name, amount)

    return Discount(
        id=id,
        name=name,
        code=code.strip().upper(),
        type=type,
        value=amount,
        contract_term=term,
        applicable_product_ids=scope,
        expires_at=expires_at,
        effect=resolved_effect,
        is_manager_only=type is DiscountType.CUSTOM,
        currency=currency,
    )


def from_preset(preset_key: str, *, id: str, code: str, product_ids: Iterable[str] = ()) -> Discount:
    """Author one of CONTRACT_PRESETS. KeyError for unknown keys."""
    preset = CONTRACT_PRESETS[preset_key]
    return author_discount(
        id=id,
        name=preset.name,
        code=code,
        type=DiscountType.CONTRACT,
        value=preset.value,
        contract_term=preset.contract_term,
        product_ids=product_ids,
        effect=preset.effect,
    )


def toggle_product(selection: Iterable[str], product_id: str) -> tuple[str, ...]:
    """Add product_id to the multi-select, or remove it if already there."""
    current = tuple(selection)
    if product_id in current:
        return tuple(pid for pid in current if pid != product_id)
    return (*current, product_id)


# ═══════════════════════════════════════════════════════════════════════════════
# Display
# ═══════════════════════════════════════════════════════════════════════════════


def _number(value: Money) -> str:
    # 25 → "25", 12.5 → "12.5"
    return format(value.normalize(), "f")


def describe_offer(discount: Discount) -> str:
    """Badge text for an offer card."""
    match discount.type:
        case DiscountType.PERCENTAGE:
            return f"{_number(discount.value)}% OFF"
        case DiscountType.CONTRACT:
            if isinstance(discount.effect, FreeMonths):
                return f"{_number(discount.effect.count)} MO FREE"
            return f"{_number(discount.value)}% OFF"
        case DiscountType.CUSTOM:
            return "MANUAL"
        case _:
            return f"+{_number(discount.value)} Days"


def describe_commitment(discount: Discount) -> str:
    match discount.type:
        case DiscountType.CONTRACT:
            return f"{discount.contract_term} Month Commitment"
        case DiscountType.CUSTOM:
            return "Applied by Manager"
        case _:
            return "Discount applied"


__all__ = (
    "ContractPreset",
    "CONTRACT_PRESETS",
    "author_discount",
    "from_preset",
    "toggle_product",
    "describe_offer",
    "describe_commitment",
)
