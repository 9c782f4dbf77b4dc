"""
Discount types — offers, contract terms and contract effects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from quotecart._types import Money

# ═══════════════════════════════════════════════════════════════════════════════
# Enumerations
# ═══════════════════════════════════════════════════════════════════════════════

ALL_PRODUCTS = "ALL"
"""Scope sentinel: the discount covers every product."""


class DiscountType(Enum):
    PERCENTAGE = "PERCENTAGE"
    CONTRACT = "CONTRACT"
    CUSTOM = "CUSTOM"
    TRIAL_EXTENSION = "TRIAL_EXTENSION"
    FIXED_AMOUNT = "FIXED_AMOUNT"


class ContractTerm(Enum):
    """Commitment chosen on a cart item."""

    NONE = "NONE"
    SIX_MONTHS = "6_MONTHS"
    TWELVE_MONTHS = "12_MONTHS"

    @property
    def months(self) -> int:
        return _TERM_MONTHS[self]

    @classmethod
    def from_months(cls, months: int) -> ContractTerm:
        for term, count in _TERM_MONTHS.items():
            if count == months:
                return term
        raise ValueError(f"Unsupported contract length: {months} months")


_TERM_MONTHS = {
    ContractTerm.NONE: 0,
    ContractTerm.SIX_MONTHS: 6,
    ContractTerm.TWELVE_MONTHS: 12,
}

# ═══════════════════════════════════════════════════════════════════════════════
# Contract Effect — what a CONTRACT discount's value means
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class FreeMonths:
    """value counts waived monthly payments."""

    count: Money


@dataclass(frozen=True, slots=True)
class PercentOff:
    """value is percentage points off the line total."""

    pct: Money


type ContractEffect = FreeMonths | PercentOff


def effect_from_name(name: str, value: Money) -> ContractEffect:
    """
    Legacy naming convention: "free" anywhere in the name means months free.

    Note: Applied once, when the offer is authored. Pricing reads Discount.effect only.
    """
    if "free" in name.lower():
        return FreeMonths(value)
    return PercentOff(value)


# ═══════════════════════════════════════════════════════════════════════════════
# Discount
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Discount:
    """
    An offer from the registry. Immutable within a pricing session.

    contract_term: 6 or 12, only meaningful for CONTRACT.
    effect: set for CONTRACT offers; derived from the name when omitted.
    """

    id: str
    name: str
    code: str
    type: DiscountType
    value: Money
    contract_term: int | None = None
    applicable_product_ids: frozenset[str] = field(
        default_factory=lambda: frozenset({ALL_PRODUCTS})
    )
    expires_at: datetime | None = None
    effect: ContractEffect | None = None
    is_manager_only: bool = False
    currency: str | None = None

    def __post_init__(self) -> None:
        if self.type is DiscountType.CONTRACT and self.effect is None:
            object.__setattr__(self, "effect", effect_from_name(self.name, self.value))

    @property
    def is_blanket(self) -> bool:
        return ALL_PRODUCTS in self.applicable_product_ids

    def targets(self, product_id: str) -> bool:
        """Product listed explicitly (ignores the ALL sentinel)."""
        return product_id in self.applicable_product_ids

    def covers(self, product_id: str) -> bool:
        return self.is_blanket or self.targets(product_id)

    def is_expired(self, as_of: datetime) -> bool:
        return self.expires_at is not None and self.expires_at < as_of


__all__ = (
    "ALL_PRODUCTS",
    "DiscountType",
    "ContractTerm",
    "FreeMonths",
    "PercentOff",
    "ContractEffect",
    "effect_from_name",
    "Discount",
)
