"""
Catalog types — products as seen by the pricing engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from quotecart._types import Money


class BillingCycle(Enum):
    """How often a product's price is charged."""

    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"
    ONE_TIME = "ONE_TIME"
    EVERY_28_DAYS = "EVERY_28_DAYS"

    @property
    def suffix(self) -> str:
        """Short per-cycle label used in order scripts ("$50.00/mo")."""
        return _SUFFIXES[self]


_SUFFIXES = {
    BillingCycle.MONTHLY: "mo",
    BillingCycle.YEARLY: "yr",
    BillingCycle.ONE_TIME: "one-time",
    BillingCycle.EVERY_28_DAYS: "28 days",
}


@dataclass(frozen=True, slots=True)
class Product:
    """
    Catalog product. Immutable within a pricing session.

    price is per billing cycle.
    """

    id: str
    name: str
    price: Money
    billing_cycle: BillingCycle = BillingCycle.MONTHLY
    description: str = ""


__all__ = ("BillingCycle", "Product")
