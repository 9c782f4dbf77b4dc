"""
Core types for quotecart.

Re-exports from kungfu + money helpers shared by every subpackage.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

# Re-export from kungfu
from kungfu import Result, Ok, Error, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Money
# ═══════════════════════════════════════════════════════════════════════════════

type Money = Decimal
"""Exact amount. Never rounded while accumulating."""

ZERO: Money = Decimal("0")
CENT = Decimal("0.01")


def to_money(value: Decimal | int | float | str) -> Money:
    """
    Coerce a number into Decimal.

    Note: floats go through str() so 0.1 stays 0.1 and not its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Money, places: int = 2) -> Money:
    """Presentation rounding (half-up). Only call at output time."""
    exp = CENT if places == 2 else Decimal(1).scaleb(-places)
    return value.quantize(exp, rounding=ROUND_HALF_UP)


def floor_zero(value: Money) -> Money:
    return value if value > ZERO else ZERO


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "LazyCoroResult",
    # Money
    "Money",
    "ZERO",
    "to_money",
    "round_money",
    "floor_zero",
)
