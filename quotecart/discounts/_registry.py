"""
Discount registry — lookup protocol + in-memory implementation.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from quotecart.discounts._types import Discount


class DiscountRegistry(Protocol):
    """
    Read-only offer lookup supplied by the CRUD layer.

    list_discounts() order is significant: it breaks full ties in contract selection.
    """

    def list_discounts(self) -> tuple[Discount, ...]: ...

    def get_discount(self, discount_id: str) -> Discount | None: ...

    def get_discount_by_code(self, code: str) -> Discount | None: ...


class MemoryRegistry:
    """Registry backed by a list. Code lookup is exact; first match wins."""

    def __init__(self, discounts: Iterable[Discount] = ()) -> None:
        self._discounts: tuple[Discount, ...] = tuple(discounts)
        self._by_id: dict[str, Discount] = {d.id: d for d in self._discounts}

    def list_discounts(self) -> tuple[Discount, ...]:
        return self._discounts

    def get_discount(self, discount_id: str) -> Discount | None:
        return self._by_id.get(discount_id)

    def get_discount_by_code(self, code: str) -> Discount | None:
        return next((d for d in self._discounts if d.code == code), None)


__all__ = ("DiscountRegistry", "MemoryRegistry")
