"""
Catalog lookup protocol + in-memory implementation.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from quotecart.catalog._types import Product


class Catalog(Protocol):
    """
    Read-only product lookup supplied by the CRUD layer.

    Returns None for unknown ids.
    """

    def get_product(self, product_id: str) -> Product | None: ...


class MemoryCatalog:
    """Catalog backed by a dict, keeps insertion order for listing."""

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: dict[str, Product] = {p.id: p for p in products}

    def get_product(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    def list_products(self) -> tuple[Product, ...]:
        return tuple(self._products.values())

    def __len__(self) -> int:
        return len(self._products)


__all__ = ("Catalog", "MemoryCatalog")
