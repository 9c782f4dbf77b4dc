"""
Resolution — from a cart item to the offer governing it and its price.

Stateless: everything is re-derived from the item and the registry on each call.
"""

from __future__ import annotations

from quotecart._types import Money
from quotecart.discounts import Discount, DiscountRegistry
from quotecart.pricing._rules import price
from quotecart.pricing._types import CartItem


def resolve_discount(item: CartItem, registry: DiscountRegistry) -> Discount | None:
    """
    Offer attached to the item, looked up fresh.

    An id the registry no longer knows resolves to None (list price).
    """
    discount_id = item.applied_discount_id
    if discount_id is None:
        return None
    return registry.get_discount(discount_id)


def price_item(item: CartItem, registry: DiscountRegistry) -> Money:
    return price(item, resolve_discount(item, registry))


__all__ = ("resolve_discount", "price_item")
