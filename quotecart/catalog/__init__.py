"""
Catalog — products the cart is built from.

    from quotecart import catalog as K

    catalog = K.MemoryCatalog([
        K.Product("pro", "Pro Plan", Decimal("100"), K.BillingCycle.MONTHLY),
    ])
    catalog.get_product("pro")
"""

from quotecart.catalog._types import BillingCycle, Product
from quotecart.catalog._store import Catalog, MemoryCatalog

__all__ = (
    "BillingCycle",
    "Product",
    "Catalog",
    "MemoryCatalog",
)
