"""
Shared fixtures: a small catalog, a registry covering every offer type,
and a frozen clock.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from quotecart.cart import CartSession, SessionPool
from quotecart.catalog import BillingCycle, MemoryCatalog, Product
from quotecart.discounts import (
    DiscountType,
    MemoryRegistry,
    author_discount,
    from_preset,
)

NOW = datetime(2026, 10, 17, 12, 0)


def fixed_clock() -> datetime:
    return NOW


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def products() -> list[Product]:
    return [
        Product("pro", "Pro Plan", Decimal("100"), BillingCycle.MONTHLY),
        Product("addon", "Analytics Add-on", Decimal("50"), BillingCycle.MONTHLY),
        Product("suite", "Enterprise Suite", Decimal("1200"), BillingCycle.YEARLY),
        Product("setup", "Onboarding", Decimal("300"), BillingCycle.ONE_TIME),
    ]


@pytest.fixture
def catalog(products: list[Product]) -> MemoryCatalog:
    return MemoryCatalog(products)


@pytest.fixture
def registry() -> MemoryRegistry:
    return MemoryRegistry([
        author_discount(
            id="spring", name="Spring Sale", code="SPRING25",
            type=DiscountType.PERCENTAGE, value=25,
        ),
        author_discount(
            id="old", name="Last Year", code="OLD10",
            type=DiscountType.PERCENTAGE, value=10,
            expires_at=datetime(2026, 1, 1),
        ),
        author_discount(
            id="pro15", name="Pro Loyalty", code="PRO15",
            type=DiscountType.PERCENTAGE, value=15, product_ids=["pro"],
        ),
        author_discount(
            id="trial", name="Longer Trial", code="TRIAL14",
            type=DiscountType.TRIAL_EXTENSION, value=14,
        ),
        from_preset("12MO_25", id="c12-25", code="TERM25"),
        from_preset("12MO_3FREE", id="c12-free", code="FREE3", product_ids=["addon"]),
        from_preset("6MO_50", id="c6-50", code="HALF6"),
    ])


@pytest.fixture
def session(catalog: MemoryCatalog, registry: MemoryRegistry) -> CartSession:
    return CartSession(catalog, registry, cart_id="cart-1", clock=fixed_clock)


@pytest.fixture
def pool(catalog: MemoryCatalog, registry: MemoryRegistry) -> SessionPool:
    return SessionPool(catalog, registry, clock=fixed_clock)
