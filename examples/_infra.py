"""Shared seed data for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from datetime import datetime, timedelta
from decimal import Decimal

from quotecart.catalog import BillingCycle, MemoryCatalog, Product
from quotecart.discounts import DiscountType, MemoryRegistry, author_discount, from_preset


# Catalog
def seed_catalog() -> MemoryCatalog:
    return MemoryCatalog([
        Product("pro", "Pro Plan", Decimal("100"), BillingCycle.MONTHLY),
        Product("addon", "Analytics Add-on", Decimal("50"), BillingCycle.MONTHLY),
        Product("suite", "Enterprise Suite", Decimal("1200"), BillingCycle.YEARLY),
        Product("setup", "Onboarding", Decimal("300"), BillingCycle.ONE_TIME),
    ])


# Offers
def seed_registry() -> MemoryRegistry:
    return MemoryRegistry([
        author_discount(
            id="spring", name="Spring Sale", code="SPRING25",
            type=DiscountType.PERCENTAGE, value=25,
            expires_at=datetime.now() + timedelta(days=30),
        ),
        author_discount(
            id="old", name="Last Year", code="OLD10",
            type=DiscountType.PERCENTAGE, value=10,
            expires_at=datetime.now() - timedelta(days=30),
        ),
        from_preset("12MO_25", id="c12-25", code="TERM25"),
        from_preset("12MO_3FREE", id="c12-free", code="FREE3", product_ids=["addon"]),
        from_preset("6MO_50", id="c6-50", code="HALF6"),
    ])


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())
