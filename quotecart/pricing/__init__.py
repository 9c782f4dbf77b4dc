"""
Pricing — the resolver: one cart item in, one non-negative price out.

    from quotecart import pricing as P

    item = P.CartItem(product, quantity=2, mode=P.Attached("spring25"))
    P.price(item, registry.get_discount("spring25"))
    P.price_item(item, registry)          # looks the offer up itself

Precedence is data (P.PRECEDENCE), evaluated top-down:
    manager_override → no_discount → percentage → contract → fallback
"""

from quotecart.pricing._types import (
    NoDiscount,
    Attached,
    Contracted,
    Overridden,
    PricingMode,
    NO_DISCOUNT,
    CartItem,
)
from quotecart.pricing._rules import (
    Rule,
    PRECEDENCE,
    percent_off,
    months_free,
    governing_rule,
    price,
)
from quotecart.pricing._resolve import resolve_discount, price_item

__all__ = (
    # Modes
    "NoDiscount",
    "Attached",
    "Contracted",
    "Overridden",
    "PricingMode",
    "NO_DISCOUNT",
    # Item
    "CartItem",
    # Rules
    "Rule",
    "PRECEDENCE",
    "percent_off",
    "months_free",
    "governing_rule",
    "price",
    # Resolution
    "resolve_discount",
    "price_item",
)
