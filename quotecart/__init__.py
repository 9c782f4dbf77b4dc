"""
quotecart — cart pricing and discount resolution for a CRM quoting screen.

    from quotecart import catalog as P     # Products
    from quotecart import discounts as D   # Offers, eligibility, authoring
    from quotecart import pricing as R     # Precedence rules
    from quotecart import cart as C        # Sessions, promo codes, totals
    from quotecart import checkout as K    # Order hand-off

HTTP surface lives in quotecart.wire (FastAPI).
"""

from quotecart import catalog
from quotecart import discounts
from quotecart import pricing
from quotecart import cart
from quotecart import checkout
from quotecart._config import Settings, load_settings, configure_logging
from quotecart._types import (
    Result,
    Ok,
    Error,
    Money,
    to_money,
    round_money,
)

__version__ = "0.1.0"

__all__ = (
    "catalog",
    "discounts",
    "pricing",
    "cart",
    "checkout",
    "Settings",
    "load_settings",
    "configure_logging",
    "Result",
    "Ok",
    "Error",
    "Money",
    "to_money",
    "round_money",
)
