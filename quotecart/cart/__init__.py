"""
Cart — state transitions, promo codes and totals.

    from quotecart import cart as C

    session = C.CartSession(catalog, registry)
    session.add_item("pro")
    session.apply_code("SPRING25")              # Result[int, CartError]
    session.apply_override("pro", 30)           # manager flat amount
    session.get_aggregate()                     # subtotal / total_discount / final_total
    session.get_line_breakdown()

Concurrent callers (one cart, many requests):
    pool = C.SessionPool(catalog, registry)
    async with pool.acquire(cart_id) as session:
        ...
"""

from quotecart.cart._errors import CartErrorKind, CartError, CartErrors
from quotecart.cart._transitions import (
    term_of,
    select_term,
    attach,
    override,
    clear_override,
)
from quotecart.cart._promo import CodeApplication, normalize_code, apply_code
from quotecart.cart._aggregate import (
    CartAggregate,
    LineBreakdown,
    line_breakdown,
    totals,
    aggregate,
)
from quotecart.cart._session import Clock, CartSession
from quotecart.cart._pool import SessionPool

__all__ = (
    # Errors
    "CartErrorKind",
    "CartError",
    "CartErrors",
    # Transitions
    "term_of",
    "select_term",
    "attach",
    "override",
    "clear_override",
    # Promo codes
    "CodeApplication",
    "normalize_code",
    "apply_code",
    # Totals
    "CartAggregate",
    "LineBreakdown",
    "line_breakdown",
    "totals",
    "aggregate",
    # Session
    "Clock",
    "CartSession",
    "SessionPool",
)
