"""
Wire — HTTP exposure of the cart engine (FastAPI + pydantic).

    from quotecart import wire as W

    app = W.create_app(pool, checkout=service, settings=settings)

Errors come back as {"error": KIND, "message": text}:
    404  unknown item / product / discount
    409  checkout already in flight for this idempotency key
    502  order sink or interaction log failed
    422  everything else
"""

from quotecart.wire._models import (
    AddItemIn,
    SetQuantityIn,
    ChangeQuantityIn,
    SetTermIn,
    AttachDiscountIn,
    ApplyCodeIn,
    OverrideIn,
    CheckoutIn,
    LineOut,
    TotalsOut,
    CartOut,
    CodeAppliedOut,
    DiscountOut,
    ReceiptOut,
    ScriptOut,
    ErrorOut,
)
from quotecart.wire._app import DEFAULT_STATUS, status_for, ApiError, unwrap, create_app

__all__ = (
    # Requests
    "AddItemIn",
    "SetQuantityIn",
    "ChangeQuantityIn",
    "SetTermIn",
    "AttachDiscountIn",
    "ApplyCodeIn",
    "OverrideIn",
    "CheckoutIn",
    # Responses
    "LineOut",
    "TotalsOut",
    "CartOut",
    "CodeAppliedOut",
    "DiscountOut",
    "ReceiptOut",
    "ScriptOut",
    "ErrorOut",
    # App
    "DEFAULT_STATUS",
    "status_for",
    "ApiError",
    "unwrap",
    "create_app",
)
