"""
FastAPI app — the cart session exposed over HTTP.

    from quotecart.wire import create_app

    app = create_app(pool)          # run with uvicorn

Every route takes the cart lock for its whole duration, so requests for
one cart apply in arrival order. A cart left empty (a lookup of an unknown
id, a clear, a checkout) drops out of the pool when its request ends.
"""

import logging
from typing import Any, NoReturn

import fastapi
from fastapi.responses import JSONResponse
from kungfu import Result, Ok, Error

from quotecart._config import Settings
from quotecart.cart import CartError, CartErrorKind, SessionPool
from quotecart.checkout import (
    CheckoutError,
    CheckoutErrorKind,
    CheckoutService,
    MemoryInteractionLog,
    MemoryOrderSink,
    compliance_script,
)
from quotecart.wire._models import (
    AddItemIn,
    ApplyCodeIn,
    AttachDiscountIn,
    CartOut,
    ChangeQuantityIn,
    CheckoutIn,
    CodeAppliedOut,
    DiscountOut,
    ErrorOut,
    OverrideIn,
    ReceiptOut,
    ScriptOut,
    SetQuantityIn,
    SetTermIn,
)

logger = logging.getLogger("quotecart.wire")

# ═══════════════════════════════════════════════════════════════════════════════
# Error Mapping
# ═══════════════════════════════════════════════════════════════════════════════

_STATUS: dict[CartErrorKind | CheckoutErrorKind, int] = {
    CartErrorKind.ITEM_NOT_FOUND: 404,
    CartErrorKind.PRODUCT_NOT_FOUND: 404,
    CartErrorKind.DISCOUNT_NOT_FOUND: 404,
    CheckoutErrorKind.DUPLICATE_SUBMIT: 409,
    CheckoutErrorKind.PERSISTENCE: 502,
    CheckoutErrorKind.INTERACTION_LOG: 502,
    CheckoutErrorKind.STORE: 503,
}
DEFAULT_STATUS = 422


def status_for(kind: CartErrorKind | CheckoutErrorKind) -> int:
    return _STATUS.get(kind, DEFAULT_STATUS)


class ApiError(Exception):
    def __init__(self, error: CartError | CheckoutError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def status_code(self) -> int:
        return status_for(self.error.kind)

    def body(self) -> ErrorOut:
        return ErrorOut(error=self.error.kind.name, message=self.error.message)


def _fail(error: CartError | CheckoutError) -> NoReturn:
    raise ApiError(error)


def unwrap[T](result: Result[T, CartError | CheckoutError]) -> T:
    match result:
        case Ok(value):
            return value
        case Error(e):
            _fail(e)


# ═══════════════════════════════════════════════════════════════════════════════
# create_app()
# ═══════════════════════════════════════════════════════════════════════════════


def create_app(
    pool: SessionPool,
    *,
    checkout: CheckoutService | None = None,
    settings: Settings | None = None,
) -> fastapi.FastAPI:
    """
    Build the app around a session pool.

    checkout defaults to a service backed by in-memory collaborators.
    """
    settings = settings or Settings()
    service = checkout or CheckoutService(
        MemoryOrderSink(),
        MemoryInteractionLog(),
        settings=settings,
    )
    app = fastapi.FastAPI(title="quotecart")

    @app.exception_handler(ApiError)
    async def _api_error(_request: fastapi.Request, exc: ApiError) -> JSONResponse:
        logger.info("%s -> %d", exc.error.kind.name, exc.status_code)
        return JSONResponse(status_code=exc.status_code, content=exc.body().model_dump())

    def cart_out(session: Any) -> CartOut:
        return CartOut.from_domain(session, settings)

    # ─────────────────────────────────────────────────────────────────────────
    # Cart
    # ─────────────────────────────────────────────────────────────────────────

    @app.get("/carts/{cart_id}")
    async def get_cart(cart_id: str) -> CartOut:
        async with pool.acquire(cart_id) as session:
            return cart_out(session)

    @app.delete("/carts/{cart_id}")
    async def clear_cart(cart_id: str) -> CartOut:
        async with pool.acquire(cart_id) as session:
            session.clear()
            return cart_out(session)

    @app.post("/carts/{cart_id}/items")
    async def add_item(cart_id: str, body: AddItemIn) -> CartOut:
        async with pool.acquire(cart_id) as session:
            unwrap(session.add_item(body.product_id))
            return cart_out(session)

    @app.delete("/carts/{cart_id}/items/{item_id}")
    async def remove_item(cart_id: str, item_id: str) -> CartOut:
        async with pool.acquire(cart_id) as session:
            unwrap(session.remove_item(item_id))
            return cart_out(session)

    @app.put("/carts/{cart_id}/items/{item_id}/quantity")
    async def set_quantity(cart_id: str, item_id: str, body: SetQuantityIn) -> CartOut:
        async with pool.acquire(cart_id) as session:
            unwrap(session.set_quantity(item_id, body.quantity))
            return cart_out(session)

    @app.post("/carts/{cart_id}/items/{item_id}/quantity/change")
    async def change_quantity(cart_id: str, item_id: str, body: ChangeQuantityIn) -> CartOut:
        async with pool.acquire(cart_id) as session:
            unwrap(session.change_quantity(item_id, body.delta))
            return cart_out(session)

    # ─────────────────────────────────────────────────────────────────────────
    # Pricing mechanisms
    # ─────────────────────────────────────────────────────────────────────────

    @app.put("/carts/{cart_id}/items/{item_id}/term")
    async def set_term(cart_id: str, item_id: str, body: SetTermIn) -> CartOut:
        async with pool.acquire(cart_id) as session:
            unwrap(session.set_contract_term(item_id, body.term))
            return cart_out(session)

    @app.put("/carts/{cart_id}/items/{item_id}/discount")
    async def attach_discount(cart_id: str, item_id: str, body: AttachDiscountIn) -> CartOut:
        async with pool.acquire(cart_id) as session:
            unwrap(session.attach_discount(item_id, body.discount_id))
            return cart_out(session)

    @app.get("/carts/{cart_id}/items/{item_id}/discounts")
    async def applicable_discounts(cart_id: str, item_id: str) -> list[DiscountOut]:
        async with pool.acquire(cart_id) as session:
            found = unwrap(session.applicable_discounts(item_id))
            return [DiscountOut.from_domain(d) for d in found]

    @app.post("/carts/{cart_id}/codes")
    async def apply_code(cart_id: str, body: ApplyCodeIn) -> CodeAppliedOut:
        async with pool.acquire(cart_id) as session:
            count = unwrap(session.apply_code(body.code))
            return CodeAppliedOut(applied_count=count, cart=cart_out(session))

    @app.put("/carts/{cart_id}/items/{item_id}/override")
    async def apply_override(cart_id: str, item_id: str, body: OverrideIn) -> CartOut:
        async with pool.acquire(cart_id) as session:
            unwrap(session.apply_override(item_id, body.amount))
            return cart_out(session)

    @app.delete("/carts/{cart_id}/items/{item_id}/override")
    async def clear_override(cart_id: str, item_id: str) -> CartOut:
        async with pool.acquire(cart_id) as session:
            unwrap(session.clear_override(item_id))
            return cart_out(session)

    # ─────────────────────────────────────────────────────────────────────────
    # Checkout
    # ─────────────────────────────────────────────────────────────────────────

    @app.get("/carts/{cart_id}/compliance-script")
    async def get_compliance_script(
        cart_id: str,
        company: str | None = None,
        auto_renew: bool = False,
    ) -> ScriptOut:
        async with pool.acquire(cart_id) as session:
            return ScriptOut(script=compliance_script(
                session.get_line_breakdown(),
                session.get_aggregate(),
                company=company,
                auto_renew=auto_renew,
                settings=settings,
            ))

    @app.post("/carts/{cart_id}/checkout")
    async def submit_checkout(cart_id: str, body: CheckoutIn) -> ReceiptOut:
        async with pool.acquire(cart_id) as session:
            receipt = unwrap(await service.submit(session, body.to_domain()))
            return ReceiptOut.from_domain(receipt, settings.display_places)

    return app


__all__ = (
    "DEFAULT_STATUS",
    "status_for",
    "ApiError",
    "unwrap",
    "create_app",
)
