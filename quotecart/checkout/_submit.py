"""
Checkout submission — turn a priced cart into an order and log it to the lead.

    service = CheckoutService(orders, interactions)
    match await service.submit(session, request):
        case Ok(receipt):
            receipt.order.summary
        case Error(e):
            e.kind       # CheckoutErrorKind

Flow:
    NO_LEAD check → duplicate-submit guard → EMPTY_CART check
        → saga[ save order (void on rollback) → add NOTE interaction ]
        → clear cart
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from uuid import uuid4

from kungfu import Result, Ok, Error, LazyCoroResult

from quotecart._config import Settings
from quotecart.cart import CartSession
from quotecart.checkout import _saga as S
from quotecart.checkout._guard import MemorySubmissionStore, SubmissionStore, guarded
from quotecart.checkout._summary import purchase_summary
from quotecart.checkout._types import (
    CheckoutError,
    CheckoutErrors,
    CheckoutReceipt,
    CheckoutRequest,
    Interaction,
    InteractionLog,
    InteractionType,
    OrderRecord,
    OrderSink,
)

logger = logging.getLogger("quotecart.checkout")


def build_order(
    session: CartSession,
    request: CheckoutRequest,
    placed_at: datetime,
    settings: Settings = Settings(),
) -> Result[OrderRecord, CheckoutError]:
    """Snapshot the cart as an order. Pure: the session is only read."""
    if not request.lead_id:
        return Error(CheckoutErrors.no_lead())
    if len(session) == 0:
        return Error(CheckoutErrors.empty_cart())

    lines = session.get_line_breakdown()
    totals = session.get_aggregate()
    return Ok(OrderRecord(
        order_id=f"ord-{uuid4().hex[:12]}",
        cart_id=session.cart_id,
        tenant_id=request.tenant_id,
        lead_id=request.lead_id,
        actor_name=request.actor_name,
        placed_at=placed_at,
        lines=lines,
        totals=totals,
        summary=purchase_summary(
            lines,
            totals,
            actor_name=request.actor_name,
            placed_at=placed_at,
            settings=settings,
        ),
    ))


def sale_note(order: OrderRecord, user_id: str | None = None) -> Interaction:
    return Interaction(
        id=f"int-sale-{int(order.placed_at.timestamp() * 1000)}",
        tenant_id=order.tenant_id,
        lead_id=order.lead_id,
        type=InteractionType.NOTE,
        notes=order.summary,
        date=order.placed_at,
        user_id=user_id,
    )


class CheckoutService:
    """
    Submits carts through the order sink and the lead's interaction log.

    A submit is keyed by (cart id, request.idempotency_key): replays of a
    completed submit return the first receipt with from_cache=True.
    """

    def __init__(
        self,
        orders: OrderSink,
        interactions: InteractionLog,
        *,
        store: SubmissionStore[CheckoutReceipt] | None = None,
        settings: Settings = Settings(),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._orders = orders
        self._interactions = interactions
        self._store: SubmissionStore[CheckoutReceipt] = store if store is not None else MemorySubmissionStore(clock)
        self._settings = settings
        self._clock = clock

    async def submit(
        self,
        session: CartSession,
        request: CheckoutRequest,
    ) -> Result[CheckoutReceipt, CheckoutError]:
        if not request.lead_id:
            return Error(CheckoutErrors.no_lead())

        key = f"checkout:{session.cart_id}:{request.idempotency_key}"

        def operation() -> LazyCoroResult[CheckoutReceipt, CheckoutError]:
            return LazyCoroResult(lambda: self._place(session, request))

        match await guarded(key, operation, self._store, self._settings.checkout_ttl):
            case Ok(g) if g.from_cache:
                return Ok(replace(g.value, from_cache=True))
            case Ok(g):
                session.clear()
                logger.info("cart %s: order %s placed for lead %s", session.cart_id, g.value.order.order_id, request.lead_id)
                return Ok(g.value)
            case Error(e):
                logger.warning("cart %s: checkout failed (%s)", session.cart_id, e.kind.name)
                return Error(e)

    async def _place(
        self,
        session: CartSession,
        request: CheckoutRequest,
    ) -> Result[CheckoutReceipt, CheckoutError]:
        match build_order(session, request, self._clock(), self._settings):
            case Ok(order):
                return await self._commit(order, request.user_id)
            case Error(e):
                return Error(e)

    async def _commit(
        self,
        order: OrderRecord,
        user_id: str | None,
    ) -> Result[CheckoutReceipt, CheckoutError]:
        interaction = sale_note(order, user_id)
        saga = S.from_async(
            lambda: self._orders.save(order),
            on_error=lambda exc: CheckoutErrors.persistence(str(exc)),
            compensate=self._orders.void,
        ).then(lambda _saved: S.from_async(
            lambda: self._interactions.add(interaction),
            on_error=lambda exc: CheckoutErrors.interaction_log(str(exc)),
        ))

        match await S.run(saga):
            case Ok(result):
                return Ok(CheckoutReceipt(order=order, interaction=result.value))
            case Error(failure):
                if not failure.rollback_complete:
                    logger.error("order %s: rollback incomplete", order.order_id)
                return Error(failure.error)


__all__ = (
    "build_order",
    "sale_note",
    "CheckoutService",
)
