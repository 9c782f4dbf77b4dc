"""
Session pool — one session and one lock per cart id.

Cart actions are order-sensitive (a term change clears a promo code), so a
server handling several requests for the same cart serializes them here.

A cart's entry lives while someone holds or waits on it, or while the cart
has items. Empty carts are dropped once the last user leaves, so lookups of
unknown ids and carts emptied by checkout do not accumulate.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime

from quotecart.cart._session import CartSession, Clock
from quotecart.catalog import Catalog
from quotecart.discounts import DiscountRegistry

logger = logging.getLogger("quotecart.cart.pool")


@dataclass(slots=True)
class _Slot:
    session: CartSession
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class SessionPool:
    """
    Owns CartSessions by cart id.

    Example:
        pool = SessionPool(catalog, registry)
        async with pool.acquire("cart-42") as session:
            session.add_item("pro")
    """

    def __init__(
        self,
        catalog: Catalog,
        registry: DiscountRegistry,
        clock: Clock = datetime.now,
    ) -> None:
        self._catalog = catalog
        self._registry = registry
        self._clock = clock
        self._slots: dict[str, _Slot] = {}

    def _slot(self, cart_id: str) -> _Slot:
        slot = self._slots.get(cart_id)
        if slot is None:
            slot = _Slot(CartSession(
                self._catalog,
                self._registry,
                cart_id=cart_id,
                clock=self._clock,
            ))
            self._slots[cart_id] = slot
        return slot

    @asynccontextmanager
    async def acquire(self, cart_id: str) -> AsyncIterator[CartSession]:
        """Exclusive access to the cart for the duration of the block."""
        slot = self._slot(cart_id)
        slot.users += 1
        try:
            async with slot.lock:
                yield slot.session
        finally:
            slot.users -= 1
            if slot.users == 0 and len(slot.session) == 0:
                self._evict(cart_id, slot)

    async def discard(self, cart_id: str) -> None:
        """Empty the cart and drop it, after any current holder and earlier waiters."""
        if cart_id not in self._slots:
            return
        async with self.acquire(cart_id) as session:
            session.clear()

    def _evict(self, cart_id: str, slot: _Slot) -> None:
        if self._slots.get(cart_id) is slot:
            del self._slots[cart_id]
            logger.debug("cart %s: dropped from pool", cart_id)

    def __contains__(self, cart_id: object) -> bool:
        return cart_id in self._slots

    def __len__(self) -> int:
        return len(self._slots)


__all__ = ("SessionPool",)
