"""
Duplicate-submit guard — one checkout per idempotency key.

Lifecycle of a key:
    (none) → PENDING → COMPLETED     receipt kept for ttl, replays return it
                     → (deleted)     failure is not remembered, retry allowed

A second submit while the first is still PENDING fails fast.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum, auto
from typing import Protocol

from kungfu import Result, Ok, Error, LazyCoroResult

from quotecart.checkout._types import CheckoutError, CheckoutErrors

logger = logging.getLogger("quotecart.checkout.guard")

# ═══════════════════════════════════════════════════════════════════════════════
# Records
# ═══════════════════════════════════════════════════════════════════════════════


class RecordState(Enum):
    PENDING = auto()
    COMPLETED = auto()


@dataclass(frozen=True, slots=True)
class SubmissionRecord[T]:
    key: str
    state: RecordState
    value: T | None
    created_at: datetime
    expires_at: datetime | None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now > self.expires_at


@dataclass(frozen=True, slots=True)
class Guarded[T]:
    """Value plus whether it was replayed from an earlier submit."""

    value: T
    from_cache: bool
    key: str


@dataclass(frozen=True)
class StoreError:
    message: str
    cause: Exception | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Store
# ═══════════════════════════════════════════════════════════════════════════════


class SubmissionStore[T](Protocol):
    """
    Where keys live. set_pending must be atomic (compare-and-swap).

    All methods return Result; a backend failure is an Error, not an exception.
    """

    async def get(self, key: str) -> Result[SubmissionRecord[T] | None, StoreError]: ...

    async def set_pending(self, key: str, ttl: timedelta | None) -> Result[bool, StoreError]: ...

    async def set_completed(self, key: str, value: T, ttl: timedelta | None) -> Result[None, StoreError]: ...

    async def delete(self, key: str) -> Result[bool, StoreError]: ...


class MemorySubmissionStore[T]:
    """
    In-process store.

    Note: single instance only, nothing survives a restart.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._records: dict[str, SubmissionRecord[T]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    def _live(self, key: str) -> SubmissionRecord[T] | None:
        record = self._records.get(key)
        if record is not None and record.is_expired(self._clock()):
            del self._records[key]
            return None
        return record

    async def get(self, key: str) -> Result[SubmissionRecord[T] | None, StoreError]:
        async with self._lock:
            return Ok(self._live(key))

    async def set_pending(self, key: str, ttl: timedelta | None) -> Result[bool, StoreError]:
        async with self._lock:
            if self._live(key) is not None:
                return Ok(False)
            now = self._clock()
            self._records[key] = SubmissionRecord(
                key=key,
                state=RecordState.PENDING,
                value=None,
                created_at=now,
                expires_at=now + ttl if ttl else None,
            )
            return Ok(True)

    async def set_completed(self, key: str, value: T, ttl: timedelta | None) -> Result[None, StoreError]:
        async with self._lock:
            existing = self._records.get(key)
            if existing is None:
                return Error(StoreError(f"No pending record for key: {key}"))
            now = self._clock()
            self._records[key] = SubmissionRecord(
                key=key,
                state=RecordState.COMPLETED,
                value=value,
                created_at=existing.created_at,
                expires_at=now + ttl if ttl else None,
            )
            return Ok(None)

    async def delete(self, key: str) -> Result[bool, StoreError]:
        async with self._lock:
            return Ok(self._records.pop(key, None) is not None)

    def __len__(self) -> int:
        return len(self._records)


# ═══════════════════════════════════════════════════════════════════════════════
# guarded()
# ═══════════════════════════════════════════════════════════════════════════════


async def guarded[T](
    key: str,
    operation: Callable[[], LazyCoroResult[T, CheckoutError]],
    store: SubmissionStore[T],
    ttl: timedelta | None = None,
) -> Result[Guarded[T], CheckoutError]:
    """
    Run operation at most once per key.

    Example:
        result = await guarded(
            "checkout:cart-42:click-1",
            lambda: submit(order),
            store,
            ttl=timedelta(hours=1),
        )
        match result:
            case Ok(g) if g.from_cache:
                ...  # replay of an earlier success
            case Ok(g):
                ...
            case Error(e):
                ...  # e.kind is DUPLICATE_SUBMIT while the first is in flight
    """
    match await store.set_pending(key, ttl):
        case Error(e):
            return Error(CheckoutErrors.store(e.message))
        case Ok(True):
            pass
        case Ok(False):
            return await _replay(key, store)

    match await operation():
        case Ok(value):
            match await store.set_completed(key, value, ttl):
                case Error(e):
                    # The work is done; losing the record only loses replay.
                    logger.warning("could not record %s as completed: %s", key, e.message)
                case Ok(_):
                    pass
            return Ok(Guarded(value=value, from_cache=False, key=key))
        case Error(err):
            match await store.delete(key):
                case Error(e):
                    logger.warning("could not release %s: %s", key, e.message)
                case Ok(_):
                    pass
            return Error(err)


async def _replay[T](key: str, store: SubmissionStore[T]) -> Result[Guarded[T], CheckoutError]:
    match await store.get(key):
        case Error(e):
            return Error(CheckoutErrors.store(e.message))
        case Ok(record) if record is not None and record.state is RecordState.COMPLETED:
            logger.info("replaying completed submit %s", key)
            return Ok(Guarded(value=record.value, from_cache=True, key=key))  # type: ignore[arg-type]
        case Ok(_):
            logger.info("rejecting duplicate submit %s", key)
            return Error(CheckoutErrors.duplicate_submit(key))


__all__ = (
    "RecordState",
    "SubmissionRecord",
    "Guarded",
    "StoreError",
    "SubmissionStore",
    "MemorySubmissionStore",
    "guarded",
)
