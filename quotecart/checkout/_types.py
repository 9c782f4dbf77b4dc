"""
Checkout types — the order record handed to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Protocol

from quotecart.cart import CartAggregate, LineBreakdown

# ═══════════════════════════════════════════════════════════════════════════════
# Request
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CheckoutRequest:
    """
    One "complete purchase" click.

    idempotency_key: chosen by the client, identical across retries of the same click.
    """

    idempotency_key: str
    lead_id: str | None
    actor_name: str
    tenant_id: str = ""
    user_id: str | None = None
    lead_company: str | None = None
    auto_renew: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# Order Record / Interaction
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OrderRecord:
    order_id: str
    cart_id: str
    tenant_id: str
    lead_id: str
    actor_name: str
    placed_at: datetime
    lines: tuple[LineBreakdown, ...]
    totals: CartAggregate
    summary: str


class InteractionType(Enum):
    CALL = "CALL"
    EMAIL = "EMAIL"
    MEETING = "MEETING"
    NOTE = "NOTE"


@dataclass(frozen=True, slots=True)
class Interaction:
    """Entry in a lead's history."""

    id: str
    tenant_id: str
    lead_id: str
    type: InteractionType
    notes: str
    date: datetime
    user_id: str | None = None


@dataclass(frozen=True, slots=True)
class CheckoutReceipt:
    order: OrderRecord
    interaction: Interaction
    from_cache: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


class CheckoutErrorKind(Enum):
    NO_LEAD = auto()
    EMPTY_CART = auto()
    PERSISTENCE = auto()  # order sink failed
    INTERACTION_LOG = auto()  # lead history failed, order voided
    DUPLICATE_SUBMIT = auto()  # same key still in flight
    STORE = auto()  # submission store failed


@dataclass(frozen=True, slots=True)
class CheckoutError:
    kind: CheckoutErrorKind
    message: str


class CheckoutErrors:
    @staticmethod
    def no_lead() -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.NO_LEAD, "Please assign this order to an account first.")

    @staticmethod
    def empty_cart() -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.EMPTY_CART, "The cart is empty.")

    @staticmethod
    def persistence(msg: str) -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.PERSISTENCE, f"Could not save the order: {msg}")

    @staticmethod
    def interaction_log(msg: str) -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.INTERACTION_LOG, f"Could not log the order to the lead: {msg}")

    @staticmethod
    def duplicate_submit(key: str) -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.DUPLICATE_SUBMIT, f"Checkout {key!r} is already being processed")

    @staticmethod
    def store(msg: str) -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.STORE, msg)


# ═══════════════════════════════════════════════════════════════════════════════
# Collaborators
# ═══════════════════════════════════════════════════════════════════════════════


class OrderSink(Protocol):
    """Persists orders. save() returns what was stored; void() undoes it."""

    async def save(self, order: OrderRecord) -> OrderRecord: ...

    async def void(self, order: OrderRecord) -> None: ...


class InteractionLog(Protocol):
    """Appends to a lead's history."""

    async def add(self, interaction: Interaction) -> Interaction: ...


__all__ = (
    "CheckoutRequest",
    "OrderRecord",
    "InteractionType",
    "Interaction",
    "CheckoutReceipt",
    "CheckoutErrorKind",
    "CheckoutError",
    "CheckoutErrors",
    "OrderSink",
    "InteractionLog",
)
