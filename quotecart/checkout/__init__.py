"""
Checkout — hand the priced cart over as an order.

    from quotecart import checkout as K

    service = K.CheckoutService(orders, interactions)
    request = K.CheckoutRequest(
        idempotency_key="click-1",
        lead_id="lead-7",
        actor_name="Dana",
    )
    match await service.submit(session, request):
        case Ok(receipt):
            receipt.order.summary       # note logged to the lead
        case Error(e):
            e.kind                      # NO_LEAD, EMPTY_CART, DUPLICATE_SUBMIT, ...

Texts:
    K.purchase_summary(lines, totals, actor_name=..., placed_at=...)
    K.compliance_script(lines, totals, company=..., auto_renew=True)
"""

from quotecart.checkout._types import (
    CheckoutRequest,
    OrderRecord,
    InteractionType,
    Interaction,
    CheckoutReceipt,
    CheckoutErrorKind,
    CheckoutError,
    CheckoutErrors,
    OrderSink,
    InteractionLog,
)
from quotecart.checkout._summary import (
    SEPARATOR,
    NO_COMMITMENT,
    DEFAULT_COMPANY,
    format_money,
    purchase_summary,
    compliance_script,
)
from quotecart.checkout._guard import (
    RecordState,
    SubmissionRecord,
    Guarded,
    StoreError,
    SubmissionStore,
    MemorySubmissionStore,
    guarded,
)
from quotecart.checkout._memory import MemoryOrderSink, MemoryInteractionLog
from quotecart.checkout._submit import build_order, sale_note, CheckoutService
from quotecart.checkout import _saga as saga

__all__ = (
    # Types
    "CheckoutRequest",
    "OrderRecord",
    "InteractionType",
    "Interaction",
    "CheckoutReceipt",
    # Errors
    "CheckoutErrorKind",
    "CheckoutError",
    "CheckoutErrors",
    # Collaborators
    "OrderSink",
    "InteractionLog",
    "MemoryOrderSink",
    "MemoryInteractionLog",
    # Texts
    "SEPARATOR",
    "NO_COMMITMENT",
    "DEFAULT_COMPANY",
    "format_money",
    "purchase_summary",
    "compliance_script",
    # Duplicate-submit guard
    "RecordState",
    "SubmissionRecord",
    "Guarded",
    "StoreError",
    "SubmissionStore",
    "MemorySubmissionStore",
    "guarded",
    # Submission
    "build_order",
    "sale_note",
    "CheckoutService",
    "saga",
)
