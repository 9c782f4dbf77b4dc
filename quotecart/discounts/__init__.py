"""
Discounts — the offer registry and who may use which offer.

    from quotecart import discounts as D

    registry = D.MemoryRegistry([
        D.author_discount(id="d1", name="Spring", code="SPRING25",
                          type=D.DiscountType.PERCENTAGE, value=25),
        D.from_preset("12MO_3FREE", id="d2", code="TERM12"),
    ])

    D.applicable_discounts(registry, "pro", as_of=datetime.now())   # picker list
    D.select_contract_discount(registry, "pro", 12)                 # term selector

CONTRACT offers carry an explicit effect:
    D.FreeMonths(count)   value counts waived monthly payments
    D.PercentOff(pct)     value is percentage points off
"""

from quotecart.discounts._types import (
    ALL_PRODUCTS,
    DiscountType,
    ContractTerm,
    FreeMonths,
    PercentOff,
    ContractEffect,
    effect_from_name,
    Discount,
)
from quotecart.discounts._registry import DiscountRegistry, MemoryRegistry
from quotecart.discounts._eligibility import (
    is_applicable,
    applicable_discounts,
    contract_candidates,
    select_contract_discount,
)
from quotecart.discounts._authoring import (
    ContractPreset,
    CONTRACT_PRESETS,
    author_discount,
    from_preset,
    toggle_product,
    describe_offer,
    describe_commitment,
)

__all__ = (
    # Types
    "ALL_PRODUCTS",
    "DiscountType",
    "ContractTerm",
    "FreeMonths",
    "PercentOff",
    "ContractEffect",
    "effect_from_name",
    "Discount",
    # Registry
    "DiscountRegistry",
    "MemoryRegistry",
    # Eligibility
    "is_applicable",
    "applicable_discounts",
    "contract_candidates",
    "select_contract_discount",
    # Authoring
    "ContractPreset",
    "CONTRACT_PRESETS",
    "author_discount",
    "from_preset",
    "toggle_product",
    "describe_offer",
    "describe_commitment",
)
