"""
Order texts — the purchase summary logged to the lead and the compliance script.

Both are rendered from the line breakdown, so they show exactly the
amounts the cart showed.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from quotecart._config import Settings
from quotecart._types import Money, round_money
from quotecart.cart import CartAggregate, LineBreakdown
from quotecart.discounts import ContractTerm

SEPARATOR = "-" * 48
NO_COMMITMENT = "No Commitment"
DEFAULT_COMPANY = "[Customer Company]"

_TERM_LABELS = {
    ContractTerm.SIX_MONTHS: "6 months",
    ContractTerm.TWELVE_MONTHS: "12 months",
}


def format_money(value: Money, settings: Settings = Settings()) -> str:
    return f"{settings.currency_symbol}{round_money(value, settings.display_places)}"


# ═══════════════════════════════════════════════════════════════════════════════
# Purchase Summary
# ═══════════════════════════════════════════════════════════════════════════════


def purchase_summary(
    lines: Sequence[LineBreakdown],
    totals: CartAggregate,
    *,
    actor_name: str,
    placed_at: datetime,
    settings: Settings = Settings(),
) -> str:
    """
    Note text logged to the lead's history.

    Example:
        PURCHASE COMPLETED: Dana - 17/10/2026 14:05
        Action: Account Upgrade / Product Purchase
        ------------------------------------------------
        1. Pro Plan x1
           Term: 12_MONTHS
           Applied Offer: Annual 25 (ANNUAL25)
           Price: $150.00
        ------------------------------------------------
        ORDER TOTAL: $150.00
        Billing status: SUCCESSFUL
    """
    out = [
        f"PURCHASE COMPLETED: {actor_name} - {placed_at:%d/%m/%Y %H:%M}",
        "Action: Account Upgrade / Product Purchase",
        SEPARATOR,
    ]
    for idx, line in enumerate(lines, start=1):
        term = line.contract_term.value if line.contract_term is not ContractTerm.NONE else NO_COMMITMENT
        out.append(f"{idx}. {line.name} x{line.quantity}")
        out.append(f"   Term: {term}")
        if line.applied_discount_name is not None:
            out.append(f"   Applied Offer: {line.applied_discount_name} ({line.applied_discount_code})")
        if line.override_amount:
            out.append(f"   Manager Override: -{format_money(line.override_amount, settings)}")
        out.append(f"   Price: {format_money(line.discounted_total, settings)}")
    out.extend([
        SEPARATOR,
        f"ORDER TOTAL: {format_money(totals.final_total, settings)}",
        "Billing status: SUCCESSFUL",
    ])
    return "\n".join(out)


# ═══════════════════════════════════════════════════════════════════════════════
# Compliance Script
# ═══════════════════════════════════════════════════════════════════════════════


def _script_line(line: LineBreakdown, settings: Settings) -> str:
    text = (
        f"• {line.quantity}x {line.name} at "
        f"{format_money(line.unit_price, settings)}/{line.billing_cycle.suffix}"
    )
    if line.contract_term is not ContractTerm.NONE:
        text += f" with a {_TERM_LABELS[line.contract_term]} commitment"
    if line.override_amount:
        text += f" (includes manual discount of {format_money(line.override_amount, settings)})"
    elif line.applied_discount_name is not None:
        text += f" (includes {line.applied_discount_name})"
    return text + "."


def compliance_script(
    lines: Sequence[LineBreakdown],
    totals: CartAggregate,
    *,
    company: str | None = None,
    auto_renew: bool = False,
    settings: Settings = Settings(),
) -> str:
    """Script the agent reads to the customer before completing the sale."""
    body = "\n".join(_script_line(line, settings) for line in lines)
    renewal = (
        " This subscription will automatically renew at the standard rate at the end of the term."
        if auto_renew
        else ""
    )
    return (
        "READ VERBATIM:\n\n"
        f'"I am confirming your order for {company or DEFAULT_COMPANY}. You are purchasing:\n'
        f"{body}\n\n"
        f"The total amount due today is {format_money(totals.final_total, settings)}.{renewal}\n\n"
        "Do you acknowledge these terms, the pricing, and agree to our data processing "
        'as outlined in the GDPR privacy notice sent to your email?"'
    )


__all__ = (
    "SEPARATOR",
    "NO_COMMITMENT",
    "DEFAULT_COMPANY",
    "format_money",
    "purchase_summary",
    "compliance_script",
)
