"""
In-memory collaborators for local runs and tests.
"""

from __future__ import annotations

from quotecart.checkout._types import Interaction, OrderRecord


class MemoryOrderSink:
    def __init__(self) -> None:
        self.orders: dict[str, OrderRecord] = {}
        self.voided: list[str] = []

    async def save(self, order: OrderRecord) -> OrderRecord:
        self.orders[order.order_id] = order
        return order

    async def void(self, order: OrderRecord) -> None:
        self.orders.pop(order.order_id, None)
        self.voided.append(order.order_id)


class MemoryInteractionLog:
    def __init__(self) -> None:
        self.interactions: list[Interaction] = []

    async def add(self, interaction: Interaction) -> Interaction:
        self.interactions.append(interaction)
        return interaction

    def for_lead(self, lead_id: str) -> list[Interaction]:
        return [i for i in self.interactions if i.lead_id == lead_id]


__all__ = ("MemoryOrderSink", "MemoryInteractionLog")
