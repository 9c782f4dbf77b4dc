"""
Checkout — order hand-off with rollback and duplicate-submit protection.

Level 4: quotecart.checkout (saga + guard)
Level 3: combinators.lift
Level 2: kungfu.Result
"""

from kungfu import Ok, Error

from quotecart import cart as C
from quotecart import checkout as K
from examples._infra import banner, run, seed_catalog, seed_registry


class FlakyCrm:
    """Lead history that fails once, then recovers."""

    def __init__(self) -> None:
        self.inner = K.MemoryInteractionLog()
        self.failed = False

    async def add(self, interaction: K.Interaction) -> K.Interaction:
        if not self.failed:
            self.failed = True
            print("  ✗ CRM: timeout")
            raise TimeoutError("CRM did not answer")
        print(f"  ✓ CRM: logged {interaction.id}")
        return await self.inner.add(interaction)


async def main() -> None:
    session = C.CartSession(seed_catalog(), seed_registry(), cart_id="cart-42")
    session.add_item("pro")
    session.apply_code("SPRING25")

    orders = K.MemoryOrderSink()
    service = K.CheckoutService(orders, FlakyCrm())
    request = K.CheckoutRequest(idempotency_key="click-1", lead_id="lead-7", actor_name="Dana")

    banner("Compliance script")
    print(K.compliance_script(session.get_line_breakdown(), session.get_aggregate(), company="Acme Ltd"))

    for attempt in (1, 2, 3):
        banner(f"Submit #{attempt}")
        match await service.submit(session, request):
            case Ok(receipt):
                origin = "replayed" if receipt.from_cache else "placed"
                print(f"  ✓ order {receipt.order.order_id} {origin}")
            case Error(e):
                print(f"  ✗ {e.kind.name}: {e.message}")
                print(f"  voided so far: {orders.voided}, items still in cart: {len(session)}")

    banner("Summary logged to the lead")
    order = next(iter(orders.orders.values()))
    print(order.summary)


if __name__ == "__main__":
    run(main)
