"""
Quote — build a cart and watch precedence decide each line.

Level 3: quotecart.cart
Level 2: kungfu.Result
"""

from kungfu import Ok, Error

from quotecart import cart as C
from quotecart.discounts import ContractTerm
from examples._infra import banner, seed_catalog, seed_registry


def show(session: C.CartSession) -> None:
    for line in session.get_line_breakdown():
        offer = line.applied_discount_name or "-"
        print(f"  {line.name:<20} x{line.quantity}  {line.contract_term.value:<10} {offer:<28} {line.discounted_total:>8}")
    agg = session.get_aggregate().rounded()
    print(f"  subtotal {agg.subtotal}  discount {agg.total_discount}  total {agg.final_total}")


def main() -> None:
    session = C.CartSession(seed_catalog(), seed_registry())

    banner("List price")
    session.add_item("pro")
    session.add_item("pro")
    session.add_item("addon")
    show(session)

    banner("Promo code SPRING25")
    match session.apply_code("spring25"):
        case Ok(count):
            print(f"  applied to {count} item(s)")
        case Error(e):
            print(f"  ✗ {e.message}")
    show(session)

    banner("12-month term on the add-on (replaces the code)")
    session.set_contract_term("addon", ContractTerm.TWELVE_MONTHS)
    show(session)

    banner("Expired code")
    match session.apply_code("OLD10"):
        case Ok(_):
            print("  unexpected")
        case Error(e):
            print(f"  ✗ {e.message}")

    banner("Manager override on Pro Plan")
    session.apply_override("pro", 30)
    show(session)


if __name__ == "__main__":
    main()
