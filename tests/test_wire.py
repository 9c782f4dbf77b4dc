"""
HTTP surface through FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from quotecart._config import Settings
from quotecart.cart import SessionPool
from quotecart.checkout import CheckoutService, MemoryInteractionLog, MemoryOrderSink
from quotecart.wire import create_app


@pytest.fixture
def log() -> MemoryInteractionLog:
    return MemoryInteractionLog()


@pytest.fixture
def client(pool: SessionPool, log: MemoryInteractionLog) -> TestClient:
    service = CheckoutService(MemoryOrderSink(), log)
    return TestClient(create_app(pool, checkout=service, settings=Settings()))


class TestCartRoutes:
    def test_worked_example(self, client: TestClient) -> None:
        assert client.post("/carts/c1/items", json={"product_id": "pro"}).status_code == 200
        client.put("/carts/c1/items/pro/quantity", json={"quantity": 2})
        body = client.put("/carts/c1/items/pro/discount", json={"discount_id": "spring"}).json()
        assert body["totals"]["final_total"] == "150.00"

        body = client.put("/carts/c1/items/pro/override", json={"amount": "30"}).json()
        assert body["totals"] == {"subtotal": "200.00", "total_discount": "30.00", "final_total": "170.00"}

        body = client.delete("/carts/c1/items/pro/override").json()
        assert body["totals"]["final_total"] == "200.00"

    def test_term_and_code(self, client: TestClient) -> None:
        client.post("/carts/c1/items", json={"product_id": "pro"})
        client.post("/carts/c1/items", json={"product_id": "addon"})
        body = client.put("/carts/c1/items/addon/term", json={"term": "12_MONTHS"}).json()
        addon = next(line for line in body["lines"] if line["item_id"] == "addon")
        assert addon["contract_term"] == "12_MONTHS"
        assert addon["applied_discount_code"] == "FREE3"

        body = client.post("/carts/c1/codes", json={"code": "spring25"}).json()
        assert body["applied_count"] == 1
        assert body["cart"]["totals"]["final_total"] == "75.00"

    def test_change_quantity_and_clear(self, client: TestClient) -> None:
        client.post("/carts/c1/items", json={"product_id": "pro"})
        body = client.post("/carts/c1/items/pro/quantity/change", json={"delta": -5}).json()
        assert body["lines"][0]["quantity"] == 1
        assert client.delete("/carts/c1").json()["lines"] == []

    def test_applicable_discounts(self, client: TestClient) -> None:
        client.post("/carts/c1/items", json={"product_id": "pro"})
        found = client.get("/carts/c1/items/pro/discounts").json()
        assert [d["id"] for d in found] == ["spring", "pro15", "trial"]
        assert found[0]["badge"] == "25% OFF"


class TestErrors:
    def test_unknown_item_is_404(self, client: TestClient) -> None:
        response = client.delete("/carts/c1/items/ghost")
        assert response.status_code == 404
        assert response.json()["error"] == "ITEM_NOT_FOUND"

    def test_unknown_product_is_404(self, client: TestClient) -> None:
        response = client.post("/carts/c1/items", json={"product_id": "ghost"})
        assert response.status_code == 404
        assert response.json()["error"] == "PRODUCT_NOT_FOUND"

    def test_expired_code_is_422(self, client: TestClient) -> None:
        client.post("/carts/c1/items", json={"product_id": "pro"})
        response = client.post("/carts/c1/codes", json={"code": "OLD10"})
        assert response.status_code == 422
        assert response.json() == {"error": "CODE_EXPIRED", "message": "This promo code has expired."}

    def test_negative_override_is_422(self, client: TestClient) -> None:
        client.post("/carts/c1/items", json={"product_id": "pro"})
        response = client.put("/carts/c1/items/pro/override", json={"amount": "-5"})
        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_OVERRIDE_AMOUNT"


class TestCheckoutRoutes:
    def test_checkout_and_replay(self, client: TestClient, log: MemoryInteractionLog) -> None:
        client.post("/carts/c1/items", json={"product_id": "pro"})
        payload = {"idempotency_key": "click-1", "lead_id": "lead-7", "actor_name": "Dana"}

        first = client.post("/carts/c1/checkout", json=payload)
        assert first.status_code == 200
        assert first.json()["final_total"] == "100.00"
        assert first.json()["from_cache"] is False

        second = client.post("/carts/c1/checkout", json=payload).json()
        assert second["from_cache"] is True
        assert second["order_id"] == first.json()["order_id"]
        assert len(log.interactions) == 1
        assert client.get("/carts/c1").json()["lines"] == []

    def test_checked_out_cart_leaves_pool(self, client: TestClient, pool: SessionPool) -> None:
        client.post("/carts/c1/items", json={"product_id": "pro"})
        assert "c1" in pool
        payload = {"idempotency_key": "click-1", "lead_id": "lead-7", "actor_name": "Dana"}
        assert client.post("/carts/c1/checkout", json=payload).status_code == 200
        assert "c1" not in pool

    def test_lookups_of_unknown_carts_do_not_accumulate(self, client: TestClient, pool: SessionPool) -> None:
        for n in range(5):
            assert client.get(f"/carts/nobody-{n}").json()["lines"] == []
        assert len(pool) == 0

    def test_checkout_without_lead(self, client: TestClient) -> None:
        client.post("/carts/c1/items", json={"product_id": "pro"})
        response = client.post(
            "/carts/c1/checkout",
            json={"idempotency_key": "k", "actor_name": "Dana"},
        )
        assert response.status_code == 422
        assert response.json()["error"] == "NO_LEAD"

    def test_compliance_script(self, client: TestClient) -> None:
        client.post("/carts/c1/items", json={"product_id": "pro"})
        script = client.get(
            "/carts/c1/compliance-script",
            params={"company": "Acme", "auto_renew": "true"},
        ).json()["script"]
        assert "Acme" in script
        assert "automatically renew" in script
