import pytest

from conftest import LUNCHTIME, RecordingGateway, seed_catalog
from foodorder.app import create_app
from foodorder.config import AppConfig


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def app(gateway):
    config = AppConfig(database_url="sqlite://", secret_key="test", log_level="WARNING", currency="USD")
    app = create_app(config, gateway=gateway, clock=lambda: LUNCHTIME)
    seed_catalog(app.extensions["foodorder_components"]["session_factory"])
    yield app
    app.extensions["foodorder_components"]["engine"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def cart_id(client):
    cart = client.post("/api/carts", json={"customer_id": "cust-1"}).get_json()
    client.post(f"/api/carts/{cart['id']}/items", json={"menu_item_id": "item-burger", "quantity": 1})
    client.post(f"/api/carts/{cart['id']}/items", json={"menu_item_id": "item-fries", "quantity": 1})
    return cart["id"]


def _order_payload(cart_id, **overrides):
    payload = {
        "customer_id": "cust-1",
        "restaurant_id": "rest-1",
        "delivery_id": "deliv-1",
        "cart_id": cart_id,
        "items": [
            {"menu_item_id": "item-burger", "quantity": 1},
            {"menu_item_id": "item-fries", "quantity": 1},
        ],
        "delivery_address": "12 Harbour Road",
    }
    payload.update(overrides)
    return payload


def test_cart_endpoints(client, cart_id):
    cart = client.get(f"/api/carts/{cart_id}").get_json()

    assert cart["total_items"] == 2
    assert cart["total_price"] == pytest.approx(19.98)

    resp = client.delete(f"/api/carts/{cart_id}/items/{cart['items'][0]['id']}")
    assert resp.status_code == 200
    assert resp.get_json()["total_items"] == 1


def test_create_and_follow_order(client, cart_id):
    resp = client.post("/api/orders", json=_order_payload(cart_id))

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["total_price"] == pytest.approx(19.98)
    assert body["order_status"] == "PURCHASED"
    assert body["order_time"] == LUNCHTIME.isoformat()
    order_id = body["order_id"]

    fetched = client.get(f"/api/orders/{order_id}").get_json()
    assert fetched["total_price"] == pytest.approx(19.98)
    assert fetched["order_status"] == "PURCHASED"

    assert client.post(f"/api/orders/{order_id}/status").get_json()["status"] == "PREPARING"
    assert client.get(f"/api/orders/{order_id}/status").get_json()["status"] == "PREPARING"
    assert client.post(f"/api/orders/{order_id}/cancel").get_json()["status"] == "CANCELLED"

    again = client.post(f"/api/orders/{order_id}/cancel")
    assert again.status_code == 409
    assert again.get_json()["error"]["code"] == "invalid_transition"

    assert client.get(f"/api/carts/{cart_id}").status_code == 404


def test_payment_failure_maps_to_402(client, cart_id, gateway):
    gateway.approve = False

    resp = client.post("/api/orders", json=_order_payload(cart_id))

    assert resp.status_code == 402
    error = resp.get_json()["error"]
    assert error["code"] == "payment_failed"
    assert error["stage"] == "payment_process"


def test_item_mismatch_maps_to_422(client, cart_id):
    payload = _order_payload(cart_id, items=[{"menu_item_id": "item-burger", "quantity": 3}])

    resp = client.post("/api/orders", json=payload)

    assert resp.status_code == 422
    assert resp.get_json()["error"]["code"] == "invalid_cart_state"


def test_zero_quantity_item_is_rejected(client, cart_id, gateway):
    items = [
        {"menu_item_id": "item-burger", "quantity": 1},
        {"menu_item_id": "item-fries", "quantity": 1},
        {"menu_item_id": "item-soup", "quantity": 0},
    ]

    resp = client.post("/api/orders", json=_order_payload(cart_id, items=items))

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "bad_request"
    assert gateway.calls == []
    assert client.get(f"/api/carts/{cart_id}").status_code == 200


def test_unknown_cart_maps_to_404(client):
    resp = client.post("/api/orders", json=_order_payload("missing", items=[]))

    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "cart_unavailable"


def test_malformed_order_request(client):
    resp = client.post("/api/orders", json={"restaurant_id": "rest-1"})

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "bad_request"


def test_unknown_order_maps_to_404(client):
    resp = client.get("/api/orders/nope")

    assert resp.status_code == 404
    assert resp.get_json()["error"]["entity_kind"] == "order"
