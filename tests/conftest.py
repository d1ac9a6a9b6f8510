import os
from datetime import datetime, time
from decimal import Decimal
from types import SimpleNamespace

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")

from foodorder.db.session import build_engine, init_db, make_session_factory  # noqa: E402
from foodorder.models import MenuItem, Restaurant  # noqa: E402
from foodorder.pipeline.context import OrderItemRequest, OrderRequest  # noqa: E402
from foodorder.services.cart_service import CartService  # noqa: E402
from foodorder.services.order_service import OrderService  # noqa: E402
from foodorder.services.payment_gateway import PaymentAuthorization  # noqa: E402


LUNCHTIME = datetime(2026, 10, 19, 12, 30)
MIDNIGHT = datetime(2026, 10, 19, 0, 15)


class RecordingGateway:
    """Payment gateway double that remembers every authorization attempt."""

    def __init__(self, approve: bool = True, reason: str = "card declined") -> None:
        self.approve = approve
        self.reason = reason
        self.calls = []

    def authorize(self, amount, currency, reference):
        self.calls.append((amount, currency, reference))
        if self.approve:
            return PaymentAuthorization(approved=True, reference=f"rec-{len(self.calls)}")
        return PaymentAuthorization(approved=False, reason=self.reason)


def count_rows(session_factory, model) -> int:
    with session_factory() as session:
        return session.query(model).count()


def make_request(cart_id: str, restaurant_id: str = "rest-1", items=(), **overrides) -> OrderRequest:
    fields = {
        "customer_id": "cust-1",
        "restaurant_id": restaurant_id,
        "cart_id": cart_id,
        "delivery_id": "deliv-1",
        "items": tuple(OrderItemRequest(menu_item_id=m, quantity=q) for m, q in items),
        "delivery_address": "12 Harbour Road",
    }
    fields.update(overrides)
    return OrderRequest(**fields)


def seed_catalog(session_factory) -> SimpleNamespace:
    with session_factory() as session:
        session.add_all(
            [
                Restaurant(id="rest-1", name="Noodle Bar", opens_at=time(10, 0), closes_at=time(22, 0)),
                Restaurant(id="rest-2", name="Night Owl", opens_at=time(20, 0), closes_at=time(2, 0)),
                MenuItem(id="item-burger", restaurant_id="rest-1", name="Burger", price=Decimal("9.99")),
                MenuItem(id="item-fries", restaurant_id="rest-1", name="Fries", price=Decimal("9.99")),
                MenuItem(id="item-soup", restaurant_id="rest-1", name="Soup", price=Decimal("4.50")),
                MenuItem(id="item-owl", restaurant_id="rest-2", name="Owl Wrap", price=Decimal("7.00")),
            ]
        )
    return SimpleNamespace(
        restaurant_id="rest-1",
        night_restaurant_id="rest-2",
        burger="item-burger",
        fries="item-fries",
        soup="item-soup",
        foreign_item="item-owl",
    )


@pytest.fixture
def engine():
    eng = build_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def catalog(session_factory):
    return seed_catalog(session_factory)


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def cart_service(session_factory):
    return CartService(session_factory)


@pytest.fixture
def order_service(session_factory, gateway):
    return OrderService(session_factory, gateway=gateway, clock=lambda: LUNCHTIME)


@pytest.fixture
def filled_cart(cart_service, catalog):
    """Cart with one burger and one fries: 19.98 in total."""
    cart = cart_service.create_cart(customer_id="cust-1")
    cart_service.add_item(cart_id=cart["id"], menu_item_id=catalog.burger, quantity=1)
    cart_service.add_item(cart_id=cart["id"], menu_item_id=catalog.fries, quantity=1)
    return cart["id"]
