"""The five stages of order placement.

Each stage exposes ``name`` and ``process(context) -> context`` and raises an
:class:`~foodorder.errors.OrderError` subclass to stop the order. Stages read
what they need straight from the repositories they were built with; the
docstrings list which context fields each one reads and writes.
"""

from collections import Counter
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable
from uuid import uuid4

from ..errors import (
    CartLocked,
    CartUnavailable,
    InvalidCartState,
    ItemUnavailable,
    NotFound,
    PaymentFailed,
    RestaurantClosed,
)
from ..models.order import Order, OrderStatus
from ..repositories import (
    CartRepository,
    MenuItemRepository,
    OrderRepository,
    PaymentRepository,
    RestaurantRepository,
)
from ..services.logging import log_event
from .context import OrderContext


Clock = Callable[[], datetime]


def _quantities(items: Iterable) -> Counter:
    counts: Counter = Counter()
    for it in items:
        counts[str(it.menu_item_id)] += int(it.quantity or 0)
    return counts


class CartLockCheck:
    """Reads ``request.cart_id``. Writes nothing."""

    name = "cart_lock_check"

    def __init__(self, carts: CartRepository) -> None:
        self._carts = carts

    def process(self, ctx: OrderContext) -> OrderContext:
        cart_id = ctx.request.cart_id
        cart = self._carts.find_by_id(cart_id, lock=True)
        if cart is None:
            raise CartUnavailable(cart_id)
        if cart.is_read_only:
            raise CartLocked(cart_id)
        return ctx


class ItemsAvailabilityCheck:
    """Reads ``request.cart_id``, ``request.items``, ``request.restaurant_id``
    and ``request.customer_id``. Writes nothing.

    The cart's stored items decide what gets ordered; a non-empty request
    item list has to match them exactly (same menu items, same quantities).
    """

    name = "items_availability_check"

    def __init__(self, carts: CartRepository, menu_items: MenuItemRepository) -> None:
        self._carts = carts
        self._menu_items = menu_items

    def process(self, ctx: OrderContext) -> OrderContext:
        req = ctx.request
        cart = self._carts.find_by_id(req.cart_id)
        if cart is None:
            raise CartUnavailable(req.cart_id)
        if req.customer_id and cart.customer_id and str(cart.customer_id) != str(req.customer_id):
            raise InvalidCartState(req.cart_id, "cart belongs to another customer")
        if not cart.items:
            raise InvalidCartState(req.cart_id, "cart has no items")
        if any(int(it.quantity or 0) < 1 for it in req.items):
            raise InvalidCartState(req.cart_id, "requested quantities must be positive")
        if req.items and _quantities(req.items) != _quantities(cart.items):
            raise InvalidCartState(req.cart_id, "requested items do not match cart contents")
        if not cart.totals_match_items():
            raise InvalidCartState(req.cart_id, "cart totals are out of date")

        # fail fast on the first bad item
        for item in cart.items:
            if not self._menu_items.is_available(item.menu_item_id, req.restaurant_id):
                raise ItemUnavailable(item.menu_item_id)
        return ctx


class RestaurantHoursCheck:
    """Reads ``request.restaurant_id``. Writes nothing."""

    name = "restaurant_hours_check"

    def __init__(self, restaurants: RestaurantRepository, clock: Clock = datetime.now) -> None:
        self._restaurants = restaurants
        self._clock = clock

    def process(self, ctx: OrderContext) -> OrderContext:
        restaurant_id = ctx.request.restaurant_id
        restaurant = self._restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            raise RestaurantClosed(restaurant_id, "restaurant not found")
        if not self._restaurants.is_open_at(restaurant, self._clock()):
            raise RestaurantClosed(restaurant_id)
        return ctx


class PaymentProcess:
    """Reads ``request.cart_id``. Writes ``response.total_price`` and
    ``response.payment_id``.
    """

    name = "payment_process"

    def __init__(self, carts: CartRepository, payments: PaymentRepository, gateway, currency: str) -> None:
        self._carts = carts
        self._payments = payments
        self._gateway = gateway
        self._currency = currency

    def process(self, ctx: OrderContext) -> OrderContext:
        cart_id = ctx.request.cart_id
        cart = self._carts.find_by_id(cart_id)
        if cart is None:
            raise CartUnavailable(cart_id)
        amount = Decimal(str(cart.total_price or 0))

        auth = self._gateway.authorize(amount, self._currency, cart_id)
        if not auth.approved:
            log_event("warning", "payment.declined", cart_id=cart_id, amount=amount, reason=auth.reason)
            raise PaymentFailed(auth.reason or "declined")

        payment = self._payments.create(amount, currency=self._currency, gateway_reference=auth.reference)
        ctx.response.payment_id = payment.id
        ctx.response.total_price = amount
        return ctx


class FinalizeOrder:
    """Reads ``request.cart_id``, ``request.restaurant_id``,
    ``response.payment_id`` and ``response.total_price``. Writes
    ``response.order_id``, ``response.order_time`` and
    ``response.order_status``.

    Retires the cart, persists the order and links the payment back to it.
    Must stay the last stage.
    """

    name = "finalize_order"

    def __init__(
        self,
        carts: CartRepository,
        restaurants: RestaurantRepository,
        payments: PaymentRepository,
        orders: OrderRepository,
        clock: Clock = datetime.now,
    ) -> None:
        self._carts = carts
        self._restaurants = restaurants
        self._payments = payments
        self._orders = orders
        self._clock = clock

    def process(self, ctx: OrderContext) -> OrderContext:
        req, resp = ctx.request, ctx.response
        cart = self._carts.find_by_id(req.cart_id)
        if cart is None:
            raise CartUnavailable(req.cart_id)
        snapshot = [
            {
                "menu_item_id": it.menu_item_id,
                "quantity": it.quantity,
                "unit_price": float(it.unit_price or 0),
            }
            for it in cart.items
        ]
        self._carts.delete(cart)

        restaurant = self._restaurants.find_by_id(req.restaurant_id)
        if restaurant is None:
            raise NotFound("restaurant", req.restaurant_id)
        payment = self._payments.find_by_id(resp.payment_id)
        if payment is None:
            raise NotFound("payment", str(resp.payment_id))

        order = Order(
            id=str(uuid4()),
            customer_id=req.customer_id,
            delivery_id=req.delivery_id,
            delivery_address=req.delivery_address,
            items=snapshot,
            order_time=self._clock(),
            total_price=resp.total_price,
            order_status=OrderStatus.PURCHASED.value,
            restaurant_id=restaurant.id,
            payment_id=payment.id,
        )
        saved = self._orders.save(order)
        self._payments.link_to_order(payment.id, saved.id)

        resp.order_id = saved.id
        resp.order_time = saved.order_time
        resp.order_status = saved.order_status
        return ctx
