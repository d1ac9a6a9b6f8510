"""Failures raised while placing or managing orders.

Every domain failure derives from :class:`OrderError` and carries a stable
``code``. The pipeline stamps ``stage`` with the name of the stage that
raised it, so callers can tell which check or action stopped the order.
Anything unexpected (storage down, driver errors) surfaces as
:class:`OrderProcessingError` instead, which is not an
``OrderError``.
"""

from typing import Any, Dict, Optional


class OrderError(Exception):
    code = "order_error"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.stage: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {"code": self.code, "message": self.message, "stage": self.stage}
        payload.update(self.details)
        return payload


class CartUnavailable(OrderError):
    code = "cart_unavailable"

    def __init__(self, cart_id: str) -> None:
        super().__init__(f"cart {cart_id} is not available", cart_id=cart_id)
        self.cart_id = cart_id


class CartLocked(OrderError):
    code = "cart_locked"

    def __init__(self, cart_id: str) -> None:
        super().__init__(f"cart {cart_id} is locked by another order", cart_id=cart_id)
        self.cart_id = cart_id


class InvalidCartState(OrderError):
    code = "invalid_cart_state"

    def __init__(self, cart_id: str, reason: str) -> None:
        super().__init__(f"cart {cart_id} cannot be ordered: {reason}", cart_id=cart_id, reason=reason)
        self.cart_id = cart_id
        self.reason = reason


class ItemUnavailable(OrderError):
    code = "item_unavailable"

    def __init__(self, item_id: str) -> None:
        super().__init__(f"menu item {item_id} is not available", item_id=item_id)
        self.item_id = item_id


class RestaurantClosed(OrderError):
    code = "restaurant_closed"

    def __init__(self, restaurant_id: str, reason: str = "outside operating hours") -> None:
        super().__init__(
            f"restaurant {restaurant_id} is closed: {reason}",
            restaurant_id=restaurant_id,
            reason=reason,
        )
        self.restaurant_id = restaurant_id
        self.reason = reason


class PaymentFailed(OrderError):
    code = "payment_failed"

    def __init__(self, reason: str) -> None:
        super().__init__(f"payment failed: {reason}", reason=reason)
        self.reason = reason


class NotFound(OrderError):
    code = "not_found"

    def __init__(self, entity_kind: str, entity_id: str) -> None:
        super().__init__(
            f"cannot find {entity_kind} with id {entity_id}",
            entity_kind=entity_kind,
            entity_id=entity_id,
        )
        self.entity_kind = entity_kind
        self.entity_id = entity_id


class InvalidOrderTransition(OrderError):
    code = "invalid_transition"

    def __init__(self, current: str, action: str) -> None:
        super().__init__(f"cannot {action} an order in status {current}", current=current, action=action)
        self.current = current
        self.action = action


class OrderProcessingError(Exception):
    """Unexpected failure while processing an order (storage, driver, bug)."""
