from typing import Any, Dict


def _money(value: Any) -> float:
    return float(value or 0)


def _iso(value: Any):
    return value.isoformat() if value is not None else None


def to_cart_dto(cart: Any) -> Dict:
    return {
        "id": getattr(cart, "id", None),
        "customer_id": getattr(cart, "customer_id", None),
        "status": getattr(cart, "status", None),
        "total_price": _money(getattr(cart, "total_price", 0)),
        "total_items": int(getattr(cart, "total_items", 0) or 0),
        "discount": _money(cart.discount) if getattr(cart, "discount", None) is not None else None,
        "items": [
            {
                "id": it.id,
                "menu_item_id": it.menu_item_id,
                "quantity": it.quantity,
                "unit_price": _money(it.unit_price),
                "total_price": _money(it.total_price),
            }
            for it in (getattr(cart, "items", None) or [])
        ],
    }


def to_order_dto(order: Any) -> Dict:
    return {
        "order_id": getattr(order, "id", None),
        "customer_id": getattr(order, "customer_id", None),
        "restaurant_id": getattr(order, "restaurant_id", None),
        "delivery_id": getattr(order, "delivery_id", None),
        "delivery_address": getattr(order, "delivery_address", None),
        "items": getattr(order, "items", None) or [],
        "order_time": _iso(getattr(order, "order_time", None)),
        "total_price": _money(getattr(order, "total_price", 0)),
        "order_status": getattr(order, "order_status", None),
        "payment_id": getattr(order, "payment_id", None),
    }


def to_status_dto(order: Any) -> Dict:
    return {"order_id": getattr(order, "id", None), "status": getattr(order, "order_status", None)}


def to_response_dto(response: Any) -> Dict:
    """Serialize a pipeline ``OrderResponse``."""
    return {
        "customer_id": response.customer_id,
        "restaurant_id": response.restaurant_id,
        "delivery_id": response.delivery_id,
        "items": [{"menu_item_id": it.menu_item_id, "quantity": it.quantity} for it in response.items],
        "delivery_address": response.delivery_address,
        "total_price": _money(response.total_price),
        "payment_id": response.payment_id,
        "order_id": response.order_id,
        "order_time": _iso(response.order_time),
        "order_status": response.order_status,
    }
