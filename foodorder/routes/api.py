"""HTTP routes for carts and orders."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from ..errors import (
    CartLocked,
    CartUnavailable,
    InvalidCartState,
    InvalidOrderTransition,
    ItemUnavailable,
    NotFound,
    OrderError,
    OrderProcessingError,
    PaymentFailed,
    RestaurantClosed,
)
from ..pipeline.context import OrderItemRequest, OrderRequest
from ..utils.dto import to_response_dto
from ..utils.validators import ensure_positive_int, require_str


api_bp = Blueprint("foodorder_api", __name__, url_prefix="/api")

STATUS_CODES = {
    NotFound: 404,
    CartUnavailable: 404,
    CartLocked: 409,
    InvalidOrderTransition: 409,
    InvalidCartState: 422,
    ItemUnavailable: 422,
    RestaurantClosed: 422,
    PaymentFailed: 402,
}


def _components() -> Dict[str, Any]:
    return current_app.extensions["foodorder_components"]


def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _parse_order_request(payload: Dict[str, Any]) -> OrderRequest:
    raw_items = payload.get("items") or []
    if not isinstance(raw_items, list):
        raise ValueError("items must be a list")
    items = tuple(
        OrderItemRequest(
            menu_item_id=require_str(it.get("menu_item_id") if isinstance(it, dict) else None, "menu_item_id"),
            quantity=ensure_positive_int(it.get("quantity"), "quantity"),
        )
        for it in raw_items
    )
    return OrderRequest(
        customer_id=str(payload.get("customer_id") or "").strip() or None,
        restaurant_id=require_str(payload.get("restaurant_id"), "restaurant_id"),
        cart_id=require_str(payload.get("cart_id"), "cart_id"),
        delivery_id=str(payload.get("delivery_id") or "").strip() or None,
        items=items,
        delivery_address=str(payload.get("delivery_address") or "").strip() or None,
    )


@api_bp.errorhandler(OrderError)
def handle_order_error(exc: OrderError):
    return jsonify({"error": exc.to_dict()}), STATUS_CODES.get(type(exc), 400)


@api_bp.errorhandler(OrderProcessingError)
def handle_processing_error(exc: OrderProcessingError):
    return jsonify({"error": {"code": "processing_error", "message": str(exc)}}), 500


@api_bp.errorhandler(ValueError)
def handle_bad_input(exc: ValueError):
    return jsonify({"error": {"code": "bad_request", "message": str(exc)}}), 400


@api_bp.post("/carts")
def create_cart():
    payload = _payload()
    cart = _components()["cart_service"].create_cart(customer_id=payload.get("customer_id"))
    return jsonify(cart), 201


@api_bp.get("/carts/<cart_id>")
def get_cart(cart_id: str):
    return jsonify(_components()["cart_service"].get_cart(cart_id))


@api_bp.post("/carts/<cart_id>/items")
def add_cart_item(cart_id: str):
    payload = _payload()
    result = _components()["cart_service"].add_item(
        cart_id=cart_id,
        menu_item_id=require_str(payload.get("menu_item_id"), "menu_item_id"),
        quantity=payload.get("quantity", 1),
    )
    return jsonify(result), 201


@api_bp.delete("/carts/<cart_id>/items/<item_id>")
def remove_cart_item(cart_id: str, item_id: str):
    return jsonify(_components()["cart_service"].remove_item(cart_id=cart_id, item_id=item_id))


@api_bp.post("/orders")
def create_order():
    order_request = _parse_order_request(_payload())
    response = _components()["order_service"].place_order(order_request)
    return jsonify(to_response_dto(response)), 201


@api_bp.get("/orders/<order_id>")
def get_order(order_id: str):
    return jsonify(_components()["order_service"].get_order(order_id))


@api_bp.get("/orders/<order_id>/status")
def get_order_status(order_id: str):
    return jsonify(_components()["order_service"].get_status(order_id))


@api_bp.post("/orders/<order_id>/status")
def update_order_status(order_id: str):
    return jsonify(_components()["order_service"].update_status(order_id))


@api_bp.post("/orders/<order_id>/cancel")
def cancel_order(order_id: str):
    return jsonify(_components()["order_service"].cancel(order_id))
