from .base import Base
from .cart import Cart, CartItem, CartStatus
from .menu_item import MenuItem
from .order import Order, OrderStatus, STATUS_LADDER, TERMINAL_STATUSES
from .payment import Payment, PaymentStatus
from .restaurant import Restaurant

__all__ = [
    "Base",
    "Cart",
    "CartItem",
    "CartStatus",
    "MenuItem",
    "Order",
    "OrderStatus",
    "Payment",
    "PaymentStatus",
    "Restaurant",
    "STATUS_LADDER",
    "TERMINAL_STATUSES",
]
