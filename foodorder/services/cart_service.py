from typing import Dict, Optional
from uuid import uuid4
from decimal import Decimal
from ..db.session import get_session
from ..errors import CartLocked, ItemUnavailable, NotFound
from ..models.cart import Cart, CartItem, CartStatus
from ..models.menu_item import MenuItem
from ..utils.dto import to_cart_dto
from ..utils.validators import ensure_positive_int
from .logging import log_event


class CartService:
    """Cart operations backed by DB.

    Keeps every line total and the cart totals in step with the items, which
    is what order placement relies on when it charges ``Cart.total_price``.
    """

    def __init__(self, session_factory=get_session):
        self._session_factory = session_factory

    @staticmethod
    def _load(session, cart_id: str) -> Cart:
        cart = session.query(Cart).filter(Cart.id == cart_id).first()
        if not cart:
            raise NotFound("cart", cart_id)
        return cart

    @staticmethod
    def _ensure_open(cart: Cart) -> None:
        if cart.is_read_only:
            raise CartLocked(cart.id)

    def create_cart(self, *, customer_id: Optional[str] = None, discount: Optional[Decimal] = None) -> Dict:
        with self._session_factory() as session:
            cart = Cart(
                id=str(uuid4()),
                customer_id=customer_id,
                total_price=Decimal("0"),
                total_items=0,
                status=CartStatus.OPEN.value,
                discount=discount,
            )
            session.add(cart)
            session.flush()
            return to_cart_dto(cart)

    def get_cart(self, cart_id: str) -> Dict:
        with self._session_factory() as session:
            return to_cart_dto(self._load(session, cart_id))

    def add_item(self, *, cart_id: str, menu_item_id: str, quantity: int) -> Dict:
        if not menu_item_id:
            raise ValueError("menu_item_id required")
        qnty = ensure_positive_int(quantity, "quantity")
        with self._session_factory() as session:
            cart = self._load(session, cart_id)
            self._ensure_open(cart)
            menu_item = session.query(MenuItem).filter(MenuItem.id == menu_item_id).first()
            if not menu_item or not menu_item.is_available:
                raise ItemUnavailable(menu_item_id)

            # merge with an existing line for the same menu item
            existing = next((it for it in cart.items if it.menu_item_id == menu_item_id), None)
            if existing:
                existing.quantity = existing.quantity + qnty
                existing.total_price = Decimal(str(existing.unit_price)) * existing.quantity
                item_id = existing.id
            else:
                item = CartItem(
                    id=str(uuid4()),
                    menu_item_id=menu_item_id,
                    quantity=qnty,
                    unit_price=menu_item.price,
                    total_price=Decimal(str(menu_item.price)) * qnty,
                    position=len(cart.items),
                )
                cart.items.append(item)
                item_id = item.id
            cart.recalculate()
            session.flush()
            log_event("info", "cart.item.added", cart_id=cart_id, menu_item_id=menu_item_id, quantity=qnty)
            return {"status": "added", "item_id": item_id, "cart": to_cart_dto(cart)}

    def remove_item(self, *, cart_id: str, item_id: str) -> Dict:
        with self._session_factory() as session:
            cart = self._load(session, cart_id)
            self._ensure_open(cart)
            it = next((i for i in cart.items if i.id == item_id), None)
            if not it:
                raise NotFound("cart item", item_id)
            cart.items.remove(it)
            cart.recalculate()
            session.flush()
            return to_cart_dto(cart)

    def set_status(self, cart_id: str, status: CartStatus) -> Dict:
        """Lock a cart (READ_ONLY) or reopen it (OPEN)."""
        with self._session_factory() as session:
            cart = self._load(session, cart_id)
            cart.status = CartStatus(status).value
            session.flush()
            return to_cart_dto(cart)
