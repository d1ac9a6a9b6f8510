from typing import Optional
from sqlalchemy.orm import Session
from ..models.cart import Cart


class CartRepository:
    """Cart storage bound to one transaction's session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_id(self, cart_id: str, *, lock: bool = False) -> Optional[Cart]:
        if not cart_id:
            return None
        q = self._session.query(Cart).filter(Cart.id == cart_id)
        if lock:
            # row lock on backends that honour FOR UPDATE; sqlite ignores it
            q = q.with_for_update()
        return q.first()

    def delete(self, cart: Cart) -> None:
        self._session.delete(cart)
        self._session.flush()
