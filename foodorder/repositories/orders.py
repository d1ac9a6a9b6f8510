from typing import Optional
from sqlalchemy.orm import Session
from ..models.order import Order


class OrderRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, order: Order) -> Order:
        self._session.add(order)
        self._session.flush()
        return order

    def find_by_id(self, order_id: str) -> Optional[Order]:
        if not order_id:
            return None
        return self._session.query(Order).filter(Order.id == order_id).first()
