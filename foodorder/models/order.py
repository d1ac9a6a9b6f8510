from enum import Enum
from sqlalchemy import Column, DateTime, ForeignKey, JSON, Numeric, String, Text
from ..errors import InvalidOrderTransition
from .base import Base


class OrderStatus(str, Enum):
    PURCHASED = "PURCHASED"
    PREPARING = "PREPARING"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# update_status walks this ladder one rung at a time
STATUS_LADDER = (
    OrderStatus.PURCHASED,
    OrderStatus.PREPARING,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)
TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


class Order(Base):
    __tablename__ = "order"

    id = Column(String(36), primary_key=True)
    customer_id = Column(String(128), nullable=True)
    delivery_id = Column(String(128), nullable=True)
    delivery_address = Column(Text, nullable=True)
    items = Column(JSON, nullable=False)
    order_time = Column(DateTime, nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)
    order_status = Column(String(32), nullable=False)
    restaurant_id = Column(String(36), ForeignKey("restaurant.id"), nullable=False)
    payment_id = Column(String(36), ForeignKey("payment.id"), nullable=False)

    @property
    def status(self) -> OrderStatus:
        return OrderStatus(self.order_status)

    def advance_status(self) -> OrderStatus:
        """Move one step forward on the delivery ladder."""
        current = self.status
        if current in TERMINAL_STATUSES:
            raise InvalidOrderTransition(current.value, "update_status")
        nxt = STATUS_LADDER[STATUS_LADDER.index(current) + 1]
        self.order_status = nxt.value
        return nxt

    def cancel(self) -> OrderStatus:
        current = self.status
        if current in TERMINAL_STATUSES:
            raise InvalidOrderTransition(current.value, "cancel")
        self.order_status = OrderStatus.CANCELLED.value
        return OrderStatus.CANCELLED
