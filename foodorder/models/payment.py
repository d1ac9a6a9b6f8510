from enum import Enum
from sqlalchemy import Column, DateTime, Numeric, String, func
from .base import Base


class PaymentStatus(str, Enum):
    AUTHORIZED = "AUTHORIZED"


class Payment(Base):
    __tablename__ = "payment"

    id = Column(String(36), primary_key=True)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(String(16), nullable=False)
    gateway_reference = Column(String(128), nullable=True)
    # back-reference only, set once the order exists
    order_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
