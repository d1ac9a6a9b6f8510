from sqlalchemy import Boolean, Column, DateTime, Numeric, String, func
from .base import Base


class MenuItem(Base):
    __tablename__ = "menu_item"

    id = Column(String(36), primary_key=True)
    restaurant_id = Column(String(36), nullable=False)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
