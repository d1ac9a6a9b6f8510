from enum import Enum
from decimal import Decimal
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import relationship
from .base import Base


class CartStatus(str, Enum):
    OPEN = "OPEN"
    READ_ONLY = "READ_ONLY"


class Cart(Base):
    __tablename__ = "cart"

    id = Column(String(36), primary_key=True)
    customer_id = Column(String(128), nullable=True)
    total_price = Column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    total_items = Column(Integer, nullable=False, default=0)
    status = Column(String(16), nullable=False, default=CartStatus.OPEN.value)
    discount = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.position",
    )

    @property
    def is_read_only(self) -> bool:
        return self.status == CartStatus.READ_ONLY.value

    def recalculate(self) -> None:
        """Refresh the cart totals from its items."""
        self.total_price = sum((it.line_total() for it in self.items), Decimal("0"))
        self.total_items = sum(int(it.quantity or 0) for it in self.items)

    def totals_match_items(self) -> bool:
        expected_price = sum((it.line_total() for it in self.items), Decimal("0"))
        expected_items = sum(int(it.quantity or 0) for it in self.items)
        return (
            Decimal(str(self.total_price or 0)) == expected_price
            and int(self.total_items or 0) == expected_items
        )


class CartItem(Base):
    __tablename__ = "cart_item"

    id = Column(String(36), primary_key=True)
    cart_id = Column(String(36), ForeignKey("cart.id", ondelete="CASCADE"), nullable=False)
    menu_item_id = Column(String(36), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    unit_price = Column(Numeric(12, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=True, default=Decimal("0"))
    position = Column(Integer, nullable=False, default=0)

    cart = relationship("Cart", back_populates="items")

    def line_total(self) -> Decimal:
        # a missing total counts as zero
        return Decimal(str(self.total_price)) if self.total_price is not None else Decimal("0")
