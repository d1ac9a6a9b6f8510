"""Storage collaborators, each bound to the session of one transaction."""

from dataclasses import dataclass
from sqlalchemy.orm import Session
from .carts import CartRepository
from .menu_items import MenuItemRepository
from .orders import OrderRepository
from .payments import PaymentRepository
from .restaurants import RestaurantRepository


@dataclass
class Repositories:
    carts: CartRepository
    menu_items: MenuItemRepository
    restaurants: RestaurantRepository
    payments: PaymentRepository
    orders: OrderRepository

    @classmethod
    def bind(cls, session: Session) -> "Repositories":
        return cls(
            carts=CartRepository(session),
            menu_items=MenuItemRepository(session),
            restaurants=RestaurantRepository(session),
            payments=PaymentRepository(session),
            orders=OrderRepository(session),
        )


__all__ = [
    "CartRepository",
    "MenuItemRepository",
    "OrderRepository",
    "PaymentRepository",
    "Repositories",
    "RestaurantRepository",
]
