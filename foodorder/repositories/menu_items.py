from typing import Optional
from sqlalchemy.orm import Session
from ..models.menu_item import MenuItem


class MenuItemRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_id(self, menu_item_id: str) -> Optional[MenuItem]:
        if not menu_item_id:
            return None
        return self._session.query(MenuItem).filter(MenuItem.id == menu_item_id).first()

    def is_available(self, menu_item_id: str, restaurant_id: Optional[str] = None) -> bool:
        """True when the item exists, is on sale, and (if given) belongs to ``restaurant_id``."""
        item = self.find_by_id(menu_item_id)
        if item is None or not item.is_available:
            return False
        if restaurant_id and item.restaurant_id != restaurant_id:
            return False
        return True
