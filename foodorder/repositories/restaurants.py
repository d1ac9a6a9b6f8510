from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from ..models.restaurant import Restaurant


class RestaurantRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_id(self, restaurant_id: str) -> Optional[Restaurant]:
        if not restaurant_id:
            return None
        return self._session.query(Restaurant).filter(Restaurant.id == restaurant_id).first()

    @staticmethod
    def is_open_at(restaurant: Restaurant, when: datetime) -> bool:
        return restaurant.is_open_at(when)
