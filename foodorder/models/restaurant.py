from datetime import datetime, time
from sqlalchemy import Column, String, Time
from .base import Base


class Restaurant(Base):
    __tablename__ = "restaurant"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    opens_at = Column(Time, nullable=False, default=time(0, 0))
    closes_at = Column(Time, nullable=False, default=time(0, 0))

    def is_open_at(self, when: datetime) -> bool:
        """Check ``when`` against the daily opening window.

        ``opens_at`` is inclusive and ``closes_at`` exclusive. A window whose
        close is earlier than its open runs past midnight; equal bounds mean
        the restaurant never closes.
        """
        t = when.time()
        opens, closes = self.opens_at, self.closes_at
        if opens == closes:
            return True
        if opens < closes:
            return opens <= t < closes
        return t >= opens or t < closes
