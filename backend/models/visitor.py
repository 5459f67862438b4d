"""Visitor hit model."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text

from .database import Base

UNKNOWN_PLACE = "Unknown"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Visitor(Base):
    """One recorded hit on the visitor-tracking endpoint. Rows are append-only."""
    __tablename__ = "visitors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ip = Column(String(64), nullable=False, index=True)
    user_agent = Column(Text, nullable=False, default="unknown")
    path = Column(String(500), nullable=False, default="/")

    # Coarse geolocation
    country = Column(String(100), nullable=False, default=UNKNOWN_PLACE, index=True)
    city = Column(String(100), nullable=False, default=UNKNOWN_PLACE)

    captured_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    def __repr__(self):
        return f"<Visitor(id={self.id}, ip={self.ip}, country={self.country})>"
