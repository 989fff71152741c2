from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime
from academy.models.base_model import Base


def _utc_now():
    return datetime.now(timezone.utc)


class Collection(Base):
    """
    One row per stored collection; `value` holds the whole collection as a JSON array.
    """
    __tablename__ = "collections"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False, default="[]")
    updated_at = Column(DateTime(timezone=True), default=_utc_now, onupdate=_utc_now, nullable=False)

    def __repr__(self):
        return f"<Collection(key='{self.key}')>"
