"""SQLAlchemy model for events."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import utc_now_naive


class EventModel(Base):
    """Database representation of an event."""

    __tablename__ = "event"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(200), nullable=False, default="")
    date = Column(DateTime, nullable=False)
    category = Column(String(80), nullable=False)
    organizer_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    is_paid = Column(Boolean, nullable=False, default=False)
    price = Column(Float, nullable=False, default=0.0)
    is_approved = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    is_cancelled = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    cancel_reason = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=utc_now_naive)


__all__ = ["EventModel"]
