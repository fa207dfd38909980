"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import utc_now_naive


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_recipient_created", "recipient_id", "created_at"),
        Index("ix_notification_recipient_read", "recipient_id", "read"),
        Index("ix_notification_recipient_link_type", "recipient_id", "link_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    link_type = Column(String(30), nullable=False, default="", server_default="")
    link_id = Column(String(64), nullable=False, default="", server_default="")
    created_at = Column(DateTime(), nullable=False, default=utc_now_naive)
    updated_at = Column(
        DateTime(), nullable=False, default=utc_now_naive, onupdate=utc_now_naive
    )


__all__ = ["NotificationModel"]
