"""SQLAlchemy model for event registrations."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
)

from app.infrastructure.database import Base
from app.utils import utc_now_naive


class RegistrationModel(Base):
    """Database representation of a participant registration."""

    __tablename__ = "registration"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_registration_user_event"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_id = Column(
        Integer, ForeignKey("event.id", ondelete="CASCADE"), nullable=False, index=True
    )
    check_in = Column(Boolean, nullable=False, default=False)
    qr_code = Column(Text, nullable=False)
    last_scanned_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)


__all__ = ["RegistrationModel"]
