"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Integer, String

from app.infrastructure.database import Base
from app.utils import utc_now_naive


class UserModel(Base):
    """Database representation of the system user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="participant", index=True)
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=utc_now_naive)


__all__ = ["UserModel"]
