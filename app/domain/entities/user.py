"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

ROLE_PARTICIPANT = "participant"
ROLE_ORGANIZER = "organizer"
ROLE_ADMIN = "admin"
USER_ROLES = (ROLE_PARTICIPANT, ROLE_ORGANIZER, ROLE_ADMIN)


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    role: str = ROLE_PARTICIPANT
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role matches ``alias``."""

        return self.role.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def is_organizer(self) -> bool:
        """Organizers and administrators may manage events."""

        return self.has_role(ROLE_ORGANIZER) or self.is_admin()


__all__ = [
    "ROLE_ADMIN",
    "ROLE_ORGANIZER",
    "ROLE_PARTICIPANT",
    "USER_ROLES",
    "User",
]
