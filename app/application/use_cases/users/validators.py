"""Common validation helpers for user use cases."""

from app.domain.entities import USER_ROLES
from app.domain.exceptions import InvalidInputError


def normalize_email(email: str) -> str:
    """Return ``email`` stripped and lower-cased or raise ``InvalidInputError``."""

    normalized = email.strip().lower()
    if normalized.count("@") != 1:
        raise InvalidInputError("Valid email is required")
    local_part, domain = normalized.split("@", 1)
    if not local_part or "." not in domain:
        raise InvalidInputError("Valid email is required")
    return normalized


def ensure_valid_role(role: str, *, allowed: tuple[str, ...] = USER_ROLES) -> str:
    normalized = (role or "").strip().lower()
    if normalized not in allowed:
        raise InvalidInputError("Invalid role")
    return normalized
