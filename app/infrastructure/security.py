"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

settings = get_settings()

JWT_ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=settings.password_hash_rounds,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ---- JWT ----


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(tz=timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=JWT_ALGORITHM)


def create_user_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Return a signed token whose subject is ``user_id``."""

    return create_access_token({"sub": str(user_id)}, expires_delta=expires_delta)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[JWT_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def user_id_from_token(token: str) -> int:
    """Return the user id carried by ``token`` or raise ``ValueError``."""

    payload = decode_access_token(token)
    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise ValueError("Token subject is not a user id") from exc
    if user_id <= 0:
        raise ValueError("Token subject is not a user id")
    return user_id


__all__ = [
    "create_access_token",
    "create_user_token",
    "decode_access_token",
    "get_password_hash",
    "user_id_from_token",
    "verify_password",
]
