"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from app.domain.exceptions import (
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitedError,
)

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (RateLimitedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
)


def to_http_exception(exc: Exception) -> HTTPException:
    """Return the :class:`HTTPException` matching a domain error."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            headers = (
                {"WWW-Authenticate": "Bearer"}
                if status_code == status.HTTP_401_UNAUTHORIZED
                else None
            )
            return HTTPException(status_code=status_code, detail=str(exc), headers=headers)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
