"""Errors raised by the domain and infrastructure layers."""

from __future__ import annotations


class AuthenticationError(Exception):
    """Missing, invalid or expired credential.

    The message is the same for every failure cause.
    """

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class NotFoundError(LookupError):
    """The target record does not exist or is not owned by the caller."""


class StorageUnavailableError(RuntimeError):
    """The persistence layer failed while executing an operation."""


class InvalidInputError(ValueError):
    """The caller supplied malformed input."""


class PermissionDeniedError(Exception):
    """The caller is authenticated but may not perform the operation."""


class RateLimitedError(Exception):
    """The operation was repeated before its cooldown elapsed."""


__all__ = [
    "AuthenticationError",
    "InvalidInputError",
    "NotFoundError",
    "PermissionDeniedError",
    "RateLimitedError",
    "StorageUnavailableError",
]
