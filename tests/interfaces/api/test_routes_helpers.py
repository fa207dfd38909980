"""Tests for the domain error to HTTP status mapping."""

import pytest

from app.domain.exceptions import (
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitedError,
)
from app.interfaces.api.routes_helpers import to_http_exception


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (AuthenticationError(), 401),
        (NotFoundError("Notification not found"), 404),
        (PermissionDeniedError("Not allowed"), 403),
        (RateLimitedError("Try again later."), 429),
        (InvalidInputError("Invalid notification IDs"), 400),
    ],
)
def test_to_http_exception_maps_domain_errors(error, status_code):
    exc = to_http_exception(error)

    assert exc.status_code == status_code
    assert exc.detail == str(error)


def test_only_authentication_failures_carry_the_bearer_challenge():
    assert to_http_exception(AuthenticationError()).headers == {"WWW-Authenticate": "Bearer"}
    assert to_http_exception(NotFoundError("x")).headers is None
