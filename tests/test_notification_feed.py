"""Tests for the feed use cases."""

from __future__ import annotations

import pytest

from app.application.use_cases.notifications import (
    acknowledge_notifications,
    list_notifications,
    parse_notification_ids,
)
from app.domain.entities import NotificationDraft, NotificationPage
from app.domain.exceptions import InvalidInputError
from app.infrastructure.repositories import NotificationRepository


@pytest.mark.parametrize(
    ("ids", "expected"),
    [([1, 2], [1, 2]), (["3", " 4 "], [3, 4]), ([5, "6"], [5, 6])],
)
def test_parse_notification_ids_accepts_integers(ids, expected):
    assert parse_notification_ids(ids) == expected


@pytest.mark.parametrize("ids", [None, [], "1,2", [True], [1.5], ["x"], {"ids": [1]}])
def test_parse_notification_ids_rejects_malformed_input(ids):
    with pytest.raises(InvalidInputError, match="Invalid notification IDs"):
        parse_notification_ids(ids)


def test_list_notifications_returns_list_or_page(db_session, participant):
    repository = NotificationRepository(db_session)
    for index in range(3):
        repository.create(
            NotificationDraft(recipient_id=participant.id, title=f"t{index}", message="m")
        )

    legacy = list_notifications(db_session, user_id=participant.id)
    page = list_notifications(db_session, user_id=participant.id, limit=2)

    assert isinstance(legacy, list)
    assert len(legacy) == 3
    assert isinstance(page, NotificationPage)
    assert page.page == 1
    assert page.total_pages == 2
    assert page.has_more is True


@pytest.mark.parametrize(("page", "limit"), [(0, 10), (-1, None), (1, 101)])
def test_list_notifications_rejects_bad_paging(db_session, participant, page, limit):
    with pytest.raises(InvalidInputError):
        list_notifications(db_session, user_id=participant.id, page=page, limit=limit)


def test_acknowledge_ignores_malformed_ids(db_session, participant):
    assert acknowledge_notifications(db_session, user_id=participant.id, ids="oops") == 0
