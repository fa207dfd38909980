"""Tests for the notification feed endpoints."""

from __future__ import annotations

from app.domain.entities import NotificationDraft
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories import NotificationRepository

from conftest import auth_headers


def _seed(user_id: int, count: int, **kwargs) -> list[int]:
    with SessionLocal() as session:
        repository = NotificationRepository(session)
        return [
            repository.create(
                NotificationDraft(
                    recipient_id=user_id, title=f"Title {index}", message="Body", **kwargs
                )
            ).id
            for index in range(count)
        ]


def test_feed_requires_authentication(client):
    response = client.get("/notifications/my")

    assert response.status_code == 401

    response = client.get(
        "/notifications/my", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Authentication failed"


def test_legacy_feed_is_a_capped_newest_first_list(client, participant):
    ids = _seed(participant.id, 105)

    response = client.get("/notifications/my", headers=auth_headers(participant))

    assert response.status_code == 200
    body = response.json()
    assert isinstance(body, list)
    assert len(body) == 100
    assert body[0]["id"] == ids[-1]
    assert set(body[0]) == {
        "id",
        "user",
        "title",
        "message",
        "read",
        "linkType",
        "linkId",
        "createdAt",
        "updatedAt",
    }


def test_paginated_feed_reports_metadata(client, participant):
    _seed(participant.id, 45)
    headers = auth_headers(participant)

    first = client.get("/notifications/my?page=1&limit=20", headers=headers).json()
    last = client.get("/notifications/my?page=3&limit=20", headers=headers).json()

    assert len(first["notifications"]) == 20
    assert first["pagination"] == {
        "page": 1,
        "limit": 20,
        "total": 45,
        "totalPages": 3,
        "hasMore": True,
    }
    assert len(last["notifications"]) == 5
    assert last["pagination"]["hasMore"] is False


def test_page_alone_uses_default_page_size(client, participant):
    _seed(participant.id, 3)

    body = client.get("/notifications/my?page=1", headers=auth_headers(participant)).json()

    assert body["pagination"]["limit"] == 20
    assert body["pagination"]["total"] == 3


def test_invalid_paging_parameters_are_rejected(client, participant):
    headers = auth_headers(participant)

    assert client.get("/notifications/my?page=0", headers=headers).status_code == 422
    assert client.get("/notifications/my?limit=101", headers=headers).status_code == 422


def test_feed_filters_by_read_state_and_link_type(client, participant):
    headers = auth_headers(participant)
    unread_ids = _seed(participant.id, 3)
    linked_ids = _seed(participant.id, 2, link_type="event", link_id="7")
    for notification_id in unread_ids[:2]:
        client.put(f"/notifications/{notification_id}/read", headers=headers)

    unread = client.get("/notifications/my?read=false", headers=headers).json()
    linked = client.get("/notifications/my?linkType=event", headers=headers).json()

    assert {item["id"] for item in unread} == {unread_ids[2], *linked_ids}
    assert all(item["read"] is False for item in unread)
    assert {item["id"] for item in linked} == set(linked_ids)


def test_feed_never_leaks_other_users_records(client, participant, other_participant):
    _seed(other_participant.id, 4)

    body = client.get("/notifications/my", headers=auth_headers(participant)).json()

    assert body == []


def test_unread_count_and_mark_all_read(client, participant):
    headers = auth_headers(participant)
    _seed(participant.id, 4)

    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 4}

    first = client.put("/notifications/read-all", headers=headers)
    second = client.put("/notifications/read-all", headers=headers)

    assert first.json() == {"success": True, "modifiedCount": 4}
    assert second.json() == {"success": True, "modifiedCount": 0}
    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 0}


def test_mark_read_returns_record_and_hides_foreign_ones(client, participant, other_participant):
    (mine,) = _seed(participant.id, 1)
    (theirs,) = _seed(other_participant.id, 1)
    headers = auth_headers(participant)

    response = client.put(f"/notifications/{mine}/read", headers=headers)
    assert response.status_code == 200
    assert response.json()["read"] is True
    assert response.json()["id"] == mine

    response = client.put(f"/notifications/{theirs}/read", headers=headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Notification not found"

    assert client.put("/notifications/424242/read", headers=headers).status_code == 404


def test_delete_one(client, participant, other_participant):
    (mine,) = _seed(participant.id, 1)
    (theirs,) = _seed(other_participant.id, 1)
    headers = auth_headers(participant)

    assert client.delete(f"/notifications/{theirs}", headers=headers).status_code == 404
    response = client.delete(f"/notifications/{mine}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.delete(f"/notifications/{mine}", headers=headers).status_code == 404


def test_delete_multiple_only_removes_owned_records(client, participant, other_participant):
    mine = _seed(participant.id, 3)
    theirs = _seed(other_participant.id, 2)

    response = client.post(
        "/notifications/delete-multiple",
        json={"ids": [mine[0], str(mine[1]), *theirs]},
        headers=auth_headers(participant),
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "deletedCount": 2}
    remaining = client.get("/notifications/my", headers=auth_headers(other_participant)).json()
    assert len(remaining) == 2


def test_delete_multiple_rejects_malformed_ids(client, participant):
    headers = auth_headers(participant)

    for payload in ({"ids": []}, {"ids": "1,2"}, {"ids": ["abc"]}, {}, [1, 2]):
        response = client.post("/notifications/delete-multiple", json=payload, headers=headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid notification IDs"


def test_clear_read_only_keeps_unread(client, participant):
    headers = auth_headers(participant)
    ids = _seed(participant.id, 3)
    client.put(f"/notifications/{ids[0]}/read", headers=headers)

    response = client.delete("/notifications/?readOnly=true", headers=headers)
    assert response.json() == {"success": True, "deletedCount": 1}

    response = client.delete("/notifications/", headers=headers)
    assert response.json() == {"success": True, "deletedCount": 2}
    assert client.get("/notifications/my", headers=headers).json() == []
