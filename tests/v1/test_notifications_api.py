"""Tests for notification inbox endpoints."""

from fastapi import status


def _like(client, content_id, headers) -> None:
    client.post(f"/api/v1/media/{content_id}/like", json={"action": "like"}, headers=headers)


def test_interactions_fill_the_inbox(
    client, alice, bob, alice_headers, bob_headers, make_content
) -> None:
    content_id = make_content(alice).id
    client.post(f"/api/v1/users/{alice.id}/follow", headers=bob_headers)
    _like(client, content_id, bob_headers)
    client.post(
        f"/api/v1/media/{content_id}/comments", json={"body": "wow"}, headers=bob_headers
    )

    response = client.get("/api/v1/notifications", headers=alice_headers)

    assert response.status_code == status.HTTP_200_OK
    items = response.json()
    assert [item["type"] for item in items] == ["comment", "like", "follow"]
    assert items[0]["referenceId"] == content_id
    assert items[2]["referenceId"] is None
    assert all(item["actorUsername"] == "bob" for item in items)
    assert all(item["isRead"] is False for item in items)


def test_self_interactions_do_not_notify(client, alice, alice_headers, make_content) -> None:
    content_id = make_content(alice).id
    _like(client, content_id, alice_headers)

    assert client.get("/api/v1/notifications", headers=alice_headers).json() == []


def test_unread_count_and_mark_read(client, alice, bob_headers, alice_headers, make_content) -> None:
    content_id = make_content(alice).id
    _like(client, content_id, bob_headers)
    _like(client, content_id, bob_headers)

    assert client.get("/api/v1/notifications/unread-count", headers=alice_headers).json() == {
        "count": 2
    }

    first_id = client.get("/api/v1/notifications", headers=alice_headers).json()[0]["id"]
    for _ in range(2):
        response = client.put(f"/api/v1/notifications/{first_id}/read", headers=alice_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True}

    unread = client.get(
        "/api/v1/notifications", params={"unread": "true"}, headers=alice_headers
    ).json()
    assert len(unread) == 1
    assert unread[0]["id"] != first_id

    read_all = client.put("/api/v1/notifications/read-all", headers=alice_headers)
    assert read_all.json() == {"success": True, "updated": 1}
    assert client.get("/api/v1/notifications/unread-count", headers=alice_headers).json() == {
        "count": 0
    }


def test_cannot_read_someone_elses_notification(
    client, alice, alice_headers, bob_headers, make_content
) -> None:
    content_id = make_content(alice).id
    _like(client, content_id, bob_headers)
    notification_id = client.get("/api/v1/notifications", headers=alice_headers).json()[0]["id"]

    response = client.put(f"/api/v1/notifications/{notification_id}/read", headers=bob_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_listing_for_another_user_is_forbidden(client, bob, alice_headers) -> None:
    response = client.get(
        "/api/v1/notifications", params={"userId": bob.id}, headers=alice_headers
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_notifications_require_auth(client) -> None:
    assert client.get("/api/v1/notifications").status_code == status.HTTP_401_UNAUTHORIZED
