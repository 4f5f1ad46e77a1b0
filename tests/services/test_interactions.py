"""Tests for likes and comments."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from mediaroom.core.errors import NotFoundError, ValidationError
from mediaroom.models import Content, Notification
from mediaroom.repositories.notification_repo import NotificationRepository
from mediaroom.services import interactions
from mediaroom.services.interactions import LikeAction


def _notifications(db_session) -> list[Notification]:
    return list(db_session.execute(select(Notification)).scalars())


def test_like_then_unlike(db_session, alice, bob, make_content) -> None:
    content = make_content(alice)

    liked = interactions.toggle_like(db_session, content.id, bob.id, LikeAction.LIKE)
    assert liked.action == "liked"
    assert liked.like_count == 1

    unliked = interactions.toggle_like(db_session, content.id, bob.id, "unlike")
    assert unliked.action == "unliked"
    assert unliked.like_count == 0


def test_unlike_never_goes_negative(db_session, alice, bob, make_content) -> None:
    content = make_content(alice)

    result = interactions.toggle_like(db_session, content.id, bob.id, "unlike")

    assert result.like_count == 0


def test_like_notifies_author_but_not_self(db_session, alice, bob, make_content) -> None:
    content = make_content(alice)

    interactions.toggle_like(db_session, content.id, alice.id, "like")
    assert _notifications(db_session) == []

    interactions.toggle_like(db_session, content.id, bob.id, "like")
    (notification,) = _notifications(db_session)
    assert notification.type == "like"
    assert notification.recipient_id == alice.id
    assert notification.reference_id == content.id


def test_unlike_does_not_notify(db_session, alice, bob, make_content) -> None:
    content = make_content(alice, like_count=3)

    interactions.toggle_like(db_session, content.id, bob.id, "unlike")

    assert _notifications(db_session) == []


def test_like_invalid_action(db_session, alice, make_content) -> None:
    content = make_content(alice)

    with pytest.raises(ValidationError):
        interactions.toggle_like(db_session, content.id, alice.id, "love")


def test_like_missing_content(db_session, alice) -> None:
    with pytest.raises(NotFoundError):
        interactions.toggle_like(db_session, 999, alice.id, "like")


def test_like_survives_notification_failure(db_session, alice, bob, make_content, mocker) -> None:
    content = make_content(alice)
    mocker.patch.object(NotificationRepository, "create", side_effect=SQLAlchemyError("boom"))

    result = interactions.toggle_like(db_session, content.id, bob.id, "like")

    assert result.like_count == 1
    stored = db_session.execute(
        select(Content.like_count).where(Content.id == content.id)
    ).scalar_one()
    assert stored == 1


def test_comment_on_own_content_creates_no_notification(
    db_session, alice, make_content
) -> None:
    content = make_content(alice)

    comment = interactions.create_comment(db_session, content.id, alice.id, "  first!  ")

    assert comment.body == "first!"
    assert comment.author_username == "alice"
    assert _notifications(db_session) == []


def test_comment_on_others_content_notifies_once(db_session, alice, bob, make_content) -> None:
    content = make_content(alice)

    interactions.create_comment(db_session, content.id, bob.id, "Nice shot")

    (notification,) = _notifications(db_session)
    assert notification.type == "comment"
    assert notification.recipient_id == alice.id
    assert notification.actor_id == bob.id
    assert notification.reference_id == content.id


@pytest.mark.parametrize("body", ["", "   ", "x" * 1001])
def test_comment_body_validation(db_session, alice, make_content, body) -> None:
    content = make_content(alice)

    with pytest.raises(ValidationError):
        interactions.create_comment(db_session, content.id, alice.id, body)


def test_comment_at_length_limit_is_accepted(db_session, alice, make_content) -> None:
    content = make_content(alice)

    comment = interactions.create_comment(db_session, content.id, alice.id, "y" * 1000)

    assert len(comment.body) == 1000


def test_comment_on_missing_content(db_session, alice) -> None:
    with pytest.raises(NotFoundError):
        interactions.create_comment(db_session, 404, alice.id, "hello")


def test_comment_survives_notification_failure(
    db_session, alice, bob, make_content, mocker
) -> None:
    content = make_content(alice)
    mocker.patch.object(NotificationRepository, "create", side_effect=SQLAlchemyError("boom"))

    comment = interactions.create_comment(db_session, content.id, bob.id, "still here")

    assert comment.body == "still here"
    assert len(interactions.list_comments(db_session, content.id)) == 1


def test_list_comments_oldest_first(db_session, alice, bob, make_content) -> None:
    content = make_content(alice)
    interactions.create_comment(db_session, content.id, bob.id, "one")
    interactions.create_comment(db_session, content.id, alice.id, "two")

    comments = interactions.list_comments(db_session, content.id)

    assert [c.body for c in comments] == ["one", "two"]
    assert [c.author_username for c in comments] == ["bob", "alice"]


def test_list_comments_missing_content(db_session) -> None:
    with pytest.raises(NotFoundError):
        interactions.list_comments(db_session, 31337)


def test_comment_count_is_derived_on_read(db_session, alice, bob, make_content) -> None:
    from mediaroom.repositories.content_repo import ContentRepository

    content = make_content(alice)
    interactions.create_comment(db_session, content.id, bob.id, "a")
    interactions.create_comment(db_session, content.id, bob.id, "b")

    detail = ContentRepository(db_session).find_by_id(content.id)

    assert detail.comment_count == 2
    count = db_session.execute(select(func.count()).select_from(Notification)).scalar_one()
    assert count == 2
