"""Tests for follow toggling and follower counts."""

import pytest
from sqlalchemy import func, insert, select

from mediaroom.core.errors import NotFoundError, ValidationError
from mediaroom.models import FollowEdge, Notification
from mediaroom.repositories.follow_repo import FollowRepository
from mediaroom.services import social_graph


def _notification_count(db_session) -> int:
    return db_session.execute(select(func.count()).select_from(Notification)).scalar_one()


def test_toggle_follow_is_its_own_inverse(db_session, alice, bob) -> None:
    assert social_graph.toggle_follow(db_session, alice.id, bob.id).following is True
    assert social_graph.is_following(db_session, alice.id, bob.id) is True

    assert social_graph.toggle_follow(db_session, alice.id, bob.id).following is False
    assert social_graph.is_following(db_session, alice.id, bob.id) is False

    assert social_graph.toggle_follow(db_session, alice.id, bob.id).following is True


def test_self_follow_is_rejected(db_session, alice) -> None:
    with pytest.raises(ValidationError):
        social_graph.toggle_follow(db_session, alice.id, alice.id)
    assert social_graph.get_following_count(db_session, alice.id) == 0


def test_following_missing_user_raises_not_found(db_session, alice) -> None:
    with pytest.raises(NotFoundError):
        social_graph.toggle_follow(db_session, alice.id, 4242)


def test_new_follow_notifies_followed_user(db_session, alice, bob) -> None:
    social_graph.toggle_follow(db_session, alice.id, bob.id)

    notification = db_session.execute(select(Notification)).scalar_one()
    assert notification.recipient_id == bob.id
    assert notification.actor_id == alice.id
    assert notification.type == "follow"
    assert notification.reference_id is None

    social_graph.toggle_follow(db_session, alice.id, bob.id)
    assert _notification_count(db_session) == 1


def test_concurrent_duplicate_insert_is_ignored(db_session, alice, bob, mocker) -> None:
    db_session.execute(insert(FollowEdge).values(follower_id=alice.id, followed_id=bob.id))
    db_session.commit()
    # Simulate losing the race: the existence check ran before the other insert.
    mocker.patch.object(FollowRepository, "exists", return_value=False)

    result = social_graph.toggle_follow(db_session, alice.id, bob.id)

    assert result.following is True
    assert social_graph.get_follower_count(db_session, bob.id) == 1
    assert _notification_count(db_session) == 0


def test_follower_lists_and_stats(db_session, alice, bob, carol) -> None:
    social_graph.toggle_follow(db_session, alice.id, carol.id)
    social_graph.toggle_follow(db_session, bob.id, carol.id)
    social_graph.toggle_follow(db_session, carol.id, alice.id)

    followers = social_graph.get_followers(db_session, carol.id)
    assert {entry.username for entry in followers} == {"alice", "bob"}
    assert all(entry.followed_at is not None for entry in followers)

    following = social_graph.get_following(db_session, carol.id)
    assert [entry.id for entry in following] == [alice.id]

    stats = social_graph.get_stats(db_session, carol.id)
    assert stats.followers_count == 2
    assert stats.following_count == 1
