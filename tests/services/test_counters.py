"""Tests for the atomic counter store."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from mediaroom.core.errors import NotFoundError, UpstreamError, ValidationError
from mediaroom.db.session import build_engine, create_tables
from mediaroom.models import Content, User
from mediaroom.services import counters
from mediaroom.services.counters import CounterField


def _stored(db_session, content_id: int, column) -> int:
    return db_session.execute(select(column).where(Content.id == content_id)).scalar_one()


def test_increment_returns_new_value(db_session, alice, make_content) -> None:
    content = make_content(alice)

    assert counters.increment(db_session, content.id, CounterField.LIKES) == 1
    assert counters.increment(db_session, content.id, "like_count") == 2
    assert _stored(db_session, content.id, Content.like_count) == 2


def test_decrement_is_clamped_at_zero(db_session, alice, make_content) -> None:
    content = make_content(alice, like_count=1)

    assert counters.decrement(db_session, content.id, CounterField.LIKES) == 0
    assert counters.decrement(db_session, content.id, CounterField.LIKES) == 0
    assert _stored(db_session, content.id, Content.like_count) == 0


def test_interleaved_likes_track_clamped_difference(db_session, alice, make_content) -> None:
    content = make_content(alice)
    expected = 0
    for step in ["like", "unlike", "unlike", "like", "like", "unlike", "like"]:
        if step == "like":
            expected += 1
            value = counters.increment(db_session, content.id, CounterField.LIKES)
        else:
            expected = max(0, expected - 1)
            value = counters.decrement(db_session, content.id, CounterField.LIKES)
        assert value == expected

    assert _stored(db_session, content.id, Content.like_count) == 2


def test_view_counter_is_independent(db_session, alice, make_content) -> None:
    content = make_content(alice, like_count=4)

    assert counters.increment(db_session, content.id, CounterField.VIEWS) == 1
    assert _stored(db_session, content.id, Content.like_count) == 4


def test_missing_content_raises_not_found(db_session) -> None:
    with pytest.raises(NotFoundError):
        counters.increment(db_session, 999, CounterField.LIKES)
    with pytest.raises(NotFoundError):
        counters.decrement(db_session, 999, CounterField.VIEWS)


@pytest.mark.parametrize("operation", [counters.increment, counters.decrement])
def test_unknown_field_is_a_validation_error(db_session, alice, make_content, operation) -> None:
    content = make_content(alice, like_count=2)

    with pytest.raises(ValidationError) as excinfo:
        operation(db_session, content.id, "comment_count")

    assert excinfo.value.kind == "validation_error"
    assert _stored(db_session, content.id, Content.like_count) == 2


def test_datastore_outage_is_retryable_upstream_error(
    db_session, alice, make_content, mocker
) -> None:
    content = make_content(alice, like_count=3)
    content_id = content.id
    execute = mocker.patch.object(
        db_session,
        "execute",
        side_effect=OperationalError("UPDATE content", {}, Exception("database is locked")),
    )

    with pytest.raises(UpstreamError) as excinfo:
        counters.increment(db_session, content_id, CounterField.LIKES)

    assert excinfo.value.retryable is True
    assert execute.call_count == 1

    # The failed like must not have moved the stored counter.
    mocker.stopall()
    assert _stored(db_session, content_id, Content.like_count) == 3


def test_concurrent_likes_are_never_lost(tmp_path) -> None:
    engine = build_engine(
        f"sqlite:///{tmp_path / 'counters.db'}",
        connect_args={"timeout": 30},
        pool_size=16,
    )
    create_tables(engine)
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    with SessionLocal() as setup:
        author = User(username="busy", display_name="Busy Author")
        setup.add(author)
        setup.flush()
        post = Content(author_id=author.id, kind="text", title="Busy post", like_count=0, view_count=0)
        setup.add(post)
        setup.commit()
        content_id = post.id

    def run(operation) -> int:
        with SessionLocal() as session:
            return operation(session, content_id, CounterField.LIKES)

    def stored() -> int:
        with SessionLocal() as session:
            return _stored(session, content_id, Content.like_count)

    try:
        with ThreadPoolExecutor(max_workers=16) as pool:
            # Every concurrent like observes a distinct new value.
            returned = list(pool.map(lambda _: run(counters.increment), range(200)))
            assert sorted(returned) == list(range(1, 201))
            assert stored() == 200

            # Mixed likes and unlikes that never reach the floor cancel out exactly.
            mixed = [counters.increment, counters.decrement] * 50
            list(pool.map(run, mixed))
            assert stored() == 200

            # More unlikes than likes stop at zero.
            list(pool.map(lambda _: run(counters.decrement), range(250)))
            assert stored() == 0
    finally:
        engine.dispose()
