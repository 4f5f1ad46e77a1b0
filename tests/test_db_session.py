# tests/test_db_session.py
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from mediaroom.db.session import build_engine, create_tables
from mediaroom.models import Comment


def test_sqlite_engine_enforces_foreign_keys(engine) -> None:
    with engine.connect() as connection:
        assert connection.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1


def test_orphan_comment_is_rejected(db_session, alice) -> None:
    db_session.add(Comment(content_id=999, author_id=alice.id, body="nobody home"))

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_file_engine_is_shareable_across_threads(tmp_path) -> None:
    engine = build_engine(f"sqlite:///{tmp_path / 'shared.db'}", connect_args={"timeout": 5})
    try:
        create_tables(engine)
        assert {"app_user", "content", "comment", "follow_edge", "notification"} <= set(
            inspect(engine).get_table_names()
        )

        with engine.connect() as connection:
            with ThreadPoolExecutor(max_workers=1) as pool:
                result = pool.submit(lambda: connection.exec_driver_sql("SELECT 1").scalar())
                assert result.result() == 1
    finally:
        engine.dispose()
