"""DatabasePool: construction, verification, session error mapping.

Invariants:
    - Bad URL or missing driver -> PoolInitError at construction
    - Unreachable database -> PoolInitError from verify()/init_db()
    - Any SQLAlchemy error inside session() -> StorageError with the operation name
"""

import pytest
from sqlalchemy import inspect, text

from hanoi_scores.core.errors import PoolInitError, StorageError
from hanoi_scores.infrastructure.database import DatabasePool, init_db


def _sqlite_url(path) -> str:
    return f"sqlite:///{path}"


def test_from_url_rejects_unknown_dialect():
    """An unknown URL scheme fails at construction with PoolInitError."""
    with pytest.raises(PoolInitError) as exc_info:
        DatabasePool.from_url("notadb://nowhere/scores")
    assert "Failed to create pool" in exc_info.value.to_text()


def test_verify_unreachable_database(tmp_path):
    """verify() turns a failed connection into PoolInitError."""
    pool = DatabasePool.from_url(_sqlite_url(tmp_path / "missing" / "x.db"))
    with pytest.raises(PoolInitError) as exc_info:
        pool.verify()
    assert "Database unreachable" in exc_info.value.to_text()
    pool.dispose()


def test_init_db_fails_fast_when_unreachable(tmp_path):
    """init_db never returns a pool that cannot connect."""
    with pytest.raises(PoolInitError):
        init_db(_sqlite_url(tmp_path / "missing" / "x.db"))


def test_init_db_creates_scores_table(tmp_path):
    """Table bootstrap creates the scores table."""
    pool = init_db(_sqlite_url(tmp_path / "scores.db"), pool_size=2)
    try:
        assert inspect(pool.engine).has_table("scores")
    finally:
        pool.dispose()


def test_init_db_can_skip_table_bootstrap(tmp_path):
    """create_tables=False leaves the schema untouched."""
    pool = init_db(_sqlite_url(tmp_path / "scores.db"), create_tables=False)
    try:
        assert not inspect(pool.engine).has_table("scores")
    finally:
        pool.dispose()


def test_session_maps_query_error_to_storage_error(tmp_path):
    """SQL errors inside session() leave as StorageError."""
    pool = DatabasePool.from_url(_sqlite_url(tmp_path / "scores.db"))
    with pytest.raises(StorageError) as exc_info:
        with pool.session("select") as session:
            session.execute(text("SELECT * FROM no_such_table"))
    err = exc_info.value
    assert err.operation == "select"
    assert err.http_status == 500
    assert "no such table" in err.to_text()
    pool.dispose()


def test_session_lets_non_database_errors_through(tmp_path):
    """Non-SQLAlchemy exceptions are not rewrapped."""
    pool = DatabasePool.from_url(_sqlite_url(tmp_path / "scores.db"))
    with pytest.raises(KeyError):
        with pool.session() as session:
            session.execute(text("SELECT 1"))
            raise KeyError("not a storage problem")
    pool.dispose()
