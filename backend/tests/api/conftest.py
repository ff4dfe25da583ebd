"""API test fixtures: file-backed SQLite pool + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database under tmp_path
    - get_database / get_workers overridden; the lifespan is not run
    - Overrides cleared after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine

from hanoi_scores.db.base import Base
from hanoi_scores.infrastructure.database import DatabasePool, get_database
from hanoi_scores.infrastructure.workers import WorkerPool, get_workers
from hanoi_scores.main import app
from hanoi_scores.models.score import Score  # noqa: F401

SCORES_URL = "/hanoi/api/v1/scores"


@pytest.fixture
def test_engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'scores.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def test_pool(test_engine):
    return DatabasePool(test_engine)


@pytest.fixture
def workers():
    return WorkerPool(4)


@pytest.fixture
async def client(test_pool, workers):
    """FastAPI test client with pool dependencies overridden."""
    app.dependency_overrides[get_database] = lambda: test_pool
    app.dependency_overrides[get_workers] = lambda: workers

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


def score_payload(**overrides) -> dict:
    payload = {"player": "ada", "n_turn": 12, "disks": 7, "median_time": 340}
    payload.update(overrides)
    return payload
