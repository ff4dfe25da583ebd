"""Root conftest: shared test configuration."""

import os

import pytest

# Ensure tests never reach a real database through the environment
os.environ.setdefault("DATABASE_URL", "sqlite:///./hanoi-scores-test.db")


@pytest.fixture(autouse=True)
def _fresh_settings():
    """get_settings() is lru_cached; every test sees its own environment."""
    from hanoi_scores.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
