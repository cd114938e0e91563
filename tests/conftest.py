"""
Shared test fixtures.

Every test gets its own SQLite database file under tmp_path,
its own engine and its own store. Nothing is shared between
tests, so no cleanup is needed beyond disposing the engine.
"""

import uuid

import pytest
import pytest_asyncio

from funds_ledger.config import Settings
from funds_ledger.models.base import (
    create_store_engine,
    init_db,
    make_session_factory,
)
from funds_ledger.services.store import SQLStore


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings pointing at a throwaway SQLite file."""
    monkeypatch.setenv(
        "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    )
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("LOG_FILE", raising=False)
    return Settings()


@pytest_asyncio.fixture
async def engine(settings):
    engine = create_store_engine(settings=settings)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def store(session_factory):
    return SQLStore(session_factory)


def random_owner() -> str:
    return f"user_{uuid.uuid4().hex[:10]}"


@pytest.fixture
def make_user(store):
    """Factory: create a user with a unique username."""
    async def _make_user():
        username = random_owner()
        return await store.create_user(
            username, "Test User", f"{username}@email.com"
        )
    return _make_user


@pytest.fixture
def make_account(store, make_user):
    """Factory: create a fresh user and one account for them."""
    async def _make_account(balance: int = 0, currency: str = "USD"):
        user = await make_user()
        return await store.create_account(user.username, balance, currency)
    return _make_account
