"""Root conftest — test environment, in-memory database and HTTP client.

Invariants:
    - Environment defaults set before librario.main is imported (get_settings is cached)
    - Every test gets a fresh in-memory SQLite database
    - db_manager swapped for one bound to the test engine; restored afterwards
    - Uploaded covers land in the test's tmp_path

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so every session sees
      the same database (PostgreSQL-specific features not exercised here)
    - bcrypt rounds lowered to 4 to keep registration tests fast
"""

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("MEDIA_DIR", tempfile.mkdtemp(prefix="librario-media-"))
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import librario.infrastructure.database as db_module  # noqa: E402
import librario.models  # noqa: E402,F401
from librario.api.dependencies import get_cover_storage  # noqa: E402
from librario.config import get_settings  # noqa: E402
from librario.db.base import Base  # noqa: E402
from librario.infrastructure.cover_storage import CoverStorage  # noqa: E402
from librario.infrastructure.database import DatabaseSessionManager  # noqa: E402
from librario.infrastructure.security import TokenCodec  # noqa: E402
from librario.main import app  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://", poolclass=StaticPool, echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_manager(test_engine):
    """Session manager bound to the test engine (pool settings skipped)."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
async def test_db(db_manager):
    async with db_manager._session_factory() as session:
        yield session


@pytest.fixture
def cover_storage(tmp_path):
    return CoverStorage(tmp_path, "/media", ["jpg", "jpeg", "png"])


@pytest.fixture
async def client(db_manager, cover_storage):
    """FastAPI test client with the database and cover storage swapped out."""
    original_manager = db_module.db_manager
    db_module.db_manager = db_manager
    app.dependency_overrides[get_cover_storage] = lambda: cover_storage

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def token_codec():
    return TokenCodec.from_settings(get_settings())


@pytest.fixture
def auth_headers(token_codec):
    token = token_codec.issue(1, "ana")
    return {"Authorization": f"Bearer {token}"}
