"""
Notekeeper Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── note_store:      In-memory NoteStore (no database)
    ├── note_service:    NoteService over note_store
    ├── failing_store:   NoteStore mock whose every call raises DatabaseError
    ├── sqlite_engine:   Async engine on a fresh in-memory SQLite database
    ├── sqlite_session:  AsyncSession on sqlite_engine
    ├── mock_db_session: Mock AsyncSession for fault injection
    ├── test_client:     HTTPX AsyncClient wired to the app with note_store
    └── sql_test_client: HTTPX AsyncClient using the real session/store chain
                         on sqlite_engine
"""

import os

# Set before any notekeeper import so Settings() and the engine pick them up
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notekeeper.database import Base
from notekeeper.exceptions import DatabaseError
from notekeeper.models import note as note_model  # noqa: F401
from notekeeper.schemas.note import NoteResponse
from notekeeper.services.note_service import NoteService
from notekeeper.services.note_store import NoteStore


class InMemoryNoteStore(NoteStore):
    """NoteStore keeping rows in a dict, ids assigned from 1 upwards."""

    def __init__(self):
        self.rows: Dict[int, NoteResponse] = {}
        self._next_id = 1

    async def add(self, title, text, datetime) -> NoteResponse:
        note = NoteResponse(id=self._next_id, title=title, text=text, datetime=datetime)
        self.rows[note.id] = note
        self._next_id += 1
        return note

    async def list(self) -> List[NoteResponse]:
        return list(self.rows.values())

    async def get(self, note_id) -> Optional[NoteResponse]:
        return self.rows.get(note_id)

    async def replace(self, note_id, title, text, datetime) -> Optional[NoteResponse]:
        if note_id not in self.rows:
            return None
        note = NoteResponse(id=note_id, title=title, text=text, datetime=datetime)
        self.rows[note_id] = note
        return note

    async def remove(self, note_id) -> int:
        return 1 if self.rows.pop(note_id, None) is not None else 0


# ══════════════════════════════════════════════════════════════════════════
# Stores and Services
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def note_store():
    return InMemoryNoteStore()


@pytest.fixture
def note_service(note_store):
    return NoteService(note_store)


@pytest.fixture
def failing_store():
    """
    A NoteStore whose every method raises DatabaseError.

    Used to check that faults become StoreFault results / HTTP 500.
    """
    store = MagicMock(spec=NoteStore)
    error = DatabaseError(context={"operation": "test"})
    for name in ("add", "list", "get", "replace", "remove"):
        setattr(store, name, AsyncMock(side_effect=error))
    return store


# ══════════════════════════════════════════════════════════════════════════
# Database Sessions
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def sqlite_engine():
    """
    An async engine on a private in-memory SQLite database with the notes table.

    StaticPool keeps the single in-memory connection alive for the whole test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sqlite_session(sqlite_engine):
    factory = async_sessionmaker(sqlite_engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        await SqlAlchemyNoteStore(mock_db_session).list()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(note_store):
    """
    Provides an async HTTP test client for endpoint testing.

    The app's get_note_store dependency is replaced by note_store, so no
    database session is ever opened.

    Usage:
        async def test_read_all(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from notekeeper.main import app
    from notekeeper.routes.notes import get_note_store

    app.dependency_overrides[get_note_store] = lambda: note_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def sql_test_client(sqlite_engine, monkeypatch):
    """
    HTTP client where requests go through get_db_session and
    SqlAlchemyNoteStore, committing to sqlite_engine like production does.
    """
    from notekeeper import database
    from notekeeper.main import app

    monkeypatch.setattr(
        database,
        "async_session_factory",
        async_sessionmaker(sqlite_engine, class_=AsyncSession, expire_on_commit=False),
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
