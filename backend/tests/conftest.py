"""
AddrNotes Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    ├── memory_store:   InMemoryNoteStore, a dict-backed NoteStore double
    ├── note_service:   NoteService over memory_store
    ├── sql_store:      SqlNoteStore on a fresh in-memory SQLite database
    ├── test_client:    HTTPX AsyncClient, store overridden with memory_store
    └── legacy_client:  same, app built with legacy (all-500) status codes
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LEGACY_STATUS_CODES"] = "false"

import copy
from typing import Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from addrnotes.database import Base
from addrnotes.dependencies import get_note_store
from addrnotes.main import create_app
from addrnotes.models.note import NoteRow  # noqa: F401  (registers the table)
from addrnotes.services.keys import StorageKey
from addrnotes.services.note_service import NoteService
from addrnotes.services.records import NoteRecord
from addrnotes.services.sql_store import SqlNoteStore
from addrnotes.services.store_base import NoteStore


# Valid Base58 addresses (34 characters)
ADDR_A = "1BoatSLRHtKNngkdXEeobR76b53LETtpyT"
ADDR_B = "3J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy"
ADDR_C = "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"


class InMemoryNoteStore(NoteStore):
    """
    Dict-backed NoteStore used in place of the SQL store.

    Hands out copies, so callers never mutate stored state.
    """

    def __init__(self):
        self.records: Dict[StorageKey, NoteRecord] = {}
        self.healthy = True

    async def get(self, key: StorageKey) -> Optional[NoteRecord]:
        record = self.records.get(key)
        return copy.deepcopy(record) if record is not None else None

    async def save(self, key: StorageKey, record: NoteRecord) -> None:
        self.records[key] = copy.deepcopy(record)

    async def delete(self, key: StorageKey) -> None:
        self.records.pop(key, None)

    async def query(self, kind: str, order_by: str) -> List[Tuple[StorageKey, NoteRecord]]:
        matches = [(k, copy.deepcopy(r)) for k, r in self.records.items() if k.kind == kind]
        # Missing field first, then ascending field value, then key name
        matches.sort(key=lambda kr: (order_by in kr[1], kr[1].get(order_by, 0), kr[0].name))
        return matches

    async def health_check(self) -> bool:
        return self.healthy


@pytest.fixture
def memory_store():
    return InMemoryNoteStore()


@pytest.fixture
def note_service(memory_store):
    return NoteService(memory_store)


@pytest_asyncio.fixture
async def sql_store():
    """
    SqlNoteStore on a private in-memory SQLite database.

    StaticPool keeps the single connection alive, so every session the
    store opens sees the same database.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlNoteStore(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()


async def _client_for(app, store):
    app.dependency_overrides[get_note_store] = lambda: store
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    Async HTTP client talking to a fresh app whose store is memory_store.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async with await _client_for(create_app(legacy_status_codes=False), memory_store) as client:
        yield client


@pytest_asyncio.fixture
async def legacy_client(memory_store):
    async with await _client_for(create_app(legacy_status_codes=True), memory_store) as client:
        yield client
