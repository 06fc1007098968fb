from contextlib import asynccontextmanager
from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.rsvps.dependencies import get_notifier, get_record_store
from src.rsvps.repository.csv_store import CsvRecordStore
from src.rsvps.tests.inmemory_models import InMemoryEmailService

FIXED_NOW = datetime(2024, 6, 1, 12, 30, 15, 123456, tzinfo=UTC)


@pytest.fixture
def csv_path(tmp_path):
    """Path of an RSVP file that does not exist yet."""
    return tmp_path / "rsvp.csv"


@pytest.fixture
def csv_store(csv_path):
    """Create a CSV store over a fresh file with a fixed clock."""
    store = CsvRecordStore.open(csv_path, clock=lambda: FIXED_NOW)
    yield store
    store.close()


@pytest.fixture
def inmemory_email_service():
    """Create a fresh in-memory email service for each test."""
    return InMemoryEmailService()


@pytest.fixture
def client_factory():
    """Build test clients with FastAPI dependency overrides applied."""

    @asynccontextmanager
    async def _client_factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return _client_factory


@pytest.fixture
async def client(client_factory, csv_store, inmemory_email_service):
    """Create a test client wired to a temporary CSV store."""
    overrides = {
        get_record_store: lambda: csv_store,
        get_notifier: lambda: inmemory_email_service,
    }
    async with client_factory(overrides) as ac:
        yield ac
