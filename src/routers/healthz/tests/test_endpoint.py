import pytest

from src.rsvps.dependencies import get_record_store
from src.rsvps.tests.inmemory_models import BrokenRecordStore, create_test_rsvps


@pytest.mark.asyncio
async def test_health_check(client):
    """Test the health check endpoint returns healthy status."""
    response = await client.get("/healthz/")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["records"] == 0
    assert data["version"] == "0.1.0"


@pytest.mark.asyncio
async def test_health_check_counts_records(client, csv_store):
    """Test the health check reports how many records the file holds."""
    for rsvp in create_test_rsvps(3):
        csv_store.upsert(rsvp)

    response = await client.get("/healthz/")

    assert response.status_code == 200
    assert response.json()["records"] == 3


@pytest.mark.asyncio
async def test_health_check_unreadable_file(client_factory):
    """Test the health check fails when the RSVP file cannot be read."""
    async with client_factory({get_record_store: BrokenRecordStore}) as client:
        response = await client.get("/healthz/")

    assert response.status_code == 500
    assert response.json()["detail"] == "Could not access the RSVP list"


@pytest.mark.asyncio
async def test_root_endpoint(client):
    """Test the root endpoint returns welcome message."""
    response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Welcome to the CSV RSVP API"
