from dataclasses import asdict

import pytest

from src.rsvps.dependencies import get_notifier, get_record_store
from src.rsvps.schemas import NAME_MAX_LENGTH, TEXT_MAX_LENGTH
from src.rsvps.tests.inmemory_models import (
    BrokenRecordStore,
    FailingEmailService,
    InMemoryEmailService,
    create_test_add,
    create_test_rsvp,
)
from src.rsvps.urls import SUBMIT_RSVP_URL


@pytest.mark.asyncio
async def test_submit_rsvp_new_guest(client, csv_store):
    """Test submitting an RSVP for a name not on the list stores it."""
    rsvp = create_test_rsvp()

    response = await client.post(SUBMIT_RSVP_URL, json=asdict(rsvp))

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "John"
    assert data["attending"] is True
    assert data["plus_one_name"] == "Johnson"
    assert data["created_at"] == data["updated_at"]
    assert len(csv_store.list_all()) == 1


@pytest.mark.asyncio
async def test_submit_rsvp_replaces_earlier_response(client, csv_store):
    """Test a second RSVP under the same name replaces the first."""
    await client.post(SUBMIT_RSVP_URL, json=asdict(create_test_rsvp()))

    response = await client.post(
        SUBMIT_RSVP_URL,
        json={"name": " john ", "attending": False, "comments": "Sorry!"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "John"
    assert data["attending"] is False
    assert data["plus_one_name"] == ""
    assert data["comments"] == "Sorry!"

    records = csv_store.list_all()
    assert len(records) == 1
    assert records[0].attending is False


@pytest.mark.asyncio
async def test_submit_rsvp_for_invitee(client, csv_store):
    """Test an invitee's RSVP keeps the invitee's creation time."""
    invitee = csv_store.insert(create_test_add())

    response = await client.post(SUBMIT_RSVP_URL, json=asdict(create_test_rsvp()))

    assert response.status_code == 200
    records = csv_store.list_all()
    assert len(records) == 1
    assert records[0].created_at == invitee.created_at
    assert records[0].attending is True


@pytest.mark.asyncio
async def test_submit_rsvp_emails_admins(client, inmemory_email_service, csv_store):
    """Test a stored RSVP is emailed to the admins with the whole file attached."""
    rsvp = create_test_rsvp()

    await client.post(SUBMIT_RSVP_URL, json=asdict(rsvp))

    assert len(inmemory_email_service.sent_emails) == 1
    email = inmemory_email_service.sent_emails[0]
    assert email["type"] == "rsvp_received"
    assert email["rsvp"] == rsvp
    assert email["csv_contents"] == csv_store.dump()


@pytest.mark.asyncio
async def test_submit_rsvp_email_failure_still_succeeds(client_factory, csv_store):
    """Test a failing mail server does not fail the RSVP."""
    email_service = FailingEmailService()
    overrides = {
        get_record_store: lambda: csv_store,
        get_notifier: lambda: email_service,
    }

    async with client_factory(overrides) as client:
        response = await client.post(SUBMIT_RSVP_URL, json=asdict(create_test_rsvp()))

    assert response.status_code == 200
    assert email_service.attempts == 1
    assert len(csv_store.list_all()) == 1


@pytest.mark.asyncio
async def test_submit_rsvp_store_failure(client_factory):
    """Test a store failure returns 500 and emails the admins about the error."""
    email_service = InMemoryEmailService()
    overrides = {
        get_record_store: BrokenRecordStore,
        get_notifier: lambda: email_service,
    }

    async with client_factory(overrides) as client:
        response = await client.post(SUBMIT_RSVP_URL, json=asdict(create_test_rsvp()))

    assert response.status_code == 500
    assert response.json()["detail"] == "Could not access the RSVP list"
    assert [email["type"] for email in email_service.sent_emails] == ["rsvp_error"]


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "])
async def test_submit_rsvp_requires_name(client, name):
    """Test a blank name is rejected before reaching the store."""
    response = await client.post(SUBMIT_RSVP_URL, json={"name": name})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_submit_rsvp_defaults_missing_fields(client):
    """Test fields left out of the form are stored empty or false."""
    response = await client.post(SUBMIT_RSVP_URL, json={"name": "Jane"})

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == ""
    assert data["attending"] is False
    assert data["plus_one_attending"] is False
    assert data["comments"] == ""


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field, length",
    [
        ("name", NAME_MAX_LENGTH + 1),
        ("plus_one_name", NAME_MAX_LENGTH + 1),
        ("comments", TEXT_MAX_LENGTH + 1),
        ("comments", 200_000),
    ],
)
async def test_submit_rsvp_oversized_field(client, csv_store, field, length):
    """Test overlong fields are rejected and the guest list stays readable."""
    csv_store.upsert(create_test_rsvp(name="Jane"))
    rsvp = asdict(create_test_rsvp())
    rsvp[field] = "x" * length

    response = await client.post(SUBMIT_RSVP_URL, json=rsvp)

    assert response.status_code == 422
    assert [record.name for record in csv_store.list_all()] == ["Jane"]


@pytest.mark.asyncio
async def test_submit_rsvp_longest_fields_accepted(client, csv_store):
    rsvp = asdict(create_test_rsvp(name="x" * NAME_MAX_LENGTH, comments="y" * TEXT_MAX_LENGTH))

    response = await client.post(SUBMIT_RSVP_URL, json=rsvp)

    assert response.status_code == 200
    assert csv_store.list_all()[0].comments == "y" * TEXT_MAX_LENGTH
