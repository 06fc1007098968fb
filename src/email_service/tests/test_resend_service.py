"""Unit tests for ResendEmailService, mocking the HTTP client."""

import base64

import httpx
import pytest

from src.config.settings import Settings
from src.email_service.resend_service import RESEND_EMAILS_URL, ResendEmailService
from src.rsvps.errors import StoreIOError
from src.rsvps.tests.inmemory_models import create_test_rsvp


class MockResponse:
    def __init__(self, *, json_data=None, status_code=200):
        self._json_data = json_data
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                f"HTTP {self.status_code}",
                request=httpx.Request("POST", RESEND_EMAILS_URL),
                response=httpx.Response(self.status_code),
            )

    def json(self):
        return self._json_data


class MockHttpClient:
    """
    Replaces httpx.AsyncClient as the http_client_class.

    The service calls self._http_client_class() and uses the result as an
    async context manager, so __call__ returns self.
    """

    def __init__(self, response: MockResponse | None = None):
        self.post_calls: list[dict] = []
        self._response = response or MockResponse(json_data={"id": "email-123"})

    def __call__(self):
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def post(self, url, headers=None, json=None):
        self.post_calls.append({"url": url, "headers": headers, "json": json})
        return self._response


def make_config() -> Settings:
    return Settings(
        resend_api_key="re_test",
        emails_from="rsvp@example.com",
        admin_emails=["admin@example.com"],
    )


@pytest.mark.asyncio
async def test_send_rsvp_received():
    client = MockHttpClient()
    service = ResendEmailService(config=make_config(), http_client_class=client)

    await service.send_rsvp_received(create_test_rsvp(), "name\nJohn\n")

    [call] = client.post_calls
    assert call["url"] == RESEND_EMAILS_URL
    assert call["headers"]["Authorization"] == "Bearer re_test"
    payload = call["json"]
    assert payload["from"] == "rsvp@example.com"
    assert payload["to"] == ["admin@example.com"]
    assert payload["subject"] == "New RSVP!"
    [attachment] = payload["attachments"]
    assert attachment["filename"] == "rsvp.csv"
    assert base64.b64decode(attachment["content"]) == b"name\nJohn\n"


@pytest.mark.asyncio
async def test_send_rsvp_error():
    client = MockHttpClient()
    service = ResendEmailService(config=make_config(), http_client_class=client)
    error = StoreIOError("write", OSError(28, "No space left on device"))

    await service.send_rsvp_error(error, create_test_rsvp())

    payload = client.post_calls[0]["json"]
    assert payload["subject"] == "Error on RSVP"
    assert "attachments" not in payload


@pytest.mark.asyncio
async def test_send_failure_raises():
    client = MockHttpClient(MockResponse(status_code=500))
    service = ResendEmailService(config=make_config(), http_client_class=client)

    with pytest.raises(httpx.HTTPStatusError):
        await service.send_rsvp_received(create_test_rsvp(), "")
