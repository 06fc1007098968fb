import base64
from typing import Protocol

import httpx

from src.email_service.base import EmailServiceBase
from src.email_service.templates import EmailTemplates
from src.rsvps.dtos import RsvpParams

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class ResendEmailConfig(Protocol):
    resend_api_key: str
    emails_from: str
    admin_emails: list[str]


class ResendEmailService(EmailServiceBase):
    def __init__(
        self,
        config: ResendEmailConfig,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ):
        self._config = config
        self._http_client_class = http_client_class

    async def _send(
        self,
        subject: str,
        html_body: str,
        text_body: str,
        attachments: list[dict] | None = None,
    ) -> str:
        """Send email to the admins via Resend and return the Resend email ID."""
        payload = {
            "from": self._config.emails_from,
            "to": list(self._config.admin_emails),
            "reply_to": self._config.emails_from,
            "subject": subject,
            "html": html_body,
            "text": text_body,
        }
        if attachments:
            payload["attachments"] = attachments

        async with self._http_client_class() as client:
            response = await client.post(
                RESEND_EMAILS_URL,
                headers={
                    "Authorization": f"Bearer {self._config.resend_api_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
            )
            response.raise_for_status()
            return response.json().get("id")

    async def send_rsvp_received(
        self,
        rsvp: RsvpParams,
        csv_contents: str,
    ) -> None:
        subject, html_body, text_body = EmailTemplates.get_rsvp_received(rsvp)

        await self._send(
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            attachments=[
                {
                    "filename": EmailTemplates.ATTACHMENT_NAME,
                    "content": base64.b64encode(csv_contents.encode("utf-8")).decode("ascii"),
                }
            ],
        )

    async def send_rsvp_error(
        self,
        error: Exception,
        rsvp: RsvpParams,
    ) -> None:
        subject, html_body, text_body = EmailTemplates.get_rsvp_error(error, rsvp)

        await self._send(
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )
