import logging

from src.email_service.base import EmailServiceBase
from src.email_service.templates import EmailTemplates
from src.rsvps.dtos import RsvpParams

logger = logging.getLogger(__name__)


class LoggingEmailService(EmailServiceBase):
    """Logs notifications instead of sending them. Used in test mode."""

    async def send_rsvp_received(
        self,
        rsvp: RsvpParams,
        csv_contents: str,
    ) -> None:
        subject, _, text_body = EmailTemplates.get_rsvp_received(rsvp)
        logger.info(
            "Sending message: %s\n%s\n[%s, %d bytes]",
            subject,
            text_body,
            EmailTemplates.ATTACHMENT_NAME,
            len(csv_contents.encode("utf-8")),
        )

    async def send_rsvp_error(
        self,
        error: Exception,
        rsvp: RsvpParams,
    ) -> None:
        subject, _, text_body = EmailTemplates.get_rsvp_error(error, rsvp)
        logger.info("Sending message: %s\n%s", subject, text_body)
