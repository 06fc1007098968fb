import logging

from src.config.settings import Settings, settings
from src.email_service.base import EmailServiceBase
from src.email_service.logging_service import LoggingEmailService
from src.email_service.resend_service import ResendEmailService
from src.email_service.smtp_service import SMTPEmailService
from src.email_service.templates import EmailTemplates

logger = logging.getLogger(__name__)


def get_email_service(config: Settings = settings) -> EmailServiceBase:
    if config.test_mode:
        return LoggingEmailService()
    if not config.admin_emails:
        logger.warning("No admin emails configured, notifications will only be logged")
        return LoggingEmailService()
    if config.resend_api_key:
        return ResendEmailService(config=config)
    return SMTPEmailService(config=config)


__all__ = [
    "EmailServiceBase",
    "EmailTemplates",
    "LoggingEmailService",
    "get_email_service",
]
