import asyncio
import smtplib
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

from src.email_service.base import EmailServiceBase
from src.email_service.templates import EmailTemplates
from src.rsvps.dtos import RsvpParams


class SMTPEmailConfig(Protocol):
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    emails_from: str
    admin_emails: list[str]


class SMTPEmailService(EmailServiceBase):
    def __init__(self, config: SMTPEmailConfig, smtp_class: type[smtplib.SMTP] = smtplib.SMTP):
        self.host = config.smtp_host
        self.port = config.smtp_port
        self.username = config.smtp_user
        self.password = config.smtp_password
        self.from_address = config.emails_from
        self.admin_addresses = list(config.admin_emails)
        self._smtp_class = smtp_class

    def _create_message(
        self,
        subject: str,
        html_body: str,
        text_body: str,
        attachment: tuple[str, str] | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("mixed")
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["Reply-To"] = self.from_address
        msg["To"] = ", ".join(self.admin_addresses)

        body = MIMEMultipart("alternative")
        body.attach(MIMEText(text_body, "plain"))
        body.attach(MIMEText(html_body, "html"))
        msg.attach(body)

        if attachment:
            filename, contents = attachment
            part = MIMEApplication(contents.encode("utf-8"), _subtype="csv")
            part.add_header("Content-Disposition", "attachment", filename=filename)
            msg.attach(part)

        return msg

    def _send(self, msg: MIMEMultipart) -> None:
        with self._smtp_class(self.host, self.port) as server:
            if self.username and self.password:
                server.starttls()
                server.login(self.username, self.password)
            server.send_message(msg)

    async def send_rsvp_received(
        self,
        rsvp: RsvpParams,
        csv_contents: str,
    ) -> None:
        subject, html_body, text_body = EmailTemplates.get_rsvp_received(rsvp)

        msg = self._create_message(
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            attachment=(EmailTemplates.ATTACHMENT_NAME, csv_contents),
        )

        # smtplib blocks, keep it off the event loop
        await asyncio.to_thread(self._send, msg)

    async def send_rsvp_error(
        self,
        error: Exception,
        rsvp: RsvpParams,
    ) -> None:
        subject, html_body, text_body = EmailTemplates.get_rsvp_error(error, rsvp)

        msg = self._create_message(
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )

        await asyncio.to_thread(self._send, msg)
