import html
import json
from dataclasses import asdict, dataclass

from src.rsvps.dtos import RsvpParams


@dataclass
class EmailTemplates:
    RSVP_RECEIVED_SUBJECT = "New RSVP!"
    RSVP_RECEIVED_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <h1 style="color: #d4a373;">Success on new RSVP!</h1>

        <div style="background-color: #fefae0; padding: 20px; border-radius: 8px; margin: 20px 0;">
            <h2 style="color: #bc6c25; margin-top: 0;">{guest_name}</h2>
            <p><strong>Attending:</strong> {attending}</p>
            <p><strong>Plus one:</strong> {plus_one}</p>
        </div>

        <pre style="white-space: pre-wrap; word-break: break-all;">{rsvp_json}</pre>

        <p>The full guest list is attached as {attachment_name}.</p>
    </body>
    </html>
    """

    RSVP_RECEIVED_TEXT = """
    Success on new RSVP!

    Guest: {guest_name}
    Attending: {attending}
    Plus one: {plus_one}

    {rsvp_json}

    The full guest list is attached as {attachment_name}.
    """

    RSVP_ERROR_SUBJECT = "Error on RSVP"
    RSVP_ERROR_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <h1 style="color: #bc6c25;">Error on new RSVP</h1>

        <p>Try to get in touch with {guest_name} or put the RSVP in yourself.</p>

        <p><strong>Error:</strong> {error}</p>

        <pre style="white-space: pre-wrap; word-break: break-all;">{rsvp_json}</pre>
    </body>
    </html>
    """

    RSVP_ERROR_TEXT = """
    Error on new RSVP, try to get in touch with {guest_name} or put it in yourself.

    Error: {error}

    RSVP: {rsvp_json}
    """

    ATTACHMENT_NAME = "rsvp.csv"

    @staticmethod
    def rsvp_json(rsvp: RsvpParams) -> str:
        return json.dumps(asdict(rsvp), indent=2, ensure_ascii=False)

    @staticmethod
    def _escaped(context: dict[str, str]) -> dict[str, str]:
        return {key: html.escape(value) for key, value in context.items()}

    @classmethod
    def get_rsvp_received(cls, rsvp: RsvpParams) -> tuple[str, str, str]:
        """Render the new-RSVP notification.

        Returns: (subject, html_body, text_body)
        """
        context = {
            "guest_name": rsvp.name,
            "attending": "Yes" if rsvp.attending else "No",
            "plus_one": rsvp.plus_one_name if rsvp.plus_one_attending else "No",
            "rsvp_json": cls.rsvp_json(rsvp),
            "attachment_name": cls.ATTACHMENT_NAME,
        }
        return (
            cls.RSVP_RECEIVED_SUBJECT,
            cls.RSVP_RECEIVED_HTML.format(**cls._escaped(context)),
            cls.RSVP_RECEIVED_TEXT.format(**context),
        )

    @classmethod
    def get_rsvp_error(cls, error: Exception, rsvp: RsvpParams) -> tuple[str, str, str]:
        """Render the failed-RSVP notification.

        Returns: (subject, html_body, text_body)
        """
        context = {
            "guest_name": rsvp.name,
            "error": str(error),
            "rsvp_json": cls.rsvp_json(rsvp),
        }
        return (
            cls.RSVP_ERROR_SUBJECT,
            cls.RSVP_ERROR_HTML.format(**cls._escaped(context)),
            cls.RSVP_ERROR_TEXT.format(**context),
        )
