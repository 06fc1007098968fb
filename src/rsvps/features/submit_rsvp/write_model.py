"""Write model for the submit RSVP feature.

Stores the RSVP and notifies the admins. Notification failures are logged
and never change the outcome of the store operation.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from src.email_service.base import EmailServiceBase
from src.rsvps.dtos import RsvpParams, RsvpRecord
from src.rsvps.errors import RecordStoreError
from src.rsvps.repository.store import RecordStore

logger = logging.getLogger(__name__)


class SubmitRsvpWriteModel(ABC):
    """Abstract base class for RSVP submission."""

    @abstractmethod
    async def submit_rsvp(self, params: RsvpParams) -> RsvpRecord:
        """Create or replace the RSVP for params.name.

        Raises:
            RecordStoreError: if the RSVP could not be stored
        """
        raise NotImplementedError


class CsvSubmitRsvpWriteModel(SubmitRsvpWriteModel):
    """Submits RSVPs to a RecordStore and emails the admins."""

    def __init__(
        self,
        store: RecordStore,
        email_service: EmailServiceBase | None = None,
    ) -> None:
        self.store = store
        self.email_service = email_service

    async def submit_rsvp(self, params: RsvpParams) -> RsvpRecord:
        logger.info("New RSVP! %r", params)
        try:
            record = await asyncio.to_thread(self.store.upsert, params)
        except RecordStoreError as error:
            await self._notify_error(error, params)
            raise

        if self.email_service:
            try:
                contents = await asyncio.to_thread(self.store.dump)
                await self.email_service.send_rsvp_received(params, contents)
            except Exception:
                logger.exception("Could not send confirmation email for %r", params.name)

        return record

    async def _notify_error(self, error: RecordStoreError, params: RsvpParams) -> None:
        if not self.email_service:
            return
        try:
            await self.email_service.send_rsvp_error(error, params)
        except Exception:
            logger.exception("Could not send error email, original error: %s", error)
