from abc import ABC, abstractmethod

from src.rsvps.dtos import RsvpParams


class EmailServiceBase(ABC):
    @abstractmethod
    async def send_rsvp_received(
        self,
        rsvp: RsvpParams,
        csv_contents: str,
    ) -> None:
        """Tell the admins about a new RSVP, attaching the current CSV file."""
        pass

    @abstractmethod
    async def send_rsvp_error(
        self,
        error: Exception,
        rsvp: RsvpParams,
    ) -> None:
        """Tell the admins an RSVP could not be stored."""
        pass
