from abc import ABC, abstractmethod
from datetime import datetime

from src.rsvps.dtos import AddParams, Attendance, RsvpParams, RsvpRecord


class RecordStore(ABC):
    """Operation contract of the RSVP record store.

    Implementations serialize every call themselves, so one instance can be
    shared between request handlers.
    """

    @abstractmethod
    def insert(self, params: AddParams, now: datetime | None = None) -> RsvpRecord:
        """
        Create a record for a new invitee.
        Raises DuplicateKeyError if the name is already stored.
        """
        raise NotImplementedError

    @abstractmethod
    def upsert(self, params: RsvpParams, now: datetime | None = None) -> RsvpRecord:
        """
        Create or replace the record for params.name.
        The resulting record is always the last one in storage order.
        """
        raise NotImplementedError

    @abstractmethod
    def remove(self, name: str) -> RsvpRecord | None:
        """Remove the record with this name, returning it if it existed."""
        raise NotImplementedError

    @abstractmethod
    def get(self, query: str) -> RsvpRecord | None:
        """
        Find a record by name or plus-one name.
        The query may hold several names joined by '&'.

        Primary names are searched first, then plus-one names, each pass in
        storage order. A record whose own name matches therefore wins over
        an earlier record that only lists the name as its plus-one, unlike a
        single pass that returns whichever row matches first.
        """
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[RsvpRecord]:
        raise NotImplementedError

    @abstractmethod
    def aggregate(self) -> Attendance:
        raise NotImplementedError

    @abstractmethod
    def dump(self) -> str:
        """Raw stored contents, for exports and diagnostics."""
        raise NotImplementedError
