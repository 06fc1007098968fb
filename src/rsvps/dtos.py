from dataclasses import dataclass, replace
from datetime import datetime

from src.rsvps.errors import UpdateKeyMismatchError


def normalize_name(name: str) -> str:
    """Key form of a name: trimmed and lowercased."""
    return name.strip().lower()


@dataclass(frozen=True)
class AddParams:
    """DTO for adding an invitee before they have responded."""

    name: str
    email: str
    plus_one_name: str = ""


@dataclass(frozen=True)
class RsvpParams:
    """DTO for a submitted RSVP form."""

    name: str
    email: str = ""
    attending: bool = False
    attending_secondary: bool = False
    attending_tertiary: bool = False
    meal_choice: str = ""
    dietary_restrictions: str = ""
    plus_one_attending: bool = False
    plus_one_name: str = ""
    plus_one_meal_choice: str = ""
    plus_one_dietary_restrictions: str = ""
    comments: str = ""


@dataclass(frozen=True)
class RsvpRecord:
    """One stored row: an RSVP, or an invitee who has not answered yet.

    `name` is the primary key. `plus_one_name` is only an alias used for
    lookups and is never checked for uniqueness.
    """

    name: str
    email: str
    attending: bool
    attending_secondary: bool
    attending_tertiary: bool
    meal_choice: str
    dietary_restrictions: str
    plus_one_attending: bool
    plus_one_name: str
    plus_one_meal_choice: str
    plus_one_dietary_restrictions: str
    comments: str
    created_at: datetime
    updated_at: datetime

    @property
    def key(self) -> str:
        return normalize_name(self.name)

    @property
    def alias(self) -> str | None:
        alias = normalize_name(self.plus_one_name)
        return alias or None

    @property
    def party_size(self) -> int:
        return 2 if self.plus_one_attending else 1

    @classmethod
    def from_add(cls, params: AddParams, now: datetime) -> "RsvpRecord":
        return cls(
            name=params.name,
            email=params.email,
            attending=False,
            attending_secondary=False,
            attending_tertiary=False,
            meal_choice="",
            dietary_restrictions="",
            plus_one_attending=False,
            plus_one_name=params.plus_one_name,
            plus_one_meal_choice="",
            plus_one_dietary_restrictions="",
            comments="",
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_rsvp(cls, params: RsvpParams, now: datetime) -> "RsvpRecord":
        return cls(
            name=params.name,
            email=params.email,
            attending=params.attending,
            attending_secondary=params.attending_secondary,
            attending_tertiary=params.attending_tertiary,
            meal_choice=params.meal_choice,
            dietary_restrictions=params.dietary_restrictions,
            plus_one_attending=params.plus_one_attending,
            plus_one_name=params.plus_one_name,
            plus_one_meal_choice=params.plus_one_meal_choice,
            plus_one_dietary_restrictions=params.plus_one_dietary_restrictions,
            comments=params.comments,
            created_at=now,
            updated_at=now,
        )

    def updated_with(self, params: RsvpParams, now: datetime) -> "RsvpRecord":
        """
        Return this record with every field except name and created_at
        replaced by the incoming values. Empty strings overwrite too.
        """
        if normalize_name(params.name) != self.key:
            raise UpdateKeyMismatchError(self.name, params.name)

        return replace(
            self,
            email=params.email,
            attending=params.attending,
            attending_secondary=params.attending_secondary,
            attending_tertiary=params.attending_tertiary,
            meal_choice=params.meal_choice,
            dietary_restrictions=params.dietary_restrictions,
            plus_one_attending=params.plus_one_attending,
            plus_one_name=params.plus_one_name,
            plus_one_meal_choice=params.plus_one_meal_choice,
            plus_one_dietary_restrictions=params.plus_one_dietary_restrictions,
            comments=params.comments,
            # updated_at never falls behind created_at, even with a skewed clock
            updated_at=max(now, self.created_at),
        )


@dataclass
class Attendance:
    """Head counts per attendance tier, plus-ones included."""

    attending: int = 0
    attending_secondary: int = 0
    attending_tertiary: int = 0

    def add(self, record: RsvpRecord) -> None:
        if record.attending:
            self.attending += record.party_size
        if record.attending_secondary:
            self.attending_secondary += record.party_size
        if record.attending_tertiary:
            self.attending_tertiary += record.party_size
