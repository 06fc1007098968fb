from datetime import datetime

from pydantic import BaseModel, ConfigDict

# Longest accepted request values
NAME_MAX_LENGTH = 256
TEXT_MAX_LENGTH = 4096


class RsvpRecordResponse(BaseModel):
    """Response for a stored RSVP record."""

    model_config = ConfigDict(from_attributes=True)

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


def require_name(value: str) -> str:
    """Validator shared by request bodies: names are trimmed and non-empty."""
    value = value.strip()
    if not value:
        raise ValueError("name must not be empty")
    return value
