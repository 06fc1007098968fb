from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from src.email_service.base import EmailServiceBase
from src.rsvps.dependencies import get_notifier, get_record_store
from src.rsvps.dtos import RsvpParams
from src.rsvps.features.submit_rsvp.write_model import (
    CsvSubmitRsvpWriteModel,
    SubmitRsvpWriteModel,
)
from src.rsvps.repository.store import RecordStore
from src.rsvps.schemas import (
    NAME_MAX_LENGTH,
    TEXT_MAX_LENGTH,
    RsvpRecordResponse,
    require_name,
)
from src.rsvps.urls import SUBMIT_RSVP_URL

router = APIRouter()


class RsvpSubmit(BaseModel):
    """Submit an RSVP. Fields left out are stored empty or false."""

    name: str = Field(max_length=NAME_MAX_LENGTH)
    email: str = Field("", max_length=NAME_MAX_LENGTH)
    attending: bool = False
    attending_secondary: bool = False
    attending_tertiary: bool = False
    meal_choice: str = Field("", max_length=TEXT_MAX_LENGTH)
    dietary_restrictions: str = Field("", max_length=TEXT_MAX_LENGTH)
    plus_one_attending: bool = False
    plus_one_name: str = Field("", max_length=NAME_MAX_LENGTH)
    plus_one_meal_choice: str = Field("", max_length=TEXT_MAX_LENGTH)
    plus_one_dietary_restrictions: str = Field("", max_length=TEXT_MAX_LENGTH)
    comments: str = Field("", max_length=TEXT_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return require_name(value)

    def to_params(self) -> RsvpParams:
        return RsvpParams(**self.model_dump())


def get_submit_rsvp_write_model(
    store: RecordStore = Depends(get_record_store),
    email_service: EmailServiceBase = Depends(get_notifier),
) -> SubmitRsvpWriteModel:
    """Dependency to get submit RSVP write model instance."""
    return CsvSubmitRsvpWriteModel(store=store, email_service=email_service)


@router.post(SUBMIT_RSVP_URL, response_model=RsvpRecordResponse)
async def submit_rsvp(
    rsvp_data: RsvpSubmit,
    write_model: SubmitRsvpWriteModel = Depends(get_submit_rsvp_write_model),
) -> RsvpRecordResponse:
    """
    Submit an RSVP response.
    Replaces any earlier response under the same name.
    """
    record = await write_model.submit_rsvp(rsvp_data.to_params())
    return RsvpRecordResponse.model_validate(record)
