import asyncio

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from src.rsvps.dependencies import get_record_store
from src.rsvps.repository.store import RecordStore
from src.rsvps.schemas import NAME_MAX_LENGTH, RsvpRecordResponse, require_name
from src.rsvps.urls import LOOKUP_RSVP_URL

router = APIRouter()

NOT_FOUND_MESSAGE = "Your name wasn't found, sorry!"


class LookupRequest(BaseModel):
    """Name to look up. Several names may be joined with '&'."""

    name: str = Field(max_length=NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return require_name(value)


@router.post(LOOKUP_RSVP_URL, response_model=RsvpRecordResponse)
async def find_rsvp(
    request: LookupRequest,
    store: RecordStore = Depends(get_record_store),
) -> RsvpRecordResponse:
    """
    Find an existing RSVP by guest name or plus-one name.
    Used to prefill the RSVP form.
    """
    record = await asyncio.to_thread(store.get, request.name)
    if record is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)

    return RsvpRecordResponse.model_validate(record)
