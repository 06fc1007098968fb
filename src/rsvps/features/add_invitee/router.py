import asyncio

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from src.rsvps.dependencies import get_record_store
from src.rsvps.dtos import AddParams
from src.rsvps.errors import DuplicateKeyError
from src.rsvps.repository.store import RecordStore
from src.rsvps.schemas import NAME_MAX_LENGTH, RsvpRecordResponse, require_name
from src.rsvps.urls import ADD_INVITEE_URL

router = APIRouter()


class AddInviteeRequest(BaseModel):
    """Request body for adding someone to the guest list."""

    name: str = Field(max_length=NAME_MAX_LENGTH)
    email: EmailStr
    plus_one_name: str = Field("", max_length=NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return require_name(value)


@router.post(
    ADD_INVITEE_URL,
    response_model=RsvpRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_invitee(
    request: AddInviteeRequest,
    store: RecordStore = Depends(get_record_store),
) -> RsvpRecordResponse:
    """
    Add an invitee who has not responded yet.
    Fails with 409 if the name is already on the list.
    """
    params = AddParams(
        name=request.name,
        email=str(request.email),
        plus_one_name=request.plus_one_name.strip(),
    )
    try:
        record = await asyncio.to_thread(store.insert, params)
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return RsvpRecordResponse.model_validate(record)
