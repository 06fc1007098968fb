import asyncio

from fastapi import APIRouter, Depends, HTTPException

from src.rsvps.dependencies import get_record_store
from src.rsvps.repository.store import RecordStore
from src.rsvps.schemas import RsvpRecordResponse
from src.rsvps.urls import REMOVE_RSVP_URL

router = APIRouter()


@router.delete(REMOVE_RSVP_URL, response_model=RsvpRecordResponse)
async def remove_rsvp(
    name: str,
    store: RecordStore = Depends(get_record_store),
) -> RsvpRecordResponse:
    """Remove an RSVP by guest name and return what was removed."""
    record = await asyncio.to_thread(store.remove, name)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No RSVP found for '{name}'")

    return RsvpRecordResponse.model_validate(record)
