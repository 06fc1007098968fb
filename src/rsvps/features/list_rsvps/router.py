import asyncio

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from src.rsvps.dependencies import get_record_store
from src.rsvps.repository.store import RecordStore
from src.rsvps.schemas import RsvpRecordResponse
from src.rsvps.urls import EXPORT_RSVPS_URL, LIST_RSVPS_URL

router = APIRouter()


@router.get(LIST_RSVPS_URL, response_model=list[RsvpRecordResponse])
async def list_rsvps(
    store: RecordStore = Depends(get_record_store),
) -> list[RsvpRecordResponse]:
    """List every stored RSVP in file order."""
    records = await asyncio.to_thread(store.list_all)
    return [RsvpRecordResponse.model_validate(record) for record in records]


@router.get(EXPORT_RSVPS_URL, response_class=PlainTextResponse)
async def export_rsvps(
    store: RecordStore = Depends(get_record_store),
) -> PlainTextResponse:
    """Download the raw RSVP file."""
    contents = await asyncio.to_thread(store.dump)
    return PlainTextResponse(
        contents,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="rsvp.csv"'},
    )
