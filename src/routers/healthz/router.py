import asyncio

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.rsvps.dependencies import get_record_store
from src.rsvps.repository.store import RecordStore

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    records: int
    version: str = "0.1.0"


@router.get("/", response_model=HealthCheckResponse)
async def health_check(
    store: RecordStore = Depends(get_record_store),
) -> HealthCheckResponse:
    """
    Health check endpoint to verify the API is running
    and the RSVP file can be read.
    """
    records = await asyncio.to_thread(store.list_all)
    return HealthCheckResponse(status="healthy", records=len(records))
