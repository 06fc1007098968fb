import asyncio

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from src.rsvps.dependencies import get_record_store
from src.rsvps.repository.store import RecordStore
from src.rsvps.urls import ATTENDANCE_URL

router = APIRouter()


class AttendanceResponse(BaseModel):
    """Head counts per event, plus-ones included."""

    model_config = ConfigDict(from_attributes=True)

    attending: int
    attending_secondary: int
    attending_tertiary: int


@router.get(ATTENDANCE_URL, response_model=AttendanceResponse)
async def get_attendance(
    store: RecordStore = Depends(get_record_store),
) -> AttendanceResponse:
    attendance = await asyncio.to_thread(store.aggregate)
    return AttendanceResponse.model_validate(attendance)
