from fastapi import APIRouter

from .features.add_invitee.router import router as add_invitee_router
from .features.attendance.router import router as attendance_router
from .features.find_rsvp.router import router as find_rsvp_router
from .features.list_rsvps.router import router as list_rsvps_router
from .features.remove_rsvp.router import router as remove_rsvp_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

# Fixed paths before the /{name} route
router.include_router(attendance_router)
router.include_router(list_rsvps_router)
router.include_router(find_rsvp_router)
router.include_router(submit_rsvp_router)
router.include_router(add_invitee_router)
router.include_router(remove_rsvp_router)
