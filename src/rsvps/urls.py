RSVPS_URL = "/api/v1/rsvps"
LOOKUP_RSVP_URL = "/api/v1/rsvps/lookup"
SUBMIT_RSVP_URL = RSVPS_URL
LIST_RSVPS_URL = RSVPS_URL
ATTENDANCE_URL = "/api/v1/rsvps/attendance"
EXPORT_RSVPS_URL = "/api/v1/rsvps/export"
REMOVE_RSVP_URL = "/api/v1/rsvps/{name}"
ADD_INVITEE_URL = "/api/v1/invitees"
