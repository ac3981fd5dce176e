# roombooking/services/availability_service.py
from typing import List, Optional

from roombooking.db.repository import BookingRepository
from roombooking.models.booking_request import BookingRequest
from roombooking.services.time_interval import TimeInterval


def find_conflicts(
    repo: BookingRepository,
    *,
    room_id: int,
    candidate: TimeInterval,
    exclude_request_id: Optional[int] = None,
) -> List[BookingRequest]:
    """
    Booked requests for `room_id` on the candidate's date that overlap it.

    Pending and Rejected requests never count; only confirmed bookings
    block a slot. `exclude_request_id` removes the request being confirmed
    from its own scan.
    """
    booked = repo.list_booked_requests(
        room_id=room_id,
        on_date=candidate.date,
        exclude_id=exclude_request_id,
    )
    return [b for b in booked if TimeInterval.of(b).overlaps(candidate)]


def is_room_available(
    repo: BookingRepository,
    *,
    room_id: int,
    candidate: TimeInterval,
    exclude_request_id: Optional[int] = None,
) -> bool:
    """True iff no Booked request for the room overlaps `candidate`. Read-only."""
    return not find_conflicts(
        repo,
        room_id=room_id,
        candidate=candidate,
        exclude_request_id=exclude_request_id,
    )
