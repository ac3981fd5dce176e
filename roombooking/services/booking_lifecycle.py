# roombooking/services/booking_lifecycle.py
"""Guarded status transitions for booking requests."""

from enum import Enum

from roombooking.errors import InvalidLifecycleTransition
from roombooking.models.booking_request import BookingStatus


class BookingAction(str, Enum):
    CONFIRM = "confirm"
    REJECT = "reject"


TRANSITIONS: dict[tuple[BookingStatus, BookingAction], BookingStatus] = {
    (BookingStatus.PENDING, BookingAction.CONFIRM): BookingStatus.BOOKED,
    (BookingStatus.PENDING, BookingAction.REJECT): BookingStatus.REJECTED,
}

_FAILURE_MESSAGES = {
    BookingAction.CONFIRM: "Only pending requests can be confirmed",
    BookingAction.REJECT: "Only pending requests can be rejected",
}


def next_status(current: BookingStatus, action: BookingAction) -> BookingStatus:
    """Return the status `action` leads to, or raise if it is not allowed."""
    try:
        return TRANSITIONS[(BookingStatus(current), action)]
    except KeyError:
        raise InvalidLifecycleTransition(_FAILURE_MESSAGES[action], current) from None