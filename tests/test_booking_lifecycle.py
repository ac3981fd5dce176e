# tests/test_booking_lifecycle.py
import pytest

from roombooking.errors import InvalidLifecycleTransition
from roombooking.models.booking_request import BookingStatus
from roombooking.services.booking_lifecycle import BookingAction, next_status


def test_pending_can_be_confirmed_or_rejected():
    assert next_status(BookingStatus.PENDING, BookingAction.CONFIRM) == BookingStatus.BOOKED
    assert next_status(BookingStatus.PENDING, BookingAction.REJECT) == BookingStatus.REJECTED


@pytest.mark.parametrize("current", [BookingStatus.BOOKED, BookingStatus.REJECTED])
def test_terminal_states_cannot_be_confirmed(current):
    with pytest.raises(InvalidLifecycleTransition) as exc_info:
        next_status(current, BookingAction.CONFIRM)
    assert exc_info.value.message == "Only pending requests can be confirmed"
    assert exc_info.value.details == f"Current status: {current.value}"


@pytest.mark.parametrize("current", [BookingStatus.BOOKED, BookingStatus.REJECTED])
def test_terminal_states_cannot_be_rejected(current):
    with pytest.raises(InvalidLifecycleTransition) as exc_info:
        next_status(current, BookingAction.REJECT)
    assert exc_info.value.message == "Only pending requests can be rejected"


def test_raw_status_values_are_accepted():
    assert next_status("Pending", BookingAction.CONFIRM) == BookingStatus.BOOKED
