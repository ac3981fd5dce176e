# tests/test_availability_service.py
from datetime import date, datetime, time

from roombooking.db.repository import BookingRepository
from roombooking.models import BookingRequest, BookingStatus
from roombooking.services.availability_service import find_conflicts, is_room_available
from roombooking.services.time_interval import TimeInterval

DAY = date(2025, 3, 10)


def _add_request(db, room, start, end, status, on=DAY):
    booking = BookingRequest(
        employee_id="emp-someone",
        employee_name="Some One",
        room_id=room.id,
        date=on,
        start_time=start,
        end_time=end,
        purpose="Quarterly planning session",
        status=status,
        created_at=datetime.utcnow(),
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


def test_empty_room_is_available(db, make_room):
    room = make_room("Aurora")
    candidate = TimeInterval(date=DAY, start=time(9, 0), end=time(10, 0))
    assert is_room_available(BookingRepository(db), room_id=room.id, candidate=candidate)


def test_only_booked_requests_block(db, make_room):
    room = make_room("Aurora")
    _add_request(db, room, time(9, 0), time(10, 0), BookingStatus.PENDING)
    _add_request(db, room, time(9, 0), time(10, 0), BookingStatus.REJECTED)
    repo = BookingRepository(db)
    candidate = TimeInterval(date=DAY, start=time(9, 30), end=time(10, 30))

    assert is_room_available(repo, room_id=room.id, candidate=candidate)

    booked = _add_request(db, room, time(9, 0), time(10, 0), BookingStatus.BOOKED)
    conflicts = find_conflicts(repo, room_id=room.id, candidate=candidate)
    assert [c.id for c in conflicts] == [booked.id]
    assert not is_room_available(repo, room_id=room.id, candidate=candidate)


def test_adjacent_booking_and_other_rooms_do_not_block(db, make_room):
    room = make_room("Aurora")
    other = make_room("Borealis")
    _add_request(db, room, time(9, 0), time(10, 0), BookingStatus.BOOKED)
    _add_request(db, other, time(10, 0), time(11, 0), BookingStatus.BOOKED)
    _add_request(db, room, time(10, 0), time(11, 0), BookingStatus.BOOKED, on=date(2025, 3, 11))
    repo = BookingRepository(db)

    candidate = TimeInterval(date=DAY, start=time(10, 0), end=time(11, 0))
    assert is_room_available(repo, room_id=room.id, candidate=candidate)


def test_request_can_be_excluded_from_its_own_scan(db, make_room):
    room = make_room("Aurora")
    booked = _add_request(db, room, time(9, 0), time(10, 0), BookingStatus.BOOKED)
    repo = BookingRepository(db)
    candidate = TimeInterval.of(booked)

    assert not is_room_available(repo, room_id=room.id, candidate=candidate)
    assert is_room_available(
        repo,
        room_id=room.id,
        candidate=candidate,
        exclude_request_id=booked.id,
    )
