# roombooking/services/room_service.py
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roombooking.db.repository import BookingRepository, BookingRequestFilter
from roombooking.errors import DuplicateRoomName, RoomHasActiveBookings, RoomNotFound
from roombooking.models.booking_request import BookingRequest, BookingStatus
from roombooking.models.room import Room
from roombooking.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RoomSchedule:
    room: Room
    bookings: List[BookingRequest]


def _clean_labels(values: Optional[Sequence[str]]) -> List[str]:
    """Strip blanks and duplicates, keeping first-seen order."""
    seen: List[str] = []
    for value in values or []:
        label = value.strip()
        if label and label not in seen:
            seen.append(label)
    return seen


def _commit_room(db: Session, name: str) -> None:
    # A concurrent writer can still take the name between check and commit
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Room name %s was taken concurrently", name)
        raise DuplicateRoomName(name)


def get_room(db: Session, room_id: int) -> Room:
    room = BookingRepository(db).find_room(room_id)
    if room is None:
        raise RoomNotFound(room_id)
    return room


def list_rooms(
    db: Session,
    search: Optional[str] = None,
    min_capacity: Optional[int] = None,
    location: Optional[str] = None,
) -> List[Room]:
    return BookingRepository(db).list_rooms(
        search=search,
        min_capacity=min_capacity,
        location=location,
    )


def create_room(
    db: Session,
    *,
    name: str,
    location: str,
    capacity: int,
    description: Optional[str] = None,
    amenities: Optional[Sequence[str]] = None,
    image_urls: Optional[Sequence[str]] = None,
) -> Room:
    repo = BookingRepository(db)
    if repo.find_room_by_name(name) is not None:
        raise DuplicateRoomName(name)

    room = Room(
        name=name,
        location=location,
        capacity=capacity,
        description=description,
        amenities=_clean_labels(amenities),
        image_urls=_clean_labels(image_urls),
    )
    db.add(room)
    _commit_room(db, name)
    db.refresh(room)
    logger.info("Room %s created: %s", room.id, room.name)
    return room


def update_room(
    db: Session,
    room_id: int,
    *,
    name: str,
    location: str,
    capacity: int,
    description: Optional[str] = None,
    amenities: Optional[Sequence[str]] = None,
    image_urls: Optional[Sequence[str]] = None,
) -> Room:
    repo = BookingRepository(db)
    room = get_room(db, room_id)
    if repo.find_room_by_name(name, exclude_id=room_id) is not None:
        raise DuplicateRoomName(name)

    room.name = name
    room.location = location
    room.capacity = capacity
    room.description = description
    room.amenities = _clean_labels(amenities)
    if image_urls is not None:
        room.image_urls = _clean_labels(image_urls)

    _commit_room(db, name)
    db.refresh(room)
    logger.info("Room %s updated", room_id)
    return room


def has_active_bookings(db: Session, room_id: int, now: Optional[datetime] = None) -> bool:
    """True if any Booked request for the room has not ended yet."""
    now = now or datetime.now()
    upcoming = BookingRepository(db).list_booking_requests(
        BookingRequestFilter(
            room_id=room_id,
            statuses=(BookingStatus.BOOKED,),
            date_from=now.date(),
        )
    )
    return any(datetime.combine(b.date, b.end_time) > now for b in upcoming)


def delete_room(db: Session, room_id: int, now: Optional[datetime] = None) -> None:
    room = get_room(db, room_id)
    if has_active_bookings(db, room_id, now=now):
        logger.warning("Refusing to delete room %s: active bookings", room_id)
        raise RoomHasActiveBookings(room_id)

    db.delete(room)
    db.commit()
    logger.info("Room %s deleted", room_id)


def get_room_schedules(db: Session, on_date: Optional[date] = None) -> List[RoomSchedule]:
    """Every room with its Booked slots for `on_date` (today by default)."""
    on_date = on_date or date.today()
    repo = BookingRepository(db)
    booked = repo.list_booking_requests(
        BookingRequestFilter(
            statuses=(BookingStatus.BOOKED,),
            on_date=on_date,
            order="start_asc",
        )
    )
    return [
        RoomSchedule(room=room, bookings=[b for b in booked if b.room_id == room.id])
        for room in repo.list_rooms()
    ]
