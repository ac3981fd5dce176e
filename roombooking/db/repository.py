# roombooking/db/repository.py
"""Repository layer: every query the services run goes through here."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy import func, update
from sqlalchemy.orm import Session, joinedload

from roombooking.models.booking_request import BookingRequest, BookingStatus
from roombooking.models.room import Room
from roombooking.models.user import User, UserRole


@dataclass(frozen=True)
class BookingRequestFilter:
    """
    Declarative description of a booking request query.

    Every field is optional; unset fields add no criteria. Keeps the
    availability scan and the admin listings explicit and testable without
    building SQL at the call site.
    """

    room_id: Optional[int] = None
    employee_id: Optional[str] = None
    statuses: Sequence[BookingStatus] = ()
    on_date: Optional[date] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    exclude_id: Optional[int] = None
    order: str = "created_asc"
    offset: int = 0
    limit: Optional[int] = None

    def criteria(self) -> list:
        clauses = []
        if self.room_id is not None:
            clauses.append(BookingRequest.room_id == self.room_id)
        if self.employee_id is not None:
            clauses.append(BookingRequest.employee_id == self.employee_id)
        if self.statuses:
            clauses.append(BookingRequest.status.in_(list(self.statuses)))
        if self.on_date is not None:
            clauses.append(BookingRequest.date == self.on_date)
        if self.date_from is not None:
            clauses.append(BookingRequest.date >= self.date_from)
        if self.date_to is not None:
            clauses.append(BookingRequest.date <= self.date_to)
        if self.exclude_id is not None:
            clauses.append(BookingRequest.id != self.exclude_id)
        return clauses


_ORDERINGS = {
    "created_asc": (BookingRequest.created_at.asc(), BookingRequest.id.asc()),
    "created_desc": (BookingRequest.created_at.desc(), BookingRequest.id.desc()),
    "start_asc": (BookingRequest.start_time.asc(), BookingRequest.id.asc()),
    "date_desc": (
        BookingRequest.date.desc(),
        BookingRequest.start_time.desc(),
        BookingRequest.id.desc(),
    ),
}


class BookingRepository:
    """Thin query layer over one SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # Rooms

    def find_room(self, room_id: int, *, lock: bool = False) -> Optional[Room]:
        query = self.db.query(Room).filter(Room.id == room_id)
        if lock:
            # SELECT ... FOR UPDATE; ignored by SQLite, which serializes writers
            query = query.with_for_update()
        return query.first()

    def find_room_by_name(
        self,
        name: str,
        exclude_id: Optional[int] = None,
    ) -> Optional[Room]:
        query = self.db.query(Room).filter(func.lower(Room.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(Room.id != exclude_id)
        return query.first()

    def list_rooms(
        self,
        search: Optional[str] = None,
        min_capacity: Optional[int] = None,
        location: Optional[str] = None,
    ) -> List[Room]:
        query = self.db.query(Room)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                func.lower(Room.name).like(pattern)
                | func.lower(func.coalesce(Room.description, "")).like(pattern)
                | func.lower(Room.location).like(pattern)
            )
        if min_capacity is not None:
            query = query.filter(Room.capacity >= min_capacity)
        if location:
            query = query.filter(func.lower(Room.location).like(f"%{location.lower()}%"))
        return query.order_by(Room.name.asc()).all()

    # Booking requests

    def find_booking_request(self, request_id: int) -> Optional[BookingRequest]:
        return (
            self.db.query(BookingRequest)
            .options(joinedload(BookingRequest.room))
            .filter(BookingRequest.id == request_id)
            .first()
        )

    def _filtered(self, filters: BookingRequestFilter):
        return self.db.query(BookingRequest).filter(*filters.criteria())

    def list_booking_requests(self, filters: BookingRequestFilter) -> List[BookingRequest]:
        query = (
            self._filtered(filters)
            .options(joinedload(BookingRequest.room))
            .order_by(*_ORDERINGS[filters.order])
        )
        if filters.offset:
            query = query.offset(filters.offset)
        if filters.limit is not None:
            query = query.limit(filters.limit)
        return query.all()

    def count_booking_requests(self, filters: BookingRequestFilter) -> int:
        return self._filtered(filters).count()

    def list_booked_requests(
        self,
        room_id: int,
        on_date: date,
        exclude_id: Optional[int] = None,
    ) -> List[BookingRequest]:
        return self.list_booking_requests(
            BookingRequestFilter(
                room_id=room_id,
                on_date=on_date,
                statuses=(BookingStatus.BOOKED,),
                exclude_id=exclude_id,
                order="start_asc",
            )
        )

    def transition_status(
        self,
        request_id: int,
        expected: BookingStatus,
        new_status: BookingStatus,
        **values,
    ) -> bool:
        """
        Conditional status write; False when the row no longer has `expected`.

        The WHERE on the current status makes two racing transitions of the
        same request produce exactly one winner.
        """
        result = self.db.execute(
            update(BookingRequest)
            .where(BookingRequest.id == request_id)
            .where(BookingRequest.status == expected)
            .values(status=new_status, **values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # Users

    def find_user(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def list_admins(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.role == UserRole.ADMIN, User.is_active.is_(True))
            .order_by(User.created_at.asc())
            .all()
        )

    def list_users(self, include_inactive: bool = False) -> List[User]:
        query = self.db.query(User)
        if not include_inactive:
            query = query.filter(User.is_active.is_(True))
        return query.order_by(User.first_name.asc(), User.last_name.asc()).all()

    # Writes

    def save(self, *entities: object) -> None:
        self.db.add_all(entities)
        self.db.flush()
