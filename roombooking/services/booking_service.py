# roombooking/services/booking_service.py
"""
Booking request orchestration: create, confirm, reject, availability.

This service is the only writer of BookingRequest.status. Every call works
on rows fetched fresh from the database; nothing is cached between calls.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from threading import Event
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roombooking.db.repository import BookingRepository, BookingRequestFilter
from roombooking.errors import (
    BookingConflict,
    BookingRequestNotFound,
    BookingServiceError,
    InvalidLifecycleTransition,
    OperationCancelled,
    RoomNotFound,
    StorageError,
)
from roombooking.models.booking_request import BookingRequest, BookingStatus
from roombooking.services.availability_service import find_conflicts, is_room_available
from roombooking.services.booking_lifecycle import BookingAction, next_status
from roombooking.services.notification_service import (
    NotificationDispatcher,
    NotificationEvent,
    confirmed_event,
    conflict_event,
    new_request_event,
    rejected_event,
)
from roombooking.services.time_interval import TimeInterval
from roombooking.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class BookingPage:
    items: List[BookingRequest]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return -(-self.total_count // self.page_size) if self.page_size else 0


@dataclass
class _Outbox:
    events: List[NotificationEvent] = field(default_factory=list)

    def add(self, event: NotificationEvent) -> None:
        self.events.append(event)


def _check_cancelled(cancel: Optional[Event], operation: str) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelled(operation)


class BookingRequestService:
    def __init__(
        self,
        db: Session,
        dispatcher: Optional[NotificationDispatcher] = None,
    ) -> None:
        self.db = db
        self.repo = BookingRepository(db)
        self.dispatcher = dispatcher or NotificationDispatcher()

    # Commands

    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        room_id: int,
        on_date: date,
        start_time: time,
        end_time: time,
        purpose: str,
        cancel: Optional[Event] = None,
    ) -> BookingRequest:
        """
        Create a Pending request for a free slot.

        On conflict nothing is persisted, the requester gets a conflict
        notification and BookingConflict is raised.
        """
        logger.info(
            "Creating booking request for employee %s, room %s on %s from %s to %s",
            employee_id,
            room_id,
            on_date,
            start_time,
            end_time,
        )
        outbox = _Outbox()
        try:
            room = self.repo.find_room(room_id)
            if room is None:
                logger.warning("Room %s not found", room_id)
                raise RoomNotFound(room_id)

            candidate = TimeInterval(date=on_date, start=start_time, end=end_time)

            if not is_room_available(self.repo, room_id=room_id, candidate=candidate):
                logger.warning(
                    "Room %s is already booked for %s",
                    room_id,
                    candidate.describe(),
                )
                outbox.add(
                    conflict_event(
                        employee_id,
                        room.name,
                        candidate.date,
                        candidate.start,
                        candidate.end,
                    )
                )
                raise BookingConflict(
                    "Room is already booked for the selected time slot",
                    f"Room {room.name} has conflicting bookings",
                    room_name=room.name,
                    window=candidate,
                )

            booking = BookingRequest(
                employee_id=employee_id,
                employee_name=employee_name,
                room_id=room_id,
                date=candidate.date,
                start_time=candidate.start,
                end_time=candidate.end,
                purpose=purpose,
                status=BookingStatus.PENDING,
                created_at=datetime.utcnow(),
            )
            self.repo.save(booking)

            for admin in self.repo.list_admins():
                outbox.add(
                    new_request_event(
                        admin.id,
                        employee_name,
                        room.name,
                        candidate.date,
                        candidate.start,
                        candidate.end,
                        booking.id,
                    )
                )

            _check_cancelled(cancel, "Create booking request")
            self._commit()
            self.db.refresh(booking)
        except BookingConflict:
            # Nothing was written, but the requester still hears about it
            self.db.rollback()
            self._publish(outbox)
            raise
        except BookingServiceError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self._storage_failure("create booking request", exc)

        logger.info(
            "Booking request %s created for employee %s",
            booking.id,
            employee_id,
        )
        self._publish(outbox)
        return booking

    def confirm(self, request_id: int, *, cancel: Optional[Event] = None) -> bool:
        """
        Pending -> Booked, guarded by a fresh availability check.

        The room row is locked and the status write (conditional on the row
        still being Pending) happens before the overlap scan, so the scan runs
        inside the write transaction. Two admins confirming overlapping
        requests are serialized; the second one sees the first as Booked.
        """
        logger.info("Attempting to confirm booking request %s", request_id)
        outbox = _Outbox()
        try:
            booking = self._get_booking(request_id)
            target = next_status(booking.status, BookingAction.CONFIRM)

            # Serializes confirmations per room
            self.repo.find_room(booking.room_id, lock=True)
            self._transition(booking, BookingStatus.PENDING, target)

            conflicts = find_conflicts(
                self.repo,
                room_id=booking.room_id,
                candidate=TimeInterval.of(booking),
                exclude_request_id=booking.id,
            )
            if conflicts:
                logger.warning(
                    "Cannot confirm booking request %s: room %s has overlapping booking %s",
                    request_id,
                    booking.room_id,
                    conflicts[0].id,
                )
                raise BookingConflict(
                    "Room is already booked for this time slot",
                    "Another booking was confirmed for the same room and time",
                    room_name=booking.room_name,
                    window=TimeInterval.of(booking),
                )

            _check_cancelled(cancel, "Confirm booking request")
            self._commit()
        except BookingServiceError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self._storage_failure("confirm booking request", exc)

        logger.info(
            "Booking request %s confirmed for room %s on %s",
            request_id,
            booking.room_id,
            booking.date,
        )
        self._notify_employee(booking, outbox, confirmed_event)
        self._publish(outbox)
        return True

    def reject(
        self,
        request_id: int,
        reject_reason: Optional[str] = None,
        *,
        cancel: Optional[Event] = None,
    ) -> bool:
        logger.info(
            "Attempting to reject booking request %s with reason: %s",
            request_id,
            reject_reason or "No reason provided",
        )
        outbox = _Outbox()
        try:
            booking = self._get_booking(request_id)
            target = next_status(booking.status, BookingAction.REJECT)

            _check_cancelled(cancel, "Reject booking request")
            self._transition(
                booking,
                BookingStatus.PENDING,
                target,
                reject_reason=reject_reason,
            )
            self._commit()
        except BookingServiceError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self._storage_failure("reject booking request", exc)

        logger.info("Booking request %s rejected", request_id)
        self._notify_employee(booking, outbox, rejected_event, reason=reject_reason)
        self._publish(outbox)
        return True

    # Queries

    def check_availability(
        self,
        room_id: int,
        on_date: date,
        start_time: time,
        end_time: time,
    ) -> bool:
        """Non-authoritative hint; create/confirm always re-check."""
        if self.repo.find_room(room_id) is None:
            raise RoomNotFound(room_id)
        candidate = TimeInterval(date=on_date, start=start_time, end=end_time)
        return is_room_available(self.repo, room_id=room_id, candidate=candidate)

    def get(self, request_id: int) -> BookingRequest:
        return self._get_booking(request_id)

    def list_pending(self) -> List[BookingRequest]:
        """Oldest first, so admins review in arrival order."""
        return self.repo.list_booking_requests(
            BookingRequestFilter(statuses=(BookingStatus.PENDING,), order="created_asc")
        )

    def list_for_employee(self, employee_id: str) -> List[BookingRequest]:
        return self.repo.list_booking_requests(
            BookingRequestFilter(employee_id=employee_id, order="created_desc")
        )

    def list_all(
        self,
        *,
        status: Optional[BookingStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: int = 1,
        page_size: int = 50,
    ) -> BookingPage:
        filters = BookingRequestFilter(
            statuses=(status,) if status is not None else (),
            date_from=start_date,
            date_to=end_date,
            order="date_desc",
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        return BookingPage(
            items=self.repo.list_booking_requests(filters),
            total_count=self.repo.count_booking_requests(filters),
            page=page,
            page_size=page_size,
        )

    # Internals

    def _get_booking(self, request_id: int) -> BookingRequest:
        booking = self.repo.find_booking_request(request_id)
        if booking is None:
            logger.warning("Booking request %s not found", request_id)
            raise BookingRequestNotFound(request_id)
        return booking

    def _transition(
        self,
        booking: BookingRequest,
        expected: BookingStatus,
        target: BookingStatus,
        **values,
    ) -> None:
        if not self.repo.transition_status(booking.id, expected, target, **values):
            # Another caller moved the request first
            self.db.refresh(booking)
            logger.warning(
                "Booking request %s changed concurrently; now %s",
                booking.id,
                booking.status.value,
            )
            action = "confirmed" if target == BookingStatus.BOOKED else "rejected"
            raise InvalidLifecycleTransition(
                f"Only pending requests can be {action}",
                booking.status,
            )

    def _commit(self) -> None:
        self.db.commit()

    def _storage_failure(self, operation: str, exc: SQLAlchemyError) -> None:
        self.db.rollback()
        logger.exception("Storage failure while trying to %s", operation)
        raise StorageError(f"Could not {operation}", str(exc)) from exc

    def _notify_employee(self, booking: BookingRequest, outbox: _Outbox, build, **extra) -> None:
        # Lookups happen after the commit; a missing employee or room only
        # skips the notification.
        try:
            self.db.refresh(booking)
            employee = self.repo.find_user(booking.employee_id)
            room = self.repo.find_room(booking.room_id)
        except SQLAlchemyError:
            logger.exception("Could not load notification targets for request %s", booking.id)
            return
        if employee is None or room is None:
            logger.info(
                "Skipping notification for booking request %s: employee or room missing",
                booking.id,
            )
            return
        outbox.add(
            build(
                employee.id,
                room.name,
                booking.date,
                booking.start_time,
                booking.end_time,
                booking.id,
                **extra,
            )
        )

    def _publish(self, outbox: _Outbox) -> None:
        if not outbox.events:
            return
        try:
            self.dispatcher.publish(outbox.events)
        except Exception:
            logger.exception("Notification dispatch failed")
