# roombooking/services/notification_service.py
"""
Notification events and their delivery.

Booking operations only *build* events; they are handed to the
NotificationDispatcher after the booking transaction has committed. The
dispatcher stores the in-app Notification row and forwards the event to the
configured Notifier. Failures in either step are logged and dropped.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, Iterable, List, Optional

from sqlalchemy.orm import Session

from roombooking.db.session import SessionLocal
from roombooking.errors import NotificationNotFound
from roombooking.models.notification import Notification, NotificationType
from roombooking.models.user import User
from roombooking.services.notifier import Notifier, get_notifier
from roombooking.utils.logger import get_logger

logger = get_logger(__name__)

MAX_LISTED_NOTIFICATIONS = 50


@dataclass(frozen=True)
class NotificationEvent:
    recipient_id: str
    type: NotificationType
    title: str
    message: str
    booking_request_id: Optional[int] = None


def _window(on: date, start: time, end: time) -> str:
    return f"on {on:%Y-%m-%d} from {start:%H:%M} to {end:%H:%M}"


def conflict_event(recipient_id: str, room_name: str, on: date, start: time, end: time) -> NotificationEvent:
    return NotificationEvent(
        recipient_id=recipient_id,
        type=NotificationType.CONFLICT,
        title="Booking Conflict",
        message=(
            f"Room '{room_name}' is unavailable {_window(on, start, end)}. "
            "Please select a different time slot."
        ),
    )


def new_request_event(
    admin_id: str,
    employee_name: str,
    room_name: str,
    on: date,
    start: time,
    end: time,
    booking_request_id: int,
) -> NotificationEvent:
    return NotificationEvent(
        recipient_id=admin_id,
        type=NotificationType.NEW_REQUEST,
        title="New Booking Request",
        message=f"{employee_name} requested '{room_name}' {_window(on, start, end)}",
        booking_request_id=booking_request_id,
    )


def confirmed_event(
    recipient_id: str,
    room_name: str,
    on: date,
    start: time,
    end: time,
    booking_request_id: int,
) -> NotificationEvent:
    return NotificationEvent(
        recipient_id=recipient_id,
        type=NotificationType.CONFIRMED,
        title="Booking Confirmed",
        message=f"Your booking for '{room_name}' {_window(on, start, end)} has been approved.",
        booking_request_id=booking_request_id,
    )


def rejected_event(
    recipient_id: str,
    room_name: str,
    on: date,
    start: time,
    end: time,
    booking_request_id: int,
    reason: Optional[str] = None,
) -> NotificationEvent:
    message = f"Your booking for '{room_name}' {_window(on, start, end)} was declined."
    if reason:
        message += f" Reason: {reason}"
    return NotificationEvent(
        recipient_id=recipient_id,
        type=NotificationType.REJECTED,
        title="Booking Rejected",
        message=message,
        booking_request_id=booking_request_id,
    )


class NotificationDispatcher:
    """Consumes committed events: in-app row first, then external delivery."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self._session_factory = session_factory
        self._notifier = notifier

    @property
    def notifier(self) -> Notifier:
        if self._notifier is None:
            self._notifier = get_notifier()
        return self._notifier

    def publish(self, events: Iterable[NotificationEvent]) -> int:
        """Deliver every event; returns how many were stored in-app."""
        delivered = 0
        for event in events:
            if self._deliver(event):
                delivered += 1
        return delivered

    def _deliver(self, event: NotificationEvent) -> bool:
        db = self._session_factory()
        try:
            recipient = db.get(User, event.recipient_id)
            if recipient is None:
                logger.warning(
                    "Dropping %s notification: user %s not found",
                    event.type.value,
                    event.recipient_id,
                )
                return False

            db.add(
                Notification(
                    user_id=event.recipient_id,
                    title=event.title,
                    message=event.message,
                    type=event.type,
                    booking_request_id=event.booking_request_id,
                    created_at=datetime.utcnow(),
                )
            )
            db.commit()

            try:
                self.notifier.send(recipient, event)
            except Exception:
                logger.exception(
                    "Failed to deliver %s notification to %s",
                    event.type.value,
                    event.recipient_id,
                )
            return True
        except Exception:
            db.rollback()
            logger.exception(
                "Failed to store %s notification for %s",
                event.type.value,
                event.recipient_id,
            )
            return False
        finally:
            db.close()


# In-app notification queries for the current user


def list_notifications(db: Session, user_id: str, unread_only: bool = False) -> List[Notification]:
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.is_read.is_(False))
    return (
        query.order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(MAX_LISTED_NOTIFICATIONS)
        .all()
    )


def unread_count(db: Session, user_id: str) -> int:
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .count()
    )


def _owned_notification(db: Session, user_id: str, notification_id: int) -> Notification:
    notification = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.user_id == user_id)
        .first()
    )
    if notification is None:
        raise NotificationNotFound(notification_id)
    return notification


def mark_read(db: Session, user_id: str, notification_id: int) -> Notification:
    notification = _owned_notification(db, user_id, notification_id)
    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return notification


def mark_all_read(db: Session, user_id: str) -> int:
    unread = (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .all()
    )
    for notification in unread:
        notification.is_read = True
    db.commit()
    return len(unread)


def delete_notification(db: Session, user_id: str, notification_id: int) -> None:
    notification = _owned_notification(db, user_id, notification_id)
    db.delete(notification)
    db.commit()
