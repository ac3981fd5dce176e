# roombooking/errors.py
"""Typed failures raised by the booking services.

Every error carries a stable ``code`` and an HTTP ``status_code`` which the
transport layer uses when turning it into a response.
"""

from typing import Any, Optional


class BookingServiceError(Exception):
    """Base class for all failures surfaced to API callers."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code, "details": self.details}


class NotFoundError(BookingServiceError):
    status_code = 404
    code = "not_found"

    def __init__(self, entity: str, key: Any) -> None:
        super().__init__(f'Entity "{entity}" ({key}) was not found.')
        self.entity = entity
        self.key = key


class RoomNotFound(NotFoundError):
    code = "room_not_found"

    def __init__(self, room_id: int) -> None:
        super().__init__("Room", room_id)


class BookingRequestNotFound(NotFoundError):
    code = "booking_request_not_found"

    def __init__(self, request_id: int) -> None:
        super().__init__("BookingRequest", request_id)


class UserNotFound(NotFoundError):
    code = "user_not_found"

    def __init__(self, user_id: str) -> None:
        super().__init__("User", user_id)


class NotificationNotFound(NotFoundError):
    code = "notification_not_found"

    def __init__(self, notification_id: int) -> None:
        super().__init__("Notification", notification_id)


class BusinessRuleError(BookingServiceError):
    status_code = 400
    code = "business_rule_violation"


class InvalidTimeRange(BusinessRuleError, ValueError):
    code = "invalid_time_range"

    def __init__(self, start: Any, end: Any) -> None:
        super().__init__(
            "Start time must be before end time",
            f"Start: {start}, End: {end}",
        )
        self.start = start
        self.end = end


class BookingConflict(BusinessRuleError):
    code = "booking_conflict"

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        *,
        room_name: Optional[str] = None,
        window: Any = None,
    ) -> None:
        super().__init__(message, details)
        self.room_name = room_name
        self.window = window


class InvalidLifecycleTransition(BusinessRuleError):
    code = "invalid_lifecycle_transition"

    def __init__(self, message: str, current_status: Any) -> None:
        status_label = getattr(current_status, "value", current_status)
        super().__init__(message, f"Current status: {status_label}")
        self.current_status = current_status


class DuplicateRoomName(BusinessRuleError):
    code = "duplicate_room_name"

    def __init__(self, name: str) -> None:
        super().__init__(f"A room with the name '{name}' already exists")


class RoomHasActiveBookings(BusinessRuleError):
    code = "room_has_active_bookings"

    def __init__(self, room_id: int) -> None:
        super().__init__(
            "Cannot delete room with active bookings",
            f"Room {room_id} still has confirmed bookings that have not ended",
        )


class DuplicateUser(BusinessRuleError):
    code = "duplicate_user"


class InvalidPassword(BusinessRuleError):
    code = "invalid_password"


class AuthenticationError(BookingServiceError):
    status_code = 401
    code = "unauthorized"


class PermissionDeniedError(BookingServiceError):
    status_code = 403
    code = "forbidden"


class StorageError(BookingServiceError):
    """Persistence failure; always fatal to the current operation."""

    status_code = 503
    code = "storage_error"


class OperationCancelled(BookingServiceError):
    status_code = 499
    code = "cancelled"

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} was cancelled before it was committed")
        self.operation = operation
