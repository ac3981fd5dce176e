from roombooking.models.base import Base  # noqa: F401

from roombooking.models.user import User, UserRole  # noqa: F401
from roombooking.models.room import Room  # noqa: F401
from roombooking.models.booking_request import BookingRequest, BookingStatus  # noqa: F401
from roombooking.models.notification import Notification, NotificationType  # noqa: F401
