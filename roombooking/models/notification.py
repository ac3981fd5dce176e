from datetime import datetime
import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String

from roombooking.models.base import Base


class NotificationType(str, enum.Enum):
    CONFLICT = "Conflict"
    CONFIRMED = "Confirmed"
    REJECTED = "Rejected"
    NEW_REQUEST = "NewRequest"
    REMINDER = "Reminder"
    SYSTEM = "System"


class Notification(Base):
    """In-app notification shown in the user's notification bell."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(String(64), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    message = Column(String(1000), nullable=False)

    type = Column(
        Enum(
            NotificationType,
            name="notification_type",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    is_read = Column(Boolean, nullable=False, default=False)

    booking_request_id = Column(
        Integer,
        ForeignKey("booking_requests.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
