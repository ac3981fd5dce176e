from datetime import datetime
import enum

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Time,
)
from sqlalchemy.orm import relationship

from roombooking.models.base import Base


class BookingStatus(str, enum.Enum):
    PENDING = "Pending"
    BOOKED = "Booked"
    REJECTED = "Rejected"


class BookingRequest(Base):
    __tablename__ = "booking_requests"
    __table_args__ = (
        Index("ix_booking_requests_room_date_status", "room_id", "date", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)

    employee_id = Column(String(64), nullable=False, index=True)
    # Denormalized at creation time
    employee_name = Column(String(255), nullable=False)

    room_id = Column(
        Integer,
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
    )

    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    purpose = Column(String(500), nullable=False)

    status = Column(
        Enum(
            BookingStatus,
            name="booking_status",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    reject_reason = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    room = relationship("Room", back_populates="booking_requests")

    @property
    def room_name(self) -> str:
        return self.room.name if self.room is not None else ""
