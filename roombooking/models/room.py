from sqlalchemy import JSON, Column, Index, Integer, String, func
from sqlalchemy.orm import relationship

from roombooking.models.base import Base


class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)

    # Unique ignoring case, see uq_rooms_name_lower
    name = Column(String(100), nullable=False, index=True)
    location = Column(String(200), nullable=False)
    capacity = Column(Integer, nullable=False)
    description = Column(String(500), nullable=True)

    amenities = Column(JSON, nullable=False, default=list)
    image_urls = Column(JSON, nullable=False, default=list)

    booking_requests = relationship(
        "BookingRequest",
        back_populates="room",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("uq_rooms_name_lower", func.lower(name), unique=True),
    )
