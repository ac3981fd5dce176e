# roombooking/schemas/room.py
from datetime import time
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoomIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    location: str = Field(min_length=1, max_length=200)
    capacity: int = Field(gt=0, le=1000)
    description: Optional[str] = Field(default=None, max_length=500)
    amenities: List[str] = Field(default_factory=list)
    image_urls: Optional[List[str]] = None

    @field_validator("name", "location")
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class RoomOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    location: str
    capacity: int
    description: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)
    image_urls: List[str] = Field(default_factory=list)


class BookingInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employee_name: str
    start_time: time
    end_time: time
    purpose: str


class RoomScheduleOut(BaseModel):
    id: int
    name: str
    location: str
    capacity: int
    bookings: List[BookingInfo]
