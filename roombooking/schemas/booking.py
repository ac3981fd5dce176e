# roombooking/schemas/booking.py
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from roombooking.config import get_settings
from roombooking.models.booking_request import BookingStatus


def _minutes(t: time) -> int:
    return t.hour * 60 + t.minute


class BookingRequestCreate(BaseModel):
    room_id: int = Field(gt=0)
    date: date
    start_time: time
    end_time: time
    purpose: str = Field(min_length=10, max_length=500)

    @field_validator("purpose")
    def strip_purpose(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 10:
            raise ValueError("Purpose must be at least 10 characters")
        return v

    @field_validator("date")
    def validate_date(cls, v: date) -> date:
        today = date.today()
        if v < today:
            raise ValueError("Booking date must be today or in the future")
        if v > today + timedelta(days=get_settings().MAX_ADVANCE_DAYS):
            raise ValueError("Booking date is too far in advance")
        return v

    @field_validator("start_time", "end_time")
    def validate_business_hours(cls, v: time) -> time:
        settings = get_settings()
        if not settings.BUSINESS_DAY_START <= v <= settings.BUSINESS_DAY_END:
            raise ValueError(
                f"Time must be between {settings.BUSINESS_DAY_START:%H:%M} "
                f"and {settings.BUSINESS_DAY_END:%H:%M}"
            )
        return v

    @field_validator("start_time")
    def validate_slot_grid(cls, v: time) -> time:
        step = get_settings().SLOT_GRANULARITY_MINUTES
        if v.second or v.microsecond or v.minute % step:
            raise ValueError(f"Start time must fall on a {step}-minute boundary")
        return v

    @model_validator(mode="after")
    def check_duration(self) -> "BookingRequestCreate":
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        settings = get_settings()
        duration = _minutes(self.end_time) - _minutes(self.start_time)
        if duration < settings.MIN_BOOKING_MINUTES:
            raise ValueError(
                f"Booking must be at least {settings.MIN_BOOKING_MINUTES} minutes long"
            )
        if duration > settings.MAX_BOOKING_MINUTES:
            raise ValueError(
                f"Booking cannot exceed {settings.MAX_BOOKING_MINUTES} minutes"
            )
        return self


class RejectPayload(BaseModel):
    reject_reason: Optional[str] = Field(default=None, max_length=500)

    @field_validator("reject_reason")
    def validate_reason(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            return None
        if len(v) < 10:
            raise ValueError("Rejection reason must be at least 10 characters")
        return v


class BookingRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: str
    employee_name: str
    room_id: int
    room_name: str
    date: date
    start_time: time
    end_time: time
    purpose: str
    status: BookingStatus
    created_at: datetime
    reject_reason: Optional[str] = None


class BookingRequestPage(BaseModel):
    data: List[BookingRequestOut]
    total_count: int
    page: int
    page_size: int
    total_pages: int


class ActionResult(BaseModel):
    message: str
    success: bool


class AvailabilityOut(BaseModel):
    available: bool
