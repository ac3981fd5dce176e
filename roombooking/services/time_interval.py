# roombooking/services/time_interval.py
from dataclasses import dataclass
from datetime import date, datetime, time

from roombooking.errors import InvalidTimeRange


@dataclass(frozen=True)
class TimeInterval:
    """
    Half-open window [start, end) on a single calendar day.

    Two intervals overlap only when they share the same date and at least
    one instant; touching endpoints (A ends 10:00, B starts 10:00) do not.
    """

    date: date
    start: time
    end: time

    def __post_init__(self) -> None:
        # A datetime is also a date; keep only the calendar day
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())
        if self.start >= self.end:
            raise InvalidTimeRange(self.start, self.end)

    def overlaps(self, other: "TimeInterval") -> bool:
        return (
            self.date == other.date
            and self.start < other.end
            and other.start < self.end
        )

    def describe(self) -> str:
        return (
            f"{self.date.isoformat()} "
            f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"
        )

    @classmethod
    def of(cls, booking) -> "TimeInterval":
        """Interval of anything carrying date/start_time/end_time."""
        return cls(date=booking.date, start=booking.start_time, end=booking.end_time)
