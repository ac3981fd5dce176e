# tests/test_time_interval.py
from datetime import date, datetime, time

import pytest

from roombooking.errors import InvalidTimeRange
from roombooking.services.time_interval import TimeInterval

DAY = date(2025, 3, 10)


def _iv(start_h, start_m, end_h, end_m, on=DAY):
    return TimeInterval(date=on, start=time(start_h, start_m), end=time(end_h, end_m))


def test_partial_overlap_is_detected_both_ways():
    a = _iv(9, 0, 10, 0)
    b = _iv(9, 30, 10, 30)
    assert a.overlaps(b)
    assert b.overlaps(a)


def test_containment_counts_as_overlap():
    outer = _iv(9, 0, 12, 0)
    inner = _iv(10, 0, 10, 30)
    assert outer.overlaps(inner)
    assert inner.overlaps(outer)


def test_identical_windows_overlap():
    assert _iv(9, 0, 10, 0).overlaps(_iv(9, 0, 10, 0))


def test_back_to_back_windows_do_not_overlap():
    first = _iv(9, 0, 10, 0)
    second = _iv(10, 0, 11, 0)
    assert not first.overlaps(second)
    assert not second.overlaps(first)


def test_same_times_on_different_dates_do_not_overlap():
    assert not _iv(9, 0, 10, 0).overlaps(_iv(9, 0, 10, 0, on=date(2025, 3, 11)))


@pytest.mark.parametrize("start,end", [(time(10, 0), time(9, 0)), (time(9, 0), time(9, 0))])
def test_empty_or_inverted_window_is_rejected(start, end):
    with pytest.raises(InvalidTimeRange) as exc_info:
        TimeInterval(date=DAY, start=start, end=end)
    assert exc_info.value.message == "Start time must be before end time"
    assert exc_info.value.status_code == 400


def test_datetime_is_reduced_to_its_calendar_day():
    iv = TimeInterval(date=datetime(2025, 3, 10, 15, 45), start=time(9, 0), end=time(10, 0))
    assert iv.date == DAY
    assert not isinstance(iv.date, datetime)


def test_describe():
    assert _iv(9, 0, 10, 30).describe() == "2025-03-10 09:00-10:30"
