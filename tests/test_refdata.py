"""Tests for holiday calendars and reference data."""

from datetime import date

import pytest

from riskcalc.errors import ReferenceDataNotFoundError
from riskcalc.refdata import NO_HOLIDAYS, SAT_SUN, HolidayCalendar, ReferenceData


def test_weekend_calendar_adjustments() -> None:
    """Sat/Sun rolls Saturday forward to Monday and backward to Friday."""
    cal = ReferenceData.standard().holiday_calendar(SAT_SUN)
    saturday = date(2024, 3, 2)
    assert cal.next_or_same(saturday) == date(2024, 3, 4)
    assert cal.previous_or_same(saturday) == date(2024, 3, 1)
    assert cal.next_or_same(date(2024, 3, 1)) == date(2024, 3, 1)


def test_shift_skips_weekends_and_holidays() -> None:
    cal = HolidayCalendar("XLON", holidays=frozenset({date(2024, 3, 4)}))
    assert cal.shift(date(2024, 3, 1), 1) == date(2024, 3, 5)
    assert cal.shift(date(2024, 3, 5), -2) == date(2024, 2, 29)


def test_no_holidays_calendar_has_no_weekend() -> None:
    cal = ReferenceData.standard().holiday_calendar(NO_HOLIDAYS)
    assert cal.is_business_day(date(2024, 3, 2))


def test_unknown_calendar_raises() -> None:
    with pytest.raises(ReferenceDataNotFoundError, match="Holiday calendar 'XNYS' not found"):
        ReferenceData.standard().holiday_calendar("XNYS")


def test_combined_with_prefers_self() -> None:
    """Built-ins are always present; on a name clash self wins."""
    a = ReferenceData.of(HolidayCalendar("XLON", holidays=frozenset({date(2024, 12, 25)})))
    b = ReferenceData.of(HolidayCalendar("XLON"), HolidayCalendar("XNYS"))
    combined = a.combined_with(b)
    assert combined.holiday_calendar("XLON") == a.holiday_calendar("XLON")
    assert combined.holiday_calendar("XNYS").name == "XNYS"
    assert combined.holiday_calendar(SAT_SUN).name == SAT_SUN
    assert ReferenceData.standard() == ReferenceData()
