"""Date arithmetic used by resolution and pricing."""

from __future__ import annotations

import calendar
from datetime import date


def year_fraction_act365f(start: date, end: date) -> float:
    """Actual/365 Fixed year fraction; negative when end is before start."""
    return (end - start).days / 365.0


def year_fraction_act360(start: date, end: date) -> float:
    """Actual/360 year fraction; negative when end is before start."""
    return (end - start).days / 360.0


def add_months(d: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month."""
    year, month_index = divmod(d.month - 1 + months, 12)
    year += d.year
    month = month_index + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
