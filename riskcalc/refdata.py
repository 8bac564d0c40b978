"""
Reference data: holiday calendars keyed by name.

Reference data is consulted while resolving targets. A target naming a
calendar that is not available cannot be resolved, which aborts the whole
calculation for that target.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from types import MappingProxyType
from typing import Mapping

from riskcalc.errors import ReferenceDataNotFoundError

NO_HOLIDAYS = "NoHolidays"
SAT_SUN = "Sat/Sun"


@dataclass(frozen=True)
class HolidayCalendar:
    """Business day calendar: weekend days (0=Monday) plus explicit holidays."""

    name: str
    holidays: frozenset[date] = frozenset()
    weekend_days: frozenset[int] = frozenset({5, 6})

    def is_holiday(self, d: date) -> bool:
        return d.weekday() in self.weekend_days or d in self.holidays

    def is_business_day(self, d: date) -> bool:
        return not self.is_holiday(d)

    def next_or_same(self, d: date) -> date:
        while self.is_holiday(d):
            d += timedelta(days=1)
        return d

    def previous_or_same(self, d: date) -> date:
        while self.is_holiday(d):
            d -= timedelta(days=1)
        return d

    def shift(self, d: date, amount: int) -> date:
        """Move by `amount` business days (negative moves backwards)."""
        step = timedelta(days=1 if amount >= 0 else -1)
        remaining = abs(amount)
        while remaining > 0:
            d += step
            if self.is_business_day(d):
                remaining -= 1
        return d


_BUILT_IN = {
    NO_HOLIDAYS: HolidayCalendar(NO_HOLIDAYS, weekend_days=frozenset()),
    SAT_SUN: HolidayCalendar(SAT_SUN),
}


class ReferenceData:
    """Immutable set of named holiday calendars; built-in calendars are always present."""

    def __init__(self, calendars: Mapping[str, HolidayCalendar] | None = None) -> None:
        merged = dict(_BUILT_IN)
        merged.update(calendars or {})
        self._calendars: Mapping[str, HolidayCalendar] = MappingProxyType(merged)

    @classmethod
    def standard(cls) -> ReferenceData:
        return cls()

    @classmethod
    def of(cls, *calendars: HolidayCalendar) -> ReferenceData:
        return cls({cal.name: cal for cal in calendars})

    def holiday_calendar(self, name: str) -> HolidayCalendar:
        try:
            return self._calendars[name]
        except KeyError:
            raise ReferenceDataNotFoundError(
                f"Holiday calendar '{name}' not found in reference data. "
                f"Available calendars: {sorted(self._calendars)}"
            ) from None

    def combined_with(self, other: ReferenceData) -> ReferenceData:
        """Combine two sets; calendars in self win on a name clash."""
        merged = dict(other._calendars)
        merged.update(self._calendars)
        return ReferenceData(merged)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReferenceData):
            return NotImplemented
        return dict(self._calendars) == dict(other._calendars)

    def __hash__(self) -> int:
        return hash(frozenset(self._calendars.items()))
