"""
Domain models for leave ranges, holiday calendars and approval policy.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

import pendulum
from pendulum import Date, DateTime

from .exceptions import HolidayCalendarError, InvalidRangeError

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def to_date(value: date) -> Date:
    """Normalise a date, datetime or pendulum value to a pendulum Date."""
    return pendulum.date(value.year, value.month, value.day)


def month_name(value: date) -> str:
    """English month name used as key in holiday calendars."""
    return MONTH_NAMES[value.month - 1]


@dataclass(frozen=True)
class DateRange:
    """
    Represents an immutable range of calendar days.

    Invariant: start must not be after end. Time of day is discarded.
    """
    start: Date
    end: Date

    def __post_init__(self):
        object.__setattr__(self, "start", to_date(self.start))
        object.__setattr__(self, "end", to_date(self.end))
        if self.start > self.end:
            raise InvalidRangeError(
                f"Start date {self.start} must not be after end date {self.end}"
            )

    def span_days(self) -> int:
        """Return the number of days between start and end (end exclusive)."""
        return self.start.diff(self.end).in_days()

    def __str__(self) -> str:
        return f"{self.start.format('YYYY-MM-DD')} - {self.end.format('YYYY-MM-DD')}"


@dataclass(frozen=True)
class HolidayCalendar:
    """
    National holidays keyed by year, then English month name.

    A year or month without an entry simply has no holidays.
    """
    entries: Mapping[int, Mapping[str, FrozenSet[int]]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping]) -> "HolidayCalendar":
        """
        Build a calendar from plain nested mappings.

        Args:
            data: ``{year: {month_name: [day, ...]}}``. Years may be given as
                strings (as JSON and YAML keys often are), month names are
                matched case-insensitively.

        Raises:
            HolidayCalendarError: If a year, month or day is not valid
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise HolidayCalendarError("Holiday data must be a mapping of years.")

        entries: Dict[int, Dict[str, FrozenSet[int]]] = {}
        for raw_year, months in data.items():
            try:
                year = int(raw_year)
            except (TypeError, ValueError) as exc:
                raise HolidayCalendarError(f"Invalid year in holiday data: {raw_year!r}") from exc

            if months is None:
                continue
            if not isinstance(months, Mapping):
                raise HolidayCalendarError(f"Holidays for {year} must be a mapping of months.")

            year_entries: Dict[str, FrozenSet[int]] = {}
            for raw_month, days in months.items():
                name = str(raw_month).strip().capitalize()
                if name not in MONTH_NAMES:
                    raise HolidayCalendarError(f"Unknown month name: {raw_month!r}")
                month_number = MONTH_NAMES.index(name) + 1

                if days is not None and not isinstance(days, (list, tuple, set, frozenset)):
                    raise HolidayCalendarError(f"Holidays for {name} {year} must be a list of days.")

                day_set = set(year_entries.get(name, frozenset()))
                for day in days or []:
                    if isinstance(day, bool) or not isinstance(day, int):
                        raise HolidayCalendarError(
                            f"Invalid holiday {day!r} in {name} {year}"
                        )
                    try:
                        pendulum.date(year, month_number, day)
                    except ValueError as exc:
                        raise HolidayCalendarError(
                            f"Invalid holiday {day!r} in {name} {year}"
                        ) from exc
                    day_set.add(day)
                year_entries[name] = frozenset(day_set)

            entries[year] = year_entries

        return cls(entries=entries)

    def contains(self, year: int, month: str, day: int) -> bool:
        """Check whether the (year, month name, day) triple is a holiday."""
        return day in self.entries.get(year, {}).get(month, frozenset())

    def is_holiday(self, value: date) -> bool:
        """Check if a given date is listed as a holiday."""
        return self.contains(value.year, month_name(value), value.day)

    def years(self) -> List[int]:
        return sorted(self.entries)

    def holidays_in(self, year: int) -> List[Date]:
        """Return all holidays of a year in chronological order."""
        result: List[Date] = []
        for month, days in self.entries.get(year, {}).items():
            month_number = MONTH_NAMES.index(month) + 1
            result.extend(pendulum.date(year, month_number, day) for day in days)
        return sorted(result)

    def __len__(self) -> int:
        return sum(
            len(days)
            for months in self.entries.values()
            for days in months.values()
        )


@dataclass(frozen=True)
class LeavePolicy:
    """Organisation policy on leave length."""
    max_duration_days: int = 15

    def __post_init__(self):
        if self.max_duration_days < 0:
            raise ValueError(
                f"max_duration_days must not be negative, got {self.max_duration_days}"
            )

    def allows(self, chargeable_days: int) -> bool:
        return chargeable_days <= self.max_duration_days


@dataclass(frozen=True)
class EvaluationResult:
    """
    Outcome of a single leave evaluation.

    Derived on every call and never persisted.
    """
    raw_days: int
    excluded_days: int
    chargeable_days: int
    within_policy: bool
    excluded_dates: Tuple[Date, ...] = ()


class LeaveStatus(str, Enum):
    """Lifecycle states of a leave request."""
    NEW = "NEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass
class LeaveRequest:
    """
    A leave record as stored by the persistence layer.
    """
    reason: str
    start_date: Date
    end_date: Date
    requester: int
    resolver: Optional[int]
    created_by: int
    updated_by: int
    status: LeaveStatus = LeaveStatus.NEW
    id: Optional[int] = None
    created_at: DateTime = field(default_factory=lambda: pendulum.now("UTC"))
    updated_at: DateTime = field(default_factory=lambda: pendulum.now("UTC"))

    @property
    def date_range(self) -> DateRange:
        """The requested range; raises InvalidRangeError if the record is inconsistent."""
        return DateRange(start=self.start_date, end=self.end_date)
