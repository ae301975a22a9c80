"""
Business-day leave duration and the maximum-duration policy gate.

Pure domain logic: no persistence, no I/O beyond debug logging.
"""

import logging
from datetime import date
from typing import Iterator, List

from pendulum import Date

from .models import DateRange, EvaluationResult, HolidayCalendar, LeavePolicy, to_date

logger = logging.getLogger(__name__)

SATURDAY = 6
SUNDAY = 7


def iter_dates(start: date, end: date) -> Iterator[Date]:
    """
    Yield every calendar date in the half-open interval [start, end).

    Each call returns a fresh generator, so the sequence can be walked again.
    """
    current = to_date(start)
    stop = to_date(end)

    while current < stop:
        yield current
        current = current.add(days=1)


def is_weekend(value: date) -> bool:
    """Check if a date falls on Saturday or Sunday."""
    return value.isoweekday() in (SATURDAY, SUNDAY)


class LeaveDurationEvaluator:
    """
    Counts chargeable leave days and checks them against a leave policy.

    Algorithm:
    1. Raw span is the whole-day difference between start and end
    2. Walk every date in [start, end)
    3. Weekend days are excluded; remaining days listed in the holiday
       calendar are excluded too, so no day is excluded twice
    4. Chargeable days are compared with the policy maximum
    """

    def evaluate(
        self,
        date_range: DateRange,
        calendar: HolidayCalendar,
        policy: LeavePolicy
    ) -> EvaluationResult:
        """
        Evaluate a leave range.

        Args:
            date_range: Requested leave, end exclusive
            calendar: National holidays to exclude
            policy: Maximum allowed chargeable days

        Returns:
            EvaluationResult with day counts and the policy verdict
        """
        raw_days = date_range.span_days()
        excluded = self._excluded_dates(date_range, calendar)

        chargeable_days = raw_days - len(excluded)
        within_policy = policy.allows(chargeable_days)

        logger.debug(
            "Leave %s: %d raw day(s), %d chargeable after weekends and holidays",
            date_range, raw_days, chargeable_days
        )

        return EvaluationResult(
            raw_days=raw_days,
            excluded_days=len(excluded),
            chargeable_days=chargeable_days,
            within_policy=within_policy,
            excluded_dates=tuple(excluded),
        )

    def evaluate_dates(
        self,
        start: date,
        end: date,
        calendar: HolidayCalendar,
        policy: LeavePolicy
    ) -> EvaluationResult:
        """
        Convenience wrapper building the DateRange first.

        Raises:
            InvalidRangeError: If start is after end
        """
        return self.evaluate(DateRange(start=start, end=end), calendar, policy)

    def chargeable_days(self, date_range: DateRange, calendar: HolidayCalendar) -> int:
        """Count chargeable days without applying a policy."""
        return date_range.span_days() - len(self._excluded_dates(date_range, calendar))

    def _excluded_dates(self, date_range: DateRange, calendar: HolidayCalendar) -> List[Date]:
        excluded: List[Date] = []

        for day in iter_dates(date_range.start, date_range.end):
            if is_weekend(day):
                excluded.append(day)
            elif calendar.is_holiday(day):
                excluded.append(day)

        return excluded
