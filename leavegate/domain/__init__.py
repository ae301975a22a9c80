"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import (
    HolidayCalendarError,
    InvalidRangeError,
    LeaveGateError,
    LeaveNotFoundError,
    PolicyViolationError,
    ValidationError,
)
from .leave_duration import LeaveDurationEvaluator, iter_dates
from .models import (
    DateRange,
    EvaluationResult,
    HolidayCalendar,
    LeavePolicy,
    LeaveRequest,
    LeaveStatus,
)

__all__ = [
    "DateRange",
    "EvaluationResult",
    "HolidayCalendar",
    "LeavePolicy",
    "LeaveRequest",
    "LeaveStatus",
    "LeaveDurationEvaluator",
    "iter_dates",
    "LeaveGateError",
    "InvalidRangeError",
    "HolidayCalendarError",
    "ValidationError",
    "LeaveNotFoundError",
    "PolicyViolationError",
]
