"""
Domain-specific exception hierarchy for the leavegate application.
"""


class LeaveGateError(Exception):
    """Base class for all application-level errors."""


class InvalidRangeError(LeaveGateError, ValueError):
    """Raised when a date range starts after it ends."""


class HolidayCalendarError(LeaveGateError):
    """Raised when holiday data cannot be loaded or parsed."""


class ValidationError(LeaveGateError):
    """Raised when a leave request carries invalid or missing input."""


class LeaveNotFoundError(LeaveGateError):
    """Raised when a leave request id is unknown."""


class PolicyViolationError(LeaveGateError):
    """Raised when a leave exceeds the maximum allowed duration."""

    def __init__(self, message: str, result):
        super().__init__(message)
        self.result = result
