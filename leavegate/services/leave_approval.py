"""
Application service for the leave request workflow.

The service coordinates storage via a repository adapter and delegates the
duration check to the domain-level ``LeaveDurationEvaluator``. Depending on a
protocol rather than a concrete store keeps the workflow testable with the
in-memory repository.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Protocol

import pendulum

from ..domain.exceptions import (
    LeaveNotFoundError,
    PolicyViolationError,
    ValidationError,
)
from ..domain.leave_duration import LeaveDurationEvaluator
from ..domain.models import (
    DateRange,
    EvaluationResult,
    HolidayCalendar,
    LeavePolicy,
    LeaveRequest,
    LeaveStatus,
)

logger = logging.getLogger(__name__)


class LeaveRepository(Protocol):
    """Protocol describing the storage behaviour needed by the service."""

    def add(self, leave: LeaveRequest) -> LeaveRequest:
        """Persist a new leave and return it with an id."""

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        """Return the leave or None."""

    def save(self, leave: LeaveRequest) -> LeaveRequest:
        """Store changes to an existing leave."""

    def delete(self, leave_id: int) -> bool:
        """Remove a leave; False if it did not exist."""

    def find(
        self,
        requester: Optional[int] = None,
        resolver: Optional[int] = None,
    ) -> List[LeaveRequest]:
        """Return leaves matching the criteria."""


@dataclass
class LeaveSearchResult:
    """Leaves a user asked for and leaves waiting on the user's decision."""
    requested: List[LeaveRequest] = field(default_factory=list)
    to_resolve: List[LeaveRequest] = field(default_factory=list)


def _require_reason(reason: Optional[str]) -> str:
    if reason is None or not str(reason).strip():
        raise ValidationError("reason should be a non-empty string")
    return str(reason).strip()


class LeaveApprovalService:
    """
    Orchestrates leave creation, approval and rejection.

    Approval runs the policy gate first. A leave over the maximum duration is
    a business rejection: ``PolicyViolationError`` is raised and the stored
    leave stays untouched.
    """

    def __init__(
        self,
        repository: LeaveRepository,
        calendar: HolidayCalendar,
        policy: LeavePolicy,
        evaluator: Optional[LeaveDurationEvaluator] = None,
    ) -> None:
        self._repository = repository
        self._calendar = calendar
        self._policy = policy
        self._evaluator = evaluator or LeaveDurationEvaluator()

    def create(
        self,
        *,
        requester: int,
        start_date: date,
        end_date: date,
        reason: str,
        created_by: Optional[int] = None,
        resolver: Optional[int] = None,
    ) -> LeaveRequest:
        """
        Store a new leave request in status NEW.

        A leave may be filed on behalf of a colleague, so ``created_by``
        defaults to the requester only when not given.

        Raises:
            InvalidRangeError: If the start date is after the end date
            ValidationError: If the reason is empty
        """
        date_range = DateRange(start=start_date, end=end_date)
        author = created_by if created_by is not None else requester

        leave = LeaveRequest(
            reason=_require_reason(reason),
            start_date=date_range.start,
            end_date=date_range.end,
            requester=requester,
            resolver=resolver,
            created_by=author,
            updated_by=author,
        )
        stored = self._repository.add(leave)
        logger.info("Created leave %s for user %s (%s)", stored.id, requester, date_range)
        return stored

    def get(self, leave_id: int) -> LeaveRequest:
        """Return a leave or raise LeaveNotFoundError."""
        leave = self._repository.get(leave_id)
        if leave is None:
            raise LeaveNotFoundError(f"Leave not found for id {leave_id}")
        return leave

    def preview(self, leave_id: int) -> EvaluationResult:
        """Evaluate a stored leave without changing it."""
        leave = self.get(leave_id)
        return self._evaluator.evaluate(leave.date_range, self._calendar, self._policy)

    def approve(self, leave_id: int, reason: str) -> LeaveRequest:
        """
        Approve a leave if it passes the maximum-duration policy.

        Raises:
            ValidationError: If the reason is empty or the leave is already resolved
            LeaveNotFoundError: If the leave does not exist
            PolicyViolationError: If the leave has too many chargeable days
        """
        reason = _require_reason(reason)
        leave = self._get_unresolved(leave_id)

        result = self._evaluator.evaluate(leave.date_range, self._calendar, self._policy)
        if not result.within_policy:
            logger.warning(
                "Leave %s has %d chargeable day(s), maximum is %d",
                leave_id, result.chargeable_days, self._policy.max_duration_days
            )
            raise PolicyViolationError(
                f"Maximum leave duration is {self._policy.max_duration_days} days "
                f"excluding national holidays and weekends",
                result,
            )

        logger.info("Approving leave %s", leave_id)
        return self._transition(leave, LeaveStatus.APPROVED, reason)

    def reject(self, leave_id: int, reason: str) -> LeaveRequest:
        """
        Reject a leave.

        Raises:
            ValidationError: If the reason is empty or the leave is already resolved
            LeaveNotFoundError: If the leave does not exist
        """
        reason = _require_reason(reason)
        leave = self._get_unresolved(leave_id)

        logger.info("Rejecting leave %s", leave_id)
        return self._transition(leave, LeaveStatus.REJECTED, reason)

    def update(
        self,
        leave_id: int,
        *,
        reason: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        updated_by: Optional[int] = None,
    ) -> LeaveRequest:
        """
        Change reason or dates of a leave.

        Dates can only change while the leave is NEW, so an approved leave
        always keeps the range that passed the policy gate.

        Raises:
            InvalidRangeError: If the resulting range is invalid
            ValidationError: If an empty reason is given, or new dates are
                given for a leave that is already resolved
            LeaveNotFoundError: If the leave does not exist
        """
        if start_date is not None or end_date is not None:
            leave = self._get_unresolved(leave_id)
        else:
            leave = self.get(leave_id)

        date_range = DateRange(
            start=start_date if start_date is not None else leave.start_date,
            end=end_date if end_date is not None else leave.end_date,
        )
        leave.start_date = date_range.start
        leave.end_date = date_range.end

        if reason is not None:
            leave.reason = _require_reason(reason)
        if updated_by is not None:
            leave.updated_by = updated_by
        leave.updated_at = pendulum.now("UTC")

        return self._repository.save(leave)

    def delete(self, leave_id: int) -> None:
        if not self._repository.delete(leave_id):
            raise LeaveNotFoundError(f"Leave not found for id {leave_id}")
        logger.info("Deleted leave %s", leave_id)

    def search(self, user_id: int) -> LeaveSearchResult:
        """Return the leaves requested by a user and those the user resolves."""
        return LeaveSearchResult(
            requested=self._repository.find(requester=user_id),
            to_resolve=self._repository.find(resolver=user_id),
        )

    def _get_unresolved(self, leave_id: int) -> LeaveRequest:
        leave = self.get(leave_id)
        if leave.status is not LeaveStatus.NEW:
            raise ValidationError(
                f"Leave {leave_id} is already {leave.status.value.lower()}"
            )
        return leave

    def _transition(self, leave: LeaveRequest, status: LeaveStatus, reason: str) -> LeaveRequest:
        leave.status = status
        leave.reason = reason
        leave.updated_at = pendulum.now("UTC")
        return self._repository.save(leave)
