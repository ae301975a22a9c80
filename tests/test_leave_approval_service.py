"""
Tests for the LeaveApprovalService orchestration layer.
"""

from datetime import date

import pytest

from leavegate.domain.exceptions import (
    InvalidRangeError,
    LeaveNotFoundError,
    PolicyViolationError,
    ValidationError,
)
from leavegate.domain.models import LeaveStatus


def _create(service, start=date(2015, 3, 2), end=date(2015, 3, 9), **kwargs):
    params = dict(requester=2, start_date=start, end_date=end, reason="Vacation", resolver=1)
    params.update(kwargs)
    return service.create(**params)


class TestCreate:
    """Tests for leave creation."""

    def test_create_assigns_id_and_new_status(self, service):
        """New leaves get an id and start in NEW."""
        leave = _create(service)

        assert leave.id == 1
        assert leave.status is LeaveStatus.NEW
        assert leave.created_by == 2
        assert leave.updated_by == 2

    def test_create_on_behalf_of_colleague(self, service):
        """A colleague may file the request."""
        leave = _create(service, created_by=7)

        assert leave.requester == 2
        assert leave.created_by == 7

    def test_create_inverted_range_fails(self, service, repository):
        """An inverted range is rejected before anything is stored."""
        with pytest.raises(InvalidRangeError):
            _create(service, start=date(2015, 3, 9), end=date(2015, 3, 2))

        assert repository.find() == []

    def test_create_requires_reason(self, service):
        """A blank reason is rejected."""
        with pytest.raises(ValidationError):
            _create(service, reason="   ")


class TestApprove:
    """Tests for the approval policy gate."""

    def test_approve_within_policy(self, service, repository):
        """A short leave is approved and stored."""
        leave = _create(service)

        approved = service.approve(leave.id, "Enjoy")

        assert approved.status is LeaveStatus.APPROVED
        assert approved.reason == "Enjoy"
        assert repository.get(leave.id).status is LeaveStatus.APPROVED

    def test_approve_over_policy_is_business_rejection(self, service, repository):
        """Too long a leave raises PolicyViolationError and stays NEW."""
        # 20 weekdays, of which March 4 and 6 are holidays
        leave = _create(service, start=date(2015, 3, 2), end=date(2015, 3, 30))

        with pytest.raises(PolicyViolationError) as exc_info:
            service.approve(leave.id, "Enjoy")

        assert exc_info.value.result.chargeable_days == 18
        assert not exc_info.value.result.within_policy
        assert repository.get(leave.id).status is LeaveStatus.NEW

    def test_approve_requires_reason(self, service):
        """Approval needs a reason."""
        leave = _create(service)

        with pytest.raises(ValidationError):
            service.approve(leave.id, "")

    def test_approve_unknown_leave(self, service):
        """Approving an unknown id fails."""
        with pytest.raises(LeaveNotFoundError):
            service.approve(42, "Enjoy")

    def test_cannot_approve_twice(self, service):
        """An approved leave cannot be approved again."""
        leave = _create(service)
        service.approve(leave.id, "Enjoy")

        with pytest.raises(ValidationError, match="already approved"):
            service.approve(leave.id, "Again")

    def test_preview_does_not_change_status(self, service, repository):
        """Preview evaluates without touching the status."""
        leave = _create(service)

        result = service.preview(leave.id)

        # March 2-9 2015: five weekdays minus holidays on the 4th and 6th
        assert result.chargeable_days == 3
        assert repository.get(leave.id).status is LeaveStatus.NEW


class TestRejectUpdateDelete:
    """Tests for the remaining workflow operations."""

    def test_reject(self, service):
        """Rejecting stores the status and reason."""
        leave = _create(service)

        rejected = service.reject(leave.id, "Busy quarter")

        assert rejected.status is LeaveStatus.REJECTED
        assert rejected.reason == "Busy quarter"

    def test_cannot_approve_rejected_leave(self, service):
        """A rejected leave cannot be approved."""
        leave = _create(service)
        service.reject(leave.id, "Busy quarter")

        with pytest.raises(ValidationError):
            service.approve(leave.id, "Changed my mind")

    def test_update_dates(self, service):
        """Dates of a NEW leave can change."""
        leave = _create(service)

        updated = service.update(leave.id, end_date=date(2015, 3, 3), updated_by=1)

        assert updated.end_date == date(2015, 3, 3)
        assert updated.updated_by == 1

    def test_update_rejects_inverted_range(self, service):
        """Updating to an inverted range fails."""
        leave = _create(service)

        with pytest.raises(InvalidRangeError):
            service.update(leave.id, start_date=date(2015, 3, 20))

    def test_cannot_stretch_approved_leave(self, service, repository):
        """Dates of an approved leave are frozen at what passed the gate."""
        leave = _create(service)
        service.approve(leave.id, "Enjoy")

        with pytest.raises(ValidationError, match="already approved"):
            service.update(leave.id, end_date=date(2015, 6, 1))

        stored = repository.get(leave.id)
        assert stored.status is LeaveStatus.APPROVED
        assert stored.end_date == date(2015, 3, 9)
        assert service.preview(leave.id).within_policy

    def test_cannot_change_dates_of_rejected_leave(self, service):
        """A rejected leave keeps its dates."""
        leave = _create(service)
        service.reject(leave.id, "Busy quarter")

        with pytest.raises(ValidationError, match="already rejected"):
            service.update(leave.id, start_date=date(2015, 3, 3))

    def test_update_reason_of_approved_leave(self, service):
        """Only the dates are locked once a leave is resolved."""
        leave = _create(service)
        service.approve(leave.id, "Enjoy")

        updated = service.update(leave.id, reason="Family trip")

        assert updated.reason == "Family trip"
        assert updated.status is LeaveStatus.APPROVED

    def test_delete(self, service):
        """Deleted leaves are gone and cannot be deleted twice."""
        leave = _create(service)

        service.delete(leave.id)

        with pytest.raises(LeaveNotFoundError):
            service.get(leave.id)
        with pytest.raises(LeaveNotFoundError):
            service.delete(leave.id)


class TestSearch:
    """Tests for searching a user's leaves."""

    def test_search_splits_requested_and_to_resolve(self, service):
        """Search separates own requests from leaves to resolve."""
        _create(service, requester=2, resolver=1)
        _create(service, requester=3, resolver=2)
        _create(service, requester=1, resolver=1)

        result = service.search(2)

        assert [leave.requester for leave in result.requested] == [2]
        assert [leave.requester for leave in result.to_resolve] == [3]

    def test_search_unknown_user_is_empty(self, service):
        """A user without leaves gets empty lists."""
        _create(service)

        result = service.search(99)

        assert result.requested == []
        assert result.to_resolve == []
