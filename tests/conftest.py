"""
Shared fixtures.
"""

import pytest

from leavegate.adapters.memory_repository import InMemoryLeaveRepository
from leavegate.domain.models import HolidayCalendar, LeavePolicy
from leavegate.services.leave_approval import LeaveApprovalService


@pytest.fixture
def february_calendar():
    """The February 2015 holidays of the national table."""
    return HolidayCalendar.from_mapping({2015: {"February": [3, 5, 7, 8, 9]}})


@pytest.fixture
def policy():
    return LeavePolicy(max_duration_days=15)


@pytest.fixture
def repository():
    return InMemoryLeaveRepository()


@pytest.fixture
def service(repository, policy):
    calendar = HolidayCalendar.from_mapping({2015: {"March": [4, 6, 8]}})
    return LeaveApprovalService(repository=repository, calendar=calendar, policy=policy)
