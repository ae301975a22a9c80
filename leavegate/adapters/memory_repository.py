"""
In-memory leave storage for the CLI and tests.
"""

from dataclasses import replace
from typing import Dict, List, Optional

from ..domain.models import LeaveRequest


class InMemoryLeaveRepository:
    """
    Stores leave requests in a dict keyed by id.

    Records are copied on the way in and out, so callers never share state
    with the store. Not thread-safe.
    """

    def __init__(self):
        self._leaves: Dict[int, LeaveRequest] = {}
        self._next_id = 1

    def add(self, leave: LeaveRequest) -> LeaveRequest:
        """Persist a new leave and return it with its assigned id."""
        stored = replace(leave, id=self._next_id)
        self._leaves[stored.id] = stored
        self._next_id += 1
        return replace(stored)

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        leave = self._leaves.get(leave_id)
        return replace(leave) if leave else None

    def save(self, leave: LeaveRequest) -> LeaveRequest:
        """Overwrite an existing leave."""
        if leave.id not in self._leaves:
            raise KeyError(leave.id)
        self._leaves[leave.id] = replace(leave)
        return replace(leave)

    def delete(self, leave_id: int) -> bool:
        """Remove a leave; returns False if it did not exist."""
        return self._leaves.pop(leave_id, None) is not None

    def find(
        self,
        requester: Optional[int] = None,
        resolver: Optional[int] = None
    ) -> List[LeaveRequest]:
        """Return leaves matching all given criteria, ordered by id."""
        result: List[LeaveRequest] = []

        for leave_id in sorted(self._leaves):
            leave = self._leaves[leave_id]
            if requester is not None and leave.requester != requester:
                continue
            if resolver is not None and leave.resolver != resolver:
                continue
            result.append(replace(leave))

        return result
