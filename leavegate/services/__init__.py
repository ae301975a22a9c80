"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .leave_approval import LeaveApprovalService, LeaveRepository, LeaveSearchResult

__all__ = ["LeaveApprovalService", "LeaveRepository", "LeaveSearchResult"]
