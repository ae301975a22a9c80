"""
Adapters layer - Holiday data sources and leave storage.
"""

from .holiday_source import load_default_holiday_calendar, load_holiday_calendar
from .memory_repository import InMemoryLeaveRepository

__all__ = ["load_default_holiday_calendar", "load_holiday_calendar", "InMemoryLeaveRepository"]
