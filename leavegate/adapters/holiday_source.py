"""
Holiday calendar loading from YAML or JSON files.
"""

import json
import logging
from pathlib import Path

import yaml

from ..domain.exceptions import HolidayCalendarError
from ..domain.models import HolidayCalendar

logger = logging.getLogger(__name__)

DEFAULT_HOLIDAYS_FILE = Path(__file__).parent / "national_holidays.json"


def load_holiday_calendar(path: Path) -> HolidayCalendar:
    """
    Load a holiday calendar from a file.

    The file holds a ``{year: {month_name: [day, ...]}}`` mapping, either at
    the root or below a ``holidays`` key. Files ending in ``.json`` are read
    as JSON, everything else as YAML.

    Args:
        path: Path to the holiday file

    Returns:
        HolidayCalendar instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        HolidayCalendarError: If the content is not a valid holiday table
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Holiday file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise HolidayCalendarError(f"Invalid holiday file {path}: {exc}") from exc

    if isinstance(data, dict) and "holidays" in data:
        data = data["holidays"]

    calendar = HolidayCalendar.from_mapping(data)
    logger.info("Loaded %d holiday(s) for year(s) %s from %s", len(calendar), calendar.years(), path)
    return calendar


def load_default_holiday_calendar() -> HolidayCalendar:
    """Load the bundled national holiday table."""
    return load_holiday_calendar(DEFAULT_HOLIDAYS_FILE)
