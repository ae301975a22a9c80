"""
Configuration management using Pydantic models.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, PrivateAttr, field_validator

from .adapters.holiday_source import load_default_holiday_calendar, load_holiday_calendar
from .domain.models import HolidayCalendar, LeavePolicy

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    """Application configuration."""
    max_leave_duration_days: int = 15
    timezone: str = "UTC"
    holidays_file: Optional[Path] = None
    holidays: Optional[Dict[str, Optional[Dict[str, Optional[List[int]]]]]] = None

    _base_dir: Path = PrivateAttr(default_factory=Path.cwd)

    @field_validator("max_leave_duration_days")
    @classmethod
    def validate_max_duration(cls, value: int) -> int:
        """Ensure the maximum duration is not negative."""
        if value < 0:
            raise ValueError(f"max_leave_duration_days must not be negative, got {value}")
        return value

    @field_validator("holidays", mode="before")
    @classmethod
    def stringify_years(cls, value):
        """YAML reads bare years as ints; normalise them to string keys."""
        if isinstance(value, dict):
            return {str(year): months for year, months in value.items()}
        return value

    def get_policy(self) -> LeavePolicy:
        return LeavePolicy(max_duration_days=self.max_leave_duration_days)

    def resolve_holidays_file(self) -> Optional[Path]:
        """Resolve holidays_file relative to the config file location."""
        if self.holidays_file is None:
            return None
        if self.holidays_file.is_absolute():
            return self.holidays_file
        return self._base_dir / self.holidays_file

    def holiday_calendar(self) -> HolidayCalendar:
        """
        Build the holiday calendar.

        Inline ``holidays`` win over ``holidays_file``; without either the
        bundled national holiday table is used.
        """
        if self.holidays is not None:
            return HolidayCalendar.from_mapping(self.holidays)

        holidays_path = self.resolve_holidays_file()
        if holidays_path is not None:
            return load_holiday_calendar(holidays_path)

        return load_default_holiday_calendar()

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        config._base_dir = config_path.resolve().parent
        return config

    @classmethod
    def load_or_default(cls, config_path: Optional[Path] = None) -> "AppConfig":
        """Load the config file if present, otherwise fall back to defaults."""
        path = config_path or get_default_config_path()
        if config_path is None and not path.exists():
            logger.debug("No config file at %s, using defaults", path)
            return cls()
        return cls.load_from_yaml(path)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
