"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import time
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .domain.exceptions import InvalidConfigurationError
from .domain.models import WorkingHours, parse_time_of_day

BUNDLED_CALENDAR_FILE = Path(__file__).parent / "data" / "calendar.csv"


class WorkingHoursConfig(BaseModel):
    """Daily working hours, given as zero-padded HH:MM strings."""
    start: time = time(7, 0)
    end: time = time(19, 0)

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_clock_time(cls, value: Any) -> Any:
        """Accept HH:MM strings and naive time objects only."""
        if isinstance(value, str):
            return parse_time_of_day(value)
        if isinstance(value, time):
            if value.tzinfo is not None:
                raise ValueError(f"Working hours must not carry a timezone, got {value}")
            return value
        # Unquoted 10:00 in YAML arrives as the sexagesimal integer 600
        raise ValueError(
            f"Invalid working hours value {value!r}; quote times in YAML, e.g. \"10:00\""
        )

    @model_validator(mode="after")
    def validate_hours_order(self) -> "WorkingHoursConfig":
        """Ensure the configured window opens before it closes."""
        if self.end <= self.start:
            raise ValueError("working_hours.end must be later than working_hours.start")
        return self

    def to_working_hours(self) -> WorkingHours:
        return WorkingHours(start_time=self.start, end_time=self.end)


class AppConfig(BaseModel):
    """Application configuration."""
    calendar_file: Path = BUNDLED_CALENDAR_FILE
    working_hours: WorkingHoursConfig = Field(default_factory=WorkingHoursConfig)
    enable_caching: bool = False
    default_duration_minutes: int = 30

    @field_validator("default_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure meeting duration is positive."""
        if value <= 0:
            raise ValueError("default_duration_minutes must be greater than zero")
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``calendar_file`` is resolved against the directory of the
        config file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            InvalidConfigurationError: If the file is missing or its content is invalid
        """
        if not config_path.exists():
            raise InvalidConfigurationError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise InvalidConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise InvalidConfigurationError("Config file must contain a mapping at the root level.")

        try:
            config = cls(**data)
        except ValidationError as exc:
            raise InvalidConfigurationError(f"Invalid configuration in {config_path}:\n{exc}") from exc

        if not config.calendar_file.is_absolute():
            config = config.model_copy(
                update={"calendar_file": config_path.parent / config.calendar_file}
            )

        return config

    def validate_sources(self) -> None:
        """
        Check that the backing calendar file is reachable.

        Raises:
            InvalidConfigurationError: If the calendar file does not exist
        """
        if not self.calendar_file.is_file():
            raise InvalidConfigurationError(f"Calendar file not found: {self.calendar_file}")

    def get_working_hours(self) -> WorkingHours:
        return self.working_hours.to_working_hours()


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


def load_config(config_path: Path | None = None) -> AppConfig:
    """
    Load the configuration to run with.

    An explicit path must exist. Without one, the default location is used
    when a file is present there, otherwise the built-in defaults (bundled
    sample calendar, 07:00 - 19:00).
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)

    return AppConfig()
