"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path
from typing import List, Tuple

import pendulum
import yaml
from pendulum import Date
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.conflict_filter import OverlapPolicy


class BookingSettings(BaseModel):
    """Rules of the booking form."""
    default_duration_hours: int = 2
    duration_options: List[int] = Field(default_factory=lambda: [1, 2, 3, 4, 6, 8])
    min_days_ahead: int = 1  # Bookings open from tomorrow
    max_months_ahead: int = 3
    overlap_policy: OverlapPolicy = OverlapPolicy.START_WITHIN_BOOKING

    @field_validator("default_duration_hours")
    @classmethod
    def validate_default_duration(cls, value: int) -> int:
        """Ensure the default session length is positive."""
        if value <= 0:
            raise ValueError("default_duration_hours must be greater than zero")
        return value

    @field_validator("duration_options")
    @classmethod
    def validate_duration_options(cls, value: List[int]) -> List[int]:
        """Ensure offered durations are positive, deduplicated and sorted."""
        invalid = [hours for hours in value if hours <= 0]
        if invalid:
            raise ValueError(f"duration_options must be greater than zero, got {invalid}")
        if not value:
            raise ValueError("duration_options must offer at least one duration")
        return sorted(set(value))

    @field_validator("min_days_ahead", "max_months_ahead")
    @classmethod
    def validate_not_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"Booking window bounds must not be negative, got {value}")
        return value

    @model_validator(mode="after")
    def validate_default_is_offered(self) -> "BookingSettings":
        """Ensure the preselected duration is one the form offers."""
        if self.default_duration_hours not in self.duration_options:
            raise ValueError(
                f"default_duration_hours {self.default_duration_hours} "
                f"is not one of duration_options {self.duration_options}"
            )
        return self

    def date_bounds(self, today: Date) -> Tuple[Date, Date]:
        """
        Get the first and last date a session can be booked for.

        Args:
            today: Current date in the studio's timezone

        Returns:
            Tuple of (earliest, latest) bookable dates, both inclusive
        """
        return today.add(days=self.min_days_ahead), today.add(months=self.max_months_ahead)

    def is_bookable(self, day: Date, today: Date) -> bool:
        """Check whether a date lies inside the booking window."""
        earliest, latest = self.date_bounds(today)
        return earliest <= day <= latest


class AppConfig(BaseModel):
    """Application configuration."""
    supabase_url: str = ""
    supabase_anon_key: str = ""
    timezone: str = "Europe/Lisbon"
    request_timeout_seconds: float = 30.0
    log_level: str = "WARNING"
    booking: BookingSettings = Field(default_factory=BookingSettings)

    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, value: str) -> str:
        """Strip whitespace and trailing slashes from the project URL."""
        value = value.strip().rstrip("/")
        if value and not value.startswith(("http://", "https://")):
            raise ValueError(f"supabase_url must be an http(s) URL, got {value!r}")
        return value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout_seconds must be greater than zero")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the level is one the logging module knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def require_store_credentials(self) -> None:
        """
        Ensure the hosted database can be reached.

        Raises:
            ValueError: If the URL or the API key is missing
        """
        missing = [
            name for name in ("supabase_url", "supabase_anon_key")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(
                f"Missing configuration value(s): {', '.join(missing)}. "
                "Set them in config.yaml or use --mock."
            )

    def today(self) -> Date:
        """Get the current date in the studio's timezone."""
        return pendulum.today(self.timezone).date()

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

        return cls(**data)


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
