"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import time
from pathlib import Path
from typing import Any, List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.exceptions import ResourceNotFoundError
from .domain.models import (
    WEEKDAY_NAMES,
    AvailabilityRules,
    AvailabilityWindow,
    Blackout,
    PoolingStrategy,
)


def _parse_clock(value: str) -> time:
    """Parse an ``HH:MM`` wall-clock string."""
    try:
        hour_str, minute_str = value.split(":")
        return time(hour=int(hour_str), minute=int(minute_str))
    except ValueError as exc:
        raise ValueError(f"Time must be in HH:MM format, got '{value}'") from exc


class WindowConfig(BaseModel):
    """Weekly availability window for one host."""
    host: str
    days: List[str]
    start: str
    end: str

    @field_validator("days")
    @classmethod
    def validate_days(cls, value: List[str]) -> List[str]:
        """Normalize weekday names to title case and reject unknown ones."""
        normalized = [day.strip().title() for day in value]
        invalid = [day for day in normalized if day not in WEEKDAY_NAMES]
        if invalid:
            raise ValueError(f"Unknown weekday name(s): {invalid}")
        return normalized

    @field_validator("start", "end")
    @classmethod
    def validate_clock(cls, value: str) -> str:
        _parse_clock(value)
        return value

    def to_domain(self) -> AvailabilityWindow:
        return AvailabilityWindow(
            host=self.host,
            days=frozenset(self.days),
            start=_parse_clock(self.start),
            end=_parse_clock(self.end),
        )


class BlackoutConfig(BaseModel):
    """
    Blackout entry.

    Accepts a bare date string, a ``[start, end]`` list, or a mapping with
    either a ``date`` or a ``range`` key.
    """
    date: Optional[str] = None
    range: Optional[Tuple[str, str]] = None

    @model_validator(mode="before")
    @classmethod
    def coerce_shorthand(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"date": data}
        if isinstance(data, (list, tuple)):
            return {"range": data}
        return data

    def to_domain(self) -> Blackout:
        return Blackout(date=self.date, range=self.range)


class AvailabilityRulesConfig(BaseModel):
    """Availability rules of a bookable resource."""
    timezone: str = "America/New_York"
    slot_minutes: int = 30
    buffer_before: int = 0
    buffer_after: int = 0
    max_per_day_per_host: int = 10
    windows: List[WindowConfig] = Field(default_factory=list)
    blackouts: List[BlackoutConfig] = Field(default_factory=list)
    pooling: PoolingStrategy = PoolingStrategy.ROUND_ROBIN

    @field_validator("slot_minutes", "max_per_day_per_host")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("buffer_before", "buffer_after")
    @classmethod
    def validate_buffer(cls, value: int) -> int:
        if value < 0:
            raise ValueError("buffers must not be negative")
        return value

    def to_domain(self) -> AvailabilityRules:
        return AvailabilityRules(
            windows=tuple(window.to_domain() for window in self.windows),
            timezone=self.timezone,
            slot_minutes=self.slot_minutes,
            buffer_before=self.buffer_before,
            buffer_after=self.buffer_after,
            max_per_day_per_host=self.max_per_day_per_host,
            blackouts=tuple(blackout.to_domain() for blackout in self.blackouts),
            pooling=self.pooling,
        )


class ResourceConfig(BaseModel):
    """Bookable resource configuration."""
    id: str
    name: str = ""
    is_active: bool = True
    is_bookable: bool = True
    availability_rules: AvailabilityRulesConfig = Field(default_factory=AvailabilityRulesConfig)

    def display_name(self) -> str:
        return self.name or self.id


class AppConfig(BaseModel):
    """Application configuration."""
    resources: List[ResourceConfig] = Field(default_factory=list)
    bookings_file: Optional[Path] = None
    log_level: str = "WARNING"

    @field_validator("resources")
    @classmethod
    def validate_resources(cls, value: List[ResourceConfig]) -> List[ResourceConfig]:
        """Ensure resource ids are unique."""
        seen: set[str] = set()
        for resource in value:
            if resource.id in seen:
                raise ValueError(f"Duplicate resource id detected: {resource.id}")
            seen.add(resource.id)
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Relative ``bookings_file`` paths are resolved against the config file's
        directory.

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
        if config.bookings_file is not None and not config.bookings_file.is_absolute():
            config.bookings_file = config_path.parent / config.bookings_file
        return config

    def find_resource(self, resource_id: str) -> ResourceConfig:
        """
        Find a resource by id.

        Raises:
            ResourceNotFoundError: If no resource has that id
        """
        for resource in self.resources:
            if resource.id == resource_id:
                return resource
        raise ResourceNotFoundError(f"Resource not found: '{resource_id}'")


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    config_path = Path.cwd() / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        config_path = Path(__file__).parent.parent / "config.yaml"

    return config_path
