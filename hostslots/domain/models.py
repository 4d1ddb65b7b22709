"""
Domain models for availability rules, bookings and generated slots.

All instants are pendulum ``DateTime`` objects in UTC. Window start and end
values are wall-clock ``datetime.time`` values that are placed on a concrete
calendar day by the window expander.
"""

from dataclasses import dataclass
from datetime import time
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

import pendulum
from pendulum import Date, DateTime

UTC = "UTC"

# Indexed by date.weekday() (0=Monday), independent of pendulum's locale.
WEEKDAY_NAMES: Tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def weekday_name(day: Date) -> str:
    """Return the English weekday name for a calendar date."""
    return WEEKDAY_NAMES[day.weekday()]


def date_key(day: Date) -> str:
    """Return the ``YYYY-MM-DD`` key for a calendar date."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def at_time(day: Date, wall_clock: time) -> DateTime:
    """Place a wall-clock time on a calendar day as a UTC instant."""
    return pendulum.datetime(
        day.year,
        day.month,
        day.day,
        wall_clock.hour,
        wall_clock.minute,
        tz=UTC,
    )


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable time range with start and end datetime.

    Invariant: start must not be after end. An empty range still blocks
    any range that strictly contains its instant.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Start time {self.start} must not be after end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another (half-open intervals)."""
        return self.start < other.end and self.end > other.start

    def expand(self, before_minutes: int = 0, after_minutes: int = 0) -> "TimeRange":
        """Return a copy widened outward by the given buffers."""
        return TimeRange(
            start=self.start.subtract(minutes=before_minutes),
            end=self.end.add(minutes=after_minutes),
        )

    def __str__(self) -> str:
        return f"{self.start.format('YYYY-MM-DD HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class AvailabilityWindow:
    """
    A recurring weekly availability interval for one host.
    """
    host: str
    days: FrozenSet[str]
    start: time
    end: time

    def applies_to(self, day: Date) -> bool:
        """Check if the window names the weekday of ``day``."""
        return weekday_name(day) in self.days


@dataclass(frozen=True)
class Blackout:
    """
    A blacked-out calendar date or inclusive date range.

    Dates are ``YYYY-MM-DD`` strings and are compared lexicographically,
    which matches chronological order for that format.
    """
    date: Optional[str] = None
    range: Optional[Tuple[str, str]] = None

    def matches(self, day_str: str) -> bool:
        if self.date is not None:
            return self.date == day_str
        if self.range is not None:
            range_start, range_end = self.range
            return range_start <= day_str <= range_end
        return False


class PoolingStrategy(str, Enum):
    """Ordering strategy across hosts sharing a resource."""
    ROUND_ROBIN = "round_robin"
    LEAST_LOADED = "least_loaded"


@dataclass(frozen=True)
class AvailabilityRules:
    """
    Availability configuration of a bookable resource.

    ``timezone`` is advisory and passed through to callers; all arithmetic
    happens on UTC instants.
    """
    windows: Tuple[AvailabilityWindow, ...] = ()
    timezone: str = "America/New_York"
    slot_minutes: int = 30
    buffer_before: int = 0
    buffer_after: int = 0
    max_per_day_per_host: int = 10
    blackouts: Tuple[Blackout, ...] = ()
    pooling: PoolingStrategy = PoolingStrategy.ROUND_ROBIN

    def is_blacked_out(self, day: Date) -> bool:
        """Check if any blackout entry covers ``day``."""
        day_str = date_key(day)
        return any(blackout.matches(day_str) for blackout in self.blackouts)

    def windows_for(self, day: Date) -> List[AvailabilityWindow]:
        """Return the windows that apply on ``day``, in configured order."""
        return [window for window in self.windows if window.applies_to(day)]


@dataclass(frozen=True)
class ExistingBooking:
    """
    A confirmed booking that blocks its host's time.

    Bookings without a host cannot be attributed to any host and are
    ignored by conflict checking.
    """
    start_time: DateTime
    end_time: DateTime
    host: Optional[str] = None

    def __post_init__(self):
        if self.start_time > self.end_time:
            raise ValueError(
                f"Booking start {self.start_time} must not be after end {self.end_time}"
            )

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start_time, end=self.end_time)

    def day_key(self) -> str:
        """UTC calendar date of the booking start."""
        return self.start_time.in_timezone(UTC).to_date_string()


@dataclass(frozen=True)
class TimeSlot:
    """
    A generated, bookable slot attributed to one host.
    """
    start: DateTime
    end: DateTime
    host: str

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start, end=self.end)

    def duration_minutes(self) -> int:
        return self.time_range.duration_minutes()

    def start_key(self) -> str:
        """Normalized UTC ISO-8601 start, used for grouping and ordering."""
        return self.start.in_timezone(UTC).to_iso8601_string()

    def to_dict(self) -> dict:
        return {
            "start": self.start_key(),
            "end": self.end.in_timezone(UTC).to_iso8601_string(),
            "host": self.host,
        }

    def format_display(self, timezone: str = UTC) -> str:
        """
        Format the slot for display.
        Format: Weekday, YYYY-MM-DD | HH:mm - HH:mm (host)
        """
        start = self.start.in_timezone(timezone)
        end = self.end.in_timezone(timezone)
        weekday = weekday_name(start)
        return (
            f"{weekday}, {start.format('YYYY-MM-DD')} | "
            f"{start.format('HH:mm')} - {end.format('HH:mm')} ({self.host})"
        )
