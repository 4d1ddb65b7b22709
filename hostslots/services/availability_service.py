"""
Application service answering availability requests for a resource.

The service fetches existing bookings through a booking source adapter and
delegates slot generation to the domain-level ``SlotGenerator``. Resource
validation happens here, before the core is invoked, so the core can assume
well-formed input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol

import pendulum
from pendulum import Date, DateTime

from ..config import ResourceConfig
from ..domain.exceptions import (
    InvalidDateError,
    NoAvailabilityWindowsError,
    ResourceNotBookableError,
)
from ..domain.models import UTC, AvailabilityRules, ExistingBooking, TimeSlot
from ..domain.slot_generator import SlotGenerator

logger = logging.getLogger(__name__)


class BookingSourceProtocol(Protocol):
    """Protocol describing the booking lookup needed by the service."""

    async def get_bookings(
        self,
        resource_id: str,
        start_time: DateTime,
        end_time: DateTime,
    ) -> List[ExistingBooking]:
        """Return confirmed bookings of the resource starting in the window."""


@dataclass
class AvailabilityResult:
    """Slots for a resource plus the pass-through metadata callers echo."""
    resource_id: str
    timezone: str
    slot_minutes: int
    slots: List[TimeSlot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resource_id": self.resource_id,
            "timezone": self.timezone,
            "slot_minutes": self.slot_minutes,
            "slots": [slot.to_dict() for slot in self.slots],
        }


def parse_date(value: str) -> Date:
    """
    Parse a ``YYYY-MM-DD`` string.

    Raises:
        InvalidDateError: If the value is not a valid date in that format
    """
    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=UTC).date()
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date '{value}'. Use YYYY-MM-DD") from exc


class AvailabilityService:
    """
    Orchestrates booking retrieval and slot generation.

    Depending on a protocol keeps the booking store pluggable: the JSON
    adapter in production, a stub in tests.
    """

    def __init__(self, booking_source: BookingSourceProtocol) -> None:
        self._booking_source = booking_source

    async def get_availability(
        self,
        resource: ResourceConfig,
        start_date: Date,
        end_date: Date,
    ) -> AvailabilityResult:
        """
        Validate the resource, fetch its bookings and compute available slots.

        Raises:
            ResourceNotBookableError: If the resource is inactive or not bookable
            NoAvailabilityWindowsError: If the resource has no windows
        """
        if not (resource.is_active and resource.is_bookable):
            raise ResourceNotBookableError(
                f"Resource '{resource.id}' is not active or not bookable"
            )

        rules = resource.availability_rules.to_domain()
        if not rules.windows:
            raise NoAvailabilityWindowsError(
                f"No availability windows configured for resource '{resource.id}'"
            )

        bookings = await self.fetch_bookings(
            resource_id=resource.id,
            start_date=start_date,
            end_date=end_date,
        )

        slots = self.calculate_slots(
            rules=rules,
            bookings=bookings,
            start_date=start_date,
            end_date=end_date,
        )
        logger.info(
            "Resource %s: %d slot(s) between %s and %s",
            resource.id,
            len(slots),
            start_date,
            end_date,
        )

        return AvailabilityResult(
            resource_id=resource.id,
            timezone=rules.timezone,
            slot_minutes=rules.slot_minutes,
            slots=slots,
        )

    async def fetch_bookings(
        self,
        *,
        resource_id: str,
        start_date: Date,
        end_date: Date,
    ) -> List[ExistingBooking]:
        """Fetch bookings starting anywhere from ``start_date`` to the end of ``end_date``."""
        start_time = pendulum.datetime(start_date.year, start_date.month, start_date.day, tz=UTC)
        end_time = pendulum.datetime(end_date.year, end_date.month, end_date.day, tz=UTC).end_of("day")

        return await self._booking_source.get_bookings(
            resource_id=resource_id,
            start_time=start_time,
            end_time=end_time,
        )

    @staticmethod
    def calculate_slots(
        *,
        rules: AvailabilityRules,
        bookings: List[ExistingBooking],
        start_date: Date,
        end_date: Date,
    ) -> List[TimeSlot]:
        """Calculate available slots from rules and bookings."""
        return SlotGenerator(rules).generate(bookings, start_date, end_date)
