"""
Tests for the AvailabilityService orchestration layer.
"""

import asyncio
from typing import Dict, List

import pendulum
import pytest

from hostslots.config import AvailabilityRulesConfig, ResourceConfig, WindowConfig
from hostslots.domain.exceptions import (
    InvalidDateError,
    NoAvailabilityWindowsError,
    ResourceNotBookableError,
)
from hostslots.domain.models import ExistingBooking
from hostslots.services.availability_service import AvailabilityService, parse_date


class StubBookingSource:
    """Minimal stub matching BookingSourceProtocol."""

    def __init__(self, bookings: List[ExistingBooking]):
        self._bookings = bookings
        self.calls: List[Dict[str, str]] = []

    async def get_bookings(self, resource_id, start_time, end_time):
        self.calls.append(
            {
                "resource_id": resource_id,
                "start": start_time.to_iso8601_string(),
                "end": end_time.to_iso8601_string(),
            }
        )
        return self._bookings


def _resource(**overrides) -> ResourceConfig:
    rules = AvailabilityRulesConfig(
        slot_minutes=30,
        windows=[WindowConfig(host="alice", days=["Monday"], start="09:00", end="10:00")],
    )
    data = {"id": "studio-a", "availability_rules": rules}
    data.update(overrides)
    return ResourceConfig(**data)


def test_get_availability_returns_slots_and_metadata():
    """End-to-end call yields slots plus echoed metadata."""
    source = StubBookingSource(
        [
            ExistingBooking(
                start_time=pendulum.parse("2024-07-01T09:00:00Z"),
                end_time=pendulum.parse("2024-07-01T09:30:00Z"),
                host="alice",
            )
        ]
    )
    service = AvailabilityService(booking_source=source)

    result = asyncio.run(
        service.get_availability(_resource(), pendulum.date(2024, 7, 1), pendulum.date(2024, 7, 1))
    )

    assert result.to_dict() == {
        "resource_id": "studio-a",
        "timezone": "America/New_York",
        "slot_minutes": 30,
        "slots": [
            {"start": "2024-07-01T09:30:00Z", "end": "2024-07-01T10:00:00Z", "host": "alice"},
        ],
    }


def test_bookings_fetched_for_whole_end_day():
    source = StubBookingSource([])
    service = AvailabilityService(booking_source=source)

    asyncio.run(
        service.get_availability(_resource(), pendulum.date(2024, 7, 1), pendulum.date(2024, 7, 3))
    )

    assert source.calls[0]["resource_id"] == "studio-a"
    assert source.calls[0]["start"] == "2024-07-01T00:00:00Z"
    assert source.calls[0]["end"].startswith("2024-07-03T23:59:59")


def test_inactive_resource_rejected():
    service = AvailabilityService(booking_source=StubBookingSource([]))

    with pytest.raises(ResourceNotBookableError):
        asyncio.run(
            service.get_availability(
                _resource(is_bookable=False), pendulum.date(2024, 7, 1), pendulum.date(2024, 7, 1)
            )
        )


def test_resource_without_windows_rejected():
    source = StubBookingSource([])
    service = AvailabilityService(booking_source=source)

    with pytest.raises(NoAvailabilityWindowsError):
        asyncio.run(
            service.get_availability(
                _resource(availability_rules=AvailabilityRulesConfig()),
                pendulum.date(2024, 7, 1),
                pendulum.date(2024, 7, 1),
            )
        )
    assert source.calls == []


def test_parse_date():
    assert parse_date("2024-07-04") == pendulum.date(2024, 7, 4)


@pytest.mark.parametrize("value", ["2024/07/04", "07-04-2024", "2024-02-30", "tomorrow"])
def test_parse_date_rejects_malformed(value):
    with pytest.raises(InvalidDateError):
        parse_date(value)
