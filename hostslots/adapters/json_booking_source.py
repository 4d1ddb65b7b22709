"""
Booking source backed by a JSON export of the bookings table.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pendulum
from pendulum import DateTime

from ..domain.exceptions import BookingSourceError
from ..domain.models import UTC, ExistingBooking

logger = logging.getLogger(__name__)


class JsonBookingSource:
    """
    Loads existing bookings from a JSON file.

    Expected format is a list of booking records:
    [
        {
            "resource_id": "studio-a",
            "start_time": "2024-07-01T10:00:00Z",
            "end_time": "2024-07-01T10:30:00Z",
            "status": "confirmed",
            "metadata": {"host": "alice"}
        }
    ]

    Only confirmed bookings are returned. The host comes from
    ``metadata.host``; records without it are returned host-less.
    """

    CONFIRMED_STATUS = "confirmed"

    def __init__(self, data_file: Path | None = None):
        """
        Initialize the source.

        Args:
            data_file: Path to the JSON file; ``None`` or a missing file means
                no bookings
        """
        self.data_file = data_file
        self.records = self._load_records()

    def _load_records(self) -> List[Dict[str, Any]]:
        if self.data_file is None or not self.data_file.exists():
            return []

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise BookingSourceError(f"Could not read bookings from {self.data_file}: {exc}") from exc

        if not isinstance(data, list):
            raise BookingSourceError(f"Bookings file {self.data_file} must contain a JSON list")

        return data

    async def get_bookings(
        self,
        resource_id: str,
        start_time: DateTime,
        end_time: DateTime,
    ) -> List[ExistingBooking]:
        """
        Return confirmed bookings of ``resource_id`` starting within the window.

        Args:
            resource_id: Resource whose bookings are requested
            start_time: Earliest booking start (inclusive)
            end_time: Latest booking start (inclusive)
        """
        bookings: List[ExistingBooking] = []

        for record in self.records:
            if record.get("resource_id") != resource_id:
                continue
            if record.get("status") != self.CONFIRMED_STATUS:
                continue

            try:
                booking = self._parse_record(record)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unparsable booking record %s: %s", record.get("id", "?"), e)
                continue

            if start_time <= booking.start_time <= end_time:
                bookings.append(booking)

        return bookings

    def _parse_record(self, record: Dict[str, Any]) -> ExistingBooking:
        metadata = record.get("metadata") or {}
        return ExistingBooking(
            start_time=self._parse_datetime(record["start_time"]),
            end_time=self._parse_datetime(record["end_time"]),
            host=metadata.get("host"),
        )

    @staticmethod
    def _parse_datetime(datetime_str: str) -> DateTime:
        """Parse an ISO 8601 instant and normalize it to UTC."""
        dt = pendulum.parse(datetime_str)

        if isinstance(dt, DateTime):
            return dt.in_timezone(UTC)

        raise ValueError(f"Could not parse datetime: {datetime_str}")
