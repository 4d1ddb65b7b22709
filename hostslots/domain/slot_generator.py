"""
Core business logic for generating bookable slots over a date range.

Pure domain logic without any external dependencies (no API calls, no
database, no I/O). Every call builds its own buckets and discards them.
"""

import logging
from typing import Dict, Iterable, List

import pendulum
from pendulum import Date

from .conflict_filter import filter_conflicts
from .models import (
    AvailabilityRules,
    ExistingBooking,
    TimeSlot,
    date_key,
    weekday_name,
)
from .pooling import apply_pooling
from .window_expander import expand_window

logger = logging.getLogger(__name__)

BookingBuckets = Dict[str, Dict[str, List[ExistingBooking]]]


class SlotGenerator:
    """
    Generates available slots for one resource's availability rules.

    Algorithm:
    1. Bucket existing bookings by host and UTC start date
    2. Walk the date range one calendar day at a time
    3. Skip blacked-out days entirely
    4. Expand every window naming the weekday into candidate slots
    5. Drop candidates that conflict with the host's bookings, honouring the
       per-host daily cap
    6. Order the combined list with the pooling strategy
    """

    def __init__(self, rules: AvailabilityRules):
        self.rules = rules

    def generate(
        self,
        bookings: Iterable[ExistingBooking],
        start_date: Date,
        end_date: Date,
    ) -> List[TimeSlot]:
        """
        Generate slots for every day from ``start_date`` to ``end_date`` inclusive.

        Args:
            bookings: Existing bookings for the resource
            start_date: First calendar day (only the date part is used)
            end_date: Last calendar day (only the date part is used)

        Returns:
            Slots ordered by the rules' pooling strategy
        """
        if not self.rules.windows:
            return []

        buckets = self._bucket_bookings(bookings)
        slots: List[TimeSlot] = []

        current = pendulum.date(start_date.year, start_date.month, start_date.day)
        last = pendulum.date(end_date.year, end_date.month, end_date.day)

        while current <= last:
            slots.extend(self._slots_for_day(current, buckets))
            current = current.add(days=1)

        return apply_pooling(slots, self.rules.pooling)

    def _slots_for_day(self, day: Date, buckets: BookingBuckets) -> List[TimeSlot]:
        """Generate the unordered slots of a single day."""
        day_str = date_key(day)

        if self.rules.is_blacked_out(day):
            logger.debug("Skipping blacked-out day %s", day_str)
            return []

        rules = self.rules
        day_slots: List[TimeSlot] = []
        accepted_per_host: Dict[str, int] = {}

        for window in rules.windows_for(day):
            remaining = rules.max_per_day_per_host - accepted_per_host.get(window.host, 0)
            if remaining <= 0:
                continue

            candidates = expand_window(window, day, rules.slot_minutes)
            accepted = filter_conflicts(
                candidates,
                buckets.get(window.host, {}).get(day_str, []),
                buffer_before=rules.buffer_before,
                buffer_after=rules.buffer_after,
                max_per_day=remaining,
            )

            accepted_per_host[window.host] = accepted_per_host.get(window.host, 0) + len(accepted)
            day_slots.extend(accepted)

        if day_slots:
            logger.debug("%s (%s): %d slot(s)", day_str, weekday_name(day), len(day_slots))

        return day_slots

    @staticmethod
    def _bucket_bookings(bookings: Iterable[ExistingBooking]) -> BookingBuckets:
        """
        Group bookings by host and UTC start date.

        Bookings without a host cannot be attributed and are left out.
        """
        buckets: BookingBuckets = {}

        for booking in bookings:
            if not booking.host:
                continue
            buckets.setdefault(booking.host, {}).setdefault(booking.day_key(), []).append(booking)

        return buckets


def generate_slots(
    rules: AvailabilityRules,
    bookings: Iterable[ExistingBooking],
    start_date: Date,
    end_date: Date,
) -> List[TimeSlot]:
    """Functional entry point for :class:`SlotGenerator`."""
    return SlotGenerator(rules).generate(bookings, start_date, end_date)
