"""
Removes candidate slots that collide with a host's existing bookings.
"""

from typing import Iterable, List, Sequence

from .models import ExistingBooking, TimeRange, TimeSlot


def blocked_ranges(
    bookings: Iterable[ExistingBooking],
    buffer_before: int = 0,
    buffer_after: int = 0,
) -> List[TimeRange]:
    """
    Inflate bookings into blocked intervals.

    Each booking becomes ``[start_time - buffer_before, end_time + buffer_after]``.
    """
    return [
        booking.time_range.expand(buffer_before, buffer_after)
        for booking in bookings
    ]


def filter_conflicts(
    candidates: Sequence[TimeSlot],
    bookings: Iterable[ExistingBooking],
    buffer_before: int = 0,
    buffer_after: int = 0,
    max_per_day: int = 10,
) -> List[TimeSlot]:
    """
    Accept candidates that do not overlap any blocked interval.

    The bookings are expected to belong to the candidates' host and day.
    Acceptance follows input order and stops once ``max_per_day`` slots have
    been accepted; the rest are dropped.

    Returns:
        An order-preserving subsequence of ``candidates``
    """
    blocked = blocked_ranges(bookings, buffer_before, buffer_after)
    accepted: List[TimeSlot] = []

    for slot in candidates:
        if len(accepted) >= max_per_day:
            break

        slot_range = slot.time_range
        if any(slot_range.overlaps(block) for block in blocked):
            continue

        accepted.append(slot)

    return accepted
