"""
Expands one weekly availability window into fixed-size candidate slots.
"""

from typing import List

from pendulum import Date

from .models import AvailabilityWindow, TimeSlot, at_time


def expand_window(
    window: AvailabilityWindow,
    day: Date,
    slot_minutes: int,
) -> List[TimeSlot]:
    """
    Produce the raw candidate slots of ``window`` on ``day``.

    Slots start at the window opening and step by ``slot_minutes``. A trailing
    slot that would end after the window closes is dropped, never truncated.
    Windows with ``end <= start`` yield nothing (no overnight wraparound).

    Args:
        window: Availability window; ``day`` is assumed to be one of its days
        day: Calendar day to place the window on
        slot_minutes: Duration of every slot

    Returns:
        Candidate slots in ascending start order
    """
    if window.end <= window.start:
        return []

    window_start = at_time(day, window.start)
    window_end = at_time(day, window.end)

    slots: List[TimeSlot] = []
    current = window_start

    while True:
        slot_end = current.add(minutes=slot_minutes)
        if slot_end > window_end:
            break
        slots.append(TimeSlot(start=current, end=slot_end, host=window.host))
        current = slot_end

    return slots
