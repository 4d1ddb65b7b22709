"""
Domain layer - Pure business logic without external dependencies.
"""

from .conflict_filter import blocked_ranges, filter_conflicts
from .models import (
    AvailabilityRules,
    AvailabilityWindow,
    Blackout,
    ExistingBooking,
    PoolingStrategy,
    TimeRange,
    TimeSlot,
)
from .pooling import apply_pooling
from .slot_generator import SlotGenerator, generate_slots
from .window_expander import expand_window

__all__ = [
    "AvailabilityRules",
    "AvailabilityWindow",
    "Blackout",
    "ExistingBooking",
    "PoolingStrategy",
    "TimeRange",
    "TimeSlot",
    "SlotGenerator",
    "apply_pooling",
    "blocked_ranges",
    "expand_window",
    "filter_conflicts",
    "generate_slots",
]
