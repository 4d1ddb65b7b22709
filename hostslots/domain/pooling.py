"""
Cross-host ordering of generated slots.
"""

import logging
from typing import Dict, List, Sequence

from .models import PoolingStrategy, TimeSlot

logger = logging.getLogger(__name__)


def apply_pooling(
    slots: Sequence[TimeSlot],
    strategy: PoolingStrategy = PoolingStrategy.ROUND_ROBIN,
) -> List[TimeSlot]:
    """
    Reorder slots according to the pooling strategy. Never removes slots.

    ``round_robin`` groups slots sharing a start instant, orders each group
    alphabetically by host, ignoring case, and returns the groups in
    chronological order.
    ``least_loaded`` has no ranking of its own yet and falls back to a stable
    chronological sort.
    """
    if PoolingStrategy(strategy) is PoolingStrategy.ROUND_ROBIN:
        return _round_robin(slots)

    logger.debug("Pooling strategy %s falls back to chronological order", strategy)
    return sorted(slots, key=lambda slot: slot.start_key())


def _round_robin(slots: Sequence[TimeSlot]) -> List[TimeSlot]:
    slots_by_start: Dict[str, List[TimeSlot]] = {}
    for slot in slots:
        slots_by_start.setdefault(slot.start_key(), []).append(slot)

    result: List[TimeSlot] = []
    for group in slots_by_start.values():
        result.extend(sorted(group, key=lambda slot: (slot.host.casefold(), slot.host)))

    return sorted(result, key=lambda slot: slot.start_key())
