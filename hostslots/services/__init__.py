"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability_service import (
    AvailabilityResult,
    AvailabilityService,
    BookingSourceProtocol,
    parse_date,
)

__all__ = ["AvailabilityResult", "AvailabilityService", "BookingSourceProtocol", "parse_date"]
