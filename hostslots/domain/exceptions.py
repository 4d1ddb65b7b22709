"""
Domain-specific exception hierarchy for the hostslots application.
"""


class HostslotsError(Exception):
    """Base class for all application-level errors."""


class ResourceNotFoundError(HostslotsError):
    """Raised when a resource id is not configured."""


class ResourceNotBookableError(HostslotsError):
    """Raised when a resource exists but is inactive or not bookable."""


class NoAvailabilityWindowsError(HostslotsError):
    """Raised when a resource has no availability windows configured."""


class InvalidDateError(HostslotsError):
    """Raised when a date string is not in YYYY-MM-DD format."""


class BookingSourceError(HostslotsError):
    """Raised when existing bookings cannot be loaded."""
