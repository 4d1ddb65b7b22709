"""
Adapters layer - External booking stores.
"""

from .json_booking_source import JsonBookingSource

__all__ = ["JsonBookingSource"]
