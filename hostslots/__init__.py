"""
hostslots - bookable slot generation for pooled, host-attributed resources.
"""

__version__ = "0.1.0"
