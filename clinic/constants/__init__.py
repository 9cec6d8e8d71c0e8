"""Unified constants for the clinic booking service.

All classes and constants can be imported directly from this package:
    from clinic.constants import Timeouts, Retries, ARABIC_DAY_NAMES, etc.
"""

# Locale
from .locale import (
    ARABIC_DAY_NAMES,
    ARABIC_MONTHS,
    AVAILABILITY_MESSAGES,
    DAY_CODES,
    PERSISTENCE_DEGRADED_MESSAGE,
    VALIDATION_MESSAGES,
)

# Resilience-related
from .resilience import Pools, Retries

# Timing-related
from .timing import Timeouts, Windows

__all__ = [
    # Timing
    "Timeouts",
    "Windows",
    # Resilience
    "Retries",
    "Pools",
    # Locale
    "DAY_CODES",
    "ARABIC_DAY_NAMES",
    "ARABIC_MONTHS",
    "VALIDATION_MESSAGES",
    "AVAILABILITY_MESSAGES",
    "PERSISTENCE_DEGRADED_MESSAGE",
]
