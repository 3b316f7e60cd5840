"""
Core DTO Types

Foundational enums for all frontend view contracts.
"""

from enum import Enum


# =============================================================================
# AVAILABILITY STATES (Explicit Absence)
# =============================================================================

class AvailabilityState(Enum):
    """
    Availability of the data behind a view.

    EXPLICIT ABSENCE:
    =================
    A view that cannot be built says so, it is never guessed.
    """
    PRESENT = "present"     # Data is available
    LOADING = "loading"     # Fetch still in flight
    MISSING = "missing"     # Fetch failed
    UNKNOWN = "unknown"     # Session torn down
