"""
Frontend DTOs

Read-only contracts the rendering surface consumes.

PRINCIPLES:
1. Immutable (Frozen)
2. No Business Logic
3. No Rendering Logic
"""

from .core import AvailabilityState

__all__ = ['AvailabilityState']
