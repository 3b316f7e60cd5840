"""
Base Contracts and Shared Types

Foundational types used across all layers.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all layers
- Layers may import types but MUST NOT modify this module
- Errors that users see are data (Error), errors that callers
  misuse are exceptions (StoryGraphError)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple
from enum import Enum, auto


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for the viewer.

    Only FETCH_FAILED blocks the session. Everything else degrades
    to a no-op or a localized notice.
    """
    # Load errors
    FETCH_FAILED = auto()
    MALFORMED_STORY = auto()

    # Export errors
    EXPORT_SURFACE_UNAVAILABLE = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with context.
    Errors are data, not exceptions - they can be stored and displayed.
    """
    code: ErrorCode
    message: str
    timestamp: datetime
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @staticmethod
    def now(code: ErrorCode, message: str) -> Error:
        return Error(code=code, message=message, timestamp=datetime.now(timezone.utc))


# =============================================================================
# EXCEPTIONS
# =============================================================================

class StoryGraphError(Exception):
    """Base class for all story graph exceptions."""
    code: ErrorCode = ErrorCode.FETCH_FAILED

    def to_error(self) -> Error:
        return Error.now(self.code, str(self))


class MalformedStoryError(StoryGraphError):
    """
    A story record violates the wire contract.

    Raised for the WHOLE batch: one bad record rejects every record,
    nothing is silently dropped mid-stream.
    """
    code = ErrorCode.MALFORMED_STORY

    def __init__(self, message: str, index: Optional[int] = None):
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message)
        self.index = index
