"""
Story Ingestion Contracts

Immutable results of one attempt to load the story collection.

BOUNDARY: Ingestion Layer
All story data enters through these contracts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple, Optional
from datetime import datetime
from enum import Enum

from backend.contracts.base import Error, ErrorCode
from backend.contracts.story import Story


class FetchStatus(Enum):
    """Status of a fetch attempt."""
    SUCCESS = "success"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    PARSE_ERROR = "parse_error"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class FetchResult:
    """
    Result of a fetch attempt (success or failure).

    Failed fetches are FIRST-CLASS outputs, not exceptions.
    """
    url: str
    attempted_at: datetime
    completed_at: datetime
    status: FetchStatus

    # On success
    stories: Tuple[Story, ...] = field(default_factory=tuple)

    # On failure
    error_message: Optional[str] = None
    http_status: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.status == FetchStatus.SUCCESS

    def to_error(self) -> Optional[Error]:
        if self.success:
            return None
        code = ErrorCode.MALFORMED_STORY if self.status == FetchStatus.PARSE_ERROR else ErrorCode.FETCH_FAILED
        return Error(
            code=code,
            message=self.error_message or self.status.value,
            timestamp=self.completed_at,
            context=(("url", self.url), ("status", self.status.value)),
        )
