"""
Session Contracts

Lifecycle of one viewer session, owned by the engine and read by
every surface (API, CLI, views).
"""

from enum import Enum

FETCH_ERROR_PREFIX = "Failed to load stories: "


class LoadPhase(Enum):
    """
    Lifecycle of one viewer session.

    LOADING -> READY | FAILED, and any phase -> DISPOSED.
    """
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    DISPOSED = "disposed"
