"""
Presentation Contracts

Responsibility:
Define ViewModel contracts for pure UI components.
Strictly decoupled from business logic.
"""

from dataclasses import dataclass
from typing import Tuple, Optional

LOADING_MESSAGE = "Loading story structure..."


@dataclass(frozen=True)
class OptionLinkViewModel:
    """One jump trigger inside the story dialog."""
    target: str
    label: str
    position: int


@dataclass(frozen=True)
class StoryDialogViewModel:
    """ViewModel for the story detail dialog."""
    story_id: str
    title: str
    content: str
    content_lines: Tuple[str, ...]  # line breaks preserved
    options: Tuple[OptionLinkViewModel, ...]
    is_open: bool = True


@dataclass(frozen=True)
class LoadingStateViewModel:
    """Unified loading state."""
    message: str
    progress: Optional[float]
    is_blocking: bool


@dataclass(frozen=True)
class ErrorBannerViewModel:
    """Persistent inline error (no retry offered)."""
    message: str
    is_blocking: bool = True


@dataclass(frozen=True)
class ExportActionViewModel:
    """Save-as-image button."""
    label: str
    is_visible: bool
