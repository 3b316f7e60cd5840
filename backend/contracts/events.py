"""
Interaction Event Contracts

Discrete input events dispatched into the SelectionController, and the
read-only snapshot it exposes. No execution logic - pure intent modeling.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .story import Story


class SelectionState(Enum):
    """The two states of the selection machine."""
    IDLE = "idle"
    INSPECTING = "inspecting"


@dataclass(frozen=True)
class NodeClicked:
    """A node on the rendering surface was clicked."""
    node_id: str


@dataclass(frozen=True)
class OptionActivated:
    """A jump link inside the detail dialog was activated."""
    target: str


@dataclass(frozen=True)
class DialogClosed:
    """The detail dialog was dismissed."""


SelectionEvent = Union[NodeClicked, OptionActivated, DialogClosed]


@dataclass(frozen=True)
class SelectionSnapshot:
    """
    Read-only view of selection state.

    is_open is derived: the dialog is open exactly while inspecting.
    """
    state: SelectionState
    story: Optional[Story] = None

    @property
    def is_open(self) -> bool:
        return self.state == SelectionState.INSPECTING

    @property
    def story_id(self) -> Optional[str]:
        return self.story.id if self.story else None

    @staticmethod
    def idle() -> SelectionSnapshot:
        return SelectionSnapshot(state=SelectionState.IDLE)

    @staticmethod
    def inspecting(story: Story) -> SelectionSnapshot:
        return SelectionSnapshot(state=SelectionState.INSPECTING, story=story)
