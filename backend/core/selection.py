"""
Selection Controller
====================

Two-state machine tracking which story is being inspected.

    Idle --NodeClicked(I)--> Inspecting(story[I])
    Inspecting(s) --NodeClicked(I)--> Inspecting(story[I])
    Inspecting(s) --OptionActivated(T)--> Inspecting(story[T])
    Inspecting(_) --DialogClosed--> Idle

Lookups that miss (dangling option target, node without a story)
are inert: the state does not change and nothing is raised.

This is the ONLY mutable state in a session. It changes only
through dispatch().
"""

from __future__ import annotations
from typing import Callable, Iterable, List
import logging

from ..contracts.story import Story, index_stories
from ..contracts.events import (
    SelectionEvent, SelectionSnapshot, SelectionState,
    NodeClicked, OptionActivated, DialogClosed
)

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[SelectionSnapshot], None]


class SelectionController:
    """Owns the selection state for one story collection."""

    def __init__(self, stories: Iterable[Story]):
        self._stories = index_stories(stories)
        self._snapshot = SelectionSnapshot.idle()
        self._listeners: List[SnapshotListener] = []

    @property
    def snapshot(self) -> SelectionSnapshot:
        return self._snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a listener called with every NEW snapshot.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: SelectionEvent) -> SelectionSnapshot:
        """Apply one event and return the resulting snapshot."""
        if isinstance(event, NodeClicked):
            next_snapshot = self._on_lookup(event.node_id)
        elif isinstance(event, OptionActivated):
            next_snapshot = self._on_option(event.target)
        elif isinstance(event, DialogClosed):
            next_snapshot = SelectionSnapshot.idle()
        else:
            raise TypeError(f"Unknown selection event: {event!r}")

        if next_snapshot != self._snapshot:
            self._snapshot = next_snapshot
            for listener in list(self._listeners):
                listener(next_snapshot)

        return self._snapshot

    def _on_lookup(self, story_id: str) -> SelectionSnapshot:
        story = self._stories.get(story_id)
        if story is None:
            logger.debug("No story for node %r; selection unchanged", story_id)
            return self._snapshot
        return SelectionSnapshot.inspecting(story)

    def _on_option(self, target: str) -> SelectionSnapshot:
        # Jump links only exist inside an open dialog
        if self._snapshot.state != SelectionState.INSPECTING:
            return self._snapshot
        return self._on_lookup(target)
