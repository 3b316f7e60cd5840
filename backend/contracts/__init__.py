"""
Contracts

Immutable types shared by every layer. Layers import from here,
never from each other's implementations.
"""

from .base import (
    ErrorCode, Error, StoryGraphError, MalformedStoryError
)
from .story import Story, Option, parse_story, parse_stories, index_stories
from .graph import (
    GraphNode, GraphEdge, GraphModel, NodePlacement, BoundingBox, LayoutResult
)
from .events import (
    SelectionState, SelectionSnapshot, SelectionEvent,
    NodeClicked, OptionActivated, DialogClosed
)
from .session import LoadPhase, FETCH_ERROR_PREFIX

__all__ = [
    'ErrorCode', 'Error', 'StoryGraphError', 'MalformedStoryError',
    'Story', 'Option', 'parse_story', 'parse_stories', 'index_stories',
    'GraphNode', 'GraphEdge', 'GraphModel', 'NodePlacement', 'BoundingBox', 'LayoutResult',
    'SelectionState', 'SelectionSnapshot', 'SelectionEvent',
    'NodeClicked', 'OptionActivated', 'DialogClosed',
    'LoadPhase', 'FETCH_ERROR_PREFIX',
]
