"""
Story Contracts

Immutable input entities: one Story per narrative node, one Option
per labelled choice. Parsed once per fetch and never mutated.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple

from .base import MalformedStoryError


@dataclass(frozen=True)
class Option:
    """A labelled choice leading to another story (target is not validated)."""
    target: str
    text: Optional[str] = None

    @property
    def label(self) -> str:
        return self.text or self.target


@dataclass(frozen=True)
class Story:
    """One narrative unit."""
    id: str
    title: Optional[str] = None
    content: Optional[str] = None
    options: Tuple[Option, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        return self.title or self.id


def _optional_str(record: dict, key: str, index: int) -> Optional[str]:
    value = record.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedStoryError(f"'{key}' must be a string", index)
    return value


def parse_option(raw: Any, index: int) -> Option:
    if not isinstance(raw, dict):
        raise MalformedStoryError("option must be an object", index)
    target = raw.get("target")
    if not isinstance(target, str):
        raise MalformedStoryError("option 'target' must be a string", index)
    return Option(target=target, text=_optional_str(raw, "text", index))


def parse_story(raw: Any, index: int = 0) -> Story:
    """Parse one wire record into a Story. Raises MalformedStoryError."""
    if not isinstance(raw, dict):
        raise MalformedStoryError("story must be an object", index)

    story_id = raw.get("id")
    if not isinstance(story_id, str) or not story_id:
        raise MalformedStoryError("missing required 'id'", index)

    raw_options = raw.get("options")
    if raw_options is None:
        raw_options = []
    if not isinstance(raw_options, list):
        raise MalformedStoryError("'options' must be a list", index)

    return Story(
        id=story_id,
        title=_optional_str(raw, "title", index),
        content=_optional_str(raw, "content", index),
        options=tuple(parse_option(o, index) for o in raw_options),
    )


def parse_stories(payload: Any) -> Tuple[Story, ...]:
    """
    Parse the fetched payload into an ordered tuple of stories.

    All-or-nothing: the first malformed record rejects the batch.
    """
    if not isinstance(payload, list):
        raise MalformedStoryError("payload must be a list of stories")
    return tuple(parse_story(raw, i) for i, raw in enumerate(payload))


def index_stories(stories: Iterable[Story]) -> dict:
    """id -> Story lookup. On duplicate ids the first record wins."""
    index = {}
    for story in stories:
        index.setdefault(story.id, story)
    return index
