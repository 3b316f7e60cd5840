"""
Story Graph Test Fixtures

Explicit story collections for deterministic testing.
No random generation here (property tests build their own).
"""

from typing import Tuple

from backend.contracts.story import Story, Option, parse_stories


# =============================================================================
# WIRE PAYLOADS
# =============================================================================

TWO_STORY_PAYLOAD = [
    {"id": "1-1", "title": "Start", "options": [{"target": "1-2", "text": "Go north"}]},
    {"id": "1-2", "title": "Cave", "options": []},
]

BRANCHING_PAYLOAD = [
    {
        "id": "1-1",
        "title": "Crossroads",
        "content": "Two paths split in the fog.\nOne climbs, one descends.",
        "options": [
            {"target": "2-1", "text": "Climb"},
            {"target": "2-2", "text": "Descend"},
        ],
    },
    {
        "id": "2-1",
        "title": "Ridge",
        "content": "Wind howls across the ridge.",
        "options": [{"target": "3-1", "text": "Keep going"}, {"target": "9-9", "text": "Jump"}],
    },
    {
        "id": "2-2",
        "content": "A damp cellar.",
        "options": [{"target": "3-1"}, {"target": "1-1", "text": "Go back"}],
    },
    {"id": "3-1", "title": "The End", "content": "You made it."},
]


# =============================================================================
# PARSED STORIES
# =============================================================================

def two_stories() -> Tuple[Story, ...]:
    return parse_stories(TWO_STORY_PAYLOAD)


def branching_stories() -> Tuple[Story, ...]:
    return parse_stories(BRANCHING_PAYLOAD)


def chain(*ids: str) -> Tuple[Story, ...]:
    """Stories where each one offers a single option to the next id."""
    stories = []
    for i, story_id in enumerate(ids):
        options = (Option(target=ids[i + 1]),) if i + 1 < len(ids) else ()
        stories.append(Story(id=story_id, options=options))
    return tuple(stories)
