"""
Ingestion Layer

RESPONSIBILITY: Retrieve the raw story collection
OUTPUTS: FetchResult (immutable, success or explicit failure)
MUST NOT: Build graphs, lay out, or hold UI state
"""

from .contracts import FetchResult, FetchStatus
from .fetcher import StoryFetcher, FileStoryFetcher, FetchConfig, DEFAULT_ENDPOINT

__all__ = [
    'FetchResult', 'FetchStatus',
    'StoryFetcher', 'FileStoryFetcher', 'FetchConfig', 'DEFAULT_ENDPOINT',
]
