"""
Integration Test Fixtures

Sessions wired to in-memory transports. No network access.
"""

from typing import Any, List

import httpx

from backend.engine import StoryGraphSession, StoryGraphConfig
from frontend.export import ExportConfig
from ingestion import StoryFetcher, FetchConfig

ENDPOINT = "https://stories.example/"


def serving(payload: Any, status: int = 200) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(status, json=payload))


def failing(message: str = "connection refused") -> httpx.MockTransport:
    def handler(request):
        raise httpx.ConnectError(message, request=request)
    return httpx.MockTransport(handler)


def make_session(transport: httpx.MockTransport, output_dir: str = None, opened: List[str] = None,
                 open_result: bool = True) -> StoryGraphSession:
    config = StoryGraphConfig(
        fetch=FetchConfig(endpoint=ENDPOINT),
        export=ExportConfig(output_dir=output_dir),
    )

    def opener(url):
        if opened is not None:
            opened.append(url)
        return open_result

    return StoryGraphSession(
        config,
        fetcher=StoryFetcher(config.fetch, transport=transport),
        opener=opener,
    )
