"""
Story Fetcher

Fetches the story collection from the configured endpoint.

PRINCIPLES:
===========
1. One read-only GET, no parameters, no pagination
2. Failed fetches are first-class results, never exceptions
3. Parsing is all-or-nothing (one bad record fails the batch)
4. No retries; no timeout unless configured
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional
import json
import logging
import os

import httpx

from backend.contracts.base import MalformedStoryError
from backend.contracts.story import parse_stories
from .contracts import FetchResult, FetchStatus

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://hylsu7x6fealllgbdh655htpou0lljkv.lambda-url.us-west-2.on.aws/"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FetchConfig:
    """Where and how to fetch stories."""
    endpoint: str = DEFAULT_ENDPOINT
    timeout: Optional[float] = None
    user_agent: str = "StoryGraph/1.0"

    @classmethod
    def from_env(cls) -> FetchConfig:
        return cls(endpoint=os.environ.get("STORYGRAPH_ENDPOINT", DEFAULT_ENDPOINT))


class StoryFetcher:
    """
    Fetches and parses the story list.

    GUARANTEES:
    ===========
    1. Always returns a FetchResult
    2. Transport, HTTP, JSON and record errors all carry a message
    3. A successful result holds every story in payload order
    """

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._config = config or FetchConfig()
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    async def fetch(self) -> FetchResult:
        """Fetch the story collection."""
        attempted_at = _now()
        url = self._config.endpoint
        logger.info("Fetching stories from %s", url)

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout,
                transport=self._transport
            ) as client:
                response = await client.get(
                    url,
                    headers={'User-Agent': self._config.user_agent},
                    follow_redirects=True
                )
        except httpx.TimeoutException as e:
            return self._failure(url, attempted_at, FetchStatus.TIMEOUT, f"timeout: {e}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._failure(url, attempted_at, FetchStatus.NETWORK_ERROR, str(e) or type(e).__name__)

        if response.is_error:
            return self._failure(
                url, attempted_at, FetchStatus.HTTP_ERROR,
                f"Request failed with status code {response.status_code}",
                http_status=response.status_code
            )

        try:
            payload = response.json()
        except (ValueError, RecursionError) as e:
            return self._failure(url, attempted_at, FetchStatus.PARSE_ERROR, f"invalid JSON: {e}")

        return self._parse(url, attempted_at, payload)

    def _parse(self, url: str, attempted_at: datetime, payload: Any) -> FetchResult:
        try:
            stories = parse_stories(payload)
        except MalformedStoryError as e:
            return self._failure(url, attempted_at, FetchStatus.PARSE_ERROR, f"malformed story {e}")

        logger.info("Fetched %d stories", len(stories))
        return FetchResult(
            url=url,
            attempted_at=attempted_at,
            completed_at=_now(),
            status=FetchStatus.SUCCESS,
            stories=stories,
        )

    def _failure(
        self,
        url: str,
        attempted_at: datetime,
        status: FetchStatus,
        message: str,
        http_status: Optional[int] = None
    ) -> FetchResult:
        logger.warning("Story fetch failed (%s): %s", status.value, message)
        return FetchResult(
            url=url,
            attempted_at=attempted_at,
            completed_at=_now(),
            status=status,
            error_message=message,
            http_status=http_status,
        )


class FileStoryFetcher(StoryFetcher):
    """Reads the same payload from a local JSON file."""

    def __init__(self, path: str):
        super().__init__(FetchConfig(endpoint=path))
        self._path = path

    async def fetch(self) -> FetchResult:
        attempted_at = _now()
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except OSError as e:
            return self._failure(self._path, attempted_at, FetchStatus.NETWORK_ERROR, str(e))
        except (ValueError, RecursionError) as e:
            return self._failure(self._path, attempted_at, FetchStatus.PARSE_ERROR, f"invalid JSON: {e}")

        return self._parse(self._path, attempted_at, payload)
