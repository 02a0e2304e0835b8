"""
Fetch the root index document of a package feed.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from feed_commands.domain.errors import FeedUnavailable, MalformedResponse
from feed_commands.domain.models import FeedIndex

logger = logging.getLogger(__name__)


class FeedIndexClient:
    """Retrieves and parses the feed's list of service endpoints."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        feed_url: str,
        log: Optional[logging.Logger] = None,
    ):
        self.client = client
        self.feed_url = feed_url
        self.log = log or logger

    async def fetch(self) -> FeedIndex:
        self.log.debug(f"Fetching feed index from {self.feed_url}")
        try:
            response = await self.client.get(self.feed_url)
        except httpx.HTTPError as e:
            raise FeedUnavailable(f"Could not get feed details from '{self.feed_url}': {e}") from e

        if not response.is_success:
            raise FeedUnavailable(
                f"Could not get feed details from '{self.feed_url}' (HTTP {response.status_code})."
            )

        try:
            return FeedIndex.model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedResponse(f"Feed index at '{self.feed_url}' could not be parsed: {e}") from e
