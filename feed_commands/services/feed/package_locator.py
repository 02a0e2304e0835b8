"""
Resolve the version of a package to install through the feed's search service.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from feed_commands.domain.errors import MalformedResponse, ServiceUnavailable, VersionNotFound
from feed_commands.domain.models import FeedIndex, SearchResult

logger = logging.getLogger(__name__)


class PackageLocator:
    """Queries the search service and picks the version to install."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        search_service_type: str,
        log: Optional[logging.Logger] = None,
    ):
        self.client = client
        self.search_service_type = search_service_type
        self.log = log or logger

    def build_query_url(self, feed: FeedIndex, package_id: str, include_prerelease: bool) -> str:
        # First declared search service wins.
        service = feed.first_of_type(self.search_service_type)
        if service is None:
            raise ServiceUnavailable(
                f"The feed does not advertise a '{self.search_service_type}' resource."
            )
        params = {"q": f"packageid:{package_id}"}
        if include_prerelease:
            params["prerelease"] = "true"
        return str(httpx.URL(service.id).copy_merge_params(params))

    async def locate(self, feed: FeedIndex, package_id: str, include_prerelease: bool = False) -> str:
        """
        Return the version of ``package_id`` to install.

        The first record of the search response is authoritative; no sorting
        or semantic version comparison happens here.
        """
        service_url = self.build_query_url(feed, package_id, include_prerelease)
        self.log.debug(f"Querying {service_url}")
        try:
            response = await self.client.get(service_url)
        except httpx.HTTPError as e:
            raise ServiceUnavailable(f"Could not get service details from '{service_url}': {e}") from e

        if not response.is_success:
            raise ServiceUnavailable(
                f"Could not get service details from '{service_url}' (HTTP {response.status_code})."
            )

        try:
            result = SearchResult.model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedResponse(f"Search response from '{service_url}' could not be parsed: {e}") from e

        version = result.first_version()
        if version is None:
            raise VersionNotFound(f"Could not find a version of '{package_id}'.")

        self.log.info(f"Found version {version}.")
        return version
