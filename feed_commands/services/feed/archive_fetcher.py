"""
Download package archives from the feed's base address resource.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

import aiofiles
import httpx

from feed_commands.domain.errors import ArchiveUnavailable, ServiceUnavailable
from feed_commands.domain.models import FeedIndex
from feed_commands.domain.naming import archive_url

logger = logging.getLogger(__name__)


class ArchiveFetcher:
    """Builds archive download URLs and streams archives to temporary files."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_address_type_prefix: str,
        archive_extension: str,
        log: Optional[logging.Logger] = None,
    ):
        self.client = client
        self.base_address_type_prefix = base_address_type_prefix
        self.archive_extension = archive_extension
        self.log = log or logger

    def build_download_url(self, feed: FeedIndex, package_id: str, version: str) -> str:
        # Feeds list versioned variants of the base address; the last one listed wins.
        resource = feed.last_with_prefix(self.base_address_type_prefix)
        if resource is None:
            raise ServiceUnavailable(
                f"The feed does not advertise a '{self.base_address_type_prefix}' resource."
            )
        return archive_url(resource.id, package_id, version, self.archive_extension)

    async def download(self, url: str) -> Path:
        """
        Stream ``url`` into a uniquely named temporary file and return its path.

        The caller owns the file and is expected to remove it.
        """
        fd, tmp_name = tempfile.mkstemp(prefix="feed-commands-", suffix=f".{self.archive_extension}")
        os.close(fd)
        tmp_path = Path(tmp_name)
        self.log.info(f"Saving to '{tmp_path}'.")

        try:
            async with self.client.stream("GET", url) as response:
                if not response.is_success:
                    raise ArchiveUnavailable(
                        f"Could not get archive from '{url}' (HTTP {response.status_code})."
                    )
                async with aiofiles.open(tmp_path, "wb") as f:
                    async for chunk in response.aiter_bytes():
                        await f.write(chunk)
        except httpx.HTTPError as e:
            tmp_path.unlink(missing_ok=True)
            raise ArchiveUnavailable(f"Could not get archive from '{url}': {e}") from e
        except ArchiveUnavailable:
            tmp_path.unlink(missing_ok=True)
            raise

        return tmp_path
