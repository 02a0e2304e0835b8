"""
Shared fixtures: an in-memory package feed served through httpx.MockTransport.
"""

import io
import json
import struct
import zipfile
from pathlib import Path
from typing import Dict, List, Optional

import httpx
import pytest

from feed_commands.data.models import InstallerSettings
from feed_commands.services.installer import Installer
from feed_commands.storage.command_directory import CommandDirectory

FEED_URL = "http://feed/index.json"
SEARCH_URL = "http://feed/search"
BASE_ADDRESS = "http://feed/pkg/"


def make_archive(files: Dict[str, str]) -> bytes:
    """Build a zip archive in memory from {name: text}."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, text in files.items():
            zf.writestr(name, text)
    return buf.getvalue()


def make_damaged_archive(files: Dict[str, str]) -> bytes:
    """
    Deflated zip whose headers are intact but whose first member's
    compressed data has been flipped, so it only fails while inflating.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, text in files.items():
            zf.writestr(name, text)
    data = bytearray(buf.getvalue())
    name_len, extra_len = struct.unpack("<HH", data[26:30])
    start = 30 + name_len + extra_len
    for i in range(start, start + 10):
        data[i] ^= 0xFF
    return bytes(data)


class FakeFeed:
    """
    Minimal feed: one search service, one base address, archives by URL.

    Attributes can be tweaked per test before the transport is used.
    """

    def __init__(self) -> None:
        self.resources: List[dict] = [
            {"@id": SEARCH_URL, "@type": "SearchQueryService"},
            {"@id": BASE_ADDRESS, "@type": "PackageBaseAddress/3.0.0"},
        ]
        self.versions: Dict[str, List[str]] = {}
        self.archives: Dict[str, bytes] = {}
        self.index_status = 200
        self.search_status = 200
        self.requests: List[httpx.Request] = []

    def add_package(self, package_id: str, version: str, files: Dict[str, str]) -> str:
        self.versions.setdefault(package_id.lower(), []).append(version)
        pid, ver = package_id.lower(), version.lower()
        url = f"{BASE_ADDRESS}{pid}/{ver}/{pid}.{ver}.nupkg"
        self.archives[url] = make_archive(files)
        return url

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url == FEED_URL:
            if self.index_status != 200:
                return httpx.Response(self.index_status)
            return httpx.Response(200, json={"version": "3.0.0", "resources": self.resources})
        if url.startswith(SEARCH_URL):
            if self.search_status != 200:
                return httpx.Response(self.search_status)
            query = request.url.params.get("q", "")
            package_id = query.split(":", 1)[-1].lower()
            data = [{"version": v} for v in self.versions.get(package_id, [])]
            return httpx.Response(200, json={"totalHits": len(data), "data": data})
        if url in self.archives:
            return httpx.Response(200, content=self.archives[url])
        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def urls(self) -> List[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def feed() -> FakeFeed:
    return FakeFeed()


@pytest.fixture
def settings() -> InstallerSettings:
    return InstallerSettings(feed_url=FEED_URL, command_prefix="ext-", launcher_style="sh")


@pytest.fixture
def layout(tmp_path: Path) -> CommandDirectory:
    return CommandDirectory(tmp_path / "home")


@pytest.fixture
def installer(feed: FakeFeed, settings: InstallerSettings, layout: CommandDirectory) -> Installer:
    return Installer(settings, layout, transport=feed.transport())


def metadata_files(main: str, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    files = {"content/commandMetadata.json": json.dumps({"main": main})}
    files.update(extra or {})
    return files
