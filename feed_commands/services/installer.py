"""
Install a command package from the feed.

The pipeline is strictly sequential, each stage feeding the next:

1. fetch the feed index
2. resolve the version through the search service
3. stop early if that version is already installed (unless forced)
4. download the archive from the base address resource
5. extract it into the installation directory
6. resolve the entry point and write its launcher

Failures are reported through ``InstallResult``; nothing is retried and
nothing already on disk is rolled back.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx

from feed_commands.data.models import InstallerSettings
from feed_commands.domain.errors import InstallError
from feed_commands.domain.models import InstallResult
from feed_commands.services.archive_installer import ArchiveInstaller
from feed_commands.services.entry_point import resolve_entry_point
from feed_commands.services.feed.archive_fetcher import ArchiveFetcher
from feed_commands.services.feed.index_client import FeedIndexClient
from feed_commands.services.feed.package_locator import PackageLocator
from feed_commands.services.launcher import LauncherGenerator
from feed_commands.storage.layout import CommandLayout

logger = logging.getLogger(__name__)


class Installer:
    def __init__(
        self,
        settings: InstallerSettings,
        layout: CommandLayout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.settings = settings
        self.layout = layout
        self.transport = transport
        self.log = log or logger
        self.archive_installer = ArchiveInstaller(self.log)
        self.launcher_generator = LauncherGenerator(
            layout,
            settings.command_prefix,
            settings.launcher_style,
            self.log,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self.transport,
            follow_redirects=True,
            timeout=self.settings.timeout_seconds,
        )

    async def install(
        self,
        package_id: str,
        force: bool = False,
        include_prerelease: bool = False,
    ) -> InstallResult:
        self.log.info(f"Installing {package_id}.")
        result = InstallResult(package_id=package_id, success=False, message="")

        try:
            async with self._client() as client:
                feed = await FeedIndexClient(client, self.settings.feed_url, self.log).fetch()

                locator = PackageLocator(client, self.settings.search_service_type, self.log)
                version = await locator.locate(feed, package_id, include_prerelease)
                result.version = version

                install_dir = self.layout.resolve_install_dir(package_id, version)
                result.install_dir = install_dir

                if not self.archive_installer.prepare(install_dir, force):
                    result.already_installed = True
                    if self.settings.refresh_launcher:
                        result.launcher_path = self._write_launcher(install_dir)
                    result.success = True
                    result.message = f"{package_id} {version} is already installed."
                    return result

                fetcher = ArchiveFetcher(
                    client,
                    self.settings.base_address_type_prefix,
                    self.settings.archive_extension,
                    self.log,
                )
                archive_url = fetcher.build_download_url(feed, package_id, version)
                self.log.info(f"Archive url is '{archive_url}'.")
                archive_path = await fetcher.download(archive_url)

            try:
                self.archive_installer.extract(archive_path, install_dir)
            finally:
                archive_path.unlink(missing_ok=True)

            result.launcher_path = self._write_launcher(install_dir)

        except InstallError as e:
            result.message = str(e)
            result.fatal = e.fatal
            if e.fatal:
                self.log.error(result.message)
            else:
                self.log.warning(result.message)
            return result
        except OSError as e:
            result.message = f"Could not install {package_id}: {e}"
            self.log.error(result.message, exc_info=True)
            return result

        result.success = True
        result.message = f"Installed {package_id} {version}."
        return result

    def _write_launcher(self, install_dir: Path) -> Path:
        entry_point = resolve_entry_point(install_dir, self.settings)
        self.log.info(f"Entry point is '{entry_point}'.")
        return self.launcher_generator.generate(entry_point)
