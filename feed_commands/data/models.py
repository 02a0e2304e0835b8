from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


DEFAULT_FEED_URL = "https://api.nuget.org/v3/index.json"


class InstallerSettings(BaseModel):
    """
    Configuration for the installer.
    Persisted at: <HOME>/settings.yaml
    """

    feed_url: str = Field(
        default=DEFAULT_FEED_URL,
        description="Root index document of the package feed.",
    )
    search_service_type: str = Field(
        default="SearchQueryService",
        description="Resource type of the search service; the first matching entry is used.",
    )
    base_address_type_prefix: str = Field(
        default="PackageBaseAddress",
        description="Type prefix of the archive base address; the last matching entry is used.",
    )
    archive_extension: str = Field(
        default="nupkg",
        description="File extension of package archives on the feed.",
    )
    command_prefix: str = Field(
        default="dotnet-",
        description="Entry point file names must start with this to count as a CLI extension.",
    )
    metadata_path: str = Field(
        default="content/commandMetadata.json",
        description="Location of the command metadata file, relative to the install root.",
    )
    tools_dir: str = Field(
        default="tools",
        description="Directory scanned for executables when no metadata file exists.",
    )
    executable_extensions: List[str] = Field(
        default_factory=lambda: [".exe", ".cmd", ".bat", ".ps1", ".sh"],
        description="Recognised entry point extensions, highest priority first.",
    )
    launcher_style: Literal["auto", "cmd", "sh"] = Field(
        default="auto",
        description="Launcher flavour: cmd for Windows, sh for POSIX shells, auto to pick by platform.",
    )
    refresh_launcher: bool = Field(
        default=False,
        description="Re-derive the launcher when the package version is already installed.",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout applied to every feed request.",
    )
