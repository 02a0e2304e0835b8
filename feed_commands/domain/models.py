from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourceEntry(BaseModel):
    """
    A single service endpoint advertised by the feed index.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="@id", description="Absolute URL of the service.")
    type: str = Field(alias="@type", description="Role of the service, e.g. SearchQueryService.")


class FeedIndex(BaseModel):
    """
    Root index document of a package feed.

    The same type may appear more than once (versioned variants of a service),
    so lookups are order-sensitive.
    """

    model_config = ConfigDict(extra="ignore")

    resources: List[ResourceEntry] = Field(default_factory=list)

    def first_of_type(self, resource_type: str) -> Optional[ResourceEntry]:
        for entry in self.resources:
            if entry.type == resource_type:
                return entry
        return None

    def last_with_prefix(self, prefix: str) -> Optional[ResourceEntry]:
        for entry in reversed(self.resources):
            if entry.type.startswith(prefix):
                return entry
        return None


class SearchResultEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    version: str


class SearchResult(BaseModel):
    """
    Response of the search service. Ordering is whatever the feed returns.
    """

    model_config = ConfigDict(extra="ignore")

    data: List[SearchResultEntry] = Field(default_factory=list)

    def first_version(self) -> Optional[str]:
        if not self.data:
            return None
        return self.data[0].version


class CommandMetadata(BaseModel):
    """
    Optional descriptor shipped inside a package naming its entry point.
    """

    model_config = ConfigDict(extra="ignore")

    main: str = Field(description="Entry point path relative to the install root.")


class InstallResult(BaseModel):
    """
    Outcome of one install invocation, as reported to the user.
    """

    package_id: str
    success: bool
    message: str
    version: Optional[str] = None
    install_dir: Optional[Path] = None
    launcher_path: Optional[Path] = None
    already_installed: bool = False
    fatal: bool = False
