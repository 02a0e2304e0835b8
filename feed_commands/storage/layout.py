from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Tuple


class CommandLayout(ABC):
    """
    Abstract base class for the on-disk layout of installed commands.
    """

    @abstractmethod
    def resolve_install_dir(self, package_id: str, version: str) -> Path:
        """Deterministic installation directory for a package version."""
        pass

    @abstractmethod
    def resolve_launcher_path(self, executable_file_name: str) -> Path:
        """Path of the launcher stub for an entry point file name."""
        pass

    @abstractmethod
    def relativize(self, path: Path) -> str:
        """
        Express an absolute path relative to the directory launchers live in.
        Launchers resolve it against their own location at execution time.
        """
        pass

    @abstractmethod
    def list_installed(self) -> List[Tuple[str, str]]:
        """Installed (package, version) pairs."""
        pass
