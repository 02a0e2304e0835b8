import os
from pathlib import Path
from typing import List, Tuple

from feed_commands.domain.naming import command_name
from feed_commands.storage.layout import CommandLayout


PACKAGES_DIR_NAME = "packages"
BIN_DIR_NAME = "bin"


class CommandDirectory(CommandLayout):
    """
    Layout rooted at a single directory:

        <root>/packages/<package>/<version>/...   extracted archives
        <root>/bin/<command>[.cmd]                 launcher stubs

    Everything is addressed relative to the root, so the whole tree can be
    moved without breaking launchers.
    """

    def __init__(self, root: Path, launcher_suffix: str = ""):
        self._root = Path(root)
        self._launcher_suffix = launcher_suffix

    @property
    def root(self) -> Path:
        return self._root

    @property
    def packages_dir(self) -> Path:
        return self._root / PACKAGES_DIR_NAME

    @property
    def bin_dir(self) -> Path:
        return self._root / BIN_DIR_NAME

    def resolve_install_dir(self, package_id: str, version: str) -> Path:
        # Package ids are case-insensitive; one folder per id regardless of how it was typed.
        return self.packages_dir / package_id.lower() / version.lower()

    def resolve_launcher_path(self, executable_file_name: str) -> Path:
        self.bin_dir.mkdir(parents=True, exist_ok=True)
        return self.bin_dir / f"{command_name(executable_file_name)}{self._launcher_suffix}"

    def relativize(self, path: Path) -> str:
        return os.path.relpath(Path(path).resolve(), self.bin_dir.resolve())

    def list_installed(self) -> List[Tuple[str, str]]:
        installed: List[Tuple[str, str]] = []
        if not self.packages_dir.is_dir():
            return installed

        for pkg_dir in sorted(self.packages_dir.iterdir()):
            if not pkg_dir.is_dir():
                continue
            for version_dir in sorted(pkg_dir.iterdir()):
                # Staging folders from an interrupted install are not installs.
                if version_dir.is_dir() and not version_dir.name.startswith("."):
                    installed.append((pkg_dir.name, version_dir.name))
        return installed
