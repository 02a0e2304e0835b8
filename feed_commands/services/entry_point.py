"""
Work out which file of an installed package is the command to run.

Two strategies exist. ``MetadataDriven`` trusts the command metadata file the
package ships; ``HeuristicScan`` looks for something executable in the tools
directory. ``select_strategy`` picks one based on what the package contains.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Union

from pydantic import ValidationError

from feed_commands.data.models import InstallerSettings
from feed_commands.domain.errors import InvalidCommandMetadata, NoExecutableOffered, NoToolsDirectory
from feed_commands.domain.models import CommandMetadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetadataDriven:
    metadata_path: str

    def resolve(self, install_dir: Path) -> Path:
        metadata_file = install_dir / self.metadata_path
        try:
            metadata = CommandMetadata.model_validate_json(metadata_file.read_text(encoding="utf-8-sig"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise InvalidCommandMetadata(f"Could not read command metadata '{metadata_file}': {e}") from e

        main_path = (install_dir / metadata.main).resolve()
        if not main_path.is_relative_to(install_dir.resolve()):
            raise InvalidCommandMetadata(
                f"Command metadata '{metadata_file}' names '{metadata.main}', which is outside the package."
            )
        return main_path


@dataclass(frozen=True)
class HeuristicScan:
    tools_dir: str
    extensions: Sequence[str]

    def resolve(self, install_dir: Path) -> Path:
        tools_dir = install_dir / self.tools_dir
        if not tools_dir.is_dir():
            raise NoToolsDirectory("This package does not have a tools directory.")

        files: List[Path] = sorted(p for p in tools_dir.iterdir() if p.is_file())
        for extension in self.extensions:
            wanted = extension.lower()
            for candidate in files:
                if candidate.suffix.lower() == wanted:
                    return candidate.resolve()

        raise NoExecutableOffered("This package does not offer any executable.")


ResolutionStrategy = Union[MetadataDriven, HeuristicScan]


def select_strategy(install_dir: Path, settings: InstallerSettings) -> ResolutionStrategy:
    if (install_dir / settings.metadata_path).is_file():
        return MetadataDriven(settings.metadata_path)
    return HeuristicScan(settings.tools_dir, tuple(settings.executable_extensions))


def resolve_entry_point(install_dir: Path, settings: InstallerSettings) -> Path:
    strategy = select_strategy(install_dir, settings)
    logger.debug(f"Resolving entry point of '{install_dir}' with {type(strategy).__name__}")
    return strategy.resolve(install_dir)
