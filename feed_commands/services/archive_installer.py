"""
Extract downloaded archives into their installation directory.
"""
from __future__ import annotations

import logging
import shutil
import uuid
import zipfile
import zlib
from pathlib import Path
from typing import Optional

from feed_commands.domain.errors import ExtractionFailed

logger = logging.getLogger(__name__)


class ArchiveInstaller:
    """
    Applies the install policy for a target directory and extracts archives.

    The target directory only ever appears fully extracted: contents go to a
    hidden sibling staging directory which is renamed into place at the end.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def prepare(self, target_dir: Path, force: bool) -> bool:
        """
        Decide whether an install into ``target_dir`` should proceed.

        Returns False when the directory exists and ``force`` is off, meaning
        the version is already installed. With ``force`` the existing directory
        is removed before returning True.
        """
        if not target_dir.exists():
            return True

        self.log.info(f"Directory '{target_dir}' already exists.")
        if not force:
            return False

        self.log.info(f"Removing '{target_dir}'.")
        shutil.rmtree(target_dir)
        return True

    def extract(self, archive_path: Path, target_dir: Path) -> None:
        self.log.info(f"Extracting to '{target_dir}'.")
        target_dir.parent.mkdir(parents=True, exist_ok=True)
        staging_dir = target_dir.parent / f".{target_dir.name}.staging-{uuid.uuid4().hex}"

        # zlib.error and EOFError come from damaged or truncated member data,
        # NotImplementedError and RuntimeError from unsupported or encrypted members.
        try:
            with zipfile.ZipFile(archive_path, "r") as zip_ref:
                zip_ref.extractall(staging_dir)
            staging_dir.replace(target_dir)
        except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError, OSError) as e:
            shutil.rmtree(staging_dir, ignore_errors=True)
            raise ExtractionFailed(f"Could not extract '{archive_path}' to '{target_dir}': {e}") from e
