from __future__ import annotations

import logging
import os
import stat
import sys
from pathlib import Path, PurePath, PurePosixPath, PureWindowsPath
from typing import Optional

from feed_commands.domain.errors import NotACliExtension
from feed_commands.domain.naming import is_cli_extension
from feed_commands.storage.layout import CommandLayout

logger = logging.getLogger(__name__)


def effective_style(style: str) -> str:
    if style == "auto":
        return "cmd" if sys.platform == "win32" else "sh"
    return style


def launcher_suffix(style: str) -> str:
    return ".cmd" if effective_style(style) == "cmd" else ""


def render_launcher(relative_path: str, style: str) -> str:
    """
    Render the launcher stub for an entry point given relative to the
    launcher's directory.

    The path is resolved against the launcher's own location when it runs,
    not when it is written, so the install tree can be relocated as a unit.

    - cmd: ``@"%~dp0\\<path>" %*`` for cmd.exe.
    - sh: an interpreter line followed by a single exec line forwarding "$@".
    """
    parts = PurePath(relative_path).parts
    if effective_style(style) == "cmd":
        target = str(PureWindowsPath(*parts))
        # Use CRLF line endings for Windows batch files.
        return f'@"%~dp0\\{target}" %*\r\n'

    target = str(PurePosixPath(*parts))
    return "\n".join([
        "#!/bin/sh",
        f'exec "$(dirname "$0")/{target}" "$@"',
        "",
    ])


class LauncherGenerator:
    """Validates an entry point and writes the launcher stub for it."""

    def __init__(
        self,
        layout: CommandLayout,
        command_prefix: str,
        style: str = "auto",
        log: Optional[logging.Logger] = None,
    ):
        self.layout = layout
        self.command_prefix = command_prefix
        self.style = style
        self.log = log or logger

    def generate(self, entry_point: Path) -> Path:
        file_name = entry_point.name
        if not is_cli_extension(file_name, self.command_prefix):
            raise NotACliExtension(
                f"This package does not offer a CLI extension tool "
                f"('{file_name}' does not start with '{self.command_prefix}')."
            )

        launcher_path = self.layout.resolve_launcher_path(file_name)
        relative = self.layout.relativize(entry_point)
        content = render_launcher(relative, self.style)

        self.log.info(f"Writing launcher '{launcher_path}' for '{relative}'.")
        launcher_path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps CRLF intact for cmd stubs on every platform.
        with open(launcher_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)

        if effective_style(self.style) == "sh":
            mode = os.stat(launcher_path).st_mode
            os.chmod(launcher_path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
            # zip extraction drops the executable bit; exec needs it back.
            if entry_point.is_file():
                entry_mode = os.stat(entry_point).st_mode
                os.chmod(entry_point, entry_mode | stat.S_IXUSR)

        return launcher_path
