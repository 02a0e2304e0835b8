from pathlib import Path
from typing import Optional
import os

from feed_commands.data.models import InstallerSettings
from feed_commands.data.settings import load_settings
from feed_commands.services.installer import Installer
from feed_commands.services.launcher import launcher_suffix
from feed_commands.storage.command_directory import CommandDirectory

HOME_ENV_VAR = "FEED_COMMANDS_HOME"
_DEFAULT_HOME_DIR = Path("~/.feed-commands")

_home_dir: Optional[Path] = None
_settings: Optional[InstallerSettings] = None
_command_directory: Optional[CommandDirectory] = None


def set_home_dir(path: Optional[Path]) -> None:
    """Point the process at another home directory and drop cached objects."""
    global _home_dir, _settings, _command_directory
    _home_dir = Path(path).expanduser() if path is not None else None
    _settings = None
    _command_directory = None


def get_home_dir() -> Path:
    global _home_dir
    if _home_dir is None:
        env_path = os.environ.get(HOME_ENV_VAR)
        if env_path:
            _home_dir = Path(env_path).expanduser()
        else:
            _home_dir = _DEFAULT_HOME_DIR.expanduser()
    _home_dir.mkdir(parents=True, exist_ok=True)
    return _home_dir


def get_settings() -> InstallerSettings:
    global _settings
    if _settings is None:
        _settings = load_settings(get_home_dir())
    return _settings


def get_command_directory() -> CommandDirectory:
    global _command_directory
    if _command_directory is None:
        suffix = launcher_suffix(get_settings().launcher_style)
        _command_directory = CommandDirectory(get_home_dir(), launcher_suffix=suffix)
    return _command_directory


def build_installer() -> Installer:
    return Installer(get_settings(), get_command_directory())
