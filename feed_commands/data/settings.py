from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import InstallerSettings


FEED_URL_ENV_VAR = "FEED_COMMANDS_FEED_URL"
SETTINGS_FILE_NAME = "settings.yaml"

logger = logging.getLogger(__name__)


def settings_path(home_dir: Path) -> Path:
    return home_dir / SETTINGS_FILE_NAME


def load_settings(home_dir: Path) -> InstallerSettings:
    """
    Load settings.yaml from the home directory, merging with defaults for any
    missing fields.

    A missing file means defaults. A file that cannot be parsed is reported
    and ignored so a broken config never blocks an install.
    FEED_COMMANDS_FEED_URL overrides the feed URL from the file.
    """
    path = settings_path(home_dir)
    raw: dict = {}
    if path.exists():
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                raw = loaded
            elif loaded is not None:
                logger.warning(f"Ignoring {path}: expected a mapping at the top level")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable settings file {path}: {e}")

    env_feed_url = os.environ.get(FEED_URL_ENV_VAR)
    if env_feed_url:
        raw["feed_url"] = env_feed_url

    try:
        return InstallerSettings(**raw)
    except ValidationError as e:
        logger.warning(f"Invalid settings in {path}, using defaults: {e}")
        settings = InstallerSettings()
        if env_feed_url:
            settings.feed_url = env_feed_url
        return settings
