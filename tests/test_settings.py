"""
Tests for settings loading — settings.yaml parsing, defaults and overrides.
"""

import textwrap
from pathlib import Path

import pytest

from feed_commands.data.models import DEFAULT_FEED_URL, InstallerSettings
from feed_commands.data.settings import FEED_URL_ENV_VAR, load_settings


@pytest.fixture(autouse=True)
def _no_env_override(monkeypatch):
    monkeypatch.delenv(FEED_URL_ENV_VAR, raising=False)


def test_defaults_without_file(tmp_path: Path):
    settings = load_settings(tmp_path)
    assert settings == InstallerSettings()
    assert settings.feed_url == DEFAULT_FEED_URL
    assert settings.search_service_type == "SearchQueryService"
    assert settings.base_address_type_prefix == "PackageBaseAddress"
    assert settings.metadata_path == "content/commandMetadata.json"
    assert settings.refresh_launcher is False


def test_partial_file_merges_defaults(tmp_path: Path):
    (tmp_path / "settings.yaml").write_text(textwrap.dedent("""\
        feed_url: http://feed/index.json
        command_prefix: ext-
        executable_extensions: [".sh", ".exe"]
    """))
    settings = load_settings(tmp_path)
    assert settings.feed_url == "http://feed/index.json"
    assert settings.command_prefix == "ext-"
    assert settings.executable_extensions == [".sh", ".exe"]
    assert settings.archive_extension == "nupkg"


def test_env_overrides_feed_url(tmp_path: Path, monkeypatch):
    (tmp_path / "settings.yaml").write_text("feed_url: http://from-file/index.json\n")
    monkeypatch.setenv(FEED_URL_ENV_VAR, "http://from-env/index.json")
    assert load_settings(tmp_path).feed_url == "http://from-env/index.json"


def test_invalid_yaml_falls_back_to_defaults(tmp_path: Path):
    (tmp_path / "settings.yaml").write_text("feed_url: [unclosed\n")
    assert load_settings(tmp_path) == InstallerSettings()


def test_invalid_values_fall_back_to_defaults(tmp_path: Path):
    (tmp_path / "settings.yaml").write_text("launcher_style: fish\ntimeout_seconds: -1\n")
    assert load_settings(tmp_path) == InstallerSettings()


def test_non_mapping_is_ignored(tmp_path: Path):
    (tmp_path / "settings.yaml").write_text("- just\n- a list\n")
    assert load_settings(tmp_path) == InstallerSettings()
