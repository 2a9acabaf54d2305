"""Tests for settings loading."""

import pytest

from nginx_reader import config as config_module
from nginx_reader.config import ReaderSettings, load_settings
from nginx_reader.errors import SettingsError


@pytest.fixture(autouse=True)
def no_user_settings(monkeypatch, tmp_path):
    """Keep the real ~/.nginx-reader out of the tests."""
    monkeypatch.delenv(config_module.ENV_VAR, raising=False)
    monkeypatch.setattr(config_module, "DEFAULT_SETTINGS_FILE", tmp_path / "absent.yaml")


def test_defaults_when_no_file():
    settings = load_settings()

    assert settings == ReaderSettings()
    assert settings.max_include_depth == 32
    assert settings.encoding == "utf-8"
    assert settings.log_level == "WARNING"


def test_load_from_file(write_conf):
    path = write_conf("settings.yaml", "max_include_depth: 4\nlog_level: debug\n")

    settings = load_settings(path)

    assert settings.max_include_depth == 4
    assert settings.log_level == "DEBUG"


def test_load_from_env(write_conf, monkeypatch):
    path = write_conf("env.yaml", "encoding: latin-1\n")
    monkeypatch.setenv(config_module.ENV_VAR, path)

    assert load_settings().encoding == "latin-1"


def test_empty_file_gives_defaults(write_conf):
    assert load_settings(write_conf("empty.yaml", "")) == ReaderSettings()


@pytest.mark.parametrize(
    "text",
    [
        "max_include_depth: 0\n",
        "log_level: LOUD\n",
        "- just\n- a list\n",
        "max_include_depth: [unclosed\n",
    ],
)
def test_invalid_settings(write_conf, text):
    with pytest.raises(SettingsError):
        load_settings(write_conf("bad.yaml", text))


def test_explicit_missing_file(tmp_path):
    with pytest.raises(SettingsError, match="does not exist"):
        load_settings(tmp_path / "missing.yaml")
