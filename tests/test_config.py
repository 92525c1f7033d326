"""Unit tests for config loading, validation, and persistence."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from nzdeploy.config import (
    ConfigError,
    Settings,
    load_config,
    load_theme,
    save_config,
    save_theme,
)
from nzdeploy.constants import DEFAULT_API_URL


def _write(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


class TestSettings:
    def test_defaults(self):
        """
        Given no arguments
        When Settings is constructed
        Then the documented defaults are used
        """
        settings = Settings()
        assert settings.api_url == DEFAULT_API_URL
        assert settings.dry_run is False
        assert settings.per_page == 100

    @pytest.mark.parametrize("per_page", [0, 101])
    def test_per_page_bounds(self, per_page):
        """
        Given a per_page outside 1..100
        When Settings is validated
        Then a ValidationError is raised
        """
        with pytest.raises(ValidationError):
            Settings(per_page=per_page)

    def test_timeout_must_be_positive(self):
        """
        Given a zero timeout
        When Settings is validated
        Then a ValidationError is raised
        """
        with pytest.raises(ValidationError):
            Settings(request_timeout=0)


class TestLoadConfig:
    def test_bootstraps_when_file_missing(self, isolated_config: Path):
        """
        Given no config file exists
        When load_config is called
        Then defaults are returned and config.json plus README are created
        """
        settings = load_config()

        assert settings == Settings()
        assert (isolated_config / "config.json").exists()
        assert (isolated_config / "README.md").exists()

    def test_bootstrapped_file_round_trips(self, isolated_config: Path):
        """
        Given the bootstrap file written on first run
        When load_config is called again
        Then it loads cleanly to the defaults
        """
        load_config()
        assert json.loads((isolated_config / "config.json").read_text())["dry_run"] is False
        assert load_config() == Settings()

    def test_empty_file_returns_defaults(self, isolated_config: Path):
        """
        Given an empty config.json
        When load_config is called
        Then defaults are returned
        """
        (isolated_config).mkdir(parents=True)
        (isolated_config / "config.json").write_text("")
        assert load_config() == Settings()

    def test_loads_values(self, isolated_config: Path):
        """
        Given a config.json with custom values
        When load_config is called
        Then those values are used
        """
        _write(
            isolated_config / "config.json",
            {"api_url": "https://deploy.test/api", "dry_run": True, "per_page": 30},
        )
        settings = load_config()
        assert settings.api_url == "https://deploy.test/api"
        assert settings.dry_run is True
        assert settings.per_page == 30

    def test_underscore_keys_are_stripped(self, isolated_config: Path):
        """
        Given a config.json with a _comment key
        When load_config is called
        Then the reserved key is ignored
        """
        _write(isolated_config / "config.json", {"_comment": "hello", "dry_run": True})
        assert load_config().dry_run is True

    def test_invalid_json_raises(self, isolated_config: Path):
        """
        Given a config.json containing invalid JSON
        When load_config is called
        Then ConfigError is raised
        """
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.json").write_text("{not json")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config()

    def test_non_object_raises(self, isolated_config: Path):
        """
        Given a config.json whose top level is a list
        When load_config is called
        Then ConfigError is raised
        """
        _write(isolated_config / "config.json", [1, 2])
        with pytest.raises(ConfigError, match="JSON object"):
            load_config()

    def test_invalid_value_raises(self, isolated_config: Path):
        """
        Given a config.json with an out-of-range per_page
        When load_config is called
        Then ConfigError is raised
        """
        _write(isolated_config / "config.json", {"per_page": 1000})
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config()

    def test_env_overrides_api_url(self, isolated_config: Path, monkeypatch):
        """
        Given NZDEPLOY_API_URL is set
        When load_config is called
        Then api_url comes from the environment
        """
        _write(isolated_config / "config.json", {"api_url": "https://file.test"})
        monkeypatch.setenv("NZDEPLOY_API_URL", "https://env.test")
        assert load_config().api_url == "https://env.test"


class TestSaveConfig:
    def test_save_then_load(self, isolated_config: Path):
        """
        Given custom settings
        When they are saved and loaded again
        Then the loaded settings are equal
        """
        settings = Settings(api_url="https://deploy.test", dry_run=True, per_page=10)
        save_config(settings)
        assert load_config() == settings


class TestTheme:
    def test_missing_theme_is_none(self):
        """
        Given no theme file
        When load_theme is called
        Then None is returned
        """
        assert load_theme() is None

    def test_save_and_load_theme(self):
        """
        Given a saved theme
        When load_theme is called
        Then the theme name is returned
        """
        save_theme("nord")
        assert load_theme() == "nord"

    def test_corrupt_theme_file_is_ignored(self, isolated_config: Path):
        """
        Given a theme file that is not valid JSON
        When load_theme is called
        Then None is returned
        """
        isolated_config.mkdir(parents=True)
        (isolated_config / "theme.json").write_text("nope")
        assert load_theme() is None
