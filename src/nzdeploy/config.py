"""Config file loading, validation, and persistence.

Schema on disk (~/.config/nzdeploy/config.json):

    {
        "api_url": "https://deploy.example.com/api",
        "dry_run": false,
        "request_timeout": 30,
        "per_page": 100
    }

Keys prefixed with "_" are reserved (e.g. "_comment") and are stripped on load.
The ``NZDEPLOY_API_URL`` environment variable overrides ``api_url``.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from nzdeploy.constants import DEFAULT_API_URL, DEFAULT_PER_PAGE, DEFAULT_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("~/.config/nzdeploy/config.json").expanduser()

_README_PATH = Path("~/.config/nzdeploy/README.md").expanduser()

API_URL_ENV = "NZDEPLOY_API_URL"

_README_CONTENT = """\
# nzdeploy configuration

Edit `config.json` in this directory to point nzdeploy at your deployment API.

## Schema

```json
{
    "api_url": "https://deploy.example.com/api",
    "dry_run": false,
    "request_timeout": 30,
    "per_page": 100
}
```

- `api_url`: base URL; deployments are POSTed to `<api_url>/project`.
- `dry_run`: log the request instead of sending it.
- `request_timeout`: seconds to wait for the deployment API.
- `per_page`: how many repositories to list (1-100).

`NZDEPLOY_API_URL` in the environment overrides `api_url`.
Keys prefixed with `_` (e.g. `_comment`) are ignored by nzdeploy.
"""


class Settings(BaseModel):
    """User-tunable settings for the deployment client."""

    api_url: str = DEFAULT_API_URL
    dry_run: bool = False
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    per_page: int = Field(default=DEFAULT_PER_PAGE, ge=1, le=100)


class ConfigError(Exception):
    """Raised when config.json exists but cannot be parsed or validated."""


def load_config() -> Settings:
    """Load and validate the config file.

    Creates the config directory, a default config.json, and a README on
    first run.  Raises ConfigError if the file exists but is malformed.
    """
    if not CONFIG_PATH.exists():
        _bootstrap()
        return _apply_env(Settings())

    text = CONFIG_PATH.read_text()
    if not text.strip():
        return _apply_env(Settings())

    try:
        raw: object = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config.json is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("config.json must be a JSON object at the top level")

    # Strip reserved/comment keys.
    data = {k: v for k, v in raw.items() if not k.startswith("_")}

    try:
        settings = Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config: {exc}") from exc
    return _apply_env(settings)


def save_config(settings: Settings) -> None:
    """Persist settings to disk, creating directories as needed."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(settings.model_dump(), indent=2))


def _apply_env(settings: Settings) -> Settings:
    override = os.environ.get(API_URL_ENV, "").strip()
    if override:
        logger.debug("Using %s from environment", API_URL_ENV)
        return settings.model_copy(update={"api_url": override})
    return settings


def _bootstrap() -> None:
    """Create the config directory, a default config.json, and a README."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(Settings().model_dump(), indent=2) + "\n")
    if not _README_PATH.exists():
        _README_PATH.write_text(_README_CONTENT)
    logger.info("Created default config at %s", CONFIG_PATH)


# Theme persistence
THEME_CONFIG_PATH = Path("~/.config/nzdeploy/theme.json").expanduser()


def load_theme() -> str | None:
    """Load the saved theme preference.

    Returns the theme name if set, None otherwise.
    """
    if not THEME_CONFIG_PATH.exists():
        return None
    try:
        data = json.loads(THEME_CONFIG_PATH.read_text())
        return data.get("theme")
    except (json.JSONDecodeError, AttributeError):
        return None


def save_theme(theme: str) -> None:
    """Save the theme preference to disk."""
    THEME_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    THEME_CONFIG_PATH.write_text(json.dumps({"theme": theme}, indent=2))
