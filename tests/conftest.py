"""Shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch):
    """Keep config and theme files out of the real home directory."""
    cfg_dir = tmp_path / "config"
    monkeypatch.setattr("nzdeploy.config.CONFIG_PATH", cfg_dir / "config.json")
    monkeypatch.setattr("nzdeploy.config._README_PATH", cfg_dir / "README.md")
    monkeypatch.setattr("nzdeploy.config.THEME_CONFIG_PATH", cfg_dir / "theme.json")
    monkeypatch.delenv("NZDEPLOY_API_URL", raising=False)
    monkeypatch.delenv("NZDEPLOY_LOG_LEVEL", raising=False)
    monkeypatch.delenv("NZDEPLOY_LOG_FILE", raising=False)
    return cfg_dir
