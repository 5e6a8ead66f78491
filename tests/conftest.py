"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from settings_switch.core.settings import get_settings
from settings_switch.registry import ConfigRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def home_dir(temp_dir: Path) -> Path:
    """Registry storage directory (not created up front)."""
    return temp_dir / "home"


@pytest.fixture
def target_path(temp_dir: Path) -> Path:
    """Target settings file inside an existing application directory."""
    app_dir = temp_dir / "app"
    app_dir.mkdir()
    return app_dir / "settings.json"


@pytest.fixture
def registry(home_dir: Path, target_path: Path) -> ConfigRegistry:
    """An opened, empty registry."""
    return ConfigRegistry(home_dir=home_dir, target_path=target_path).open()


@pytest.fixture
def switch_env(
    monkeypatch: pytest.MonkeyPatch, home_dir: Path, target_path: Path
) -> Generator[None, None, None]:
    """Point the CLI settings at the temporary layout."""
    monkeypatch.setenv("SSW_HOME", str(home_dir))
    monkeypatch.setenv("SSW_TARGET", str(target_path))
    monkeypatch.delenv("SSW_BACKUP_SUFFIX", raising=False)
    monkeypatch.delenv("SSW_REQUIRE_TARGET_DIR", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
