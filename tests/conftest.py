"""Shared pytest fixtures for pimctl tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the default config root at a temp dir and clear profile selection."""
    monkeypatch.setenv("APPLE_PIM_CONFIG_DIR", str(tmp_path / "apple-pim"))
    monkeypatch.delenv("APPLE_PIM_PROFILE", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() done by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pim = logging.getLogger("pimctl")
    pim_level = pim.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pim.setLevel(pim_level)
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    """The config root the isolated environment points at (not created)."""
    return tmp_path / "apple-pim"


@pytest.fixture
def write_base(config_root: Path) -> Callable[[Any], Path]:
    """Write ``config.json`` under the config root. Strings are written verbatim."""

    def _write(content: Any) -> Path:
        config_root.mkdir(parents=True, exist_ok=True)
        path = config_root / "config.json"
        path.write_text(
            content if isinstance(content, str) else json.dumps(content), encoding="utf-8"
        )
        return path

    return _write


@pytest.fixture
def write_profile_file(config_root: Path) -> Callable[[str, Any], Path]:
    """Write ``profiles/{name}.json``. Strings are written verbatim."""

    def _write(name: str, content: Any) -> Path:
        directory = config_root / "profiles"
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{name}.json"
        path.write_text(
            content if isinstance(content, str) else json.dumps(content), encoding="utf-8"
        )
        return path

    return _write
