"""Pytest configuration for shared fixtures."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from unwind.adapters.file_system import FileSystemAdapter
from unwind.config import Config


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests without filesystem side effects")
    config.addinivalue_line("markers", "integration: tests that exercise several modules together")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep config files and logs written under ~/.unwind inside the test tmp dir."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def reset_unwind_logger():
    """Drop handlers installed by setup_logger so each test starts clean."""
    yield
    logger = logging.getLogger("unwind")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def config(tmp_path: Path, workdir: Path) -> Config:
    cfg = Config(str(tmp_path / "config.json"), create=False)
    cfg.apply_overrides({"scenarios": {"workdir": str(workdir)}})
    return cfg


@pytest.fixture
def fs() -> FileSystemAdapter:
    return FileSystemAdapter()
