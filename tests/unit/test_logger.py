"""Tests for unwind/utils/logger.py."""

from __future__ import annotations

import logging
from pathlib import Path

import colorlog

from unwind.utils.logger import configure_logging_levels, get_logger, setup_logger


def test_setup_logger_installs_console_and_file_handlers(tmp_path: Path):
    logger = setup_logger("unwind", level=logging.INFO, log_dir=tmp_path / "logs")

    formatters = [type(handler.formatter) for handler in logger.handlers]
    assert colorlog.ColoredFormatter in formatters
    assert any(isinstance(handler, logging.FileHandler) for handler in logger.handlers)
    assert (tmp_path / "logs" / "unwind.log").exists()


def test_setup_logger_does_not_duplicate_handlers(tmp_path: Path):
    first = setup_logger("unwind", log_dir=tmp_path)
    count = len(first.handlers)
    second = setup_logger("unwind", log_dir=tmp_path)

    assert second is first
    assert len(second.handlers) == count


def test_setup_logger_falls_back_to_console_only(tmp_path: Path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")

    logger = setup_logger("unwind", log_dir=blocker / "logs")

    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0], logging.FileHandler)


def test_console_handler_follows_redirected_stderr(tmp_path: Path, capsys):
    logger = setup_logger("unwind", level=logging.INFO, log_dir=tmp_path)
    get_logger("unwind.tests").warning("visible warning")

    assert "visible warning" in capsys.readouterr().err
    assert logger.level == logging.INFO


def test_configure_logging_levels():
    configure_logging_levels(verbose=True, quiet=False)
    assert get_logger("unwind").level == logging.INFO

    configure_logging_levels(verbose=False, quiet=False)
    assert get_logger("unwind").level == logging.WARNING

    configure_logging_levels(verbose=True, quiet=True)
    assert get_logger("unwind").level == logging.ERROR
