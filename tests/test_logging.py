"""Tests for logging setup."""

import logging

import pytest

from src.utils.logging import is_verbosity_flag, parse_verbosity, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging replaces root handlers; put the originals back."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.mark.parametrize(
    "args,expected",
    [
        ([], 0),
        (["config.yaml"], 0),
        (["-v"], 1),
        (["config.yaml", "-vv"], 2),
        (["-v", "-v"], 2),
        (["--verbose"], 1),
        (["-vvvv"], 2),
        (["-x", "-verbose"], 0),
    ],
)
def test_parse_verbosity(args, expected):
    """Flags add up and are capped at DEBUG."""
    assert parse_verbosity(args) == expected


@pytest.mark.parametrize(
    "arg,expected",
    [("-v", True), ("-vvv", True), ("--verbose", True), ("-", False), ("-x", False), ("config.yaml", False)],
)
def test_is_verbosity_flag(arg, expected):
    assert is_verbosity_flag(arg) is expected


@pytest.mark.parametrize(
    "verbosity,level",
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (3, logging.DEBUG)],
)
def test_console_level_follows_verbosity(verbosity, level):
    setup_logging(verbosity=verbosity)

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert handlers[0].level == level


def test_log_file_captures_debug(tmp_path):
    log_file = tmp_path / "logs" / "config.log"

    setup_logging(verbosity=0, log_file=str(log_file))
    logging.getLogger("src.config.test").debug("debug detail")

    for handler in logging.getLogger().handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "debug detail" in content
    assert "Logging initialized" in content
