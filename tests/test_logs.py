"""Tests for logging setup and formatting."""

import logging
from collections.abc import Generator

import pytest

from rouster.config import Settings
from rouster.logs import configure_logging, level_for_verbosity
from rouster.utils.console import ColorfulFormatter


@pytest.fixture
def package_logger() -> Generator[logging.Logger, None, None]:
    """The rouster logger, restored after the test."""
    logger = logging.getLogger("rouster")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.mark.parametrize(
    ("verbosity", "level"),
    [
        (1, logging.DEBUG),
        (2, logging.INFO),
        (3, logging.WARNING),
        (4, logging.ERROR),
        (5, logging.CRITICAL),
        (0, logging.DEBUG),
        (9, logging.CRITICAL),
    ],
)
def test_level_for_verbosity(verbosity: int, level: int) -> None:
    """Verbosity maps onto logging levels, clamped to 1..5."""
    assert level_for_verbosity(verbosity) == level


def test_configure_logging_is_idempotent(package_logger: logging.Logger) -> None:
    """Repeated calls attach a single handler."""
    settings = Settings(log_level="debug")

    configure_logging(settings)
    configure_logging(settings)

    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG
    assert isinstance(package_logger.handlers[0].formatter, ColorfulFormatter)


def test_formatter_without_colors() -> None:
    """Plain output has level, component and message."""
    record = logging.LogRecord(
        "rouster.services.executors",
        logging.INFO,
        __file__,
        1,
        "[%s] vm running: [%s]",
        ("app", "uptime"),
        None,
    )

    line = ColorfulFormatter(use_colors=False).format(record)

    assert "INFO" in line
    assert "services.executors" in line
    assert line.endswith("[app] vm running: [uptime]")
    assert "\033[" not in line


def test_formatter_with_colors_highlights_brackets() -> None:
    """Bracketed values are colorized."""
    record = logging.LogRecord(
        "rouster.machine.app", logging.INFO, __file__, 1, "vm running: [id]", (), None
    )

    line = ColorfulFormatter(use_colors=True).format(record)

    assert "\033[93m[id]\033[0m" in line
