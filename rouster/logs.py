"""Logging setup for the rouster package."""

import logging
import sys

from rouster.config.settings import Settings
from rouster.utils.console import ColorfulFormatter

# Session verbosity levels: DEBUG (1) < INFO (2) < WARN < ERROR < FATAL (5)
VERBOSITY_LEVELS = {
    1: logging.DEBUG,
    2: logging.INFO,
    3: logging.WARNING,
    4: logging.ERROR,
    5: logging.CRITICAL,
}


def level_for_verbosity(verbosity: int) -> int:
    """Map a 1..5 session verbosity to a logging level.

    Values outside the range are clamped.
    """
    return VERBOSITY_LEVELS[min(max(verbosity, 1), 5)]


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Attach a colorful stderr handler to the ``rouster`` logger.

    Does nothing to the handler list if one is already attached, so it is
    safe to call once per machine.

    Args:
        settings: Settings to read log level and colors from (default: env)

    Returns:
        The package logger
    """
    if settings is None:
        settings = Settings.from_env()

    use_colors = settings.log_colors and sys.stderr.isatty()

    package_logger = logging.getLogger("rouster")
    package_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    logging.getLogger("asyncssh").setLevel(logging.WARNING)
    return package_logger
