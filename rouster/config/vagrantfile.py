"""Vagrantfile discovery."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def find_vagrantfile(
    start_dir: str | None = None,
    filename: str = "Vagrantfile",
    levels: int = 5,
) -> str | None:
    """Walk up from start_dir looking for a Vagrantfile.

    Args:
        start_dir: Directory to start in (default: cwd)
        filename: File name to look for
        levels: Maximum number of directories to check

    Returns:
        Path to the first file found, or None
    """
    current = Path(start_dir or os.getcwd()).resolve()
    logger.debug("Looking for [%s] in [%s], up to [%d] levels", filename, current, levels)

    for _ in range(levels):
        candidate = current / filename
        if candidate.is_file():
            return str(candidate)
        if current.parent == current:
            break
        current = current.parent

    return None
