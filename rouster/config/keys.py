"""SSH private key resolution and validation."""

import logging
import os
import stat
from pathlib import Path

from rouster.errors import InternalError

logger = logging.getLogger(__name__)


def check_key_permissions(key_path: str) -> None:
    """Confirm a private key exists and is private to its owner.

    OpenSSH refuses keys that group or others can access, so catch that
    before the first connection attempt.

    Args:
        key_path: Path to the private key

    Raises:
        InternalError: If the key is missing or has bad permissions
    """
    path = Path(os.path.expanduser(key_path))
    if not path.is_file():
        raise InternalError(f"specified key [{key_path}] does not exist/has bad permissions")

    mode = stat.S_IMODE(path.stat().st_mode)
    if mode & 0o077:
        raise InternalError(
            f"specified key [{key_path}] does not exist/has bad permissions "
            f"(mode {mode:04o}, expected 0600)"
        )
    logger.debug("SSH key [%s] has mode %04o", key_path, mode)


def resolve_key(
    sshkey: str | None,
    passthrough: bool,
    default_key: str | None = None,
) -> str | None:
    """Pick the private key for a machine.

    Passthrough hosts are not managed by an engine, so they never fall back
    to the engine's default key.

    Args:
        sshkey: Explicitly configured key, if any
        passthrough: Whether the machine is a passthrough host
        default_key: Engine supplied fallback key

    Returns:
        Path of the key to use, or None if there is none
    """
    if sshkey:
        return os.path.expanduser(sshkey)
    if passthrough or not default_key:
        return None
    return os.path.expanduser(default_key)
