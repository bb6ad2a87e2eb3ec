"""Single-file transfers between the controlling host and the machine.

Transfers are not commands: they never touch the output log or the last exit
code.
"""

import logging
import os

from rouster.errors import FileTransferError, SSHConnectionError
from rouster.models import Session
from rouster.services.connection import is_reachable

logger = logging.getLogger(__name__)


def fetch(session: Session, remote_path: str, local_path: str | None = None) -> None:
    """Download a file from the machine.

    Args:
        session: Session whose channel to use
        remote_path: File on the machine
        local_path: Destination on this host (default: basename of remote_path)

    Raises:
        SSHConnectionError: If SSH is unreachable or the download fails
    """
    if local_path is None:
        local_path = os.path.basename(remote_path)
    logger.debug("scp from VM[%s] to host[%s]", remote_path, local_path)

    if not is_reachable(session):
        raise SSHConnectionError("get", remote_path)

    try:
        session.channel.download(remote_path, local_path)
    except Exception as e:
        raise SSHConnectionError("get", remote_path, e) from e


def send(session: Session, local_path: str, remote_path: str | None = None) -> None:
    """Upload a file to the machine.

    The local file is checked before any network activity.

    Args:
        session: Session whose channel to use
        local_path: File on this host
        remote_path: Destination on the machine (default: basename of local_path)

    Raises:
        FileTransferError: If local_path is not an existing file
        SSHConnectionError: If SSH is unreachable or the upload fails
    """
    if remote_path is None:
        remote_path = os.path.basename(local_path)
    logger.debug("scp from host[%s] to VM[%s]", local_path, remote_path)

    if not os.path.isfile(local_path):
        raise FileTransferError("put", local_path, "local file does not exist")

    if not is_reachable(session):
        raise SSHConnectionError("put", remote_path)

    try:
        session.channel.upload(local_path, remote_path)
    except Exception as e:
        raise SSHConnectionError("put", local_path, e) from e
