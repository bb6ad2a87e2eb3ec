"""Rouster: drive a virtual machine from integration tests.

Runs commands locally and on the machine, moves files to and from it, and
decodes ``ls -l`` output into structured file metadata.
"""

from rouster.channels import MemoryChannel, SSHChannel
from rouster.config import Settings
from rouster.errors import (
    FileTransferError,
    InternalError,
    LocalExecutionError,
    RemoteExecutionError,
    RousterError,
    SSHConnectionError,
)
from rouster.logs import configure_logging
from rouster.machine import Rouster
from rouster.models import ExecutionResult, FileMetadata, OutputLog, Session, SessionHandle
from rouster.protocols import Channel, ChannelOptions, MachineEngine
from rouster.utils.listing import parse_listing

__version__ = "0.1.0"

__all__ = [
    "Channel",
    "ChannelOptions",
    "ExecutionResult",
    "FileMetadata",
    "FileTransferError",
    "InternalError",
    "LocalExecutionError",
    "MachineEngine",
    "MemoryChannel",
    "OutputLog",
    "RemoteExecutionError",
    "Rouster",
    "RousterError",
    "SSHChannel",
    "SSHConnectionError",
    "Session",
    "SessionHandle",
    "Settings",
    "configure_logging",
    "parse_listing",
]
