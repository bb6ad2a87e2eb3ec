"""Data models for Rouster."""

from rouster.models.command import ExecutionResult
from rouster.models.listing import FileMetadata
from rouster.models.session import OutputLog, Session, SessionHandle
from rouster.models.ssh import SSHHost

__all__ = [
    "ExecutionResult",
    "FileMetadata",
    "OutputLog",
    "Session",
    "SessionHandle",
    "SSHHost",
]
