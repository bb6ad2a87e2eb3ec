"""Services for Rouster."""

from rouster.services.connection import is_reachable
from rouster.services.executors import run_local, run_remote, side_channel_path
from rouster.services.transfer import fetch, send
from rouster.services.vagrant import VagrantEngine

__all__ = [
    "VagrantEngine",
    "fetch",
    "is_reachable",
    "run_local",
    "run_remote",
    "send",
    "side_channel_path",
]
