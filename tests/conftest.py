"""Shared fixtures for Rouster tests."""

from pathlib import Path

import pytest

from rouster.channels import MemoryChannel
from rouster.config import Settings
from rouster.models import Session, SessionHandle


@pytest.fixture
def channel() -> MemoryChannel:
    """In-memory channel to a reachable machine."""
    return MemoryChannel()


@pytest.fixture
def session(channel: MemoryChannel) -> Session:
    """Session with sudo enabled over the in-memory channel."""
    return Session(handle=SessionHandle.create("app"), channel=channel)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated from the environment."""
    return Settings(tmp_dir=str(tmp_path), known_hosts="none")
