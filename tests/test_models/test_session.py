"""Tests for session models."""

from dataclasses import FrozenInstanceError

import pytest

from rouster.channels import MemoryChannel
from rouster.errors import InternalError
from rouster.models import OutputLog, Session, SessionHandle, SSHHost


class TestOutputLog:
    """Test the append-only output log."""

    def test_latest_entry_is_index_zero(self) -> None:
        """get(0) returns the most recent output."""
        log = OutputLog()
        log.append("first")
        log.append("second")
        log.append("third")

        assert log.get() == "third"
        assert log.get(1) == "second"
        assert log.get(2) == "first"

    def test_out_of_range_returns_none(self) -> None:
        """Looking further back than recorded returns None."""
        log = OutputLog()
        log.append("only")

        assert log.get(1) is None
        assert log.get(-1) is None
        assert OutputLog().get() is None

    def test_iterates_in_chronological_order(self) -> None:
        """Iteration and length reflect insertion order."""
        log = OutputLog()
        for entry in ("a", "b", "c"):
            log.append(entry)

        assert list(log) == ["a", "b", "c"]
        assert len(log) == 3


class TestSessionHandle:
    """Test session identity and policy."""

    def test_sudo_defaults_on(self) -> None:
        """Managed machines use sudo unless told otherwise."""
        handle = SessionHandle.create("app")

        assert handle.sudo is True
        assert handle.passthrough is False

    def test_sudo_defaults_off_for_passthrough(self) -> None:
        """Passthrough hosts default to no sudo."""
        handle = SessionHandle.create("box", passthrough=True, sshkey="/k")

        assert handle.sudo is False

    def test_explicit_sudo_wins(self) -> None:
        """An explicit sudo setting overrides the passthrough default."""
        handle = SessionHandle.create("box", passthrough=True, sudo=True, sshkey="/k")

        assert handle.sudo is True

    def test_passthrough_requires_key(self) -> None:
        """Passthrough without an SSH key is rejected."""
        with pytest.raises(InternalError, match="sshkey"):
            SessionHandle.create("box", passthrough=True)

    def test_empty_name_rejected(self) -> None:
        """A machine needs a name."""
        with pytest.raises(InternalError, match="name"):
            SessionHandle.create("")

    def test_handle_is_immutable(self) -> None:
        """Policy cannot change after construction."""
        handle = SessionHandle.create("app")

        with pytest.raises(FrozenInstanceError):
            handle.sudo = False  # type: ignore[misc]


def test_session_starts_empty() -> None:
    """A new session has no output and no exit code."""
    session = Session(handle=SessionHandle.create("app"), channel=MemoryChannel())

    assert len(session.output) == 0
    assert session.last_exit_code is None
    assert session.name == "app"


def test_ssh_host_address() -> None:
    """SSHHost renders user@host:port."""
    host = SSHHost(name="app", hostname="127.0.0.1", port=2222)

    assert host.address == "vagrant@127.0.0.1:2222"
