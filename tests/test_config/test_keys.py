"""Tests for SSH key resolution and validation."""

from pathlib import Path

import pytest

from rouster.config.keys import check_key_permissions, resolve_key
from rouster.errors import InternalError


def test_private_key_passes(tmp_path: Path) -> None:
    """A 0600 key is accepted."""
    key = tmp_path / "id_rsa"
    key.write_text("KEY")
    key.chmod(0o600)

    check_key_permissions(str(key))


def test_group_readable_key_rejected(tmp_path: Path) -> None:
    """Keys readable by group or others are refused."""
    key = tmp_path / "id_rsa"
    key.write_text("KEY")
    key.chmod(0o644)

    with pytest.raises(InternalError, match="bad permissions"):
        check_key_permissions(str(key))


def test_missing_key_rejected(tmp_path: Path) -> None:
    """A key that does not exist is refused."""
    with pytest.raises(InternalError, match="does not exist"):
        check_key_permissions(str(tmp_path / "nope"))


def test_resolve_prefers_explicit_key() -> None:
    """An explicit key wins over the engine default."""
    assert resolve_key("/keys/mine", False, "/keys/default") == "/keys/mine"


def test_resolve_falls_back_to_engine_default() -> None:
    """Managed machines use the engine's key."""
    assert resolve_key(None, False, "/keys/default") == "/keys/default"


def test_resolve_passthrough_has_no_fallback() -> None:
    """Passthrough hosts never use the engine default."""
    assert resolve_key(None, True, "/keys/default") is None
