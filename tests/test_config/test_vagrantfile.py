"""Tests for Vagrantfile discovery."""

from pathlib import Path

from rouster.config.vagrantfile import find_vagrantfile


def test_finds_file_in_start_dir(tmp_path: Path) -> None:
    """A Vagrantfile in the start directory is found."""
    (tmp_path / "Vagrantfile").write_text("")

    assert find_vagrantfile(str(tmp_path)) == str(tmp_path.resolve() / "Vagrantfile")


def test_walks_up_parent_directories(tmp_path: Path) -> None:
    """Parent directories are searched."""
    (tmp_path / "Vagrantfile").write_text("")
    nested = tmp_path / "test" / "unit"
    nested.mkdir(parents=True)

    assert find_vagrantfile(str(nested)) == str(tmp_path.resolve() / "Vagrantfile")


def test_stops_after_level_limit(tmp_path: Path) -> None:
    """Search gives up after the configured number of levels."""
    (tmp_path / "Vagrantfile").write_text("")
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    assert find_vagrantfile(str(nested), levels=2) is None
    assert find_vagrantfile(str(nested), levels=4) is not None
