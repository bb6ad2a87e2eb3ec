"""File metadata decoded from a long-format listing line."""

from dataclasses import dataclass

# (owner, group, other)
Triplet = tuple[bool, bool, bool]


@dataclass(frozen=True)
class FileMetadata:
    """Type, ownership, size and permission bits of one file."""

    is_directory: bool
    is_file: bool
    mode: str
    owner: str
    group: str
    size: str
    readable: Triplet
    writable: Triplet
    executable: Triplet
