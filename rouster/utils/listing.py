"""Parser for long-format (``ls -l``) listing lines.

Only one line shape is understood::

    -rw-r--r-- 1 root root 906 Oct  2  2012 grub.conf

The ten character type-and-permission field is decoded character by
character. The columns after it are split on whitespace, so irregular spacing
between them is fine. Date, time and path are not interpreted.
"""

import re

from rouster.models import FileMetadata
from rouster.models.listing import Triplet

LISTING_PATTERN = re.compile(
    r"^(?P<type>[-dlcbps])"
    r"(?P<perms>(?:[r-][w-][xsStT-]){3})"
    r"[.+@]?"  # SELinux context / ACL / xattr marker
    r"\s+\S+"  # link count
    r"\s+(?P<owner>\S+)"
    r"\s+(?P<group>\S+)"
    r"\s+(?P<size>\S+)"
    r"\s+.*$",
    re.DOTALL,
)

READ, WRITE, EXECUTE = 4, 2, 1

# Lowercase s/t also imply the execute bit; the special bits themselves are
# not represented in FileMetadata.
_EXECUTE_CHARS = frozenset("xst")


def _decode_triplet(triplet: str) -> tuple[bool, bool, bool, int]:
    readable = triplet[0] == "r"
    writable = triplet[1] == "w"
    executable = triplet[2] in _EXECUTE_CHARS
    digit = READ * readable + WRITE * writable + EXECUTE * executable
    return readable, writable, executable, digit


def parse_listing(line: str) -> FileMetadata:
    """Decode one listing line into a FileMetadata record.

    Args:
        line: One line of ``ls -l`` output, trailing newline allowed

    Returns:
        FileMetadata for the listed entry

    Raises:
        ValueError: If the line does not have the listing shape

    Examples:
        >>> parse_listing("-r--r--r-- 1 root root 199 May 27 22:51 /readable\\n").mode
        '0444'
        >>> parse_listing("drwxrwxrwt 5 root root 4096 May 28 00:26 /tmp/\\n").is_directory
        True
    """
    match = LISTING_PATTERN.match(line)
    if match is None:
        raise ValueError(f"Not a long-format listing line: {line!r}")

    file_type = match.group("type")
    perms = match.group("perms")

    readable: list[bool] = []
    writable: list[bool] = []
    executable: list[bool] = []
    digits: list[str] = []
    for offset in (0, 3, 6):
        r, w, x, digit = _decode_triplet(perms[offset:offset + 3])
        readable.append(r)
        writable.append(w)
        executable.append(x)
        digits.append(str(digit))

    return FileMetadata(
        is_directory=file_type == "d",
        is_file=file_type == "-",
        mode="0" + "".join(digits),
        owner=match.group("owner"),
        group=match.group("group"),
        size=match.group("size"),
        readable=_as_triplet(readable),
        writable=_as_triplet(writable),
        executable=_as_triplet(executable),
    )


def _as_triplet(flags: list[bool]) -> Triplet:
    return (flags[0], flags[1], flags[2])
