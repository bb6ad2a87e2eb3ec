"""Utilities for Rouster."""

from rouster.utils.console import ColorfulFormatter
from rouster.utils.listing import parse_listing
from rouster.utils.shell import quote_path, sudo_wrap

__all__ = [
    "ColorfulFormatter",
    "parse_listing",
    "quote_path",
    "sudo_wrap",
]
