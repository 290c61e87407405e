"""tarwalk — List and extract regular files from ustar archives.

A single forward pass, strict header checks.  Zero dependencies.  Python 3.10+.
"""

from __future__ import annotations

__title__ = "tarwalk"
__version__ = "0.1"
__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"

from tarwalk._blocks import BLOCK_SIZE, ArchiveStream, padded_size
from tarwalk._config import Config
from tarwalk._exceptions import (
    ArchiveIOError,
    ConfigError,
    DestinationCreateError,
    FormatError,
    MemberNotFoundError,
    TarwalkError,
    TruncationError,
    UnsupportedEntryTypeError,
)
from tarwalk._filter import MemberFilter
from tarwalk._header import END_OF_ARCHIVE, HeaderRecord, decode_size, parse_header
from tarwalk._types import Mode, WalkState, WalkSummary
from tarwalk._walker import (
    ArchiveWalker,
    extract_members,
    list_members,
    walk_archive,
)

# Deferred import: the CLI pulls in argparse, which library users of the
# walker do not need.


def __getattr__(name: str) -> object:
    if name in ("main", "run"):
        from tarwalk._cli import main, run

        globals()["main"] = main
        globals()["run"] = run
        return globals()[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Core
    "ArchiveWalker",
    "walk_archive",
    "list_members",
    "extract_members",
    "main",
    "run",
    # Building blocks
    "BLOCK_SIZE",
    "ArchiveStream",
    "Config",
    "END_OF_ARCHIVE",
    "HeaderRecord",
    "MemberFilter",
    "decode_size",
    "padded_size",
    "parse_header",
    # Exceptions
    "TarwalkError",
    "ConfigError",
    "FormatError",
    "UnsupportedEntryTypeError",
    "ArchiveIOError",
    "TruncationError",
    "MemberNotFoundError",
    "DestinationCreateError",
    # Types
    "Mode",
    "WalkState",
    "WalkSummary",
]
