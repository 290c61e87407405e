"""Header codec: parse and validate one 512-byte ``ustar`` header record.

Fields are unpacked byte-exact with ``struct``; text fields are NUL
padded and numeric fields are ASCII octal.  Only the fields the walker
needs are kept on the parsed record.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "END_OF_ARCHIVE",
    "EndMarker",
    "HEADER_STRUCT",
    "HeaderRecord",
    "decode_size",
    "parse_header",
    "validate_magic",
    "validate_typeflag",
)

import logging
import os
import re
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Final

from tarwalk._blocks import BLOCK_SIZE, padded_size
from tarwalk._exceptions import FormatError, UnsupportedEntryTypeError

log = logging.getLogger("tarwalk")

# name mode uid gid size mtime chksum typeflag linkname magic version
# uname gname devmajor devminor prefix padding
HEADER_STRUCT = struct.Struct("100s8s8s8s12s12s8sc100s6s2s32s32s8s8s155s12s")

# The GNU magic spans the magic and version fields.
USTAR_MAGIC = b"ustar  \0"
REGTYPE = b"0"

_OCTAL_DIGITS = re.compile(rb"[0-7]*")


class EndMarker(Enum):
    """Sentinel type returned by ``parse_header`` for the terminator record."""

    END_OF_ARCHIVE = "end_of_archive"


END_OF_ARCHIVE: Final = EndMarker.END_OF_ARCHIVE


@dataclass(frozen=True, slots=True)
class HeaderRecord:
    """The parts of a header record the walker acts on."""

    name: str
    raw_name: bytes
    typeflag: bytes
    size: int
    magic: bytes
    version: bytes

    @property
    def padded_size(self) -> int:
        """Payload size rounded up to the next block boundary."""
        return padded_size(self.size)


def decode_size(field: bytes) -> int:
    """Decode an ASCII octal numeric field.

    Leading spaces are skipped; decoding stops at the first byte that is
    not an octal digit, so the NUL or space terminator is tolerated.  A
    field with no digits decodes to ``0``.
    """
    digits = _OCTAL_DIGITS.match(field.lstrip(b" ")).group()  # type: ignore[union-attr]
    if not digits:
        return 0
    return int(digits, 8)


def _cstring(field: bytes) -> bytes:
    return field.split(b"\0", 1)[0]


def parse_header(block: bytes) -> HeaderRecord | EndMarker:
    """Parse one header *block*.

    Returns ``END_OF_ARCHIVE`` if the name field starts with a NUL byte.
    That check happens before any validation, so the terminator is never
    mistaken for a malformed header.

    Raises ``ValueError`` if *block* is not exactly one block long.
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(
            f"Header block must be {BLOCK_SIZE} bytes, got {len(block)}"
        )

    if block[0] == 0:
        return END_OF_ARCHIVE

    (
        name,
        _mode,
        _uid,
        _gid,
        size,
        _mtime,
        _chksum,
        typeflag,
        _linkname,
        magic,
        version,
        *_rest,
    ) = HEADER_STRUCT.unpack(block)

    raw_name = _cstring(name)
    return HeaderRecord(
        name=os.fsdecode(raw_name),
        raw_name=raw_name,
        typeflag=typeflag,
        size=decode_size(size),
        magic=magic,
        version=version,
    )


def validate_magic(record: HeaderRecord) -> None:
    """Raise ``FormatError`` unless *record* carries the ``ustar  \\0`` magic.

    The comparison covers the version bytes that follow the magic field.
    """
    magic = record.magic + record.version
    if magic != USTAR_MAGIC:
        log.debug("Bad magic %r in header for %r", magic, record.name)
        raise FormatError("This does not look like a tar archive")


def validate_typeflag(record: HeaderRecord) -> None:
    """Raise ``UnsupportedEntryTypeError`` unless *record* is a regular file."""
    if record.typeflag != REGTYPE:
        raise UnsupportedEntryTypeError(
            f"Unsupported header type {record.typeflag!r}: {record.name!r}"
        )
