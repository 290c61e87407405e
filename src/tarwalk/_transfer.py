"""Payload transfer: copy or discard exactly one member's payload.

Payloads are copied in chunks straight from the archive stream into the
destination file; the block padding after the payload is skipped, never
read.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "copy_payload",
    "dump_remaining",
    "extract_member",
    "open_destination",
    "resolve_destination",
)

import contextlib
import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from tarwalk._blocks import CHUNK_SIZE, ArchiveStream, skip
from tarwalk._exceptions import ArchiveIOError, DestinationCreateError
from tarwalk._header import HeaderRecord

log = logging.getLogger("tarwalk")


def resolve_destination(
    base_dir: str | os.PathLike[str],
    member_name: str,
) -> Path:
    """Return the output path for *member_name* under *base_dir*.

    Raises ``DestinationCreateError`` for absolute names and for names
    whose ``..`` components climb out of *base_dir*; such members are
    skipped like any other member whose file cannot be created.
    """
    norm = member_name.replace("\\", "/")
    if norm.startswith("/"):
        raise DestinationCreateError(
            f"File could not be created: {member_name!r}: absolute path"
        )

    depth = 0
    for part in norm.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            depth -= 1
            if depth < 0:
                raise DestinationCreateError(
                    f"File could not be created: {member_name!r}: "
                    "escapes the extraction directory"
                )
        else:
            depth += 1

    return Path(base_dir) / member_name


def open_destination(dest_path: Path) -> BinaryIO:
    """Open *dest_path* for writing, creating or truncating it.

    Parent directories are not created.
    """
    try:
        return open(dest_path, "wb")  # noqa: SIM115
    except OSError as exc:
        raise DestinationCreateError(
            f"File could not be created: {dest_path}: {exc.strerror}"
        ) from exc


@contextlib.contextmanager
def _write_errors(dest_path: Path) -> Iterator[None]:
    # Covers buffered data flushed by close() as well as write() itself.
    try:
        yield
    except OSError as exc:
        raise ArchiveIOError(f"Write failed: {dest_path}: {exc}") from exc


def copy_payload(
    stream: ArchiveStream,
    out: BinaryIO,
    size: int,
    chunk_size: int = CHUNK_SIZE,
) -> None:
    """Copy exactly *size* bytes from *stream* to *out*.

    The caller has already checked that the bytes exist, so a short read
    is an I/O failure.
    """
    left = size
    while left:
        chunk = stream.read_exact(min(chunk_size, left))
        out.write(chunk)
        left -= len(chunk)


def extract_member(
    stream: ArchiveStream,
    record: HeaderRecord,
    dest_path: Path,
    chunk_size: int = CHUNK_SIZE,
) -> None:
    """Write *record*'s payload to *dest_path* and skip its padding.

    Raises ``DestinationCreateError`` before consuming any payload if the
    file cannot be opened; the stream is left at the start of the payload.
    Raises ``ArchiveIOError`` if writing or closing the file fails.
    """
    out = open_destination(dest_path)
    with _write_errors(dest_path), out:
        copy_payload(stream, out, record.size, chunk_size)
    skip(stream, record.padded_size - record.size)
    log.debug("Extracted %r (%d bytes)", record.name, record.size)


def dump_remaining(
    stream: ArchiveStream,
    dest_path: Path,
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """Copy every byte left in *stream* into *dest_path*.

    Best-effort salvage of a truncated member: if the destination cannot
    be created a warning is logged and ``0`` is returned.  A failure while
    writing is still fatal.
    """
    try:
        out = open_destination(dest_path)
    except DestinationCreateError as exc:
        log.warning("%s", exc)
        return 0

    written = 0
    with _write_errors(dest_path), out:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            out.write(chunk)
            written += len(chunk)
    log.debug("Salvaged %d bytes into %s", written, dest_path)
    return written
