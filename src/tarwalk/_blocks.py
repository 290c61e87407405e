"""Block navigator: 512-byte padding arithmetic and archive positioning.

``ArchiveStream`` wraps the archive's binary file object, remembers its
total length, and turns every ``OSError`` raised while reading or
seeking into ``ArchiveIOError``.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "BLOCK_SIZE",
    "CHUNK_SIZE",
    "ArchiveStream",
    "ensure_seekable",
    "padded_size",
    "skip",
)

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterator
from typing import BinaryIO

from tarwalk._exceptions import ArchiveIOError

log = logging.getLogger("tarwalk")

BLOCK_SIZE = 512

# Default size of a single read or write when moving bulk data.
CHUNK_SIZE = 65536

# In-memory limit when spooling a non-seekable input.
_SPOOL_MAX_SIZE = 64 * 1024**2


def padded_size(n: int) -> int:
    """Round *n* up to the next multiple of ``BLOCK_SIZE``.

    ``padded_size(0) == 0``; the result never exceeds *n* by more than
    ``BLOCK_SIZE - 1``.
    """
    if n < 0:
        raise ValueError(f"Size must be non-negative, got {n}")
    return n + (BLOCK_SIZE - n % BLOCK_SIZE) % BLOCK_SIZE


@contextlib.contextmanager
def _io_errors(action: str) -> Iterator[None]:
    try:
        yield
    except OSError as exc:
        raise ArchiveIOError(f"Archive {action} failed: {exc}") from exc


def ensure_seekable(file: str | os.PathLike[str] | BinaryIO) -> tuple[BinaryIO, bool]:
    """Return a seekable binary file object for *file*.

    If *file* is a path, open it in binary mode (always seekable).
    If *file* is a file-like object that is already seekable, return it
    as-is.  Otherwise buffer into a ``SpooledTemporaryFile``.

    Returns ``(fileobj, owned)`` so the caller knows whether it must
    close the object.
    """
    if isinstance(file, (str, os.PathLike)):
        try:
            return open(file, "rb"), True  # noqa: SIM115
        except OSError as exc:
            raise ArchiveIOError(f"Archive could not be opened: {exc}") from exc

    fobj: BinaryIO = file
    if hasattr(fobj, "seekable") and fobj.seekable():
        return fobj, False

    spool: BinaryIO = tempfile.SpooledTemporaryFile(  # type: ignore[assignment]  # noqa: SIM115
        max_size=_SPOOL_MAX_SIZE,
    )
    with _io_errors("read"):
        while True:
            chunk = fobj.read(CHUNK_SIZE)
            if not chunk:
                break
            spool.write(chunk)
        spool.seek(0)
    return spool, True


class ArchiveStream:
    """Sequential reader over an archive with a known total length.

    :param file: Path to the archive or an open binary file object.
        Non-seekable objects are spooled first.
    """

    def __init__(self, file: str | os.PathLike[str] | BinaryIO) -> None:
        self._fileobj, self._owns_fileobj = ensure_seekable(file)
        with _io_errors("seek"):
            self._fileobj.seek(0, os.SEEK_END)
            self._total = self._fileobj.tell()
            self._fileobj.seek(0)
        log.debug("Archive size: %d", self._total)

    # ---- context manager ---------------------------------------------------

    def __enter__(self) -> ArchiveStream:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying file if this stream opened it."""
        if self._owns_fileobj:
            self._fileobj.close()

    # ---- positioning -------------------------------------------------------

    @property
    def total(self) -> int:
        """Length of the archive in bytes."""
        return self._total

    def tell(self) -> int:
        with _io_errors("tell"):
            return self._fileobj.tell()

    def remaining(self) -> int:
        """Bytes between the current position and the end of the archive."""
        return max(self._total - self.tell(), 0)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        with _io_errors("seek"):
            return self._fileobj.seek(offset, whence)

    # ---- reading -----------------------------------------------------------

    def read(self, n: int) -> bytes:
        """Read up to *n* bytes; a short result means end of archive."""
        with _io_errors("read"):
            return self._fileobj.read(n)

    def read_block(self) -> bytes:
        """Read the next block, or fewer bytes at the end of the archive."""
        return self.read(BLOCK_SIZE)

    def read_exact(self, n: int) -> bytes:
        """Read exactly *n* bytes or raise ``ArchiveIOError``."""
        data = self.read(n)
        if len(data) != n:
            raise ArchiveIOError(
                f"Archive read failed: expected {n} bytes, got {len(data)}"
            )
        return data


def skip(stream: ArchiveStream, k: int) -> None:
    """Advance *stream* by *k* bytes relative to its current position.

    Skipping past the end is allowed; the next read then returns nothing.
    """
    if k:
        stream.seek(k, os.SEEK_CUR)
