"""ArchiveWalker: a single forward pass over a ``ustar`` archive.

For each header the walker validates the record, asks the member filter
whether the member is wanted, and then lists, extracts or skips its
payload.  After the terminator it hands over to the end-of-archive
checks.  Fatal conditions propagate as exceptions; the caller owns the
archive stream and closes it.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "ArchiveWalker",
    "extract_members",
    "list_members",
    "walk_archive",
)

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO, TextIO

from tarwalk._blocks import BLOCK_SIZE, ArchiveStream, skip
from tarwalk._config import Config
from tarwalk._detector import finalize
from tarwalk._exceptions import (
    ArchiveIOError,
    DestinationCreateError,
    MemberNotFoundError,
    TarwalkError,
    TruncationError,
)
from tarwalk._filter import MemberFilter
from tarwalk._header import (
    END_OF_ARCHIVE,
    HeaderRecord,
    parse_header,
    validate_magic,
    validate_typeflag,
)
from tarwalk._transfer import dump_remaining, extract_member, resolve_destination
from tarwalk._types import Mode, WalkState, WalkSummary

log = logging.getLogger("tarwalk")


class ArchiveWalker:
    """Drive the header, decide, transfer loop over one archive.

    :param stream: The archive, positioned at its first header.
    :param config: Run options; ``config.members`` seeds the filter
        unless *member_filter* is given.
    :param member_filter: A pre-built filter.  It is consumed by the walk.
    :param out: Text stream that receives selected names, one per line.
        Names go to its binary ``buffer`` when it has one.  ``None``
        suppresses the output.
    :param dest_dir: Directory extracted files are written under.
    """

    def __init__(
        self,
        stream: ArchiveStream,
        config: Config,
        *,
        member_filter: MemberFilter | None = None,
        out: TextIO | None = None,
        dest_dir: str | os.PathLike[str] = ".",
    ) -> None:
        self._stream = stream
        self._config = config
        self._filter = (
            member_filter if member_filter is not None else MemberFilter(config.members)
        )
        self._out = out
        self._dest_dir = Path(dest_dir)

        self._selected: list[str] = []
        self._skipped: list[str] = []
        self.state = WalkState.INIT

    def walk(self) -> WalkSummary:
        """Process every header, then run the end-of-archive checks.

        Raises ``FormatError``, ``TruncationError`` or ``ArchiveIOError``
        on fatal conditions, leaving ``state`` at ``WalkState.ABORT``.
        Requested names that were never found do not raise; they are
        reported in the returned summary.
        """
        try:
            self._scan()
            self.state = WalkState.FINALIZING
            missing, lone_zero_block = finalize(self._stream, self._filter)
        except TarwalkError:
            self.state = WalkState.ABORT
            raise

        self.state = WalkState.DONE
        return WalkSummary(
            selected=tuple(self._selected),
            missing=tuple(missing),
            skipped_destinations=tuple(self._skipped),
            lone_zero_block=lone_zero_block,
        )

    # ---- internal ----------------------------------------------------------

    def _scan(self) -> None:
        while True:
            self.state = WalkState.SCANNING_HEADER
            offset = self._stream.tell()
            block = self._stream.read_block()
            if len(block) < BLOCK_SIZE:
                log.debug("Short read (%d bytes) at offset %d", len(block), offset)
                return

            record = parse_header(block)
            if record is END_OF_ARCHIVE:
                log.debug("End-of-archive record at offset %d", offset)
                return

            validate_magic(record)
            validate_typeflag(record)
            log.debug(
                "Header %r at offset %d, size %d", record.name, offset, record.size
            )

            if not self._filter.is_selected(record.name):
                self.state = WalkState.SKIPPING
                skip(self._stream, record.padded_size)
                continue

            self.state = WalkState.PROCESSING
            self._selected.append(record.name)
            if self._config.mode is Mode.LIST or self._config.verbose:
                self._emit(record)
            self._process(record)

    def _emit(self, record: HeaderRecord) -> None:
        if self._out is None:
            return
        # Names are written byte-exact where the stream allows it, so
        # names that are not valid in the locale encoding still print.
        buffer = getattr(self._out, "buffer", None)
        try:
            if buffer is not None:
                self._out.flush()
                buffer.write(record.raw_name + b"\n")
                buffer.flush()
            else:
                self._out.write(f"{record.name}\n")
                self._out.flush()
        except OSError as exc:
            raise ArchiveIOError(f"Write failed: {exc}") from exc

    def _process(self, record: HeaderRecord) -> None:
        available = self._stream.remaining()
        if available < record.padded_size:
            log.warning("Unexpected EOF in archive")
            if self._config.mode is Mode.EXTRACT:
                self._salvage(record)
            raise TruncationError(
                f"{record.name}: declares {record.size} bytes but only "
                f"{available} remain in the archive"
            )

        if self._config.mode is Mode.LIST:
            skip(self._stream, record.padded_size)
            return

        try:
            dest_path = resolve_destination(self._dest_dir, record.name)
            extract_member(self._stream, record, dest_path, self._config.chunk_size)
        except DestinationCreateError as exc:
            log.warning("%s", exc)
            self._skipped.append(record.name)
            skip(self._stream, record.padded_size)

    def _salvage(self, record: HeaderRecord) -> None:
        try:
            dest_path = resolve_destination(self._dest_dir, record.name)
        except DestinationCreateError as exc:
            log.warning("%s", exc)
            return
        dump_remaining(self._stream, dest_path, self._config.chunk_size)


def walk_archive(
    archive: str | os.PathLike[str] | BinaryIO,
    config: Config,
    *,
    out: TextIO | None = None,
    dest_dir: str | os.PathLike[str] = ".",
) -> WalkSummary:
    """Open *archive*, walk it with *config*, and close it again.

    The member filter is built before the archive is touched.
    """
    member_filter = MemberFilter(config.members)
    with ArchiveStream(archive) as stream:
        walker = ArchiveWalker(
            stream,
            config,
            member_filter=member_filter,
            out=out,
            dest_dir=dest_dir,
        )
        return walker.walk()


def _require_all_found(summary: WalkSummary) -> None:
    if not summary.ok:
        raise MemberNotFoundError(list(summary.missing))


def list_members(
    archive: str | os.PathLike[str] | BinaryIO,
    names: Iterable[str] = (),
    *,
    out: TextIO | None = None,
) -> list[str]:
    """Return the names of the (selected) members of *archive*.

    Raises ``MemberNotFoundError`` once the whole archive has been read
    if any of *names* was not found.
    """
    config = Config(list_flag=True, members=tuple(names))
    summary = walk_archive(archive, config, out=out)
    _require_all_found(summary)
    return list(summary.selected)


def extract_members(
    archive: str | os.PathLike[str] | BinaryIO,
    names: Iterable[str] = (),
    dest_dir: str | os.PathLike[str] = ".",
    *,
    verbose: bool = False,
    out: TextIO | None = None,
) -> list[str]:
    """Extract the (selected) members of *archive* under *dest_dir*.

    Returns the names of the members that were selected, including any
    whose output file could not be created.  Raises
    ``MemberNotFoundError`` after extraction if any of *names* was not
    found.
    """
    config = Config(extract_flag=True, verbose=verbose, members=tuple(names))
    summary = walk_archive(archive, config, out=out, dest_dir=dest_dir)
    _require_all_found(summary)
    return list(summary.selected)
