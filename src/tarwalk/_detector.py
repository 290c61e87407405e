"""End-of-archive checks run once the header loop has finished.

Reconciles requested names that were never matched and inspects the two
blocks at the tail of the archive, which a well-formed archive fills
with zeros.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "check_trailer",
    "finalize",
    "reconcile_filter",
    "zero_block_at",
)

import logging

from tarwalk._blocks import BLOCK_SIZE, ArchiveStream
from tarwalk._exceptions import ArchiveIOError
from tarwalk._filter import MemberFilter

log = logging.getLogger("tarwalk")

_ZERO_BLOCK = bytes(BLOCK_SIZE)


def reconcile_filter(member_filter: MemberFilter) -> list[str]:
    """Report and remove every name left in *member_filter*.

    Returns the unmatched names in the order they were requested.
    """
    missing: list[str] = []
    for name in member_filter.drain():
        log.warning("%s: Not found in archive", name)
        missing.append(name)
    return missing


def zero_block_at(stream: ArchiveStream, offset: int) -> bool:
    """Return ``True`` if the block starting at *offset* is all zeros.

    A negative *offset* (an archive shorter than the block) is not a zero
    block.  Fewer than ``BLOCK_SIZE`` readable bytes is an I/O failure.
    """
    if offset < 0:
        return False
    stream.seek(offset)
    data = stream.read(BLOCK_SIZE)
    if len(data) != BLOCK_SIZE:
        raise ArchiveIOError(
            f"Archive read failed while checking the zero block at {offset}"
        )
    return data == _ZERO_BLOCK


def check_trailer(stream: ArchiveStream) -> bool:
    """Warn and return ``True`` if the archive ends with a lone zero block."""
    total = stream.total
    second_to_last = zero_block_at(stream, total - 2 * BLOCK_SIZE)
    last = zero_block_at(stream, total - BLOCK_SIZE)
    log.debug("Trailing zero blocks: %s, %s", second_to_last, last)

    if not second_to_last and last:
        log.warning("A lone zero block at %d", total // BLOCK_SIZE)
        return True
    return False


def finalize(
    stream: ArchiveStream,
    member_filter: MemberFilter,
) -> tuple[list[str], bool]:
    """Run both end-of-archive checks.

    Returns ``(missing_names, lone_zero_block)``.  Missing names are all
    reported before the trailer is inspected.
    """
    missing = reconcile_filter(member_filter)
    return missing, check_trailer(stream)
