"""Mode and state enums plus the walk summary dataclass for tarwalk."""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    """What the walker does with a selected member.

    ``LIST``
        Print the member name; the payload is skipped unread.  *(default)*
    ``EXTRACT``
        Write the payload to a file named after the member.
    """

    LIST = "list"
    EXTRACT = "extract"


class WalkState(Enum):
    """Position of an ``ArchiveWalker`` in its traversal.

    ``SCANNING_HEADER`` loops back on itself through ``PROCESSING`` (a
    selected member) or ``SKIPPING`` (an unselected one) until the end of
    the archive moves the walker to ``FINALIZING`` and then ``DONE``.
    Any fatal condition leaves the walker in ``ABORT``.
    """

    INIT = "init"
    SCANNING_HEADER = "scanning_header"
    PROCESSING = "processing"
    SKIPPING = "skipping"
    FINALIZING = "finalizing"
    DONE = "done"
    ABORT = "abort"


@dataclass(frozen=True, slots=True)
class WalkSummary:
    """Immutable record of a completed walk."""

    selected: tuple[str, ...] = ()
    """Names of the members that were listed or extracted, in archive order."""

    missing: tuple[str, ...] = ()
    """Requested names that never matched a member."""

    skipped_destinations: tuple[str, ...] = ()
    """Members whose output file could not be created."""

    lone_zero_block: bool = False
    """``True`` if the archive ends with a single zero block."""

    @property
    def ok(self) -> bool:
        """``True`` unless a requested name was left unmatched."""
        return not self.missing
