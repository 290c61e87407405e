"""Exception hierarchy for tarwalk.

All exceptions inherit from ``TarwalkError`` so callers can catch the
package's entire error surface with a single ``except`` clause.  Every
exception carries the process exit status the command-line driver uses
when it is the reason for terminating.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"

# Exit status for every fatal condition.
EX_TARFAILURE = 2


class TarwalkError(Exception):
    """Base exception for all tarwalk failures."""

    exit_status: int = EX_TARFAILURE


class ConfigError(TarwalkError):
    """The command-line options do not form a usable configuration.

    Raised for unknown options, a missing ``-f`` value, or an option set
    that selects neither an archive nor list mode.
    """


class FormatError(TarwalkError):
    """A header record is not a ``ustar`` header this reader understands.

    Aborts the entire run.
    """


class UnsupportedEntryTypeError(FormatError):
    """A member's ``typeflag`` is anything other than a regular file (``'0'``).

    Directories, links, devices and FIFOs are never skipped: they abort
    the run like any other format violation.
    """


class ArchiveIOError(TarwalkError):
    """A read, write or seek on the archive or an opened output failed."""


class TruncationError(TarwalkError):
    """A selected member's declared size exceeds the bytes left in the archive."""


class MemberNotFoundError(TarwalkError):
    """One or more requested names were never encountered in the archive.

    Only raised once the whole archive has been processed.
    """

    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        super().__init__(
            "Not found in archive: " + ", ".join(repr(n) for n in self.names)
        )


class DestinationCreateError(TarwalkError):
    """The output file for a single member could not be opened.

    Recoverable: the member is skipped and the walk continues.
    """
