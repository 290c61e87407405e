"""Member filter: the consume-once set of member names the user asked for."""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = ("MemberFilter",)

import logging
from collections.abc import Iterable, Iterator

log = logging.getLogger("tarwalk")


class MemberFilter:
    """Ordered collection of requested member names.

    An empty filter selects every member.  Otherwise a member is selected
    when its name is still in the filter, and selecting it consumes one
    matching entry, so a name requested once is matched at most once.

    :param names: Requested names in command-line order.  Duplicates are
        kept as separate entries.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: list[str] = list(names)

    def __len__(self) -> int:
        return len(self._names)

    def __bool__(self) -> bool:
        return bool(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._names!r})"

    def is_selected(self, name: str) -> bool:
        """Return ``True`` if the member called *name* should be processed.

        The whole list is scanned and the *last* matching entry is the one
        removed.  With duplicate requested names this decides which entry
        survives, and therefore the order of the not-found report.
        """
        if not self._names:
            return True

        match = None
        for index, item in enumerate(self._names):
            if item == name:
                match = index

        if match is None:
            return False

        log.debug("Matched %r at filter position %d", name, match)
        del self._names[match]
        return True

    def remaining(self) -> list[str]:
        """Return the names not matched so far, in insertion order."""
        return list(self._names)

    def drain(self) -> Iterator[str]:
        """Yield and remove every remaining name, in insertion order."""
        while self._names:
            yield self._names.pop(0)
