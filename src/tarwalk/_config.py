"""Run configuration for tarwalk.

A ``Config`` is built once from the parsed command line and handed to
the walker; nothing in the package keeps configuration in module state.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = ("Config",)

import os
from dataclasses import dataclass, field

from tarwalk._blocks import CHUNK_SIZE
from tarwalk._exceptions import ConfigError
from tarwalk._types import Mode

# ---- environment-variable configuration helpers ----------------------------
# Each helper reads the relevant TARWALK_* variable and returns its typed
# value, falling back to *fallback* on absence or parse failure.


def _env_int(name: str, fallback: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value > 0 else fallback


def _env_bool(name: str, fallback: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return fallback
    return raw.lower() not in ("0", "false", "no", "off", "")


def default_chunk_size() -> int:
    return _env_int("TARWALK_CHUNK_SIZE", CHUNK_SIZE)


def debug_enabled() -> bool:
    return _env_bool("TARWALK_DEBUG", False)


@dataclass(frozen=True, slots=True)
class Config:
    """Options for one run.

    :param archive: Path given with ``-f``, or ``None``.
    :param list_flag: ``-t`` was given.
    :param extract_flag: ``-x`` was given.  Takes precedence over
        ``list_flag``.
    :param verbose: ``-v`` was given.
    :param members: Requested member names in command-line order.
    :param chunk_size: Payload copy chunk size in bytes.
    """

    archive: str | None = None
    list_flag: bool = False
    extract_flag: bool = False
    verbose: bool = False
    members: tuple[str, ...] = ()
    chunk_size: int = field(default_factory=default_chunk_size)

    @property
    def mode(self) -> Mode:
        return Mode.EXTRACT if self.extract_flag else Mode.LIST

    def validate(self) -> None:
        """Raise ``ConfigError`` unless an archive or list mode was chosen."""
        if self.archive is not None or self.list_flag:
            return
        raise ConfigError("Need at least one option")
