"""Command-line driver: ``tarwalk -f <archive> (-t | -x) [-v] [name...]``.

``run`` is the single place that turns an outcome into diagnostics and
an exit status; ``main`` passes that status to ``sys.exit``.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"
__all__ = (
    "build_parser",
    "main",
    "parse_args",
    "run",
)

import argparse
import contextlib
import logging
import os
import sys
from collections.abc import Iterator, Sequence
from typing import NoReturn, TextIO

from tarwalk._config import Config, debug_enabled
from tarwalk._exceptions import (
    EX_TARFAILURE,
    ConfigError,
    FormatError,
    TarwalkError,
    TruncationError,
)
from tarwalk._walker import walk_archive

log = logging.getLogger("tarwalk")

_FAILURE_TRAILER = "Exiting with failure status due to previous errors"
_FATAL_TRAILER = "Error is not recoverable: exiting now"

_OPTIONS = frozenset({"-f", "-t", "-x", "-v"})


class _ArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises ``ConfigError`` instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise ConfigError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="tarwalk",
        description="List or extract regular files from a ustar archive.",
        allow_abbrev=False,
        add_help=False,
    )
    parser.add_argument("-f", dest="archive", metavar="ARCHIVE", help="Archive path")
    parser.add_argument(
        "-t", dest="list_flag", action="store_true", help="List archive members"
    )
    parser.add_argument(
        "-x", dest="extract_flag", action="store_true", help="Extract archive members"
    )
    parser.add_argument(
        "-v", dest="verbose", action="store_true", help="Print names while extracting"
    )
    parser.add_argument(
        "members", nargs="*", metavar="name", help="Only process these members"
    )
    return parser


def _check_options(argv: Sequence[str]) -> None:
    # Options are single, separate tokens: no bundling ("-tv"), no attached
    # values ("-farchive.tar"), no "--" and no help flag.
    expect_value = False
    for token in argv:
        if expect_value:
            expect_value = False
            continue
        if token == "-f":
            expect_value = True
        elif token.startswith("-") and token not in _OPTIONS:
            raise ConfigError(f"Unknown option: {token}")


def parse_args(argv: Sequence[str] | None = None) -> Config:
    """Parse *argv* into a ``Config``.

    Operands may appear between options.  Raises ``ConfigError`` for any
    token starting with ``-`` other than ``-f``, ``-t``, ``-x`` and ``-v``,
    and for a ``-f`` without a value.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    _check_options(argv)

    args, extras = build_parser().parse_known_intermixed_args(argv)
    if extras:
        raise ConfigError(f"Unknown option: {extras[0]}")
    members = args.members or []

    return Config(
        archive=args.archive,
        list_flag=args.list_flag,
        extract_flag=args.extract_flag,
        verbose=args.verbose,
        members=tuple(members),
    )


@contextlib.contextmanager
def _stderr_logging(debug: bool) -> Iterator[None]:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("tarwalk: %(message)s"))
    previous_level = log.level
    log.addHandler(handler)
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    try:
        yield
    finally:
        handler.flush()
        log.removeHandler(handler)
        log.setLevel(previous_level)


def run(
    argv: Sequence[str] | None = None,
    *,
    stdout: TextIO | None = None,
    dest_dir: str | os.PathLike[str] = ".",
) -> int:
    """Parse *argv*, walk the archive and return the exit status.

    Every ``TarwalkError`` is reported through the ``tarwalk`` logger and
    turned into its exit status; none escapes.
    """
    try:
        config = parse_args(argv)
        config.validate()
        if config.archive is None:
            # Reading from the default tape device.
            raise ConfigError("Not implemented")
        summary = walk_archive(
            config.archive,
            config,
            out=stdout if stdout is not None else sys.stdout,
            dest_dir=dest_dir,
        )
    except TruncationError as exc:
        log.debug("%s", exc)
        log.error(_FATAL_TRAILER)
        return exc.exit_status
    except FormatError as exc:
        log.error("%s", exc)
        log.error(_FAILURE_TRAILER)
        return exc.exit_status
    except TarwalkError as exc:
        log.error("%s", exc)
        return exc.exit_status

    if not summary.ok:
        log.error(_FAILURE_TRAILER)
        return EX_TARFAILURE
    return 0


def main(argv: Sequence[str] | None = None) -> NoReturn:
    with _stderr_logging(debug_enabled()):
        status = run(argv)
    sys.exit(status)


if __name__ == "__main__":
    main()
