"""Archive factory fixtures for tarwalk tests.

Every fixture generates a real archive programmatically using Python's
``tarfile`` module in GNU format (which writes the ``ustar  \\0`` magic),
patching raw bytes where a malformed archive is needed.  No mocks.
"""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"

import io
import tarfile

import pytest

BLOCK = 512

# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _tar_bytes(callback) -> bytes:
    """Create a GNU TAR archive in memory via *callback(tf)* and return bytes."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w", format=tarfile.GNU_FORMAT) as tf:
        callback(tf)
    return buf.getvalue()


def _write_to_path(tmp_path, name: str, data: bytes) -> str:
    p = tmp_path / name
    p.write_bytes(data)
    return str(p)


def _add_regular(tf, name: str, content: bytes) -> None:
    info = tarfile.TarInfo(name=name)
    info.size = len(content)
    tf.addfile(info, io.BytesIO(content))


def _add_directory(tf, name: str) -> None:
    info = tarfile.TarInfo(name=name)
    info.type = tarfile.DIRTYPE
    info.mode = 0o755
    tf.addfile(info)


def _add_symlink(tf, name: str, target: str) -> None:
    info = tarfile.TarInfo(name=name)
    info.type = tarfile.SYMTYPE
    info.linkname = target
    tf.addfile(info)


def header_block(name: str, content: bytes) -> bytes:
    """Return the 512-byte GNU header for a regular member."""
    return _tar_bytes(lambda tf: _add_regular(tf, name, content))[:BLOCK]


def member_blocks(name: str, content: bytes) -> bytes:
    """Return a regular member's header and padded payload, no trailer."""
    padded = -(-len(content) // BLOCK) * BLOCK
    return header_block(name, content) + content + b"\0" * (padded - len(content))


# Payload that makes no block of its padded form all-zero.
PAYLOAD_A = b"alpha contents\n"
PAYLOAD_B = b"bravo contents, a little longer\n" * 40
PAYLOAD_C = b"charlie\n"

# ---------------------------------------------------------------------------
# well-formed archives
# ---------------------------------------------------------------------------


@pytest.fixture()
def acb_archive(tmp_path):
    """Three regular members in the order ``A``, ``C``, ``B``."""

    def build(tf):
        _add_regular(tf, "A", PAYLOAD_A)
        _add_regular(tf, "C", PAYLOAD_C)
        _add_regular(tf, "B", PAYLOAD_B)

    return _write_to_path(tmp_path, "acb.tar", _tar_bytes(build))


@pytest.fixture()
def empty_member_archive(tmp_path):
    """A zero-length member followed by a regular one."""

    def build(tf):
        _add_regular(tf, "empty.txt", b"")
        _add_regular(tf, "after.txt", PAYLOAD_A)

    return _write_to_path(tmp_path, "empty_member.tar", _tar_bytes(build))


@pytest.fixture()
def block_aligned_archive(tmp_path):
    """A member whose payload is exactly two blocks long."""

    def build(tf):
        _add_regular(tf, "aligned.bin", b"\xab" * (2 * BLOCK))
        _add_regular(tf, "tail.txt", PAYLOAD_C)

    return _write_to_path(tmp_path, "aligned.tar", _tar_bytes(build))


@pytest.fixture()
def duplicate_names_archive(tmp_path):
    """The same member name stored twice with different content."""

    def build(tf):
        _add_regular(tf, "dup.txt", b"first\n")
        _add_regular(tf, "dup.txt", b"second\n")

    return _write_to_path(tmp_path, "duplicates.tar", _tar_bytes(build))


@pytest.fixture()
def zero_members_archive(tmp_path):
    """No members: just two zero blocks."""
    return _write_to_path(tmp_path, "zero_members.tar", b"\0" * (2 * BLOCK))


@pytest.fixture()
def no_trailer_archive(tmp_path):
    """One member and no end-of-archive blocks at all."""
    return _write_to_path(
        tmp_path, "no_trailer.tar", member_blocks("only.txt", PAYLOAD_A)
    )


@pytest.fixture()
def lone_zero_block_archive(tmp_path):
    """One member followed by a single zero block."""
    data = member_blocks("only.txt", PAYLOAD_A) + b"\0" * BLOCK
    return _write_to_path(tmp_path, "lone_zero.tar", data)


@pytest.fixture()
def nested_name_archive(tmp_path):
    """A member stored under a directory that the archive never creates."""

    def build(tf):
        _add_regular(tf, "missing_dir/file.txt", PAYLOAD_A)
        _add_regular(tf, "top.txt", PAYLOAD_C)

    return _write_to_path(tmp_path, "nested.tar", _tar_bytes(build))


@pytest.fixture()
def traversal_archive(tmp_path):
    """A member whose name climbs out of the extraction directory."""

    def build(tf):
        _add_regular(tf, "../evil.txt", b"pwned")
        _add_regular(tf, "good.txt", PAYLOAD_A)

    return _write_to_path(tmp_path, "traversal.tar", _tar_bytes(build))


# ---------------------------------------------------------------------------
# malformed archives
# ---------------------------------------------------------------------------


@pytest.fixture()
def directory_first_archive(tmp_path):
    """The first header is a directory (typeflag ``'5'``)."""

    def build(tf):
        _add_directory(tf, "data/")
        _add_regular(tf, "readme.txt", PAYLOAD_A)

    return _write_to_path(tmp_path, "directory_first.tar", _tar_bytes(build))


@pytest.fixture()
def symlink_after_regular_archive(tmp_path):
    """A regular member followed by a symlink."""

    def build(tf):
        _add_regular(tf, "readme.txt", PAYLOAD_A)
        _add_symlink(tf, "link.txt", "readme.txt")

    return _write_to_path(tmp_path, "symlink.tar", _tar_bytes(build))


@pytest.fixture()
def posix_magic_archive(tmp_path):
    """A regular member whose header carries the POSIX ``ustar\\0`` magic."""
    raw = bytearray(_tar_bytes(lambda tf: _add_regular(tf, "readme.txt", PAYLOAD_A)))
    raw[257:265] = b"ustar\x0000"
    return _write_to_path(tmp_path, "posix_magic.tar", bytes(raw))


@pytest.fixture()
def truncated_archive(tmp_path):
    """A 1000-byte member of which only the first 300 bytes survive."""
    payload = bytes(range(256)) * 4
    raw = member_blocks("big.bin", payload[:1000])
    return _write_to_path(tmp_path, "truncated.tar", raw[: BLOCK + 300])


@pytest.fixture()
def truncated_after_good_archive(tmp_path):
    """A complete member, then a truncated one."""
    raw = member_blocks("good.txt", PAYLOAD_A) + member_blocks("big.bin", PAYLOAD_B)
    cut = len(member_blocks("good.txt", PAYLOAD_A)) + BLOCK + 100
    return _write_to_path(tmp_path, "truncated_after_good.tar", raw[:cut])
