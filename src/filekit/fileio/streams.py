"""Scoped stream helpers for fileio.

Every handle opened by fileio goes through ``closing_quietly``: release is
guaranteed on every exit path and an error raised while closing never
replaces an error already in flight.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, BinaryIO, Protocol, TypeVar

from filekit.core.errors import DirectoryCreateError
from filekit.core.logging import get_logger

DEFAULT_BUFFER_SIZE = 64 * 1024

_logger = get_logger(__name__)


class _Closeable(Protocol):
    def close(self) -> Any: ...


C = TypeVar("C", bound=_Closeable)


@contextmanager
def closing_quietly(handle: C) -> Iterator[C]:
    """Yield ``handle`` and close it on exit, suppressing close errors."""
    try:
        yield handle
    finally:
        try:
            handle.close()
        except Exception as e:
            _logger.debug(f"Suppressed error while closing {handle!r}: {type(e).__name__}: {e}")


@contextmanager
def open_read(path: str | os.PathLike[str]) -> Iterator[BinaryIO]:
    """Open a file for buffered binary reading."""
    with closing_quietly(open(path, "rb")) as f:
        yield f


@contextmanager
def open_write(path: str | os.PathLike[str]) -> Iterator[BinaryIO]:
    """Open a file for buffered binary writing, truncating existing content.

    An error from the final flush on close is suppressed like any other close
    error, so a failed flush can leave the file truncated without raising.
    """
    with closing_quietly(open(path, "wb")) as f:
        yield f


def copy_stream(
    src: IO[bytes], dst: IO[bytes], *, buffer_size: int = DEFAULT_BUFFER_SIZE
) -> None:
    """Copy ``src`` into ``dst`` until EOF."""
    if buffer_size <= 0:
        raise ValueError("buffer_size must be > 0")
    shutil.copyfileobj(src, dst, buffer_size)


def copy_file_content(
    src: str | os.PathLike[str],
    dst: str | os.PathLike[str],
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> None:
    """Stream the full content of ``src`` into ``dst`` (overwriting it)."""
    with open_read(src) as in_f, open_write(dst) as out_f:
        copy_stream(in_f, out_f, buffer_size=buffer_size)


def ensure_directory(path: Path) -> None:
    """Create ``path`` (and parents) when it does not exist yet.

    Raises:
        DirectoryCreateError
    """
    if path.is_dir():
        return
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreateError(str(path)) from e

