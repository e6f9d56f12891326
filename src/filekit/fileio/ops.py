"""File and directory copy operations.

These functions work on caller-supplied paths; they neither lock nor stage
their output, so concurrent writers to the same target must be serialized by
the caller. Partial output left by a failure is not rolled back.
"""

from __future__ import annotations

import os
from pathlib import Path

from filekit.core.errors import InvalidArgumentError
from filekit.core.logging import get_logger

from .streams import DEFAULT_BUFFER_SIZE, copy_file_content, ensure_directory

_logger = get_logger(__name__)


def copy_file(
    source: str | os.PathLike[str] | None,
    destination: str | os.PathLike[str] | None,
    *,
    prefer_rename: bool = True,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> None:
    """Put the content of ``source`` at ``destination``.

    A rename is attempted first, which moves the file. When the rename is not
    possible (different volumes, for example) or ``prefer_rename`` is off, the
    content is stream-copied instead and the source stays in place. An
    existing destination is overwritten either way.

    Raises:
        InvalidArgumentError: source is not an existing regular file, or
            destination is not an absolute path.
        OSError: reading or writing failed.
    """
    if source is None or not Path(source).is_file():
        raise InvalidArgumentError(
            "source", "Failure to write file, source must be an existing regular file"
        )
    if destination is None or not Path(destination).is_absolute():
        raise InvalidArgumentError(
            "destination", "Failure to write file, destination must be an absolute path"
        )

    src = Path(source)
    dst = Path(destination)

    if prefer_rename:
        try:
            os.replace(src, dst)
            return
        except OSError as e:
            _logger.debug(f"Rename {src} -> {dst} not possible ({e}); copying content")

    copy_file_content(src, dst, buffer_size=buffer_size)


def copy_directory_recursive(
    source_dir: str | os.PathLike[str] | None,
    target_dir: str | os.PathLike[str],
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """Copy every file below ``source_dir`` into ``target_dir``.

    Does nothing when ``source_dir`` is None or not a directory. Directories
    without files are not recreated. Existing target files are overwritten.

    Returns:
        Number of files written.

    Raises:
        DirectoryCreateError: a target directory could not be created.
        OSError: reading or writing failed.
    """
    if source_dir is None:
        return 0
    src = Path(source_dir)
    if not src.is_dir():
        return 0

    target = Path(target_dir)
    written = 0
    for child in src.iterdir():
        target_file = target / child.name
        if child.is_dir():
            written += copy_directory_recursive(child, target_file, buffer_size=buffer_size)
            continue

        ensure_directory(target)
        _logger.debug(f"Unpacking resource file: {target_file}")
        copy_file_content(child, target_file, buffer_size=buffer_size)
        written += 1
    return written
