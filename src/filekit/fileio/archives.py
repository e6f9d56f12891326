"""Zip archive creation."""

from __future__ import annotations

import os
import tempfile
import uuid
import zipfile
from collections.abc import Sequence
from pathlib import Path

from filekit.core.errors import FileError, InvalidArgumentError
from filekit.core.logging import get_logger

from .streams import DEFAULT_BUFFER_SIZE, closing_quietly, copy_stream, open_read

_logger = get_logger(__name__)

RANDOM_PREFIX_LENGTH = 8
PREFIX_SEPARATOR = "_"


def normalize_prefix(name_prefix: str | None) -> str:
    """Return a temp file prefix ending in exactly one ``_``.

    A blank prefix is replaced by an 8 character random alphanumeric string.
    """
    if name_prefix is None or not name_prefix.strip():
        name_prefix = uuid.uuid4().hex[:RANDOM_PREFIX_LENGTH]
    return name_prefix.rstrip(PREFIX_SEPARATOR) + PREFIX_SEPARATOR


def zip_files(
    name_prefix: str | None,
    files: Sequence[str | os.PathLike[str]],
    *,
    temp_dir: str | os.PathLike[str] | None = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> Path:
    """Pack ``files`` into a new temporary zip archive.

    Each file becomes one deflated entry named by its base name; directory
    structure is not kept. The archive is created in ``temp_dir`` (platform
    temp directory when None) as ``<prefix>XXXXXXXX.zip``.

    Returns:
        Path of the created archive.

    Raises:
        InvalidArgumentError: files is empty.
        FileError: two files share a base name.
        OSError: a source could not be read or the archive written. The
            partially written archive is left in place.
    """
    if not files:
        raise InvalidArgumentError("files")

    prefix = normalize_prefix(name_prefix)
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=".zip", dir=temp_dir)
    os.close(fd)
    zip_path = Path(name)

    seen: set[str] = set()
    with closing_quietly(zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED)) as zf:
        for file in files:
            src = Path(file)
            if src.name in seen:
                raise FileError(f"Duplicate zip entry: {src.name}")
            seen.add(src.name)
            with open_read(src) as in_f, closing_quietly(zf.open(src.name, "w")) as entry_f:
                copy_stream(in_f, entry_f, buffer_size=buffer_size)
            _logger.debug(f"Zipped {src} as entry {src.name!r}")

    return zip_path
