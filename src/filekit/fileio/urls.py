"""Conversions between URLs and filesystem paths."""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import unquote_to_bytes, urlsplit
from urllib.request import url2pathname

from filekit.core.errors import InvalidArgumentError

URL_PREFIXES = ("jar:", "file:", "zip:", "http:", "ftp:")

# Separates the archive URL from the entry name in jar: URLs.
JAR_SEPARATOR = "!/"


def url_to_file(url: str) -> Path | None:
    """Convert a ``file:`` URL to a local path.

    Returns None for any other scheme (including URLs pointing into an
    archive). Percent-encoded sequences are decoded to bytes and then to a
    path with the filesystem encoding, so bytes that are not valid UTF-8
    survive; a ``%`` not followed by two hex digits is kept literally.
    """
    if not url:
        return None
    parts = urlsplit(url)
    if parts.scheme.lower() != "file":
        return None
    if os.name == "nt":
        return Path(url2pathname(parts.path))
    return Path(os.fsdecode(unquote_to_bytes(parts.path)))


def _check_url(url: str) -> str:
    """Parse ``url`` strictly and return it unchanged.

    Raises:
        ValueError: the URL is malformed.
    """
    parts = urlsplit(url)
    parts.port  # raises ValueError for a non-numeric port

    if parts.scheme.lower() == "jar":
        inner, sep, _entry = url[len("jar:") :].partition(JAR_SEPARATOR)
        if not sep:
            raise ValueError(f"no {JAR_SEPARATOR} in jar URL: {url}")
        _check_url(inner)
    return url


def path_to_url(path: str) -> str | None:
    """Convert a filesystem path (or URL string) to a URL string.

    Strings already starting with one of ``URL_PREFIXES`` are parsed as URLs;
    anything else is treated as a path and made absolute against the current
    working directory. A malformed URL yields None.

    Raises:
        InvalidArgumentError: path is empty or blank.
    """
    if path is None or not str(path).strip():
        raise InvalidArgumentError("path")

    path = str(path)
    try:
        if not path.startswith(URL_PREFIXES):
            abs_path = Path(path).absolute()
            url = abs_path.as_uri()
            if abs_path.is_dir() and not url.endswith("/"):
                url += "/"
            return url
        return _check_url(path)
    except ValueError:
        return None

