"""Types for fileio."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .urls import JAR_SEPARATOR


@dataclass(frozen=True)
class ResourceLocation:
    """Where a logical resource name was found on the search path.

    ``path`` is the resource directory itself for on-disk resources, or the
    archive file holding it when ``in_archive`` is set.
    """

    name: str
    path: Path
    in_archive: bool

    @property
    def entry_prefix(self) -> str:
        """Archive entry prefix of everything below the resource."""
        return self.name.strip("/") + "/"

    @property
    def url(self) -> str:
        if self.in_archive:
            return f"jar:{self.path.absolute().as_uri()}{JAR_SEPARATOR}{self.name.strip('/')}"
        return self.path.absolute().as_uri()
