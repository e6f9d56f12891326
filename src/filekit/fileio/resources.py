"""Packaged resource lookup and extraction.

Resources are looked up on an explicit search path, the way an interpreter
finds modules on ``sys.path``: every entry is either a directory or a zip
format archive (``.zip``, ``.whl``, ``.egg``, ``.jar``). The first entry that
holds the requested name wins.
"""

from __future__ import annotations

import importlib
import os
import sys
import zipfile
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from filekit.core.errors import InvalidArgumentError, UnsafeEntryError
from filekit.core.logging import get_logger

from .ops import copy_directory_recursive
from .streams import DEFAULT_BUFFER_SIZE, closing_quietly, copy_stream, ensure_directory, open_write
from .types import ResourceLocation

_logger = get_logger(__name__)

DEFAULT_RESOURCE_ROOT = "META-INF"


class ResourceResolver:
    """Map logical resource names to directories or archives on a search path."""

    def __init__(self, search_path: Iterable[str | os.PathLike[str]]) -> None:
        self.search_path = [Path(p) for p in search_path]

    def __repr__(self) -> str:
        return f"ResourceResolver({[str(p) for p in self.search_path]!r})"

    @classmethod
    def from_sys_path(cls) -> ResourceResolver:
        """Search the interpreter's import path (``""`` is the working directory)."""
        return cls(p or os.getcwd() for p in sys.path)

    @classmethod
    def for_module(cls, module: ModuleType | str) -> ResourceResolver:
        """Search only the packaging root of ``module``.

        That is the zip archive the module was imported from, or the import
        path directory holding its top-level package.
        """
        if isinstance(module, str):
            module = importlib.import_module(module)

        archive = getattr(getattr(module, "__loader__", None), "archive", None)
        if archive:
            return cls([archive])

        module_file = getattr(module, "__file__", None)
        if not module_file:
            raise InvalidArgumentError("module", f"{module.__name__} has no file location")

        depth = module.__name__.count(".")
        if hasattr(module, "__path__"):
            depth += 1
        return cls([Path(module_file).resolve().parents[depth]])

    def locate(self, name: str) -> ResourceLocation | None:
        """Return where ``name`` lives, or None if no search path entry has it."""
        name = name.strip("/")
        for entry in self.search_path:
            if entry.is_dir():
                candidate = entry.joinpath(*name.split("/"))
                if candidate.exists():
                    return ResourceLocation(name=name, path=candidate, in_archive=False)
            elif entry.is_file() and zipfile.is_zipfile(entry):
                if _archive_contains(entry, name):
                    return ResourceLocation(name=name, path=entry, in_archive=True)
        return None


def _archive_contains(archive: Path, name: str) -> bool:
    with closing_quietly(zipfile.ZipFile(archive)) as zf:
        return any(n == name or n.startswith(name + "/") for n in zf.namelist())


def extract_packaged_resources(
    prefix_path: str,
    target_directory: str | os.PathLike[str] | None,
    resolver: ResourceResolver | None = None,
    *,
    resource_root: str = DEFAULT_RESOURCE_ROOT,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> bool:
    """Copy the resources under ``<resource_root>/<prefix_path>`` into ``target_directory``.

    The resource directory is looked up through ``resolver``. Inside an
    archive, every file entry below it is written to the same relative path
    under the target; a plain directory is copied recursively.

    Returns:
        True if anything was extracted, False if the resource does not exist.

    Raises:
        InvalidArgumentError: prefix_path is blank, target_directory is not an
            existing absolute directory, or resolver is None.
        DirectoryCreateError: a target directory could not be created.
        UnsafeEntryError: an archive entry would land outside the target.
        OSError: reading or writing failed.
    """
    if prefix_path is None or not prefix_path.strip():
        raise InvalidArgumentError("prefix_path")
    if (
        target_directory is None
        or not Path(target_directory).is_absolute()
        or not Path(target_directory).is_dir()
    ):
        raise InvalidArgumentError(
            "target_directory", "The target file must be directory and absolute path"
        )
    if resolver is None:
        raise InvalidArgumentError("resolver", "a resource resolver is required")

    name = "/".join(p for p in (resource_root.strip("/"), prefix_path.strip("/")) if p)
    location = resolver.locate(name)
    if location is None:
        _logger.debug(f"No packaged resources found for {name!r} in {resolver!r}")
        return False

    target = Path(target_directory)
    if location.in_archive:
        return _extract_archive_entries(location, target, buffer_size=buffer_size) > 0

    copy_directory_recursive(location.path, target, buffer_size=buffer_size)
    return True


def _extract_archive_entries(location: ResourceLocation, target: Path, *, buffer_size: int) -> int:
    prefix = location.entry_prefix
    target_root = target.resolve()
    written = 0

    with closing_quietly(zipfile.ZipFile(location.path)) as zf:
        for info in zf.infolist():
            if info.is_dir() or not info.filename.startswith(prefix):
                continue

            rel_name = info.filename[len(prefix) :]
            target_file = target_root.joinpath(*rel_name.split("/")).resolve()
            try:
                target_file.relative_to(target_root)
            except ValueError:
                raise UnsafeEntryError(info.filename) from None

            ensure_directory(target_file.parent)
            _logger.debug(f"Unpacking resource file: {info.filename}")
            with closing_quietly(zf.open(info)) as in_f, open_write(target_file) as out_f:
                copy_stream(in_f, out_f, buffer_size=buffer_size)
            written += 1

    return written
