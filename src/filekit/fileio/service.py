"""Config-driven facade over the fileio operations.

The module-level functions take every tunable as an argument. FileService
resolves those tunables once from a ConfigResolver and logs a summary line
per operation.
"""

from __future__ import annotations

import os
import time
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from filekit.core.config import ConfigResolver
from filekit.core.logging import apply_logging_policy, get_logger

from .archives import zip_files
from .names import get_extension
from .ops import copy_directory_recursive, copy_file
from .resources import DEFAULT_RESOURCE_ROOT, ResourceResolver, extract_packaged_resources
from .urls import path_to_url, url_to_file

_logger = get_logger(__name__)


@contextmanager
def _observe_operation(*, operation: str, base: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Log one summary line when ``operation`` ends.

    The yielded dict collects result details (counts, paths) from the body.
    """
    start = time.perf_counter()
    summary: dict[str, Any] = {}
    try:
        yield summary
    except Exception as e:
        duration_ms = int((time.perf_counter() - start) * 1000)
        parts = [f"status=failed duration_ms={duration_ms}"]
        parts.extend(f"{k}={v!r}" for k, v in base.items())
        parts.append(f"error_type={type(e).__name__!r}")
        _logger.warning(f"{operation} " + " ".join(parts))
        raise
    else:
        duration_ms = int((time.perf_counter() - start) * 1000)
        parts = [f"status=succeeded duration_ms={duration_ms}"]
        parts.extend(f"{k}={v!r}" for k, v in {**base, **summary}.items())
        _logger.info(f"{operation} " + " ".join(parts))


class FileService:
    """File utility capability with settings taken from configuration.

    Settings:
        logging.level, logging.color: applied globally by from_resolver
        io.buffer_size: stream copy buffer in bytes
        copy.prefer_rename: try a rename before copying in copy_file
        zip.temp_dir: directory for zip_files archives (platform temp if unset)
        resources.root: archive/directory root of packaged resources
        resources.search_path: resource search path (sys.path if empty)
    """

    def __init__(
        self,
        *,
        buffer_size: int,
        prefer_rename: bool = True,
        temp_dir: Path | None = None,
        resource_root: str = DEFAULT_RESOURCE_ROOT,
        resolver: ResourceResolver | None = None,
    ) -> None:
        self.buffer_size = buffer_size
        self.prefer_rename = prefer_rename
        self.temp_dir = temp_dir
        self.resource_root = resource_root
        self.resolver = resolver or ResourceResolver.from_sys_path()

    @classmethod
    def from_resolver(cls, resolver: ConfigResolver) -> FileService:
        """Build a service from configuration and apply its logging policy."""
        apply_logging_policy(resolver.resolve_logging_policy())
        temp_dir = resolver.resolve_optional("zip.temp_dir")
        search_path = resolver.resolve_path_list("resources.search_path")
        return cls(
            buffer_size=resolver.resolve_int("io.buffer_size", minimum=1),
            prefer_rename=resolver.resolve_bool("copy.prefer_rename"),
            temp_dir=Path(str(temp_dir)).expanduser() if temp_dir else None,
            resource_root=str(resolver.resolve_optional("resources.root", DEFAULT_RESOURCE_ROOT)),
            resolver=ResourceResolver(search_path) if search_path else None,
        )

    @staticmethod
    def get_extension(file_name: str) -> str:
        return get_extension(file_name)

    @staticmethod
    def url_to_file(url: str) -> Path | None:
        return url_to_file(url)

    @staticmethod
    def path_to_url(path: str) -> str | None:
        return path_to_url(path)

    def zip_files(self, name_prefix: str | None, files: Sequence[str | os.PathLike[str]]) -> Path:
        with _observe_operation(
            operation="filekit.zip_files",
            base={"prefix": name_prefix, "files_count": len(files or ())},
        ) as summary:
            zip_path = zip_files(
                name_prefix, files, temp_dir=self.temp_dir, buffer_size=self.buffer_size
            )
            summary["zip_path"] = str(zip_path)
            summary["bytes"] = zip_path.stat().st_size
            return zip_path

    def copy_file(
        self, source: str | os.PathLike[str] | None, destination: str | os.PathLike[str] | None
    ) -> None:
        with _observe_operation(
            operation="filekit.copy_file",
            base={"source": str(source), "destination": str(destination)},
        ):
            copy_file(
                source,
                destination,
                prefer_rename=self.prefer_rename,
                buffer_size=self.buffer_size,
            )

    def copy_directory_recursive(
        self, source_dir: str | os.PathLike[str] | None, target_dir: str | os.PathLike[str]
    ) -> int:
        with _observe_operation(
            operation="filekit.copy_directory_recursive",
            base={"source_dir": str(source_dir), "target_dir": str(target_dir)},
        ) as summary:
            written = copy_directory_recursive(
                source_dir, target_dir, buffer_size=self.buffer_size
            )
            summary["files_count"] = written
            return written

    def extract_packaged_resources(
        self,
        prefix_path: str,
        target_directory: str | os.PathLike[str] | None,
        resolver: ResourceResolver | None = None,
    ) -> bool:
        """Extract packaged resources using ``resolver`` or the configured one."""
        with _observe_operation(
            operation="filekit.extract_packaged_resources",
            base={"prefix_path": prefix_path, "target_directory": str(target_directory)},
        ) as summary:
            extracted = extract_packaged_resources(
                prefix_path,
                target_directory,
                resolver or self.resolver,
                resource_root=self.resource_root,
                buffer_size=self.buffer_size,
            )
            summary["extracted"] = extracted
            return extracted
