"""filekit - small filesystem helpers.

Extensions, URL/path conversion, zipping, file and directory copies and
extraction of packaged resources.
"""

__version__ = "1.0.0"

from filekit.core.config import ConfigResolver
from filekit.core.errors import (
    ConfigError,
    DirectoryCreateError,
    FileError,
    FileKitError,
    InvalidArgumentError,
    UnsafeEntryError,
)
from filekit.core.logging import get_logger, set_log_sink, set_verbosity
from filekit.fileio import (
    FileService,
    ResourceLocation,
    ResourceResolver,
    copy_directory_recursive,
    copy_file,
    extract_packaged_resources,
    get_extension,
    path_to_url,
    url_to_file,
    zip_files,
)

__all__ = [
    # Operations
    "get_extension",
    "url_to_file",
    "path_to_url",
    "zip_files",
    "copy_file",
    "copy_directory_recursive",
    "extract_packaged_resources",
    # Resources
    "ResourceResolver",
    "ResourceLocation",
    "FileService",
    # Errors
    "FileKitError",
    "InvalidArgumentError",
    "FileError",
    "DirectoryCreateError",
    "UnsafeEntryError",
    "ConfigError",
    # Config / logging
    "ConfigResolver",
    "get_logger",
    "set_log_sink",
    "set_verbosity",
]
