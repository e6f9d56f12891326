"""fileio: stateless file utility operations."""

from .archives import zip_files
from .names import get_extension
from .ops import copy_directory_recursive, copy_file
from .resources import ResourceResolver, extract_packaged_resources
from .service import FileService
from .streams import closing_quietly
from .types import ResourceLocation
from .urls import path_to_url, url_to_file

__all__ = [
    "FileService",
    "ResourceLocation",
    "ResourceResolver",
    "closing_quietly",
    "copy_directory_recursive",
    "copy_file",
    "extract_packaged_resources",
    "get_extension",
    "path_to_url",
    "url_to_file",
    "zip_files",
]
