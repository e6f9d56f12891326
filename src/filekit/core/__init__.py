"""filekit core: errors, configuration and logging shared by all modules."""

from filekit.core.config import ConfigResolver, ConfigSource, LoggingPolicy
from filekit.core.errors import (
    ConfigError,
    DirectoryCreateError,
    FileError,
    FileKitError,
    InvalidArgumentError,
    UnsafeEntryError,
)
from filekit.core.log_bus import LogBus, LogRecord, get_log_bus
from filekit.core.logging import (
    FileKitLogger,
    VerbosityLevel,
    apply_logging_policy,
    get_logger,
    get_verbosity,
    set_colors,
    set_log_sink,
    set_verbosity,
)

__all__ = [
    # Config
    "ConfigResolver",
    "ConfigSource",
    "LoggingPolicy",
    # Errors
    "FileKitError",
    "InvalidArgumentError",
    "ConfigError",
    "FileError",
    "DirectoryCreateError",
    "UnsafeEntryError",
    # Logging
    "FileKitLogger",
    "LogBus",
    "LogRecord",
    "VerbosityLevel",
    "apply_logging_policy",
    "get_log_bus",
    "get_logger",
    "get_verbosity",
    "set_colors",
    "set_log_sink",
    "set_verbosity",
]
