"""Centralized logging for filekit.

Four verbosity levels:
- QUIET (0): Warnings + errors
- NORMAL (1): Info + warnings + errors
- VERBOSE (2): Detailed info
- DEBUG (3): Everything, including per-file unpack lines

Usage:
    from filekit.core.logging import get_logger, set_verbosity

    logger = get_logger(__name__)
    set_verbosity(3)  # DEBUG

    logger.debug("Unpacking resource file: META-INF/web/index.html")
    logger.info("filekit.zip_files status=succeeded files_count=2")

Every emitted line is also published on the LogBus; use ``set_log_sink`` or
``get_log_bus().subscribe_all`` to observe it.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from enum import IntEnum

from filekit.core.config import LoggingPolicy
from filekit.core.log_bus import LogRecord, get_log_bus


class VerbosityLevel(IntEnum):
    """Verbosity levels for filekit."""

    QUIET = 0  # Warnings + errors
    NORMAL = 1  # Info + warnings + errors
    VERBOSE = 2  # Detailed info
    DEBUG = 3  # Everything


_VERBOSITY: VerbosityLevel = VerbosityLevel.NORMAL

_USE_COLORS: bool = True

_LOG_SINK: Callable[[str], None] | None = None
_SINK_ADAPTER: Callable[[LogRecord], None] | None = None


def set_verbosity(level: int | VerbosityLevel) -> None:
    """Set global verbosity level.

    Args:
        level: Verbosity level (0-3 or VerbosityLevel enum)
    """
    global _VERBOSITY
    _VERBOSITY = VerbosityLevel(level)


def get_verbosity() -> VerbosityLevel:
    return _VERBOSITY


def apply_logging_policy(policy: LoggingPolicy) -> None:
    """Apply a resolved LoggingPolicy to the global logger state."""
    if policy.emit_debug:
        set_verbosity(VerbosityLevel.DEBUG)
    elif policy.emit_verbose:
        set_verbosity(VerbosityLevel.VERBOSE)
    elif policy.emit_info:
        set_verbosity(VerbosityLevel.NORMAL)
    else:
        set_verbosity(VerbosityLevel.QUIET)
    set_colors(policy.color)


def set_colors(enabled: bool) -> None:
    global _USE_COLORS
    _USE_COLORS = enabled


def set_log_sink(sink: Callable[[str], None] | None) -> None:
    """Route every emitted line (uncoloured) to ``sink``.

    Only one sink is active at a time; passing None removes it.
    """
    global _LOG_SINK
    global _SINK_ADAPTER

    if _SINK_ADAPTER is not None:
        get_log_bus().unsubscribe_all(_SINK_ADAPTER)
        _SINK_ADAPTER = None

    _LOG_SINK = sink
    if sink is None:
        return

    def _adapter(rec: LogRecord) -> None:
        sink(rec.plain)

    _SINK_ADAPTER = _adapter
    get_log_bus().subscribe_all(_adapter)


def get_log_sink() -> Callable[[str], None] | None:
    return _LOG_SINK


class FileKitLogger:
    """Logger with verbosity support."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "VERBOSE": "\033[34m",  # Blue
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "RESET": "\033[0m",
    }

    def __init__(self, name: str):
        self.name = name

    def is_enabled_for(self, level: VerbosityLevel) -> bool:
        return level <= _VERBOSITY

    def _format_message(self, level_name: str, message: str) -> str:
        if _USE_COLORS and sys.stdout.isatty():
            color = self.COLORS.get(level_name, "")
            reset = self.COLORS["RESET"]
            return f"{color}[{level_name.lower()}]{reset} {message}"
        return f"[{level_name.lower()}] {message}"

    def _log(self, level: VerbosityLevel, level_name: str, message: str) -> None:
        if not self.is_enabled_for(level):
            return

        get_log_bus().publish(
            LogRecord(level_name=level_name, message=message, logger_name=self.name)
        )

        stream = sys.stderr if level_name in ("WARNING", "ERROR") else sys.stdout
        print(self._format_message(level_name, message), file=stream)

    def debug(self, message: str) -> None:
        self._log(VerbosityLevel.DEBUG, "DEBUG", message)

    def verbose(self, message: str) -> None:
        self._log(VerbosityLevel.VERBOSE, "VERBOSE", message)

    def info(self, message: str) -> None:
        self._log(VerbosityLevel.NORMAL, "INFO", message)

    def warning(self, message: str) -> None:
        self._log(VerbosityLevel.QUIET, "WARNING", message)

    def error(self, message: str) -> None:
        """Log error message (always shown)."""
        self._log(VerbosityLevel.QUIET, "ERROR", message)


_LOGGERS: dict[str, FileKitLogger] = {}


def get_logger(name: str = "filekit") -> FileKitLogger:
    """Get logger instance for module.

    Args:
        name: Logger name (usually __name__)
    """
    if name not in _LOGGERS:
        _LOGGERS[name] = FileKitLogger(name)
    return _LOGGERS[name]
