"""Error types with friendly messages."""

from __future__ import annotations


class FileKitError(Exception):
    """Base exception for all filekit errors."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}\nSuggestion: {self.suggestion}"
        return self.message


class InvalidArgumentError(FileKitError, ValueError):
    """A required argument is missing, blank or of the wrong kind.

    Raised before any I/O is attempted.
    """

    def __init__(self, name: str, reason: str = "must not be empty") -> None:
        self.argument = name
        super().__init__(f"Invalid argument '{name}': {reason}")


class ConfigError(FileKitError):
    """Configuration error."""

    pass


class FileError(FileKitError, OSError):
    """File operation error detected by filekit itself."""

    pass


class DirectoryCreateError(FileError):
    """A missing parent directory could not be created."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Unable to create file directory '{path}'",
            "Check permissions and that no regular file occupies the path",
        )


class UnsafeEntryError(FileError):
    """An archive entry would be written outside the target directory."""

    def __init__(self, entry_name: str) -> None:
        super().__init__(f"Archive entry escapes destination: {entry_name}")
