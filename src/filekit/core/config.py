"""Configuration resolver with layered priority.

Priority (highest to lowest):
1. CLI-style overrides passed by the embedding application
2. Environment variables (FILEKIT_*)
3. Config files (user > system)
4. Defaults
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from filekit.core.errors import ConfigError

ALLOWED_LOGGING_LEVELS = frozenset({"quiet", "normal", "verbose", "debug"})
DEFAULT_LOGGING_LEVEL = "normal"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class ConfigSource:
    """Represents where a config value came from."""

    value: Any
    source: str  # 'cli' | 'env' | 'user_config' | 'system_config' | 'default'


@dataclass(frozen=True)
class LoggingPolicy:
    """Resolved, immutable logging policy."""

    level_name: str  # quiet | normal | verbose | debug
    emit_info: bool
    emit_verbose: bool
    emit_debug: bool
    color: bool


class ConfigResolver:
    """Resolve configuration with strict priority.

    Example:
        resolver = ConfigResolver(
            cli_args={'io': {'buffer_size': 1048576}},
            user_config_path=Path('~/.config/filekit/config.yaml'),
        )

        size = resolver.resolve_int('io.buffer_size')
        # size = 1048576
    """

    def __init__(
        self,
        cli_args: dict[str, Any] | None = None,
        user_config_path: Path | None = None,
        system_config_path: Path | None = None,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        """Initialize config resolver.

        Args:
            cli_args: Overrides from the embedding application (highest priority)
            user_config_path: Path to user config file
            system_config_path: Path to system config file
            defaults: Default values (lowest priority)
        """
        self.cli_args = cli_args or {}
        self.user_config_path = user_config_path or Path.home() / ".config/filekit/config.yaml"
        self.system_config_path = system_config_path or Path("/etc/filekit/config.yaml")
        self.defaults = self._default_config() if defaults is None else defaults

        self._user_config: dict[str, Any] | None = None
        self._system_config: dict[str, Any] | None = None

    def resolve(self, key: str) -> tuple[Any, str]:
        """Resolve config value with priority.

        Args:
            key: Config key (supports dot notation: 'io.buffer_size')

        Returns:
            (value, source) tuple

        Raises:
            ConfigError: If key not found in any source
        """
        lookups = (
            ("cli", lambda: self._get_nested(self.cli_args, key)),
            ("env", lambda: self._from_env(key)),
            ("user_config", lambda: self._get_nested(self._get_user_config(), key)),
            ("system_config", lambda: self._get_nested(self._get_system_config(), key)),
            ("default", lambda: self._get_nested(self.defaults, key)),
        )
        for source, lookup in lookups:
            value = lookup()
            if value is not None:
                return value, source

        raise ConfigError(f"Config key '{key}' not found in any source")

    def resolve_optional(self, key: str, default: Any = None) -> Any:
        """Resolve a key, returning ``default`` when no source defines it."""
        try:
            value, _src = self.resolve(key)
        except ConfigError as e:
            if "not found in any source" in e.message:
                return default
            raise
        return value

    def resolve_int(self, key: str, *, minimum: int | None = None) -> int:
        value, source = self.resolve(key)
        if isinstance(value, bool):
            raise ConfigError(f"Config key '{key}' must be an int, got bool")
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError as e:
                raise ConfigError(
                    f"Config key '{key}' must be an int, got {value!r} (from {source})"
                ) from e
        if not isinstance(value, int):
            raise ConfigError(
                f"Config key '{key}' must be an int, got {type(value).__name__} (from {source})"
            )
        if minimum is not None and value < minimum:
            raise ConfigError(f"Config key '{key}' must be >= {minimum}, got {value}")
        return value

    def resolve_bool(self, key: str) -> bool:
        value, source = self.resolve(key)
        if isinstance(value, bool):
            return value
        s = str(value).strip().lower()
        if s in _TRUE_VALUES:
            return True
        if s in _FALSE_VALUES:
            return False
        raise ConfigError(f"Config key '{key}' must be a bool, got {value!r} (from {source})")

    def resolve_path_list(self, key: str) -> list[Path]:
        """Resolve a list of paths.

        Environment values are split on ``os.pathsep`` like PATH.
        """
        value = self.resolve_optional(key, [])
        if isinstance(value, str):
            value = [p for p in value.split(os.pathsep) if p.strip()]
        if not isinstance(value, list):
            raise ConfigError(f"Config key '{key}' must be a list of paths")
        paths: list[Path] = []
        for item in value:
            if not isinstance(item, str) or not item.strip():
                raise ConfigError(f"Config key '{key}' contains an invalid path: {item!r}")
            paths.append(Path(item).expanduser())
        return paths

    def resolve_logging_level(self) -> str:
        """Resolve and validate logging.level.

        Allowed values (after normalization):
            quiet | normal | verbose | debug

        Raises:
            ConfigError: If the resolved value is invalid.
        """
        key = "logging.level"
        value = self.resolve_optional(key, DEFAULT_LOGGING_LEVEL)
        if not isinstance(value, str):
            raise ConfigError(f"Config key '{key}' must be a string, got {type(value).__name__}")

        norm = value.strip().lower()
        if norm not in ALLOWED_LOGGING_LEVELS:
            allowed = ", ".join(sorted(ALLOWED_LOGGING_LEVELS))
            raise ConfigError(f"Invalid '{key}': {value!r}. Allowed values: {allowed}")
        return norm

    def resolve_logging_policy(self) -> LoggingPolicy:
        """Resolve the logging policy.

        Side-effect free; see ``filekit.core.logging.apply_logging_policy``.
        """
        level_name = self.resolve_logging_level()
        color = True
        if self.resolve_optional("logging.color") is not None:
            color = self.resolve_bool("logging.color")

        return LoggingPolicy(
            level_name=level_name,
            emit_info=level_name != "quiet",
            emit_verbose=level_name in ("verbose", "debug"),
            emit_debug=level_name == "debug",
            color=color,
        )

    def _from_env(self, key: str) -> Any | None:
        """Get value from environment variables.

        Environment variable format: FILEKIT_KEY_NAME
        Example: FILEKIT_IO_BUFFER_SIZE, FILEKIT_LOGGING_LEVEL
        """
        env_key = f"FILEKIT_{key.upper().replace('.', '_')}"
        return os.environ.get(env_key)

    def _get_user_config(self) -> dict[str, Any]:
        """Load user config file (cached)."""
        if self._user_config is None:
            self._user_config = self._load_yaml(self.user_config_path)
        return self._user_config

    def _get_system_config(self) -> dict[str, Any]:
        """Load system config file (cached)."""
        if self._system_config is None:
            self._system_config = self._load_yaml(self.system_config_path)
        return self._system_config

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {path}: {e}") from e
        return data if isinstance(data, dict) else {}

    def _get_nested(self, data: dict[str, Any], key: str) -> Any | None:
        """Get nested value using dot notation.

        Example:
            data = {'io': {'buffer_size': 4096}}
            _get_nested(data, 'io.buffer_size') -> 4096
        """
        current: Any = data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    @staticmethod
    def _default_config() -> dict[str, Any]:
        """Default configuration."""
        return {
            "logging": {
                "level": DEFAULT_LOGGING_LEVEL,
                "color": True,
            },
            "io": {
                "buffer_size": 64 * 1024,
            },
            "copy": {
                "prefer_rename": True,
            },
            # zip.temp_dir unset: platform temp directory
            "zip": {
                "temp_dir": None,
            },
            "resources": {
                "root": "META-INF",
                # empty: the interpreter's import path
                "search_path": [],
            },
        }
