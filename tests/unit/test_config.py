"""Unit tests for core.config module."""

import os
from pathlib import Path

import pytest

from filekit.core.config import ConfigResolver
from filekit.core.errors import ConfigError


class TestConfigResolver:
    """Tests for ConfigResolver."""

    def test_cli_priority(self, tmp_path):
        """CLI-style overrides beat every other source."""
        user_config = tmp_path / "config.yaml"
        user_config.write_text("io:\n  buffer_size: 1024\n")

        resolver = ConfigResolver(
            cli_args={"io": {"buffer_size": 2048}},
            user_config_path=user_config,
            system_config_path=tmp_path / "none.yaml",
        )

        value, source = resolver.resolve("io.buffer_size")
        assert value == 2048
        assert source == "cli"

    def test_env_priority(self, tmp_path, monkeypatch):
        """Environment overrides config files and is coerced by typed getters."""
        user_config = tmp_path / "config.yaml"
        user_config.write_text("io:\n  buffer_size: 1024\n")
        monkeypatch.setenv("FILEKIT_IO_BUFFER_SIZE", "4096")

        resolver = ConfigResolver(
            user_config_path=user_config, system_config_path=tmp_path / "none.yaml"
        )

        assert resolver.resolve("io.buffer_size") == ("4096", "env")
        assert resolver.resolve_int("io.buffer_size") == 4096

    def test_user_config_priority(self, tmp_path):
        """User config overrides system config."""
        user_config = tmp_path / "user.yaml"
        user_config.write_text("copy:\n  prefer_rename: false\n")
        system_config = tmp_path / "system.yaml"
        system_config.write_text("copy:\n  prefer_rename: true\nresources:\n  root: LIB\n")

        resolver = ConfigResolver(user_config_path=user_config, system_config_path=system_config)

        assert resolver.resolve("copy.prefer_rename") == (False, "user_config")
        assert resolver.resolve("resources.root") == ("LIB", "system_config")
        assert resolver.resolve("io.buffer_size") == (64 * 1024, "default")

    def test_missing_key(self, config_resolver):
        with pytest.raises(ConfigError, match="not found in any source"):
            config_resolver.resolve("no.such.key")
        assert config_resolver.resolve_optional("no.such.key", 7) == 7

    def test_invalid_yaml(self, tmp_path):
        user_config = tmp_path / "config.yaml"
        user_config.write_text("io: [unclosed\n")

        resolver = ConfigResolver(user_config_path=user_config)

        with pytest.raises(ConfigError, match="Failed to load config"):
            resolver.resolve("io.buffer_size")

    def test_resolve_int_validation(self, tmp_path):
        resolver = ConfigResolver(
            cli_args={"a": "abc", "b": True, "c": 0},
            user_config_path=tmp_path / "none.yaml",
            system_config_path=tmp_path / "none.yaml",
        )
        with pytest.raises(ConfigError):
            resolver.resolve_int("a")
        with pytest.raises(ConfigError):
            resolver.resolve_int("b")
        with pytest.raises(ConfigError, match=">= 1"):
            resolver.resolve_int("c", minimum=1)

    @pytest.mark.parametrize("raw", ["--5", "\u00b2", "1.5"])
    def test_resolve_int_rejects_malformed_env(self, config_resolver, monkeypatch, raw):
        monkeypatch.setenv("FILEKIT_IO_BUFFER_SIZE", raw)
        with pytest.raises(ConfigError, match="must be an int"):
            config_resolver.resolve_int("io.buffer_size")

    @pytest.mark.parametrize(
        ("raw", "expected"), [("yes", True), ("0", False), ("False", False), ("on", True)]
    )
    def test_resolve_bool_from_env(self, config_resolver, monkeypatch, raw, expected):
        monkeypatch.setenv("FILEKIT_COPY_PREFER_RENAME", raw)
        assert config_resolver.resolve_bool("copy.prefer_rename") is expected

    def test_resolve_bool_invalid(self, config_resolver, monkeypatch):
        monkeypatch.setenv("FILEKIT_COPY_PREFER_RENAME", "maybe")
        with pytest.raises(ConfigError, match="must be a bool"):
            config_resolver.resolve_bool("copy.prefer_rename")

    def test_resolve_path_list(self, config_resolver, monkeypatch, tmp_path):
        assert config_resolver.resolve_path_list("resources.search_path") == []

        joined = f"{tmp_path / 'a'}{os.pathsep}{tmp_path / 'b.jar'}"
        monkeypatch.setenv("FILEKIT_RESOURCES_SEARCH_PATH", joined)
        assert config_resolver.resolve_path_list("resources.search_path") == [
            tmp_path / "a",
            tmp_path / "b.jar",
        ]

    def test_resolve_path_list_expands_user(self, tmp_path):
        resolver = ConfigResolver(
            cli_args={"resources": {"search_path": ["~/lib"]}},
            user_config_path=tmp_path / "none.yaml",
        )
        assert resolver.resolve_path_list("resources.search_path") == [Path.home() / "lib"]


class TestLoggingPolicy:
    def test_default_policy(self, config_resolver):
        policy = config_resolver.resolve_logging_policy()
        assert policy.level_name == "normal"
        assert policy.emit_info
        assert not policy.emit_debug
        assert policy.color

    def test_level_is_normalized(self, tmp_path):
        resolver = ConfigResolver(
            cli_args={"logging": {"level": " DEBUG "}},
            user_config_path=tmp_path / "none.yaml",
        )
        policy = resolver.resolve_logging_policy()
        assert policy.level_name == "debug"
        assert policy.emit_verbose and policy.emit_debug

    def test_invalid_level(self, tmp_path):
        resolver = ConfigResolver(
            cli_args={"logging": {"level": "loud"}},
            user_config_path=tmp_path / "none.yaml",
        )
        with pytest.raises(ConfigError, match="Allowed values"):
            resolver.resolve_logging_level()

    def test_color_from_env(self, config_resolver, monkeypatch):
        monkeypatch.setenv("FILEKIT_LOGGING_COLOR", "false")
        assert config_resolver.resolve_logging_policy().color is False
