"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add src to path (for 'filekit.*' imports without an installed package)
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root / "src"))


@pytest.fixture(autouse=True)
def _reset_logging():
    """Keep global logger state from leaking between tests."""
    from filekit.core.log_bus import get_log_bus
    from filekit.core.logging import VerbosityLevel, set_colors, set_log_sink, set_verbosity

    get_log_bus().clear()
    set_log_sink(None)
    set_verbosity(VerbosityLevel.NORMAL)
    yield
    get_log_bus().clear()
    set_log_sink(None)
    set_verbosity(VerbosityLevel.NORMAL)
    set_colors(True)


@pytest.fixture
def config_resolver(tmp_path):
    """ConfigResolver isolated from the real user/system config files."""
    from filekit.core.config import ConfigResolver

    return ConfigResolver(
        cli_args={},
        user_config_path=tmp_path / "missing-user.yaml",
        system_config_path=tmp_path / "missing-system.yaml",
    )


@pytest.fixture
def sample_tree(tmp_path):
    """Create src/{x.txt, sub/y.txt}.

    Returns:
        Path to the src directory
    """
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "x.txt").write_bytes(b"x content")
    (src / "sub" / "y.txt").write_bytes(b"y content\n" * 100)
    return src
