"""Test configuration and fixtures for better-shell tests."""

from pathlib import Path

import pytest

from better_shell.config.settings import Settings, TelemetryConfig
from better_shell.configs.writer import ConfigWriter
from better_shell.core.registry import ToolRegistry
from better_shell.models.tool import Tool, ToolCategory

from tests.helpers import FakeSystemInfo, RecordingInstallers


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def settings(tmp_path: Path, home_dir: Path) -> Settings:
    """Settings rooted in a temporary home, telemetry off."""
    return Settings(
        home_dir=home_dir,
        config_dir=tmp_path / "config",
        telemetry_config=TelemetryConfig(enabled=False)
    )


@pytest.fixture
def fake_info() -> FakeSystemInfo:
    return FakeSystemInfo()


@pytest.fixture
def small_registry() -> ToolRegistry:
    """zsh (critical), fzf, eza and a non-minimal carapace."""
    return ToolRegistry([
        Tool(id="zsh", name="Zsh", description="Shell", critical=True,
             category=ToolCategory.CORE, minimal=True),
        Tool(id="fzf", name="fzf", description="Fuzzy finder",
             category=ToolCategory.CLI, minimal=True),
        Tool(id="eza", name="eza", description="ls replacement",
             category=ToolCategory.CLI, minimal=True),
        Tool(id="carapace", name="Carapace", description="Completions",
             category=ToolCategory.CLI, minimal=False),
    ])


@pytest.fixture
def recorder() -> RecordingInstallers:
    return RecordingInstallers()


@pytest.fixture
def config_writer(tmp_path: Path, home_dir: Path) -> ConfigWriter:
    return ConfigWriter(
        home_dir=home_dir,
        backup_root=tmp_path / "backups",
        files=[".zshrc", ".tmux.conf"],
        templates={".zshrc": "# zsh\n", ".tmux.conf": "# tmux\n"}
    )
