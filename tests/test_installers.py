"""Tests for installer registration and shared installer plumbing."""

import pytest

from better_shell.core.registry import default_registry
from better_shell.installers import InstallContext, build_handlers, validate_handlers
from better_shell.installers import base
from better_shell.models.errors import InstallerRegistrationError
from better_shell.models.outcome import OutcomeStatus
from better_shell.utils.shell import ShellResult
from better_shell.utils.system import parse_os_release

from tests.helpers import FakeSystemInfo


@pytest.fixture
def ctx(home_dir):
    return InstallContext(home_dir=home_dir, info=FakeSystemInfo())


def test_every_catalog_tool_has_handlers(ctx):
    handlers = build_handlers(ctx)
    validate_handlers(default_registry(), handlers)
    assert set(handlers) == set(default_registry().all_ids())


def test_validate_handlers_lists_missing_ids():
    with pytest.raises(InstallerRegistrationError) as exc_info:
        validate_handlers(default_registry(), ["zsh", "fzf"])
    assert "oh-my-zsh" in exc_info.value.missing
    assert "zsh" not in exc_info.value.missing


def test_validate_handlers_for_subset():
    validate_handlers(default_registry(), ["fzf"], tool_ids=["fzf"])


def test_context_env_points_home(ctx, home_dir):
    env = ctx.env({"EXTRA": "1"})
    assert env["HOME"] == str(home_dir)
    assert env["EXTRA"] == "1"
    assert ctx.path(".oh-my-zsh") == home_dir / ".oh-my-zsh"


@pytest.mark.asyncio
async def test_install_package_uses_detected_manager(ctx, monkeypatch):
    commands = []

    async def fake_run(command, **kwargs):
        commands.append(command)
        return ShellResult(success=True, exit_code=0)

    monkeypatch.setattr(base.shell, "run", fake_run)
    assert await base.install_package(ctx, "tmux")
    assert commands == ["sudo apt-get update && sudo apt-get install -y tmux"]


@pytest.mark.asyncio
async def test_install_package_without_manager(home_dir):
    ctx = InstallContext(home_dir=home_dir, info=FakeSystemInfo(package_manager="unknown"))
    assert await base.install_package(ctx, "tmux") is False


@pytest.mark.asyncio
async def test_git_clone_skips_existing_target(ctx, monkeypatch):
    async def fake_run(command, **kwargs):
        raise AssertionError("should not clone")

    monkeypatch.setattr(base.shell, "run", fake_run)
    target = ctx.path(".fzf")
    target.mkdir()
    assert await base.git_clone(ctx, "https://example.com/repo.git", target)


@pytest.mark.asyncio
async def test_git_pull_failure(ctx, monkeypatch):
    async def fake_run(command, **kwargs):
        return ShellResult(success=False, exit_code=1, stderr="not a git repository\n")

    monkeypatch.setattr(base.shell, "run", fake_run)
    result = await base.git_pull(ctx, ctx.path(".asdf"))
    assert result.status == OutcomeStatus.FAILED
    assert result.message == "not a git repository"


@pytest.mark.parametrize("content,expected", [
    ('NAME="Ubuntu"\nPRETTY_NAME="Ubuntu 22.04.3 LTS"\n', "Ubuntu 22.04.3 LTS"),
    ('ID=fedora\nVERSION_ID=39\n', "fedora 39"),
    ('ID="arch"\n', "arch"),
    ("", "unknown"),
])
def test_parse_os_release(content, expected):
    assert parse_os_release(content) == expected
