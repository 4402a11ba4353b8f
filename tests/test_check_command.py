"""Tests for the check command."""

from better_shell.commands.check import CheckCommand
from better_shell.installers import ToolHandlers

from tests.helpers import FakeSystemInfo


def handlers_for(installed):
    async def noop():
        return True

    return {
        tool_id: ToolHandlers(install=noop, update=noop, is_installed=lambda t=tool_id: t in installed)
        for tool_id in ("zsh", "fzf")
    }


def test_ready_system(settings, small_registry, fake_info, caplog):
    command = CheckCommand(settings, small_registry, handlers_for({"zsh"}), fake_info, required_commands=("sh",))
    assert command.run() is True


def test_missing_required_command(settings, small_registry, fake_info, caplog):
    command = CheckCommand(
        settings, small_registry, handlers_for(set()), fake_info,
        required_commands=("sh", "definitely-not-a-real-command-xyz")
    )
    assert command.run() is False
    assert "definitely-not-a-real-command-xyz (required)" in caplog.text


def test_unsupported_platform(settings, small_registry, caplog):
    info = FakeSystemInfo(current="windows", package_manager="unknown")
    command = CheckCommand(settings, small_registry, handlers_for(set()), info, required_commands=())
    assert command.run() is False
    assert "Unsupported platform" in caplog.text
