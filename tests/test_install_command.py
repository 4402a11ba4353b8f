"""End-to-end tests for the install command with fake installers."""

import logging

import pytest

from better_shell.commands.install import InstallCommand, InstallOptions
from better_shell.config.settings import Settings, TelemetryConfig
from better_shell.configs.writer import BackupResult
from better_shell.core.prompt import PromptChoice
from better_shell.core.registry import default_registry
from better_shell.models.outcome import OutcomeStatus, RunState

from tests.helpers import FakeTelemetry, RecordingInstallers

ALL = ["zsh", "fzf", "eza", "carapace"]


class BrokenBackupWriter:
    def __init__(self, writer):
        self.writer = writer

    def backup(self, destination=None):
        return BackupResult(success=False, error="disk full")

    def write_configs(self):
        return self.writer.write_configs()


class BrokenConfigWriter:
    def __init__(self, writer):
        self.writer = writer

    def backup(self, destination=None):
        return self.writer.backup(destination)

    def write_configs(self):
        return False


@pytest.fixture
def shell_calls():
    return []


@pytest.fixture
def make_command(settings, small_registry, config_writer, fake_info, shell_calls):
    def factory(recorder=None, telemetry=None, writer=None, prompt=None, tty=False):
        async def set_default_shell():
            shell_calls.append("zsh")
            return True

        recorder = recorder or RecordingInstallers()
        command = InstallCommand(
            settings,
            registry=small_registry,
            installers=recorder.for_ids(ALL),
            config_writer=writer or config_writer,
            telemetry=telemetry if telemetry is not None else FakeTelemetry(),
            prompt=prompt,
            tty=tty,
            set_default_shell=set_default_shell,
            info=fake_info
        )
        command.recorder = recorder
        return command
    return factory


@pytest.mark.asyncio
async def test_successful_install(make_command, home_dir, tmp_path, shell_calls):
    command = make_command()
    ok = await command.run(InstallOptions(tools="fzf,eza"))

    assert ok is True
    assert command.recorder.calls == ["fzf", "eza"]
    assert command.result.state == RunState.COMPLETED
    assert (home_dir / ".zshrc").read_text() == "# zsh\n"
    assert len(list((tmp_path / "backups").iterdir())) == 1
    assert command.telemetry.sent == ["completed"]
    assert shell_calls == []


@pytest.mark.asyncio
async def test_zsh_selection_sets_default_shell(make_command, shell_calls):
    command = make_command()
    assert await command.run(InstallOptions())
    assert command.recorder.calls == ALL
    assert shell_calls == ["zsh"]


@pytest.mark.asyncio
async def test_minimal_install(make_command):
    command = make_command()
    assert await command.run(InstallOptions(minimal=True))
    assert command.recorder.calls == ["zsh", "fzf", "eza"]


@pytest.mark.asyncio
async def test_skip_backup(make_command, tmp_path):
    command = make_command()
    assert await command.run(InstallOptions(tools="fzf", skip_backup=True))
    assert not (tmp_path / "backups").exists()


@pytest.mark.asyncio
async def test_unknown_tool_fails_before_anything_runs(make_command, tmp_path, caplog):
    command = make_command()
    ok = await command.run(InstallOptions(tools="fzf,vim"))

    assert ok is False
    assert command.recorder.calls == []
    assert not (tmp_path / "backups").exists()
    assert command.telemetry.sent == []
    assert "Unknown tools: vim" in caplog.text


@pytest.mark.asyncio
async def test_unknown_exclude_fails(make_command, caplog):
    command = make_command()
    assert await command.run(InstallOptions(exclude="vim")) is False
    assert "Unknown tools to exclude: vim" in caplog.text


@pytest.mark.asyncio
async def test_empty_selection_fails(make_command):
    command = make_command()
    assert await command.run(InstallOptions(tools="fzf", exclude="fzf")) is False
    assert command.recorder.calls == []


@pytest.mark.asyncio
async def test_critical_failure_aborts(make_command, home_dir, caplog):
    command = make_command(recorder=RecordingInstallers({"zsh": False}))
    ok = await command.run(InstallOptions())

    assert ok is False
    assert command.recorder.calls == ["zsh"]
    assert command.result.state == RunState.ABORTED_CRITICAL
    assert not (home_dir / ".zshrc").exists()
    assert command.telemetry.sent == ["failed"]
    assert "Failed to install Zsh. Aborting." in caplog.text


@pytest.mark.asyncio
async def test_non_critical_failure_still_succeeds(make_command):
    command = make_command(recorder=RecordingInstallers({"fzf": False}))
    assert await command.run(InstallOptions())
    assert command.result.summary.failed == ["fzf"]
    assert command.telemetry.sent == ["completed"]


@pytest.mark.asyncio
async def test_backup_failure_aborts_before_tools(make_command, config_writer, caplog):
    command = make_command(writer=BrokenBackupWriter(config_writer))
    ok = await command.run(InstallOptions())

    assert ok is False
    assert command.recorder.calls == []
    assert command.telemetry.sent == ["failed"]
    assert "Backup failed: disk full" in caplog.text


@pytest.mark.asyncio
async def test_config_write_failure(make_command, config_writer, caplog):
    caplog.set_level(logging.INFO)
    command = make_command(writer=BrokenConfigWriter(config_writer))
    assert await command.run(InstallOptions(tools="fzf,eza")) is False
    assert command.recorder.calls == ["fzf", "eza"]
    assert "Writing configuration files failed" in caplog.text
    assert "Installed: fzf, eza" in caplog.text
    assert command.telemetry.sent == ["failed"]


@pytest.mark.asyncio
async def test_dry_run_changes_nothing(make_command, home_dir, tmp_path):
    command = make_command()
    assert await command.run(InstallOptions(dry_run=True))

    assert command.recorder.calls == []
    assert not (tmp_path / "backups").exists()
    assert not (home_dir / ".zshrc").exists()
    assert command.result.summary.ids(OutcomeStatus.WOULD_INSTALL) == ALL
    assert command.telemetry.sent == []


@pytest.mark.asyncio
async def test_dry_run_disables_telemetry(tmp_path, home_dir, small_registry, config_writer, fake_info, monkeypatch):
    monkeypatch.delenv("BETTER_SHELL_TELEMETRY", raising=False)
    settings = Settings(
        home_dir=home_dir,
        config_dir=tmp_path / "config",
        telemetry_config=TelemetryConfig(enabled=True)
    )
    command = InstallCommand(
        settings,
        registry=small_registry,
        installers=RecordingInstallers().for_ids(ALL),
        config_writer=config_writer,
        tty=False,
        info=fake_info
    )
    assert await command.run(InstallOptions(dry_run=True))
    assert command.telemetry.enabled is False
    assert not settings.telemetry_notice_file.exists()


@pytest.mark.asyncio
async def test_no_telemetry_flag(settings, small_registry, config_writer, fake_info):
    command = InstallCommand(
        settings,
        registry=small_registry,
        installers=RecordingInstallers().for_ids(ALL),
        config_writer=config_writer,
        tty=False,
        info=fake_info
    )
    assert await command.run(InstallOptions(tools="fzf", no_telemetry=True))
    assert command.telemetry.enabled is False


@pytest.mark.asyncio
async def test_telemetry_notice_shown_once(make_command, settings, caplog):
    caplog.set_level(logging.INFO)
    await make_command().run(InstallOptions(tools="fzf", dry_run=True))
    assert "Anonymous usage statistics" in caplog.text
    assert settings.telemetry_notice_file.exists()
    caplog.clear()
    await make_command().run(InstallOptions(tools="fzf", dry_run=True))
    assert "Anonymous usage statistics" not in caplog.text


@pytest.mark.asyncio
async def test_interactive_without_tty_installs_everything(make_command, caplog):
    async def prompt(tool):
        raise AssertionError("should not prompt without a terminal")

    command = make_command(prompt=prompt, tty=False)
    assert await command.run(InstallOptions(interactive=True))
    assert command.recorder.calls == ALL
    assert "Interactive mode disabled" in caplog.text


@pytest.mark.asyncio
async def test_interactive_quit_cancels(make_command, home_dir):
    async def prompt(tool):
        return PromptChoice.QUIT if tool.name == "eza" else PromptChoice.YES

    command = make_command(prompt=prompt, tty=True)
    ok = await command.run(InstallOptions(interactive=True))

    assert ok is False
    assert command.recorder.calls == ["zsh", "fzf"]
    assert command.result.state == RunState.CANCELLED
    assert command.telemetry.sent == ["cancelled"]
    assert not (home_dir / ".zshrc").exists()


@pytest.mark.asyncio
async def test_interactive_decline_critical(make_command, caplog):
    async def prompt(tool):
        return PromptChoice.NO

    command = make_command(prompt=prompt, tty=True)
    assert await command.run(InstallOptions(interactive=True)) is False
    assert command.recorder.calls == []
    assert "Zsh is required. Aborting installation." in caplog.text
    assert command.telemetry.sent == ["failed"]


def test_default_installers_cover_catalog(settings, fake_info):
    command = InstallCommand(settings, info=fake_info)
    assert set(command.installers) == set(default_registry().all_ids())
