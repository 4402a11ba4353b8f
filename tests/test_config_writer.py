"""Tests for backup, restore and config generation."""

import json
from datetime import datetime

import pytest

from better_shell.configs.templates import CONFIG_FILES
from better_shell.configs.writer import MANIFEST_NAME, ConfigWriter
from better_shell.models.errors import CollaboratorFailure


def test_backup_copies_existing_files_with_manifest(config_writer, home_dir):
    (home_dir / ".zshrc").write_text("export A=1\n")

    result = config_writer.backup()

    assert result.success
    assert result.files == [".zshrc"]
    assert (result.path / ".zshrc").read_text() == "export A=1\n"
    manifest = json.loads((result.path / MANIFEST_NAME).read_text())
    assert datetime.fromisoformat(manifest["created_at"]).tzinfo is not None
    assert set(manifest["files"]) == {".zshrc"}
    assert len(manifest["files"][".zshrc"]["sha256"]) == 64


def test_backup_with_nothing_to_copy_succeeds(config_writer):
    result = config_writer.backup()
    assert result.success
    assert result.files == []


def test_backups_do_not_collide(config_writer):
    first = config_writer.backup()
    second = config_writer.backup()
    assert first.path != second.path
    assert len(config_writer.list_backups()) == 2


def test_backup_to_custom_destination(config_writer, home_dir, tmp_path):
    (home_dir / ".tmux.conf").write_text("set -g mouse on\n")
    result = config_writer.backup(tmp_path / "elsewhere")
    assert result.path.parent == tmp_path / "elsewhere"


def test_backup_failure_is_reported(config_writer, tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("not a directory")
    result = config_writer.backup(blocker)
    assert not result.success
    assert result.error


def test_restore_round_trip(config_writer, home_dir):
    (home_dir / ".zshrc").write_text("original\n")
    backup = config_writer.backup()
    (home_dir / ".zshrc").write_text("overwritten\n")

    restored = config_writer.restore(backup.path)

    assert restored == [".zshrc"]
    assert (home_dir / ".zshrc").read_text() == "original\n"


def test_restore_rejects_tampered_backup(config_writer, home_dir):
    (home_dir / ".zshrc").write_text("original\n")
    backup = config_writer.backup()
    (backup.path / ".zshrc").write_text("tampered\n")
    (home_dir / ".zshrc").write_text("current\n")

    with pytest.raises(CollaboratorFailure, match="checksum mismatch"):
        config_writer.restore(backup.path)
    assert (home_dir / ".zshrc").read_text() == "current\n"


def test_restore_missing_backup(config_writer, tmp_path):
    with pytest.raises(CollaboratorFailure, match="backup not found"):
        config_writer.restore(tmp_path / "nope")


def test_restore_without_manifest(config_writer, tmp_path):
    (tmp_path / "bare").mkdir()
    with pytest.raises(CollaboratorFailure, match="no manifest.json"):
        config_writer.restore(tmp_path / "bare")


def test_write_configs(config_writer, home_dir):
    assert config_writer.write_configs()
    assert (home_dir / ".zshrc").read_text() == "# zsh\n"
    assert (home_dir / ".tmux.conf").read_text() == "# tmux\n"


def test_default_templates(home_dir, tmp_path):
    writer = ConfigWriter(home_dir=home_dir, backup_root=tmp_path / "b", files=[])
    assert writer.write_configs()
    for name in CONFIG_FILES:
        assert (home_dir / name).read_text() == CONFIG_FILES[name]
    assert "antigen" in (home_dir / ".zshrc").read_text()
