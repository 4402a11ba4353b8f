"""
Backup, restore and generation of shell configuration files.
"""

import hashlib
import json
import logging
import shutil
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models.errors import CollaboratorFailure
from .templates import CONFIG_FILES


MANIFEST_NAME = "manifest.json"
TIMESTAMP_FORMAT = "%Y-%m-%d-%H%M%S"


@dataclass
class BackupResult:
    """Result of a backup."""
    success: bool
    path: Optional[Path] = None
    files: List[str] = field(default_factory=list)
    error: Optional[str] = None


def sha256_file(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


class ConfigWriter:
    """Manages the dotfiles the installer touches."""

    def __init__(self,
                 home_dir: Path,
                 backup_root: Path,
                 files: Sequence[str],
                 templates: Optional[Mapping[str, str]] = None):
        """
        Initialize config writer.

        Args:
            home_dir: Directory the dotfiles live in
            backup_root: Directory timestamped backups are created under
            files: Dotfile names (relative to home_dir) included in backups
            templates: Dotfile name to generated content
        """
        self.logger = logging.getLogger(__name__)
        self.home_dir = Path(home_dir)
        self.backup_root = Path(backup_root)
        self.files = list(files)
        self.templates = dict(templates if templates is not None else CONFIG_FILES)

    def backup(self, destination: Optional[Path] = None) -> BackupResult:
        """
        Copy existing dotfiles into a new timestamped directory.

        A manifest with sha256 checksums is written next to the copies. Having
        nothing to back up is still a success.

        Args:
            destination: Backup root to use instead of the configured one

        Returns:
            BackupResult describing the new backup
        """
        root = Path(destination).expanduser() if destination else self.backup_root
        timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        backup_dir = root / timestamp
        suffix = 1
        while backup_dir.exists():
            backup_dir = root / f"{timestamp}-{suffix}"
            suffix += 1

        try:
            backup_dir.mkdir(parents=True)
            entries: Dict[str, Dict[str, Any]] = {}
            for name in self.files:
                source = self.home_dir / name
                if not source.is_file():
                    continue
                target = backup_dir / name
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, target)
                entries[name] = {"sha256": sha256_file(target), "size": target.stat().st_size}
                self.logger.info(f"Backed up {source}")

            self._save_manifest(backup_dir, {
                "created_at": datetime.now(timezone.utc).isoformat(),
                "home_dir": str(self.home_dir),
                "files": entries
            })
        except OSError as e:
            self.logger.error(f"Backup failed: {e}")
            return BackupResult(success=False, path=backup_dir, error=str(e))

        if entries:
            self.logger.info(f"Backup saved to {backup_dir}")
        else:
            self.logger.info(f"No existing configuration files found; empty backup at {backup_dir}")
        return BackupResult(success=True, path=backup_dir, files=sorted(entries))

    def restore(self, backup_path: Path) -> List[str]:
        """
        Restore dotfiles from a backup directory.

        Every file is checked against the manifest before anything is copied.

        Returns:
            Names of restored files

        Raises:
            CollaboratorFailure: if the backup is missing, has no manifest, or
                a checksum does not match
        """
        backup_dir = Path(backup_path).expanduser()
        manifest_path = backup_dir / MANIFEST_NAME
        if not backup_dir.is_dir():
            raise CollaboratorFailure("Restore", f"backup not found: {backup_dir}")
        if not manifest_path.is_file():
            raise CollaboratorFailure("Restore", f"no {MANIFEST_NAME} in {backup_dir}")

        try:
            manifest = json.loads(manifest_path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise CollaboratorFailure("Restore", f"unreadable manifest: {e}") from e

        files: Dict[str, Dict[str, Any]] = manifest.get("files", {})
        for name, entry in files.items():
            source = backup_dir / name
            if not source.is_file():
                raise CollaboratorFailure("Restore", f"missing file in backup: {name}")
            if sha256_file(source) != entry.get("sha256"):
                raise CollaboratorFailure("Restore", f"checksum mismatch for {name}")

        restored = []
        try:
            for name in files:
                target = self.home_dir / name
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(backup_dir / name, target)
                restored.append(name)
                self.logger.info(f"Restored {target}")
        except OSError as e:
            raise CollaboratorFailure("Restore", str(e)) from e

        return restored

    def write_configs(self) -> bool:
        """Write every template into the home directory."""
        for name, content in self.templates.items():
            target = self.home_dir / name
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content)
            except OSError as e:
                self.logger.error(f"Failed to write {target}: {e}")
                return False
            self.logger.info(f"Wrote {target}")
        return True

    def list_backups(self) -> List[Path]:
        """Backup directories under the backup root, newest first."""
        if not self.backup_root.is_dir():
            return []
        backups = [p for p in self.backup_root.iterdir() if (p / MANIFEST_NAME).is_file()]
        return sorted(backups, reverse=True)

    def _save_manifest(self, backup_dir: Path, data: Dict[str, Any]) -> Path:
        manifest_path = backup_dir / MANIFEST_NAME
        with open(manifest_path, 'w') as f:
            json.dump(data, f, indent=2, default=str)
        return manifest_path
