"""
Backup and restore commands.
"""

import logging
from pathlib import Path
from typing import Optional

from ..config.settings import Settings
from ..configs.writer import ConfigWriter
from ..models.errors import CollaboratorFailure
from ..utils.logging import log_header


logger = logging.getLogger(__name__)


def make_writer(settings: Settings) -> ConfigWriter:
    return ConfigWriter(
        home_dir=settings.home_dir,
        backup_root=settings.backup_dir,
        files=settings.backup.files
    )


def backup(settings: Settings, destination: Optional[str] = None,
           writer: Optional[ConfigWriter] = None) -> bool:
    """Back up the current dotfiles, optionally under a custom root."""
    writer = writer or make_writer(settings)
    log_header(logger, "💾 Backup")
    result = writer.backup(Path(destination) if destination else None)
    if not result.success:
        logger.error(f"Backup failed: {result.error}")
        return False
    logger.info(f"Backed up {len(result.files)} file(s) to {result.path}")
    return True


def restore(settings: Settings, backup_path: Optional[str],
            writer: Optional[ConfigWriter] = None) -> bool:
    """Restore dotfiles from a backup directory."""
    writer = writer or make_writer(settings)
    if not backup_path:
        logger.error("Backup path is required")
        logger.info("Usage: better-shell restore <backup-path>")
        return False

    log_header(logger, "♻️  Restore")
    try:
        restored = writer.restore(Path(backup_path))
    except CollaboratorFailure as e:
        logger.error(str(e))
        available = writer.list_backups()
        if available:
            logger.info("Available backups:")
            for path in available[:5]:
                logger.info(f"  {path}")
        return False

    logger.info(f"Restored {len(restored)} file(s). Restart your terminal to apply them.")
    return True
