"""
CLI commands: install, update, check, backup and restore.
"""

from .backup import backup, restore
from .check import CheckCommand
from .install import InstallCommand, InstallOptions
from .update import UpdateCommand

__all__ = [
    "backup",
    "restore",
    "CheckCommand",
    "InstallCommand",
    "InstallOptions",
    "UpdateCommand",
]
