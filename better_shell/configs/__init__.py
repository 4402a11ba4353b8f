"""
Shell configuration files: templates, backup and restore.
"""

from .writer import BackupResult, ConfigWriter

__all__ = ["BackupResult", "ConfigWriter"]
