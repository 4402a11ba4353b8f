"""
Configuration settings for the better-shell installer.
"""

from typing import Optional, List
from pathlib import Path
from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings


DEFAULT_TELEMETRY_ENDPOINT = "https://shell.ocodista.com/api/telemetry"
STATS_URL = "https://shell.ocodista.com/stats"


class TelemetryConfig(BaseModel):
    """Anonymous usage statistics configuration."""
    endpoint: str = Field(default=DEFAULT_TELEMETRY_ENDPOINT, description="Telemetry collection URL")
    enabled: bool = Field(default=True, description="Send anonymous usage statistics")
    timeout_seconds: float = Field(default=5.0, description="HTTP timeout for the telemetry post")
    flush_wait_seconds: float = Field(default=2.0, description="How long the CLI waits for a pending post on exit")
    notice_marker: str = Field(default=".telemetry-notice-shown", description="Marker file in the config dir")

    @validator('endpoint')
    def validate_endpoint_scheme(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Telemetry endpoint must be an http(s) URL: {v}")
        return v


class BackupConfig(BaseModel):
    """Dotfile backup configuration."""
    base_path: Optional[Path] = Field(None, description="Backup root (default: ~/.better-shell-backups)")
    files: List[str] = Field(
        default_factory=lambda: [".zshrc", ".tmux.conf", ".bashrc", ".bash_profile", ".zprofile"],
        description="Dotfiles, relative to the home directory, that are backed up"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Console logging level")
    file_path: Optional[Path] = Field(None, description="Log file (default: <config_dir>/logs/better-shell.log)")
    max_file_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, description="Number of log backups to keep")

    @validator('level')
    def validate_level(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Unsupported log level: {v}")
        return level


class Settings(BaseSettings):
    """Main application settings."""
    telemetry_config: TelemetryConfig = Field(default_factory=TelemetryConfig)
    backup: BackupConfig = Field(default_factory=BackupConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    home_dir: Path = Field(default_factory=Path.home, description="Home directory that configs are written to")
    config_dir: Optional[Path] = Field(None, description="State directory (default: ~/.config/better-shell)")

    class Config:
        env_prefix = "BETTER_SHELL_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"
        extra = "ignore"  # Ignore extra fields from environment

    @property
    def state_dir(self) -> Path:
        return self.config_dir or self.home_dir / ".config" / "better-shell"

    @property
    def backup_dir(self) -> Path:
        return self.backup.base_path or self.home_dir / ".better-shell-backups"

    @property
    def log_file(self) -> Path:
        return self.logging.file_path or self.state_dir / "logs" / "better-shell.log"

    @property
    def telemetry_notice_file(self) -> Path:
        return self.state_dir / self.telemetry_config.notice_marker
