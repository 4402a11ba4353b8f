"""
Check command - reports system requirements and installed tools.
"""

import logging
from typing import Dict, Optional, Sequence

from ..config.settings import Settings
from ..core.registry import ToolRegistry, default_registry
from ..installers import InstallContext, ToolHandlers, build_handlers
from ..utils import shell
from ..utils.logging import log_header
from ..utils.system import SystemInfo, system


REQUIRED_COMMANDS = ("git", "curl")


class CheckCommand:
    """Read-only report of what the installer would need and find."""

    def __init__(self,
                 settings: Settings,
                 registry: Optional[ToolRegistry] = None,
                 handlers: Optional[Dict[str, ToolHandlers]] = None,
                 info: SystemInfo = system,
                 required_commands: Sequence[str] = REQUIRED_COMMANDS):
        self.logger = logging.getLogger(__name__)
        self.settings = settings
        self.registry = registry or default_registry()
        self.info = info
        if handlers is None:
            handlers = build_handlers(InstallContext(home_dir=settings.home_dir, info=info))
        self.handlers = handlers
        self.required_commands = tuple(required_commands)

    def run(self) -> bool:
        """
        Log the report.

        Returns:
            False when the platform is unsupported or a required command is missing
        """
        ok = True
        log_header(self.logger, "🔍 System Check")

        self.logger.info(f"Platform: {self.info.current} ({self.info.arch})")
        self.logger.info(f"Shell: {self.info.shell}")
        self.logger.info(f"Package manager: {self.info.package_manager}")
        if not self.info.is_supported():
            self.logger.error("Unsupported platform: better-shell supports macOS and Linux only")
            ok = False
        elif self.info.package_manager == "unknown":
            self.logger.warning("No supported package manager found (brew, apt, dnf, pacman)")

        if shell.is_root():
            self.logger.warning("Running as root. This may cause permission issues.")

        log_header(self.logger, "Requirements")
        for command in self.required_commands:
            if shell.command_exists(command):
                self.logger.info(f"  ✓ {command}")
            else:
                self.logger.error(f"  ✗ {command} (required)")
                ok = False

        log_header(self.logger, "Tools")
        for tool in self.registry.tools():
            handler = self.handlers.get(tool.id)
            if handler is None:
                self.logger.info(f"  ? {tool.name}")
            elif handler.is_installed():
                self.logger.info(f"  ✓ {tool.name}")
            else:
                self.logger.info(f"  ✗ {tool.name} (not installed)")

        if ok:
            self.logger.info("System is ready for installation")
        return ok
