"""
Install command - backs up configs, installs the selected tools and writes configs.
"""

import logging
from functools import partial
from typing import Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from ..config.settings import STATS_URL, Settings
from ..configs.writer import ConfigWriter
from ..core.driver import ExecutionDriver, InstallFn
from ..core.prompt import InteractiveInstaller, PromptFn, is_tty
from ..core.registry import ToolRegistry, default_registry, parse_tool_list
from ..core.selection import SelectionRequest, select_tools
from ..installers import InstallContext, build_handlers, set_zsh_as_default, validate_handlers
from ..models.errors import CollaboratorFailure, CriticalToolFailure, UnknownToolError, UserCancelled
from ..models.outcome import RunResult
from ..telemetry.client import (
    TelemetryCollector,
    has_seen_telemetry_notice,
    is_telemetry_disabled_by_env,
    mark_telemetry_notice_shown,
)
from ..utils import shell
from ..utils.logging import log_header
from ..utils.progress import ProgressBar
from ..utils.system import SystemInfo, system
from .backup import make_writer
from .summary import log_run_summary


NEXT_STEPS = (
    "1. Restart your terminal or run: exec zsh",
    '2. Open tmux and run "prefix + I" to install tmux plugins',
    "3. Verify Node.js installation: node --version",
    "4. Configure your terminal to use FiraCode Nerd Font",
)


class InstallOptions(BaseModel):
    """Options of the install command."""
    skip_backup: bool = Field(default=False, description="Skip configuration backup")
    dry_run: bool = Field(default=False, description="Preview without making changes")
    interactive: bool = Field(default=False, description="Ask before each tool")
    minimal: bool = Field(default=False, description="Install only essentials")
    tools: Optional[str] = Field(None, description="Comma-separated tool ids to install")
    exclude: Optional[str] = Field(None, description="Comma-separated tool ids to skip")
    no_telemetry: bool = Field(default=False, description="Disable anonymous usage statistics")


class InstallCommand:
    """Runs a full installation."""

    def __init__(self,
                 settings: Settings,
                 registry: Optional[ToolRegistry] = None,
                 installers: Optional[Dict[str, InstallFn]] = None,
                 config_writer: Optional[ConfigWriter] = None,
                 telemetry: Optional[TelemetryCollector] = None,
                 prompt: Optional[PromptFn] = None,
                 tty: Optional[bool] = None,
                 set_default_shell: Optional[Callable[[], Awaitable[bool]]] = None,
                 info: SystemInfo = system):
        """
        Initialize the install command.

        Args:
            settings: Application settings
            registry: Tool registry (default: built-in catalog)
            installers: Installer per tool id (default: built-in installers,
                validated against the registry)
            config_writer: Backup/config collaborator
            telemetry: Telemetry collector; built from the options when None
            prompt: Prompt function for interactive mode
            tty: Override terminal detection
            set_default_shell: Called after configs are written when zsh was selected
            info: Host system information
        """
        self.logger = logging.getLogger(__name__)
        self.settings = settings
        self.registry = registry or default_registry()
        self.info = info

        ctx = InstallContext(home_dir=settings.home_dir, info=info)
        if installers is None:
            handlers = build_handlers(ctx)
            validate_handlers(self.registry, handlers)
            installers = {tool_id: h.install for tool_id, h in handlers.items()}
        self.installers = installers

        self.config_writer = config_writer or make_writer(settings)
        self.telemetry = telemetry
        self.prompt = prompt
        self.tty = tty
        self.set_default_shell = set_default_shell or partial(set_zsh_as_default, ctx)
        self.result: Optional[RunResult] = None

    async def run(self, options: InstallOptions) -> bool:
        """
        Execute the installation.

        Returns:
            True on success; False on invalid input, a collaborator failure,
            a critical tool failure or user cancellation
        """
        log_header(self.logger, "🚀 Better Shell Installation")
        telemetry = self._init_telemetry(options)

        try:
            return await self._execute(options, telemetry)
        except UnknownToolError as e:
            self.logger.error(str(e))
            self.logger.info(f"Available tools: {e.available}")
            return False
        except CollaboratorFailure as e:
            self.logger.error(f"{e}. Aborting installation.")
            self._log_partial_summary()
            telemetry.send("failed")
            return False
        except CriticalToolFailure as e:
            self.logger.error(str(e))
            self._log_partial_summary()
            telemetry.send("failed")
            return False
        except UserCancelled:
            self.logger.warning("Installation cancelled by user.")
            self._log_partial_summary()
            telemetry.send("cancelled")
            return False

    def _init_telemetry(self, options: InstallOptions) -> TelemetryCollector:
        config = self.settings.telemetry_config
        enabled = (
            config.enabled
            and not options.no_telemetry
            and not is_telemetry_disabled_by_env()
            and not options.dry_run
        )
        if self.telemetry is None:
            self.telemetry = TelemetryCollector(
                enabled=enabled,
                interactive=options.interactive,
                minimal=options.minimal,
                endpoint=config.endpoint,
                timeout_seconds=config.timeout_seconds,
                info=self.info
            )
        self.telemetry.init()

        marker = self.settings.telemetry_notice_file
        if self.telemetry.enabled and not has_seen_telemetry_notice(marker):
            self.logger.info("📊 Anonymous usage statistics help improve better-shell.")
            self.logger.info("   No personal data is collected. Use --no-telemetry to opt out.")
            self.logger.info(f"   View stats at: {STATS_URL}")
            mark_telemetry_notice_shown(marker)
        return self.telemetry

    def _select(self, options: InstallOptions) -> List[str]:
        tools = parse_tool_list(options.tools)
        exclude = parse_tool_list(options.exclude)
        if tools:
            self.registry.require_ids(tools, label="Unknown tools")
        if exclude:
            self.registry.require_ids(exclude, label="Unknown tools to exclude")

        return select_tools(SelectionRequest(
            tools=tools or None,
            exclude=exclude or None,
            minimal=options.minimal
        ), self.registry)

    async def _execute(self, options: InstallOptions, telemetry: TelemetryCollector) -> bool:
        tty = is_tty() if self.tty is None else self.tty

        if options.dry_run:
            self.logger.warning("DRY RUN MODE - No changes will be made")
        if options.interactive and not tty:
            self.logger.warning("Interactive mode disabled (not a TTY)")
        if shell.is_root():
            self.logger.warning("Running as root. This may cause permission issues.")
            self.logger.info("Consider running without sudo/root privileges.")

        self.logger.info(f"Platform: {self.info.current} ({self.info.arch})")
        self.logger.info(f"Home: {self.settings.home_dir}")

        selected = self._select(options)
        if not selected:
            self.logger.error("No tools selected for installation")
            return False

        names = [self.registry.lookup(tool_id).name for tool_id in selected]
        self.logger.info(f"Tools to install: {', '.join(names)}")

        if options.dry_run:
            return await self._dry_run(options, selected)

        if not options.skip_backup:
            log_header(self.logger, "Step 1: Backup")
            backup = self.config_writer.backup()
            if not backup.success:
                raise CollaboratorFailure("Backup", backup.error)

        controller = InteractiveInstaller(self.prompt) if options.interactive and tty else None
        progress = ProgressBar(total=len(selected)) if controller else None

        log_header(self.logger, "Installing Tools")
        driver = ExecutionDriver(
            self.registry,
            telemetry=telemetry,
            on_progress=progress.handle if progress else None
        )
        self.result = await driver.run(selected, self.installers, interactive=controller)
        if progress:
            progress.finish()

        if self.result.cancelled:
            raise UserCancelled(self.result.message or "Installation cancelled by user")
        if self.result.aborted:
            tool = self.registry.lookup(self.result.tool_id)
            raise CriticalToolFailure(tool.id, tool.name, declined=self.result.declined)

        log_header(self.logger, "Writing Configuration Files")
        if not self.config_writer.write_configs():
            raise CollaboratorFailure("Writing configuration files")

        if "zsh" in selected:
            log_header(self.logger, "Finalizing Installation")
            await self.set_default_shell()

        log_header(self.logger, "✨ Installation Complete!")
        self.logger.info("Your terminal is now supercharged!")
        log_run_summary(self.logger, self.result.summary)
        self.logger.info("Next steps:")
        for step in NEXT_STEPS:
            self.logger.info(f"  {step}")

        telemetry.send("completed")
        return True

    async def _dry_run(self, options: InstallOptions, selected: List[str]) -> bool:
        self.logger.info("Installation steps that would be performed:")
        steps = []
        if not options.skip_backup:
            steps.append("Backup existing configurations")
        steps.extend(f"Install {self.registry.lookup(tool_id).name}" for tool_id in selected)
        steps.append("Write configuration files")
        if "zsh" in selected:
            steps.append("Set zsh as default shell")
        for number, step in enumerate(steps, start=1):
            self.logger.info(f"  {number}. {step}")

        driver = ExecutionDriver(self.registry)
        self.result = await driver.run(selected, self.installers, dry_run=True)
        log_run_summary(self.logger, self.result.summary)
        self.logger.info("Run without --dry-run to perform installation")
        return True

    def _log_partial_summary(self) -> None:
        if self.result is not None and self.result.summary.outcomes:
            log_run_summary(self.logger, self.result.summary)
