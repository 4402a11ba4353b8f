"""
Update command - updates tools that are already installed.
"""

import logging
from typing import Dict, Optional

from ..config.settings import Settings
from ..core.registry import ToolRegistry, default_registry, parse_tool_list
from ..installers import InstallContext, ToolHandlers, build_handlers
from ..models.errors import UnknownToolError
from ..models.outcome import OutcomeStatus, RunSummary, ToolOutcome
from ..models.tool import Tool
from ..utils.logging import log_header
from ..utils.system import SystemInfo, system
from .summary import log_run_summary


class UpdateCommand:
    """Updates installed tools one by one; no dependency expansion."""

    def __init__(self,
                 settings: Settings,
                 registry: Optional[ToolRegistry] = None,
                 handlers: Optional[Dict[str, ToolHandlers]] = None,
                 info: SystemInfo = system):
        self.logger = logging.getLogger(__name__)
        self.settings = settings
        self.registry = registry or default_registry()
        self.info = info
        if handlers is None:
            handlers = build_handlers(InstallContext(home_dir=settings.home_dir, info=info))
        self.handlers = handlers
        self.summary = RunSummary()

    async def run(self, tools: Optional[str] = None, dry_run: bool = False) -> bool:
        """
        Update the requested tools (default: all).

        Returns:
            False if any tool failed to update or an id was unknown
        """
        log_header(self.logger, "🔄 Updating Tools")
        if dry_run:
            self.logger.warning("DRY RUN MODE - No changes will be made")
        self.logger.info(f"Platform: {self.info.current} ({self.info.arch})")

        tool_ids = self.registry.all_ids()
        requested = parse_tool_list(tools)
        if requested:
            try:
                tool_ids = self.registry.require_ids(requested)
            except UnknownToolError as e:
                self.logger.error(str(e))
                self.logger.info(f"Available tools: {e.available}")
                return False

        for tool_id in tool_ids:
            self.summary.add(await self.update_tool(self.registry.lookup(tool_id), dry_run))

        log_header(self.logger, "Summary")
        log_run_summary(self.logger, self.summary)
        return not self.summary.by_status(OutcomeStatus.FAILED)

    async def update_tool(self, tool: Tool, dry_run: bool) -> ToolOutcome:
        handler = self.handlers.get(tool.id)
        if handler is None:
            return self._outcome(tool, OutcomeStatus.SKIPPED, "No update mechanism")

        if not handler.is_installed():
            return self._outcome(tool, OutcomeStatus.NOT_INSTALLED, "Not installed")

        if dry_run:
            self.logger.info(f"  Would update: {tool.name}")
            return self._outcome(tool, OutcomeStatus.UPDATED, "would update")

        self.logger.info(f"Updating {tool.name}...")
        try:
            result = await handler.update()
        except Exception as e:
            self.logger.error(f"Updating {tool.name} raised: {e}", exc_info=True)
            return self._outcome(tool, OutcomeStatus.FAILED, str(e))

        if result.status == OutcomeStatus.UPDATED:
            self.logger.info(f"{tool.name} updated")
        return self._outcome(tool, result.status, result.message)

    def _outcome(self, tool: Tool, status: OutcomeStatus, message: Optional[str]) -> ToolOutcome:
        return ToolOutcome(tool_id=tool.id, tool_name=tool.name, status=status, message=message)
