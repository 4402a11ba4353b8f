"""
Execution driver - runs the selected installers one at a time in canonical order.
"""

import inspect
import logging
import time
from typing import Awaitable, Callable, Dict, Optional, Sequence, Union

from ..models.errors import UserCancelled
from ..models.outcome import (
    OutcomeStatus,
    ProgressEvent,
    RunResult,
    RunState,
    RunSummary,
    ToolOutcome,
)
from ..models.tool import Tool
from .prompt import InteractiveInstaller
from .registry import ToolRegistry


InstallFn = Callable[[], Union[bool, Awaitable[bool]]]
ProgressObserver = Callable[[ProgressEvent], None]

NO_INSTALLER_MESSAGE = "no installer available"
DRY_RUN_MESSAGE = "would install"


class ExecutionDriver:
    """
    Drives a single installation run.

    Tools are processed sequentially. A failed or declined critical tool ends
    the run; anything else is recorded and the run moves on. The driver
    returns a RunResult instead of raising for these cases.
    """

    def __init__(self,
                 registry: ToolRegistry,
                 telemetry=None,
                 on_progress: Optional[ProgressObserver] = None):
        """
        Initialize the driver.

        Args:
            registry: Tool registry used for lookups and name resolution
            telemetry: Optional collector with a record_tool method
            on_progress: Called with a ProgressEvent after each outcome
        """
        self.logger = logging.getLogger(__name__)
        self.registry = registry
        self.telemetry = telemetry
        self.on_progress = on_progress
        self.state = RunState.NOT_STARTED
        self.summary = RunSummary()
        self._total = 0

    async def run(self,
                  tool_ids: Sequence[str],
                  installers: Dict[str, InstallFn],
                  interactive: Optional[InteractiveInstaller] = None,
                  dry_run: bool = False) -> RunResult:
        """
        Process each tool id in order.

        Args:
            tool_ids: Ordered selection, usually from select_tools
            installers: Installer callback per tool id
            interactive: Prompt controller, or None to install without asking
            dry_run: Record what would happen without calling any installer

        Returns:
            RunResult in state completed, aborted-critical or cancelled
        """
        if self.state != RunState.NOT_STARTED:
            raise RuntimeError(f"Driver already used (state: {self.state.value})")

        self.registry.require_ids(tool_ids)
        self.state = RunState.RUNNING
        self._total = len(tool_ids)
        self.logger.debug(f"Starting run over {self._total} tools (dry_run={dry_run})")

        try:
            for index, tool_id in enumerate(tool_ids, start=1):
                tool = self.registry.lookup(tool_id)

                if dry_run:
                    self.logger.info(f"Would install {tool.name}")
                    self._record(index, tool, OutcomeStatus.WOULD_INSTALL, message=DRY_RUN_MESSAGE)
                    continue

                if interactive is not None:
                    if not await interactive.should_install(tool.prompt_info()):
                        if tool.critical:
                            self.logger.error(f"{tool.name} is required. Aborting installation.")
                            return self._finish(
                                interactive, RunState.ABORTED_CRITICAL,
                                tool_id=tool.id, declined=True,
                                message=f"{tool.name} is required and was declined"
                            )
                        self._record(index, tool, OutcomeStatus.SKIPPED, message="declined")
                        continue

                installer = installers.get(tool_id)
                if installer is None:
                    self.logger.warning(f"No installer found for {tool.name}, skipping...")
                    self._record(index, tool, OutcomeStatus.SKIPPED, message=NO_INSTALLER_MESSAGE)
                    continue

                success, duration_ms, error = await self._invoke(tool, installer)

                if success:
                    self._record(index, tool, OutcomeStatus.INSTALLED, duration_ms=duration_ms)
                    continue

                self._record(index, tool, OutcomeStatus.FAILED, duration_ms=duration_ms, message=error)
                if tool.critical:
                    self.logger.error(f"Failed to install {tool.name}. Aborting.")
                    return self._finish(
                        interactive, RunState.ABORTED_CRITICAL,
                        tool_id=tool.id,
                        message=error or f"{tool.name} failed to install"
                    )
                self.logger.warning(f"Failed to install {tool.name}, continuing...")

        except UserCancelled as e:
            self.logger.warning("Installation cancelled by user.")
            return self._finish(interactive, RunState.CANCELLED, message=str(e))

        return self._finish(interactive, RunState.COMPLETED)

    async def _invoke(self, tool: Tool, installer: InstallFn):
        """Call an installer, converting any exception into a failure."""
        start = time.monotonic()
        error: Optional[str] = None
        try:
            result = installer()
            if inspect.isawaitable(result):
                result = await result
            success = bool(result)
        except UserCancelled:
            raise
        except Exception as e:
            self.logger.error(f"Installer for {tool.id} raised: {e}", exc_info=True)
            success = False
            error = str(e) or e.__class__.__name__
        duration_ms = int((time.monotonic() - start) * 1000)
        return success, duration_ms, error

    def _record(self, index: int, tool: Tool, status: OutcomeStatus,
                duration_ms: Optional[int] = None, message: Optional[str] = None) -> ToolOutcome:
        outcome = ToolOutcome(
            tool_id=tool.id,
            tool_name=tool.name,
            status=status,
            duration_ms=duration_ms,
            message=message
        )
        self.summary.add(outcome)

        if self.telemetry is not None:
            error = message if status == OutcomeStatus.FAILED else None
            self.telemetry.record_tool(tool.id, status, duration_ms, error)

        if self.on_progress is not None:
            self.on_progress(ProgressEvent(index=index, total=self._total, outcome=outcome))
        return outcome

    def _merge_interactive_skips(self, interactive: Optional[InteractiveInstaller]) -> None:
        """
        Reconcile the controller's skip list (display names) with the summary.

        Names resolve to the first id with that name in canonical order; ids
        that already have an outcome are left alone.
        """
        if interactive is None:
            return
        for name in interactive.skipped_tools:
            tool_id = self.registry.find_id_by_name(name)
            if tool_id is None:
                self.logger.debug(f"Skipped tool {name!r} does not match any registry entry")
                continue
            if self.summary.has_outcome(tool_id):
                continue
            tool = self.registry.lookup(tool_id)
            self._record(len(self.summary.outcomes) + 1, tool, OutcomeStatus.SKIPPED, message="declined")

    def _finish(self, interactive: Optional[InteractiveInstaller], state: RunState,
                tool_id: Optional[str] = None, declined: bool = False,
                message: Optional[str] = None) -> RunResult:
        self._merge_interactive_skips(interactive)
        self.state = state
        self.logger.debug(f"Run finished: {state.value} {self.summary.counts()}")
        return RunResult(
            state=state,
            summary=self.summary,
            tool_id=tool_id,
            declined=declined,
            message=message
        )
