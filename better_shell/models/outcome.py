"""
Per-tool outcome and run result models.
"""

from enum import Enum
from typing import Optional, Dict, List
from pydantic import BaseModel, Field


class OutcomeStatus(str, Enum):
    """Status recorded for a single tool during a run."""
    INSTALLED = "installed"
    SKIPPED = "skipped"
    FAILED = "failed"
    NOT_INSTALLED = "not-installed"
    WOULD_INSTALL = "would-install"
    UPDATED = "updated"


class RunState(str, Enum):
    """Lifecycle of a single driver run."""
    NOT_STARTED = "not-started"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED_CRITICAL = "aborted-critical"
    CANCELLED = "cancelled"


class ToolOutcome(BaseModel):
    """Result of processing one tool."""
    tool_id: str = Field(..., description="Tool identifier")
    tool_name: str = Field(..., description="Tool display name")
    status: OutcomeStatus = Field(..., description="Outcome status")
    duration_ms: Optional[int] = Field(None, description="Installer wall time in milliseconds")
    message: Optional[str] = Field(None, description="Extra detail, e.g. the failure reason")

    class Config:
        json_schema_extra = {
            "example": {
                "tool_id": "fzf",
                "tool_name": "fzf",
                "status": "installed",
                "duration_ms": 5230
            }
        }


class RunSummary(BaseModel):
    """Outcomes of a run, bucketed by status."""
    outcomes: List[ToolOutcome] = Field(default_factory=list)

    def add(self, outcome: ToolOutcome) -> None:
        self.outcomes.append(outcome)

    def has_outcome(self, tool_id: str) -> bool:
        return any(o.tool_id == tool_id for o in self.outcomes)

    def by_status(self, status: OutcomeStatus) -> List[ToolOutcome]:
        return [o for o in self.outcomes if o.status == status]

    def names(self, status: OutcomeStatus) -> List[str]:
        """Display names of the tools in a status bucket, in run order."""
        return [o.tool_name for o in self.by_status(status)]

    def ids(self, status: OutcomeStatus) -> List[str]:
        return [o.tool_id for o in self.by_status(status)]

    def counts(self) -> Dict[str, int]:
        """Count of outcomes per status; statuses with no outcomes are zero."""
        counts = {status.value: 0 for status in OutcomeStatus}
        for outcome in self.outcomes:
            counts[outcome.status.value] += 1
        return counts

    @property
    def installed(self) -> List[str]:
        return self.names(OutcomeStatus.INSTALLED)

    @property
    def skipped(self) -> List[str]:
        return self.names(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> List[str]:
        return self.names(OutcomeStatus.FAILED)


class RunResult(BaseModel):
    """
    Terminal result of a driver run.

    Exactly one of completed, aborted-critical or cancelled. The summary holds
    whatever was processed before the run ended.
    """
    state: RunState = Field(..., description="Terminal state of the run")
    summary: RunSummary = Field(default_factory=RunSummary)
    tool_id: Optional[str] = Field(None, description="Critical tool that ended the run")
    declined: bool = Field(default=False, description="Critical tool was declined rather than failed")
    message: Optional[str] = Field(None, description="Reason the run ended early")

    @property
    def ok(self) -> bool:
        return self.state == RunState.COMPLETED

    @property
    def aborted(self) -> bool:
        return self.state == RunState.ABORTED_CRITICAL

    @property
    def cancelled(self) -> bool:
        return self.state == RunState.CANCELLED

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class ProgressEvent(BaseModel):
    """Emitted by the driver after each tool is processed."""
    index: int = Field(..., description="1-based position of the tool in the run")
    total: int = Field(..., description="Number of tools in the run")
    outcome: ToolOutcome

    @property
    def label(self) -> str:
        status = self.outcome.status.value.replace("-", " ").capitalize()
        return f"{status} {self.outcome.tool_name}"
