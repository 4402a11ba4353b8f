"""
Data models for the better-shell installer.
"""

from .tool import Tool, ToolCategory, ToolPromptInfo
from .outcome import OutcomeStatus, ProgressEvent, RunResult, RunState, RunSummary, ToolOutcome
from .errors import (
    CollaboratorFailure,
    CriticalToolFailure,
    InstallerRegistrationError,
    NonCriticalToolFailure,
    RegistryError,
    UnknownToolError,
    UserCancelled,
)

__all__ = [
    "Tool",
    "ToolCategory",
    "ToolPromptInfo",
    "OutcomeStatus",
    "ProgressEvent",
    "RunResult",
    "RunState",
    "RunSummary",
    "ToolOutcome",
    "CollaboratorFailure",
    "CriticalToolFailure",
    "InstallerRegistrationError",
    "NonCriticalToolFailure",
    "RegistryError",
    "UnknownToolError",
    "UserCancelled",
]
