"""
Error types raised by the installer core.
"""

from typing import Iterable, List, Optional


class RegistryError(Exception):
    """The tool catalog violates one of its invariants."""


class InstallerRegistrationError(Exception):
    """Catalog ids and registered installers do not line up."""

    def __init__(self, missing: Iterable[str]):
        self.missing: List[str] = list(missing)
        super().__init__(f"No installer registered for: {', '.join(self.missing)}")


class UnknownToolError(ValueError):
    """One or more requested tool ids are not in the registry."""

    def __init__(self, invalid: Iterable[str], valid: Iterable[str] = (), label: str = "Unknown tools"):
        self.invalid: List[str] = list(invalid)
        self.valid: List[str] = list(valid)
        self.label = label
        super().__init__(f"{label}: {', '.join(self.invalid)}")

    @property
    def available(self) -> str:
        return ", ".join(self.valid)


class CriticalToolFailure(Exception):
    """A critical tool failed to install or was declined."""

    def __init__(self, tool_id: str, tool_name: Optional[str] = None, declined: bool = False):
        self.tool_id = tool_id
        self.tool_name = tool_name or tool_id
        self.declined = declined
        if declined:
            message = f"{self.tool_name} is required. Aborting installation."
        else:
            message = f"Failed to install {self.tool_name}. Aborting."
        super().__init__(message)


class UserCancelled(Exception):
    """The user quit during interactive prompting."""

    def __init__(self, message: str = "Installation cancelled by user"):
        super().__init__(message)


class NonCriticalToolFailure(Exception):
    """
    Raised by an installer to fail with a message.

    The driver records it against the tool; it only ends the run when the
    tool is critical.
    """


class CollaboratorFailure(Exception):
    """Backup or config writing failed; names the phase that broke."""

    def __init__(self, phase: str, detail: Optional[str] = None):
        self.phase = phase
        self.detail = detail
        message = f"{phase} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
