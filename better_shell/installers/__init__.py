"""
Per-tool installers, registered once at startup.
"""

from typing import Dict, Iterable, Optional

from ..core.registry import ToolRegistry
from ..models.errors import InstallerRegistrationError
from . import cli_tools, fonts, runtimes, tmux, zsh
from .base import InstallContext, ToolHandlers, UpdateResult
from .zsh import set_zsh_as_default

MODULES = (zsh, fonts, cli_tools, runtimes, tmux)


def build_handlers(ctx: InstallContext) -> Dict[str, ToolHandlers]:
    """Handlers for every built-in tool, keyed by tool id."""
    registered: Dict[str, ToolHandlers] = {}
    for module in MODULES:
        for tool_id, handler in module.handlers(ctx).items():
            if tool_id in registered:
                raise InstallerRegistrationError([tool_id])
            registered[tool_id] = handler
    return registered


def validate_handlers(registry: ToolRegistry, registered: Iterable[str],
                      tool_ids: Optional[Iterable[str]] = None) -> None:
    """
    Check that every catalog id (or every id in tool_ids) has a handler.

    Raises:
        InstallerRegistrationError: listing the ids without one
    """
    available = set(registered)
    required = registry.all_ids() if tool_ids is None else list(tool_ids)
    missing = [tool_id for tool_id in required if tool_id not in available]
    if missing:
        raise InstallerRegistrationError(missing)


__all__ = [
    "InstallContext",
    "ToolHandlers",
    "UpdateResult",
    "build_handlers",
    "validate_handlers",
    "set_zsh_as_default",
]
