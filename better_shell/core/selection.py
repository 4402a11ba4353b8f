"""
Selection of the tools to operate on from --tools / --minimal / --exclude.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from .registry import ToolRegistry


class SelectionRequest(BaseModel):
    """What the user asked for on the command line."""
    tools: Optional[List[str]] = Field(None, description="Explicit tool ids")
    exclude: Optional[List[str]] = Field(None, description="Tool ids to leave out")
    minimal: bool = Field(default=False, description="Only essential tools")

    class Config:
        frozen = True


def select_tools(request: SelectionRequest, registry: ToolRegistry) -> List[str]:
    """
    Compute the ordered list of tool ids to operate on.

    An explicit list is expanded to its dependency closure. The minimal filter
    and then the exclude list are applied to that. Exclusion is not
    dependency-aware: excluding a dependency leaves its dependents selected.

    Args:
        request: Selection request
        registry: Tool registry

    Returns:
        Subsequence of the registry's canonical order, possibly empty
    """
    tool_ids = registry.all_ids()

    if request.tools:
        requested = {t.lower() for t in request.tools}
        with_deps = registry.dependency_closure(t for t in tool_ids if t in requested)
        tool_ids = [t for t in tool_ids if t in with_deps]

    if request.minimal:
        tool_ids = [t for t in tool_ids if registry.lookup(t).minimal]

    if request.exclude:
        excluded = {t.lower() for t in request.exclude}
        tool_ids = [t for t in tool_ids if t not in excluded]

    return tool_ids
