"""
Core orchestration: tool registry, selection, prompting and execution.
"""

from .registry import TOOLS, TOOL_ORDER, ToolRegistry, default_registry, parse_tool_list
from .selection import SelectionRequest, select_tools
from .prompt import InteractiveInstaller, PromptChoice
from .driver import ExecutionDriver

__all__ = [
    "TOOLS",
    "TOOL_ORDER",
    "ToolRegistry",
    "default_registry",
    "parse_tool_list",
    "SelectionRequest",
    "select_tools",
    "InteractiveInstaller",
    "PromptChoice",
    "ExecutionDriver",
]
