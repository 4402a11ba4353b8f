"""
Tool registry - the static catalog of installable tools and their ordering.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..models.tool import Tool, ToolCategory, ToolPromptInfo
from ..models.errors import RegistryError, UnknownToolError


logger = logging.getLogger(__name__)


TOOLS: Tuple[Tool, ...] = (
    Tool(
        id="zsh",
        name="Zsh",
        description="Modern shell with better scripting and autocompletion",
        changes=("Installs zsh via package manager", "Sets zsh as default shell"),
        critical=True,
        category=ToolCategory.CORE,
        minimal=True,
    ),
    Tool(
        id="oh-my-zsh",
        name="Oh My Zsh",
        description="Framework for managing zsh configuration",
        changes=("Installs to ~/.oh-my-zsh", "Creates initial ~/.zshrc"),
        critical=True,
        category=ToolCategory.CORE,
        minimal=True,
        dependencies=("zsh",),
    ),
    Tool(
        id="antigen",
        name="Antigen",
        description="Plugin manager for zsh",
        changes=("Downloads to ~/antigen.zsh", "Enables plugin management"),
        critical=True,
        category=ToolCategory.CORE,
        minimal=True,
        dependencies=("zsh", "oh-my-zsh"),
    ),
    Tool(
        id="fonts",
        name="FiraCode Nerd Font",
        description="Programming font with ligatures and icons",
        changes=("Installs FiraCode Nerd Font", "Required for icons in terminal"),
        critical=False,
        category=ToolCategory.FONT,
        minimal=False,
    ),
    Tool(
        id="fzf",
        name="fzf",
        description="Fuzzy finder for files, history, and more",
        changes=("Installs fzf binary", "Enables Ctrl+R history search", "Adds key bindings"),
        critical=False,
        category=ToolCategory.CLI,
        minimal=True,
    ),
    Tool(
        id="eza",
        name="eza",
        description="Modern replacement for ls with icons and git status",
        changes=("Installs eza binary", "Adds lsx alias"),
        critical=False,
        category=ToolCategory.CLI,
        minimal=True,
    ),
    Tool(
        id="carapace",
        name="Carapace",
        description="Multi-shell completion generator",
        changes=("Installs carapace binary", "Enables completions for 300+ commands"),
        critical=False,
        category=ToolCategory.CLI,
        minimal=False,
    ),
    Tool(
        id="asdf",
        name="asdf",
        description="Version manager for multiple runtimes (Node, Python, etc)",
        changes=("Installs to ~/.asdf", "Adds shell integration"),
        critical=True,
        category=ToolCategory.MANAGER,
        minimal=True,
    ),
    Tool(
        id="nodejs",
        name="Node.js LTS",
        description="JavaScript runtime (latest LTS version)",
        changes=("Installs via asdf", "Sets as global default"),
        critical=False,
        category=ToolCategory.MANAGER,
        minimal=True,
        dependencies=("asdf",),
    ),
    Tool(
        id="tmux",
        name="tmux",
        description="Terminal multiplexer for split panes and sessions",
        changes=("Installs tmux via package manager", "Creates ~/.tmux.conf"),
        critical=False,
        category=ToolCategory.CLI,
        minimal=True,
    ),
    Tool(
        id="tpm",
        name="TPM (Tmux Plugin Manager)",
        description="Plugin manager for tmux",
        changes=("Installs to ~/.tmux/plugins/tpm", "Enables tmux plugins"),
        critical=False,
        category=ToolCategory.MANAGER,
        minimal=True,
        dependencies=("tmux",),
    ),
)

TOOL_ORDER: Tuple[str, ...] = (
    "zsh",
    "oh-my-zsh",
    "antigen",
    "fonts",
    "fzf",
    "eza",
    "carapace",
    "asdf",
    "nodejs",
    "tmux",
    "tpm",
)


def parse_tool_list(value: Optional[str]) -> List[str]:
    """Parse a comma-separated, case-insensitive tool list."""
    if not value:
        return []
    return [item.strip().lower() for item in value.split(',') if item.strip()]


class ToolRegistry:
    """Read-only view over a tool catalog and its canonical order."""

    def __init__(self, tools: Iterable[Tool], order: Optional[Sequence[str]] = None):
        """
        Initialize the registry.

        Args:
            tools: Catalog entries
            order: Canonical execution order; defaults to catalog order
        """
        self._tools: Dict[str, Tool] = {}
        for tool in tools:
            if tool.id in self._tools:
                raise RegistryError(f"Duplicate tool id: {tool.id}")
            self._tools[tool.id] = tool
        self._order: Tuple[str, ...] = tuple(order) if order is not None else tuple(self._tools)

    def __contains__(self, tool_id: str) -> bool:
        return tool_id in self._tools

    def __len__(self) -> int:
        return len(self._order)

    def lookup(self, tool_id: str) -> Tool:
        """Return the tool with this id or raise UnknownToolError."""
        try:
            return self._tools[tool_id]
        except KeyError:
            raise UnknownToolError([tool_id], self.all_ids(), label="Unknown tool") from None

    def get(self, tool_id: str) -> Optional[Tool]:
        return self._tools.get(tool_id)

    def all_ids(self) -> List[str]:
        """Canonical order as a new list on every call."""
        return list(self._order)

    def tools(self) -> List[Tool]:
        return [self._tools[tool_id] for tool_id in self._order]

    def prompt_info(self, tool_id: str) -> ToolPromptInfo:
        return self.lookup(tool_id).prompt_info()

    def find_id_by_name(self, name: str) -> Optional[str]:
        """First id in canonical order whose display name matches."""
        for tool_id in self._order:
            if self._tools[tool_id].name == name:
                return tool_id
        return None

    def validate_ids(self, tool_ids: Iterable[str]) -> Tuple[List[str], List[str]]:
        """Split ids into (valid, invalid), preserving input order."""
        valid: List[str] = []
        invalid: List[str] = []
        for tool_id in tool_ids:
            if tool_id in self._tools:
                valid.append(tool_id)
            else:
                invalid.append(tool_id)
        return valid, invalid

    def require_ids(self, tool_ids: Iterable[str], label: str = "Unknown tools") -> List[str]:
        """Return the ids unchanged, or raise UnknownToolError listing the bad ones."""
        valid, invalid = self.validate_ids(tool_ids)
        if invalid:
            raise UnknownToolError(invalid, self.all_ids(), label=label)
        return valid

    def dependency_closure(self, tool_ids: Iterable[str]) -> Set[str]:
        """
        Transitive closure of the given ids over their declared dependencies.

        Unknown ids are dropped. A visited set keeps this finite even if the
        catalog contains a cycle.
        """
        result: Set[str] = set()
        visited: Set[str] = set()

        def visit(tool_id: str) -> None:
            if tool_id in visited:
                return
            visited.add(tool_id)
            tool = self._tools.get(tool_id)
            if tool is None:
                return
            for dep in tool.dependencies:
                visit(dep)
            result.add(tool_id)

        for tool_id in tool_ids:
            visit(tool_id)
        return result

    def validate(self) -> None:
        """
        Check catalog invariants.

        Raises:
            RegistryError: if the order does not cover every tool exactly once,
                a dependency is missing, or a dependency comes after its dependent
        """
        if len(set(self._order)) != len(self._order):
            raise RegistryError("Tool order contains duplicate ids")

        missing = set(self._tools) - set(self._order)
        extra = set(self._order) - set(self._tools)
        if missing or extra:
            raise RegistryError(
                f"Tool order does not match catalog (missing: {sorted(missing)}, unknown: {sorted(extra)})"
            )

        position = {tool_id: index for index, tool_id in enumerate(self._order)}
        for tool_id in self._order:
            for dep in self._tools[tool_id].dependencies:
                if dep not in self._tools:
                    raise RegistryError(f"{tool_id} depends on unknown tool {dep}")
                # Precedence in a total order also rules out cycles
                if position[dep] >= position[tool_id]:
                    raise RegistryError(f"{tool_id} must come after its dependency {dep}")

        logger.debug(f"Registry validated: {len(self._order)} tools")


_default_registry: Optional[ToolRegistry] = None


def default_registry() -> ToolRegistry:
    """The built-in catalog, validated on first use."""
    global _default_registry
    if _default_registry is None:
        registry = ToolRegistry(TOOLS, TOOL_ORDER)
        registry.validate()
        _default_registry = registry
    return _default_registry
