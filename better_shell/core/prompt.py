"""
Interactive per-tool prompting: [Y]es / [N]o / [A]ll / [Q]uit.
"""

import asyncio
import logging
import sys
from enum import Enum
from typing import Awaitable, Callable, List, Optional, TextIO

from ..models.errors import UserCancelled
from ..models.tool import ToolPromptInfo
from ..utils.logging import Colors


logger = logging.getLogger(__name__)

CTRL_C = "\x03"


class PromptChoice(str, Enum):
    """Answer to a single install prompt."""
    YES = "yes"
    NO = "no"
    ALL = "all"
    QUIT = "quit"


KEY_CHOICES = {
    "y": PromptChoice.YES,
    "\r": PromptChoice.YES,
    "\n": PromptChoice.YES,
    "n": PromptChoice.NO,
    "a": PromptChoice.ALL,
    "q": PromptChoice.QUIT,
    CTRL_C: PromptChoice.QUIT,
}


def is_tty() -> bool:
    """True when both stdin and stdout are attached to a terminal."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def read_keypress() -> str:
    """Block until a single key is pressed and return it lowercased."""
    if sys.platform == "win32":
        import msvcrt
        return msvcrt.getwch().lower()

    import termios
    import tty

    fd = sys.stdin.fileno()
    previous = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        key = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, previous)
    return key.lower()


def render_prompt(tool: ToolPromptInfo, out: TextIO = sys.stdout) -> None:
    """Print the tool card and the question line."""
    c = Colors
    out.write("\n")
    out.write(f"{c.BRIGHT}{c.CYAN}┌─ {tool.name}{c.RESET}\n")
    out.write(f"{c.DIM}│{c.RESET} {tool.description}\n")

    if tool.changes:
        out.write(f"{c.DIM}│{c.RESET}\n")
        out.write(f"{c.DIM}│{c.RESET} {c.YELLOW}Changes:{c.RESET}\n")
        for change in tool.changes:
            out.write(f"{c.DIM}│{c.RESET}   • {change}\n")

    if tool.critical:
        out.write(f"{c.DIM}│{c.RESET}\n")
        out.write(f"{c.DIM}│{c.RESET} {c.RED}⚠ Required for installation{c.RESET}\n")

    out.write(f"{c.DIM}└─{c.RESET}\n\n")
    out.write(
        f"{c.CYAN}?{c.RESET} Install {tool.name}? "
        f"[{c.GREEN}Y{c.RESET}]es / "
        f"[{c.RED}N{c.RESET}]o / "
        f"[{c.BLUE}A{c.RESET}]ll / "
        f"[{c.YELLOW}Q{c.RESET}]uit: "
    )
    out.flush()


async def prompt_install(tool: ToolPromptInfo,
                         reader: Callable[[], str] = read_keypress,
                         out: TextIO = sys.stdout,
                         interactive: Optional[bool] = None) -> PromptChoice:
    """
    Ask whether to install a tool.

    Without a terminal this answers yes immediately so piped installs keep
    working. Unrecognised keys are ignored.

    Args:
        tool: Prompt payload
        reader: Blocking single-key reader
        out: Stream the prompt is written to
        interactive: Override TTY detection

    Returns:
        The user's choice
    """
    if interactive is None:
        interactive = is_tty()
    if not interactive:
        return PromptChoice.YES

    render_prompt(tool, out)

    while True:
        key = await asyncio.to_thread(reader)
        choice = KEY_CHOICES.get(key)
        if choice is None:
            continue
        out.write(f"{choice.value.capitalize()}\n")
        out.flush()
        return choice


PromptFn = Callable[[ToolPromptInfo], Awaitable[PromptChoice]]


class InteractiveInstaller:
    """
    Per-run prompt state machine.

    Once the user answers "all", every later prompt in the same run is
    answered yes without asking, critical tools included.
    """

    def __init__(self, prompt: Optional[PromptFn] = None):
        self._prompt: PromptFn = prompt or prompt_install
        self._install_all = False
        self._skipped: List[str] = []

    @property
    def install_all(self) -> bool:
        return self._install_all

    @property
    def skipped_tools(self) -> List[str]:
        """Display names of declined tools, as a copy."""
        return list(self._skipped)

    async def should_install(self, tool: ToolPromptInfo) -> bool:
        """
        Decide whether a tool should be installed.

        Raises:
            UserCancelled: if the user chose quit
        """
        if self._install_all:
            logger.info(f"Installing {tool.name}...")
            return True

        choice = await self._prompt(tool)

        if choice == PromptChoice.YES:
            return True
        if choice == PromptChoice.NO:
            self._skipped.append(tool.name)
            logger.info(f"Skipping {tool.name}")
            return False
        if choice == PromptChoice.ALL:
            self._install_all = True
            return True
        raise UserCancelled()
