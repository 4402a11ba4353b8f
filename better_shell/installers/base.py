"""
Shared plumbing for the per-tool installers.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional

from ..models.outcome import OutcomeStatus
from ..utils import shell
from ..utils.shell import ShellResult
from ..utils.system import SystemInfo, system


logger = logging.getLogger(__name__)

# Package manager -> (install, upgrade) command templates
PACKAGE_COMMANDS = {
    "brew": ("brew install {pkg}", "brew upgrade {pkg}"),
    "apt": ("sudo apt-get update && sudo apt-get install -y {pkg}", "sudo apt-get update && sudo apt-get install -y --only-upgrade {pkg}"),
    "dnf": ("sudo dnf install -y {pkg}", "sudo dnf upgrade -y {pkg}"),
    "pacman": ("sudo pacman -S --noconfirm --needed {pkg}", "sudo pacman -Syu --noconfirm {pkg}"),
}


@dataclass
class InstallContext:
    """Everything an installer needs to know about the target machine."""
    home_dir: Path
    info: SystemInfo = field(default_factory=lambda: system)

    def path(self, *parts: str) -> Path:
        return self.home_dir.joinpath(*parts)

    def env(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        env = dict(os.environ)
        env["HOME"] = str(self.home_dir)
        if extra:
            env.update(extra)
        return env


@dataclass
class ToolHandlers:
    """Install, update and presence check for one tool."""
    install: Callable[[], Awaitable[bool]]
    update: Callable[[], Awaitable["UpdateResult"]]
    is_installed: Callable[[], bool]


@dataclass
class UpdateResult:
    """Outcome of updating one tool."""
    status: OutcomeStatus
    message: Optional[str] = None


async def install_package(ctx: InstallContext, package: str) -> bool:
    """Install a package with the detected package manager."""
    manager = ctx.info.package_manager
    commands = PACKAGE_COMMANDS.get(manager)
    if commands is None:
        logger.error(f"No supported package manager found to install {package}")
        return False
    result = await shell.run(commands[0].format(pkg=package), env=ctx.env())
    return result.success


async def upgrade_package(ctx: InstallContext, package: str) -> ShellResult:
    manager = ctx.info.package_manager
    commands = PACKAGE_COMMANDS.get(manager)
    if commands is None:
        return ShellResult(success=False, exit_code=1, stderr=f"Unsupported package manager: {manager}")
    return await shell.run(commands[1].format(pkg=package), env=ctx.env(), ignore_error=True)


async def git_clone(ctx: InstallContext, url: str, target: Path, depth: Optional[int] = 1) -> bool:
    """Clone a repository unless the target already exists."""
    if target.exists():
        logger.info(f"{target} already exists, skipping clone")
        return True
    depth_flag = f" --depth {depth}" if depth else ""
    result = await shell.run(f"git clone{depth_flag} {url} '{target}'", env=ctx.env())
    return result.success


async def git_pull(ctx: InstallContext, repo: Path, command: str = "git pull --rebase") -> UpdateResult:
    result = await shell.run(command, cwd=repo, env=ctx.env())
    if result.success:
        return UpdateResult(status=OutcomeStatus.UPDATED)
    return UpdateResult(status=OutcomeStatus.FAILED, message=result.stderr.strip() or None)
