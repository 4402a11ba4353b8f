"""
asdf and Node.js (via asdf) installers.
"""

import logging
import re
from functools import partial
from typing import Dict

from ..models.errors import NonCriticalToolFailure
from ..models.outcome import OutcomeStatus
from ..utils import shell
from .base import InstallContext, ToolHandlers, UpdateResult, git_pull


logger = logging.getLogger(__name__)

ASDF_REPO = "https://github.com/asdf-vm/asdf.git"
ASDF_BRANCH = "v0.14.1"


def asdf_env(ctx: InstallContext) -> Dict[str, str]:
    """Environment that makes asdf usable without a login shell."""
    asdf_dir = str(ctx.path(".asdf"))
    env = ctx.env({"ASDF_DIR": asdf_dir, "ASDF_DATA_DIR": asdf_dir})
    env["PATH"] = f"{asdf_dir}/bin:{asdf_dir}/shims:{env.get('PATH', '')}"
    return env


def is_asdf_installed(ctx: InstallContext) -> bool:
    return ctx.path(".asdf", "asdf.sh").exists()


async def install_asdf(ctx: InstallContext) -> bool:
    if is_asdf_installed(ctx):
        logger.info("asdf already installed")
        return True
    logger.info("Installing asdf...")
    result = await shell.run(
        f"git clone {ASDF_REPO} '{ctx.path('.asdf')}' --branch {ASDF_BRANCH}",
        env=ctx.env()
    )
    return result.success


async def update_asdf(ctx: InstallContext) -> UpdateResult:
    return await git_pull(
        ctx, ctx.path(".asdf"),
        command="git fetch --tags && git checkout $(git describe --abbrev=0 --tags)"
    )


def is_node_installed(ctx: InstallContext) -> bool:
    return shell.command_exists("node") or ctx.path(".asdf", "shims", "node").exists()


async def install_node_with_asdf(ctx: InstallContext) -> bool:
    if is_node_installed(ctx):
        logger.info("Node.js already installed")
        return True
    if not is_asdf_installed(ctx):
        raise NonCriticalToolFailure("asdf is required to install Node.js")
    logger.info("Installing Node.js LTS via asdf...")
    return await shell.run_many(
        [
            "asdf plugin add nodejs || true",
            "asdf install nodejs latest:lts",
            "asdf global nodejs latest:lts",
        ],
        env=asdf_env(ctx)
    )


async def update_node(ctx: InstallContext) -> UpdateResult:
    env = asdf_env(ctx)
    current = await shell.run("asdf current nodejs", env=env, ignore_error=True)
    match = re.search(r"(\d+\.\d+\.\d+)", current.stdout)
    if match:
        logger.info(f"Current: v{match.group(1)}")

    result = await shell.run("asdf install nodejs latest:lts && asdf global nodejs latest:lts", env=env)
    if result.success:
        return UpdateResult(status=OutcomeStatus.UPDATED)
    return UpdateResult(status=OutcomeStatus.FAILED, message=result.stderr.strip() or None)


def handlers(ctx: InstallContext) -> Dict[str, ToolHandlers]:
    return {
        "asdf": ToolHandlers(
            install=partial(install_asdf, ctx),
            update=partial(update_asdf, ctx),
            is_installed=partial(is_asdf_installed, ctx),
        ),
        "nodejs": ToolHandlers(
            install=partial(install_node_with_asdf, ctx),
            update=partial(update_node, ctx),
            is_installed=partial(is_node_installed, ctx),
        ),
    }
