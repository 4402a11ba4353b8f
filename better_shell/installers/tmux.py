"""
tmux and TPM installers.
"""

import logging
from functools import partial
from typing import Dict

from ..models.outcome import OutcomeStatus
from ..utils import shell
from .base import InstallContext, ToolHandlers, UpdateResult, git_clone, git_pull, install_package, upgrade_package


logger = logging.getLogger(__name__)

TPM_REPO = "https://github.com/tmux-plugins/tpm"


def is_tmux_installed(ctx: InstallContext) -> bool:
    return shell.command_exists("tmux")


async def install_tmux(ctx: InstallContext) -> bool:
    if is_tmux_installed(ctx):
        logger.info("tmux already installed")
        return True
    logger.info("Installing tmux...")
    return await install_package(ctx, "tmux")


async def update_tmux(ctx: InstallContext) -> UpdateResult:
    result = await upgrade_package(ctx, "tmux")
    if not result.success and not ctx.info.is_mac():
        return UpdateResult(status=OutcomeStatus.FAILED, message=result.stderr.strip() or None)
    return UpdateResult(status=OutcomeStatus.UPDATED)


def is_tpm_installed(ctx: InstallContext) -> bool:
    return ctx.path(".tmux", "plugins", "tpm", "tpm").exists()


async def install_tpm(ctx: InstallContext) -> bool:
    if is_tpm_installed(ctx):
        logger.info("TPM already installed")
        return True
    logger.info("Installing TPM...")
    return await git_clone(ctx, TPM_REPO, ctx.path(".tmux", "plugins", "tpm"), depth=None)


async def update_tpm(ctx: InstallContext) -> UpdateResult:
    return await git_pull(ctx, ctx.path(".tmux", "plugins", "tpm"), command="git pull")


def handlers(ctx: InstallContext) -> Dict[str, ToolHandlers]:
    return {
        "tmux": ToolHandlers(
            install=partial(install_tmux, ctx),
            update=partial(update_tmux, ctx),
            is_installed=partial(is_tmux_installed, ctx),
        ),
        "tpm": ToolHandlers(
            install=partial(install_tpm, ctx),
            update=partial(update_tpm, ctx),
            is_installed=partial(is_tpm_installed, ctx),
        ),
    }
