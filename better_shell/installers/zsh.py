"""
Zsh, Oh My Zsh and Antigen installers.
"""

import logging
import shutil
from functools import partial
from typing import Dict

from ..models.outcome import OutcomeStatus
from ..utils import shell
from .base import InstallContext, ToolHandlers, UpdateResult, git_pull, install_package, upgrade_package


logger = logging.getLogger(__name__)

OH_MY_ZSH_INSTALL_URL = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"
ANTIGEN_URL = "https://git.io/antigen"


def is_zsh_installed(ctx: InstallContext) -> bool:
    return shell.command_exists("zsh")


async def install_zsh(ctx: InstallContext) -> bool:
    if is_zsh_installed(ctx):
        logger.info("Zsh already installed")
        return True
    logger.info("Installing zsh...")
    return await install_package(ctx, "zsh")


async def set_zsh_as_default(ctx: InstallContext) -> bool:
    """Make zsh the login shell unless it already is."""
    zsh_path = shutil.which("zsh")
    if not zsh_path:
        logger.warning("zsh not found on PATH; default shell unchanged")
        return False
    if ctx.info.shell.endswith("/zsh"):
        logger.info("Zsh is already the default shell")
        return True

    logger.info(f"Setting {zsh_path} as default shell...")
    result = await shell.run(f"chsh -s {zsh_path}", env=ctx.env(), ignore_error=True)
    if not result.success:
        logger.warning(f"Could not change default shell; run manually: chsh -s {zsh_path}")
    return result.success


async def update_zsh(ctx: InstallContext) -> UpdateResult:
    result = await upgrade_package(ctx, "zsh")
    if not result.success and "already installed" not in result.stderr:
        return UpdateResult(status=OutcomeStatus.FAILED, message=result.stderr.strip() or None)
    return UpdateResult(status=OutcomeStatus.UPDATED)


def is_oh_my_zsh_installed(ctx: InstallContext) -> bool:
    return ctx.path(".oh-my-zsh", "oh-my-zsh.sh").exists()


async def install_oh_my_zsh(ctx: InstallContext) -> bool:
    if is_oh_my_zsh_installed(ctx):
        logger.info("Oh My Zsh already installed")
        return True
    logger.info("Installing Oh My Zsh...")
    result = await shell.run(
        f'sh -c "$(curl -fsSL {OH_MY_ZSH_INSTALL_URL})" "" --unattended',
        env=ctx.env({"RUNZSH": "no", "CHSH": "no", "KEEP_ZSHRC": "yes"})
    )
    return result.success


async def update_oh_my_zsh(ctx: InstallContext) -> UpdateResult:
    return await git_pull(ctx, ctx.path(".oh-my-zsh"))


def is_antigen_installed(ctx: InstallContext) -> bool:
    return ctx.path("antigen.zsh").exists()


async def install_antigen(ctx: InstallContext) -> bool:
    if is_antigen_installed(ctx):
        logger.info("Antigen already installed")
        return True
    logger.info("Downloading Antigen...")
    return await shell.download(ANTIGEN_URL, ctx.path("antigen.zsh"))


async def update_antigen(ctx: InstallContext) -> UpdateResult:
    if await shell.download(ANTIGEN_URL, ctx.path("antigen.zsh")):
        return UpdateResult(status=OutcomeStatus.UPDATED)
    return UpdateResult(status=OutcomeStatus.FAILED, message="Download failed")


def handlers(ctx: InstallContext) -> Dict[str, ToolHandlers]:
    return {
        "zsh": ToolHandlers(
            install=partial(install_zsh, ctx),
            update=partial(update_zsh, ctx),
            is_installed=partial(is_zsh_installed, ctx),
        ),
        "oh-my-zsh": ToolHandlers(
            install=partial(install_oh_my_zsh, ctx),
            update=partial(update_oh_my_zsh, ctx),
            is_installed=partial(is_oh_my_zsh_installed, ctx),
        ),
        "antigen": ToolHandlers(
            install=partial(install_antigen, ctx),
            update=partial(update_antigen, ctx),
            is_installed=partial(is_antigen_installed, ctx),
        ),
    }
