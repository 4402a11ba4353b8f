"""
FiraCode Nerd Font installer.
"""

import logging
from functools import partial
from typing import Dict

from ..models.outcome import OutcomeStatus
from ..utils import shell
from .base import InstallContext, ToolHandlers, UpdateResult


logger = logging.getLogger(__name__)

FIRA_CODE_URL = "https://github.com/ryanoasis/nerd-fonts/releases/latest/download/FiraCode.zip"
BREW_CASK = "font-fira-code-nerd-font"


def font_dir(ctx: InstallContext):
    if ctx.info.is_mac():
        return ctx.path("Library", "Fonts")
    return ctx.path(".local", "share", "fonts")


def is_fira_code_installed(ctx: InstallContext) -> bool:
    directory = font_dir(ctx)
    return directory.is_dir() and any(directory.glob("FiraCode*Nerd*"))


async def install_fira_code(ctx: InstallContext) -> bool:
    if is_fira_code_installed(ctx):
        logger.info("FiraCode Nerd Font already installed")
        return True

    logger.info("Installing FiraCode Nerd Font...")
    if ctx.info.is_mac():
        result = await shell.run(f"brew install --cask {BREW_CASK}", env=ctx.env())
        return result.success

    directory = font_dir(ctx)
    archive = directory / "FiraCode.zip"
    if not await shell.download(FIRA_CODE_URL, archive):
        return False
    ok = await shell.run_many(
        [
            f"unzip -o -q '{archive}' -d '{directory}'",
            f"rm -f '{archive}'",
        ],
        env=ctx.env()
    )
    if ok and shell.command_exists("fc-cache"):
        await shell.run(f"fc-cache -f '{directory}'", ignore_error=True)
    return ok


async def update_fonts(ctx: InstallContext) -> UpdateResult:
    logger.info("Fonts should be updated via system package manager")
    return UpdateResult(status=OutcomeStatus.SKIPPED, message="Update via system package manager")


def handlers(ctx: InstallContext) -> Dict[str, ToolHandlers]:
    return {
        "fonts": ToolHandlers(
            install=partial(install_fira_code, ctx),
            update=partial(update_fonts, ctx),
            is_installed=partial(is_fira_code_installed, ctx),
        ),
    }
