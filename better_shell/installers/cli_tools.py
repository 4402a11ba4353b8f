"""
fzf, eza and carapace installers.
"""

import logging
from functools import partial
from typing import Dict

from ..models.outcome import OutcomeStatus
from ..utils import shell
from .base import (
    InstallContext,
    ToolHandlers,
    UpdateResult,
    git_clone,
    install_package,
    upgrade_package,
)


logger = logging.getLogger(__name__)

FZF_REPO = "https://github.com/junegunn/fzf.git"
EZA_RELEASE_URL = "https://github.com/eza-community/eza/releases/latest/download/eza_{arch}-unknown-linux-gnu.tar.gz"
CARAPACE_INSTALL = "curl -fsSL https://carapace.sh/install.sh | bash -s -- --bin-dir '{bin_dir}'"

LINUX_ARCH = {"x64": "x86_64", "arm64": "aarch64"}


def is_fzf_installed(ctx: InstallContext) -> bool:
    return shell.command_exists("fzf") or ctx.path(".fzf", "bin", "fzf").exists()


async def install_fzf(ctx: InstallContext) -> bool:
    if is_fzf_installed(ctx):
        logger.info("fzf already installed")
        return True
    logger.info("Installing fzf...")
    if ctx.info.is_mac():
        return await install_package(ctx, "fzf")

    fzf_dir = ctx.path(".fzf")
    if not await git_clone(ctx, FZF_REPO, fzf_dir):
        return False
    result = await shell.run(f"'{fzf_dir}/install' --all --no-bash --no-fish", env=ctx.env())
    return result.success


async def update_fzf(ctx: InstallContext) -> UpdateResult:
    if ctx.info.is_mac():
        await upgrade_package(ctx, "fzf")
        return UpdateResult(status=OutcomeStatus.UPDATED)

    fzf_dir = ctx.path(".fzf")
    ok = await shell.run_many(
        ["git pull", f"'{fzf_dir}/install' --all --no-bash --no-fish"],
        cwd=fzf_dir,
        env=ctx.env()
    )
    if ok:
        return UpdateResult(status=OutcomeStatus.UPDATED)
    return UpdateResult(status=OutcomeStatus.FAILED, message="fzf update failed")


def is_eza_installed(ctx: InstallContext) -> bool:
    return shell.command_exists("eza")


async def install_eza(ctx: InstallContext) -> bool:
    if is_eza_installed(ctx):
        logger.info("eza already installed")
        return True
    logger.info("Installing eza...")
    if ctx.info.is_mac() or ctx.info.package_manager in ("pacman", "dnf"):
        return await install_package(ctx, "eza")

    arch = LINUX_ARCH.get(ctx.info.arch)
    if arch is None:
        logger.error(f"No eza release for architecture {ctx.info.arch}")
        return False
    bin_dir = ctx.path(".local", "bin")
    return await shell.run_many(
        [
            f"mkdir -p '{bin_dir}'",
            f"curl -fsSL {EZA_RELEASE_URL.format(arch=arch)} | tar -xz -C '{bin_dir}'",
            f"chmod +x '{bin_dir}/eza'",
        ],
        env=ctx.env()
    )


async def update_eza(ctx: InstallContext) -> UpdateResult:
    if ctx.info.is_mac():
        await upgrade_package(ctx, "eza")
        return UpdateResult(status=OutcomeStatus.UPDATED)
    result = await shell.run("eza --version", ignore_error=True)
    if result.stdout:
        logger.info(f"Current: {result.stdout.splitlines()[0].strip()}")
    logger.info("To update eza on Linux, reinstall using the install command")
    return UpdateResult(status=OutcomeStatus.SKIPPED, message="Manual update required on Linux")


def is_carapace_installed(ctx: InstallContext) -> bool:
    return shell.command_exists("carapace") or ctx.path(".local", "bin", "carapace").exists()


async def install_carapace(ctx: InstallContext) -> bool:
    if is_carapace_installed(ctx):
        logger.info("Carapace already installed")
        return True
    logger.info("Installing carapace...")
    if ctx.info.is_mac():
        return await install_package(ctx, "carapace")
    bin_dir = ctx.path(".local", "bin")
    result = await shell.run(CARAPACE_INSTALL.format(bin_dir=bin_dir), env=ctx.env())
    return result.success


async def update_carapace(ctx: InstallContext) -> UpdateResult:
    if ctx.info.is_mac():
        await upgrade_package(ctx, "carapace")
        return UpdateResult(status=OutcomeStatus.UPDATED)
    logger.info("To update carapace on Linux, reinstall using the install command")
    return UpdateResult(status=OutcomeStatus.SKIPPED, message="Manual update required on Linux")


def handlers(ctx: InstallContext) -> Dict[str, ToolHandlers]:
    return {
        "fzf": ToolHandlers(
            install=partial(install_fzf, ctx),
            update=partial(update_fzf, ctx),
            is_installed=partial(is_fzf_installed, ctx),
        ),
        "eza": ToolHandlers(
            install=partial(install_eza, ctx),
            update=partial(update_eza, ctx),
            is_installed=partial(is_eza_installed, ctx),
        ),
        "carapace": ToolHandlers(
            install=partial(install_carapace, ctx),
            update=partial(update_carapace, ctx),
            is_installed=partial(is_carapace_installed, ctx),
        ),
    }
