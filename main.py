#!/usr/bin/env python3
"""
Main entry point for better-shell - installs and configures a modern terminal setup.
"""

import asyncio
import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from better_shell import __version__
from better_shell.commands import (
    CheckCommand,
    InstallCommand,
    InstallOptions,
    UpdateCommand,
    backup,
    restore,
)
from better_shell.config import Settings
from better_shell.utils.logging import setup_root_logger


COMMANDS = ("install", "update", "check", "backup", "restore")

EXAMPLES = """
Examples:
  better-shell install                    Install everything
  better-shell install --minimal          Install essentials only
  better-shell install --tools zsh,fzf    Install specific tools (plus dependencies)
  better-shell install --exclude tmux     Install everything except tmux
  better-shell install --interactive      Ask before each tool
  better-shell update                     Update installed tools
  better-shell backup                     Back up current configs
  better-shell restore <backup-path>      Restore configs from a backup
"""


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="better-shell",
        description="Supercharge your terminal with zsh, tmux and modern CLI tools",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "command",
        nargs="?",
        choices=COMMANDS,
        help="Command to run"
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="Backup path (restore) or custom backup root (backup)"
    )

    parser.add_argument(
        "--skip-backup",
        action="store_true",
        help="Skip backing up existing configurations"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview changes without applying them"
    )

    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Ask before installing each tool"
    )

    parser.add_argument(
        "--minimal",
        action="store_true",
        help="Install essentials only (skip fonts and carapace)"
    )

    parser.add_argument(
        "--tools",
        type=str,
        help="Comma-separated list of tools to install"
    )

    parser.add_argument(
        "--exclude",
        type=str,
        help="Comma-separated list of tools to skip"
    )

    parser.add_argument(
        "--no-telemetry",
        action="store_true",
        help="Disable anonymous usage statistics"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from settings, INFO)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"better-shell {__version__}"
    )

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        parser.exit(0)
    return args


async def dispatch(args: argparse.Namespace, settings: Settings) -> bool:
    """Run the selected command and report success."""
    if args.command == "install":
        command = InstallCommand(settings)
        options = InstallOptions(
            skip_backup=args.skip_backup,
            dry_run=args.dry_run,
            interactive=args.interactive,
            minimal=args.minimal,
            tools=args.tools,
            exclude=args.exclude,
            no_telemetry=args.no_telemetry
        )
        try:
            return await command.run(options)
        finally:
            if command.telemetry is not None:
                await asyncio.to_thread(
                    command.telemetry.wait, settings.telemetry_config.flush_wait_seconds
                )

    if args.command == "update":
        return await UpdateCommand(settings).run(tools=args.tools, dry_run=args.dry_run)

    if args.command == "check":
        return CheckCommand(settings).run()

    if args.command == "backup":
        return backup(settings, args.path)

    return restore(settings, args.path)


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    # Load environment variables from .env file
    load_dotenv()
    settings = Settings()

    setup_root_logger(
        settings.log_file,
        args.log_level or settings.logging.level,
        max_bytes=settings.logging.max_file_size_mb * 1024 * 1024,
        backup_count=settings.logging.backup_count
    )
    logger = logging.getLogger(__name__)
    logger.debug(f"Arguments: {vars(args)}")

    try:
        ok = await dispatch(args, settings)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1
    return 0 if ok else 1


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInstallation cancelled by user", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
