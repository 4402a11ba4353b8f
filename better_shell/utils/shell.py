"""
Shell command execution helpers used by the installers.
"""

import asyncio
import logging
import os
import shutil
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Union


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 900
DOWNLOAD_TIMEOUT = 60


@dataclass
class ShellResult:
    """Outcome of a shell command."""
    success: bool
    exit_code: int
    stdout: str = ""
    stderr: str = ""


async def run(command: str,
              cwd: Optional[Union[str, Path]] = None,
              env: Optional[Dict[str, str]] = None,
              silent: bool = True,
              ignore_error: bool = False,
              timeout: float = DEFAULT_TIMEOUT) -> ShellResult:
    """
    Run a command through the shell and capture its output.

    Args:
        command: Command line
        cwd: Working directory
        env: Full environment for the child; inherits ours when None
        silent: Do not echo output to the log
        ignore_error: Log failures at debug instead of warning level
        timeout: Seconds before the process is terminated

    Returns:
        ShellResult with decoded stdout and stderr
    """
    logger.debug(f"$ {command}" + (f" (cwd={cwd})" if cwd else ""))
    try:
        process = await asyncio.create_subprocess_shell(
            command,
            cwd=str(cwd) if cwd else None,
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
    except OSError as e:
        return ShellResult(success=False, exit_code=127, stderr=str(e))

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.terminate()
        await process.wait()
        return ShellResult(
            success=False,
            exit_code=-1,
            stderr=f"Command timed out after {timeout} seconds"
        )

    result = ShellResult(
        success=process.returncode == 0,
        exit_code=process.returncode,
        stdout=stdout.decode(errors="replace") if stdout else "",
        stderr=stderr.decode(errors="replace") if stderr else ""
    )

    if not silent and result.stdout:
        logger.info(result.stdout.rstrip())
    if not result.success:
        log = logger.debug if ignore_error else logger.warning
        log(f"Command failed ({result.exit_code}): {command}")
        if result.stderr:
            log(result.stderr.strip()[:500])
    return result


async def run_many(commands: Iterable[str],
                   cwd: Optional[Union[str, Path]] = None,
                   env: Optional[Dict[str, str]] = None,
                   silent: bool = True,
                   ignore_error: bool = False) -> bool:
    """Run commands in order, stopping at the first failure unless errors are ignored."""
    for command in commands:
        result = await run(command, cwd=cwd, env=env, silent=silent, ignore_error=ignore_error)
        if not result.success and not ignore_error:
            return False
    return True


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None


async def download(url: str, destination: Union[str, Path], timeout: float = DOWNLOAD_TIMEOUT) -> bool:
    """
    Download a URL to a file.

    Returns:
        True on success; failures are logged, never raised
    """
    destination = Path(destination)

    def _fetch() -> None:
        request = urllib.request.Request(url, headers={"User-Agent": "better-shell"})
        with urllib.request.urlopen(request, timeout=timeout) as response:
            data = response.read()
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(data)

    try:
        await asyncio.to_thread(_fetch)
    except (urllib.error.URLError, ValueError, OSError) as e:
        logger.warning(f"Download failed for {url}: {e}")
        return False

    logger.debug(f"Downloaded {url} to {destination}")
    return True


def is_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0
