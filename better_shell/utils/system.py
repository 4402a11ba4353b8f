"""
Host platform detection.
"""

import logging
import os
import platform as _platform
import re
import shutil
import subprocess
from functools import cached_property
from pathlib import Path


logger = logging.getLogger(__name__)

PLATFORM_NAMES = {
    "darwin": "macos",
    "linux": "linux",
    "windows": "windows",
}

ARCH_NAMES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
}

LINUX_PACKAGE_MANAGERS = ("apt", "dnf", "pacman")


class SystemInfo:
    """Lazily detected facts about the machine we are installing on."""

    @cached_property
    def current(self) -> str:
        return PLATFORM_NAMES.get(_platform.system().lower(), "unknown")

    @cached_property
    def arch(self) -> str:
        machine = _platform.machine().lower()
        return ARCH_NAMES.get(machine, machine or "unknown")

    @property
    def home_dir(self) -> Path:
        return Path.home()

    @cached_property
    def shell(self) -> str:
        """Login shell, falling back to /bin/sh."""
        return os.environ.get("SHELL") or "/bin/sh"

    @cached_property
    def package_manager(self) -> str:
        if self.is_mac():
            return "brew"
        if self.is_linux():
            for manager in LINUX_PACKAGE_MANAGERS:
                if shutil.which(manager):
                    return manager
        return "unknown"

    @cached_property
    def os_version(self) -> str:
        """Human readable OS version, or 'unknown'."""
        try:
            if self.is_mac():
                result = subprocess.run(
                    ["sw_vers", "-productVersion"],
                    capture_output=True,
                    text=True,
                    timeout=5
                )
                if result.returncode == 0:
                    return result.stdout.strip()
            elif self.is_linux():
                return parse_os_release(Path("/etc/os-release").read_text())
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Could not detect OS version: {e}")
        return "unknown"

    def is_mac(self) -> bool:
        return self.current == "macos"

    def is_linux(self) -> bool:
        return self.current == "linux"

    def is_windows(self) -> bool:
        return self.current == "windows"

    def is_supported(self) -> bool:
        return self.is_mac() or self.is_linux()


def parse_os_release(content: str) -> str:
    """Extract a version string from /etc/os-release content."""
    match = re.search(r'^PRETTY_NAME="([^"]+)"', content, re.MULTILINE)
    if match:
        return match.group(1)
    id_match = re.search(r'^ID=(.+)$', content, re.MULTILINE)
    version_match = re.search(r'^VERSION_ID="?([^"\n]+)"?$', content, re.MULTILINE)
    if id_match:
        distro = id_match.group(1).strip().strip('"')
        return f"{distro} {version_match.group(1)}" if version_match else distro
    return "unknown"


system = SystemInfo()
