"""Test doubles shared across the test suite."""

from typing import Dict, List, Optional

from better_shell.utils.system import SystemInfo


class FakeSystemInfo(SystemInfo):
    """SystemInfo with fixed answers, no probing of the host."""

    def __init__(self, current: str = "linux", arch: str = "x64",
                 package_manager: str = "apt", os_version: str = "Test Linux 1.0"):
        self.current = current
        self.arch = arch
        self.package_manager = package_manager
        self.os_version = os_version
        self.shell = "/bin/bash"


class RecordingInstallers:
    """Installer map that records calls and returns canned results."""

    def __init__(self, results: Optional[Dict[str, object]] = None):
        self.results = results or {}
        self.calls: List[str] = []

    def installer(self, tool_id: str):
        def install():
            self.calls.append(tool_id)
            result = self.results.get(tool_id, True)
            if isinstance(result, BaseException):
                raise result
            return result
        return install

    def for_ids(self, tool_ids) -> Dict[str, object]:
        return {tool_id: self.installer(tool_id) for tool_id in tool_ids}


class FakeTelemetry:
    """Collector stand-in that keeps what it was given."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.recorded: List[tuple] = []
        self.sent: List[str] = []

    def init(self) -> None:
        pass

    def record_tool(self, tool_id, status, duration_ms=None, error=None) -> None:
        self.recorded.append((tool_id, getattr(status, "value", status)))

    def send(self, status: str) -> None:
        self.sent.append(status)

    def wait(self, timeout: float) -> None:
        pass


