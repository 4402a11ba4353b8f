"""
Telemetry client for anonymous usage statistics.

All data is anonymous: the session hash is derived from platform, time and a
random number and cannot be tied back to a user. Opt out with --no-telemetry
or BETTER_SHELL_TELEMETRY=0.
"""

import logging
import os
import random
import threading
import time
import urllib.error
import urllib.request
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from .. import __version__
from ..config.settings import DEFAULT_TELEMETRY_ENDPOINT
from ..models.outcome import OutcomeStatus
from ..utils.system import SystemInfo, system


logger = logging.getLogger(__name__)

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193

RUN_STATUSES = ("started", "completed", "failed", "cancelled")
TOOL_STATUSES = (OutcomeStatus.INSTALLED, OutcomeStatus.SKIPPED, OutcomeStatus.FAILED)
DISABLE_VALUES = ("0", "false", "off")


class ToolResult(BaseModel):
    """Per-tool entry in the telemetry payload."""
    toolId: str
    status: str
    durationMs: Optional[int] = None
    errorMessage: Optional[str] = None


class TelemetryPayload(BaseModel):
    """Body posted to the telemetry endpoint."""
    sessionHash: str
    os: str
    osVersion: str
    arch: str
    cliVersion: str
    interactive: bool
    minimal: bool
    status: str
    durationMs: Optional[int] = None
    tools: List[ToolResult] = Field(default_factory=list)


def fnv1a_32(data: str) -> int:
    """32-bit FNV-1a hash of the UTF-16 code units of a string."""
    value = FNV_OFFSET_BASIS
    encoded = data.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        value ^= encoded[i] | (encoded[i + 1] << 8)
        value = (value * FNV_PRIME) & 0xFFFFFFFF
    return value


def generate_session_hash(info: SystemInfo = system) -> str:
    """Coarse, anonymous correlation id for one run (8 hex digits)."""
    data = f"{info.current}-{info.arch}-{int(time.time() * 1000)}-{random.random()}"
    return f"{fnv1a_32(data):08x}"


def is_telemetry_disabled_by_env() -> bool:
    return os.environ.get("BETTER_SHELL_TELEMETRY", "").strip().lower() in DISABLE_VALUES


class TelemetryCollector:
    """Collects per-tool results for a run and posts them once at the end."""

    def __init__(self,
                 enabled: bool = True,
                 interactive: bool = False,
                 minimal: bool = False,
                 endpoint: str = DEFAULT_TELEMETRY_ENDPOINT,
                 timeout_seconds: float = 5.0,
                 info: SystemInfo = system):
        self.enabled = enabled
        self.interactive = interactive
        self.minimal = minimal
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self.info = info
        self.session_hash = generate_session_hash(info)
        self.os_version = "unknown"
        self.tools: List[ToolResult] = []
        self._start = time.monotonic()
        self._pending: Optional[threading.Thread] = None

    def init(self) -> None:
        """Collect data that is slow to look up; skipped when disabled."""
        if not self.enabled:
            return
        self.os_version = self.info.os_version

    def record_tool(self,
                    tool_id: str,
                    status: Union[OutcomeStatus, str],
                    duration_ms: Optional[int] = None,
                    error: Optional[str] = None) -> None:
        """Record one tool result. Statuses other than installed/skipped/failed are dropped."""
        if not self.enabled:
            return
        status = OutcomeStatus(status)
        if status not in TOOL_STATUSES:
            return
        self.tools.append(ToolResult(
            toolId=tool_id,
            status=status.value,
            durationMs=duration_ms,
            errorMessage=error
        ))

    def duration_ms(self) -> int:
        return int((time.monotonic() - self._start) * 1000)

    def get_summary(self) -> Dict[str, int]:
        """Counts of recorded results, for debugging and transparency."""
        return {
            "installed": sum(1 for t in self.tools if t.status == OutcomeStatus.INSTALLED.value),
            "skipped": sum(1 for t in self.tools if t.status == OutcomeStatus.SKIPPED.value),
            "failed": sum(1 for t in self.tools if t.status == OutcomeStatus.FAILED.value),
        }

    def build_payload(self, status: str) -> TelemetryPayload:
        if status not in RUN_STATUSES:
            raise ValueError(f"Unknown telemetry status: {status}")
        return TelemetryPayload(
            sessionHash=self.session_hash,
            os=self.info.current,
            osVersion=self.os_version,
            arch=self.info.arch,
            cliVersion=__version__,
            interactive=self.interactive,
            minimal=self.minimal,
            status=status,
            durationMs=self.duration_ms(),
            tools=list(self.tools)
        )

    def send(self, status: str) -> Optional[threading.Thread]:
        """
        Post the payload in the background (fire and forget).

        Nothing raised here or in the background thread reaches the caller.

        Returns:
            The sender thread, or None when disabled or the payload could not be built
        """
        if not self.enabled:
            return None

        try:
            body = self.build_payload(status).model_dump_json(exclude_none=True).encode()
        except (ValueError, TypeError) as e:
            logger.debug(f"Telemetry payload not sent: {e}")
            return None

        thread = threading.Thread(target=self._post, args=(body,), name="telemetry", daemon=True)
        thread.start()
        self._pending = thread
        return thread

    def wait(self, timeout: float) -> None:
        """Give a pending post up to `timeout` seconds to finish."""
        if self._pending is not None:
            self._pending.join(timeout)

    def _post(self, body: bytes) -> None:
        request = urllib.request.Request(
            self.endpoint,
            data=body,
            headers={"Content-Type": "application/json"},
            method="POST"
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as response:
                logger.debug(f"Telemetry sent ({response.status})")
        except (urllib.error.URLError, OSError, ValueError) as e:
            logger.debug(f"Telemetry send failed: {e}")


def has_seen_telemetry_notice(marker: Path) -> bool:
    return marker.exists()


def mark_telemetry_notice_shown(marker: Path) -> None:
    try:
        marker.parent.mkdir(parents=True, exist_ok=True)
        marker.write_text(datetime.now(timezone.utc).isoformat())
    except OSError as e:
        logger.debug(f"Could not write telemetry notice marker {marker}: {e}")
