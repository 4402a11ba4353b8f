"""
Anonymous usage telemetry.
"""

from .client import (
    TelemetryCollector,
    has_seen_telemetry_notice,
    is_telemetry_disabled_by_env,
    mark_telemetry_notice_shown,
)

__all__ = [
    "TelemetryCollector",
    "has_seen_telemetry_notice",
    "is_telemetry_disabled_by_env",
    "mark_telemetry_notice_shown",
]
