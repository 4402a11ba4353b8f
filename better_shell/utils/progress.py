"""
Terminal progress bar fed by driver progress events.
"""

import sys
from typing import Optional, TextIO

from ..models.outcome import ProgressEvent
from .logging import Colors


class ProgressBar:
    """
    Progress state owned by the caller of a run.

    Rendering only happens when the stream is a terminal; the counters are
    kept either way.
    """

    def __init__(self, total: int = 0, width: int = 30, stream: Optional[TextIO] = None):
        self.total = total
        self.current = 0
        self.width = width
        self.stream = stream or sys.stdout
        self.label: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return self.stream.isatty()

    @property
    def fraction(self) -> float:
        if self.total <= 0:
            return 0.0
        return min(self.current / self.total, 1.0)

    def update(self, current: int, label: Optional[str] = None) -> None:
        self.current = current
        self.render(label)

    def handle(self, event: ProgressEvent) -> None:
        """Observer hook for the execution driver."""
        self.total = event.total
        self.update(event.index, event.label)

    def render(self, label: Optional[str] = None) -> None:
        self.label = label
        if not self.enabled:
            return

        filled = round(self.width * self.fraction)
        empty = self.width - filled
        bar = f"{Colors.GREEN}{'█' * filled}{Colors.DIM}{'░' * empty}{Colors.RESET}"
        label_text = f" {Colors.DIM}{label}{Colors.RESET}" if label else ""
        self.stream.write(
            f"\r{bar} {round(self.fraction * 100)}% ({self.current}/{self.total}){label_text}  "
        )
        self.stream.flush()

    def finish(self) -> None:
        if self.enabled:
            self.stream.write("\n")
            self.stream.flush()
