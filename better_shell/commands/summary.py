"""
Run summary output shared by the commands.
"""

import logging

from ..models.outcome import OutcomeStatus, RunSummary


# Bucket -> (label, log level)
SUMMARY_LINES = (
    (OutcomeStatus.INSTALLED, "Installed", logging.INFO),
    (OutcomeStatus.UPDATED, "Updated", logging.INFO),
    (OutcomeStatus.WOULD_INSTALL, "Would install", logging.INFO),
    (OutcomeStatus.SKIPPED, "Skipped", logging.INFO),
    (OutcomeStatus.NOT_INSTALLED, "Not installed", logging.INFO),
    (OutcomeStatus.FAILED, "Failed", logging.WARNING),
)


def log_run_summary(logger: logging.Logger, summary: RunSummary) -> None:
    """Log one line per non-empty status bucket, listing display names."""
    for status, label, level in SUMMARY_LINES:
        names = summary.names(status)
        if names:
            logger.log(level, f"{label}: {', '.join(names)}")
