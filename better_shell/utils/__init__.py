"""
Utility modules for the better-shell installer.
"""

from .logging import Colors, log_header, setup_root_logger

__all__ = ["Colors", "log_header", "setup_root_logger"]
