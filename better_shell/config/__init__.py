"""
Configuration for the better-shell installer.
"""

from .settings import Settings

__all__ = ["Settings"]
