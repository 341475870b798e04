"""
Utility modules for genolik.

Provides logging and timing helpers.
"""

from .logging import setup_logging, timed

__all__ = [
    "setup_logging",
    "timed",
]
