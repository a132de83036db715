"""Utility modules for console logging, clipboard access and preferences.

Provides leveled console output mirrored to a log file, Qt-backed
clipboard copy, and persistent storage for user settings like the
translation API key and output folder.
"""

from .console_log import ConsoleLog

__all__ = [
    "ConsoleLog",
]
