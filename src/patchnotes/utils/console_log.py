"""Leveled console output with an optional log file mirror.

Levels are ``info``, ``warning``, ``error`` and ``success``. Info and
success go to stdout, warnings and errors to stderr. Every line can also be
appended to a log file with a timestamp.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

LOG_LEVELS = ("info", "warning", "error", "success")


class ConsoleLog:
    """Print messages with a level prefix and mirror them to a file.

    Attributes:
        log_file: Path of the mirror file, or None when file logging is off.
        quiet: Suppress ``info`` messages on the console (file still gets them).
        history: (level, message) pairs logged during this session.
    """

    def __init__(
        self,
        log_file: Optional[Path | str] = None,
        quiet: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self.log_file: Optional[Path] = None
        self.quiet = quiet
        self.history: List[Tuple[str, str]] = []
        self._stdout = stdout
        self._stderr = stderr
        if log_file:
            self._setup_log_file(Path(log_file))

    def _setup_log_file(self, log_file: Path) -> None:
        """Create the log file's folder, disabling file logging on failure."""
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self.log_file = log_file
        except OSError as e:
            print(f"[WARNING] Could not set up log file: {e}", file=self._err)
            self.log_file = None

    @property
    def _out(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def _err(self) -> TextIO:
        return self._stderr or sys.stderr

    def log(self, message: str, level: str = "info") -> None:
        """Log a message to the console and mirror it to the log file."""
        if level not in LOG_LEVELS:
            level = "info"
        self.history.append((level, message))

        if not (self.quiet and level == "info"):
            prefix = f"[{level.upper()}] " if level != "info" else ""
            stream = self._err if level in ("warning", "error") else self._out
            print(f"{prefix}{message}", file=stream)

        if self.log_file:
            try:
                timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
                with open(self.log_file, "a", encoding="utf-8") as f:
                    f.write(f"[{timestamp}] [{level.upper()}] {message}\n")
            except OSError as e:
                print(f"[WARNING] Could not write to log file: {e}", file=self._err)

    def info(self, message: str) -> None:
        self.log(message, "info")

    def warning(self, message: str) -> None:
        self.log(message, "warning")

    def error(self, message: str) -> None:
        self.log(message, "error")

    def success(self, message: str) -> None:
        self.log(message, "success")


__all__ = ["ConsoleLog", "LOG_LEVELS"]
