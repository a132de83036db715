"""System clipboard access through Qt.

Used by the CLI to copy generated JSON the same way the editor tool did.
A ``QGuiApplication`` is created on first use when none exists yet; on
Linux this needs a display (``DISPLAY``, ``WAYLAND_DISPLAY`` or an explicit
``QT_QPA_PLATFORM``).
"""

from __future__ import annotations

import os
import sys
from typing import Optional

QT_AVAILABLE = False
try:
    from PySide6.QtGui import QGuiApplication

    QT_AVAILABLE = True
except ImportError:
    pass


class ClipboardError(RuntimeError):
    """Raised when the clipboard cannot be reached."""


_app: Optional["QGuiApplication"] = None


def _has_display() -> bool:
    """Return False on Linux hosts without an X11 or Wayland session."""
    if not sys.platform.startswith("linux"):
        return True
    if os.environ.get("QT_QPA_PLATFORM"):
        return True
    return bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))


def _ensure_app() -> "QGuiApplication":
    global _app
    app = QGuiApplication.instance()
    if app is None:
        # Qt aborts the process when no platform plugin can start
        if not _has_display():
            raise ClipboardError("No display is available for the clipboard.")
        _app = QGuiApplication([])
        app = _app
    return app


def copy_to_clipboard(text: str) -> None:
    """Place ``text`` on the system clipboard.

    Raises:
        ClipboardError: If PySide6 is missing or no clipboard is available.
    """
    if not QT_AVAILABLE:
        raise ClipboardError("PySide6 is required to copy to the clipboard.")

    app = _ensure_app()
    clipboard = QGuiApplication.clipboard()
    if clipboard is None:
        raise ClipboardError("No system clipboard is available.")
    clipboard.setText(text)
    app.processEvents()


__all__ = ["ClipboardError", "QT_AVAILABLE", "copy_to_clipboard"]
