"""Patch notes data model and JSON document assembly.

A ``LocaleEntry`` holds the editable title and message lines of one locale.
``build_document`` turns the selected, enabled, non-empty entries into a
``PatchNotesDocument`` whose ``to_dict()`` output is the JSON written to disk::

    {
      "version": 125,
      "date": "2025-09-30",
      "updateDetail": [
        {"language": "ko_KR", "title": "...", "messages": ["...", "..."]}
      ]
    }
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import date as _date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..localization.registry import LanguageInfo, LanguageRegistry

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class LocaleEntry:
    """Editable patch note content for one locale.

    Attributes:
        tag: Registry tag of the locale.
        display_name: Human-readable locale name.
        translate_code: Translation service code for the locale.
        title: Patch note title.
        messages: Ordered message lines.
        selected: True if the locale is a translation and export candidate.
        enabled: True if a selected locale is included in the output.
        is_translating: True while a translation for this locale is running.
    """

    tag: str
    display_name: str
    translate_code: str
    title: str = ""
    messages: List[str] = field(default_factory=list)
    selected: bool = False
    enabled: bool = False
    is_translating: bool = False

    @classmethod
    def from_language(cls, info: LanguageInfo) -> "LocaleEntry":
        """Create the initial entry for a registry language."""
        return cls(
            tag=info.tag,
            display_name=info.display_name,
            translate_code=info.translate_code,
            selected=info.is_default,
            enabled=info.is_default,
        )

    def clean_title(self) -> str:
        """Return the title, or ``""`` when it is missing or not a string."""
        return self.title if isinstance(self.title, str) else ""

    def clean_messages(self) -> List[str]:
        """Return the non-blank string messages; anything but a list is empty."""
        if not isinstance(self.messages, list):
            return []
        return [m for m in self.messages if isinstance(m, str) and m.strip()]

    def has_content(self) -> bool:
        """Return True if the title is non-blank or any message exists."""
        return bool(self.clean_title().strip()) or bool(self.clean_messages())

    def is_exportable(self) -> bool:
        return self.selected and self.enabled and self.has_content()


@dataclass
class UpdateDetail:
    """One language block of the output document."""

    language: str
    title: str
    messages: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "title": self.title,
            "messages": list(self.messages),
        }


@dataclass
class PatchNotesDocument:
    """Versioned multi-language patch notes.

    Attributes:
        version: Integer patch version (see ``version_to_file_name``).
        date: Release date formatted ``YYYY-MM-DD``.
        update_detail: Per-language blocks in registry order.
    """

    version: int
    date: str
    update_detail: List[UpdateDetail] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "date": self.date,
            "updateDetail": [detail.to_dict() for detail in self.update_detail],
        }

    @property
    def languages(self) -> List[str]:
        return [detail.language for detail in self.update_detail]


def split_to_lines(block: Optional[str]) -> List[str]:
    """Convert a raw multi-line block into message lines.

    Normalizes ``\\r\\n`` and ``\\r`` to ``\\n``, strips every line, and drops
    blank lines. Blank lines are never kept as content.

    Args:
        block: Raw text as typed by the author; None is treated as empty.

    Returns:
        The non-blank, stripped lines in their original order.
    """
    text = (block or "").replace("\r\n", "\n").replace("\r", "\n")
    return [line.strip() for line in text.split("\n") if line.strip()]


def build_document(
    version: int,
    date: str,
    entries: Iterable[LocaleEntry],
    registry: LanguageRegistry,
) -> PatchNotesDocument:
    """Assemble the output document from the exportable entries.

    An entry is included only if it is selected, enabled, and has a non-blank
    title or at least one message. Titles that are not strings become ``""``, message values that are not
    lists become ``[]``, and blank or non-string messages are dropped.

    Args:
        version: Patch version number.
        date: Release date string.
        entries: Locale entries in display order.
        registry: Registry used to map tags to JSON language codes.

    Returns:
        The assembled document. This function never raises for odd entries.
    """
    details: List[UpdateDetail] = []
    for entry in entries:
        if not entry.is_exportable():
            continue
        details.append(
            UpdateDetail(
                language=registry.json_code_for(entry.tag),
                title=entry.clean_title(),
                messages=entry.clean_messages(),
            )
        )
    return PatchNotesDocument(version=version, date=date, update_detail=details)


def version_to_file_name(version: int) -> str:
    """Encode a version number as a dotted ``major.minor.patch`` stem.

    The last digit is the patch, the tens digit the minor, and everything
    above that the major: ``125 -> "1.2.5"``, ``1215 -> "12.1.5"``,
    ``7 -> "0.0.7"``. Negative versions are clamped to zero.
    """
    if version < 0:
        version = 0
    patch = version % 10
    minor = (version // 10) % 10
    major = version // 100
    return f"{major}.{minor}.{patch}"


def document_path(base_dir: Path | str, version: int) -> Path:
    """Return ``<base_dir>/<dotted version>.json``."""
    return Path(base_dir) / f"{version_to_file_name(version)}.json"


def document_to_json(document: PatchNotesDocument) -> str:
    return json.dumps(document.to_dict(), ensure_ascii=False, indent=2)


def write_document(path: Path | str, document: PatchNotesDocument) -> Path:
    """Write a document as indented UTF-8 JSON without a byte-order mark.

    Parent directories are created as needed. Any ``OSError`` raised while
    creating folders or writing is propagated unchanged.

    Args:
        path: Destination file path.
        document: Document to serialize.

    Returns:
        The path that was written.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(document_to_json(document), encoding="utf-8")
    return target


def today_string() -> str:
    """Return the local date formatted ``YYYY-MM-DD``."""
    return _date.today().strftime("%Y-%m-%d")


def is_valid_date(text: Optional[str]) -> bool:
    """Return True if ``text`` is a real calendar date in ``YYYY-MM-DD`` form."""
    if not text or not _DATE_PATTERN.match(text):
        return False
    try:
        _date.fromisoformat(text)
    except ValueError:
        return False
    return True


__all__ = [
    "LocaleEntry",
    "PatchNotesDocument",
    "UpdateDetail",
    "build_document",
    "document_path",
    "document_to_json",
    "is_valid_date",
    "split_to_lines",
    "today_string",
    "version_to_file_name",
    "write_document",
]
