"""Draft files holding an editing session between CLI runs.

A draft records the source locale, the version and date being prepared,
and every locale's title, messages and selection flags, so translations
can be reviewed and hand-edited before export::

    {
      "source": "ko-KR",
      "version": 125,
      "date": "2025-09-30",
      "entries": [
        {"tag": "en-US", "title": "...", "messages": [...],
         "selected": true, "enabled": true}
      ]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..localization.registry import DEFAULT_SOURCE_TAG, LanguageRegistry
from .patch_notes import LocaleEntry


class DraftFormatError(ValueError):
    """Raised when a draft file cannot be parsed."""


@dataclass
class Draft:
    """Contents of a draft file.

    Attributes:
        entries: One entry per registry language, in registry order.
        source: Source locale tag.
        version: Patch version, or None if not chosen yet.
        date: Release date, or None if not chosen yet.
    """

    entries: List[LocaleEntry] = field(default_factory=list)
    source: str = DEFAULT_SOURCE_TAG
    version: Optional[int] = None
    date: Optional[str] = None


def _entry_to_dict(entry: LocaleEntry) -> Dict[str, Any]:
    return {
        "tag": entry.tag,
        "title": entry.title or "",
        "messages": list(entry.messages or []),
        "selected": entry.selected,
        "enabled": entry.enabled,
    }


def save_draft(path: Path | str, draft: Draft) -> Path:
    """Write a draft as indented UTF-8 JSON, creating parent folders.

    Raises:
        OSError: If the file cannot be written.
    """
    target = Path(path)
    payload = {
        "source": draft.source,
        "version": draft.version,
        "date": draft.date,
        "entries": [_entry_to_dict(entry) for entry in draft.entries],
    }
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return target


def load_draft(path: Path | str, registry: LanguageRegistry) -> Draft:
    """Read a draft and rebuild entries for every registry language.

    Stored entries for unknown tags are ignored, languages missing from the
    file get their default state, and ill-typed fields fall back to empty
    values.

    Raises:
        FileNotFoundError: If the draft does not exist.
        DraftFormatError: If the file is not UTF-8 text holding a JSON object.
    """
    source_path = Path(path)
    try:
        data = json.loads(source_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DraftFormatError(f"{source_path} is not valid UTF-8 JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DraftFormatError(f"{source_path} does not contain a draft object.")

    stored: Dict[str, Dict[str, Any]] = {}
    raw_entries = data.get("entries")
    if isinstance(raw_entries, list):
        for item in raw_entries:
            if isinstance(item, dict) and isinstance(item.get("tag"), str):
                stored.setdefault(item["tag"], item)

    entries: List[LocaleEntry] = []
    for info in registry.list_languages():
        entry = LocaleEntry.from_language(info)
        item = stored.get(info.tag)
        if item is not None:
            _apply_stored_fields(entry, item)
        entries.append(entry)

    source = data.get("source")
    if not isinstance(source, str) or source not in registry:
        source = DEFAULT_SOURCE_TAG
    version = data.get("version")
    if isinstance(version, bool) or not isinstance(version, int):
        version = None
    date = data.get("date")
    if not isinstance(date, str) or not date.strip():
        date = None

    return Draft(entries=entries, source=source, version=version, date=date)


def _apply_stored_fields(entry: LocaleEntry, item: Dict[str, Any]) -> None:
    title = item.get("title")
    entry.title = title if isinstance(title, str) else ""
    messages = item.get("messages")
    if isinstance(messages, list):
        entry.messages = [m for m in messages if isinstance(m, str)]
    if isinstance(item.get("selected"), bool):
        entry.selected = item["selected"]
    if isinstance(item.get("enabled"), bool):
        entry.enabled = item["enabled"]


__all__ = ["Draft", "DraftFormatError", "load_draft", "save_draft"]
