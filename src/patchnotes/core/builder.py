"""Patch notes editing session: locale entries, translation and export.

``PatchNotesBuilder`` owns the per-locale entries of one editing session.
Callers change entries only through its operations, run machine translation
from the source locale with ``translate_all``, and export the result with
``export``.

Usage::

    registry = build_default_registry()
    builder = PatchNotesBuilder(registry, provider=GoogleTranslationProvider(key))
    builder.init_entries()
    builder.set_source_content("Update", "Fixed crash\\nNew stage")
    result = builder.translate_all()
    builder.export(125, "2025-09-30", "Assets/Resources/UpdateLogs")
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..localization.registry import DEFAULT_SOURCE_TAG, LanguageRegistry
from ..utils.console_log import ConsoleLog
from .patch_notes import (
    LocaleEntry,
    PatchNotesDocument,
    build_document,
    document_path,
    split_to_lines,
    write_document,
)
from .translation_provider_base import (
    MissingCredentialError,
    TranslationError,
    TranslationProvider,
)

ProgressCallback = Callable[[int, int], None]


class ValidationError(Exception):
    """Raised when an operation's preconditions are not met."""


class EmptySourceError(ValidationError):
    """Raised when the source locale has no title or no messages."""


class NoTargetsError(ValidationError):
    """Raised when no locale other than the source is selected."""


@dataclass
class OperationResult:
    """Standard response for builder workflow actions.

    Attributes:
        name: Short identifier for the operation (e.g., 'translate').
        success: True if the operation completed without errors.
        logs: Informational log messages produced during the operation.
        errors: Error messages encountered during the operation.
        details: Arbitrary metadata (counts, per-language results, etc.).
    """

    name: str
    success: bool
    logs: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    details: Dict[str, object] = field(default_factory=dict)

    def add_log(self, message: str) -> None:
        """Append an informational message to the logs.

        Args:
            message: Log message to record.
        """
        self.logs.append(message)

    def add_error(self, message: str) -> None:
        """Record an error and mark the operation as failed.

        Args:
            message: Error message to record.
        """
        self.errors.append(message)
        self.success = False


class PatchNotesBuilder:
    """Owns and edits the locale entries of one patch notes session.

    Attributes:
        registry: Language registry the entries are built from.
        provider: Translation backend, or None when translation is unavailable.
        source_tag: Tag of the locale translations are made from.
        log: Console log receiving progress and failure messages.
        delay_between_targets: Pause in seconds after each translated locale.
        entries: Locale entries in registry order.
        cancel_event: Event a presentation layer may set to stop translation
            at the next locale boundary.
        is_translating: True while ``translate_all`` is running.
        progress: (completed, total) of the current or last translation run.
    """

    def __init__(
        self,
        registry: LanguageRegistry,
        provider: Optional[TranslationProvider] = None,
        source_tag: str = DEFAULT_SOURCE_TAG,
        log: Optional[ConsoleLog] = None,
        delay_between_targets: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.registry = registry
        self.provider = provider
        self.source_tag = source_tag
        self.log = log or ConsoleLog()
        self.delay_between_targets = max(0.0, delay_between_targets)
        self.entries: List[LocaleEntry] = []
        self.cancel_event = threading.Event()
        self.is_translating = False
        self.progress: Tuple[int, int] = (0, 0)
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Entry state
    # ------------------------------------------------------------------

    def init_entries(self) -> List[LocaleEntry]:
        """Create one entry per registry language if none exist yet.

        Fresh entries are selected and enabled when the language is a registry
        default. Calling this again keeps the current entries untouched.

        Returns:
            The builder's entries.
        """
        if not self.entries:
            self.entries = [
                LocaleEntry.from_language(info)
                for info in self.registry.list_languages()
            ]
        return self.entries

    def restore_entries(self, entries: Iterable[LocaleEntry]) -> List[LocaleEntry]:
        """Replace the entries, e.g. with ones loaded from a draft.

        Raises:
            ValueError: If an entry's tag is not in the registry.
        """
        restored = list(entries)
        for entry in restored:
            if entry.tag not in self.registry:
                raise ValueError(f"Unknown language tag: {entry.tag}")
        self.entries = restored
        return self.entries

    def entry(self, tag: str) -> LocaleEntry:
        """Return the entry for ``tag``.

        Raises:
            KeyError: If no entry has that tag.
        """
        for candidate in self.init_entries():
            if candidate.tag == tag:
                return candidate
        raise KeyError(tag)

    def source_entry(self) -> LocaleEntry:
        return self.entry(self.source_tag)

    def set_title(self, tag: str, title: str) -> None:
        self.entry(tag).title = title or ""

    def set_messages_text(self, tag: str, raw_text: Optional[str]) -> List[str]:
        """Replace an entry's messages from raw multi-line input."""
        entry = self.entry(tag)
        entry.messages = split_to_lines(raw_text)
        return entry.messages

    def set_source_content(self, title: str, raw_text: Optional[str]) -> LocaleEntry:
        self.set_title(self.source_tag, title)
        self.set_messages_text(self.source_tag, raw_text)
        return self.source_entry()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def set_selected(self, tag: str, selected: bool) -> None:
        """Select or deselect a locale; its enabled flag follows the selection."""
        entry = self.entry(tag)
        entry.selected = selected
        entry.enabled = selected

    def set_enabled(self, tag: str, enabled: bool) -> None:
        self.entry(tag).enabled = enabled

    def select_defaults(self) -> None:
        """Reset the selection to the registry defaults."""
        for entry in self.init_entries():
            info = self.registry.get(entry.tag)
            entry.selected = bool(info and info.is_default)
            entry.enabled = entry.selected

    def select_all(self) -> None:
        for entry in self.init_entries():
            entry.selected = True
            entry.enabled = True

    def deselect_all(self) -> None:
        for entry in self.init_entries():
            entry.selected = False
            entry.enabled = False

    def enable_all_targets(self, enabled: bool = True) -> None:
        """Toggle output inclusion for every selected non-source locale."""
        for entry in self.target_entries():
            entry.enabled = enabled

    def target_entries(self) -> List[LocaleEntry]:
        """Return the selected locales other than the source, in order."""
        return [
            entry
            for entry in self.init_entries()
            if entry.selected and entry.tag != self.source_tag
        ]

    def selected_count(self) -> int:
        return sum(1 for entry in self.init_entries() if entry.selected)

    def exportable_entries(self) -> List[LocaleEntry]:
        return [entry for entry in self.init_entries() if entry.is_exportable()]

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def request_cancel(self) -> None:
        """Ask a running ``translate_all`` to stop before the next locale."""
        self.cancel_event.set()

    def translate_all(
        self,
        source_tag: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> OperationResult:
        """Translate every selected locale from the source locale.

        Locales are processed one at a time in registry order. For each one
        the title is translated, then all messages in a single batch. A failed
        request leaves that field as it was and the loop moves on; progress
        counts every attempted locale, failed or not.

        Args:
            source_tag: Locale to translate from; defaults to ``source_tag``.
                It replaces ``source_tag`` only after it passes validation.
            cancel_event: Event checked before each locale. When omitted the
                builder's own ``cancel_event`` is used (and cleared first).
            on_progress: Called with (completed, total) after each locale.

        Returns:
            An OperationResult whose details hold ``completed``, ``total``,
            ``cancelled``, ``translated`` and ``failed``.

        Raises:
            EmptySourceError: If the source title is blank or it has no messages.
            NoTargetsError: If no other locale is selected.
            MissingCredentialError: If no configured provider is available.
        """
        source = self._validated_source(
            self.source_tag if source_tag is None else source_tag
        )
        self.source_tag = source.tag
        targets = self.target_entries()
        if not targets:
            raise NoTargetsError("Select at least one language to translate into.")
        if self.provider is None or not self.provider.is_configured():
            name = self.provider.name if self.provider else "translation provider"
            raise MissingCredentialError(name)

        if cancel_event is None:
            self.cancel_event.clear()
            cancel_event = self.cancel_event

        total = len(targets)
        completed = 0
        translated: List[str] = []
        failed: List[str] = []
        result = OperationResult("translate", True)
        result.details.update(
            {
                "completed": 0,
                "total": total,
                "cancelled": False,
                "translated": translated,
                "failed": failed,
            }
        )

        self.is_translating = True
        self.progress = (0, total)
        self.log.info(
            f"Translating from {source.tag} into {total} language(s) "
            f"with {self.provider.name}..."
        )
        try:
            for index, target in enumerate(targets):
                if cancel_event.is_set():
                    skipped = [entry.tag for entry in targets[index:]]
                    result.details["cancelled"] = True
                    result.add_log(f"Cancelled before {target.tag}; skipped {len(skipped)}")
                    self.log.warning(
                        f"Translation cancelled, skipped: {', '.join(skipped)}"
                    )
                    break

                self.log.info(f"({index + 1}/{total}) {target.display_name} <{target.tag}>")
                if self._translate_entry(source, target, result):
                    translated.append(target.tag)
                else:
                    failed.append(target.tag)

                completed += 1
                self.progress = (completed, total)
                result.details["completed"] = completed
                if on_progress is not None:
                    on_progress(completed, total)

                if self.delay_between_targets and index < total - 1:
                    self._sleep(self.delay_between_targets)
        finally:
            self.is_translating = False

        if result.details["cancelled"]:
            self.log.warning(f"Translation stopped at {completed}/{total}.")
        elif failed:
            self.log.warning(
                f"Translation finished with errors ({len(failed)} of {total} failed)."
            )
        else:
            self.log.success(f"Translation complete ({completed}/{total}).")
        return result

    def _validated_source(self, tag: str) -> LocaleEntry:
        try:
            source = self.entry(tag)
        except KeyError:
            raise EmptySourceError(f"Source language {tag} is not available.") from None
        if not source.clean_title().strip() or not source.clean_messages():
            raise EmptySourceError(
                f"Enter a title and at least one message for {source.tag} first."
            )
        return source

    def _translate_entry(
        self, source: LocaleEntry, target: LocaleEntry, result: OperationResult
    ) -> bool:
        """Translate title and messages into one target; return True if both worked."""
        ok = True
        target.is_translating = True
        try:
            try:
                title = self.provider.translate(
                    source.clean_title(), source.translate_code, target.translate_code
                )
            except TranslationError as exc:
                ok = False
                self._report_failure(result, target, "title", exc)
            else:
                target.title = title

            try:
                messages = self.provider.translate_batch(
                    source.clean_messages(), source.translate_code, target.translate_code
                )
            except TranslationError as exc:
                ok = False
                self._report_failure(result, target, "messages", exc)
            else:
                target.messages = messages
        finally:
            target.is_translating = False
        return ok

    def _report_failure(
        self,
        result: OperationResult,
        target: LocaleEntry,
        part: str,
        exc: TranslationError,
    ) -> None:
        message = f"{target.tag} {part}: {exc}"
        result.add_error(message)
        self.log.error(f"Could not translate {message}")

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def build_document(self, version: int, date: str) -> PatchNotesDocument:
        return build_document(version, date, self.init_entries(), self.registry)

    def export(
        self,
        version: int,
        date: str,
        base_dir: Path | str,
        document: Optional[PatchNotesDocument] = None,
    ) -> Path:
        """Write the document to ``<base_dir>/<dotted version>.json``.

        Args:
            version: Patch version; also names the file.
            date: Release date.
            base_dir: Output folder, created if missing.
            document: Already built document to write instead of building
                a new one from the current entries.

        Raises:
            OSError: If the folder or file cannot be written.
        """
        if document is None:
            document = self.build_document(version, date)
        path = write_document(document_path(base_dir, version), document)
        self.log.success(
            f"Saved {len(document.update_detail)} language(s) to {path}"
        )
        return path


__all__ = [
    "EmptySourceError",
    "NoTargetsError",
    "OperationResult",
    "PatchNotesBuilder",
    "ProgressCallback",
    "ValidationError",
]
