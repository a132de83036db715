#!/usr/bin/env python3
"""Command-line interface for preparing multi-language patch notes.

Drafts keep the per-language titles and messages between runs so machine
translations can be reviewed and hand-edited before the JSON is exported.

Usage:
    patchnotes languages
    patchnotes config --api-key KEY --output-dir Assets/Resources/UpdateLogs
    patchnotes edit --draft notes.json --title "Update" --messages-file notes.txt
    patchnotes edit --draft notes.json --select zh-TW fr-FR --version 125
    patchnotes translate --draft notes.json
    patchnotes export --draft notes.json --copy
"""

from __future__ import annotations

import argparse
import signal
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .core import (
    Draft,
    DraftFormatError,
    OperationResult,
    PatchNotesBuilder,
    TranslationError,
    ValidationError,
    document_to_json,
    is_valid_date,
    load_draft,
    save_draft,
    today_string,
    version_to_file_name,
)
from .localization import LanguageRegistry, build_default_registry
from .providers import GoogleTranslationProvider
from .utils.clipboard import ClipboardError, copy_to_clipboard
from .utils.console_log import ConsoleLog
from .utils.preferences import (
    get_api_keys,
    get_float,
    get_preferences_path,
    load_preferences,
    mask_secret,
    save_preferences,
)


def print_result(result: OperationResult) -> None:
    """Print an operation result to stdout.

    Args:
        result: The operation result to display.
    """
    status = "SUCCESS" if result.success else "FAILED"
    print(f"\n[{result.name.upper()}] {status}")

    if result.logs:
        print("\nLogs:")
        for log in result.logs:
            print(f" {log}")

    if result.errors:
        print("\nErrors:")
        for error in result.errors:
            print(f" {error}")

    if "completed" in result.details:
        completed = result.details.get("completed", 0)
        total = result.details.get("total", 0)
        failed = result.details.get("failed") or []
        print(f"\nSummary: {completed}/{total} processed, {len(failed)} with errors")


def print_entries(builder: PatchNotesBuilder) -> None:
    """Print a one-line summary per locale of the current session."""
    selected = builder.selected_count()
    print(f"\nSource: {builder.source_tag}  Selected: {selected}/{len(builder.entries)}")
    for entry in builder.entries:
        if not entry.selected and entry.tag != builder.source_tag:
            continue
        marker = "*" if entry.tag == builder.source_tag else " "
        state = "[Y]" if entry.enabled else "[N]"
        title = entry.title or "-"
        print(f" {marker}{entry.tag:<7} {state} {len(entry.messages):>3} line(s)  {title}")


def _error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def _new_builder(
    registry: LanguageRegistry,
    preferences: Dict[str, Any],
    log: ConsoleLog,
    with_provider: bool = False,
) -> PatchNotesBuilder:
    provider = None
    if with_provider:
        api_keys = get_api_keys(preferences)
        provider = GoogleTranslationProvider(
            api_keys.get("google_translate_api_key"),
            project_id=api_keys.get("google_project_id"),
            timeout=get_float(preferences, "request_timeout"),
        )
    source = registry.resolve_tag(str(preferences.get("source_language", "")))
    builder = PatchNotesBuilder(
        registry,
        provider=provider,
        log=log,
        delay_between_targets=get_float(preferences, "delay_between_targets"),
    )
    if source:
        builder.source_tag = source
    return builder


def _open_draft(builder: PatchNotesBuilder, draft_path: Path) -> Draft:
    """Load a draft into the builder.

    Raises:
        FileNotFoundError: If the draft does not exist.
        DraftFormatError: If the draft cannot be parsed.
    """
    draft = load_draft(draft_path, builder.registry)
    builder.restore_entries(draft.entries)
    builder.source_tag = draft.source
    return draft


def _store_draft(builder: PatchNotesBuilder, draft: Draft, draft_path: Path) -> None:
    draft.entries = builder.entries
    draft.source = builder.source_tag
    save_draft(draft_path, draft)


def _resolve_or_report(registry: LanguageRegistry, codes: Sequence[str]) -> List[str]:
    tags = registry.normalize_tags(codes)
    unknown = [code for code in codes if code.lower() != "all" and not registry.resolve_tag(code)]
    for code in unknown:
        print(f" [!] Unknown language: {code}", file=sys.stderr)
    return tags


def cmd_languages(registry: LanguageRegistry) -> int:
    """Print every supported language.

    Args:
        registry: Language registry to list.

    Returns:
        Exit code (0 for success).
    """
    print("\nSupported Languages")
    print("=" * 72)
    print(f"{'TAG':<8} {'JSON':<8} {'CODE':<7} {'DEFAULT':<8} NAME")
    for info in registry.list_languages():
        default = "yes" if info.is_default else ""
        print(
            f"{info.tag:<8} {registry.json_code_for(info.tag):<8} "
            f"{info.translate_code:<7} {default:<8} {info.display_name}"
        )
    print("=" * 72)
    return 0


def cmd_config(
    registry: LanguageRegistry,
    preferences: Dict[str, Any],
    preferences_path: Path,
    args: argparse.Namespace,
) -> int:
    """Update or show stored preferences.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    changed = False
    api_keys = dict(preferences.get("api_keys") or {})

    if args.api_key is not None:
        api_keys["google_translate_api_key"] = args.api_key.strip()
        changed = True
    if args.project_id is not None:
        api_keys["google_project_id"] = args.project_id.strip()
        changed = True
    if args.output_dir is not None:
        preferences["output_dir"] = str(args.output_dir)
        changed = True
    if args.source is not None:
        tag = registry.resolve_tag(args.source)
        if not tag:
            return _error(f"Unknown language '{args.source}'.")
        preferences["source_language"] = tag
        changed = True
    if args.log_file is not None:
        preferences["log_file"] = str(args.log_file)
        changed = True

    if changed:
        preferences["api_keys"] = api_keys
        save_preferences(preferences, preferences_path)
        print(f"[CONFIG] Saved preferences to {preferences_path}")

    if args.show or not changed:
        effective = get_api_keys(preferences)
        print(f"\nPreferences file: {preferences_path}")
        print(f"  API key:          {mask_secret(effective['google_translate_api_key'])}")
        print(f"  Project ID:       {effective['google_project_id'] or '(not set)'}")
        print(f"  Output folder:    {preferences.get('output_dir')}")
        print(f"  Source language:  {preferences.get('source_language')}")
        print(f"  Request timeout:  {preferences.get('request_timeout')}s")
        print(f"  Delay per target: {preferences.get('delay_between_targets')}s")
        print(f"  Log file:         {preferences.get('log_file') or '(none)'}")
    return 0


def _read_messages(args: argparse.Namespace) -> Optional[str]:
    if args.messages_file is not None:
        if str(args.messages_file) == "-":
            return sys.stdin.read()
        return Path(args.messages_file).read_text(encoding="utf-8")
    return args.messages


def cmd_edit(builder: PatchNotesBuilder, draft_path: Path, args: argparse.Namespace) -> int:
    """Create or update a draft.

    Selection switches are applied first (defaults/all/none, then individual
    languages), followed by content changes.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    registry = builder.registry
    if draft_path.exists():
        draft = _open_draft(builder, draft_path)
    else:
        draft = Draft(source=builder.source_tag)
        builder.init_entries()

    if args.source is not None:
        tag = registry.resolve_tag(args.source)
        if not tag:
            return _error(f"Unknown language '{args.source}'.")
        builder.source_tag = tag

    if args.defaults:
        builder.select_defaults()
    if args.select_all:
        builder.select_all()
    if args.select_none:
        builder.deselect_all()
    for tag in _resolve_or_report(registry, args.select or []):
        builder.set_selected(tag, True)
    for tag in _resolve_or_report(registry, args.deselect or []):
        builder.set_selected(tag, False)
    for tag in _resolve_or_report(registry, args.enable or []):
        builder.set_enabled(tag, True)
    for tag in _resolve_or_report(registry, args.disable or []):
        builder.set_enabled(tag, False)

    locale = builder.source_tag
    if args.locale is not None:
        locale = registry.resolve_tag(args.locale)
        if not locale:
            return _error(f"Unknown language '{args.locale}'.")

    if args.title is not None:
        builder.set_title(locale, args.title)
    raw_messages = _read_messages(args)
    if raw_messages is not None:
        lines = builder.set_messages_text(locale, raw_messages)
        print(f"[EDIT] {locale}: {len(lines)} message line(s)")

    if args.version is not None:
        draft.version = args.version
    if args.date is not None:
        draft.date = args.date

    _store_draft(builder, draft, draft_path)
    print(f"[EDIT] Saved draft to {draft_path}")
    print_entries(builder)
    return 0


def cmd_translate(builder: PatchNotesBuilder, draft_path: Path, args: argparse.Namespace) -> int:
    """Machine-translate every selected language and save the draft.

    Ctrl+C stops the run before the next language; finished languages are
    kept and saved.

    Returns:
        Exit code (0 for success, 1 if validation failed or any language failed).
    """
    draft = _open_draft(builder, draft_path)
    if args.source is not None:
        tag = builder.registry.resolve_tag(args.source)
        if not tag:
            return _error(f"Unknown language '{args.source}'.")
        builder.source_tag = tag

    def on_interrupt(signum, frame):
        builder.log.warning("Cancel requested, finishing the current language...")
        builder.request_cancel()

    previous_handler = None
    try:
        previous_handler = signal.signal(signal.SIGINT, on_interrupt)
    except ValueError:
        # Not in the main thread; cancellation is left to the caller
        previous_handler = None

    try:
        result = builder.translate_all(
            on_progress=lambda done, total: print(f"Progress: {done}/{total}")
        )
    except (ValidationError, TranslationError) as e:
        return _error(str(e))
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGINT, previous_handler)

    _store_draft(builder, draft, draft_path)
    print_result(result)
    print(f"\nDraft saved to {draft_path}")
    return 0 if result.success else 1


def cmd_export(
    builder: PatchNotesBuilder,
    draft_path: Path,
    preferences: Dict[str, Any],
    args: argparse.Namespace,
) -> int:
    """Build the patch notes JSON and write, print, or copy it.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    draft = _open_draft(builder, draft_path)
    version = args.version if args.version is not None else draft.version
    date = args.date if args.date is not None else (draft.date or today_string())

    if version is None or version <= 0:
        return _error("A positive --version is required.")
    if not date:
        return _error("A --date is required.")
    if not is_valid_date(date):
        builder.log.warning(f"Date '{date}' is not in YYYY-MM-DD form.")

    exportable = builder.exportable_entries()
    if not exportable:
        return _error(
            "No selected and enabled language has a title or messages to export."
        )

    document = builder.build_document(version, date)
    text = document_to_json(document)

    if not args.no_write:
        output_dir = args.output_dir or Path(str(preferences.get("output_dir") or "."))
        builder.log.info(f"Exporting version {version_to_file_name(version)} ({date})")
        builder.export(version, date, output_dir, document=document)

    if args.print_json:
        print(text)

    if args.copy:
        try:
            copy_to_clipboard(text)
        except ClipboardError as e:
            return _error(str(e))
        builder.log.success(f"JSON copied to clipboard ({len(exportable)} language(s))")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="patchnotes",
        description="Multi-language patch notes JSON generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s languages                                   List supported languages
  %(prog)s config --api-key KEY                        Store the Google API key
  %(prog)s edit --draft d.json --title T --messages-file notes.txt
  %(prog)s translate --draft d.json                    Translate selected languages
  %(prog)s export --draft d.json --version 125         Write 1.2.5.json
        """,
    )
    parser.add_argument(
        "--preferences",
        type=Path,
        help="Path to the preferences file (default: ~/.patchnotes_generator.json)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print warnings, errors and results",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("languages", help="List supported languages")

    config_parser = subparsers.add_parser(
        "config",
        help="Store API key, output folder and defaults",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Usage examples:
  patchnotes config --api-key KEY            Store the Google Cloud API key
  patchnotes config --output-dir out/logs    Change where JSON files are saved
  patchnotes config --show                   Show current settings
        """,
    )
    config_parser.add_argument("--api-key", help="Google Cloud Translation API key")
    config_parser.add_argument("--project-id", help="Google Cloud project id (optional)")
    config_parser.add_argument("--output-dir", type=Path, help="Folder for exported JSON")
    config_parser.add_argument("--source", help="Default source language tag")
    config_parser.add_argument("--log-file", type=Path, help="Mirror console output here")
    config_parser.add_argument("--show", action="store_true", help="Show current settings")

    edit_parser = subparsers.add_parser(
        "edit",
        help="Create or update a draft",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Usage examples:
  patchnotes edit --draft d.json --title "Update" --messages-file notes.txt
  patchnotes edit --draft d.json --locale en-US --title "Hand-fixed title"
  patchnotes edit --draft d.json --select zh-TW fr-FR --disable ja-JP
        """,
    )
    edit_parser.add_argument("--draft", type=Path, required=True, help="Draft file")
    edit_parser.add_argument("--source", help="Source language to translate from")
    edit_parser.add_argument("--locale", help="Language to edit (default: source)")
    edit_parser.add_argument("--title", help="Title text")
    messages_group = edit_parser.add_mutually_exclusive_group()
    messages_group.add_argument(
        "--messages-file",
        help="File with one message per line ('-' reads stdin)",
    )
    messages_group.add_argument("--messages", help="Messages, one per line")
    edit_parser.add_argument("--select", nargs="+", metavar="TAG", help="Select languages")
    edit_parser.add_argument("--deselect", nargs="+", metavar="TAG", help="Deselect languages")
    edit_parser.add_argument("--enable", nargs="+", metavar="TAG", help="Include in output")
    edit_parser.add_argument("--disable", nargs="+", metavar="TAG", help="Exclude from output")
    edit_parser.add_argument("--defaults", action="store_true", help="Select default languages")
    edit_parser.add_argument("--all", dest="select_all", action="store_true", help="Select all")
    edit_parser.add_argument("--none", dest="select_none", action="store_true", help="Deselect all")
    edit_parser.add_argument("--version", type=int, help="Patch version number (e.g. 125)")
    edit_parser.add_argument("--date", help="Release date (YYYY-MM-DD)")

    translate_parser = subparsers.add_parser(
        "translate",
        help="Machine-translate selected languages from the source",
    )
    translate_parser.add_argument("--draft", type=Path, required=True, help="Draft file")
    translate_parser.add_argument("--source", help="Source language to translate from")

    export_parser = subparsers.add_parser(
        "export",
        help="Write the patch notes JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Usage examples:
  patchnotes export --draft d.json --version 125       Save <output>/1.2.5.json
  patchnotes export --draft d.json --no-write --copy   Copy JSON to clipboard only
        """,
    )
    export_parser.add_argument("--draft", type=Path, required=True, help="Draft file")
    export_parser.add_argument("--version", type=int, help="Patch version number")
    export_parser.add_argument("--date", help="Release date (default: draft date or today)")
    export_parser.add_argument("--output-dir", type=Path, help="Override the output folder")
    export_parser.add_argument("--copy", action="store_true", help="Copy JSON to clipboard")
    export_parser.add_argument(
        "--print", dest="print_json", action="store_true", help="Print JSON to stdout"
    )
    export_parser.add_argument("--no-write", action="store_true", help="Do not write a file")

    help_parser = subparsers.add_parser("help", help="Show help for a command")
    help_parser.add_argument(
        "help_command",
        nargs="?",
        choices=["languages", "config", "edit", "translate", "export"],
        help="Command to get help for",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point.

    Args:
        argv: Command-line arguments; uses sys.argv if None.

    Returns:
        Exit code for the process.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "help":
        if args.help_command:
            build_parser().parse_args([args.help_command, "--help"])
        else:
            parser.print_help()
        return 0

    registry = build_default_registry()
    preferences_path = args.preferences or get_preferences_path()
    preferences = load_preferences(preferences_path)
    log = ConsoleLog(log_file=preferences.get("log_file") or None, quiet=args.quiet)

    if args.command == "languages":
        return cmd_languages(registry)
    if args.command == "config":
        return cmd_config(registry, preferences, preferences_path, args)

    builder = _new_builder(
        registry, preferences, log, with_provider=args.command == "translate"
    )
    try:
        if args.command == "edit":
            return cmd_edit(builder, args.draft, args)
        if args.command == "translate":
            return cmd_translate(builder, args.draft, args)
        if args.command == "export":
            return cmd_export(builder, args.draft, preferences, args)
    except FileNotFoundError as e:
        return _error(f"File not found: {e.filename}")
    except DraftFormatError as e:
        return _error(str(e))
    except OSError as e:
        return _error(f"Could not write file: {e}")

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
