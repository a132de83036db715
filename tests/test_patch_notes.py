#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Tests for patch note line splitting, document assembly and file output.

Usage:
    python -m pytest tests/test_patch_notes.py -v
"""

import json
import sys
from pathlib import Path

import pytest

# Add src to path for imports
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from patchnotes.core import (  # noqa: E402
    LocaleEntry,
    build_document,
    document_path,
    document_to_json,
    is_valid_date,
    split_to_lines,
    today_string,
    version_to_file_name,
    write_document,
)
from patchnotes.localization import build_default_registry  # noqa: E402


def make_entry(tag, title="", messages=None, selected=True, enabled=True):
    return LocaleEntry(
        tag=tag,
        display_name=tag,
        translate_code=tag.split("-")[0],
        title=title,
        messages=list(messages or []),
        selected=selected,
        enabled=enabled,
    )


@pytest.fixture
def registry():
    return build_default_registry()


class TestSplitToLines:
    """Raw message blocks become trimmed, non-blank lines."""

    def test_crlf_and_blank_lines(self):
        assert split_to_lines("a\r\n\r\nb\r\nc") == ["a", "b", "c"]

    def test_lone_carriage_returns(self):
        assert split_to_lines("one\rtwo\r\rthree") == ["one", "two", "three"]

    def test_lines_are_trimmed(self):
        assert split_to_lines("  - fixed crash  \n\t\n new boss\t") == [
            "- fixed crash",
            "new boss",
        ]

    def test_empty_and_none(self):
        assert split_to_lines("") == []
        assert split_to_lines(None) == []
        assert split_to_lines(" \n \r\n ") == []

    @pytest.mark.parametrize(
        "raw",
        ["a\r\n\r\nb\r\nc", "  x \n\n y\r z  ", "", "\n\n", "single"],
    )
    def test_idempotent(self, raw):
        once = split_to_lines(raw)
        assert split_to_lines("\n".join(once)) == once


class TestVersionToFileName:
    @pytest.mark.parametrize(
        "version, expected",
        [
            (125, "1.2.5"),
            (7, "0.0.7"),
            (-3, "0.0.0"),
            (0, "0.0.0"),
            (10, "0.1.0"),
            (1215, "12.1.5"),
        ],
    )
    def test_digit_grouping(self, version, expected):
        assert version_to_file_name(version) == expected

    def test_document_path(self, tmp_path):
        assert document_path(tmp_path, 125) == tmp_path / "1.2.5.json"


class TestBuildDocument:
    """Only selected, enabled, non-empty entries reach the output."""

    def test_filters_unselected_and_disabled(self, registry):
        entries = [
            make_entry("ko-KR", "제목", ["메시지"]),
            make_entry("en-US", "Title", ["Msg"], selected=False),
            make_entry("ja-JP", "タイトル", ["メッセージ"], enabled=False),
            make_entry("zh-CN", "标题", ["信息"], selected=False, enabled=False),
        ]
        document = build_document(125, "2025-09-30", entries, registry)
        assert document.languages == ["ko_KR"]

    def test_excludes_empty_entries(self, registry):
        entries = [
            make_entry("ko-KR", "   ", []),
            make_entry("en-US", "Title only"),
            make_entry("ja-JP", "", ["Message only"]),
        ]
        document = build_document(1, "2025-01-01", entries, registry)
        assert document.languages == ["en_US", "ja_JP"]

    def test_language_codes_are_mapped(self, registry):
        entries = [make_entry("zh-TW", "t"), make_entry("xx-YY", "t")]
        document = build_document(1, "2025-01-01", entries, registry)
        assert document.languages == ["zh_TW", "xx_YY"]

    def test_none_fields_are_coerced(self, registry):
        entry = make_entry("en-US", None, ["kept"])
        other = make_entry("fr-FR", "Titre")
        other.messages = None
        document = build_document(1, "2025-01-01", [entry, other], registry)

        data = document.to_dict()
        assert data["updateDetail"][0]["title"] == ""
        assert data["updateDetail"][1]["messages"] == []

    def test_blank_messages_dropped(self, registry):
        entry = make_entry("en-US", "Title", ["keep", "   ", "also keep"])
        document = build_document(1, "2025-01-01", [entry], registry)
        assert document.update_detail[0].messages == ["keep", "also keep"]

    def test_dict_shape(self, registry):
        entries = [make_entry("ko-KR", "업데이트", ["버그 수정", "신규 스테이지"])]
        data = build_document(125, "2025-09-30", entries, registry).to_dict()
        assert data == {
            "version": 125,
            "date": "2025-09-30",
            "updateDetail": [
                {
                    "language": "ko_KR",
                    "title": "업데이트",
                    "messages": ["버그 수정", "신규 스테이지"],
                }
            ],
        }

    def test_no_entries(self, registry):
        document = build_document(3, "2025-01-01", [], registry)
        assert document.to_dict()["updateDetail"] == []


class TestWriteDocument:
    def test_creates_parent_directories(self, tmp_path, registry):
        document = build_document(
            125, "2025-09-30", [make_entry("ja-JP", "更新", ["修正"])], registry
        )
        target = tmp_path / "Assets" / "Resources" / "UpdateLogs" / "1.2.5.json"

        written = write_document(target, document)

        assert written == target
        raw = target.read_bytes()
        assert not raw.startswith(b"\xef\xbb\xbf")
        text = raw.decode("utf-8")
        assert "更新" in text
        assert "\n  " in text
        assert json.loads(text) == document.to_dict()

    def test_write_failure_propagates(self, tmp_path, registry):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x", encoding="utf-8")
        document = build_document(1, "2025-01-01", [], registry)

        with pytest.raises(OSError):
            write_document(blocker / "1.json", document)

    def test_json_text_matches_dict(self, registry):
        document = build_document(2, "2025-01-01", [make_entry("en-US", "T", ["m"])], registry)
        assert json.loads(document_to_json(document)) == document.to_dict()


class TestDates:
    def test_today_string_is_valid(self):
        assert is_valid_date(today_string())

    @pytest.mark.parametrize("text", ["2025-13-01", "2025-1-1", "", None, "yesterday"])
    def test_invalid_dates(self, text):
        assert not is_valid_date(text)


class TestIllTypedEntries:
    """Odd field values are coerced instead of failing."""

    def test_non_string_title(self, registry):
        entry = make_entry("en-US", messages=["m"])
        entry.title = 123
        document = build_document(1, "2025-01-01", [entry], registry)
        assert document.to_dict()["updateDetail"] == [
            {"language": "en_US", "title": "", "messages": ["m"]}
        ]

    def test_string_messages_not_split(self, registry):
        entry = make_entry("en-US", "Title")
        entry.messages = "not a list"
        document = build_document(1, "2025-01-01", [entry], registry)
        assert document.update_detail[0].messages == []

    def test_non_string_messages_dropped(self, registry):
        entry = make_entry("en-US", "Title", ["ok", 5, None])
        assert entry.clean_messages() == ["ok"]

    def test_nothing_usable_is_not_exported(self, registry):
        entry = make_entry("en-US", messages=["  "])
        entry.title = 0
        assert not entry.has_content()
        assert build_document(1, "2025-01-01", [entry], registry).languages == []
