#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Tests for preferences persistence, env overrides and console logging.

Usage:
    python -m pytest tests/test_preferences.py -v
"""

import io
import json
import sys
from pathlib import Path

import pytest

# Add src to path for imports
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from patchnotes.utils import ConsoleLog  # noqa: E402
from patchnotes.utils.preferences import (  # noqa: E402
    API_KEY_ENV_VAR,
    DEFAULT_PREFERENCES,
    PREFERENCES_ENV_VAR,
    PROJECT_ID_ENV_VAR,
    get_api_keys,
    get_float,
    get_preferences_path,
    load_preferences,
    mask_secret,
    save_preferences,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (API_KEY_ENV_VAR, PROJECT_ID_ENV_VAR, PREFERENCES_ENV_VAR):
        monkeypatch.delenv(name, raising=False)


class TestPreferencesFile:
    def test_missing_file_gives_defaults(self, tmp_path):
        prefs = load_preferences(tmp_path / "none.json")
        assert prefs["output_dir"] == "Assets/Resources/UpdateLogs"
        assert prefs["source_language"] == "ko-KR"
        assert prefs["api_keys"]["google_translate_api_key"] == ""

    def test_defaults_not_shared(self, tmp_path):
        prefs = load_preferences(tmp_path / "none.json")
        prefs["api_keys"]["google_translate_api_key"] = "changed"
        assert DEFAULT_PREFERENCES["api_keys"]["google_translate_api_key"] == ""

    def test_stored_values_merge_with_defaults(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(
            json.dumps({"output_dir": "out", "api_keys": {"google_translate_api_key": "k"}}),
            encoding="utf-8",
        )
        prefs = load_preferences(path)
        assert prefs["output_dir"] == "out"
        assert prefs["request_timeout"] == 30
        assert prefs["api_keys"] == {"google_translate_api_key": "k", "google_project_id": ""}

    def test_corrupt_file_gives_defaults(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[oops", encoding="utf-8")
        assert load_preferences(path)["output_dir"] == DEFAULT_PREFERENCES["output_dir"]

    def test_non_utf8_file_gives_defaults(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_bytes(b'{"output_dir": "\xff"}')
        assert load_preferences(path)["output_dir"] == DEFAULT_PREFERENCES["output_dir"]

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        prefs = load_preferences(path)
        prefs["source_language"] = "en-US"
        save_preferences(prefs, path)
        assert load_preferences(path)["source_language"] == "en-US"

    def test_env_path_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv(PREFERENCES_ENV_VAR, str(tmp_path / "p.json"))
        assert get_preferences_path() == tmp_path / "p.json"


class TestApiKeys:
    def test_env_takes_precedence(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV_VAR, "env-key")
        monkeypatch.setenv(PROJECT_ID_ENV_VAR, "env-project")
        keys = get_api_keys({"api_keys": {"google_translate_api_key": "stored"}})
        assert keys["google_translate_api_key"] == "env-key"
        assert keys["google_project_id"] == "env-project"

    def test_blank_env_ignored(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV_VAR, "  ")
        keys = get_api_keys({"api_keys": {"google_translate_api_key": "stored"}})
        assert keys["google_translate_api_key"] == "stored"

    def test_bad_api_keys_value(self):
        assert get_api_keys({"api_keys": "nope"})["google_translate_api_key"] == ""

    @pytest.mark.parametrize(
        "value, expected",
        [("", "(not set)"), ("short", "*****"), ("AIzaSyABCDEFGH", "AIza******EFGH")],
    )
    def test_mask_secret(self, value, expected):
        assert mask_secret(value) == expected

    def test_get_float_fallback(self):
        assert get_float({"delay_between_targets": "fast"}, "delay_between_targets") == 0.12
        assert get_float({"request_timeout": 10}, "request_timeout") == 10.0


class TestConsoleLog:
    def make(self, **kwargs):
        out, err = io.StringIO(), io.StringIO()
        return ConsoleLog(stdout=out, stderr=err, **kwargs), out, err

    def test_levels_route_to_streams(self):
        log, out, err = self.make()
        log.info("working")
        log.success("done")
        log.warning("careful")
        log.error("broken")

        assert out.getvalue() == "working\n[SUCCESS] done\n"
        assert err.getvalue() == "[WARNING] careful\n[ERROR] broken\n"
        assert [level for level, _ in log.history] == ["info", "success", "warning", "error"]

    def test_quiet_hides_info_only(self):
        log, out, err = self.make(quiet=True)
        log.info("hidden")
        log.error("shown")
        assert out.getvalue() == ""
        assert "shown" in err.getvalue()

    def test_unknown_level_is_info(self):
        log, out, _ = self.make()
        log.log("plain", "verbose")
        assert out.getvalue() == "plain\n"

    def test_file_mirror(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        log, _, _ = self.make(log_file=log_file)
        log.info("first")
        log.error("second")

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert lines[0].endswith("[INFO] first")
        assert lines[1].endswith("[ERROR] second")
        assert lines[0].startswith("[")
