import json
from pathlib import Path

from window_rules.utils import (
    compact_home_path,
    compact_home_paths_in_text,
    read_json_safe,
    safe_filename,
    write_json,
)


# --- read_json_safe ---


def test_read_json_safe_file_missing(tmp_path: Path) -> None:
    result, error = read_json_safe(tmp_path / "missing.json")

    assert result is None
    assert error is None


def test_read_json_safe_file_empty(tmp_path: Path) -> None:
    path = tmp_path / "empty.json"
    path.write_text("", encoding="utf-8")

    assert read_json_safe(path) == (None, None)


def test_read_json_safe_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{nope", encoding="utf-8")

    result, error = read_json_safe(path)

    assert result is None
    assert error


# --- write_json ---


def test_write_json_creates_parents_and_keeps_unicode(tmp_path: Path) -> None:
    path = tmp_path / "a" / "b" / "rules.json"

    write_json(path, {"description": "Fenêtre"})

    text = path.read_text(encoding="utf-8")
    assert "Fenêtre" in text
    assert text.endswith("\n")
    assert json.loads(text) == {"description": "Fenêtre"}


# --- safe_filename ---


def test_safe_filename_replaces_separators() -> None:
    assert safe_filename("Settings for a/b: c") == "Settings for a_b_ c"


def test_safe_filename_fallback() -> None:
    assert safe_filename(" .. ") == "rule"
    assert safe_filename("", fallback="export") == "export"


# --- compact_home_path ---


def test_compact_home_path(tmp_path: Path) -> None:
    assert compact_home_path(tmp_path) == "~"
    assert compact_home_path(tmp_path / "rules.json") == "~/rules.json"
    assert compact_home_path("/etc/rules.json") == "/etc/rules.json"


def test_compact_home_paths_in_text(tmp_path: Path) -> None:
    text = f"Missing rules file: {tmp_path}/.config/window-rules/rules.json"

    assert compact_home_paths_in_text(text) == "Missing rules file: ~/.config/window-rules/rules.json"
