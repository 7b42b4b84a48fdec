import json
from pathlib import Path

import pytest

from window_rules.errors import (
    InvalidJsonFormatError,
    InvalidRuleFileSchemaError,
    MissingRuleFileError,
)
from window_rules.models import Coordinate, ItemRole, Policy, StringMatch
from window_rules.rules.codec import RuleCodec
from window_rules.rules.record import RuleRecord


@pytest.fixture
def codec() -> RuleCodec:
    return RuleCodec()


def _full_group() -> dict:
    return {
        "description": "Video player",
        "wmclass": "mpv",
        "wmclassPolicy": StringMatch.EXACT.value,
        "wmclasscomplete": False,
        "types": 1,
        "windowrole": "main",
        "title": "Movie",
        "titlePolicy": StringMatch.SUBSTRING.value,
        "clientmachine": "localhost",
        "clientmachinePolicy": StringMatch.EXACT.value,
        "position": "10,20",
        "positionPolicy": Policy.REMEMBER.value,
        "size": "1280,720",
        "sizePolicy": Policy.FORCE.value,
        "desktop": -1,
        "desktopPolicy": Policy.APPLY.value,
        "placement": "Centered",
        "placementPolicy": Policy.FORCE.value,
        "opacityactive": 90,
        "opacityactivePolicy": Policy.FORCE_TEMPORARILY.value,
        "fsplevel": 4,
        "fsplevelPolicy": Policy.FORCE.value,
        "above": True,
        "abovePolicy": Policy.APPLY_NOW.value,
        "shortcut": "Meta+V",
        "shortcutPolicy": Policy.APPLY.value,
    }


def test_decode_enables_fields_with_policy(codec: RuleCodec) -> None:
    record = codec.decode({"wmclass": "firefox", "wmclassPolicy": 1, "size": "800x600", "sizePolicy": 2})

    assert record.item("wmclass").state() == (True, "firefox", StringMatch.EXACT)
    assert record.item("size").state() == (True, Coordinate(800, 600), Policy.FORCE)
    assert record.item("title").enabled is False


@pytest.mark.parametrize(
    "group",
    [
        {"position": "10,20"},
        {"position": "10,20", "positionPolicy": 0},
        {"position": "10,20", "positionPolicy": 99},
        {"position": "left", "positionPolicy": 3},
        {"position": "", "positionPolicy": 3},
    ],
)
def test_decode_resets_unusable_fields(codec: RuleCodec, group: dict) -> None:
    record = codec.decode(group)

    assert record.item("position").state() == (False, Coordinate(0, 0), Policy.APPLY)


def test_decode_non_mapping_group_gives_defaults(codec: RuleCodec) -> None:
    record = codec.decode(["not", "a", "group"])

    assert record.description == "New window settings"
    assert not any(item.enabled for item in record if item.selectable)


def test_encode_fills_default_description(codec: RuleCodec) -> None:
    record = RuleRecord.new()
    record.set_data("wmclass", ItemRole.VALUE, "kate")

    group = codec.encode(record)

    assert group["description"] == "Settings for kate"
    assert record.item("description").value == "Settings for kate"


def test_encode_marks_disabled_fields(codec: RuleCodec) -> None:
    record = RuleRecord.new()
    record.set_data("title", ItemRole.VALUE, "ignored")

    group = codec.encode(record)

    assert group["title"] == "ignored"
    assert group["titlePolicy"] == Policy.UNUSED
    assert group["windowrole"] == ""
    assert group["types"] == 0
    assert "typesPolicy" not in group
    assert group["position"] == "0,0"
    assert group["positionPolicy"] == Policy.UNUSED


def test_empty_type_filter_stays_enabled(codec: RuleCodec) -> None:
    record = codec.decode({"description": "No types", "types": ""})

    assert record.item("types").state()[:2] == (True, 0)
    assert codec.encode(record)["types"] == 0


def test_round_trip_fully_specified_group(codec: RuleCodec) -> None:
    group = _full_group()

    encoded = codec.encode(codec.decode(group))

    for key, value in group.items():
        assert encoded[key] == value, key
    assert codec.decode(encoded).state() == codec.decode(group).state()


def test_export_single_keys_by_description(codec: RuleCodec, tmp_path: Path) -> None:
    record = codec.decode(_full_group())
    path = tmp_path / "out" / "video.winrule"

    written = codec.export_single(record, path)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert written == path
    assert list(payload) == ["Video player"]
    assert payload["Video player"]["wmclass"] == "mpv"


def test_read_import_file_flags_deletion(codec: RuleCodec, tmp_path: Path, write_json) -> None:
    path = tmp_path / "rules.winrule"
    write_json(
        path,
        {
            "first": {"description": "Keep", "above": True, "abovePolicy": 2},
            "second": {"description": "Drop", "DeleteRule": True},
            "third": {"wmclass": "orphan"},
        },
    )

    imported = codec.read_import_file(path)

    assert [(entry.group, entry.description, entry.delete) for entry in imported] == [
        ("first", "Keep", False),
        ("second", "Drop", True),
        ("third", "", False),
    ]
    assert imported[0].record.item("above").state() == (True, True, Policy.FORCE)


def test_read_import_file_errors(codec: RuleCodec, tmp_path: Path, write_json) -> None:
    with pytest.raises(MissingRuleFileError):
        codec.read_import_file(tmp_path / "missing.winrule")

    broken = tmp_path / "broken.winrule"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidJsonFormatError):
        codec.read_import_file(broken)

    wrong_shape = tmp_path / "shape.winrule"
    write_json(wrong_shape, {"rule": ["a", "list"]})
    with pytest.raises(InvalidRuleFileSchemaError) as exc_info:
        codec.read_import_file(wrong_shape)
    assert "rule" in str(exc_info.value)


def test_read_empty_import_file(codec: RuleCodec, tmp_path: Path) -> None:
    path = tmp_path / "empty.winrule"
    path.write_text("", encoding="utf-8")

    assert codec.read_import_file(path) == []
