from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag
from typing import Any, Final, Union


class ValueKind(str, Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    PERCENTAGE = "percentage"
    COORDINATE = "coordinate"
    OPTION = "option"
    FLAGS_OPTION = "flags_option"
    SHORTCUT = "shortcut"


class PolicyKind(str, Enum):
    NONE = "none"
    STRING_MATCH = "string_match"
    SET_RULE = "set_rule"
    FORCE_RULE = "force_rule"


class Policy(IntEnum):
    UNUSED = 0
    DONT_AFFECT = 1
    FORCE = 2
    APPLY = 3
    REMEMBER = 4
    APPLY_NOW = 5
    FORCE_TEMPORARILY = 6


class StringMatch(IntEnum):
    UNIMPORTANT = 0
    EXACT = 1
    SUBSTRING = 2
    REGEXP = 3


class RuleFlag(IntFlag):
    NONE = 0
    ALWAYS_ENABLED = 1 << 0
    START_ENABLED = 1 << 1
    AFFECTS_WARNING = 1 << 2
    AFFECTS_DESCRIPTION = 1 << 3


class WindowType(IntEnum):
    UNKNOWN = -1
    NORMAL = 0
    DESKTOP = 1
    DOCK = 2
    TOOLBAR = 3
    MENU = 4
    DIALOG = 5
    OVERRIDE = 6
    TOP_MENU = 7
    UTILITY = 8
    SPLASH = 9


ALL_TYPES_MASK: Final[int] = 0xFFFFFFFF
KNOWN_TYPES_MASK: Final[int] = 0x3FF
ON_ALL_DESKTOPS: Final[int] = -1
NULL_ACTIVITY: Final[str] = "00000000-0000-0000-0000-000000000000"


class ItemRole(str, Enum):
    ENABLED = "enabled"
    VALUE = "value"
    POLICY = "policy"


@dataclass(frozen=True)
class Coordinate:
    x: int
    y: int

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


OptionValue = Union[int, str]
ItemValue = Union[str, bool, int, Coordinate]


@dataclass(frozen=True)
class OptionData:
    value: OptionValue
    text: str
    icon: str = ""


POLICY_OPTIONS: Final[dict[PolicyKind, tuple[OptionData, ...]]] = {
    PolicyKind.NONE: (),
    PolicyKind.STRING_MATCH: (
        OptionData(StringMatch.UNIMPORTANT.value, "Unimportant"),
        OptionData(StringMatch.EXACT.value, "Exact Match"),
        OptionData(StringMatch.SUBSTRING.value, "Substring Match"),
        OptionData(StringMatch.REGEXP.value, "Regular Expression"),
    ),
    PolicyKind.SET_RULE: (
        OptionData(Policy.APPLY.value, "Apply Initially"),
        OptionData(Policy.APPLY_NOW.value, "Apply Now"),
        OptionData(Policy.REMEMBER.value, "Remember"),
        OptionData(Policy.FORCE.value, "Force"),
        OptionData(Policy.FORCE_TEMPORARILY.value, "Force Temporarily"),
        OptionData(Policy.DONT_AFFECT.value, "Do Not Affect"),
    ),
    PolicyKind.FORCE_RULE: (
        OptionData(Policy.FORCE.value, "Force"),
        OptionData(Policy.FORCE_TEMPORARILY.value, "Force Temporarily"),
        OptionData(Policy.DONT_AFFECT.value, "Do Not Affect"),
    ),
}


def policy_values(kind: PolicyKind) -> tuple[int, ...]:
    return tuple(int(option.value) for option in POLICY_OPTIONS[kind])


def default_policy(kind: PolicyKind) -> int | None:
    values = policy_values(kind)
    return values[0] if values else None


def policy_text(kind: PolicyKind, value: int | None) -> str:
    for option in POLICY_OPTIONS[kind]:
        if option.value == value:
            return option.text
    return ""


@dataclass
class ImportSummary:
    appended: list[str] = field(default_factory=list)
    replaced: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.appended or self.replaced or self.removed or self.skipped)

    def as_dict(self) -> dict[str, list[str]]:
        return {
            "appended": list(self.appended),
            "replaced": list(self.replaced),
            "removed": list(self.removed),
            "skipped": list(self.skipped),
        }


@dataclass(frozen=True)
class RuleBookRow:
    number: int
    description: str
    warning: bool
    editing: bool

    def as_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "description": self.description,
            "warning": self.warning,
            "editing": self.editing,
        }
