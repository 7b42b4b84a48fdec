"""Live state of a single rule field: enabled flag, typed value and policy."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Callable, Optional

from window_rules.models import (
    Coordinate,
    ItemRole,
    ItemValue,
    OptionData,
    PolicyKind,
    RuleFlag,
    ValueKind,
    default_policy,
    policy_values,
)
from window_rules.rules.catalog import RuleField

_COORDINATE_RE = re.compile(r"^\s*(-?\d+)\s*[,xX\s]\s*(-?\d+)\s*$")
_INTEGER_RE = re.compile(r"^\s*[-+]?\d+\s*$")
_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})

ChangeCallback = Callable[["RuleItem", ItemRole], None]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _to_int(value: Any) -> int:
    if _is_int(value):
        return value
    if isinstance(value, str) and _INTEGER_RE.match(value):
        return int(value)
    raise ValueError(f"not an integer: {value!r}")


def zero_value(kind: ValueKind, options: tuple[OptionData, ...] = ()) -> ItemValue:
    if kind in (ValueKind.STRING, ValueKind.SHORTCUT):
        return ""
    if kind == ValueKind.BOOLEAN:
        return False
    if kind in (ValueKind.INTEGER, ValueKind.PERCENTAGE, ValueKind.FLAGS_OPTION):
        return 0
    if kind == ValueKind.COORDINATE:
        return Coordinate(0, 0)
    return options[0].value if options else ""


def coerce_value(
    kind: ValueKind, value: Any, options: tuple[OptionData, ...] = ()
) -> ItemValue:
    """Convert ``value`` to the representation used for ``kind``.

    Raises ``ValueError`` when the value cannot represent the kind.
    """
    if kind in (ValueKind.STRING, ValueKind.SHORTCUT):
        if not isinstance(value, str):
            raise ValueError(f"expected text, got {type(value).__name__}")
        return value

    if kind == ValueKind.BOOLEAN:
        if isinstance(value, bool):
            return value
        if _is_int(value) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise ValueError(f"not a boolean: {value!r}")

    if kind == ValueKind.INTEGER:
        return _to_int(value)

    if kind == ValueKind.PERCENTAGE:
        number = _to_int(value)
        if not 0 <= number <= 100:
            raise ValueError(f"percentage out of range: {number}")
        return number

    if kind == ValueKind.COORDINATE:
        if isinstance(value, Coordinate):
            return value
        if isinstance(value, str):
            match = _COORDINATE_RE.match(value)
            if not match:
                raise ValueError(f"not a coordinate: {value!r}")
            return Coordinate(int(match.group(1)), int(match.group(2)))
        if isinstance(value, (list, tuple)) and len(value) == 2:
            if all(_is_int(part) for part in value):
                return Coordinate(value[0], value[1])
        raise ValueError(f"not a coordinate: {value!r}")

    if kind == ValueKind.OPTION:
        if isinstance(value, bool):
            raise ValueError("option values cannot be booleans")
        if _is_int(value):
            return value
        if isinstance(value, str):
            numeric_options = bool(options) and all(_is_int(o.value) for o in options)
            if numeric_options and _INTEGER_RE.match(value):
                return int(value)
            return value
        raise ValueError(f"not an option value: {value!r}")

    if kind == ValueKind.FLAGS_OPTION:
        if _is_int(value) or isinstance(value, str):
            mask = _to_int(value)
            if mask < 0:
                raise ValueError(f"negative flags mask: {mask}")
            return mask
        if isinstance(value, Iterable):
            mask = 0
            for bit in value:
                bit_index = _to_int(bit)
                if bit_index < 0:
                    raise ValueError(f"negative flag index: {bit_index}")
                mask |= 1 << bit_index
            return mask
        raise ValueError(f"not a flags value: {value!r}")

    raise ValueError(f"unknown value kind: {kind}")


class RuleItem:
    def __init__(self, field: RuleField, on_change: Optional[ChangeCallback] = None) -> None:
        self.field = field
        self._on_change = on_change
        self._options = field.options
        self._enabled = field.has_flag(RuleFlag.ALWAYS_ENABLED)
        self._value: ItemValue = zero_value(field.value_kind, self._options)
        self._policy = default_policy(field.policy_kind)

    def __repr__(self) -> str:
        return (
            f"RuleItem(key={self.key!r}, enabled={self._enabled!r}, "
            f"value={self._value!r}, policy={self._policy!r})"
        )

    @property
    def key(self) -> str:
        return self.field.key

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def section(self) -> str:
        return self.field.section

    @property
    def value_kind(self) -> ValueKind:
        return self.field.value_kind

    @property
    def policy_kind(self) -> PolicyKind:
        return self.field.policy_kind

    @property
    def policy_key(self) -> str | None:
        return self.field.policy_key

    @property
    def selectable(self) -> bool:
        return not self.has_flag(RuleFlag.ALWAYS_ENABLED)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def value(self) -> ItemValue:
        return self._value

    @property
    def policy(self) -> int | None:
        return self._policy

    @property
    def options(self) -> tuple[OptionData, ...]:
        return self._options

    def has_flag(self, flag: RuleFlag) -> bool:
        return self.field.has_flag(flag)

    def is_empty(self) -> bool:
        return self._value == ""

    def set_enabled(self, enabled: bool) -> bool:
        if self.has_flag(RuleFlag.ALWAYS_ENABLED):
            enabled = True
        if enabled == self._enabled:
            return False
        self._enabled = enabled
        self._notify(ItemRole.ENABLED)
        return True

    def set_value(self, value: Any) -> bool:
        try:
            coerced = coerce_value(self.value_kind, value, self._options)
        except ValueError:
            return False
        if coerced == self._value and type(coerced) is type(self._value):
            return False
        self._value = coerced
        self._notify(ItemRole.VALUE)
        return True

    def set_policy(self, policy: Any) -> bool:
        if not _is_int(policy) or policy not in policy_values(self.policy_kind):
            return False
        if policy == self._policy:
            return False
        self._policy = int(policy)
        self._notify(ItemRole.POLICY)
        return True

    def set_options(self, options: Iterable[OptionData]) -> None:
        self._options = tuple(options)

    def assign(self, other: RuleItem) -> None:
        """Take over the state of ``other``, which must describe the same field."""
        if other.key != self.key:
            raise ValueError(f"cannot assign {other.key!r} to {self.key!r}")
        self._options = other._options
        if other._value != self._value or type(other._value) is not type(self._value):
            self._value = other._value
            self._notify(ItemRole.VALUE)
        if other._policy != self._policy:
            self._policy = other._policy
            self._notify(ItemRole.POLICY)
        if other._enabled != self._enabled:
            self._enabled = other._enabled
            self._notify(ItemRole.ENABLED)

    def state(self) -> tuple[bool, ItemValue, int | None]:
        return self._enabled, self._value, self._policy

    def reset(self) -> None:
        self.set_value(zero_value(self.value_kind, self._options))
        if self._policy != default_policy(self.policy_kind):
            self._policy = default_policy(self.policy_kind)
            self._notify(ItemRole.POLICY)
        self.set_enabled(False)

    def display_value(self) -> str:
        value = self._value
        if self.value_kind == ValueKind.BOOLEAN:
            return "yes" if value else "no"
        if self.value_kind == ValueKind.OPTION:
            for option in self._options:
                if option.value == value:
                    return option.text
            return str(value)
        if self.value_kind == ValueKind.FLAGS_OPTION:
            names = [
                option.text
                for option in self._options
                if _is_int(option.value) and option.value >= 0 and value & (1 << option.value)
            ]
            return ", ".join(names) if names else str(value)
        return str(value)

    def _notify(self, role: ItemRole) -> None:
        if self._on_change is not None:
            self._on_change(self, role)
