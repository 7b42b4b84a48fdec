"""A named window rule: one item per catalog field plus derived state."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Final

from window_rules.models import (
    ALL_TYPES_MASK,
    KNOWN_TYPES_MASK,
    ItemRole,
    ItemValue,
    RuleFlag,
    StringMatch,
    WindowType,
)
from window_rules.rules.catalog import RULE_FIELDS
from window_rules.rules.item import RuleItem
from window_rules.signals import ChangeNotifier, Signal

NEW_RULE_DESCRIPTION: Final[str] = "New window settings"

WMCLASS_WARNING: Final[str] = (
    "You have specified the window class as unimportant.\n"
    "This means the settings will possibly apply to windows from all applications."
    " If you really want to create a generic setting, it is recommended"
    " you at least limit the window types to avoid special window types."
)


class RuleRecord:
    def __init__(self, notifier: ChangeNotifier | None = None) -> None:
        self.notifier = notifier or ChangeNotifier()
        self._items: dict[str, RuleItem] = {
            field.key: RuleItem(field, on_change=self._item_changed)
            for field in RULE_FIELDS
        }
        self._batch_depth = 0

    @classmethod
    def new(cls, notifier: ChangeNotifier | None = None) -> RuleRecord:
        record = cls(notifier)
        with record.batch_update():
            for item in record:
                item.reset()
                if item.has_flag(RuleFlag.START_ENABLED):
                    item.set_enabled(True)
        return record

    def __iter__(self) -> Iterator[RuleItem]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"RuleRecord(description={self.description!r})"

    def keys(self) -> list[str]:
        return list(self._items)

    def has_item(self, key: str) -> bool:
        return key in self._items

    def item(self, key: str) -> RuleItem:
        return self._items[key]

    def __getitem__(self, key: str) -> RuleItem:
        return self._items[key]

    @property
    def description(self) -> str:
        explicit = self._items["description"].value
        if explicit:
            return str(explicit)
        return self.default_description()

    def default_description(self) -> str:
        title_item = self._items["title"]
        title = str(title_item.value) if title_item.enabled else ""
        wmclass = str(self._items["wmclass"].value)
        if title:
            return f"Window settings for {title}"
        if wmclass:
            return f"Settings for {wmclass}"
        return NEW_RULE_DESCRIPTION

    @property
    def warning(self) -> bool:
        wmclass = self._items["wmclass"]
        no_wmclass = not wmclass.enabled or wmclass.policy == StringMatch.UNIMPORTANT
        types = self._items["types"]
        mask = int(types.value) if isinstance(types.value, int) else 0
        override_bit = 1 << WindowType.OVERRIDE
        all_types = (
            not types.enabled
            or mask == 0
            or mask == ALL_TYPES_MASK
            or (mask | override_bit) == KNOWN_TYPES_MASK
        )
        return no_wmclass and all_types

    @property
    def warning_message(self) -> str:
        return WMCLASS_WARNING if self.warning else ""

    def set_data(self, key: str, role: ItemRole, value: Any) -> bool:
        item = self._items.get(key)
        if item is None:
            return False
        if role == ItemRole.ENABLED:
            item.set_enabled(bool(value))
        elif role == ItemRole.VALUE:
            item.set_value(value)
        elif role == ItemRole.POLICY:
            item.set_policy(value)
        else:
            return False
        return True

    def reset(self) -> None:
        with self.batch_update():
            for item in self:
                item.reset()

    def assign(self, other: RuleRecord) -> None:
        with self.batch_update():
            for item in self:
                item.assign(other.item(item.key))

    def copy(self, notifier: ChangeNotifier | None = None) -> RuleRecord:
        clone = RuleRecord(notifier)
        with clone.batch_update():
            for item in clone:
                item.assign(self._items[item.key])
        return clone

    def state(self) -> dict[str, tuple[bool, ItemValue, int | None]]:
        return {key: item.state() for key, item in self._items.items()}

    def emit_derived(self) -> None:
        self.notifier.emit(Signal.DESCRIPTION_CHANGED, self.description)
        self.notifier.emit(Signal.WARNING_CHANGED, self.warning)

    @contextmanager
    def batch_update(self) -> Iterator[RuleRecord]:
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
        if self._batch_depth == 0:
            self.notifier.emit(Signal.DATA_CHANGED, None, None)
            self.emit_derived()

    def _item_changed(self, item: RuleItem, role: ItemRole) -> None:
        if self._batch_depth:
            return
        self.notifier.emit(Signal.DATA_CHANGED, item.key, role)
        if item.has_flag(RuleFlag.AFFECTS_DESCRIPTION):
            self.notifier.emit(Signal.DESCRIPTION_CHANGED, self.description)
        if item.has_flag(RuleFlag.AFFECTS_WARNING):
            self.notifier.emit(Signal.WARNING_CHANGED, self.warning)
