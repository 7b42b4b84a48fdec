"""Numbered slot storage for the persisted rule book."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

from window_rules.constants import COUNT_KEY, GENERAL_GROUP
from window_rules.errors import InvalidJsonFormatError, RuleFileWriteError
from window_rules.rules.schema import RULEBOOK_VALIDATOR, validate_payload
from window_rules.utils import read_json_safe, write_json

logger = logging.getLogger(__name__)


class RuleBookRepository:
    """Keyed group store: a ``General`` group holding ``count`` and one group
    per slot named ``"1"`` .. ``str(count)``.

    Slot operations only touch the in-memory groups; ``save`` writes them.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._groups: dict[str, Any] = {GENERAL_GROUP: {COUNT_KEY: 0}}

    @property
    def path(self) -> Path:
        return self._path

    @property
    def count(self) -> int:
        general = self._groups.get(GENERAL_GROUP)
        if not isinstance(general, dict):
            return 0
        value = general.get(COUNT_KEY, 0)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return 0
        return value

    def set_count(self, count: int) -> None:
        general = self._groups.get(GENERAL_GROUP)
        if not isinstance(general, dict):
            general = {}
            self._groups[GENERAL_GROUP] = general
        general[COUNT_KEY] = count
        for name in list(self._groups):
            if name.isdigit() and int(name) > count:
                del self._groups[name]

    def load(self) -> None:
        payload, error = read_json_safe(self._path)
        if error is not None:
            raise InvalidJsonFormatError(self._path, error)
        if payload is None:
            self._groups = {GENERAL_GROUP: {COUNT_KEY: 0}}
            return
        validate_payload(payload, self._path, RULEBOOK_VALIDATOR)
        self._groups = copy.deepcopy(payload)
        self._groups.setdefault(GENERAL_GROUP, {COUNT_KEY: 0})
        logger.info("Loaded rule book with %d slot(s) from %s", self.count, self._path)

    def save(self) -> None:
        payload: dict[str, Any] = {GENERAL_GROUP: dict(self._groups.get(GENERAL_GROUP) or {})}
        payload[GENERAL_GROUP][COUNT_KEY] = self.count
        for slot in range(1, self.count + 1):
            payload[str(slot)] = self.group(slot)
        try:
            write_json(self._path, payload)
        except OSError as exc:
            raise RuleFileWriteError(self._path, str(exc)) from exc
        logger.debug("Wrote %d slot(s) to %s", self.count, self._path)

    def group(self, slot: int) -> dict[str, Any]:
        raw = self._groups.get(str(slot))
        return copy.deepcopy(raw) if isinstance(raw, dict) else {}

    def raw_group(self, slot: int) -> Any:
        return copy.deepcopy(self._groups.get(str(slot)))

    def set_group(self, slot: int, data: Any) -> None:
        self._groups[str(slot)] = copy.deepcopy(data)

    def append_group(self, data: dict[str, Any]) -> int:
        slot = self.count + 1
        self.set_group(slot, data)
        self.set_count(slot)
        return slot

    def remove_slot(self, slot: int) -> bool:
        count = self.count
        if slot < 1 or slot > count:
            return False
        for current in range(slot, count):
            self._groups[str(current)] = self._groups.get(str(current + 1), {})
        self._groups.pop(str(count), None)
        self.set_count(count - 1)
        logger.debug("Removed slot %d, %d slot(s) left", slot, count - 1)
        return True

    def move_slot(self, source: int, dest: int) -> bool:
        count = self.count
        if source == dest or not (1 <= source <= count) or not (1 <= dest <= count):
            return False
        held = self._groups.get(str(source), {})
        step = 1 if dest > source else -1
        for current in range(source, dest, step):
            self._groups[str(current)] = self._groups.get(str(current + step), {})
        self._groups[str(dest)] = held
        logger.debug("Moved slot %d to %d", source, dest)
        return True
