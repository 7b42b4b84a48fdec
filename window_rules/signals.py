"""Change notifications consumed by presentation layers."""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Signal(str, Enum):
    DATA_CHANGED = "data_changed"
    DESCRIPTION_CHANGED = "description_changed"
    WARNING_CHANGED = "warning_changed"
    RULE_BOOK_CHANGED = "rule_book_changed"
    EDITING_INDEX_CHANGED = "editing_index_changed"
    NEEDS_SAVE_CHANGED = "needs_save_changed"


Handler = Callable[..., None]


class ChangeNotifier:
    def __init__(self) -> None:
        self._handlers: dict[Signal, list[Handler]] = defaultdict(list)

    def on(self, signal: Signal, handler: Handler) -> None:
        if handler not in self._handlers[signal]:
            self._handlers[signal].append(handler)

    def off(self, signal: Signal, handler: Handler) -> bool:
        handlers = self._handlers.get(signal, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def emit(self, signal: Signal, *payload: Any) -> None:
        handlers = list(self._handlers.get(signal, []))
        if handlers:
            logger.debug("Emitting %s to %d handler(s)", signal.value, len(handlers))
        for handler in handlers:
            handler(*payload)

    def clear(self) -> None:
        self._handlers.clear()
