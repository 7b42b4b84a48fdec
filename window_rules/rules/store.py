"""Ordered collection of window rules backed by numbered rule-book slots.

Record ``i`` always lives in slot ``i + 1``. Creating, removing and moving
records rewrite the slot layout of the rule book right away; field edits made
through the editor only reach the rule book on ``save``.

At most one record is open for editing. The editor is a working copy that
shares the store's notifier; it is flushed back into its record before any
operation that changes indices.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from window_rules.constants import EXPORT_EXTENSION
from window_rules.models import ImportSummary, RuleBookRow
from window_rules.repositories.rulebook import RuleBookRepository
from window_rules.rules.codec import RuleCodec
from window_rules.rules.prefill import PropertyPrefiller
from window_rules.rules.probe import WindowInfoSource, WindowPropertyProbe
from window_rules.rules.record import RuleRecord
from window_rules.signals import ChangeNotifier, Signal
from window_rules.utils import safe_filename

logger = logging.getLogger(__name__)


class RuleStore:
    def __init__(
        self,
        rulebook: RuleBookRepository,
        codec: Optional[RuleCodec] = None,
        notifier: Optional[ChangeNotifier] = None,
        export_dir: Optional[Path] = None,
    ) -> None:
        self.rulebook = rulebook
        self.codec = codec or RuleCodec()
        self.notifier = notifier or ChangeNotifier()
        self.export_dir = export_dir or Path.home()
        self.prefiller = PropertyPrefiller()

        self._records: list[RuleRecord] = []
        self._editing_index = -1
        self._editor: Optional[RuleRecord] = None
        self._editor_dirty = False
        self._seeding = False
        self._needs_save = False
        self._probe: Optional[WindowPropertyProbe] = None
        self.prefilled: list[str] = []

        self.notifier.on(Signal.DATA_CHANGED, self._on_editor_data_changed)
        self.notifier.on(Signal.DESCRIPTION_CHANGED, self._on_editor_description_changed)

    # -- accessors -------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[RuleRecord, ...]:
        return tuple(self._records)

    @property
    def editing_index(self) -> int:
        return self._editing_index

    @property
    def editor(self) -> Optional[RuleRecord]:
        return self._editor

    @property
    def needs_save(self) -> bool:
        return self._needs_save

    def record(self, index: int) -> Optional[RuleRecord]:
        if not self._in_range(index):
            return None
        if index == self._editing_index and self._editor is not None:
            return self._editor
        return self._records[index]

    def descriptions(self) -> list[str]:
        return [self.record(index).description for index in range(self.count)]

    def rows(self) -> list[RuleBookRow]:
        rows: list[RuleBookRow] = []
        for index in range(self.count):
            record = self.record(index)
            rows.append(
                RuleBookRow(
                    number=index + 1,
                    description=record.description,
                    warning=record.warning,
                    editing=index == self._editing_index,
                )
            )
        return rows

    def find(self, description: str) -> int:
        for index in range(self.count):
            if self.record(index).description == description:
                return index
        return -1

    # -- persistence -----------------------------------------------------

    def load(self) -> None:
        self.rulebook.load()
        self._records = [
            self.codec.decode(self.rulebook.raw_group(slot))
            for slot in range(1, self.rulebook.count + 1)
        ]
        self._set_needs_save(False)

        if self._editing_index >= self.count:
            self._close_editor()
            self.notifier.emit(Signal.EDITING_INDEX_CHANGED, self._editing_index)
        elif self._editing_index >= 0:
            self._open_editor(self._editing_index)

        logger.info("Loaded %d rule(s)", self.count)
        self.notifier.emit(Signal.RULE_BOOK_CHANGED)

    def save(self) -> None:
        self._flush_editor()
        for index, record in enumerate(self._records):
            self.rulebook.set_group(index + 1, self.codec.encode(record))
        self.rulebook.set_count(self.count)
        self.rulebook.save()
        if self._editor is not None:
            self._open_editor(self._editing_index)
        self._set_needs_save(False)
        logger.info("Saved %d rule(s) to %s", self.count, self.rulebook.path)

    # -- edit session ----------------------------------------------------

    def edit_rule(self, index: int) -> bool:
        if not self._in_range(index):
            return False
        self._flush_editor()
        self._open_editor(index)
        self.notifier.emit(Signal.EDITING_INDEX_CHANGED, self._editing_index)
        return True

    def close_editor(self) -> None:
        self._flush_editor()
        if self._editor is None:
            return
        self._close_editor()
        self.notifier.emit(Signal.EDITING_INDEX_CHANGED, self._editing_index)

    # -- layout ----------------------------------------------------------

    def new_rule(self) -> int:
        record = RuleRecord.new()
        self._records.append(record)
        self.rulebook.append_group(self.codec.encode(record.copy()))
        self.rulebook.save()
        self._set_needs_save(True)
        self.notifier.emit(Signal.RULE_BOOK_CHANGED)

        index = self.count - 1
        self.edit_rule(index)
        return index

    def remove_rule(self, index: int) -> bool:
        if not self._in_range(index):
            return False

        if self._editing_index == index:
            self._close_editor()
            self.notifier.emit(Signal.EDITING_INDEX_CHANGED, self._editing_index)
        else:
            self._flush_editor()
            if self._editing_index > index:
                self._editing_index -= 1
                self.notifier.emit(Signal.EDITING_INDEX_CHANGED, self._editing_index)

        removed = self._records.pop(index)
        self.rulebook.remove_slot(index + 1)
        self.rulebook.save()
        logger.info("Removed rule %r", removed.description)

        self._set_needs_save(True)
        self.notifier.emit(Signal.RULE_BOOK_CHANGED)
        return True

    def move_rule(self, source: int, dest: int) -> bool:
        if source == dest or not self._in_range(source) or not self._in_range(dest):
            return False

        self._flush_editor()
        record = self._records.pop(source)
        self._records.insert(dest, record)
        self.rulebook.move_slot(source + 1, dest + 1)
        self.rulebook.save()

        editing = self._editing_index
        if editing == source:
            self._editing_index = dest
        elif source < editing <= dest:
            self._editing_index -= 1
        elif dest <= editing < source:
            self._editing_index += 1
        if self._editing_index != editing:
            self.notifier.emit(Signal.EDITING_INDEX_CHANGED, self._editing_index)

        self._set_needs_save(True)
        self.notifier.emit(Signal.RULE_BOOK_CHANGED)
        return True

    # -- import / export ---------------------------------------------------

    def export_rule(self, index: int, path: Optional[Path] = None) -> Optional[Path]:
        if not self._in_range(index):
            return None
        self._flush_editor()
        record = self._records[index].copy()
        if path is None:
            filename = safe_filename(record.description) + EXPORT_EXTENSION
            path = self.export_dir / filename
        return self.codec.export_single(record, path)

    def import_rules(self, path: Path) -> ImportSummary:
        imported = self.codec.read_import_file(path)
        self._flush_editor()

        summary = ImportSummary()
        appended_slots = False
        for entry in imported:
            if not entry.description:
                summary.skipped.append(entry.group)
                continue

            index = self.find(entry.description)
            if entry.delete:
                if self.remove_rule(index):
                    summary.removed.append(entry.description)
                else:
                    summary.skipped.append(entry.description)
                continue

            if index < 0:
                self._records.append(entry.record)
                self.rulebook.append_group(self.codec.encode(entry.record.copy()))
                appended_slots = True
                summary.appended.append(entry.description)
            else:
                self._records[index] = entry.record
                if index == self._editing_index:
                    self._open_editor(index)
                summary.replaced.append(entry.description)

        if appended_slots:
            self.rulebook.save()
        if not summary.is_empty():
            self._set_needs_save(True)
            self.notifier.emit(Signal.RULE_BOOK_CHANGED)
        logger.info(
            "Imported %s: %d appended, %d replaced, %d removed, %d skipped",
            path,
            len(summary.appended),
            len(summary.replaced),
            len(summary.removed),
            len(summary.skipped),
        )
        return summary

    # -- window properties -----------------------------------------------

    def prefill_editor(self, snapshot: Mapping[str, Any]) -> list[str]:
        if self._editor is None:
            return []
        self.prefilled = self.prefiller.prefill(self._editor, snapshot)
        return self.prefilled

    def detect_properties(
        self, source: WindowInfoSource, delay_seconds: float
    ) -> asyncio.Future[bool]:
        if self._probe is None or self._probe.source is not source:
            if self._probe is not None:
                self._probe.cancel()
            self._probe = WindowPropertyProbe(source, self.prefill_editor)
        self.prefilled = []
        return self._probe.detect(delay_seconds)

    def cancel_detection(self) -> None:
        if self._probe is not None:
            self._probe.cancel()

    # -- internals -------------------------------------------------------

    def _in_range(self, index: int) -> bool:
        return 0 <= index < self.count

    def _open_editor(self, index: int) -> None:
        self._editing_index = index
        self._seeding = True
        try:
            self._editor = self._records[index].copy(notifier=self.notifier)
        finally:
            self._seeding = False
        self._editor_dirty = False

    def _close_editor(self) -> None:
        self._editor = None
        self._editor_dirty = False
        self._editing_index = -1

    def _flush_editor(self) -> None:
        if self._editor is None or not self._editor_dirty:
            return
        self._records[self._editing_index] = self._editor.copy()
        self._editor_dirty = False

    def _set_needs_save(self, value: bool) -> None:
        if self._needs_save == value:
            return
        self._needs_save = value
        self.notifier.emit(Signal.NEEDS_SAVE_CHANGED, value)

    def _on_editor_data_changed(self, key: Optional[str], role: Any) -> None:
        if self._seeding or self._editor is None:
            return
        self._editor_dirty = True
        self._set_needs_save(True)

    def _on_editor_description_changed(self, description: str) -> None:
        if self._seeding or self._editor is None:
            return
        self.notifier.emit(Signal.RULE_BOOK_CHANGED)
