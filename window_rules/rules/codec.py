"""Convert rule records to and from their persisted key/value groups."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from window_rules.constants import DELETE_RULE_KEY
from window_rules.errors import (
    InvalidJsonFormatError,
    MissingRuleFileError,
    RuleFileWriteError,
)
from window_rules.models import Coordinate, Policy, policy_values
from window_rules.rules.item import RuleItem, coerce_value
from window_rules.rules.record import RuleRecord
from window_rules.rules.schema import RULE_FILE_VALIDATOR, validate_payload
from window_rules.signals import ChangeNotifier
from window_rules.utils import read_json_safe, write_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportedRule:
    group: str
    description: str
    record: RuleRecord
    delete: bool = False


def _wire_value(item: RuleItem) -> Any:
    if isinstance(item.value, Coordinate):
        return str(item.value)
    return item.value


def _policy_from_raw(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
        return int(raw)
    return None


def _is_truthy(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("true", "1", "yes", "on")
    return bool(raw)


class RuleCodec:
    def decode(
        self, raw_group: Any, notifier: ChangeNotifier | None = None
    ) -> RuleRecord:
        record = RuleRecord(notifier)
        self.decode_into(record, raw_group)
        return record

    def decode_into(self, record: RuleRecord, raw_group: Any) -> None:
        group: Mapping[str, Any] = raw_group if isinstance(raw_group, Mapping) else {}
        with record.batch_update():
            for item in record:
                self._decode_item(item, group)

    def encode(self, record: RuleRecord) -> dict[str, Any]:
        description = record.item("description")
        if not description.value:
            description.set_value(record.default_description())

        group: dict[str, Any] = {}
        for item in record:
            policy_key = item.policy_key
            if item.enabled:
                group[item.key] = _wire_value(item)
                if policy_key is not None:
                    group[policy_key] = item.policy
            elif policy_key is not None:
                group[item.key] = _wire_value(item)
                group[policy_key] = Policy.UNUSED.value
            else:
                # A field without a policy is switched off by an empty value.
                group[item.key] = ""
        return group

    def export_single(self, record: RuleRecord, path: Path) -> Path:
        group = self.encode(record)
        try:
            write_json(path, {record.description: group})
        except OSError as exc:
            raise RuleFileWriteError(path, str(exc)) from exc
        logger.info("Exported rule %r to %s", record.description, path)
        return path

    def read_import_file(self, path: Path) -> list[ImportedRule]:
        if not path.exists():
            raise MissingRuleFileError(path)
        payload, error = read_json_safe(path)
        if error is not None:
            raise InvalidJsonFormatError(path, error)
        if payload is None:
            return []
        validate_payload(payload, path, RULE_FILE_VALIDATOR)

        imported: list[ImportedRule] = []
        for group_name, group in payload.items():
            description = group.get("description")
            if not isinstance(description, str) or not description:
                logger.debug("Skipping group %r without description", group_name)
                imported.append(
                    ImportedRule(group=group_name, description="", record=RuleRecord())
                )
                continue
            imported.append(
                ImportedRule(
                    group=group_name,
                    description=description,
                    record=self.decode(group),
                    delete=_is_truthy(group.get(DELETE_RULE_KEY, False)),
                )
            )
        return imported

    def _decode_item(self, item: RuleItem, group: Mapping[str, Any]) -> None:
        raw = group.get(item.key)
        if raw is None or raw == "":
            item.reset()
            return

        policy: int | None = None
        if item.policy_key is not None:
            policy = _policy_from_raw(group.get(item.policy_key))
            if policy is None or policy == Policy.UNUSED:
                item.reset()
                return
            if policy not in policy_values(item.policy_kind):
                logger.debug("Invalid policy %r for %s, resetting", policy, item.key)
                item.reset()
                return

        try:
            value = coerce_value(item.value_kind, raw, item.options)
        except ValueError as exc:
            logger.debug("Malformed value for %s (%s), resetting", item.key, exc)
            item.reset()
            return

        item.set_enabled(True)
        item.set_value(value)
        if policy is not None:
            item.set_policy(policy)
