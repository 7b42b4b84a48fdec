"""Merge live window properties into the unset fields of a rule."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Final

from window_rules.models import Coordinate, WindowType
from window_rules.rules.item import RuleItem, coerce_value
from window_rules.rules.record import RuleRecord

logger = logging.getLogger(__name__)

PROPERTY_RULES: Final[dict[str, str]] = {
    "resourceName": "wmclass",
    "caption": "title",
    "role": "windowrole",
    "clientMachine": "clientmachine",
    "x11DesktopNumber": "desktop",
    "maximizeHorizontal": "maximizehoriz",
    "maximizeVertical": "maximizevert",
    "minimized": "minimize",
    "shaded": "shade",
    "fullscreen": "fullscreen",
    "keepAbove": "above",
    "keepBelow": "below",
    "noBorder": "noborder",
    "skipTaskbar": "skiptaskbar",
    "skipPager": "skippager",
    "skipSwitcher": "skipswitcher",
    "type": "type",
    "desktopFile": "desktopfile",
}

MATCH_RULES: Final[frozenset[str]] = frozenset(
    {"wmclass", "title", "windowrole", "clientmachine", "types"}
)


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value))
        except ValueError:
            return default
    return default


def _write(item: RuleItem, value: Any) -> bool:
    try:
        coerced = coerce_value(item.value_kind, value, item.options)
    except ValueError:
        return False
    item.set_value(coerced)
    # Only matching fields switch on; the rest are seeded as suggestions.
    if item.key in MATCH_RULES:
        item.set_enabled(True)
    return True


class PropertyPrefiller:
    def prefill(self, record: RuleRecord, snapshot: Mapping[str, Any]) -> list[str]:
        """Fill disabled or empty fields of ``record`` from ``snapshot``.

        Returns the keys of the fields that were written.
        """
        written: list[str] = []
        with record.batch_update():
            position = Coordinate(_as_int(snapshot.get("x")), _as_int(snapshot.get("y")))
            size = Coordinate(
                _as_int(snapshot.get("width")), _as_int(snapshot.get("height"))
            )
            has_position = "x" in snapshot or "y" in snapshot
            has_size = "width" in snapshot or "height" in snapshot
            for key, value, known in (
                ("position", position, has_position),
                ("size", size, has_size),
                ("minsize", size, has_size),
                ("maxsize", size, has_size),
            ):
                if not known:
                    continue
                item = record.item(key)
                if not item.enabled and _write(item, value):
                    written.append(key)

            types = record.item("types")
            if not types.enabled or types.value == 0:
                window_type = _as_int(snapshot.get("type"), WindowType.UNKNOWN)
                if window_type < 0 or window_type == WindowType.UNKNOWN:
                    window_type = WindowType.NORMAL
                if _write(types, 1 << window_type):
                    written.append("types")

            for prop, value in self._mapped_properties(record, snapshot):
                item = record.item(PROPERTY_RULES[prop])
                if item.enabled and not item.is_empty():
                    continue
                if _write(item, value):
                    written.append(item.key)
                else:
                    logger.debug("Ignoring %s=%r, incompatible with %s", prop, value, item.key)

        logger.info("Prefilled %d field(s): %s", len(written), ", ".join(written))
        return written

    @staticmethod
    def _mapped_properties(
        record: RuleRecord, snapshot: Mapping[str, Any]
    ) -> list[tuple[str, Any]]:
        pairs: list[tuple[str, Any]] = []
        for prop, value in snapshot.items():
            if prop not in PROPERTY_RULES:
                continue
            if prop == "resourceName":
                resource_class = snapshot.get("resourceClass")
                complete = record.item("wmclasscomplete").value is True
                if complete and isinstance(value, str) and resource_class:
                    value = f"{value} {resource_class}"
            pairs.append((prop, value))
        return pairs


def prefill(record: RuleRecord, snapshot: Mapping[str, Any]) -> list[str]:
    return PropertyPrefiller().prefill(record, snapshot)
