from pathlib import Path
from typing import Any, Final

from jsonschema import Draft202012Validator

from window_rules.constants import COUNT_KEY, GENERAL_GROUP
from window_rules.errors import InvalidRuleFileSchemaError

_SCALAR: Final[dict[str, Any]] = {
    "type": ["string", "integer", "boolean", "null", "number"],
}

GROUP_SCHEMA: Final[dict[str, Any]] = {
    "type": "object",
    "additionalProperties": _SCALAR,
}

RULEBOOK_SCHEMA: Final[dict[str, Any]] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Window rule book",
    "type": "object",
    "properties": {
        GENERAL_GROUP: {
            "type": "object",
            "properties": {COUNT_KEY: {"type": "integer", "minimum": 0}},
        },
    },
}

RULE_FILE_SCHEMA: Final[dict[str, Any]] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Exported window rules",
    "type": "object",
    "additionalProperties": GROUP_SCHEMA,
}

RULEBOOK_VALIDATOR: Final = Draft202012Validator(RULEBOOK_SCHEMA)
RULE_FILE_VALIDATOR: Final = Draft202012Validator(RULE_FILE_SCHEMA)


def validate_payload(payload: Any, path: Path, validator: Draft202012Validator) -> None:
    errors = sorted(validator.iter_errors(payload), key=lambda err: list(err.path))
    if not errors:
        return
    first = errors[0]
    location = "/".join(str(part) for part in first.path) or "<root>"
    raise InvalidRuleFileSchemaError(path, f"{location}: {first.message}")
