from window_rules.models import PolicyKind, RuleFlag, ValueKind
from window_rules.rules.catalog import (
    RULE_CATALOG,
    RULE_FIELDS,
    SECTION_MATCHING,
    SECTIONS,
    fields_in_section,
    rule_field,
    rule_keys,
)


def test_catalog_has_forty_unique_fields() -> None:
    assert len(RULE_FIELDS) == 40
    assert len(set(rule_keys())) == 40
    assert list(RULE_CATALOG) == rule_keys()


def test_description_is_always_enabled_and_drives_description() -> None:
    field = rule_field("description")

    assert field.value_kind == ValueKind.STRING
    assert field.policy_kind == PolicyKind.NONE
    assert field.has_flag(RuleFlag.ALWAYS_ENABLED)
    assert field.has_flag(RuleFlag.AFFECTS_DESCRIPTION)
    assert field.policy_key is None


def test_types_always_enabled_and_affect_warning() -> None:
    field = rule_field("types")

    assert field.value_kind == ValueKind.FLAGS_OPTION
    assert field.has_flag(RuleFlag.ALWAYS_ENABLED)
    assert field.has_flag(RuleFlag.AFFECTS_WARNING)
    assert not field.has_flag(RuleFlag.START_ENABLED)
    assert field.options


def test_policy_key_appends_suffix() -> None:
    assert rule_field("wmclass").policy_key == "wmclassPolicy"
    assert rule_field("position").policy_key == "positionPolicy"
    assert rule_field("windowrole").policy_key is None


def test_every_field_belongs_to_a_known_section() -> None:
    assert {field.section for field in RULE_FIELDS} == set(SECTIONS)


def test_fields_in_section_keeps_catalog_order() -> None:
    matching = fields_in_section(SECTION_MATCHING)

    assert matching[0].key == "description"
    assert [field.key for field in matching] == [
        key for key in rule_keys() if RULE_CATALOG[key].section == SECTION_MATCHING
    ]


def test_option_fields_ship_static_options() -> None:
    for key in ("placement", "fsplevel", "fpplevel", "desktop", "activity", "type"):
        assert rule_field(key).options, key
