from window_rules.models import ItemRole, StringMatch, WindowType
from window_rules.rules.record import NEW_RULE_DESCRIPTION, RuleRecord
from window_rules.signals import ChangeNotifier, Signal


def _recording_notifier() -> tuple[ChangeNotifier, list[tuple]]:
    notifier = ChangeNotifier()
    events: list[tuple] = []
    for signal in Signal:
        notifier.on(signal, lambda *payload, _signal=signal: events.append((_signal, *payload)))
    return notifier, events


def test_new_record_enables_start_and_always_fields() -> None:
    record = RuleRecord.new()

    enabled = {item.key for item in record if item.enabled}
    assert enabled == {"description", "wmclass", "wmclasscomplete", "types"}
    assert record.item("types").value == 0
    assert len(record) == 40


def test_description_defaults() -> None:
    record = RuleRecord.new()

    assert record.description == NEW_RULE_DESCRIPTION

    record.set_data("wmclass", ItemRole.VALUE, "konsole")
    assert record.description == "Settings for konsole"

    record.set_data("title", ItemRole.VALUE, "Build log")
    assert record.description == "Settings for konsole"
    record.set_data("title", ItemRole.ENABLED, True)
    assert record.description == "Window settings for Build log"

    record.set_data("description", ItemRole.VALUE, "Terminal")
    assert record.description == "Terminal"


def test_warning_for_generic_rules() -> None:
    record = RuleRecord.new()
    assert record.warning is True
    assert "unimportant" in record.warning_message

    record.set_data("wmclassPolicy", ItemRole.POLICY, StringMatch.EXACT)
    assert record.warning is True

    record.set_data("wmclass", ItemRole.POLICY, StringMatch.EXACT)
    assert record.warning is False
    assert record.warning_message == ""


def test_warning_cleared_by_restricting_types() -> None:
    record = RuleRecord.new()
    record.set_data("types", ItemRole.VALUE, 1 << WindowType.NORMAL)

    assert record.warning is False

    record.set_data("types", ItemRole.VALUE, 0)
    assert record.warning is True


def test_type_filter_cannot_be_switched_off() -> None:
    record = RuleRecord.new()
    record.set_data("types", ItemRole.VALUE, 1 << WindowType.NORMAL)

    record.set_data("types", ItemRole.ENABLED, False)
    assert record.item("types").enabled is True

    record.item("types").reset()
    assert record.item("types").state()[:2] == (True, 0)


def test_set_data_unknown_key() -> None:
    record = RuleRecord()

    assert record.set_data("nope", ItemRole.VALUE, "x") is False


def test_item_change_emits_data_and_derived_signals() -> None:
    notifier, events = _recording_notifier()
    record = RuleRecord.new(notifier)
    events.clear()

    record.set_data("wmclass", ItemRole.VALUE, "dolphin")

    assert events == [
        (Signal.DATA_CHANGED, "wmclass", ItemRole.VALUE),
        (Signal.DESCRIPTION_CHANGED, "Settings for dolphin"),
        (Signal.WARNING_CHANGED, True),
    ]


def test_unrelated_field_only_emits_data_changed() -> None:
    notifier, events = _recording_notifier()
    record = RuleRecord(notifier)

    record.set_data("above", ItemRole.ENABLED, True)

    assert events == [(Signal.DATA_CHANGED, "above", ItemRole.ENABLED)]


def test_batch_update_emits_once() -> None:
    notifier, events = _recording_notifier()
    record = RuleRecord(notifier)

    with record.batch_update():
        record.set_data("title", ItemRole.ENABLED, True)
        record.set_data("title", ItemRole.VALUE, "Mail")
        with record.batch_update():
            record.set_data("above", ItemRole.ENABLED, True)

    assert [event[0] for event in events] == [
        Signal.DATA_CHANGED,
        Signal.DESCRIPTION_CHANGED,
        Signal.WARNING_CHANGED,
    ]
    assert events[0] == (Signal.DATA_CHANGED, None, None)
    assert events[1] == (Signal.DESCRIPTION_CHANGED, "Window settings for Mail")


def test_copy_is_independent() -> None:
    record = RuleRecord.new()
    record.set_data("title", ItemRole.ENABLED, True)
    record.set_data("title", ItemRole.VALUE, "Mail")

    clone = record.copy()
    clone.set_data("title", ItemRole.VALUE, "Calendar")

    assert clone.state() != record.state()
    assert record.item("title").value == "Mail"
    assert clone.notifier is not record.notifier


def test_assign_and_reset() -> None:
    source = RuleRecord.new()
    source.set_data("above", ItemRole.ENABLED, True)
    source.set_data("above", ItemRole.VALUE, True)
    target = RuleRecord()

    target.assign(source)
    assert target.state() == source.state()

    target.reset()
    assert target.item("above").enabled is False
    assert target.item("description").enabled is True
