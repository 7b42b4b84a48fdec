import asyncio
import re
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console

from window_rules.errors import WindowRulesError
from window_rules.log import configure_logging
from window_rules.models import ItemRole, POLICY_OPTIONS, PolicyKind
from window_rules.repositories import ConfigRepository, RuleBookRepository
from window_rules.rules.catalog import RULE_CATALOG, RULE_FIELDS, SECTIONS, fields_in_section
from window_rules.rules.filter import RuleFieldFilter
from window_rules.rules.item import RuleItem, coerce_value
from window_rules.rules.probe import SnapshotFileSource
from window_rules.rules.store import RuleStore
from window_rules.tui import RulesConsoleUI
from window_rules.utils import compact_home_paths_in_text


_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def _rule_argument(name: str = "rule"):
    return click.argument(name, type=click.IntRange(min=1))


def _open_store(obj: Dict[str, Any]) -> RuleStore:
    config: ConfigRepository = obj["config"]
    store = RuleStore(
        RuleBookRepository(config.rulebook_path),
        export_dir=obj["settings"].export_dir,
    )
    try:
        store.load()
    except WindowRulesError as exc:
        raise click.ClickException(compact_home_paths_in_text(str(exc)))
    return store


def _rule_index(store: RuleStore, number: int) -> int:
    if number > store.count:
        raise click.ClickException(f"Rule not found: {number} ({store.count} rule(s) defined)")
    return number - 1


def _save(store: RuleStore) -> None:
    try:
        store.save()
    except WindowRulesError as exc:
        raise click.ClickException(compact_home_paths_in_text(str(exc)))


def _field_item(store: RuleStore, key: str) -> RuleItem:
    if key not in RULE_CATALOG:
        raise click.ClickException(f"Unknown field: {key}")
    return store.editor.item(key)


def _normalize(text: str) -> str:
    return _NON_ALNUM_RE.sub("", text.lower())


def _parse_policy(kind: PolicyKind, name: str) -> int:
    options = POLICY_OPTIONS[kind]
    if not options:
        raise click.ClickException("This field has no policy.")
    wanted = _normalize(name)
    for option in options:
        if wanted in (_normalize(option.text), str(option.value)):
            return int(option.value)
    choices = ", ".join(_normalize(option.text) for option in options)
    raise click.ClickException(f"Unknown policy {name!r}, expected one of: {choices}")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", count=True, help="Log more; repeat for debug output.")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """Manage window-matching rules."""
    config = ConfigRepository()
    settings = config.load_settings()
    level = settings.log_level
    if verbose == 1:
        level = "INFO"
    elif verbose > 1:
        level = "DEBUG"
    configure_logging(level)
    ctx.obj = {"config": config, "settings": settings}


@cli.command("list", help="List rules in persisted order.")
@click.pass_obj
def list_rules(obj: Dict[str, Any]) -> None:
    ui = RulesConsoleUI(Console())
    store = _open_store(obj)
    ui.render_rule_book(store.rows(), store.rulebook.path)


@cli.command(help="Create a new rule with default fields.")
@click.option("--description", default="", help="Description for the new rule.")
@click.pass_obj
def new(obj: Dict[str, Any], description: str) -> None:
    ui = RulesConsoleUI(Console())
    store = _open_store(obj)
    try:
        index = store.new_rule()
    except WindowRulesError as exc:
        raise click.ClickException(compact_home_paths_in_text(str(exc)))
    if description:
        store.editor.set_data("description", ItemRole.VALUE, description)
    _save(store)
    ui.render_rule_saved("created", index + 1, store.editor.description)


@cli.command(help="Show the fields of a rule.")
@_rule_argument()
@click.option("--all", "show_all", is_flag=True, help="Include disabled fields.")
@click.option("--search", default="", help="Filter fields by name, key or section.")
@click.pass_obj
def show(obj: Dict[str, Any], rule: int, show_all: bool, search: str) -> None:
    ui = RulesConsoleUI(Console())
    store = _open_store(obj)
    index = _rule_index(store, rule)
    store.edit_rule(index)
    field_filter = RuleFieldFilter(store.editor, search_text=search, show_all=show_all)
    ui.render_rule(store.editor, rule, field_filter.items(), searching=field_filter.is_searching)


@cli.command("set", help="Set the value, policy or enabled state of a field.")
@_rule_argument()
@click.argument("key")
@click.argument("value", required=False)
@click.option("--policy", default=None, help="Policy name, for example force or exact-match.")
@click.option("--enable/--disable", "enabled", default=None, help="Switch the field on or off.")
@click.pass_obj
def set_field(
    obj: Dict[str, Any],
    rule: int,
    key: str,
    value: Optional[str],
    policy: Optional[str],
    enabled: Optional[bool],
) -> None:
    if value is None and policy is None and enabled is None:
        raise click.UsageError("Nothing to change: pass a value, --policy or --enable/--disable.")

    ui = RulesConsoleUI(Console())
    store = _open_store(obj)
    index = _rule_index(store, rule)
    store.edit_rule(index)
    item = _field_item(store, key)

    if value is not None:
        try:
            coerced = coerce_value(item.value_kind, value, item.options)
        except ValueError as exc:
            raise click.ClickException(f"Invalid value for {key}: {exc}")
        item.set_value(coerced)
        if enabled is None:
            enabled = True
    if policy is not None:
        item.set_policy(_parse_policy(item.policy_kind, policy))
        if enabled is None:
            enabled = True
    if enabled is not None:
        item.set_enabled(enabled)

    _save(store)
    ui.render_rule(store.editor, rule, RuleFieldFilter(store.editor).items())


@cli.command(help="Reset a field to its default and switch it off.")
@_rule_argument()
@click.argument("key")
@click.pass_obj
def reset(obj: Dict[str, Any], rule: int, key: str) -> None:
    ui = RulesConsoleUI(Console())
    store = _open_store(obj)
    index = _rule_index(store, rule)
    store.edit_rule(index)
    _field_item(store, key).reset()
    _save(store)
    ui.render_rule(store.editor, rule, RuleFieldFilter(store.editor).items())


@cli.command(help="Remove a rule.")
@_rule_argument()
@click.pass_obj
def remove(obj: Dict[str, Any], rule: int) -> None:
    ui = RulesConsoleUI(Console())
    store = _open_store(obj)
    index = _rule_index(store, rule)
    description = store.record(index).description
    try:
        store.remove_rule(index)
    except WindowRulesError as exc:
        raise click.ClickException(compact_home_paths_in_text(str(exc)))
    ui.render_rule_saved("removed", rule, description)


@cli.command(help="Move a rule to another position.")
@_rule_argument()
@_rule_argument("dest")
@click.pass_obj
def move(obj: Dict[str, Any], rule: int, dest: int) -> None:
    ui = RulesConsoleUI(Console())
    store = _open_store(obj)
    source_index = _rule_index(store, rule)
    dest_index = _rule_index(store, dest)
    try:
        store.move_rule(source_index, dest_index)
    except WindowRulesError as exc:
        raise click.ClickException(compact_home_paths_in_text(str(exc)))
    ui.render_rule_book(store.rows(), store.rulebook.path)


@cli.command("export", help="Export a rule to a standalone rule file.")
@_rule_argument()
@click.option("--path", type=click.Path(path_type=Path), default=None, help="Output file.")
@click.pass_obj
def export_rule(obj: Dict[str, Any], rule: int, path: Optional[Path]) -> None:
    ui = RulesConsoleUI(Console())
    store = _open_store(obj)
    index = _rule_index(store, rule)
    try:
        written = store.export_rule(index, path)
    except WindowRulesError as exc:
        raise click.ClickException(compact_home_paths_in_text(str(exc)))
    ui.render_exported(store.record(index).description, written)


@cli.command("import", help="Import rules from a rule file, replacing by description.")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_obj
def import_rules(obj: Dict[str, Any], path: Path) -> None:
    ui = RulesConsoleUI(Console())
    store = _open_store(obj)
    try:
        summary = store.import_rules(path)
        store.save()
    except WindowRulesError as exc:
        raise click.ClickException(compact_home_paths_in_text(str(exc)))
    ui.render_import_summary(summary, path)


async def _detect(store: RuleStore, source: SnapshotFileSource, delay: float) -> tuple[bool, list[str]]:
    merged = await store.detect_properties(source, delay)
    return merged, list(store.prefilled)


@cli.command(help="Fill unset fields of a rule from a window property snapshot.")
@_rule_argument()
@click.argument("snapshot", type=click.Path(path_type=Path))
@click.option("--delay", type=click.FloatRange(min=0), default=None, help="Seconds to wait before reading.")
@click.pass_obj
def prefill(obj: Dict[str, Any], rule: int, snapshot: Path, delay: Optional[float]) -> None:
    ui = RulesConsoleUI(Console())
    store = _open_store(obj)
    index = _rule_index(store, rule)
    store.edit_rule(index)
    if delay is None:
        delay = obj["settings"].probe_delay_seconds

    merged, written = asyncio.run(_detect(store, SnapshotFileSource(snapshot), delay))
    if not merged:
        raise click.ClickException(f"Could not read window properties from {snapshot}")
    _save(store)
    ui.render_prefill(rule, written)


@cli.command(help="List every rule field.")
@click.option("--section", type=click.Choice(SECTIONS), default=None, help="Only this section.")
def fields(section: Optional[str]) -> None:
    ui = RulesConsoleUI(Console())
    selected = fields_in_section(section) if section else list(RULE_FIELDS)
    ui.render_fields(selected)


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
