from pathlib import Path

from rich.console import Console

from window_rules.models import ImportSummary, RuleBookRow
from window_rules.rules.catalog import RuleField
from window_rules.rules.item import RuleItem
from window_rules.rules.record import RuleRecord
from window_rules.tui.enums import UIStyle
from window_rules.tui.sections import UISection
from window_rules.tui.tables import (
    CatalogTable,
    ImportTable,
    RuleBookTable,
    RuleFieldTable,
)
from window_rules.utils import compact_home_path


class RulesConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_rule_book(self, rows: list[RuleBookRow], path: Path) -> None:
        if not rows:
            self.console.print(
                UISection.note(
                    "rules",
                    f"No window rules in {compact_home_path(path)}.\n"
                    "- window-rules new --description <text>",
                    style=UIStyle.YELLOW.value,
                    markup=False,
                )
            )
            return

        self.console.print(
            UISection.wrap(
                "rules",
                RuleBookTable.rules_table(rows),
                style=UIStyle.BLUE.value,
                subtitle=compact_home_path(path),
            )
        )

    def render_rule(
        self,
        record: RuleRecord,
        number: int,
        items: list[RuleItem],
        searching: bool = False,
    ) -> None:
        self.console.print(
            UISection.wrap(
                "rule",
                RuleFieldTable.summary_block(record, number),
                style=UIStyle.BLUE.value,
            )
        )
        if items:
            self.console.print(
                UISection.wrap(
                    "search results" if searching else "fields",
                    RuleFieldTable.fields_table(items),
                    style=UIStyle.CYAN.value,
                )
            )
        else:
            message = "No fields match the search." if searching else "No fields enabled."
            self.console.print(UISection.note("fields", message, style=UIStyle.DIM.value))

        if record.warning:
            self.console.print(
                UISection.note(
                    "warning",
                    record.warning_message,
                    style=UIStyle.YELLOW.value,
                    markup=False,
                )
            )

    def render_rule_saved(self, verb: str, number: int, description: str) -> None:
        border_style = UIStyle.YELLOW.value if verb == "removed" else UIStyle.GREEN.value
        self.console.print(
            UISection.note(
                "rule",
                f"Rule {number} {verb}: {description}",
                style=border_style,
                markup=False,
            )
        )

    def render_exported(self, description: str, path: Path) -> None:
        self.console.print(
            UISection.note(
                "export",
                f"Exported {description}\n{compact_home_path(path)}",
                style=UIStyle.GREEN.value,
                markup=False,
            )
        )

    def render_import_summary(self, summary: ImportSummary, path: Path) -> None:
        if summary.is_empty():
            self.console.print(
                UISection.note(
                    "import",
                    f"Nothing to import from {compact_home_path(path)}.",
                    style=UIStyle.DIM.value,
                    markup=False,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "import",
                ImportTable.summary_table(summary),
                style=UIStyle.BLUE.value,
                subtitle=compact_home_path(path),
            )
        )
        if summary.skipped:
            self.console.print(
                UISection.note(
                    "skipped",
                    UISection.bullets(summary.skipped),
                    style=UIStyle.YELLOW.value,
                )
            )

    def render_prefill(self, number: int, written: list[str]) -> None:
        if not written:
            self.console.print(
                UISection.note(
                    "prefill",
                    f"Rule {number}: no fields were filled.",
                    style=UIStyle.DIM.value,
                )
            )
            return
        self.console.print(
            UISection.note(
                "prefill",
                f"Rule {number}: filled {len(written)} field(s)\n"
                + UISection.bullets(written),
                style=UIStyle.GREEN.value,
            )
        )

    def render_fields(self, fields: list[RuleField]) -> None:
        self.console.print(
            UISection.wrap(
                "fields", CatalogTable.fields_table(fields), style=UIStyle.BLUE.value
            )
        )
