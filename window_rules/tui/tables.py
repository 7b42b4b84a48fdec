from rich.markup import escape
from rich.table import Column, Table

from window_rules.models import ImportSummary, RuleBookRow, policy_text
from window_rules.rules.catalog import RuleField
from window_rules.rules.item import RuleItem
from window_rules.rules.record import RuleRecord
from window_rules.tui.enums import POLICY_KIND_STYLE, UIStyle


def _flag_text(enabled: bool) -> str:
    if enabled:
        return f"[{UIStyle.GREEN.value}]on[/{UIStyle.GREEN.value}]"
    return f"[{UIStyle.DIM.value}]off[/{UIStyle.DIM.value}]"


class RuleBookTable:
    @staticmethod
    def rules_table(rows: list[RuleBookRow]) -> Table:
        table = Table(
            Column(header="#", width=4, justify="right"),
            Column(header="Description", overflow="ellipsis"),
            Column(header="Warning", width=9),
            Column(header="Editing", width=8),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            warning = (
                f"[{UIStyle.YELLOW.value}]generic[/{UIStyle.YELLOW.value}]"
                if row.warning
                else ""
            )
            editing = "*" if row.editing else ""
            table.add_row(str(row.number), escape(row.description), warning, editing)
        return table


class RuleFieldTable:
    @staticmethod
    def summary_block(record: RuleRecord, number: int):
        enabled = sum(1 for item in record if item.enabled)
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Rule", str(number))
        table.add_row("Description", escape(record.description))
        table.add_row("Enabled fields", f"{enabled}/{len(record)}")
        return table

    @staticmethod
    def fields_table(items: list[RuleItem]) -> Table:
        table = Table(
            Column(header="Field", width=18),
            Column(header="Name", overflow="ellipsis", max_width=32),
            Column(header="Enabled", width=8),
            Column(header="Policy", width=20),
            Column(header="Value", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for item in items:
            policy = ""
            if item.policy_key is not None:
                style = POLICY_KIND_STYLE.get(item.policy_kind, UIStyle.WHITE.value)
                policy = f"[{style}]{policy_text(item.policy_kind, item.policy)}[/{style}]"
            table.add_row(
                item.key,
                escape(item.name),
                _flag_text(item.enabled),
                policy,
                escape(item.display_value()),
            )
        return table


class ImportTable:
    @staticmethod
    def summary_table(summary: ImportSummary) -> Table:
        table = Table(
            Column(header="Status", width=10),
            Column(header="Rules", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        styles = {
            "appended": UIStyle.GREEN.value,
            "replaced": UIStyle.CYAN.value,
            "removed": UIStyle.MAGENTA.value,
            "skipped": UIStyle.YELLOW.value,
        }
        for status, names in summary.as_dict().items():
            if not names:
                continue
            style = styles[status]
            table.add_row(
                f"[{style}]{status}[/{style}]",
                ", ".join(escape(name) for name in names),
            )
        return table


class CatalogTable:
    @staticmethod
    def fields_table(fields: list[RuleField]) -> Table:
        table = Table(
            Column(header="Key", width=22),
            Column(header="Kind", width=12),
            Column(header="Policy", width=12),
            Column(header="Section", width=20),
            Column(header="Name", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for field in fields:
            style = POLICY_KIND_STYLE.get(field.policy_kind, UIStyle.WHITE.value)
            table.add_row(
                field.key,
                field.value_kind.value,
                f"[{style}]{field.policy_kind.value}[/{style}]",
                field.section,
                escape(field.name),
            )
        return table
