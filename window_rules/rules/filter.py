from window_rules.rules.item import RuleItem
from window_rules.rules.record import RuleRecord


class RuleFieldFilter:
    def __init__(self, record: RuleRecord, search_text: str = "", show_all: bool = False) -> None:
        self.record = record
        self.search_text = search_text
        self.show_all = show_all

    @property
    def is_searching(self) -> bool:
        return bool(self.search_text.strip())

    def accepts(self, item: RuleItem) -> bool:
        if self.is_searching:
            needle = self.search_text.strip().lower()
            return any(
                needle in text.lower() for text in (item.name, item.key, item.section)
            )
        return self.show_all or item.enabled

    def items(self) -> list[RuleItem]:
        return [item for item in self.record if self.accepts(item)]
