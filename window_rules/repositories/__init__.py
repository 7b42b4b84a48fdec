from window_rules.repositories.config import ConfigRepository, ToolSettings
from window_rules.repositories.rulebook import RuleBookRepository

__all__ = [
    "ConfigRepository",
    "RuleBookRepository",
    "ToolSettings",
]
