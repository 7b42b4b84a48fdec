from typing import Final


APP_DIRNAME: Final[str] = "window-rules"
HOME_ENV_VAR: Final[str] = "WINDOW_RULES_HOME"

RULEBOOK_FILENAME: Final[str] = "rules.json"
SETTINGS_FILENAME: Final[str] = "settings.json"
CONFIG_DIRNAME: Final[str] = "config"

GENERAL_GROUP: Final[str] = "General"
COUNT_KEY: Final[str] = "count"
POLICY_KEY_SUFFIX: Final[str] = "Policy"
DELETE_RULE_KEY: Final[str] = "DeleteRule"

EXPORT_EXTENSION: Final[str] = ".winrule"

DEFAULT_PROBE_DELAY_SECONDS: Final[float] = 3.0
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
