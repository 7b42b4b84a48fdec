import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from window_rules.constants import (
    APP_DIRNAME,
    CONFIG_DIRNAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PROBE_DELAY_SECONDS,
    HOME_ENV_VAR,
    RULEBOOK_FILENAME,
    SETTINGS_FILENAME,
)
from window_rules.utils import read_json_safe, write_json

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_root() -> Path:
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg).expanduser() / APP_DIRNAME
    return Path.home() / ".config" / APP_DIRNAME


@dataclass
class ToolSettings:
    probe_delay_seconds: float = DEFAULT_PROBE_DELAY_SECONDS
    export_dir: Path = field(default_factory=Path.home)
    log_level: str = DEFAULT_LOG_LEVEL

    def as_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["export_dir"] = str(self.export_dir)
        return payload


class ConfigRepository:
    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root or default_root()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config_dir(self) -> Path:
        return self.root / CONFIG_DIRNAME

    @property
    def rulebook_path(self) -> Path:
        return self.root / RULEBOOK_FILENAME

    @property
    def settings_path(self) -> Path:
        return self.config_dir / SETTINGS_FILENAME

    def load_settings(self) -> ToolSettings:
        settings = ToolSettings()
        payload, error = read_json_safe(self.settings_path)
        if error is not None or not isinstance(payload, dict):
            return settings

        delay = payload.get("probe_delay_seconds")
        if isinstance(delay, (int, float)) and not isinstance(delay, bool) and delay >= 0:
            settings.probe_delay_seconds = float(delay)

        export_dir = payload.get("export_dir")
        if isinstance(export_dir, str) and export_dir.strip():
            settings.export_dir = Path(export_dir).expanduser()

        log_level = payload.get("log_level")
        if isinstance(log_level, str) and log_level.upper() in LOG_LEVELS:
            settings.log_level = log_level.upper()
        return settings

    def save_settings(self, settings: ToolSettings) -> None:
        write_json(self.settings_path, settings.as_dict())
