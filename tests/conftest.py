import sys
import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.delenv("WINDOW_RULES_HOME", raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_json():
    def _write(path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def read_json():
    def _read(path: Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def rules_root(tmp_path: Path) -> Path:
    return tmp_path / ".config" / "window-rules"


@pytest.fixture
def rulebook_path(rules_root: Path) -> Path:
    return rules_root / "rules.json"


@pytest.fixture
def seeded_rulebook(rulebook_path: Path, write_json) -> Path:
    """Rule book with three rules matching the classes alpha, beta and gamma."""
    payload: dict[str, Any] = {"General": {"count": 3}}
    for slot, name in enumerate(("alpha", "beta", "gamma"), start=1):
        payload[str(slot)] = {
            "description": f"Rule {name}",
            "wmclass": name,
            "wmclassPolicy": 1,
            "types": 1,
        }
    write_json(rulebook_path, payload)
    return rulebook_path


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
