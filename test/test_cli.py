from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from multilaunch import __version__
from multilaunch.cli import app
from multilaunch.dash import app as dash_app
from multilaunch.errors import ExitCode

runner = CliRunner()


def test_missing_config_argument_is_usage_error() -> None:
    result = runner.invoke(app, [])

    assert result.exit_code == ExitCode.INVALID_ARGS


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_unreadable_config_exits_before_ui(monkeypatch, tmp_path: Path) -> None:
    calls: list[object] = []
    monkeypatch.setattr(dash_app, "run_dash", lambda *a, **kw: calls.append(a) or 0)

    result = runner.invoke(app, [str(tmp_path / "missing.json")])

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "Error: cannot read config file" in result.output
    assert calls == []


def test_invalid_json_exits_with_config_error(tmp_path: Path) -> None:
    path = tmp_path / "launch.json"
    path.write_text("not json", encoding="utf-8")

    result = runner.invoke(app, [str(path)])

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "invalid JSON" in result.output


def test_valid_config_starts_dashboard(monkeypatch, tmp_path: Path) -> None:
    seen: dict[str, object] = {}

    def fake_run_dash(configs, dump_dir=None) -> int:
        seen["names"] = [c.name for c in configs]
        seen["dump_dir"] = dump_dir
        return 0

    monkeypatch.setattr(dash_app, "run_dash", fake_run_dash)
    path = tmp_path / "launch.json"
    path.write_text(json.dumps([{"name": "api", "command": "make api", "cwd": "."}]), encoding="utf-8")

    result = runner.invoke(app, [str(path), "--dump-dir", str(tmp_path)])

    assert result.exit_code == 0
    assert seen == {"names": ["api"], "dump_dir": tmp_path}
