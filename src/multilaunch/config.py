from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .models import LaunchConfig

_REQUIRED = ("name", "command", "cwd")
_OPTIONAL = ("startedWhen", "section")


def _string_field(entry: dict[str, Any], key: str, index: int, *, required: bool) -> str | None:
    value = entry.get(key)
    if value is None:
        if required:
            raise ConfigError(f"launch #{index + 1} is missing '{key}'")
        return None
    if not isinstance(value, str):
        raise ConfigError(f"launch #{index + 1}: '{key}' must be a string")
    if required and not value.strip():
        raise ConfigError(f"launch #{index + 1}: '{key}' must not be empty")
    return value


def parse_config(data: Any) -> list[LaunchConfig]:
    """Validate decoded JSON and build the launch list.

    ``cwd`` is kept as written apart from ``~`` expansion, so relative paths
    resolve against the directory multilaunch was started from.
    """
    if not isinstance(data, list):
        raise ConfigError("config must be a JSON array of launches")
    if not data:
        raise ConfigError("config contains no launches", hint="add at least one entry")

    launches: list[LaunchConfig] = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ConfigError(f"launch #{i + 1} must be a JSON object")
        name, command, cwd = (_string_field(entry, k, i, required=True) for k in _REQUIRED)
        started_when, section = (_string_field(entry, k, i, required=False) for k in _OPTIONAL)
        cwd = os.path.expanduser(cwd)
        launches.append(
            LaunchConfig(
                name=name,
                command=command,
                cwd=cwd,
                started_when=started_when or None,
                section=section or "",
            )
        )
    return launches


def load_config(path: str | Path) -> list[LaunchConfig]:
    p = Path(path).expanduser()
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file {p}: {e.strerror or e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in {p}: {e}") from e
    return parse_config(data)
