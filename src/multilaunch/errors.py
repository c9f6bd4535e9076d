"""Error model and exit codes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4


@dataclass
class MultilaunchError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class ConfigError(MultilaunchError):
    code: ExitCode = ExitCode.CONFIG_ERROR


def user_facing_error(error: MultilaunchError) -> str:
    if error.hint:
        return f"Error: {error.message}. Next step: {error.hint}"
    return f"Error: {error.message}."
