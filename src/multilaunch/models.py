from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum

from .logbuffer import LogBuffer


@dataclass(frozen=True, slots=True)
class LaunchConfig:
    name: str
    command: str
    cwd: str
    started_when: str | None = None
    section: str = ""


class LaunchStatus(Enum):
    NOT_STARTED = "Not started"
    STARTING = "Starting"
    RUNNING = "Running"
    FINISHED = "Finished"
    FAILED = "Failed"
    STOPPED = "Stopped"

    @property
    def label(self) -> str:
        return self.value


@dataclass(eq=False, slots=True)
class LaunchProcess:
    """Handle on one spawned child. Replaced, never reused, on relaunch."""

    task: asyncio.Task | None = None
    pid: int | None = None
    stopping: bool = False
    done: asyncio.Event = field(default_factory=asyncio.Event)


@dataclass(eq=False, slots=True)
class LaunchState:
    config: LaunchConfig
    status: LaunchStatus = LaunchStatus.NOT_STARTED
    log: LogBuffer = field(default_factory=LogBuffer)
    process: LaunchProcess | None = None
    exit_code: int | None = None

    @property
    def name(self) -> str:
        return self.config.name
