from __future__ import annotations

import logging
from pathlib import Path

import pytest
import pytest_asyncio

from multilaunch.models import LaunchConfig, LaunchState
from multilaunch.registry import LaunchRegistry
from multilaunch.supervisor import ProcessSupervisor


def make_config(name: str = "svc", command: str = "echo hello", cwd: str = ".", **kwargs) -> LaunchConfig:
    return LaunchConfig(name=name, command=command, cwd=cwd, **kwargs)


@pytest.fixture
def registry() -> LaunchRegistry:
    return LaunchRegistry(
        [
            make_config("api", "run api", section="Backend"),
            make_config("worker", "run worker", section="Backend"),
            make_config("web", "run web", section="Frontend"),
        ]
    )


@pytest.fixture
def state(tmp_path: Path) -> LaunchState:
    return LaunchState(config=make_config(cwd=str(tmp_path)))


class FakeTerminator:
    """Records pids instead of killing; ``ok`` controls the reported outcome."""

    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.calls: list[int] = []

    async def __call__(self, pid: int) -> bool:
        self.calls.append(pid)
        return self.ok


@pytest_asyncio.fixture
async def supervisor():
    sup = ProcessSupervisor()
    sup.start()
    yield sup
    await sup.aclose()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("multilaunch")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
