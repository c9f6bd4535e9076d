"""Keyboard and mouse actions against the selected launch.

Every action is a coroutine returning whether the screen should be redrawn.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable

from ..registry import LaunchRegistry
from ..supervisor import ProcessSupervisor
from ..util import dump_path, strip_ansi

logger = logging.getLogger(__name__)

SCROLL_STEP = 3
PAGE_STEP = 20

Action = Callable[[], Awaitable[bool]]


class InputDispatcher:
    def __init__(
        self,
        registry: LaunchRegistry,
        supervisor: ProcessSupervisor,
        on_quit: Callable[[], Awaitable[None]],
        dump_dir: Path | None = None,
    ) -> None:
        self.registry = registry
        self.supervisor = supervisor
        self.on_quit = on_quit
        self.dump_dir = dump_dir
        self.actions: dict[str, Action] = {
            "UP": lambda: self._select(-1),
            "DOWN": lambda: self._select(1),
            "ENTER": self._start,
            "CTRL_C": self._stop,
            "ESCAPE": self._quit,
            "END": self._pin_tail,
            "SHIFT_UP": lambda: self._scroll(SCROLL_STEP),
            "SHIFT_DOWN": lambda: self._scroll(-SCROLL_STEP),
            "PAGE_UP": lambda: self._scroll(PAGE_STEP),
            "PAGE_DOWN": lambda: self._scroll(-PAGE_STEP),
            "MOUSE_WHEEL_UP": lambda: self._scroll(SCROLL_STEP),
            "MOUSE_WHEEL_DOWN": lambda: self._scroll(-SCROLL_STEP),
            "d": self._dump,
            "D": self._dump,
        }

    async def dispatch(self, name: str) -> bool:
        action = self.actions.get(name)
        if action is None:
            return False
        return await action()

    async def _select(self, direction: int) -> bool:
        self.registry.select_next(direction)
        return True

    async def _start(self) -> bool:
        state = self.registry.selected
        self.supervisor.launch(state)
        state.log.reset_scroll()
        return True

    async def _stop(self) -> bool:
        state = self.registry.selected
        if state.process is None:
            return False
        await self.supervisor.terminate(state)
        state.log.reset_scroll()
        return True

    async def _quit(self) -> bool:
        await self.on_quit()
        return False

    async def _pin_tail(self) -> bool:
        return self.registry.selected.log.reset_scroll()

    async def _scroll(self, delta: int) -> bool:
        # Positive deltas move back into history
        return self.registry.selected.log.scroll(delta)

    async def _dump(self) -> bool:
        state = self.registry.selected
        path = dump_path(self.dump_dir or Path.cwd(), state.name).resolve()
        text = "\n".join(strip_ansi(ln) for ln in state.log)
        try:
            await asyncio.to_thread(path.write_text, text, encoding="utf-8")
        except OSError as exc:
            logger.warning("could not write log of %s to %s: %s", state.name, path, exc)
            return False
        state.log.append([f"Log written to {path}"])
        logger.info("dumped %d lines of %s to %s", len(state.log) - 1, state.name, path)
        return True
