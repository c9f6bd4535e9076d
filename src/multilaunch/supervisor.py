"""Process lifecycle for launches.

Reader tasks never touch a ``LaunchState`` directly. Every chunk of output and
every exit is queued as an event and applied by ``ProcessSupervisor.run`` on
the event loop, one at a time and in arrival order. Within one child the
stdout and stderr readers each keep their own line order.
"""

from __future__ import annotations

import asyncio
import logging
import os
from asyncio.subprocess import PIPE
from contextlib import suppress
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable

from .models import LaunchProcess, LaunchState, LaunchStatus
from .process import terminate_process_async
from .util import split_chunk, split_command

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
COLOR_ENV = {"FORCE_COLOR": "true"}

Listener = Callable[[LaunchState], None]
Terminator = Callable[[int], Awaitable[bool]]


@dataclass(slots=True)
class OutputEvent:
    state: LaunchState
    process: LaunchProcess
    lines: list[str]


@dataclass(slots=True)
class ExitEvent:
    state: LaunchState
    process: LaunchProcess
    code: int | None
    error: str | None = None


SupervisorEvent = OutputEvent | ExitEvent


class ProcessSupervisor:
    def __init__(self, listener: Listener | None = None, terminator: Terminator = terminate_process_async) -> None:
        self.listener = listener
        self.terminator = terminator
        self.events: asyncio.Queue[SupervisorEvent] = asyncio.Queue()
        self._consumer: asyncio.Task | None = None

    # -- event consumer -------------------------------------------------

    def start(self) -> None:
        if self._consumer is None or self._consumer.done():
            self._consumer = asyncio.create_task(self.run())

    async def aclose(self) -> None:
        if self._consumer and not self._consumer.done():
            self._consumer.cancel()
            with suppress(asyncio.CancelledError):
                await self._consumer
        self._consumer = None

    async def run(self) -> None:
        while True:
            event = await self.events.get()
            try:
                self.apply(event)
            finally:
                self.events.task_done()

    def apply(self, event: SupervisorEvent) -> None:
        if isinstance(event, OutputEvent):
            self._apply_output(event)
        else:
            self._apply_exit(event)

    # -- lifecycle ------------------------------------------------------

    def launch(self, state: LaunchState) -> None:
        if state.process is not None:
            return
        cfg = state.config
        state.status = LaunchStatus.STARTING
        state.exit_code = None
        proc = LaunchProcess()
        state.process = proc
        self._append(state, [f"running '{cfg.command}' from {cfg.cwd}"])
        if not cfg.started_when:
            state.status = LaunchStatus.RUNNING
        logger.info("launching %s: %s (cwd=%s)", cfg.name, cfg.command, cfg.cwd)
        proc.task = asyncio.create_task(self._run(state, proc))
        self._notify(state)

    async def terminate(self, state: LaunchState) -> None:
        proc = state.process
        if proc is None:
            return
        proc.stopping = True
        if proc.pid is None:
            # Still spawning; nothing to signal yet
            if proc.task and not proc.task.done():
                proc.task.cancel()
                with suppress(asyncio.CancelledError):
                    await proc.task
        else:
            logger.info("stopping %s (pid %s)", state.name, proc.pid)
            ok = await self.terminator(proc.pid)
            if not ok:
                logger.error("termination of %s (pid %s) did not complete cleanly", state.name, proc.pid)
        if state.process is proc:
            state.status = LaunchStatus.STOPPED
            state.process = None
            self._append(state, ["", "Process was stopped, press ENTER to restart"])
            self._notify(state)
        proc.done.set()

    async def terminate_all(self, states: Iterable[LaunchState]) -> None:
        live = [s for s in states if s.process is not None]
        if not live:
            return
        logger.info("terminating %d live launches", len(live))
        await asyncio.gather(*(self.terminate(s) for s in live))

    async def wait(self, state: LaunchState) -> None:
        proc = state.process
        if proc is not None:
            await proc.done.wait()

    # -- child side -----------------------------------------------------

    async def _run(self, state: LaunchState, proc: LaunchProcess) -> None:
        cfg = state.config
        program, args = split_command(cfg.command)
        cmdline = " ".join([program, *args])
        env = {**os.environ, **COLOR_ENV}
        try:
            child = await asyncio.create_subprocess_shell(
                cmdline, cwd=cfg.cwd or None, env=env, stdin=asyncio.subprocess.DEVNULL, stdout=PIPE, stderr=PIPE
            )
        except OSError as exc:
            logger.warning("failed to start %s: %s", cfg.name, exc)
            await self.events.put(ExitEvent(state, proc, None, str(exc)))
            return
        proc.pid = child.pid
        logger.debug("%s started with pid %s", cfg.name, child.pid)

        async def _stream(reader: asyncio.StreamReader) -> None:
            while True:
                chunk = await reader.read(CHUNK_SIZE)
                if not chunk:
                    break
                lines = split_chunk(chunk.decode(errors="replace"))
                if lines:
                    await self.events.put(OutputEvent(state, proc, lines))

        await asyncio.gather(_stream(child.stdout), _stream(child.stderr))
        code = await child.wait()
        await self.events.put(ExitEvent(state, proc, code))

    # -- event application ----------------------------------------------

    def _apply_output(self, event: OutputEvent) -> None:
        state = event.state
        if state.process is not event.process:
            # Leftovers drained from a stopped or replaced child
            return
        self._append(state, event.lines)
        marker = state.config.started_when
        if state.status is LaunchStatus.STARTING:
            if not marker or any(marker in ln for ln in event.lines):
                state.status = LaunchStatus.RUNNING
                logger.info("%s is running", state.name)
        self._notify(state)

    def _apply_exit(self, event: ExitEvent) -> None:
        state, proc = event.state, event.process
        if proc.stopping or state.process is not proc:
            # terminate() owns the transition for a stopped process
            return
        cfg = state.config
        state.exit_code = event.code
        if event.error is not None:
            state.status = LaunchStatus.FAILED
            self._append(state, [f"{cfg.command} failed to start: {event.error}"])
        else:
            state.status = LaunchStatus.FINISHED if event.code == 0 else LaunchStatus.FAILED
            self._append(state, [f"{cfg.command} exited with code {event.code}"])
        state.process = None
        proc.done.set()
        logger.info("%s %s (code %s)", cfg.name, state.status.label.lower(), event.code)
        self._notify(state)

    def _append(self, state: LaunchState, lines: list[str]) -> None:
        if lines:
            state.log.append(lines)

    def _notify(self, state: LaunchState) -> None:
        if self.listener is not None:
            self.listener(state)
