from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from ..errors import ExitCode
from ..models import LaunchConfig, LaunchState
from ..registry import LaunchRegistry
from ..supervisor import ProcessSupervisor
from .input import InputDispatcher
from .render import log_viewport_height, render_frame

logger = logging.getLogger(__name__)


def _key(keys: str, event: str, description: str = "") -> Binding:
    # Priority so focused widgets and Textual's own defaults never see these keys
    return Binding(keys, f"dispatch('{event}')", description, show=False, priority=True)


class MultilaunchApp(App):
    """The terminal session: owns the screen, the input grab and the launches.

    ``on_mount`` is the session start, ``teardown`` the orderly exit. All
    key presses, mouse events and process events run on Textual's event loop,
    so launch state is only ever touched from one task at a time.
    """

    CSS_PATH = Path(__file__).with_name("app.tcss")
    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [
        _key("up", "UP", "Previous"),
        _key("down", "DOWN", "Next"),
        _key("enter", "ENTER", "Start"),
        _key("ctrl+c", "CTRL_C", "Stop"),
        _key("escape", "ESCAPE", "Quit"),
        _key("end", "END", "Follow"),
        _key("shift+up", "SHIFT_UP", "Scroll up"),
        _key("shift+down", "SHIFT_DOWN", "Scroll down"),
        _key("pageup", "PAGE_UP", "Page up"),
        _key("pagedown", "PAGE_DOWN", "Page down"),
        _key("d", "d", "Dump log"),
        _key("D,shift+d", "D", "Dump log"),
    ]

    def __init__(
        self,
        registry: LaunchRegistry,
        supervisor: ProcessSupervisor | None = None,
        dump_dir: Path | None = None,
    ) -> None:
        super().__init__()
        self.registry = registry
        self.supervisor = supervisor or ProcessSupervisor()
        self.supervisor.listener = self._launch_changed
        self.dispatcher = InputDispatcher(registry, self.supervisor, on_quit=self.teardown, dump_dir=dump_dir)
        self.frame_view: Static | None = None
        self._quitting = False

    def compose(self) -> ComposeResult:
        self.frame_view = Static(id="frame")
        yield self.frame_view

    def on_mount(self) -> None:
        self.supervisor.start()
        self.rerender()

    async def on_unmount(self) -> None:
        # Reached without teardown() when Textual quits on its own (ctrl+q)
        self.supervisor.listener = None
        await self.supervisor.terminate_all(self.registry)
        await self.supervisor.aclose()

    def on_resize(self, event: events.Resize) -> None:
        self.rerender()

    async def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        await self.action_dispatch("MOUSE_WHEEL_UP")

    async def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        await self.action_dispatch("MOUSE_WHEEL_DOWN")

    async def action_dispatch(self, name: str) -> None:
        if self._quitting:
            return
        if await self.dispatcher.dispatch(name):
            self.rerender()

    async def teardown(self) -> None:
        """Terminate every live launch concurrently, then leave."""
        if self._quitting:
            return
        self._quitting = True
        live = self.registry.live()
        if live:
            logger.info("shutting down %d live launches", len(live))
        await self.supervisor.terminate_all(live)
        self.exit(return_code=ExitCode.SUCCESS)

    def _launch_changed(self, state: LaunchState) -> None:
        # Status changes touch the sidebar, appends only matter when shown;
        # either way the whole frame is rebuilt from state.
        self.rerender()

    def rerender(self) -> None:
        if self.frame_view is None or not self.frame_view.is_attached:
            return
        width, height = self.size
        state = self.registry.selected
        window = state.log.visible_window(log_viewport_height(height))
        frame = render_frame(self.registry.states, self.registry.selected_index, window, width, height)
        self.frame_view.update(frame.to_text())


def run_dash(configs: Iterable[LaunchConfig], dump_dir: Path | None = None) -> int:
    registry = LaunchRegistry(configs)
    app = MultilaunchApp(registry, dump_dir=dump_dir)
    app.run()
    return app.return_code or ExitCode.SUCCESS
