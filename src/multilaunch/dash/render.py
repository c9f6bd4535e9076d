"""Frame layout for the dashboard.

``render_frame`` is a pure function of the launches, the selection, the
visible log window and the viewport size. It never reads the clock or the
terminal; the app decides when to call it.

Layout::

    Commands                      │ <selected name>
    ──────────────────────────────┼───────────────────
    <section>                     │ <log line>
    <name>                        │ <log line>
      <status>                    │ ...
    ──────────────────────────────│
     ESC to quit
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from rich.text import Text

from ..models import LaunchState, LaunchStatus
from ..registry import group_sections
from ..util import pad

HEADER_SIZE = 2
FOOTER_SIZE = 1
SIDEBAR_WIDTH = 30

STATUS_STYLES = {
    LaunchStatus.RUNNING: "green",
    LaunchStatus.STARTING: "yellow",
    LaunchStatus.FAILED: "red",
    LaunchStatus.STOPPED: "red",
}
DEFAULT_STATUS_STYLE = "grey50"


@dataclass(frozen=True)
class Frame:
    rows: list[Text]

    def to_text(self) -> Text:
        return Text("\n").join(self.rows)

    @property
    def plain(self) -> list[str]:
        return [r.plain for r in self.rows]


def log_viewport_height(height: int) -> int:
    return max(height - HEADER_SIZE - FOOTER_SIZE, 0)


def empty_log_message(state: LaunchState) -> str:
    return f"Command '{state.config.command}' has not yet been run, to start press ENTER"


def status_text(status: LaunchStatus) -> Text:
    if status is LaunchStatus.NOT_STARTED:
        return Text("")
    style = STATUS_STYLES.get(status, DEFAULT_STATUS_STYLE)
    return Text(f"  {status.label}   ", style=f"italic {style}")


def sidebar_lines(launches: Sequence[LaunchState], selected: int) -> list[Text]:
    lines: list[Text] = []
    for section, members in group_sections(launches):
        if section:
            lines.append(Text(pad(section, SIDEBAR_WIDTH), style="bold underline"))
        for idx, state in members:
            name_style = "bold white" if idx == selected else DEFAULT_STATUS_STYLE
            lines.append(Text(pad(state.name + " ", SIDEBAR_WIDTH), style=name_style))
            lines.append(status_text(state.status))
            lines.append(Text("─" * SIDEBAR_WIDTH))
    return lines


def _log_cell(line: str, width: int) -> Text:
    text = Text.from_ansi(line)
    text.truncate(max(width, 0))
    return text


def render_frame(
    launches: Sequence[LaunchState],
    selected: int,
    window: Sequence[str],
    width: int,
    height: int,
) -> Frame:
    state = launches[selected]
    log_width = width - SIDEBAR_WIDTH - 2

    header = Text.assemble(
        (pad("Commands", SIDEBAR_WIDTH), "bold"),
        "│ ",
        (state.name, "bold"),
    )
    header.truncate(width)
    rule = Text("─" * SIDEBAR_WIDTH + "┼" + "─" * max(width - SIDEBAR_WIDTH - 1, 0))
    rule.truncate(width)

    body_height = log_viewport_height(height)
    sidebar = sidebar_lines(launches, selected)
    log = list(window) if len(state.log) else [empty_log_message(state)]

    body: list[Text] = []
    for row in range(body_height):
        cell = sidebar[row] if row < len(sidebar) else Text("")
        line = Text()
        line.append_text(cell)
        # status labels are shorter than the column
        line.pad_right(SIDEBAR_WIDTH - cell.cell_len)
        line.append("│ ")
        if row < len(log):
            line.append_text(_log_cell(log[row], log_width))
        line.truncate(width)
        body.append(line)

    rows = [header, rule, *body, Text(" ESC to quit")]
    return Frame(rows=rows[:height])
