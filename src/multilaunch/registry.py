from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from .errors import ConfigError
from .models import LaunchConfig, LaunchState


Section = tuple[str, list[tuple[int, LaunchState]]]


def group_sections(states: Sequence[LaunchState]) -> list[Section]:
    # Contiguous runs only; a section name reused later starts a new group
    groups: list[Section] = []
    for idx, state in enumerate(states):
        section = state.config.section
        if not groups or groups[-1][0] != section:
            groups.append((section, []))
        groups[-1][1].append((idx, state))
    return groups


class LaunchRegistry:
    """The fixed, ordered set of launches plus the selection cursor."""

    def __init__(self, configs: Iterable[LaunchConfig]) -> None:
        self.states: list[LaunchState] = [LaunchState(config=c) for c in configs]
        if not self.states:
            raise ConfigError("no launches configured", hint="add at least one entry to the config file")
        self.selected_index = 0

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[LaunchState]:
        return iter(self.states)

    def __getitem__(self, index: int) -> LaunchState:
        return self.states[index]

    @property
    def selected(self) -> LaunchState:
        return self.states[self.selected_index]

    def select_next(self, direction: int) -> int:
        step = 1 if direction > 0 else -1
        self.selected_index = (self.selected_index + step) % len(self.states)
        self.selected.log.reset_scroll()
        return self.selected_index

    def sections(self) -> list[Section]:
        return group_sections(self.states)

    def live(self) -> list[LaunchState]:
        return [s for s in self.states if s.process is not None]
