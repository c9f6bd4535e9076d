from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator

MAX_LOG_LINES = 50_000


class LogBuffer:
    """Bounded, append-only line store with a scroll offset.

    The offset counts lines back from the tail; 0 pins the view to the newest
    output. It always stays within ``[0, len(self)]``.
    """

    def __init__(self, cap: int = MAX_LOG_LINES) -> None:
        if cap <= 0:
            raise ValueError("cap must be positive")
        self.cap = cap
        self._lines: deque[str] = deque(maxlen=cap)
        self._offset = 0

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def offset(self) -> int:
        return self._offset

    def append(self, lines: Iterable[str]) -> None:
        # deque(maxlen=...) drops from the left once full
        self._lines.extend(lines)
        if self._offset > len(self._lines):
            self._offset = len(self._lines)

    def visible_window(self, height: int, offset: int | None = None) -> list[str]:
        if height <= 0 or not self._lines:
            return []
        total = len(self._lines)
        off = self._offset if offset is None else min(max(offset, 0), total)
        start = max(total - height - off, 0)
        end = min(start + height, total)
        return [self._lines[i] for i in range(start, end)]

    def scroll(self, delta: int) -> bool:
        new = min(max(self._offset + delta, 0), len(self._lines))
        if new == self._offset:
            return False
        self._offset = new
        return True

    def reset_scroll(self) -> bool:
        if self._offset == 0:
            return False
        self._offset = 0
        return True
