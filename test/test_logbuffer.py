from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from multilaunch.logbuffer import MAX_LOG_LINES, LogBuffer

_LINES = st.lists(st.text(max_size=8), max_size=30)


@given(st.lists(_LINES, max_size=20), st.integers(min_value=1, max_value=40))
def test_append_keeps_most_recent_suffix_within_cap(batches: list[list[str]], cap: int) -> None:
    buf = LogBuffer(cap=cap)
    everything: list[str] = []

    for batch in batches:
        buf.append(batch)
        everything.extend(batch)
        assert len(buf) <= cap

    assert buf.lines == everything[-cap:]


@given(_LINES, st.integers(min_value=0, max_value=50))
def test_pinned_window_is_the_tail(lines: list[str], height: int) -> None:
    buf = LogBuffer()
    buf.append(lines)

    window = buf.visible_window(height, 0)

    assert len(window) == min(height, len(lines))
    assert window == (lines[len(lines) - len(window):] if window else [])


@given(_LINES, st.integers(min_value=1, max_value=20), st.integers(min_value=-100, max_value=100))
def test_scroll_offset_stays_clamped(lines: list[str], step: int, delta: int) -> None:
    buf = LogBuffer()
    buf.append(lines)

    buf.scroll(delta)

    assert 0 <= buf.offset <= len(buf)
    # Pushing again past the end it is already clamped at changes nothing
    if buf.offset == len(buf) and delta > 0:
        assert buf.scroll(step) is False
    if buf.offset == 0 and delta <= 0:
        assert buf.scroll(-step) is False


def test_default_cap() -> None:
    assert LogBuffer().cap == MAX_LOG_LINES == 50_000


def test_cap_must_be_positive() -> None:
    with pytest.raises(ValueError):
        LogBuffer(cap=0)


def test_append_nothing_is_noop() -> None:
    buf = LogBuffer()
    buf.append(["a"])
    buf.scroll(1)

    buf.append([])

    assert buf.lines == ["a"]
    assert buf.offset == 1


def test_fifo_eviction_drops_oldest_first() -> None:
    buf = LogBuffer(cap=3)

    buf.append(["1", "2"])
    buf.append(["3", "4", "5"])

    assert buf.lines == ["3", "4", "5"]


def test_window_scrolled_back() -> None:
    buf = LogBuffer()
    buf.append([str(i) for i in range(10)])

    assert buf.visible_window(3, 2) == ["5", "6", "7"]
    assert buf.visible_window(3) == ["7", "8", "9"]


def test_window_fully_scrolled_back_still_shows_a_full_page() -> None:
    buf = LogBuffer()
    buf.append([str(i) for i in range(10)])
    buf.scroll(100)

    assert buf.offset == 10
    assert buf.visible_window(4) == ["0", "1", "2", "3"]


def test_window_taller_than_buffer() -> None:
    buf = LogBuffer()
    buf.append(["a", "b"])

    assert buf.visible_window(10, 1) == ["a", "b"]
    assert buf.visible_window(0) == []


def test_scroll_reports_change() -> None:
    buf = LogBuffer()
    buf.append(["a", "b", "c"])

    assert buf.scroll(2) is True
    assert buf.offset == 2
    assert buf.scroll(5) is True
    assert buf.offset == 3
    assert buf.scroll(1) is False
    assert buf.scroll(-10) is True
    assert buf.offset == 0
    assert buf.scroll(-1) is False


def test_scroll_on_empty_buffer_never_moves() -> None:
    buf = LogBuffer()

    assert buf.scroll(1) is False
    assert buf.offset == 0


def test_reset_scroll() -> None:
    buf = LogBuffer()
    buf.append(["a", "b"])
    buf.scroll(1)

    assert buf.reset_scroll() is True
    assert buf.offset == 0
    assert buf.reset_scroll() is False
