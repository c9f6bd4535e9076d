from __future__ import annotations

from pathlib import Path

from multilaunch.util import dump_path, pad, split_chunk, split_command, strip_ansi


def test_split_chunk_drops_trailing_newline_only() -> None:
    assert split_chunk("a\nb\n") == ["a", "b"]
    assert split_chunk("a\n\nb\n") == ["a", "", "b"]
    assert split_chunk("\n") == [""]
    assert split_chunk("") == []


def test_split_chunk_strips_carriage_returns() -> None:
    assert split_chunk("one\r\ntwo\r\n") == ["one", "two"]


def test_partial_line_is_not_reassembled_across_chunks() -> None:
    # Known simplification: a line cut by a chunk boundary becomes two lines
    first = split_chunk("hello wo")
    second = split_chunk("rld\nnext\n")

    assert first + second == ["hello wo", "rld", "next"]


def test_split_command_on_whitespace_without_quoting() -> None:
    assert split_command("npm   run dev") == ("npm", ["run", "dev"])
    assert split_command("echo 'a b'") == ("echo", ["'a", "b'"])
    assert split_command("   ") == ("", [])


def test_strip_ansi_removes_colours_and_cursor_codes() -> None:
    raw = "\x1b[1;32mok\x1b[0m \x1b[2Kdone\x1b]0;title\x07"

    assert strip_ansi(raw) == "ok done"


def test_pad_truncates_and_fills() -> None:
    assert pad("abc", 5) == "abc  "
    assert pad("abcdef", 3) == "abc"


def test_pad_counts_terminal_cells() -> None:
    # Each CJK character takes two cells
    assert pad("日本", 6) == "日本  "
    assert pad("日本語", 5) == "日本 "


def test_dump_path_uses_launch_name(tmp_path: Path) -> None:
    assert dump_path(tmp_path, "api server") == tmp_path / "api server.log"
    assert dump_path(tmp_path, "a/b") == tmp_path / "a-b.log"
