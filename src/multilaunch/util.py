import re
from pathlib import Path

from rich.cells import set_cell_size

# CSI sequences (colours, cursor moves), OSC sequences and lone two-byte escapes
_ANSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)|\x1b[@-Z\\-_]")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def split_chunk(chunk: str) -> list[str]:
    """Split one chunk of process output into lines.

    A trailing newline does not produce an empty last line. A trailing
    fragment without a newline is returned as a complete line; it is not
    carried over to the next chunk.
    """
    if not chunk:
        return []
    lines = chunk.split("\n")
    if chunk.endswith("\n"):
        lines = lines[:-1]
    # CRLF output from the child shows up as stray carriage returns
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def split_command(command: str) -> tuple[str, list[str]]:
    """Split a command line on whitespace into program and arguments.

    No quoting or escaping is understood.
    """
    parts = command.split()
    if not parts:
        return "", []
    return parts[0], parts[1:]


def pad(text: str, width: int) -> str:
    """Pad or cut ``text`` to exactly ``width`` terminal cells."""
    return set_cell_size(text, width)


def dump_path(directory: Path, launch_name: str) -> Path:
    safe = launch_name.replace("/", "-").replace("\\", "-").strip() or "launch"
    return directory / f"{safe}.log"
