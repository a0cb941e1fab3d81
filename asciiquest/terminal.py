"""Console helpers: raw key input, window size, title and colours."""

from __future__ import annotations

import os
import shutil
import sys
from enum import Enum

RED_TEXT = "\033[1;31m"
GREEN_TEXT = "\033[1;32m"
YELLOW_TEXT = "\033[1;33m"
RESET_TEXT = "\033[0m"

DEFAULT_COLUMNS = 120
DEFAULT_LINES = 30


class Key(str, Enum):
    """Special keys that ``read_key`` reports instead of a character."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESCAPE = "escape"


_SEQUENCES = {
    "\x1b[A": Key.UP,
    "\x1b[B": Key.DOWN,
    "\x1b[C": Key.RIGHT,
    "\x1b[D": Key.LEFT,
    "\x1bOA": Key.UP,
    "\x1bOB": Key.DOWN,
    "\x1bOC": Key.RIGHT,
    "\x1bOD": Key.LEFT,
    "\x1b": Key.ESCAPE,
    "\r": Key.ENTER,
    "\n": Key.ENTER,
}

_WINDOWS_EXTENDED = {"H": Key.UP, "P": Key.DOWN, "K": Key.LEFT, "M": Key.RIGHT}


def _decode(sequence: str) -> str | Key:
    if sequence in _SEQUENCES:
        return _SEQUENCES[sequence]
    if sequence.startswith("\x1b"):
        return Key.ESCAPE
    return sequence


def _read_from_stream(stream) -> str | Key:
    char = stream.read(1)
    if not char:
        raise EOFError("no more input")
    if char == "\x1b":
        following = stream.read(1)
        if following in ("[", "O"):
            char += following + stream.read(1)
    return _decode(char)


def _read_windows() -> str | Key:
    import msvcrt

    char = msvcrt.getwch()
    if char in ("\x00", "\xe0"):
        code = msvcrt.getwch()
        return _WINDOWS_EXTENDED.get(code, code)
    return _decode(char)


def _read_posix_tty(stream) -> str | Key:
    import select
    import termios
    import tty

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        data = os.read(fd, 1)
        if data == b"\x1b":
            while len(data) < 3 and select.select([fd], [], [], 0.05)[0]:
                data += os.read(fd, 1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
    if not data:
        raise EOFError("no more input")
    return _decode(data.decode("utf-8", errors="replace"))


def read_key() -> str | Key:
    """Wait for one key press and return the character or a ``Key``."""
    stream = sys.stdin
    if not stream.isatty():
        return _read_from_stream(stream)
    if os.name == "nt":
        return _read_windows()
    return _read_posix_tty(stream)


def console_size() -> tuple[int, int]:
    """Return the console size as ``(columns, lines)``."""
    size = shutil.get_terminal_size((DEFAULT_COLUMNS, DEFAULT_LINES))
    return size.columns, size.lines


def setup_console(title: str) -> None:
    """Set the window title and ask the terminal for the game's window size."""
    out = sys.stdout
    out.write(f"\x1b]0;{title}\x07")
    out.write(f"\x1b[8;{DEFAULT_LINES};{DEFAULT_COLUMNS}t")
    # Turn off mouse reporting so clicks never arrive as key presses.
    out.write("\x1b[?1000l")
    out.flush()


def colored(text: str, color: str) -> str:
    """Wrap ``text`` in the given colour code and a reset."""
    return f"{color}{text}{RESET_TEXT}"