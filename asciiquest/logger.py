"""Game log written to ``logs/latest.log``, archived on each start."""

from __future__ import annotations

import functools
import itertools
import os
import shlex
import subprocess
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path

from .terminal import RED_TEXT, colored

LATEST_LOG = "latest.log"


class LogLevel(Enum):
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"


def _current_time() -> str:
    now = datetime.now()
    return f"{now:%Y-%m-%d %H:%M:%S}.{now.microsecond:06d}"


def _default_viewer() -> str:
    configured = os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if configured:
        return configured
    if os.name == "nt":
        return "notepad"
    if sys.platform == "darwin":
        return "open"
    return "xdg-open"


class Logger:
    """Appends timestamped lines to the latest log file."""

    def __init__(self, directory: str | os.PathLike = "logs") -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path = self.directory / LATEST_LOG
        self._file = None
        self.archive_log_file()
        self._open()

    def _open(self) -> None:
        try:
            self._file = self.path.open("a", encoding="utf-8")
        except OSError:
            self._file = None
            print(colored("Unable to open log file!", RED_TEXT), file=sys.stderr)

    def format_message(self, level: LogLevel, message: str) -> str:
        return f"[{LogLevel(level).value}: {_current_time()}] {message}"

    def log(self, level: LogLevel, message: str) -> None:
        if self._file is None or self._file.closed:
            print(colored("Unable to open log file!", RED_TEXT), file=sys.stderr)
            return
        self._file.write(self.format_message(level, message) + "\n")
        self._file.flush()

    def info(self, message: str) -> None:
        self.log(LogLevel.INFO, message)

    def warning(self, message: str) -> None:
        self.log(LogLevel.WARNING, message)

    def error(self, message: str) -> None:
        self.log(LogLevel.ERROR, message)

    def archive_log_file(self) -> Path | None:
        """Rename the latest log to ``log-<date>-<n>.log``; return the new path."""
        if not self.path.exists():
            return None
        was_open = self._file is not None and not self._file.closed
        if was_open:
            self._file.close()
        date = datetime.now().strftime("%Y-%m-%d")
        candidates = (
            self.directory / f"log-{date}-{number}.log" for number in itertools.count(1)
        )
        target = next(path for path in candidates if not path.exists())
        self.path.rename(target)
        if was_open:
            self._open()
        return target

    def show_log(self) -> bool:
        """Open the latest log in a viewer; return whether one was started."""
        path = self.path.resolve()
        if not path.exists():
            print(colored(f"Log file not found: {path}", RED_TEXT), file=sys.stderr)
            return False
        command = shlex.split(_default_viewer()) + [str(path)]
        try:
            subprocess.Popen(command)
        except OSError as exc:
            print(colored(f"Starting the log viewer failed ({exc}).", RED_TEXT), file=sys.stderr)
            return False
        return True

    def close(self) -> None:
        if self._file is not None and not self._file.closed:
            self._file.close()

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@functools.lru_cache(maxsize=None)
def get_logger() -> Logger:
    """Return the game's shared logger, writing to ``logs/``."""
    return Logger("logs")