import io
import sys

import pytest

from asciiquest.terminal import (
    GREEN_TEXT,
    RED_TEXT,
    RESET_TEXT,
    Key,
    colored,
    console_size,
    read_key,
    setup_console,
)


def test_colored_wraps_text_in_codes():
    assert colored("hi", RED_TEXT) == "\033[1;31mhi\033[0m"


def test_colored_ends_with_reset():
    result = colored("menu", GREEN_TEXT)
    assert result.startswith(GREEN_TEXT)
    assert result.endswith(RESET_TEXT)
    assert "menu" in result


@pytest.mark.parametrize(
    "data, expected",
    [
        ("w", "w"),
        ("\x1b[A", Key.UP),
        ("\x1b[B", Key.DOWN),
        ("\x1b[C", Key.RIGHT),
        ("\x1b[D", Key.LEFT),
        ("\r", Key.ENTER),
        ("\n", Key.ENTER),
        ("\x1b", Key.ESCAPE),
    ],
)
def test_read_key_decodes_input(monkeypatch, data, expected):
    monkeypatch.setattr(sys, "stdin", io.StringIO(data))
    assert read_key() == expected


def test_read_key_consumes_one_key_at_a_time(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("ab\x1b[D"))
    assert [read_key(), read_key(), read_key()] == ["a", "b", Key.LEFT]


def test_read_key_at_end_of_input_raises(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    with pytest.raises(EOFError):
        read_key()


def test_console_size_follows_environment(monkeypatch):
    monkeypatch.setenv("COLUMNS", "100")
    monkeypatch.setenv("LINES", "40")
    assert console_size() == (100, 40)


def test_setup_console_sets_title(capsys):
    setup_console("ASCII Game")
    out = capsys.readouterr().out
    assert "\x1b]0;ASCII Game\x07" in out