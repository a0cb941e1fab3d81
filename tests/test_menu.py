import io
import random
import re
from io import StringIO

import pytest

from asciiquest.builder import DefaultLocationBuilder, LocationDirector
from asciiquest.engine import GameEngine
from asciiquest.menu import OPTIONS, Menu, build_menu, main
from asciiquest.players import Mage
from asciiquest.terminal import Key

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def visible(text):
    return ANSI.sub("", text)


@pytest.fixture(autouse=True)
def _workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("COLUMNS", "120")
    monkeypatch.setenv("LINES", "30")


def scripted(*keys):
    remaining = iter(keys)

    def read():
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError("script finished") from None

    return read


def make_menu(tmp_path, *keys):
    output = StringIO()
    director = LocationDirector(DefaultLocationBuilder(random.Random(5), Mage.starter))
    engine = GameEngine(tmp_path / "saves", scripted(*keys), output, director)
    return Menu(engine), engine, output


@pytest.mark.parametrize("index", range(len(OPTIONS)))
def test_build_menu_layout(index):
    lines = visible(build_menu(120, 30, index)).split("\n")
    assert len(lines) == 30
    assert all(len(line) == 120 for line in lines)
    marked = [line for line in lines if "<" in line]
    assert len(marked) == 1 and OPTIONS[index] in marked[0]


def test_build_menu_lists_every_option():
    text = visible(build_menu(120, 30, 0))
    assert all(option in text for option in OPTIONS)


def test_show_quits_through_wrapped_selection(tmp_path):
    menu, _engine, output = make_menu(tmp_path, Key.UP, Key.ENTER, Key.ENTER)
    menu.show()
    assert "Do you really want to quit?" in output.getvalue()


def test_quit_answer_no_keeps_running(tmp_path):
    menu, _engine, _ = make_menu(tmp_path, Key.DOWN, Key.ENTER)
    assert menu.handle_option(3) is True


def test_new_game_from_menu(tmp_path):
    menu, engine, output = make_menu(tmp_path, "h", "x", "\x7f", "i", Key.ENTER, "1", Key.ESCAPE)
    assert menu.handle_option(0) is True
    assert engine.game_map.name == "hi"
    assert engine.saved_maps() == ["hi"]
    assert "Enter map name: " in output.getvalue()


def test_new_game_with_blank_name_reports(tmp_path):
    menu, engine, output = make_menu(tmp_path, Key.ENTER)
    assert menu.handle_option(0) is True
    assert engine.game_map is None
    assert "Invalid map name. Please enter a non-empty name." in output.getvalue()


def test_load_game_without_saves(tmp_path):
    menu, _engine, output = make_menu(tmp_path, Key.ESCAPE)
    assert menu.handle_option(1) is True
    assert "No saved maps found." in output.getvalue()


def test_options_back(tmp_path):
    menu, _engine, output = make_menu(tmp_path, Key.DOWN, Key.ENTER)
    assert menu.handle_option(2) is True
    assert "Open log" in output.getvalue()


def test_main_quits_from_keyboard(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("\x1b[A\r\r"))
    assert main([]) == 0
    assert "Do you really want to quit?" in capsys.readouterr().out


def test_main_stops_at_end_of_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main([]) == 0
    assert "New game" in capsys.readouterr().out


def test_main_rejects_unknown_arguments():
    with pytest.raises(SystemExit) as excinfo:
        main(["--bogus"])
    assert excinfo.value.code == 2