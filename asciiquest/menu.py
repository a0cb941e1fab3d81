"""The main menu and the program's entry point."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, TextIO

from .engine import GameEngine, draw_border, draw_empty_lines, draw_option
from .entity import SaveFormatError
from .logger import get_logger
from .terminal import GREEN_TEXT, RED_TEXT, RESET_TEXT, Key, colored, console_size, setup_console

OPTIONS = ("New game", "Load game", "Options", "Quit")
WINDOW_TITLE = "ASCII Game"

_TITLE_LEFT_PADDING = 20
_TITLE_RIGHT_PADDING = 101
_TITLE = (
    "   ###     ######   ######  #### ####      ######      ###    ##     ## ########",
    "  ## ##   ##    ## ##    ##  ##   ##      ##    ##    ## ##   ###   ### ##      ",
    " ##   ##  ##       ##        ##   ##      ##         ##   ##  #### #### ##      ",
    "##     ##  ######  ##        ##   ##      ##   #### ##     ## ## ### ## ######  ",
    "#########       ## ##        ##   ##      ##    ##  ######### ##     ## ##      ",
    "##     ## ##    ## ##    ##  ##   ##      ##    ##  ##     ## ##     ## ##      ",
    "##     ##  ######   ######  #### ####      ######   ##     ## ##     ## ########",
)


def _title(width: int) -> str:
    return "".join(
        "#"
        + GREEN_TEXT
        + line.rjust(width - _TITLE_LEFT_PADDING)
        + RESET_TEXT
        + "#".rjust(width - _TITLE_RIGHT_PADDING)
        + "\n"
        for line in _TITLE
    )


def build_menu(width: int, height: int, current_index: int) -> str:
    """The main menu window with the game's banner and its four entries."""
    empty = (height - len(OPTIONS) - 6) // 2
    parts = [
        draw_border(width),
        draw_empty_lines(width, empty - 7),
        _title(width),
        draw_empty_lines(width, empty - 6),
    ]
    for index, option in enumerate(OPTIONS):
        parts.append(draw_option(option, width, index == current_index))
        parts.append(draw_empty_lines(width, 1))
    parts.append(draw_empty_lines(width, empty - 4))
    parts.append(draw_border(width, True))
    return "".join(parts)


def _read_line(prompt: str, read_key: Callable[[], str | Key], out: TextIO) -> str:
    out.write(prompt)
    out.flush()
    chars: list[str] = []
    while True:
        key = read_key()
        if key == Key.ENTER:
            break
        if key in ("\x7f", "\b"):
            if chars:
                chars.pop()
                out.write("\b \b")
        elif not isinstance(key, Key):
            chars.append(key)
            out.write(key)
        out.flush()
    out.write("\n")
    return "".join(chars)


class Menu:
    """The main menu: start, load, configure or quit."""

    def __init__(
        self,
        engine: GameEngine,
        read_key: Callable[[], str | Key] | None = None,
        output: TextIO | None = None,
    ) -> None:
        self.engine = engine
        self.read_key = read_key if read_key is not None else engine.read_key
        self.output = output if output is not None else engine.output

    def _report(self, error: Exception) -> None:
        get_logger().error(str(error))
        self.output.write(colored(str(error), RED_TEXT) + "\n")

    def handle_option(self, index: int) -> bool:
        """Run the chosen entry; return False when the player decided to quit."""
        option = OPTIONS[index]
        logger = get_logger()
        try:
            if option == "New game":
                logger.info("Creating new game.")
                name = _read_line("Enter map name: ", self.read_key, self.output)
                self.engine.new_game(name)
            elif option == "Load game":
                logger.info("Loading game.")
                self.engine.load_game()
            elif option == "Options":
                logger.info("Opening options.")
                self.engine.options()
            else:
                return not self.engine.quit()
        except (ValueError, OSError, SaveFormatError) as error:
            self._report(error)
        return True

    def show(self) -> None:
        """Show the menu until the player quits."""
        current = 0
        redraw = True
        while True:
            if redraw:
                columns, lines = console_size()
                self.output.write(build_menu(columns, lines, current) + "\n")
                self.output.flush()
                redraw = False
            key = self.read_key()
            if key in ("w", Key.UP):
                current = (current - 1) % len(OPTIONS)
                redraw = True
            elif key in ("s", Key.DOWN):
                current = (current + 1) % len(OPTIONS)
                redraw = True
            elif key == Key.ENTER:
                if not self.handle_option(current):
                    return
                redraw = True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="asciiquest", description="Explore randomly generated rooms in the console."
    )
    parser.parse_args(argv)
    logger = get_logger()
    logger.info("Starting game...")
    setup_console(WINDOW_TITLE)
    engine = GameEngine()
    try:
        Menu(engine).show()
    except (EOFError, KeyboardInterrupt):
        pass
    logger.info("Stopping game...")
    return 0


if __name__ == "__main__":
    sys.exit(main())