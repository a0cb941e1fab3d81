"""Game sessions: starting, saving, loading and playing a map, and window drawing."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Sequence, TextIO

from .builder import DefaultLocationBuilder, LocationDirector
from .entity import SaveReader, SaveWriter
from .inventory import Inventory
from .items import Item
from .location import Location, MoveOutcome
from .logger import get_logger
from .players import Player, choose_player
from .terminal import GREEN_TEXT, RED_TEXT, RESET_TEXT, YELLOW_TEXT, Key, colored, console_size
from .terminal import read_key as terminal_read_key
from .world import Difficulty, GameMap

SAVE_EXTENSION = ".bin"
LOAD_GAME_TITLE = "Load Game:"
OPTIONS_TITLE = "Options:"
QUIT_TITLE = "Do you really want to quit?"
OPTIONS_CONTENT = ("Open log", "Back")
QUIT_CONTENT = ("Yes", "No")

_PADDING_FACTOR = 4
_DEATH_LEFT_PADDING = 25
_DEATH_RIGHT_PADDING = 96
_DEATH_TITLE = (
    "##    ##  #######  ##     ##    ########  #### ######## ######## ",
    " ##  ##  ##     ## ##     ##    ##     ##  ##  ##       ##     ##",
    "  ####   ##     ## ##     ##    ##     ##  ##  ##       ##     ##",
    "   ##    ##     ## ##     ##    ##     ##  ##  ######   ##     ##",
    "   ##    ##     ## ##     ##    ##     ##  ##  ##       ##     ##",
    "   ##    ##     ## ##     ##    ##     ##  ##  ##       ##     ##",
    "   ##     #######   #######     ########  #### ######## ######## ",
)

_DIFFICULTY_PROMPT = "Select difficulty level: [1] Easy  [2] Medium  [3] Hard"
_DIFFICULTY_INVALID = "Invalid choice. Please enter a number between 1 and 3."
_PICK_UP_PROMPT = "Choose action: [1] Pick up  [2] Leave it"
_PICK_UP_INVALID = "Invalid input, please enter 1 or 2."

_MOVES = {
    "w": "w", "W": "w", Key.UP: "w",
    "s": "s", "S": "s", Key.DOWN: "s",
    "a": "a", "A": "a", Key.LEFT: "a",
    "d": "d", "D": "d", Key.RIGHT: "d",
}


def draw_border(width: int, end_of_window: bool = False) -> str:
    """A full row of ``#``; the last one of a window has no line break."""
    return "#" * width + ("" if end_of_window else "\n")


def draw_empty_lines(width: int, count: int) -> str:
    """``count`` rows that are empty between the two side walls."""
    return ("#" + " " * max(width - 2, 0) + "#\n") * max(count, 0)


def draw_option(option: str, width: int, is_selected: bool) -> str:
    """One centred menu entry; the selected one is green and marked with ``<``."""
    padding_left = max((width - len(option) - _PADDING_FACTOR) // 2, 0)
    padding_right = width - len(option) - _PADDING_FACTOR - padding_left
    if is_selected:
        body = f"{GREEN_TEXT}{' ' * padding_left}{option} <{' ' * max(padding_right - 2, 0)}"
    else:
        body = f"{' ' * padding_left}{option}{' ' * max(padding_right, 0)}"
    return f"#{body}{RESET_TEXT}  #\n"


def death_title(width: int) -> str:
    """The large "you died" banner, framed by the window's side walls."""
    return "".join(
        "#"
        + GREEN_TEXT
        + line.rjust(width - _DEATH_LEFT_PADDING)
        + RESET_TEXT
        + "#".rjust(width - _DEATH_RIGHT_PADDING)
        + "\n"
        for line in _DEATH_TITLE
    )


def build_window(
    width: int, height: int, content: Sequence[str], current_index: int, title: str
) -> str:
    """A framed window with a title and one entry per line of ``content``."""
    is_load_game = title == LOAD_GAME_TITLE
    empty = 7 if is_load_game else (height - len(content) - 4) // 2
    padding_left = (width - len(title) - 2) // 2
    padding_right = width - len(title) - 2 - padding_left
    parts = [
        draw_border(width),
        draw_empty_lines(width, empty),
        "#" + " " * max(padding_left, 0) + title + " " * max(padding_right, 0) + "#\n",
        draw_empty_lines(width, 2 if is_load_game else empty - 7),
    ]
    for index, option in enumerate(content):
        parts.append(draw_option(option, width, index == current_index))
        parts.append(draw_empty_lines(width, 1))
    if is_load_game:
        tail = height - (empty + 3 + 1 + len(content) * 2) + 3
    else:
        tail = empty
    parts.append(draw_empty_lines(width, tail))
    parts.append(draw_border(width, True))
    return "".join(parts)


def _death_window(width: int, height: int) -> str:
    empty = (height - 2 - 6) // 2
    return "".join(
        (
            draw_border(width),
            draw_empty_lines(width, empty - 2),
            death_title(width),
            draw_empty_lines(width, empty - 2),
            draw_option("Back to menu", width, False),
            draw_empty_lines(width, empty),
            draw_border(width, True),
        )
    )


class _TrackedLocation:
    """Passes a player's step on to a location and remembers what it led to."""

    def __init__(self, location: Location) -> None:
        self.location = location
        self.outcome: MoveOutcome | None = None
        self.target: tuple[int, int] | None = None

    @property
    def tiles(self):
        return self.location.tiles

    def move(self, current_x: int, current_y: int, new_x: int, new_y: int, entity) -> MoveOutcome:
        self.target = (new_x, new_y)
        self.outcome = self.location.move(current_x, current_y, new_x, new_y, entity)
        return self.outcome


class GameEngine:
    """Runs one game at a time: creating, playing, saving and loading maps."""

    def __init__(
        self,
        save_directory: str | Path = "saves",
        read_key: Callable[[], str | Key] | None = None,
        output: TextIO | None = None,
        director: LocationDirector | None = None,
    ) -> None:
        self.save_directory = Path(save_directory)
        self.read_key = read_key if read_key is not None else terminal_read_key
        self.output = output if output is not None else sys.stdout
        if director is None:
            director = LocationDirector(DefaultLocationBuilder(player_factory=self._choose_player))
        self.director = director
        self.game_map: GameMap | None = None
        self.inventory = Inventory()
        self.difficulty = Difficulty.EASY
        self._in_game = False

    def _choose_player(self) -> Player:
        return choose_player(self.read_key, self.output)

    def _write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def _say(self, message: str) -> None:
        self._write(message + "\n")

    def _require_map(self) -> GameMap:
        if self.game_map is None:
            raise RuntimeError("No game is running.")
        return self.game_map

    def _player(self) -> Player:
        location = self._require_map().current_location
        player = location.player() if location is not None else None
        if player is None:
            raise RuntimeError("No player found in the location.")
        return player

    def _show_map(self) -> None:
        self._write(self._require_map().render())

    def _save_path(self, name: str) -> Path:
        return self.save_directory / f"{name}{SAVE_EXTENSION}"

    def _choose_difficulty(self) -> Difficulty:
        self._say(_DIFFICULTY_PROMPT)
        while True:
            key = self.read_key()
            if key in ("1", "2", "3"):
                return Difficulty(int(key) - 1)
            self._say(_DIFFICULTY_INVALID)

    def new_game(self, map_name: str) -> None:
        """Create a map with a first room and a new player, save it and play it."""
        game_map = GameMap(self.director)
        game_map.set_name(map_name)
        self.difficulty = self._choose_difficulty()
        get_logger().info(f"Created map with name: {game_map.name}")
        game_map.create_new_location(first=True)
        self.game_map = game_map
        self.inventory = Inventory()
        self.save_game()
        self.game_loop()

    def save_game(self) -> Path:
        """Write the map and the inventory to ``<save directory>/<map name>.bin``."""
        game_map = self._require_map()
        logger = get_logger()
        logger.info(f"Game {game_map.name} saving.")
        self._say("Game is saving.")
        self.save_directory.mkdir(parents=True, exist_ok=True)
        path = self._save_path(game_map.name)
        with path.open("wb") as stream:
            writer = SaveWriter(stream)
            game_map.save(writer)
            self.inventory.save(writer)
        self._say("Game saved successfully.")
        logger.info(f"Game {game_map.name} saved.")
        return path

    def saved_maps(self) -> list[str]:
        """Names of the saved maps, in alphabetical order."""
        return sorted(
            entry.stem
            for entry in self.save_directory.iterdir()
            if entry.is_file() and entry.suffix == SAVE_EXTENSION
        )

    def load_saved(self, name: str) -> GameMap:
        """Read a saved map and its inventory, making them the running game."""
        with self._save_path(name).open("rb") as stream:
            reader = SaveReader(stream)
            game_map = GameMap.load(reader, self.director)
            inventory = Inventory.load(reader)
        self.game_map = game_map
        self.inventory = inventory
        return game_map

    def load_game(self) -> bool:
        """Let the player pick a saved map and play it; return whether one was loaded."""
        logger = get_logger()
        self._say("Game loading.")
        if not self.save_directory.exists():
            self.save_directory.mkdir(parents=True)
            self._say(colored("Save directory created. No saved maps found.", YELLOW_TEXT))
            logger.warning("Save directory created. No saved maps found.")
        saved = self.saved_maps()
        if not saved:
            self._say(colored("No saved maps found.", YELLOW_TEXT))
            logger.warning("No saved maps found.")
        choice = self.run_menu(LOAD_GAME_TITLE, saved)
        if choice is None:
            return False
        game_map = self.load_saved(saved[choice])
        self._say("Game loaded successfully.")
        logger.info("Game loaded successfully.")
        location = game_map.current_location
        if location is None or location.player() is None:
            logger.error("Player is dead.")
            self.death_screen()
            return True
        self.game_loop()
        return True

    def _offer_item(self, location: Location, x: int, y: int) -> None:
        item = location.tiles[x][y].entity
        if isinstance(item, Item):
            self._say(item.describe())
        self._say(_PICK_UP_PROMPT)
        while True:
            key = self.read_key()
            if key in ("1", "2"):
                break
            get_logger().error("Invalid input.")
            self._say(colored(_PICK_UP_INVALID, RED_TEXT))
        if key == "1":
            location.pick_up(x, y, self.inventory)

    def _move_player(self, direction: str) -> bool:
        game_map = self._require_map()
        player = self._player()
        location = game_map.current_location
        tracked = _TrackedLocation(location)
        if player.move(direction, tracked):
            return True
        outcome = tracked.outcome
        if outcome is MoveOutcome.DOOR:
            game_map.enter_door()
            self._show_map()
            self.save_game()
        elif outcome is MoveOutcome.ITEM:
            self._offer_item(location, *tracked.target)
            self._show_map()
        elif outcome in (MoveOutcome.MONSTER, MoveOutcome.GOLD):
            self._show_map()
        return False

    def handle_input(self, key: str | Key) -> bool:
        """React to one key during play; return whether the map should be redrawn."""
        game_map = self._require_map()
        direction = _MOVES.get(key)
        if direction is not None:
            return self._move_player(direction)
        if key in ("e", "E"):
            self.inventory.browse(
                self.read_key, self._player(), game_map.current_location, self.output
            )
            self._show_map()
            return False
        if key == Key.ESCAPE:
            self.save_game()
            self._in_game = False
        return False

    def game_loop(self) -> None:
        """Play until the player presses Escape, which saves the game."""
        self._require_map()
        get_logger().info("Game started.")
        self._in_game = True
        try:
            self._show_map()
            while self._in_game:
                if self.handle_input(self.read_key()):
                    self._show_map()
        finally:
            self._in_game = False

    def run_menu(self, title: str, content: Sequence[str]) -> int | None:
        """Show a window of choices; return the chosen index, or None on Escape."""
        options = list(content)
        current = 0
        redraw = True
        while True:
            if redraw:
                columns, lines = console_size()
                self._write(build_window(columns, lines - 4, options, current, title) + "\n")
                redraw = False
            key = self.read_key()
            if key == Key.ESCAPE:
                return None
            if not options:
                continue
            if key in ("w", Key.UP):
                current = (current - 1) % len(options)
                redraw = True
            elif key in ("s", Key.DOWN):
                current = (current + 1) % len(options)
                redraw = True
            elif key == Key.ENTER:
                return current

    def options(self) -> None:
        """The options window: open the log file, or go back."""
        while self.run_menu(OPTIONS_TITLE, OPTIONS_CONTENT) == 0:
            get_logger().show_log()

    def quit(self) -> bool:
        """Ask whether to quit; return True when the answer is yes."""
        if self.run_menu(QUIT_TITLE, QUIT_CONTENT) == 0:
            get_logger().info("Stopping game...")
            return True
        return False

    def death_screen(self) -> None:
        """Show the death banner and wait for Enter."""
        columns, lines = console_size()
        self._write(_death_window(columns, lines - 5) + "\n")
        while self.read_key() != Key.ENTER:
            pass