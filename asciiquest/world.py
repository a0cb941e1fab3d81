"""The whole map: every room generated so far and the one being played."""

from __future__ import annotations

from enum import IntEnum

from .builder import LocationDirector
from .entity import SaveReader, SaveWriter
from .location import Location, Side
from .players import Player
from .tile import Tile

MAX_MAP_NAME_LENGTH = 50


class Difficulty(IntEnum):
    EASY = 0
    MEDIUM = 1
    HARD = 2


def _blank() -> Tile:
    return Tile(" ", True)


def _door_id(x: int, y: int) -> str:
    return f"{x},{y}"


class GameMap:
    """A named list of locations connected by doors."""

    def __init__(self, director: LocationDirector | None = None) -> None:
        self.director = director if director is not None else LocationDirector()
        self.locations: list[Location] = []
        self.current_location: Location | None = None
        self.name = ""

    def set_name(self, name: str) -> None:
        """Name the map; leading whitespace is ignored."""
        name = name.lstrip()
        if not name:
            raise ValueError("Invalid map name. Please enter a non-empty name.")
        if len(name) > MAX_MAP_NAME_LENGTH:
            raise ValueError(
                "Map name is too long. Please enter a name with at most "
                f"{MAX_MAP_NAME_LENGTH} characters."
            )
        self.name = name

    def _current(self) -> Location:
        if self.current_location is None:
            raise RuntimeError("No current location set.")
        return self.current_location

    def _player(self) -> Player:
        player = self._current().player()
        if player is None:
            raise RuntimeError("No player found in the location.")
        return player

    def render(self) -> str:
        return self._current().render()

    def switch_location(self, location_index: int) -> None:
        """Carry the player through a known door into another location."""
        current = self._current()
        player = self._player()
        target = self.locations[location_index]
        arrival = current.opposite_side_position(player.x, player.y, target)
        current.set_tile(player.x, player.y, _blank())
        player.set_position(arrival)
        target.set_tile(player.x, player.y, Tile(player.symbol, False, player))
        self.current_location = target

    def create_new_location(self, first: bool = False) -> Location:
        """Build a new location; unless it is the first, carry the player into it."""
        if first:
            location = self.director.build_location(Side.RANDOM, True)
            self.locations.append(location)
            self.current_location = location
            return location

        current = self._current()
        player = self._player()
        door_side = current.side_from_position(player.x, player.y)
        location = self.director.build_location(door_side)
        self.locations.append(location)
        current.add_destination(_door_id(player.x, player.y), len(self.locations) - 1)

        arrival = current.opposite_side_position(player.x, player.y, location)
        current.set_tile(player.x, player.y, _blank())
        player.set_position(arrival)

        back_index = next(i for i, known in enumerate(self.locations) if known is current)
        location.add_destination(_door_id(player.x, player.y), back_index)
        location.set_tile(player.x, player.y, Tile(player.symbol, False, player))
        self.current_location = location
        return location

    def enter_door(self) -> Location:
        """Walk through the door the player stands in; return the location reached."""
        player = self._player()
        index = self._current().destination_index(_door_id(player.x, player.y))
        if index is None:
            self.create_new_location()
        else:
            self.switch_location(index)
        return self._current()

    def save(self, writer: SaveWriter) -> None:
        writer.write_string(self.name)
        writer.write_size(len(self.locations))
        for location in self.locations:
            location.save(writer, location is self.current_location)

    @classmethod
    def load(cls, reader: SaveReader, director: LocationDirector | None = None) -> GameMap:
        game_map = cls(director)
        game_map.name = reader.read_string()
        for _ in range(reader.read_size()):
            location, is_current = Location.load(reader)
            game_map.locations.append(location)
            if is_current:
                game_map.current_location = location
        return game_map