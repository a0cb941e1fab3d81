"""One room of the map: a grid of tiles with doors leading to other rooms."""

from __future__ import annotations

from enum import Enum, IntEnum

from .entity import Entity, SaveFormatError, SaveReader, SaveWriter
from .gold import Gold
from .items import Item
from .monsters import Monster
from .players import Player
from .tile import Tile

WALL = "#"


class Side(IntEnum):
    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3
    RANDOM = 4


class MoveOutcome(Enum):
    """What happened when an entity tried to step onto a tile.

    Only ``MOVED`` is true, so the outcome can be used as a success flag.
    """

    MOVED = "moved"
    BLOCKED = "blocked"
    DOOR = "door"
    MONSTER = "monster"
    GOLD = "gold"
    ITEM = "item"

    def __bool__(self) -> bool:
        return self is MoveOutcome.MOVED


def _blank() -> Tile:
    return Tile(" ", True)


class Location:
    """A grid of tiles indexed ``tiles[x][y]``: ``x`` is the row, ``y`` the column."""

    def __init__(
        self,
        name: str,
        tiles: list[list[Tile]] | None = None,
        destinations: dict[str, int] | None = None,
        width: int | None = None,
        height: int | None = None,
        previous_tile: Tile | None = None,
    ) -> None:
        self.name = name
        self.tiles: list[list[Tile]] = tiles if tiles is not None else []
        self.destinations: dict[str, int] = dict(destinations or {})
        if width is None:
            width = len(self.tiles[0]) if self.tiles else 0
        if height is None:
            height = len(self.tiles)
        self.width = width
        self.height = height
        # The tile the player is standing on, restored when they step away.
        self.previous_tile = previous_tile if previous_tile is not None else _blank()

    def __repr__(self) -> str:
        return f"Location({self.name!r}, {self.height}x{self.width})"

    def player(self) -> Player | None:
        """Return the player standing in this location, if there is one."""
        for column in zip(*self.tiles):
            for tile in column:
                if isinstance(tile.entity, Player):
                    return tile.entity
        return None

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.height and 0 <= y < self.width

    def set_tile(self, x: int, y: int, tile: Tile) -> bool:
        """Place ``tile`` at ``(x, y)``; positions outside the grid are ignored."""
        if not self._in_bounds(x, y):
            return False
        self.tiles[x][y] = tile
        return True

    def move(self, current_x: int, current_y: int, new_x: int, new_y: int, entity: Entity) -> MoveOutcome:
        """Try to move ``entity`` from the current position to the new one.

        Stepping onto a passable tile moves it. A step that stays in place is
        an attempt to walk through a door (``DOOR``). Walking into gold picks it
        up; walking into a monster or an item leaves the entity where it is and
        reports what is there.
        """
        if not (self._in_bounds(current_x, current_y) and self._in_bounds(new_x, new_y)):
            raise IndexError("Invalid move, out of bounds.")
        if (current_x, current_y) == (new_x, new_y):
            return MoveOutcome.DOOR
        target = self.tiles[new_x][new_y]
        if target.passable:
            self.tiles[current_x][current_y] = self.previous_tile
            self.previous_tile = target
            self.tiles[new_x][new_y] = Tile(entity.symbol, False, entity)
            return MoveOutcome.MOVED
        found = target.entity
        if isinstance(found, Monster):
            return MoveOutcome.MONSTER
        if isinstance(found, Gold):
            if isinstance(entity, Player):
                entity.add_gold(found.amount)
            self.tiles[new_x][new_y] = _blank()
            return MoveOutcome.GOLD
        if isinstance(found, Item):
            return MoveOutcome.ITEM
        return MoveOutcome.BLOCKED

    def pick_up(self, x: int, y: int, inventory) -> bool:
        """Move the item at ``(x, y)`` into ``inventory``; return whether it fit."""
        item = self.tiles[x][y].entity
        if not isinstance(item, Item):
            raise ValueError(f"No item at ({x}, {y}).")
        if not inventory.add_item(item):
            return False
        self.tiles[x][y] = _blank()
        return True

    def drop_item(self, item: Item) -> bool:
        """Leave ``item`` under the player; not possible on the border or on a full tile."""
        player = self.player()
        if player is None:
            return False
        rows = len(self.tiles)
        cols = len(self.tiles[0])
        if player.x in (0, rows - 1) or player.y in (0, cols - 1):
            return False
        return self.set_previous_tile(Tile(item.symbol, False, item))

    def add_destination(self, destination_id: str, location_index: int) -> None:
        self.destinations[destination_id] = location_index

    def destination_index(self, destination_id: str) -> int | None:
        """Return the index of the location a door leads to, or None if unknown."""
        return self.destinations.get(destination_id)

    def _door_column(self, other: Location, row: int, default: int) -> int:
        return next(
            (
                column
                for column, tile in enumerate(other.tiles[row][: other.width])
                if tile.passable and tile.symbol != WALL
            ),
            default,
        )

    def _door_row(self, other: Location, column: int, default: int) -> int:
        return next(
            (
                row
                for row, line in enumerate(other.tiles[: other.height])
                if line[column].passable and line[column].symbol != WALL
            ),
            default,
        )

    def opposite_side_position(self, x: int, y: int, other: Location) -> tuple[int, int]:
        """Where a player leaving from ``(x, y)`` arrives in ``other``."""
        side = self.side_from_position(x, y)
        if side is Side.BOTTOM:
            row = other.height - 1
            return row, self._door_column(other, row, y)
        if side is Side.TOP:
            return 0, self._door_column(other, 0, y)
        if side is Side.RIGHT:
            column = other.width - 1
            return self._door_row(other, column, x), column
        if side is Side.LEFT:
            return self._door_row(other, 0, x), 0
        return x, y

    def side_from_position(self, x: int, y: int) -> Side:
        """The side the new room's door goes on when leaving from ``(x, y)``."""
        if x == 0:
            return Side.BOTTOM
        if x == self.height - 1:
            return Side.TOP
        if y == 0:
            return Side.RIGHT
        if y == self.width - 1:
            return Side.LEFT
        return Side.RANDOM

    def set_previous_tile(self, tile: Tile) -> bool:
        """Replace the tile under the player, unless something already lies there."""
        if self.previous_tile.entity is not None:
            return False
        self.previous_tile = tile
        return True

    def render(self) -> str:
        lines = [f"Current Location: {self.name}"]
        lines.extend("".join(f"{tile.symbol} " for tile in row) for row in self.tiles)
        return "\n".join(lines) + "\n"

    def save(self, writer: SaveWriter, is_current: bool = False) -> None:
        writer.write_size(len(self.tiles))
        for row in self.tiles:
            writer.write_size(len(row))
            for tile in row:
                tile.save(writer)
        writer.write_size(len(self.destinations))
        for destination_id, index in self.destinations.items():
            writer.write_string(destination_id)
            writer.write_size(index)
        writer.write_int(self.width)
        writer.write_int(self.height)
        self.previous_tile.save(writer)
        writer.write_string(self.name)
        writer.write_bool(is_current)

    @classmethod
    def load(cls, reader: SaveReader) -> tuple[Location, bool]:
        """Read a location; return it and whether it was the current one."""
        tiles = [
            [Tile.load(reader) for _ in range(reader.read_size())]
            for _ in range(reader.read_size())
        ]
        destinations = {}
        for _ in range(reader.read_size()):
            destination_id = reader.read_string()
            destinations[destination_id] = reader.read_size()
        width = reader.read_int()
        height = reader.read_int()
        if height > len(tiles) or any(len(row) < width for row in tiles):
            raise SaveFormatError(f"Location size {width}x{height} does not match its tiles.")
        previous_tile = Tile.load(reader)
        name = reader.read_string()
        is_current = reader.read_bool()
        return cls(name, tiles, destinations, width, height, previous_tile), is_current