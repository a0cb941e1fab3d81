"""Random generation of new rooms, step by step."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Callable

from .entity import Entity
from .gold import Gold
from .items import ItemRarity, ItemType, create_item
from .location import Location, Side
from .monsters import MonsterLevel, MonsterType, create_monster
from .players import Player, choose_player
from .terminal import read_key
from .tile import Tile

LOCATION_NAME = "Default Location"
MIN_SIZE = 7
MAX_SIZE = 12

DEFAULT_MONSTER_PERCENTAGE = 8
DEFAULT_ITEM_PERCENTAGE = 5
DEFAULT_GOLD_PERCENTAGE = 2


def _ask_for_player() -> Player:
    return choose_player(read_key)


class LocationBuilder(ABC):
    """The steps that make up a new location."""

    @abstractmethod
    def empty_layout(self) -> None:
        """Start a fresh, walled, empty room."""

    @abstractmethod
    def set_doors(self, door_side: Side = Side.RANDOM) -> None:
        """Open a door on the given side, and maybe a second one."""

    @abstractmethod
    def set_monsters(self, monster_percentage: int = DEFAULT_MONSTER_PERCENTAGE) -> None:
        """Fill this share of the inner tiles with monsters."""

    @abstractmethod
    def set_items(self, item_percentage: int = DEFAULT_ITEM_PERCENTAGE) -> None:
        """Fill this share of the inner tiles with items."""

    @abstractmethod
    def set_gold(self, gold_percentage: int = DEFAULT_GOLD_PERCENTAGE) -> None:
        """Fill this share of the inner tiles with gold piles."""

    @abstractmethod
    def set_player(self) -> None:
        """Put a new player somewhere inside the room."""

    @abstractmethod
    def get_location(self) -> Location:
        """Return the room built so far."""


class DefaultLocationBuilder(LocationBuilder):
    """Builds rooms of random size with randomly scattered contents."""

    def __init__(
        self,
        rng: random.Random | None = None,
        player_factory: Callable[[], Player] | None = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.player_factory = player_factory if player_factory is not None else _ask_for_player
        self._location: Location | None = None

    def _require_location(self) -> Location:
        if self._location is None:
            raise RuntimeError("No layout yet: call empty_layout first.")
        return self._location

    def _below(self, bound: int) -> int:
        return self.rng.randrange(bound)

    def empty_layout(self) -> None:
        height = self.rng.randint(MIN_SIZE, MAX_SIZE)
        width = self._below(height - 4) + height
        tiles = [
            [
                Tile("#", False)
                if x in (0, width - 1) or y in (0, height - 1)
                else Tile(" ", True)
                for x in range(width)
            ]
            for y in range(height)
        ]
        self._location = Location(LOCATION_NAME, tiles, width=width, height=height)

    def set_doors(self, door_side: Side = Side.RANDOM) -> None:
        tiles = self._require_location().tiles
        rows = len(tiles)
        cols = len(tiles[0])

        def left() -> tuple[int, int]:
            return self._below(rows - 2) + 1, 0

        def right() -> tuple[int, int]:
            return self._below(rows - 2) + 1, cols - 1

        def top() -> tuple[int, int]:
            return 0, self._below(cols - 2) + 1

        def bottom() -> tuple[int, int]:
            return rows - 1, self._below(cols - 2) + 1

        in_random_order = (left, right, top, bottom)
        by_side = {Side.LEFT: left, Side.RIGHT: right, Side.TOP: top, Side.BOTTOM: bottom}

        side = Side(door_side)
        place = in_random_order[self._below(4)] if side is Side.RANDOM else by_side[side]
        x, y = place()
        tiles[x][y] = Tile(" ", True)

        x, y = in_random_order[self._below(4)]()
        if tiles[x][y].symbol != " ":
            tiles[x][y] = Tile(" ", True)

    def _free_positions(self) -> list[tuple[int, int]]:
        tiles = self._require_location().tiles
        rows = len(tiles)
        cols = len(tiles[0])
        positions = [
            (x, y)
            for y in range(1, cols - 1)
            for x in range(1, rows - 1)
            if tiles[x][y].passable
        ]
        self.rng.shuffle(positions)
        return positions

    def _count(self, percentage: int) -> int:
        tiles = self._require_location().tiles
        return (len(tiles[0]) - 2) * (len(tiles) - 2) * percentage // 100

    def _scatter(self, percentage: int, make: Callable[[], Entity]) -> None:
        location = self._require_location()
        count = self._count(percentage)
        positions = self._free_positions()
        for _ in range(count):
            if not positions:
                break
            entity = make()
            x, y = positions.pop()
            location.set_tile(x, y, Tile(entity.symbol, False, entity))

    def _random_monster(self):
        monster_type = MonsterType(self._below(3) + 1)
        name = f"name{self._below(100) + 1}"
        attack = self._below(10) + 1
        defense = self._below(10) + 1
        hp = self._below(11) + 5
        roll = self._below(100) + 1
        if roll <= 50:
            level = MonsterLevel.EASY
        elif roll <= 80:
            level = MonsterLevel.MEDIUM
        else:
            level = MonsterLevel.HARD
        return create_monster(monster_type, name, attack, defense, hp, level)

    def _random_item(self):
        item_type = ItemType(self._below(3) + 1)
        name = f"name{self._below(100) + 1}"
        power = self._below(10) + 1
        roll = self._below(100) + 1
        if roll <= 50:
            rarity = ItemRarity.COMMON
        elif roll <= 80:
            rarity = ItemRarity.UNCOMMON
        elif roll <= 95:
            rarity = ItemRarity.RARE
        else:
            rarity = ItemRarity.LEGENDARY
        weight = self._below(5) + 1
        return create_item(item_type, name, power, rarity, weight)

    def set_monsters(self, monster_percentage: int = DEFAULT_MONSTER_PERCENTAGE) -> None:
        self._scatter(monster_percentage, self._random_monster)

    def set_items(self, item_percentage: int = DEFAULT_ITEM_PERCENTAGE) -> None:
        self._scatter(item_percentage, self._random_item)

    def set_gold(self, gold_percentage: int = DEFAULT_GOLD_PERCENTAGE) -> None:
        self._scatter(gold_percentage, lambda: Gold(self._below(101) + 50))

    def set_player(self) -> None:
        location = self._require_location()
        rows = len(location.tiles)
        cols = len(location.tiles[0])
        x = self._below(rows - 2) + 1
        y = self._below(cols - 2) + 1
        player = self.player_factory()
        player.set_position((x, y))
        location.set_tile(x, y, Tile(player.symbol, False, player))

    def get_location(self) -> Location:
        return self._require_location()


class LocationDirector:
    """Runs a builder's steps in the order that makes a playable room."""

    def __init__(self, builder: LocationBuilder | None = None) -> None:
        self.builder = builder if builder is not None else DefaultLocationBuilder()

    def build_location(self, door_side: Side = Side.RANDOM, first_location: bool = False) -> Location:
        builder = self.builder
        builder.empty_layout()
        builder.set_doors(door_side)
        builder.set_gold(DEFAULT_GOLD_PERCENTAGE)
        builder.set_items(DEFAULT_ITEM_PERCENTAGE)
        builder.set_monsters(DEFAULT_MONSTER_PERCENTAGE)
        if first_location:
            builder.set_player()
        return builder.get_location()