"""Player characters: warriors, mages and archers, and their save format."""

from __future__ import annotations

import sys
from abc import abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, ClassVar, TextIO, TypeVar

from .entity import (
    Entity,
    EntityType,
    SaveFormatError,
    SaveReader,
    SaveWriter,
    load_entity,
    register_loader,
)
from .items import Armor, ItemRarity, ItemType, Weapon, WeaponType, create_item
from .terminal import Key

MAX_HP = 100
STARTING_GOLD = 10

_CHOICE_PROMPT = "Choose action: [1] Warrior  [2] Mage  [3] Archer"
_INVALID_CHOICE = "Invalid input, please re-enter."

_P = TypeVar("_P", bound="Player")


class PlayerType(IntEnum):
    WARRIOR = 0
    MAGE = 1
    ARCHER = 2


_TYPE_NAMES = {
    PlayerType.WARRIOR: "Warrior",
    PlayerType.MAGE: "Mage",
    PlayerType.ARCHER: "Archer",
}


class PlayerDied(Exception):
    """Raised when a hit brings the player's health down to zero."""

    def __init__(self, player: Player) -> None:
        super().__init__("You died! F")
        self.player = player


@dataclass(init=False)
class Player(Entity):
    """The hero walking the map, with equipment, gold and a position."""

    name: str
    hp: int
    attack: int
    defense: int
    gold: int
    x: int
    y: int
    armor: Armor | None
    weapon: Weapon | None
    symbol: ClassVar[str] = "P"

    def __init__(
        self,
        name: str,
        hp: int = MAX_HP,
        attack: int = 0,
        defense: int = 0,
        gold: int = STARTING_GOLD,
        x: int = 0,
        y: int = 0,
        armor: Armor | None = None,
        weapon: Weapon | None = None,
    ) -> None:
        self.name = name
        self.hp = hp
        self.attack = attack
        self.defense = defense
        self.gold = gold
        self.x = x
        self.y = y
        self.armor = armor
        self.weapon = weapon

    @property
    @abstractmethod
    def player_type(self) -> PlayerType:
        """The tag written to save files for this kind of player."""

    @classmethod
    @abstractmethod
    def _starter_kit(cls) -> tuple[Armor, Weapon]:
        """The armour and weapon a fresh character of this class carries."""

    @classmethod
    def starter(cls: type[_P]) -> _P:
        """Create a fresh character with its class's starting equipment."""
        player = cls(_TYPE_NAMES[cls.player_type])
        armor, weapon = cls._starter_kit()
        player.equip_armor(armor)
        player.equip_weapon(weapon)
        return player

    def type_string(self) -> str:
        return _TYPE_NAMES[self.player_type]

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    def set_position(self, position: tuple[int, int]) -> None:
        self.x, self.y = position

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def _check_amount(self, hp: int, action: str) -> None:
        if hp < 0 or self.hp > MAX_HP or self.hp <= 0:
            raise ValueError(f"Negative amount or invalid HP for {action}.")

    def hit(self, hp: int) -> None:
        """Take ``hp`` damage; raise ``PlayerDied`` when health reaches zero."""
        self._check_amount(hp, "hitPlayer")
        self.hp -= hp
        if self.hp <= 0:
            self.hp = 0
            raise PlayerDied(self)

    def heal(self, hp: int) -> None:
        """Restore ``hp`` health, never above the maximum."""
        self._check_amount(hp, "healPlayer")
        self.hp = min(self.hp + hp, MAX_HP)

    def add_gold(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Negative amount for addGold.")
        self.gold += amount

    def remove_gold(self, amount: int) -> None:
        if amount < 0 or self.gold < amount:
            raise ValueError("Insufficient gold or negative amount for removeGold")
        self.gold -= amount

    def move(self, direction: str, location) -> bool:
        """Step one tile in ``direction`` (w, a, s, d) within ``location``.

        ``location.move`` decides what the step does and returns a true value
        when the player actually moved; only then the position changes.
        """
        rows = len(location.tiles)
        cols = len(location.tiles[0])
        target_x, target_y = self.x, self.y
        if direction == "w":
            if target_x > 0:
                target_x -= 1
        elif direction == "s":
            if target_x < rows - 1:
                target_x += 1
        elif direction == "a":
            if target_y > 0:
                target_y -= 1
        elif direction == "d":
            if target_y < cols - 1:
                target_y += 1
        else:
            return False
        if not (0 <= target_x < rows and 0 <= target_y < cols):
            return False
        if location.move(self.x, self.y, target_x, target_y, self):
            self.x, self.y = target_x, target_y
            return True
        return False

    def equip_armor(self, armor: Armor) -> None:
        if armor is None:
            raise ValueError("Null armor for setPlayerArmor.")
        self.armor = armor
        self.defense = armor.defense

    def remove_armor(self) -> None:
        self.armor = None
        self.defense = 0

    def equip_weapon(self, weapon: Weapon) -> None:
        if weapon is None:
            raise ValueError("Null weapon for setPlayerWeapon.")
        self.weapon = weapon
        self.attack = weapon.attack

    def remove_weapon(self) -> None:
        self.weapon = None
        self.attack = 0

    def save(self, writer: SaveWriter) -> None:
        writer.write_int(EntityType.PLAYER)
        writer.write_int(self.player_type)
        writer.write_string(self.name)
        for value in (self.hp, self.attack, self.defense, self.gold, self.x, self.y):
            writer.write_int(value)
        for gear in (self.armor, self.weapon):
            writer.write_bool(gear is not None)
            if gear is not None:
                gear.save(writer)


@dataclass(init=False)
class Warrior(Player):
    player_type: ClassVar[PlayerType] = PlayerType.WARRIOR

    @classmethod
    def _starter_kit(cls) -> tuple[Armor, Weapon]:
        return (
            create_item(ItemType.ARMOR, "Default", 15, ItemRarity.UNCOMMON, 20),
            create_item(ItemType.WEAPON, "Default", 15, ItemRarity.UNCOMMON, 20, WeaponType.SWORD),
        )


@dataclass(init=False)
class Mage(Player):
    player_type: ClassVar[PlayerType] = PlayerType.MAGE

    @classmethod
    def _starter_kit(cls) -> tuple[Armor, Weapon]:
        return (
            create_item(ItemType.ARMOR, "Default", 5, ItemRarity.COMMON, 10),
            create_item(ItemType.WEAPON, "Default", 10, ItemRarity.UNCOMMON, 15, WeaponType.STAFF),
        )


@dataclass(init=False)
class Archer(Player):
    player_type: ClassVar[PlayerType] = PlayerType.ARCHER

    @classmethod
    def _starter_kit(cls) -> tuple[Armor, Weapon]:
        return (
            create_item(ItemType.ARMOR, "Default", 10, ItemRarity.COMMON, 15),
            create_item(ItemType.WEAPON, "Default", 15, ItemRarity.UNCOMMON, 15, WeaponType.BOW),
        )


_CLASSES: dict[PlayerType, type[Player]] = {
    PlayerType.WARRIOR: Warrior,
    PlayerType.MAGE: Mage,
    PlayerType.ARCHER: Archer,
}

_CHOICES = {"1": Warrior, "2": Mage, "3": Archer}


def choose_player(
    read_key: Callable[[], str | Key], output: TextIO | None = None
) -> Player:
    """Ask which class to play and return a fresh character of it."""
    out = output if output is not None else sys.stdout
    out.write(_CHOICE_PROMPT + "\n")
    while True:
        key = read_key()
        if key in _CHOICES:
            return _CHOICES[key].starter()
        out.write(_INVALID_CHOICE + "\n")


def _read_gear(reader: SaveReader, kind: type) -> Armor | Weapon | None:
    if not reader.read_bool():
        return None
    entity = load_entity(reader)
    if not isinstance(entity, kind):
        raise SaveFormatError(f"Expected {kind.__name__} in player data.")
    return entity


def load_player(reader: SaveReader) -> Player:
    """Read a player written by ``Player.save``, after its entity type tag."""
    tag = reader.read_int()
    try:
        kind = PlayerType(tag)
    except ValueError:
        raise SaveFormatError(f"Unknown player type: {tag}") from None
    name = reader.read_string()
    hp, attack, defense, gold, x, y = (reader.read_int() for _ in range(6))
    armor = _read_gear(reader, Armor)
    weapon = _read_gear(reader, Weapon)
    return _CLASSES[kind](name, hp, attack, defense, gold, x, y, armor, weapon)


register_loader(EntityType.PLAYER, load_player)