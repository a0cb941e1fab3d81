"""Monsters: goblins, trolls and dragons, and their save format."""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, TypeVar

from .entity import Entity, EntityType, SaveFormatError, SaveReader, SaveWriter, register_loader


class MonsterLevel(IntEnum):
    EASY = 1
    MEDIUM = 2
    HARD = 3


class MonsterType(IntEnum):
    GOBLIN = 1
    TROLL = 2
    DRAGON = 3


_LEVEL_NAMES = {
    MonsterLevel.EASY: "Easy",
    MonsterLevel.MEDIUM: "Medium",
    MonsterLevel.HARD: "Hard",
}

_E = TypeVar("_E", bound=IntEnum)
_M = TypeVar("_M", bound="Monster")


def _read_enum(enum_type: type[_E], reader: SaveReader) -> _E:
    value = reader.read_int()
    try:
        return enum_type(value)
    except ValueError:
        raise SaveFormatError(f"Invalid {enum_type.__name__}: {value}") from None


@dataclass(init=False)
class Monster(Entity):
    """A hostile creature; its stats are scaled by its level."""

    name: str
    attack: int
    defense: int
    hp: int
    level: MonsterLevel
    symbol: ClassVar[str] = "M"
    _prefix: ClassVar[str] = ""

    def __init__(self, name: str, attack: int, defense: int, hp: int, level: MonsterLevel) -> None:
        self.level = MonsterLevel(level)
        factor = int(self.level)
        self.name = self._prefix + name
        self.attack = attack * factor
        self.defense = defense * factor
        self.hp = hp * factor

    @property
    @abstractmethod
    def monster_type(self) -> MonsterType:
        """The tag written to save files for this kind of monster."""

    @classmethod
    def _restore(cls: type[_M], **fields) -> _M:
        monster = cls.__new__(cls)
        for key, value in fields.items():
            setattr(monster, key, value)
        return monster

    def level_string(self) -> str:
        return _LEVEL_NAMES[self.level]

    @property
    def is_defeated(self) -> bool:
        return self.hp <= 0

    def hit(self, hp: int) -> None:
        """Take ``hp`` damage; health never drops below zero."""
        if hp < 0 or self.hp <= 0:
            raise ValueError("Negative amount or invalid HP for hitMonster.")
        self.hp = max(self.hp - hp, 0)

    def save(self, writer: SaveWriter) -> None:
        writer.write_int(EntityType.MONSTER)
        writer.write_int(self.monster_type)
        writer.write_string(self.name)
        writer.write_int(self.attack)
        writer.write_int(self.defense)
        writer.write_int(self.hp)
        writer.write_int(self.level)


@dataclass(init=False)
class Goblin(Monster):
    monster_type: ClassVar[MonsterType] = MonsterType.GOBLIN
    _prefix: ClassVar[str] = "Goblin: "


@dataclass(init=False)
class Troll(Monster):
    monster_type: ClassVar[MonsterType] = MonsterType.TROLL
    _prefix: ClassVar[str] = "Troll: "


@dataclass(init=False)
class Dragon(Monster):
    monster_type: ClassVar[MonsterType] = MonsterType.DRAGON
    _prefix: ClassVar[str] = "Dragon: "


_CLASSES: dict[MonsterType, type[Monster]] = {
    MonsterType.GOBLIN: Goblin,
    MonsterType.TROLL: Troll,
    MonsterType.DRAGON: Dragon,
}


def create_monster(
    monster_type: MonsterType, name: str, attack: int, defense: int, hp: int, level: MonsterLevel
) -> Monster:
    """Build a monster of the given type."""
    try:
        kind = MonsterType(monster_type)
    except ValueError:
        raise ValueError(f"Invalid monster type: {monster_type!r}") from None
    return _CLASSES[kind](name, attack, defense, hp, level)


def load_monster(reader: SaveReader) -> Monster:
    """Read a monster written by ``Monster.save``, after its entity type tag."""
    kind = _read_enum(MonsterType, reader)
    name = reader.read_string()
    attack = reader.read_int()
    defense = reader.read_int()
    hp = reader.read_int()
    level = _read_enum(MonsterLevel, reader)
    return _CLASSES[kind]._restore(name=name, attack=attack, defense=defense, hp=hp, level=level)


register_loader(EntityType.MONSTER, load_monster)