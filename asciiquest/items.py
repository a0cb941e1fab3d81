"""Items: weapons, potions and armour, and their save format."""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, TypeVar

from .entity import Entity, EntityType, SaveFormatError, SaveReader, SaveWriter, register_loader


class ItemRarity(IntEnum):
    COMMON = 1
    UNCOMMON = 2
    RARE = 3
    LEGENDARY = 4


class ItemType(IntEnum):
    WEAPON = 1
    POTION = 2
    ARMOR = 3


class WeaponType(IntEnum):
    SWORD = 0
    AXE = 1
    BOW = 2
    STAFF = 3


class PotionType(IntEnum):
    HEALTH = 0
    STRENGTH = 1
    DEFENSE = 2


_RARITY_NAMES = {
    ItemRarity.COMMON: "Common",
    ItemRarity.UNCOMMON: "Uncommon",
    ItemRarity.RARE: "Rare",
    ItemRarity.LEGENDARY: "Legendary",
}

_WEAPON_PREFIXES = {
    WeaponType.SWORD: "Sword: ",
    WeaponType.AXE: "Axe: ",
    WeaponType.BOW: "Bow: ",
    WeaponType.STAFF: "Staff: ",
}

_POTION_PREFIXES = {
    PotionType.HEALTH: "Health potion: ",
    PotionType.STRENGTH: "Strength potion: ",
    PotionType.DEFENSE: "Defense potion: ",
}

_E = TypeVar("_E", bound=IntEnum)
_I = TypeVar("_I", bound="Item")


def _read_enum(enum_type: type[_E], reader: SaveReader) -> _E:
    value = reader.read_int()
    try:
        return enum_type(value)
    except ValueError:
        raise SaveFormatError(f"Invalid {enum_type.__name__}: {value}") from None


@dataclass(init=False)
class Item(Entity):
    """Common part of every item; price is scaled by rarity."""

    name: str
    price: int
    rarity: ItemRarity
    symbol: ClassVar[str] = "I"
    item_type: ClassVar[ItemType]

    def __init__(self, name: str, price: int, rarity: ItemRarity) -> None:
        self.rarity = ItemRarity(rarity)
        self.name = name
        self.price = price * int(self.rarity)

    @classmethod
    def _restore(cls: type[_I], **fields) -> _I:
        item = cls.__new__(cls)
        for key, value in fields.items():
            setattr(item, key, value)
        return item

    def rarity_string(self) -> str:
        return _RARITY_NAMES[self.rarity]

    @abstractmethod
    def _detail(self) -> str:
        """The type-specific tail of ``describe``."""

    def describe(self) -> str:
        return (
            f"{self.name}, Item price: {self.price}, "
            f"Item rarity: {self.rarity_string()}{self._detail()}"
        )

    def save(self, writer: SaveWriter) -> None:
        writer.write_int(EntityType.ITEM)
        writer.write_int(self.item_type)
        writer.write_string(self.name)
        writer.write_int(self.price)
        writer.write_int(self.rarity)


@dataclass(init=False)
class Weapon(Item):
    weapon_type: WeaponType
    attack: int
    item_type: ClassVar[ItemType] = ItemType.WEAPON

    def __init__(
        self, name: str, price: int, rarity: ItemRarity, attack: int, weapon_type: WeaponType
    ) -> None:
        super().__init__(name, price, rarity)
        self.weapon_type = WeaponType(weapon_type)
        self.name = _WEAPON_PREFIXES[self.weapon_type] + self.name
        self.attack = attack * int(self.rarity)

    def _detail(self) -> str:
        return f", Weapon attack: {self.attack}"

    def save(self, writer: SaveWriter) -> None:
        super().save(writer)
        writer.write_int(self.weapon_type)
        writer.write_int(self.attack)


@dataclass(init=False)
class Potion(Item):
    potion_type: PotionType
    power: int
    item_type: ClassVar[ItemType] = ItemType.POTION

    def __init__(
        self, name: str, price: int, rarity: ItemRarity, power: int, potion_type: PotionType
    ) -> None:
        super().__init__(name, price, rarity)
        self.potion_type = PotionType(potion_type)
        self.name = _POTION_PREFIXES[self.potion_type] + self.name
        self.power = power * int(self.rarity)

    def _detail(self) -> str:
        return f", Potion strength: {self.power}"

    def save(self, writer: SaveWriter) -> None:
        super().save(writer)
        writer.write_int(self.potion_type)
        writer.write_int(self.power)


@dataclass(init=False)
class Armor(Item):
    defense: int
    item_type: ClassVar[ItemType] = ItemType.ARMOR

    def __init__(self, name: str, price: int, rarity: ItemRarity, defense: int) -> None:
        super().__init__(name, price, rarity)
        self.name = "Armor: " + name
        self.defense = defense * int(self.rarity)

    def _detail(self) -> str:
        return f", Armor defense: {self.defense}"

    def save(self, writer: SaveWriter) -> None:
        super().save(writer)
        writer.write_int(self.defense)


def create_item(
    item_type: ItemType,
    name: str,
    price: int,
    rarity: ItemRarity,
    extra: int = 0,
    weapon_type: WeaponType = WeaponType.SWORD,
    potion_type: PotionType = PotionType.HEALTH,
) -> Item:
    """Build an item of the given type; ``extra`` is its attack, power or defense."""
    try:
        kind = ItemType(item_type)
    except ValueError:
        raise ValueError(f"Invalid item type: {item_type!r}") from None
    if kind is ItemType.WEAPON:
        return Weapon(name, price, rarity, extra, weapon_type)
    if kind is ItemType.POTION:
        return Potion(name, price, rarity, extra, potion_type)
    return Armor(name, price, rarity, extra)


def load_item(reader: SaveReader) -> Item:
    """Read an item written by ``Item.save``, after its entity type tag."""
    kind = _read_enum(ItemType, reader)
    name = reader.read_string()
    price = reader.read_int()
    rarity = _read_enum(ItemRarity, reader)
    common = {"name": name, "price": price, "rarity": rarity}
    if kind is ItemType.WEAPON:
        weapon_type = _read_enum(WeaponType, reader)
        return Weapon._restore(**common, weapon_type=weapon_type, attack=reader.read_int())
    if kind is ItemType.POTION:
        potion_type = _read_enum(PotionType, reader)
        return Potion._restore(**common, potion_type=potion_type, power=reader.read_int())
    return Armor._restore(**common, defense=reader.read_int())


register_loader(EntityType.ITEM, load_item)