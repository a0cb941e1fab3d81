import io
import struct

import pytest

from asciiquest.entity import EntityType, SaveFormatError, SaveReader, SaveWriter, load_entity
from asciiquest.items import (
    Armor,
    Item,
    ItemRarity,
    ItemType,
    Potion,
    PotionType,
    Weapon,
    WeaponType,
    create_item,
    load_item,
)


def _save(entity):
    buffer = io.BytesIO()
    entity.save(SaveWriter(buffer))
    return buffer.getvalue()


def _load(data):
    return load_entity(SaveReader(io.BytesIO(data)))


@pytest.mark.parametrize(
    "rarity, label",
    [
        (ItemRarity.COMMON, "Common"),
        (ItemRarity.UNCOMMON, "Uncommon"),
        (ItemRarity.RARE, "Rare"),
        (ItemRarity.LEGENDARY, "Legendary"),
    ],
)
def test_rarity_string(rarity, label):
    assert Armor("Plate", 1, rarity, 1).rarity_string() == label


@pytest.mark.parametrize(
    "weapon_type, prefix",
    [
        (WeaponType.SWORD, "Sword: "),
        (WeaponType.AXE, "Axe: "),
        (WeaponType.BOW, "Bow: "),
        (WeaponType.STAFF, "Staff: "),
    ],
)
def test_weapon_name_prefix(weapon_type, prefix):
    assert Weapon("Default", 15, ItemRarity.UNCOMMON, 20, weapon_type).name == prefix + "Default"


@pytest.mark.parametrize(
    "potion_type, prefix",
    [
        (PotionType.HEALTH, "Health potion: "),
        (PotionType.STRENGTH, "Strength potion: "),
        (PotionType.DEFENSE, "Defense potion: "),
    ],
)
def test_potion_name_prefix(potion_type, prefix):
    assert Potion("name7", 3, ItemRarity.COMMON, 4, potion_type).name == prefix + "name7"


def test_armor_name_prefix_and_symbol():
    armor = Armor("Default", 10, ItemRarity.COMMON, 15)
    assert armor.name == "Armor: Default"
    assert armor.symbol == "I"


def test_common_rarity_keeps_base_values():
    weapon = Weapon("x", 7, ItemRarity.COMMON, 9, WeaponType.BOW)
    assert (weapon.price, weapon.attack) == (7, 9)


@pytest.mark.parametrize("rarity", list(ItemRarity))
def test_values_scale_with_rarity(rarity):
    common = Potion("p", 6, ItemRarity.COMMON, 5, PotionType.HEALTH)
    scaled = Potion("p", 6, rarity, 5, PotionType.HEALTH)
    assert scaled.price == common.price * int(rarity)
    assert scaled.power == common.power * int(rarity)


def test_describe_weapon():
    weapon = Weapon("w", 5, ItemRarity.COMMON, 8, WeaponType.AXE)
    assert weapon.describe() == "Axe: w, Item price: 5, Item rarity: Common, Weapon attack: 8"


def test_describe_mentions_type_detail():
    assert Potion("p", 1, ItemRarity.COMMON, 2, PotionType.HEALTH).describe().endswith(
        ", Potion strength: 2"
    )
    assert Armor("a", 1, ItemRarity.COMMON, 3).describe().endswith(", Armor defense: 3")


def test_item_is_abstract():
    with pytest.raises(TypeError):
        Item("x", 1, ItemRarity.COMMON)


def test_create_item_dispatches_on_type():
    weapon = create_item(ItemType.WEAPON, "w", 1, ItemRarity.COMMON, 2, WeaponType.STAFF)
    potion = create_item(ItemType.POTION, "p", 1, ItemRarity.COMMON, 2)
    armor = create_item(ItemType.ARMOR, "a", 1, ItemRarity.COMMON, 2)
    assert type(weapon) is Weapon
    assert (weapon.name, weapon.attack) == ("Staff: w", 2)
    assert type(potion) is Potion
    assert (potion.name, potion.power) == ("Health potion: p", 2)
    assert type(armor) is Armor
    assert (armor.name, armor.defense) == ("Armor: a", 2)


def test_create_item_defaults_to_sword_and_health():
    weapon = create_item(ItemType.WEAPON, "w", 1, ItemRarity.COMMON)
    potion = create_item(ItemType.POTION, "p", 1, ItemRarity.COMMON)
    assert weapon.weapon_type is WeaponType.SWORD
    assert potion.potion_type is PotionType.HEALTH
    assert weapon.attack == 0


def test_create_item_matches_constructor():
    made = create_item(ItemType.ARMOR, "Default", 15, ItemRarity.UNCOMMON, 20)
    assert made == Armor("Default", 15, ItemRarity.UNCOMMON, 20)


def test_create_item_invalid_type():
    with pytest.raises(ValueError, match="Invalid item type"):
        create_item(9, "x", 1, ItemRarity.COMMON)


def test_weapon_wire_format():
    weapon = Weapon("w", 2, ItemRarity.COMMON, 3, WeaponType.BOW)
    expected = (
        struct.pack("<ii", EntityType.ITEM, ItemType.WEAPON)
        + struct.pack("<Q", len("Bow: w"))
        + b"Bow: w"
        + struct.pack("<iiii", 2, ItemRarity.COMMON, WeaponType.BOW, 3)
    )
    assert _save(weapon) == expected


@pytest.mark.parametrize(
    "item",
    [
        Weapon("name1", 4, ItemRarity.RARE, 6, WeaponType.STAFF),
        Potion("name2", 3, ItemRarity.LEGENDARY, 5, PotionType.DEFENSE),
        Armor("name3", 10, ItemRarity.UNCOMMON, 15),
    ],
)
def test_round_trip_preserves_item(item):
    loaded = _load(_save(item))
    assert loaded == item
    assert _save(loaded) == _save(item)


def test_load_item_after_tag():
    data = _save(Armor("a", 1, ItemRarity.COMMON, 2))[4:]
    assert load_item(SaveReader(io.BytesIO(data))) == Armor("a", 1, ItemRarity.COMMON, 2)


def test_load_invalid_item_type():
    data = struct.pack("<ii", EntityType.ITEM, 7)
    with pytest.raises(SaveFormatError):
        _load(data)


def test_load_invalid_rarity():
    data = _save(Armor("a", 1, ItemRarity.COMMON, 2))
    header = 8 + 8 + len("Armor: a") + 4
    corrupted = data[:header] + struct.pack("<i", 0) + data[header + 4 :]
    with pytest.raises(SaveFormatError):
        _load(corrupted)


def test_load_truncated_item():
    with pytest.raises(SaveFormatError):
        _load(_save(Weapon("w", 1, ItemRarity.COMMON, 1, WeaponType.AXE))[:-2])