import io

import pytest

from asciiquest.entity import SaveFormatError, SaveReader, SaveWriter
from asciiquest.gold import Gold
from asciiquest.items import ItemRarity, Weapon, WeaponType
from asciiquest.monsters import Goblin, MonsterLevel
from asciiquest.players import Warrior
from asciiquest.tile import Tile


def _save(tile):
    buffer = io.BytesIO()
    tile.save(SaveWriter(buffer))
    return buffer.getvalue()


def _round_trip(tile):
    return Tile.load(SaveReader(io.BytesIO(_save(tile))))


def test_wall_bytes():
    assert _save(Tile("#", False)) == b"#\x00\x00"


def test_passable_flag_is_written():
    assert _save(Tile(" ", True)) == b" \x01\x00"


def test_entity_follows_flags():
    gold = Gold(75)
    buffer = io.BytesIO()
    gold.save(SaveWriter(buffer))
    assert _save(Tile("G", False, gold)) == b"G\x00\x01" + buffer.getvalue()


def test_default_entity_is_none():
    assert Tile(" ", True).entity is None


@pytest.mark.parametrize(
    "tile",
    [
        Tile(" ", True),
        Tile("#", False),
        Tile("G", False, Gold(120)),
        Tile("I", False, Weapon("Blade", 4, ItemRarity.RARE, 7, WeaponType.AXE)),
        Tile("M", False, Goblin("name5", 3, 2, 9, MonsterLevel.MEDIUM)),
        Tile("P", False, Warrior("Hero", x=2, y=3)),
    ],
)
def test_round_trip(tile):
    assert _round_trip(tile) == tile


def test_loaded_entity_keeps_its_class():
    original = Goblin("name5", 3, 2, 9, MonsterLevel.EASY)
    loaded = _round_trip(Tile("M", False, original))
    assert type(loaded.entity) is Goblin
    assert loaded.entity == original
    assert loaded.symbol == "M"


def test_truncated_data_raises():
    data = _save(Tile("G", False, Gold(10)))
    with pytest.raises(SaveFormatError):
        Tile.load(SaveReader(io.BytesIO(data[:-2])))


def test_multi_byte_symbol_rejected():
    with pytest.raises(ValueError):
        _save(Tile("##", False))