import io

import pytest

from asciiquest.entity import EntityType, SaveFormatError, SaveReader, SaveWriter, load_entity
from asciiquest.monsters import (
    Dragon,
    Goblin,
    Monster,
    MonsterLevel,
    MonsterType,
    Troll,
    create_monster,
    load_monster,
)


def _saved(monster):
    buffer = io.BytesIO()
    monster.save(SaveWriter(buffer))
    return buffer.getvalue()


@pytest.mark.parametrize(
    "kind, cls, prefix",
    [
        (MonsterType.GOBLIN, Goblin, "Goblin: "),
        (MonsterType.TROLL, Troll, "Troll: "),
        (MonsterType.DRAGON, Dragon, "Dragon: "),
    ],
)
def test_create_monster_picks_class_and_prefix(kind, cls, prefix):
    monster = create_monster(kind, "grim", 4, 5, 6, MonsterLevel.EASY)
    assert type(monster) is cls
    assert monster.name == prefix + "grim"
    assert monster.symbol == "M"


@pytest.mark.parametrize("level", list(MonsterLevel))
def test_stats_scale_with_level(level):
    monster = Troll("t", 4, 5, 6, level)
    assert (monster.attack, monster.defense, monster.hp) == (
        4 * level,
        5 * level,
        6 * level,
    )
    assert monster.level is level


def test_level_strings():
    assert Goblin("g", 1, 1, 1, MonsterLevel.EASY).level_string() == "Easy"
    assert Goblin("g", 1, 1, 1, MonsterLevel.MEDIUM).level_string() == "Medium"
    assert Goblin("g", 1, 1, 1, MonsterLevel.HARD).level_string() == "Hard"


def test_invalid_monster_type_raises():
    with pytest.raises(ValueError):
        create_monster(7, "x", 1, 1, 1, MonsterLevel.EASY)


def test_base_monster_is_abstract():
    with pytest.raises(TypeError):
        Monster("x", 1, 1, 1, MonsterLevel.EASY)


def test_hit_reduces_and_clamps_to_zero():
    monster = Goblin("g", 1, 1, 10, MonsterLevel.EASY)
    monster.hit(4)
    assert monster.hp == 10 - 4
    monster.hit(100)
    assert monster.hp == 0
    assert monster.is_defeated


def test_hit_with_negative_amount_raises():
    monster = Goblin("g", 1, 1, 10, MonsterLevel.EASY)
    with pytest.raises(ValueError):
        monster.hit(-1)
    assert monster.hp == 10


def test_hit_on_defeated_monster_raises():
    monster = Goblin("g", 1, 1, 1, MonsterLevel.EASY)
    monster.hit(1)
    with pytest.raises(ValueError):
        monster.hit(1)


def test_save_starts_with_entity_and_monster_tags():
    data = _saved(Dragon("d", 1, 1, 1, MonsterLevel.EASY))
    assert data[:4] == b"\x02\x00\x00\x00"
    assert data[4:8] == b"\x03\x00\x00\x00"


@pytest.mark.parametrize("cls", [Goblin, Troll, Dragon])
def test_round_trip_through_load_entity(cls):
    original = cls("beast", 3, 4, 5, MonsterLevel.MEDIUM)
    original.hit(2)
    reader = SaveReader(io.BytesIO(_saved(original)))
    loaded = load_entity(reader)
    assert loaded == original
    assert type(loaded) is cls


def test_load_monster_after_tag():
    original = Goblin("g", 2, 3, 4, MonsterLevel.HARD)
    reader = SaveReader(io.BytesIO(_saved(original)))
    assert reader.read_int() == EntityType.MONSTER
    assert load_monster(reader) == original


def test_load_invalid_monster_type_raises():
    buffer = io.BytesIO()
    writer = SaveWriter(buffer)
    writer.write_int(9)
    buffer.seek(0)
    with pytest.raises(SaveFormatError):
        load_monster(SaveReader(buffer))


def test_load_truncated_data_raises():
    data = _saved(Troll("t", 1, 1, 1, MonsterLevel.EASY))
    reader = SaveReader(io.BytesIO(data[4:-2]))
    with pytest.raises(SaveFormatError):
        load_monster(reader)