# asciiquest

A small dungeon crawler that runs in your terminal. Each room is built at
random, with walls, doors, gold piles, items and monsters. You pick a hero
class, walk from room to room and collect loot. Progress is saved to disk.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
asciiquest
```

This sets the terminal title and opens the main menu. Move through the menu
with `w` and `s` or the up and down arrow keys. Press Enter to choose an entry:

- **New game**: asks for a map name (up to 50 characters), then a difficulty
  (`1`, `2` or `3`), then a class: `1` Warrior, `2` Mage or `3` Archer. Each
  class starts with its own armour and weapon. The first room is built and the
  game is saved straight away.
- **Load game**: lists the saves in the `saves` directory. Pick one with
  Enter, or press Esc to go back.
- **Options**: "Open log" opens `logs/latest.log` in the program named by
  `VISUAL` or `EDITOR`. If neither is set, it uses the system's default viewer.
- **Quit**: asks you to confirm, then leaves the game.

### In game

| Key                            | Action                        |
|--------------------------------|-------------------------------|
| `w` `a` `s` `d` or arrow keys  | move one tile                 |
| `e`                            | open the inventory            |
| Esc                            | save and go back to the menu  |

The map shows the player as `P`, monsters as `M`, gold as `G`, items as `I`
and walls as `#`.

- Walk into gold to add it to your purse.
- Walk into an item to see its name, price, rarity and power. You are then
  asked to pick it up (`1`) or leave it (`2`).
- Doors are gaps in the outer wall. Step into a gap, then move once more
  towards the outside to go through it. The first time you use a door, a new
  room is built behind it and linked back to the room you came from. The game
  is saved each time you pass through a door.

### Inventory

The inventory has nine slots. Move between them with the left and right arrow
keys. The selected item is described below the slots. Press Enter on an item,
then choose one:

- `1` Use. A weapon or armour is equipped, and what you wore before goes back
  into the inventory. A potion is used up.
- `2` Drop. The item is left under you. This does not work on the outer wall,
  or where something already lies.
- `3` Leave it.

Press `e` to close the inventory.

## What the game does not do

- There is no combat. Monsters only block your way, and walking into one does
  nothing else.
- Potions are removed when used, but they have no effect on the player.
- The difficulty you choose is asked for, but it does not change how rooms are
  built.
- Gold can be collected, but nothing in the game spends it.

## Files

- `saves/<map name>.bin` holds a saved game in a little-endian binary format.
  It stores the map name, every room with its tiles and doors, the player, and
  the inventory.
- `logs/latest.log` is the log of the current session. When the game starts,
  the log from the session before is renamed to `logs/log-<date>-<n>.log`.

## Using it as a library

The game parts are plain Python objects, so you can use them without the
terminal front end:

- `asciiquest.items.create_item` and `asciiquest.monsters.create_monster`
  build items and monsters. Their stats are scaled by rarity or level.
- `asciiquest.players.Warrior.starter()` (and `Mage`, `Archer`) create a hero
  with the class's starting equipment.
- `asciiquest.builder.DefaultLocationBuilder` takes a `random.Random` and a
  function that makes the player, so rooms can be built again from the same
  seed. `asciiquest.builder.LocationDirector` runs the building steps in
  order.
- `asciiquest.world.GameMap` holds the rooms and moves the player between
  them with `enter_door`.
- `asciiquest.entity.SaveWriter` and `SaveReader` read and write the save
  format. Truncated or invalid data raises `SaveFormatError`.
- `asciiquest.engine.GameEngine` and `asciiquest.menu.Menu` take a key reader
  and an output stream, so you can drive them from scripts or tests.