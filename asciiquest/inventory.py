"""The player's nine-slot inventory."""

from __future__ import annotations

import sys
from typing import Callable, Iterator, TextIO

from .entity import SaveFormatError, SaveReader, SaveWriter, load_entity
from .items import Armor, Item, Potion, Weapon
from .terminal import GREEN_TEXT, RED_TEXT, RESET_TEXT, YELLOW_TEXT, Key, colored

SLOTS = 9
_BORDER = "+---+---+---+---+---+---+---+---+---+"
_ACTIONS = "Choose action: [1] Use  [2] Drop  [3] Leave it"


class Inventory:
    """Fixed row of slots, each empty (``None``) or holding one item."""

    def __init__(self) -> None:
        self._slots: list[Item | None] = [None] * SLOTS

    def __getitem__(self, index: int) -> Item | None:
        return self._slots[index]

    def __iter__(self) -> Iterator[Item | None]:
        return iter(self._slots)

    def __len__(self) -> int:
        return SLOTS

    def add_item(self, item: Item) -> bool:
        """Put ``item`` in the first free slot; return False when full."""
        for index, slot in enumerate(self._slots):
            if slot is None:
                self._slots[index] = item
                return True
        print(colored("Inventory is full", YELLOW_TEXT))
        return False

    def remove_item(self, item: Item) -> None:
        """Empty the slot holding this very item."""
        for index, slot in enumerate(self._slots):
            if slot is item:
                self._slots[index] = None
                return
        raise ValueError("Item not found")

    def render(self, current_index: int) -> str:
        """Draw the slots, highlighting ``current_index``, and describe its item."""
        cells = []
        for index, item in enumerate(self._slots):
            if item is None:
                cells.append("|   ")
            else:
                highlight = GREEN_TEXT if index == current_index else ""
                cells.append(f"| {highlight}{item.symbol}{RESET_TEXT} ")
        lines = ["Inventory:", _BORDER, "".join(cells) + "|", _BORDER]
        selected = self._slots[current_index]
        if selected is not None:
            lines.append(selected.describe())
        return "\n".join(lines) + "\n"

    def browse(
        self,
        read_key: Callable[[], str | Key],
        player,
        location,
        output: TextIO | None = None,
    ) -> None:
        """Let the player move through the slots and use or drop items until 'e'."""
        out = output if output is not None else sys.stdout
        current = 0
        while True:
            out.write(self.render(current))
            key = read_key()
            if key == Key.LEFT:
                current = (current - 1) % SLOTS
            elif key == Key.RIGHT:
                current = (current + 1) % SLOTS
            elif key in ("e", "E"):
                return
            elif key == Key.ENTER and self._slots[current] is not None:
                self._choose_action(current, read_key, player, location, out)

    def _choose_action(self, index: int, read_key, player, location, out: TextIO) -> None:
        out.write(_ACTIONS + "\n")
        while True:
            key = read_key()
            if key in ("1", "2", "3"):
                break
            out.write(colored("Invalid input, please re-enter.", RED_TEXT) + "\n")
        if key == "1":
            self.use_item(index, player)
        elif key == "2":
            self.drop_item(index, location)

    def use_item(self, index: int, player) -> None:
        """Drink a potion, or equip a weapon or armour, stowing what it replaces."""
        item = self._slots[index]
        if isinstance(item, Potion):
            self.remove_item(item)
        elif isinstance(item, Weapon):
            current = player.weapon
            player.equip_weapon(item)
            self.remove_item(item)
            if current is not None:
                self.add_item(current)
        elif isinstance(item, Armor):
            current = player.armor
            player.equip_armor(item)
            self.remove_item(item)
            if current is not None:
                self.add_item(current)

    def drop_item(self, index: int, location) -> bool:
        """Leave the item under the player; return whether it was dropped."""
        item = self._slots[index]
        if item is None:
            return False
        if not location.drop_item(item):
            print(colored("Cannot drop item here", RED_TEXT), file=sys.stderr)
            return False
        self.remove_item(item)
        return True

    def save(self, writer: SaveWriter) -> None:
        for item in self._slots:
            writer.write_bool(item is not None)
            if item is not None:
                item.save(writer)

    @classmethod
    def load(cls, reader: SaveReader) -> Inventory:
        inventory = cls()
        for index in range(SLOTS):
            if not reader.read_bool():
                continue
            entity = load_entity(reader)
            if not isinstance(entity, Item):
                raise SaveFormatError(f"Failed to load item at index: {index}.")
            inventory._slots[index] = entity
        return inventory