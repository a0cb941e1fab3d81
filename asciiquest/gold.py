"""Gold piles lying on the map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .entity import Entity, EntityType, SaveReader, SaveWriter, register_loader


@dataclass
class Gold(Entity):
    """A pile of gold the player picks up by walking into it."""

    amount: int
    symbol: ClassVar[str] = "G"

    def __init__(self, amount: int) -> None:
        self.amount = amount

    def save(self, writer: SaveWriter) -> None:
        writer.write_int(EntityType.GOLD)
        writer.write_int(self.amount)

    @classmethod
    def load(cls, reader: SaveReader) -> Gold:
        return cls(reader.read_int())


register_loader(EntityType.GOLD, Gold.load)