"""A single square of a location's grid."""

from __future__ import annotations

from dataclasses import dataclass

# Imported so that every kind of entity has its loader registered.
from . import gold, items, monsters, players  # noqa: F401
from .entity import Entity, SaveReader, SaveWriter, load_entity


@dataclass
class Tile:
    """What is drawn at one grid position and whether it can be walked onto."""

    symbol: str
    passable: bool
    entity: Entity | None = None

    def save(self, writer: SaveWriter) -> None:
        writer.write_char(self.symbol)
        writer.write_bool(self.passable)
        writer.write_bool(self.entity is not None)
        if self.entity is not None:
            self.entity.save(writer)

    @classmethod
    def load(cls, reader: SaveReader) -> Tile:
        symbol = reader.read_char()
        passable = reader.read_bool()
        entity = load_entity(reader) if reader.read_bool() else None
        return cls(symbol, passable, entity)