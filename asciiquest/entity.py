"""Binary save-file primitives and the entity loader registry."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import BinaryIO, Callable

_INT = struct.Struct("<i")
_SIZE = struct.Struct("<Q")


class EntityType(IntEnum):
    PLAYER = 1
    MONSTER = 2
    GOLD = 3
    ITEM = 4


class SaveFormatError(Exception):
    """Raised when a save file is truncated or holds invalid data."""


class SaveWriter:
    """Writes little-endian values to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def _pack(self, layout: struct.Struct, value: int) -> None:
        try:
            self.stream.write(layout.pack(value))
        except struct.error as exc:
            raise ValueError(f"value {value!r} does not fit: {exc}") from None

    def write_int(self, value: int) -> None:
        self._pack(_INT, value)

    def write_size(self, value: int) -> None:
        self._pack(_SIZE, value)

    def write_bool(self, value: bool) -> None:
        self.stream.write(b"\x01" if value else b"\x00")

    def write_char(self, value: str) -> None:
        if len(value) != 1:
            raise ValueError(f"expected a single character, got {value!r}")
        try:
            self.stream.write(value.encode("latin-1"))
        except UnicodeEncodeError:
            raise ValueError(f"character {value!r} cannot be stored in one byte") from None

    def write_string(self, value: str) -> None:
        data = value.encode("utf-8")
        self.write_size(len(data))
        self.stream.write(data)


class SaveReader:
    """Reads the values written by ``SaveWriter``."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def _read(self, count: int) -> bytes:
        data = self.stream.read(count)
        if len(data) != count:
            raise SaveFormatError(f"unexpected end of save data: wanted {count} bytes, got {len(data)}")
        return data

    def read_int(self) -> int:
        return _INT.unpack(self._read(_INT.size))[0]

    def read_size(self) -> int:
        return _SIZE.unpack(self._read(_SIZE.size))[0]

    def read_bool(self) -> bool:
        return self._read(1) != b"\x00"

    def read_char(self) -> str:
        return self._read(1).decode("latin-1")

    def read_string(self) -> str:
        data = self._read(self.read_size())
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SaveFormatError(f"invalid text in save data: {exc}") from None


class Entity(ABC):
    """Anything that can stand on a tile and be written to a save file."""

    @abstractmethod
    def save(self, writer: SaveWriter) -> None:
        """Write the entity, starting with its entity type tag."""


Loader = Callable[[SaveReader], Entity]

_LOADERS: dict[EntityType, Loader] = {}


def register_loader(entity_type: EntityType, loader: Loader | None) -> Loader | None:
    """Set the loader for an entity type and return the one it replaced.

    Passing ``None`` removes the loader.
    """
    kind = EntityType(entity_type)
    previous = _LOADERS.pop(kind, None)
    if loader is not None:
        _LOADERS[kind] = loader
    return previous


def load_entity(reader: SaveReader) -> Entity:
    """Read an entity type tag and the entity that follows it."""
    tag = reader.read_int()
    try:
        kind = EntityType(tag)
    except ValueError:
        raise SaveFormatError(f"Invalid entity type: {tag}") from None
    loader = _LOADERS.get(kind)
    if loader is None:
        raise SaveFormatError(f"No loader for entity type: {kind.name}")
    return loader(reader)