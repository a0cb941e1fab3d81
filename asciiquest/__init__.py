"""A terminal dungeon crawler with random rooms, loot and binary save games."""

__version__ = "0.1.0"