[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asciiquest"
version = "0.1.0"
description = "A small terminal dungeon crawler with randomly built rooms, monsters, loot and binary save games."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "roguelike", "ascii", "terminal", "dungeon", "rpg"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
asciiquest = "asciiquest.menu:main"

[tool.hatch.build.targets.wheel]
packages = ["asciiquest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
