"""Reading and checking scene description (.cub) files."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path

from raycub.config import Color, Config
from raycub.errors import ConfigError
from raycub.validator import validate

WHITESPACE = " \t\n\v\f\r"
MAP_CHARS = " 01NSEW"
SPAWN_CHARS = "NSEW"
_DIGITS = "0123456789"
_TEXTURE_FIELDS = {"NO ": "north", "SO ": "south", "WE ": "west", "EA ": "east"}
_LINE_PATTERN = re.compile(r"[^\n]*\n|[^\n]+")
_WHITE_BOLD = "\x1b[1;97m"
_RESET = "\x1b[0m"


class LineKind(Enum):
    """What a line of a scene file describes."""

    INVALID = 0
    TEXTURE = 1
    COLOR = 2
    MAP = 3


def check_argument(argv: Sequence[str | None]) -> str:
    """Check the command line (program name first) and return the map path."""
    if len(argv) != 2:
        raise ConfigError("Usage: raycub path/to/map.cub")
    path = argv[1]
    if path is None:
        raise ConfigError("Invalid argument array")
    if os.path.isdir(path):
        raise ConfigError("Cannot use directory")
    try:
        with open(path, "rb"):
            pass
    except OSError:
        raise ConfigError("Cannot access file (check permissions/path)") from None
    if len(path) < 5 or not path.endswith(".cub"):
        raise ConfigError("Invalid file extension (must be .cub)")
    return path


def classify_line(line: str) -> LineKind:
    """Tell from its first non-blank characters what a line describes."""
    rest = line.lstrip(WHITESPACE)
    if rest.startswith(tuple(_TEXTURE_FIELDS)):
        return LineKind.TEXTURE
    if rest.startswith(("F ", "C ")):
        return LineKind.COLOR
    if not rest or rest[0] in MAP_CHARS:
        return LineKind.MAP
    return LineKind.INVALID


def _check_png(path: str) -> None:
    if len(path) < 5:
        raise ConfigError("Invalid texture path: too short")
    if not path.endswith(".png"):
        raise ConfigError("Invalid texture path: not .png")
    try:
        with open(path, "rb"):
            pass
    except OSError:
        raise ConfigError("Invalid texture path: file not found") from None


def parse_texture(config: Config, line: str) -> str:
    """Record the texture path given by an ``NO``/``SO``/``WE``/``EA`` line."""
    for prefix, attribute in _TEXTURE_FIELDS.items():
        if line.startswith(prefix):
            path = line[len(prefix):].strip(WHITESPACE)
            _check_png(path)
            if getattr(config, attribute) is not None:
                raise ConfigError("Texture already defined")
            setattr(config, attribute, path)
            return path
    raise ConfigError("Invalid texture identifier")


def _parse_channel(text: str) -> int:
    digits = text.strip(" ")
    if not digits or any(ch not in _DIGITS for ch in digits):
        raise ConfigError("Invalid color value")
    value = int(digits)
    if value > 255:
        raise ConfigError("Invalid color value")
    return value


def _parse_rgb(text: str) -> tuple[int, int, int]:
    trimmed = text.strip(" \n")
    if trimmed and (trimmed[0] == "," or trimmed[-1] == ","):
        raise ConfigError("Invalid comma placement")
    parts = [part for part in trimmed.split(",") if part]
    if len(parts) != 3:
        raise ConfigError("Invalid component count")
    red, green, blue = (_parse_channel(part) for part in parts)
    return red, green, blue


def parse_color(config: Config, line: str) -> Color:
    """Record the floor (``F``) or ceiling (``C``) colour given by a line."""
    if line.startswith("F "):
        target = config.floor
    elif line.startswith("C "):
        target = config.ceiling
    else:
        raise ConfigError("Invalid color type")
    if target.r != -1 or target.g != -1 or target.b != -1:
        raise ConfigError("Color already defined")
    target.r, target.g, target.b = _parse_rgb(line[2:])
    return target


def parse_map_line(config: Config, line: str) -> None:
    """Append a map row to the grid and note any spawn marker in it."""
    row = line.strip("\n")
    if not row:
        raise ConfigError("Empty map line")
    if any(ch not in MAP_CHARS for ch in row):
        raise ConfigError("Invalid map character")
    game_map = config.game_map
    game_map.grid.append(row)
    for x, ch in enumerate(row):
        if ch in SPAWN_CHARS:
            duplicate = bool(game_map.spawn)
            game_map.spawn = ch
            game_map.player_x = x
            game_map.player_y = game_map.height
            if duplicate:
                raise ConfigError("Multiple player start positions")


def parse_line(config: Config, line: str) -> LineKind | None:
    """Apply one line of a scene file; blank lines are skipped and give None."""
    if not line.strip(WHITESPACE):
        return None
    kind = classify_line(line)
    processed = line.strip("\n") if kind is LineKind.MAP else line.strip(" \t\n")
    if config.map_started and kind is not LineKind.MAP:
        raise ConfigError("Non-map content after map started")
    if kind is LineKind.TEXTURE:
        parse_texture(config, processed)
    elif kind is LineKind.COLOR:
        parse_color(config, processed)
    elif kind is LineKind.MAP:
        config.map_started = True
        parse_map_line(config, processed)
    else:
        raise ConfigError("Invalid line in map.cub")
    return kind


def parse_lines(lines: Iterable[str]) -> Config:
    """Build a configuration from the lines of a scene file."""
    config = Config()
    for line in lines:
        parse_line(config, line)
    return config


def parse_file(path: str | os.PathLike[str]) -> Config:
    """Read a scene file and build its configuration without validating it."""
    try:
        text = Path(path).read_bytes().decode("utf-8", errors="surrogateescape")
    except OSError:
        raise ConfigError("Failed to open file") from None
    return parse_lines(match.group(0) for match in _LINE_PATTERN.finditer(text))


def parse(argv: Sequence[str | None]) -> Config:
    """Check the command line, read and validate the scene, and print a summary."""
    path = check_argument(argv)
    config = validate(parse_file(path))
    sys.stdout.write(f"{_WHITE_BOLD}{config.describe()}{_RESET}")
    return config