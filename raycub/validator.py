"""Completeness and enclosure checks for a parsed configuration."""

from __future__ import annotations

from raycub.config import Config, GameMap
from raycub.errors import ConfigError

_WALKABLE = "0NSEW"


def validate_config(config: Config) -> None:
    """Check that textures, colours and the spawn point are all defined."""
    if None in (config.north, config.south, config.east, config.west):
        raise ConfigError("Missing texture definition")
    if -1 in (config.floor.r, config.floor.g, config.floor.b):
        raise ConfigError("Missing floor color")
    if -1 in (config.ceiling.r, config.ceiling.g, config.ceiling.b):
        raise ConfigError("Missing ceiling color")
    if not config.game_map.spawn:
        raise ConfigError("No player start position")
    if config.game_map.player_x < 0 or config.game_map.player_y < 0:
        raise ConfigError("Invalid player position")


def _cell(game_map: GameMap, x: int, y: int) -> str:
    row = game_map.grid[y]
    return row[x] if x < len(row) else ""


def validate_map(config: Config) -> set[tuple[int, int]]:
    """Flood the map from the player position and return the reached (x, y) cells.

    Raises ConfigError when an open cell touches the edge of the map.
    """
    game_map = config.game_map
    width, height = game_map.width, game_map.height
    visited: set[tuple[int, int]] = set()
    pending = [(game_map.player_x, game_map.player_y)]
    while pending:
        x, y = pending.pop()
        if not (0 <= y < height and 0 <= x < width):
            raise ConfigError("Map not enclosed")
        if (x, y) in visited or _cell(game_map, x, y) not in tuple(_WALKABLE):
            continue
        visited.add((x, y))
        pending.extend(((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)))
    return visited


def validate(config: Config) -> Config:
    """Run all checks and return the configuration unchanged."""
    validate_config(config)
    validate_map(config)
    return config