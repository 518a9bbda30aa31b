"""Data model of a parsed scene description."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Color:
    """An RGB colour; each channel is -1 until it has been defined."""

    r: int = -1
    g: int = -1
    b: int = -1

    def is_set(self) -> bool:
        """Return True when all three channels have been defined."""
        return self.r != -1 and self.g != -1 and self.b != -1

    def to_rgba(self) -> int:
        """Pack the colour as a 32-bit RGBA value with full opacity."""
        if not self.is_set():
            raise ValueError("color is not defined")
        return (self.r << 24) | (self.g << 16) | (self.b << 8) | 0xFF


@dataclass
class GameMap:
    """The map grid together with the spawn marker found while reading it.

    ``player_y`` holds the number of rows read when the spawn marker was seen.
    """

    grid: list[str] = field(default_factory=list)
    player_x: int = 0
    player_y: int = 0
    spawn: str = ""

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.grid), default=0)


def _show(value: str | None) -> str:
    return "(null)" if value is None else value


@dataclass
class Config:
    """Textures, colours and map of a scene."""

    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    floor: Color = field(default_factory=Color)
    ceiling: Color = field(default_factory=Color)
    game_map: GameMap = field(default_factory=GameMap)
    map_started: bool = False

    def describe(self) -> str:
        """Return a human-readable summary of the configuration."""
        game_map = self.game_map
        parts = [
            "=== CONFIG CONTENT ===\n",
            f"North Texture: {_show(self.north)}\n",
            f"South Texture: {_show(self.south)}\n",
            f"West Texture: {_show(self.west)}\n",
            f"East Texture: {_show(self.east)}\n",
            f"Floor Color: R={self.floor.r}, G={self.floor.g}, B={self.floor.b}\n",
            f"Ceiling Color: R={self.ceiling.r}, G={self.ceiling.g}, B={self.ceiling.b}\n",
            f"Map Dimensions: Width={game_map.width}, Height={game_map.height}\n",
            f"Player Position: X={game_map.player_x:.2f}, Y={game_map.player_y:.2f}, "
            f"Direction={game_map.spawn}\n",
        ]
        if game_map.grid:
            parts.append("Map Grid:\n\n")
            parts.extend(f"{row}\n" for row in game_map.grid)
        else:
            parts.append("Map Grid: Not defined\n")
        parts.append("\n======================\n\n\n")
        return "".join(parts)