"""Player position, view direction and movement on the map grid."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from raycub.config import Config, GameMap

MOVE_SPEED = 0.05
ROT_SPEED = 0.03
PLANE = 0.66
SEARCH_LIMIT = 10
WALL = "1"

_RED_BOLD = "\x1b[1;31m"
_WHITE_BOLD = "\x1b[1;37m"
_RESET = "\x1b[0m"

_VIEWS = {
    "N": (0.0, -1.0, PLANE, 0.0),
    "S": (0.0, 1.0, -PLANE, 0.0),
    "E": (1.0, 0.0, 0.0, PLANE),
    "W": (-1.0, 0.0, 0.0, -PLANE),
}


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return ""


def find_free_cell(game_map: GameMap, x: int, y: int) -> tuple[float, float] | None:
    """Search squares of growing radius around (x, y) for a cell that is not a wall.

    Returns the centre of the first such cell, or None if none lies within reach.
    """
    width, height = game_map.width, game_map.height
    for radius in range(1, SEARCH_LIMIT):
        for dy in range(-radius, radius + 1):
            new_y = y + dy
            for dx in range(-radius, radius + 1):
                new_x = x + dx
                if 0 <= new_y < height and 0 <= new_x < width:
                    if _cell(game_map.grid, new_x, new_y) != WALL:
                        return new_x + 0.5, new_y + 0.5
    return None


@dataclass
class Player:
    """Position, facing direction and camera plane of the player."""

    pos_x: float
    pos_y: float
    direction: str = ""
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    def _step_to(self, grid: Sequence[str], new_x: float, new_y: float) -> None:
        if _cell(grid, int(new_x), int(self.pos_y)) != WALL:
            self.pos_x = new_x
        if _cell(grid, int(self.pos_x), int(new_y)) != WALL:
            self.pos_y = new_y

    def move(self, grid: Sequence[str], forward: bool = True, speed: float = MOVE_SPEED) -> None:
        """Walk along the view direction, sliding along walls."""
        sign = 1.0 if forward else -1.0
        self._step_to(
            grid,
            self.pos_x + sign * (self.dir_x * speed),
            self.pos_y + sign * (self.dir_y * speed),
        )

    def strafe(self, grid: Sequence[str], right: bool = True, speed: float = MOVE_SPEED) -> None:
        """Step sideways along the camera plane, sliding along walls."""
        sign = 1.0 if right else -1.0
        self._step_to(
            grid,
            self.pos_x + sign * (self.plane_x * speed),
            self.pos_y + sign * (self.plane_y * speed),
        )

    def rotate(self, angle: float = ROT_SPEED) -> None:
        """Turn the view by ``angle`` radians; positive turns right."""
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )


def init_player(config: Config) -> Player:
    """Place the player at the spawn point, moving out of a wall if needed."""
    game_map = config.game_map
    player = Player(game_map.player_x + 0.5, game_map.player_y + 0.5, game_map.spawn)
    map_x, map_y = int(player.pos_x), int(player.pos_y)
    if _cell(game_map.grid, map_x, map_y) == WALL:
        print(f"{_RED_BOLD}Warning: Initial spawn is inside a wall. Finding alternative...{_RESET}")
        spot = find_free_cell(game_map, map_x, map_y)
        if spot is not None:
            player.pos_x, player.pos_y = spot
        print(
            f"{_WHITE_BOLD}\nPlayer spawn at\n\t X:{player.pos_x:f} Y:{player.pos_y:f} "
            f"D:{player.direction} \n\n{_RESET}"
        )
    view = _VIEWS.get(player.direction)
    if view is not None:
        player.dir_x, player.dir_y, player.plane_x, player.plane_y = view
    return player