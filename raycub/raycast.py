"""Casting one ray per screen column to find the wall it meets."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace

from raycub.config import GameMap
from raycub.player import Player

WALL = "1"


@dataclass
class Ray:
    """A ray through one screen column, ready for grid traversal."""

    camera_x: float
    dir_x: float
    dir_y: float
    delta_dist_x: float
    delta_dist_y: float
    step_x: int
    step_y: int
    side_dist_x: float
    side_dist_y: float


@dataclass
class WallHit:
    """The wall cell a ray met and how the wall stripe is drawn.

    ``side`` is 0 when an x-side (vertical grid line) was crossed, 1 for a y-side.
    """

    map_x: int
    map_y: int
    side: int
    perp_wall_dist: float = 0.0
    line_height: int = 0
    draw_start: int = 0
    draw_end: int = 0
    wall_x: float = 0.0


def _delta(component: float) -> float:
    return math.inf if component == 0 else abs(1 / component)


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    row = grid[y]
    return row[x] if 0 <= x < len(row) else ""


def init_ray(player: Player, x: int, width: int) -> Ray:
    """Build the ray for screen column ``x`` of a view ``width`` pixels wide."""
    camera_x = 2 * x / width - 1
    dir_x = player.dir_x + player.plane_x * camera_x
    dir_y = player.dir_y + player.plane_y * camera_x
    delta_x = _delta(dir_x)
    delta_y = _delta(dir_y)
    cell_x = int(player.pos_x)
    cell_y = int(player.pos_y)
    if dir_x < 0:
        step_x = -1
        side_x = (player.pos_x - cell_x) * delta_x
    else:
        step_x = 1
        side_x = (cell_x + 1.0 - player.pos_x) * delta_x
    if dir_y < 0:
        step_y = -1
        side_y = (player.pos_y - cell_y) * delta_y
    else:
        step_y = 1
        side_y = (cell_y + 1.0 - player.pos_y) * delta_y
    return Ray(camera_x, dir_x, dir_y, delta_x, delta_y, step_x, step_y, side_x, side_y)


def perform_dda(game_map: GameMap, player: Player, ray: Ray) -> WallHit:
    """Step through grid cells along the ray until a wall cell is met.

    Raises ValueError when the ray leaves the map without meeting a wall.
    """
    grid = game_map.grid
    width, height = game_map.width, game_map.height
    map_x, map_y = int(player.pos_x), int(player.pos_y)
    side_x, side_y = ray.side_dist_x, ray.side_dist_y
    side = 0
    while True:
        if side_x < side_y:
            side_x += ray.delta_dist_x
            map_x += ray.step_x
            side = 0
        else:
            side_y += ray.delta_dist_y
            map_y += ray.step_y
            side = 1
        if 0 <= map_y < height and 0 <= map_x < width:
            if _cell(grid, map_x, map_y) == WALL:
                return WallHit(map_x, map_y, side)
        elif (
            (map_x < 0 and ray.step_x < 0)
            or (map_x >= width and ray.step_x > 0)
            or (map_y < 0 and ray.step_y < 0)
            or (map_y >= height and ray.step_y > 0)
        ):
            raise ValueError("ray left the map without hitting a wall")


def wall_properties(player: Player, ray: Ray, hit: WallHit, height: int) -> WallHit:
    """Return ``hit`` completed with distance, stripe extent and hit offset."""
    if hit.side == 0:
        perp = (hit.map_x - player.pos_x + (1 - ray.step_x) // 2) / ray.dir_x
    else:
        perp = (hit.map_y - player.pos_y + (1 - ray.step_y) // 2) / ray.dir_y
    line_height = int(height / perp) if perp > 0 else height
    draw_start = max(-(line_height // 2) + height // 2, 0)
    draw_end = line_height // 2 + height // 2
    if draw_end >= height:
        draw_end = height - 1
    if hit.side == 0:
        wall_x = player.pos_y + perp * ray.dir_y
    else:
        wall_x = player.pos_x + perp * ray.dir_x
    wall_x -= math.floor(wall_x)
    return replace(
        hit,
        perp_wall_dist=perp,
        line_height=line_height,
        draw_start=draw_start,
        draw_end=draw_end,
        wall_x=wall_x,
    )


def cast_column(
    game_map: GameMap, player: Player, x: int, width: int, height: int
) -> tuple[Ray, WallHit]:
    """Cast the ray of column ``x`` and return it with its completed wall hit."""
    ray = init_ray(player, x, width)
    hit = perform_dda(game_map, player, ray)
    return ray, wall_properties(player, ray, hit, height)