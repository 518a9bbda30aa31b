"""Drawing a frame: ceiling and floor, textured walls and the minimap."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from raycub.config import Config
from raycub.image import BPP, Image, Texture
from raycub.player import Player
from raycub.raycast import Ray, WallHit, cast_column

MINIMAP_SCALE = 10.0
PLAYER_SIZE = 6
GREY = 0x808080FF
WHITE = 0xFFFFFFFF
RED = 0xFF0000FF
DARK_GREEN = 0x006400FF
WALL = "1"
FLOOR = "0"


@dataclass
class WallTextures:
    """The four wall textures, one per compass face."""

    north: Texture
    south: Texture
    east: Texture
    west: Texture

    def select(self, ray: Ray, hit: WallHit) -> Texture:
        """Pick the texture of the wall face the ray struck."""
        if hit.side == 0:
            return self.east if ray.dir_x > 0 else self.west
        return self.south if ray.dir_y > 0 else self.north


def render_ceiling_floor(screen: Image, config: Config) -> None:
    """Paint the upper half with the ceiling colour and the rest with the floor colour."""
    row_pixels = screen.width
    half = screen.height // 2
    ceiling = config.ceiling.to_rgba().to_bytes(BPP, "big")
    floor = config.floor.to_rgba().to_bytes(BPP, "big")
    split = half * row_pixels * BPP
    screen.pixels[:split] = ceiling * (half * row_pixels)
    screen.pixels[split:] = floor * ((screen.height - half) * row_pixels)


def draw_textured_wall(
    screen: Image, texture: Texture, ray: Ray, hit: WallHit, x: int
) -> None:
    """Draw the textured wall stripe of column ``x``."""
    line_height = hit.line_height
    if line_height <= 0 or hit.draw_start >= hit.draw_end:
        return
    tex_x = int(hit.wall_x * texture.width)
    if (hit.side == 0 and ray.dir_x > 0) or (hit.side == 1 and ray.dir_y < 0):
        tex_x = texture.width - tex_x - 1
    step = texture.height / line_height
    tex_pos = (hit.draw_start - screen.height // 2 + line_height // 2) * step
    mask = texture.height - 1
    for y in range(hit.draw_start, hit.draw_end):
        tex_y = int(tex_pos) & mask
        tex_pos += step
        screen.put_pixel(x, y, texture.pixel(tex_x, tex_y))


def render_walls(
    screen: Image, config: Config, player: Player, textures: WallTextures
) -> None:
    """Cast one ray per column and draw the wall it meets."""
    for x in range(screen.width):
        ray, hit = cast_column(config.game_map, player, x, screen.width, screen.height)
        draw_textured_wall(screen, textures.select(ray, hit), ray, hit, x)


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return ""


def render_minimap(minimap: Image, config: Config, player: Player) -> None:
    """Draw a top-down view of the map centred on the player."""
    minimap.fill(config.floor.to_rgba())
    centre_x = minimap.width // 2
    centre_y = minimap.height // 2
    grid = config.game_map.grid
    for y in range(minimap.height):
        map_y = int(player.pos_y + (y - centre_y) / MINIMAP_SCALE)
        for x in range(minimap.width):
            map_x = int(player.pos_x + (x - centre_x) / MINIMAP_SCALE)
            cell = _cell(grid, map_x, map_y)
            if cell == WALL:
                minimap.put_pixel(x, y, GREY)
            elif cell and (cell == FLOOR or cell == player.direction):
                minimap.put_pixel(x, y, WHITE)
    half = PLAYER_SIZE // 2
    for dy in range(-half, half):
        for dx in range(-half, half):
            minimap.put_pixel(centre_x + dx, centre_y + dy, RED)
    for i in range(PLAYER_SIZE * 2):
        px = centre_x + int(player.dir_x * i)
        py = centre_y + int(player.dir_y * i)
        if 0 <= px < minimap.width and 0 <= py < minimap.height:
            minimap.put_pixel(px, py, DARK_GREEN)


def render_frame(
    screen: Image,
    minimap: Image,
    config: Config,
    player: Player,
    textures: WallTextures,
) -> None:
    """Clear the screen and draw a complete frame and minimap."""
    screen.fill(0)
    render_ceiling_floor(screen, config)
    render_walls(screen, config, player, textures)
    render_minimap(minimap, config, player)