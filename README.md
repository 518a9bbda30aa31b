# raycub

raycub is a small first-person maze explorer. It reads a `.cub` scene file
and draws textured walls one screen column at a time with DDA raycasting. A
top-down minimap sits in the corner and an FPS counter is shown at the top
right. The window is 1280×720. The minimap is 200×200 pixels and is placed at
(5, 5).

## Installation

```
pip install .
```

To run the tests, install the test extra and run `pytest`:

```
pip install .[test]
pytest
```

## Running

```
raycub path/to/map.cub
```

The command takes exactly one argument. It must name a file that can be
opened, not a directory, and the name must end in `.cub`. When an argument,
the scene file or a texture is wrong, the game prints an `Error` report to
standard error and exits with status 1. On success it prints a summary of the
scene and the list of controls before it opens the window. When the window
closes, it prints a farewell picture.

### Controls

| Key     | Action                  |
|---------|-------------------------|
| W / S   | move forward / backward |
| A / D   | strafe left / right     |
| ← / →   | rotate left / right     |
| Esc     | quit                    |

Movement slides along walls: each axis is checked against the grid on its
own.

## The `.cub` format

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png

F 220,100,0
C 225,30,0

111111
100101
1010N1
111111
```

- `NO`, `SO`, `WE` and `EA` each name an existing file that ends in `.png`.
  Each identifier may appear only once.
- `F` (floor) and `C` (ceiling) each give an RGB colour: three
  comma-separated whole numbers from 0 to 255. Each colour may be defined
  only once.
- Lines that hold only whitespace are skipped. Once the first map line has
  been read, only map lines may follow.
- Map lines may contain only the characters ` 01NSEW`. Exactly one of `N`,
  `S`, `E` or `W` marks the start and sets which way the player faces.
- A flood fill over `0`/`NSEW` cells starts from the recorded start position.
  If it ever leaves the map, the scene is rejected as not enclosed.

If the start cell is a wall, a warning is printed. The player is then moved
to the first open cell found in squares of radius 1 to 9 around it.

The game draws walls by sampling texture rows with a bit mask. Wall textures
should therefore have a height that is a power of two.

## Using it as a library

```python
from raycub.parser import parse_file
from raycub.validator import validate
from raycub.player import init_player
from raycub.raycast import cast_column

config = validate(parse_file("maps/example.cub"))
print(config.describe())

player = init_player(config)
ray, hit = cast_column(config.game_map, player, x=640, width=1280, height=720)
print(hit.map_x, hit.map_y, hit.perp_wall_dist)
```

Modules:

- `raycub.parser` reads scene files. It provides `parse_file`, `parse_lines`,
  `parse_line`, `classify_line` and `check_argument`. `parse` checks the
  argument, parses, validates and prints a summary.
- `raycub.validator` has `validate_config`, `validate_map` and `validate`.
- `raycub.config` holds the data model: `Config`, `Color` and `GameMap`.
- `raycub.errors` has `ConfigError`, raised for every argument or scene
  problem, and `report_error`.
- `raycub.player` has `Player` with `move`, `strafe` and `rotate`, plus
  `init_player` and `find_free_cell`.
- `raycub.raycast` has `init_ray`, `perform_dda`, `wall_properties` and
  `cast_column`.
- `raycub.render` draws into `Image` buffers. It provides
  `render_ceiling_floor`, `render_walls`, `draw_textured_wall`,
  `render_minimap` and `render_frame`, with `WallTextures` choosing the face
  texture.
- `raycub.image` has the RGBA `Image` (`put_pixel`, `get_pixel`, `fill`,
  `resize`) and `Texture`. It also provides `load_png`, `texture_to_image`,
  and `ImageError` with its `ErrorCode`.
- `raycub.xpm42` reads the plain-text XPM42 pixmap format with `read_xpm42`
  and `load_xpm42`. It also provides `fnv_hash` and `rgba_to_mono`.
- `raycub.app` has `Game`, `load_textures`, the banners and the `main` entry
  point.

## Limitations

- The game itself loads wall textures from PNG only. The XPM42 reader is
  available to library code but is not used by `raycub`.
- The window has a fixed size and cannot be resized. There is no mouse
  control, and there are no doors, sprites or sound.
- Running the game needs a display that pygame can open. Parsing,
  validation, raycasting and rendering into `Image` buffers do not.