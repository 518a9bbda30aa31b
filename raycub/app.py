"""The playable game: window, input handling, frame loop and command entry point."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Collection, Sequence

from raycub.config import Config
from raycub.errors import ConfigError, report_error
from raycub.image import Image, ImageError, load_png
from raycub.parser import parse
from raycub.player import MOVE_SPEED, ROT_SPEED, init_player
from raycub.render import WallTextures, render_frame

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
MINIMAP_RADIUS = 100
MINIMAP_OFFSET = (5, 5)
FPS_OFFSET = 100
TITLE = "raycub"

_CYN = "\x1b[0;36m"
_BGRN = "\x1b[1;32m"
_BMAG = "\x1b[1;35m"
_BWHT = "\x1b[1;37m"
_BCYN = "\x1b[1;36m"
_BYEL = "\x1b[1;33m"
_RESET = "\x1b[0m"

_ART = (
    "\t⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⣀⡀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀",
    "\t⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⣠⠞⠙⢦⠈⠀⠙⣆⣄⡀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀",
    "\t⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⣠⣀⣿⠀⠀⢸⠀⠀⢠⡇⠀⠳⢦⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀",
    "\t⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⣼⠁⠘⣿⡀⠀⣼⠀⡴⠋⠻⡏⠀⠘⡇⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀",
    "\t⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⢀⣀⣤⣤⣤⣤⣤⣀⣸⣇⠀⢸⣷⠞⢷⣾⡅⠀⢠⡗⠀⡼⠛⣦⠀⠀⠀⠀⠀⠀⠀⠀⠀",
    "\t⠀⠀⠀⠀⠀⠀⣤⡀⠀⣀⠀⠀⠀⠀⠀⣀⣴⠖⠋⠉⠁⠀⠀⠀⠀⠀⠀⠉⠛⢦⣿⡏⣷⣸⣿⠂⢀⣼⡷⠎⠀⢀⡾⠁⠀⠀⠀⠀⠀⠀⠀⠀",
    "\t⠀⢠⡞⠳⣄⡇⠀⢱⡄⠉⢷⡀⠀⣴⠞⠋⠀⠀⠀⠀⠀⠀⠀⠀⢀⡀⠀⠀⠀⠀⣿⣧⣾⣧⣄⣦⣾⢿⣳⣶⣺⣍⣀⣀⠀⣀⣀⠀⢀⠀⠀⠀",
    "\t⠀⠸⣇⠀⠘⣧⡀⠀⣧⠀⠀⣧⡾⠁⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⣿⣿⣷⣄⠀⠀⠀⠹⠿⢿⣿⣟⣻⡾⠁⠀⣽⠋⠀⢸⠋⠁⠀⠀⠀⠀⠀⠂",
    "\t⢠⡶⠾⠧⣄⣈⣷⣷⣈⣷⣤⡟⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠘⣿⣏⣻⣿⣄⠐⠖⣶⣿⣷⣿⡿⠁⢤⣾⠃⢀⡴⠿⢾⠉⠉⡿⠁⠀⡠⠂",
    "\t⠈⢧⡤⢤⣤⡖⠻⣯⡟⢿⣿⣲⣷⠀⠀⠀⢀⣤⣤⣤⠤⠾⠛⠀⠀⠀⠉⠅⠘⠀⠀⠀⠈⠙⣛⣿⣷⣾⡿⠿⠍⢁⣀⣠⠏⠀⡾⠁⠀⡄⠀⠀",
    "\t⠀⠘⣇⠀⠙⢷⡠⠾⣗⢸⣿⡿⢿⡆⠠⠴⠞⠷⠿⠿⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⢀⣿⣉⠘⠙⢷⣄⠐⣾⠀⠀⠀⢰⠃⠀⠀⡁⠀⠀",
    "\t⠀⡤⠞⠳⠦⠈⣳⣄⣹⣾⣿⠻⠾⠁⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⣠⡞⣿⠳⢦⣄⣀⠀⢀⡾⠃⠙⡷⢶⠾⠉⠉⠁⠀⠀⠀⢸⡀⠀⠀⣇⠀⠀",
    "\t⠀⠳⣄⣀⣠⠼⠻⣯⡛⢻⣿⡄⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠈⣧⡈⠇⠀⠈⠛⠛⠟⠓⠒⠺⢷⣤⡀⠀⠀⠀⠀⠀⠀⠈⣇⠀⠀⢸⠀⠀",
    "\t⠀⠀⢰⠎⠻⢦⣄⣈⣹⣿⣿⢿⣦⡀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠈⠻⢦⡄⠀⠀⠀⠀⠀⠀⠀⠀⠈⠙⠓⠒⠶⢤⡀⠀⠀⣿⠀⠀⢸⡇⠀",
    "\t⠀⠀⠈⠓⠢⡔⠋⢹⠋⢀⣉⣮⡏⠛⣶⣤⣄⣀⣀⣀⡀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⣀⣬⠇⠀⣸⠇⠀⠀⣸⠁⠀",
    "\t⠀⠀⠀⠀⠀⠁⠀⠘⠶⠞⠉⠋⠀⠸⣯⠁⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⣀⣴⠞⢉⣠⡴⠚⠉⠀⠀⣰⠇⠀⠀",
    "\t⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠈⠙⠒⠦⠤⠤⠤⠤⢤⣤⣄⡀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⢠⣾⡏⠉⠉⠉⠀⠀⠀⠀⣠⡼⠁⠀⠀⠀",
    "\t⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠈⠛⠳⢤⣤⣀⠀⠀⠀⠀⠀⠀⣋⣀⣙⣷⠦⠤⠤⠴⠶⠛⠁⠀⠀⠀⠀⠀",
    "\t⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠈⠉⠛⠲⠶⠖⠚⠋⠉⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀⠀",
    "\n\t\t\t\tAxᴏʟᴏᴛʟ ғᴏʀ ᴏᴜʀ ᴅᴇᴀʀʟʏ ғʀɪᴇɴᴅ Dᴀsʜᴀ",
)

_TITLE_LINES = (
    "\n█░█░█ █▀▀ █░░ █▀▀ █▀█ █▀▄▀█ █▀▀   ▀█▀ █▀█",
    "▀▄▀▄▀ ██▄ █▄▄ █▄▄ █▄█ █░▀░█ ██▄   ░█░ █▄█\n",
    "███████████████████████████████",
    "█─▄▄▄─█▄─██─▄█▄─▄─▀█▄▄▄░█▄─▄▄▀█",
    "█─███▀██─██─███─▄─▀██▄▄░██─██─█",
    "▀▄▄▄▄▄▀▀▄▄▄▄▀▀▄▄▄▄▀▀▄▄▄▄▀▄▄▄▄▀▀\n",
    "🄲 🄾 🄽 🅃 🅁 🄾 🄻 :",
)

_CONTROL_PAIRS = (
    ("🅦 : move FWD", "🅐 : strafe L\n"),
    ("🅢 : move BWD", "🅓 : strafe R\n"),
    ("◄ : rotate L", "► : rotate R\n\n"),
)


def core_banner() -> str:
    """Return the farewell picture shown when the game ends."""
    return "".join(f"{_BMAG}{line}{_RESET}\n" for line in _ART)


def controls_banner() -> str:
    """Return the welcome title and the list of controls."""
    parts = [f"{_BWHT}{line}{_RESET}\n" for line in _TITLE_LINES]
    for left, right in _CONTROL_PAIRS:
        parts.append(f"{_BCYN}\t{left}\t{_RESET}")
        parts.append(f"{_BYEL}\t{right}{_RESET}")
    return "".join(parts)


def load_textures(config: Config) -> WallTextures:
    """Load the four wall textures named in the configuration."""
    print(f"{_CYN}North texture path: {config.north}")
    print(f"South texture path: {config.south}")
    print(f"East texture path: {config.east}")
    print(f"West texture path: {config.west}{_RESET}")
    loaded = {}
    for face in ("north", "south", "east", "west"):
        try:
            loaded[face] = load_png(getattr(config, face))
        except (ImageError, TypeError):
            raise ConfigError(f"Failed to load {face} texture") from None
        prefix = _BGRN if face == "north" else ""
        suffix = _RESET if face == "west" else ""
        print(f"{prefix}Loaded {face} texture successfully{suffix}")
    print(controls_banner(), end="")
    return WallTextures(**loaded)


_HELD_KEYS = ("w", "a", "s", "d", "left", "right")


class Game:
    """A running scene: configuration, player, textures and drawing surfaces."""

    def __init__(
        self,
        config: Config,
        textures: WallTextures,
        *,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        minimap_radius: int = MINIMAP_RADIUS,
    ) -> None:
        self.config = config
        self.textures = textures
        self.screen = Image(width, height)
        self.minimap = Image(minimap_radius * 2, minimap_radius * 2)
        self.player = init_player(config)
        self.move_speed = MOVE_SPEED
        self.rot_speed = ROT_SPEED
        self.running = True

    def handle_keys(self, pressed: Collection[str]) -> None:
        """React to a key event given the names of the keys involved.

        ``"escape"`` stops the game; ``w``/``s`` walk, ``a``/``d`` strafe and
        ``left``/``right`` turn the view.
        """
        if "escape" in pressed:
            self.running = False
        grid = self.config.game_map.grid
        if "w" in pressed:
            self.player.move(grid, True, self.move_speed)
        if "s" in pressed:
            self.player.move(grid, False, self.move_speed)
        if "a" in pressed:
            self.player.strafe(grid, False, self.move_speed)
        if "d" in pressed:
            self.player.strafe(grid, True, self.move_speed)
        if "left" in pressed:
            self.player.rotate(-self.rot_speed)
        if "right" in pressed:
            self.player.rotate(self.rot_speed)

    def _draw(self) -> None:
        render_frame(self.screen, self.minimap, self.config, self.player, self.textures)

    def run(self) -> None:
        """Open the window and run the frame loop until the game is closed."""
        os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
        import pygame

        key_names = {
            pygame.K_w: "w",
            pygame.K_a: "a",
            pygame.K_s: "s",
            pygame.K_d: "d",
            pygame.K_LEFT: "left",
            pygame.K_RIGHT: "right",
        }
        pygame.init()
        try:
            window = pygame.display.set_mode((self.screen.width, self.screen.height))
            pygame.display.set_caption(TITLE)
            pygame.key.set_repeat(500, 33)
            font = pygame.font.Font(None, 24)
            start = time.perf_counter()
            previous = 0.0
            while self.running:
                now = time.perf_counter() - start
                delta = now - previous
                previous = now
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                        state = pygame.key.get_pressed()
                        pressed = {name for key, name in key_names.items() if state[key]}
                        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                            pressed.add("escape")
                        self.handle_keys(pressed)
                if not self.running:
                    break
                self._draw()
                screen = pygame.image.frombuffer(
                    bytes(self.screen.pixels), (self.screen.width, self.screen.height), "RGBA"
                )
                minimap = pygame.image.frombuffer(
                    bytes(self.minimap.pixels), (self.minimap.width, self.minimap.height), "RGBA"
                )
                window.blit(screen, (0, 0))
                window.blit(minimap, MINIMAP_OFFSET)
                fps = int(1 / delta) if delta > 0 else 0
                label = font.render(f"FPS: {fps}", True, (255, 255, 255))
                window.blit(label, (self.screen.width - FPS_OFFSET, 0))
                pygame.display.flip()
        finally:
            pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game on the scene file given on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        config = parse([TITLE, *args])
        textures = load_textures(config)
    except ConfigError as exc:
        report_error(exc.message)
        return 1
    game = Game(config, textures)
    game.run()
    print(core_banner(), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())