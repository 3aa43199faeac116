"""The interactive game: input handling, frame composition and the window loop."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from os import PathLike

from .bonus_scene import load_bonus_scene
from .constants import (
    HEIGHT,
    MOUSE_ROTATION_STEP,
    ROTATION_STEP,
    WEAPONS,
    WIDTH,
    Key,
)
from .errors import MapError
from .minimap import MinimapPulse, render_minimap
from .player import Player, key_vector, toggle_door
from .raycast import normalize_angle
from .render import Frame, render_view
from .scene import Scene, read_lines
from .texture import TRANSPARENT, Texture

__all__ = [
    "DOOR_TEXTURES",
    "FRAMES_PER_IMAGE",
    "Game",
    "IMAGES_PER_WEAPON",
    "WALL_TEXTURES",
    "WEAPON_LIST",
    "WeaponAnimation",
    "load_textures",
    "load_weapons",
    "main",
    "read_weapon_list",
]

WALL_TEXTURES = (
    "./bonus/walls_textures/mur_1.xpm",
    "./bonus/walls_textures/mur_2.xpm",
    "./bonus/walls_textures/ps3.xpm",
    "./bonus/walls_textures/prison_lux1.xpm",
)
DOOR_TEXTURES = (
    "./bonus/bonus_textures/port_f.xpm",
    "./bonus/bonus_textures/port_o.xpm",
)
WEAPON_LIST = "./bonus/images.txt"
PRESENTATION = "./bonus/presentation_textures/presentation.xpm"

IMAGES_PER_WEAPON = 4
FRAMES_PER_IMAGE = 15
_TEXTURE_COUNT = len(WALL_TEXTURES) + len(DOOR_TEXTURES)
_WEAPON_OFFSET_X = 100
_WEAPON_OFFSET_Y = 60
_DOOR_WEAPON = 2


@dataclass
class WeaponAnimation:
    """Firing animation of the held weapon; each image stays for a few frames."""

    count: int = 0
    firing: bool = False

    def advance(self) -> int:
        """Move one frame on and return the index of the weapon image to show."""
        if self.firing and self.count < FRAMES_PER_IMAGE * IMAGES_PER_WEAPON:
            index = self.count // FRAMES_PER_IMAGE
        else:
            index = 0
            self.firing = False
            self.count = 0
        self.count += 1
        return index


@dataclass
class Game:
    """State of a running game: the scene, the player and the view state."""

    scene: Scene
    textures: Sequence[Texture]
    weapons: Sequence[Sequence[Texture]]
    door_open: bool = False
    weapon: int | None = None
    started: bool = False
    running: bool = True
    animation: WeaponAnimation = field(default_factory=WeaponAnimation)
    pulse: MinimapPulse = field(default_factory=MinimapPulse)
    player: Player = field(init=False)
    _mouse_x: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.textures) < _TEXTURE_COUNT:
            raise ValueError(f"{_TEXTURE_COUNT} wall and door textures are required")
        x, y = self.scene.player_position
        self.player = Player(x, y, self.scene.player_angle)

    def handle_key(self, key: int) -> None:
        """React to one key press."""
        if key == Key.DOOR and self.weapon == _DOOR_WEAPON:
            self._use_door()
        elif key == Key.SWITCH_WEAPON:
            self.started = True
            self.weapon = 0 if self.weapon is None else (self.weapon + 1) % WEAPONS
        elif key == Key.FIRE:
            self.animation.firing = True

        if key == Key.TURN_RIGHT:
            self.player.rotate(ROTATION_STEP)
        if key == Key.TURN_LEFT:
            self.player.rotate(-ROTATION_STEP)

        vector = key_vector(key, self.player.angle)
        if vector is not None:
            self.player.step_with_doors(self.scene.grid, *vector, self.door_open)
        elif key == Key.ESCAPE:
            self.running = False

    def handle_mouse(self, x: int) -> None:
        """Turn slightly towards the side the pointer moved to."""
        if x > self._mouse_x:
            self.player.rotate(MOUSE_ROTATION_STEP)
        elif x < self._mouse_x:
            self.player.rotate(-MOUSE_ROTATION_STEP)
        self._mouse_x = x

    def _use_door(self) -> None:
        state = toggle_door(self.door_open, self.scene.grid, self.player.x, self.player.y)
        if state != self.door_open:
            self.door_open = state
            self.weapon = (self.weapon or 0) - 1

    def render(self) -> Frame:
        """Compose one frame: the view, the minimap and the held weapon."""
        self.player.angle = normalize_angle(self.player.angle)
        frame = Frame(WIDTH, HEIGHT)
        scene = self.scene
        render_view(frame, scene, self.player, self.textures, self.door_open, True)
        # The minimap is drawn once with the view and once more over it, so its
        # background pulse moves on twice per frame.
        for _ in range(2):
            render_minimap(
                frame,
                scene.grid,
                scene.width,
                scene.last_line,
                self.player.x,
                self.player.y,
                self.pulse.advance(),
            )
        if self.weapon is not None:
            self._draw_weapon(frame)
        return frame

    def _draw_weapon(self, frame: Frame) -> None:
        image = self.weapons[self.weapon][self.animation.advance()]
        left = WIDTH // 2 - image.width // 2 + _WEAPON_OFFSET_X
        top = HEIGHT - image.height + image.height // 2 - _WEAPON_OFFSET_Y
        for y in range(image.height):
            for x in range(image.width):
                color = image.pixel(x, y)
                if color != TRANSPARENT:
                    frame.put(left + x, top + y, color)


def read_weapon_list(path: str | PathLike[str]) -> list[list[str]]:
    """Read the image paths of every weapon, four per weapon, one per line."""
    lines = read_lines(path)
    needed = WEAPONS * IMAGES_PER_WEAPON
    if len(lines) < needed:
        raise ValueError(f"{needed} weapon images are required, found {len(lines)}")
    return [
        lines[start:start + IMAGES_PER_WEAPON]
        for start in range(0, needed, IMAGES_PER_WEAPON)
    ]


def load_weapons(paths: Iterable[Iterable[str]]) -> list[list[Texture]]:
    """Load the images of every weapon."""
    return [[Texture.load(path) for path in weapon] for weapon in paths]


def load_textures() -> list[Texture]:
    """Load the four wall textures followed by the closed and open door."""
    return [Texture.load(path) for path in (*WALL_TEXTURES, *DOOR_TEXTURES)]


def _report(message: str) -> None:
    print(f"Error\n{message}", file=sys.stderr)


def _translate_key(pygame, key: int) -> int:
    special = {
        pygame.K_LEFT: Key.TURN_LEFT,
        pygame.K_RIGHT: Key.TURN_RIGHT,
        pygame.K_ESCAPE: Key.ESCAPE,
    }
    return int(special.get(key, key))


def _to_surface(pygame, frame: Frame):
    pixels = frame.pixels[:]
    if sys.byteorder == "little":
        pixels.byteswap()
    data = pixels.tobytes()[1:] + b"\x00"
    return pygame.image.frombuffer(data, (frame.width, frame.height), "RGBX")


def _show_presentation(pygame, screen) -> None:
    try:
        image = pygame.image.load(PRESENTATION)
    except (pygame.error, OSError):
        return
    screen.blit(image, (0, 0))
    pygame.display.flip()


def _run(pygame, screen, game: Game) -> int:
    clock = pygame.time.Clock()
    while game.running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return 0
            if event.type == pygame.KEYDOWN:
                game.handle_key(_translate_key(pygame, event.key))
            elif event.type == pygame.MOUSEMOTION:
                game.handle_mouse(event.pos[0])
        if game.started:
            screen.blit(_to_surface(pygame, game.render()), (0, 0))
            pygame.display.flip()
        clock.tick(60)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and play it in a window."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        _report("arguments error")
        return 1
    try:
        scene = load_bonus_scene(args[0])
    except MapError as exc:
        _report(exc.message)
        return 1
    except OSError:
        print(f"file invalide : {args[0]}")
        return 2

    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("duva")
        _show_presentation(pygame, screen)
        try:
            textures = load_textures()
            weapons = load_weapons(read_weapon_list(WEAPON_LIST))
        except (OSError, ValueError):
            _report("Error")
            return 1
        return _run(pygame, screen, Game(scene, textures, weapons))
    finally:
        pygame.quit()