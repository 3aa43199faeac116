"""Frame buffer and the first-person wall, ceiling and floor view."""

from __future__ import annotations

import math
from array import array
from collections.abc import Sequence

from .constants import HEIGHT, RAD, VIEW, WIDTH
from .player import Player
from .raycast import (
    DOOR_CLOSED_TEXTURE,
    RayHit,
    cast_ray,
    normalize_angle,
    projected_height,
    wall_texture_index,
)
from .scene import Scene
from .texture import Texture

__all__ = ["Frame", "render_view"]

_MAX_SLICE = 1e9
_FLOOR_SHADE = 10
_MANDATORY_FLOOR = 0


class Frame:
    """A ``width`` by ``height`` image of packed 32-bit colours."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("frame dimensions must be positive")
        self.width = width
        self.height = height
        self.pixels = array("I", [0]) * (width * height)

    def put(self, x: float, y: float, color: int) -> None:
        """Set a pixel; pixels outside the frame are ignored."""
        col = int(x)
        row = int(y)
        if 0 <= col < self.width and 0 <= row < self.height:
            self.pixels[row * self.width + col] = color & 0xFFFFFFFF

    def get(self, x: int, y: int) -> int:
        """Read a pixel; raises IndexError outside the frame."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside the frame")
        return self.pixels[y * self.width + x]


def _draw_column(
    frame: Frame,
    column: int,
    hit: RayHit,
    offset: float,
    textures: Sequence[Texture],
    ceiling: int,
    bonus: bool,
) -> None:
    texture = textures[wall_texture_index(hit)]
    scale = textures[DOOR_CLOSED_TEXTURE] if hit.door_texture is not None else texture
    height = frame.height
    length = min(projected_height(hit.distance, offset), _MAX_SLICE)
    start = height // 2 - length / 2
    step = scale.height / length
    tex_col = texture.column_for(hit.texture_offset)

    for row in range(min(max(math.ceil(start), 0), height)):
        frame.put(column, row, ceiling)

    top = int(start)
    pos = start
    j = 0.0
    if pos < 0:
        j = step * -pos
        pos = 0.0
    while pos < height and pos <= length + top:
        frame.put(column, pos, texture.pixel(tex_col, int(j)))
        pos += 1
        j += step

    if bonus:
        j = step * length
        while pos < height:
            frame.put(column, pos, texture.pixel(tex_col, int(j)) + _FLOOR_SHADE)
            pos += 1
            j -= step
    else:
        while pos < height:
            frame.put(column, pos, _MANDATORY_FLOOR)
            pos += 1


def render_view(
    frame: Frame,
    scene: Scene,
    player: Player,
    textures: Sequence[Texture],
    door_open: bool,
    bonus: bool,
) -> None:
    """Draw one column per ray across a sixty-degree field of view.

    The plain view fills the floor with black; the ``bonus`` view casts
    rays more finely and paints the floor with a shaded reflection of the
    wall texture.
    """
    ray_step = RAD / (VIEW * (2 if bonus else 1.5))
    ceiling = scene.ceiling_color
    offset = -math.pi / 6
    column = 0
    while offset < math.pi / 6:
        hit = cast_ray(
            scene.grid,
            scene.width,
            scene.last_line,
            player.x,
            player.y,
            normalize_angle(player.angle + offset),
            door_open,
        )
        _draw_column(frame, column, hit, offset, textures, ceiling, bonus)
        column += 1
        offset += ray_step