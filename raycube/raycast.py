"""Grid ray casting: wall intersections, texture choice and wall height."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from .constants import DOOR, HALF_FOV_TAN_ARG, TILE_SIZE, WALL, WALL_EPSILON, WIDTH

__all__ = [
    "DOOR_CLOSED_TEXTURE",
    "DOOR_OPEN_TEXTURE",
    "Quadrant",
    "RayHit",
    "cast_ray",
    "normalize_angle",
    "projected_height",
    "quadrant",
    "wall_texture_index",
]

FULL_TURN = 2 * math.pi
DOOR_CLOSED_TEXTURE = 4
DOOR_OPEN_TEXTURE = 5


class Quadrant(IntEnum):
    """Direction class of a ray, in screen coordinates where y grows downwards."""

    UP_RIGHT = 1
    UP_LEFT = 2
    DOWN_LEFT = 3
    DOWN_RIGHT = 4

    @property
    def faces_up(self) -> bool:
        return self in (Quadrant.UP_RIGHT, Quadrant.UP_LEFT)

    @property
    def faces_left(self) -> bool:
        return self in (Quadrant.UP_LEFT, Quadrant.DOWN_LEFT)


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall or left the map."""

    x: float
    y: float
    distance: float
    vertical: bool
    quadrant: Quadrant
    door_texture: int | None = None

    @property
    def texture_offset(self) -> float:
        """Position of the hit along the wall face, in world units."""
        return self.y if self.vertical else self.x


def normalize_angle(angle: float) -> float:
    """Bring an angle at most one turn outside ``[0, 2π]`` back into it."""
    if angle < 0:
        angle += FULL_TURN
    if angle > FULL_TURN:
        angle -= FULL_TURN
    return angle


def quadrant(angle: float) -> Quadrant:
    """The quadrant of an angle in ``[0, 2π]``.

    An angle exactly on an axis belongs to the quadrant that starts there.
    """
    if not 0 <= angle <= FULL_TURN:
        raise ValueError(f"angle out of range: {angle!r}")
    if angle >= FULL_TURN:
        angle = 0.0
    if angle >= 3 * math.pi / 2:
        return Quadrant.UP_RIGHT
    if angle >= math.pi:
        return Quadrant.UP_LEFT
    if angle >= math.pi / 2:
        return Quadrant.DOWN_LEFT
    return Quadrant.DOWN_RIGHT


def _divide(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if not numerator:
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _cell(grid: Sequence[str], row: int, col: int) -> str:
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return ""


def _inside(px: float, py: float, width: int, last_line: int) -> bool:
    return 0 <= py / TILE_SIZE < last_line and 0 <= px / TILE_SIZE < width


def _blocking(grid: Sequence[str], px: float, py: float) -> str | None:
    char = _cell(grid, int(py / TILE_SIZE), int(px / TILE_SIZE))
    return char if char in (WALL, DOOR) else None


def cast_ray(
    grid: Sequence[str],
    width: int,
    last_line: int,
    x: float,
    y: float,
    angle: float,
    door_open: bool,
) -> RayHit:
    """Cast a ray from ``(x, y)`` and return the nearer of its two grid hits.

    Both the crossings of horizontal grid lines and of vertical grid lines are
    followed until a wall or door cell is met or the ray leaves the map.
    """
    angle = normalize_angle(angle)
    quad = quadrant(angle)
    tangent = math.tan(angle)
    base_y = math.floor(y / TILE_SIZE) * TILE_SIZE
    base_x = math.floor(x / TILE_SIZE) * TILE_SIZE

    ay = base_y - WALL_EPSILON if quad.faces_up else base_y + TILE_SIZE
    ax = x + _divide(ay - y, tangent)
    door_horizontal = False
    while _inside(ax, ay, width, last_line):
        hit = _blocking(grid, ax, ay)
        if hit is not None:
            door_horizontal = hit == DOOR
            break
        if quad.faces_up:
            ax += _divide(TILE_SIZE, -tangent)
            ay -= TILE_SIZE
        else:
            ax += _divide(TILE_SIZE, tangent)
            ay += TILE_SIZE

    tx = base_x - WALL_EPSILON if quad.faces_left else base_x + TILE_SIZE
    ty = y - (x - tx) * tangent
    door_vertical = False
    while _inside(tx, ty, width, last_line):
        hit = _blocking(grid, tx, ty)
        if hit is not None:
            door_vertical = hit == DOOR
            break
        tx += -TILE_SIZE if quad.faces_left else TILE_SIZE
        ty = y - (x - tx) * tangent

    horizontal_distance = math.hypot(x - ax, y - ay)
    vertical_distance = math.hypot(x - tx, y - ty)
    door_texture = DOOR_OPEN_TEXTURE if door_open else DOOR_CLOSED_TEXTURE
    if horizontal_distance > vertical_distance:
        return RayHit(
            x=abs(tx),
            y=abs(ty),
            distance=vertical_distance,
            vertical=True,
            quadrant=quad,
            door_texture=door_texture if door_vertical else None,
        )
    return RayHit(
        x=abs(ax),
        y=abs(ay),
        distance=horizontal_distance,
        vertical=False,
        quadrant=quad,
        door_texture=door_texture if door_horizontal else None,
    )


def wall_texture_index(hit: RayHit) -> int:
    """Index of the texture to draw for a hit: doors first, then by wall face."""
    if hit.door_texture is not None:
        return hit.door_texture
    if not hit.vertical:
        return 1 if hit.quadrant.faces_up else 0
    if hit.quadrant in (Quadrant.UP_RIGHT, Quadrant.DOWN_RIGHT):
        return 3
    return 2


def projected_height(distance: float, offset: float) -> float:
    """On-screen height of a wall slice ``distance`` away, seen ``offset`` radians off centre."""
    corrected = distance * math.cos(offset)
    if not corrected:
        return math.inf
    return (TILE_SIZE / corrected) * ((WIDTH // 2) / math.tan(HALF_FOV_TAN_ARG))