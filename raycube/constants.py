"""Shared dimensions, key codes and spawn orientations."""

from __future__ import annotations

import math
from enum import IntEnum

TILE_SIZE = 60
WIDTH = 1000
HEIGHT = 500
SPEED = 5
MINIMAP_SIZE = 150
SQUARE_SIZE = 150
PLAYER_SIZE = 3
WEAPONS = 3
VECTOR = 50
RADIAN = 0.0174533

RAD = 30 * math.pi / 180
VIEW = WIDTH * 60 // 180

ROTATION_STEP = 0.1
MOUSE_ROTATION_STEP = 0.01
COLLISION_MARGIN = 5
WALL_EPSILON = 1e-10
HALF_FOV_TAN_ARG = 0.523599

PLAYER_CHARS = frozenset("NSEW")
WALL = "1"
FLOOR = "0"
DOOR = "P"


class Key(IntEnum):
    """Key codes the game reacts to."""

    STRAFE_LEFT = 97
    STRAFE_RIGHT = 100
    FORWARD = 119
    BACKWARD = 115
    TURN_LEFT = 65361
    TURN_RIGHT = 65363
    ESCAPE = 65307
    SWITCH_WEAPON = 32
    DOOR = 111
    FIRE = 112


_SPAWN_ANGLES = {
    "N": 3 * math.pi / 2,
    "W": math.pi,
    "S": math.pi / 2,
    "E": 0.0,
}


def spawn_angle(char: str) -> float:
    """Return the view angle, in radians, for a player spawn character."""
    try:
        return _SPAWN_ANGLES[char]
    except KeyError:
        raise ValueError(f"not a player spawn character: {char!r}") from None