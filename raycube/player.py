"""Player position, turning and collision-checked movement."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .constants import COLLISION_MARGIN, DOOR, SPEED, TILE_SIZE, WALL, Key
from .raycast import normalize_angle

__all__ = ["Player", "key_vector", "toggle_door"]


def _tile(value: float) -> int:
    return int(value / TILE_SIZE)


def _cell(grid: Sequence[str], row: int, col: int) -> str:
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return WALL


@dataclass
class Player:
    """Position in world units and view angle in radians."""

    x: float
    y: float
    angle: float

    def rotate(self, delta: float) -> None:
        """Turn by ``delta`` radians, keeping the angle within one turn."""
        self.angle = normalize_angle(self.angle + delta)

    def step(self, grid: Sequence[str], dx: float, dy: float) -> None:
        """Move by ``(dx, dy)``, each axis separately stopped by walls."""
        new_x = self.x + dx
        new_y = self.y + dy
        row = _tile(self.y)
        if (
            _cell(grid, row, _tile(new_x + COLLISION_MARGIN)) != WALL
            and _cell(grid, row, _tile(new_x - COLLISION_MARGIN)) != WALL
        ):
            self.x = new_x
        col = _tile(self.x)
        if (
            _cell(grid, _tile(new_y + COLLISION_MARGIN), col) != WALL
            and _cell(grid, _tile(new_y - COLLISION_MARGIN), col) != WALL
        ):
            self.y = new_y

    def step_with_doors(
        self, grid: Sequence[str], dx: float, dy: float, door_open: bool
    ) -> None:
        """Move by ``(dx, dy)`` where closed doors block and open doors are passed through.

        Stepping onto an open door carries the player one tile further in the
        main direction of travel, or back where it came from if that tile is
        a wall or another door.
        """

        def blocked(char: str) -> bool:
            return char == WALL or (char == DOOR and not door_open)

        new_x = self.x + dx
        new_y = self.y + dy
        row = _tile(self.y)
        if not blocked(_cell(grid, row, _tile(new_x + COLLISION_MARGIN))) and not blocked(
            _cell(grid, row, _tile(new_x - COLLISION_MARGIN))
        ):
            self.x = new_x
        col = _tile(self.x)
        if not blocked(_cell(grid, _tile(new_y + COLLISION_MARGIN), col)) and not blocked(
            _cell(grid, _tile(new_y - COLLISION_MARGIN), col)
        ):
            self.y = new_y

        if abs(dx) > abs(dy):
            target_x = self.x / TILE_SIZE + (-1 if dx < 0 else 1)
            target_y = self.y / TILE_SIZE
        else:
            target_y = self.y / TILE_SIZE + (-1 if dy < 0 else 1)
            target_x = self.x / TILE_SIZE

        if _cell(grid, _tile(self.y), _tile(self.x)) == DOOR:
            if _cell(grid, int(target_y), int(target_x)) not in (WALL, DOOR):
                self.x = target_x * TILE_SIZE
                self.y = target_y * TILE_SIZE
            else:
                self.x = new_x - dx
                self.y = new_y - dy


def key_vector(key: int, angle: float) -> tuple[float, float] | None:
    """The movement for a movement key at the given view angle, or None."""
    if key == Key.FORWARD:
        direction = angle
        sign = 1.0
    elif key == Key.BACKWARD:
        direction = angle
        sign = -1.0
    elif key == Key.STRAFE_RIGHT:
        direction = angle + math.pi / 2
        sign = 1.0
    elif key == Key.STRAFE_LEFT:
        direction = angle - math.pi / 2
        sign = 1.0
    else:
        return None
    return sign * math.cos(direction) * SPEED, sign * math.sin(direction) * SPEED


def toggle_door(door_open: bool, grid: Sequence[str], x: float, y: float) -> bool:
    """The door state after the door key is pressed by a player at ``(x, y)``.

    Doors cannot be closed while the player stands in a doorway.
    """
    col = int(x) // TILE_SIZE
    row = int(y) // TILE_SIZE
    if door_open and _cell(grid, row, col) == DOOR:
        return True
    return not door_open