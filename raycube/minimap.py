"""Overhead minimap centred on the player, with a pulsing background."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .constants import DOOR, PLAYER_SIZE, SQUARE_SIZE, TILE_SIZE, WALL
from .render import Frame
from .scene import is_space

__all__ = ["MinimapPulse", "render_minimap"]

_MARGIN = 10
_PULSE_STEP = 0.3
_PULSE_RISE = 180
_PULSE_CYCLE = 360
_WALL_COLOR = 0x000000
_DOOR_COLOR = 0xFF0000
_FLOOR_COLOR = 0xFFFFFF
_PLAYER_COLOR = 0xEBD234


@dataclass
class MinimapPulse:
    """Background colour that ramps up, then fades back down, in a loop."""

    count: float = 0.0
    color: float = 0.0

    def advance(self) -> int:
        """Move one frame on and return the background colour to draw."""
        if self.count < _PULSE_RISE:
            self.color = int(self.count)
        else:
            if self.color:
                self.color -= _PULSE_STEP
            if self.count > _PULSE_CYCLE or self.color < 0:
                self.count = 0
        self.count += _PULSE_STEP
        return int(self.color)


def _cell(grid: Sequence[str], row: int, col: int) -> str:
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return " "


def _cell_color(char: str) -> int:
    if char == WALL or is_space(char):
        return _WALL_COLOR
    if char == DOOR:
        return _DOOR_COLOR
    return _FLOOR_COLOR


def render_minimap(
    frame: Frame,
    grid: Sequence[str],
    width: int,
    last_line: int,
    player_x: float,
    player_y: float,
    background: int,
) -> None:
    """Draw the map around the player in the top-left corner of ``frame``."""
    if width <= 0:
        raise ValueError("map width must be positive")
    for y in range(SQUARE_SIZE + 1):
        for x in range(SQUARE_SIZE + 1):
            frame.put(_MARGIN + x, _MARGIN + y, background)

    unit = SQUARE_SIZE // width
    if unit:
        origin_x = player_x / TILE_SIZE - SQUARE_SIZE / (2 * unit)
        origin_y = player_y / TILE_SIZE - SQUARE_SIZE / (2 * unit)
        rows = last_line + 1
        for y in range(SQUARE_SIZE):
            map_y = math.floor(origin_y + y / unit)
            if not 0 <= map_y < rows:
                continue
            for x in range(SQUARE_SIZE):
                map_x = math.floor(origin_x + x / unit)
                if 0 <= map_x < width:
                    frame.put(
                        _MARGIN + x, _MARGIN + y, _cell_color(_cell(grid, map_y, map_x))
                    )

    corner = _MARGIN + SQUARE_SIZE // 2 - PLAYER_SIZE // 2
    for y in range(PLAYER_SIZE):
        for x in range(PLAYER_SIZE):
            frame.put(corner + x, corner + y, _PLAYER_COLOR)