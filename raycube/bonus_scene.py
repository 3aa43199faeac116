"""Scene loading for the extended game, whose maps may also hold doors."""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike

from .colors import parse_rgb
from .constants import DOOR, FLOOR, WALL
from .errors import MapError
from .scene import (
    TEXTURE_KEYS,
    Scene,
    check_extension,
    find_player,
    is_map_line,
    is_space,
    longest_line,
    matches_key,
    pad_map,
    read_lines,
    value_after_key,
)

__all__ = [
    "check_bonus_walls",
    "check_doors",
    "door_is_valid",
    "load_bonus_scene",
    "parse_bonus_header",
]

_MAP_CHARS = frozenset("10NSEWP")
_WALL_ROW_CHARS = frozenset("1 \n")
_DUPLICATE_TEXTURE = {
    "NO": "error_NO",
    "WE": "error_we",
    "SO": "error_so",
    "EA": "error_ea",
}

Color = tuple[int, int, int]


def _cell(grid: Sequence[str], row: int, col: int) -> str:
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return ""


def door_is_valid(grid: Sequence[str], x: int, y: int) -> bool:
    """True when the door at column ``x``, row ``y`` sits between two walls.

    A door must have walls on exactly one opposite pair of sides, open cells
    on the other pair, and no door next to it.
    """
    right = _cell(grid, y, x + 1)
    left = _cell(grid, y, x - 1)
    up = _cell(grid, y - 1, x)
    down = _cell(grid, y + 1, x)
    if DOOR in (right, left, up, down):
        return False
    if right == WALL and left == WALL and up != WALL and down != WALL:
        return True
    if right != WALL and left != WALL and up == WALL and down == WALL:
        return True
    return False


def _parse_color(line: str, message: str) -> Color:
    try:
        return parse_rgb(value_after_key(line))
    except MapError as exc:
        if exc.message == "color":
            raise MapError(message) from exc
        raise


def parse_bonus_header(
    lines: Sequence[str],
) -> tuple[dict[str, str | None], Color | None, Color | None, int]:
    """Parse colour and texture lines up to the first map line.

    Colour lines are recognised before texture lines. Returns the texture
    paths by key, the ceiling and floor colours and the index of the first
    map line.
    """
    paths: dict[str, str | None] = dict.fromkeys(TEXTURE_KEYS)
    ceiling: Color | None = None
    floor: Color | None = None
    seen_ceiling = seen_floor = False
    start = len(lines)
    for index, line in enumerate(lines):
        if matches_key(line, "C"):
            if seen_ceiling:
                raise MapError("ceiling_color")
            seen_ceiling = True
            ceiling = _parse_color(line, "ceiling_color1")
            continue
        if matches_key(line, "F"):
            if seen_floor:
                raise MapError("floor_color")
            seen_floor = True
            floor = _parse_color(line, "floor_color")
            continue
        key = next((k for k in TEXTURE_KEYS if matches_key(line, k)), None)
        if key is not None:
            if paths[key] is not None:
                raise MapError(_DUPLICATE_TEXTURE[key])
            paths[key] = value_after_key(line)
        elif is_map_line(line):
            start = index
            break
    return paths, ceiling, floor, start


def _is_wall_row(row: str) -> bool:
    return all(char in _WALL_ROW_CHARS for char in row)


def _has_only_map_chars(row: str) -> bool:
    return all(is_space(char) or char in _MAP_CHARS for char in row)


def _has_side_walls(row: str) -> bool:
    def closed(char: str) -> bool:
        return is_space(char) or char == WALL

    return closed(row[0]) and closed(row[-1]) and _has_only_map_chars(row)


def check_bonus_walls(grid: Sequence[str]) -> int:
    """Check characters and outer walls of a map with doors; return the last map row."""
    if not grid:
        raise MapError("empty_map")
    if not _is_wall_row(grid[0]):
        raise MapError("wall_line_1")
    last_line = 0
    for index, row in enumerate(grid):
        if not is_map_line(row):
            continue
        if not _has_only_map_chars(row):
            raise MapError("invalid_caracter")
        last_line = index
        if not _has_side_walls(row):
            raise MapError("wall_collone")
    if not _is_wall_row(grid[last_line]):
        raise MapError("wall_last_line")
    return last_line


def check_doors(grid: Sequence[str]) -> None:
    """Require every door away from the first row and column to be well placed."""
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char == DOOR and x and y and not door_is_valid(grid, x, y):
                raise MapError("error_in_door_stat")


def _check_enclosed(grid: Sequence[str], last_line: int) -> None:
    for row in range(1, min(last_line, len(grid))):
        for col, char in enumerate(grid[row]):
            if col == 0 or char != FLOOR:
                continue
            neighbours = (
                _cell(grid, row + 1, col),
                _cell(grid, row - 1, col),
                _cell(grid, row, col + 1),
                _cell(grid, row, col - 1),
            )
            if not all(cell in _MAP_CHARS for cell in neighbours):
                raise MapError("invalide maps")


def _rstrip_space(line: str) -> str:
    end = len(line)
    while end and is_space(line[end - 1]):
        end -= 1
    return line[:end]


def load_bonus_scene(path: str | PathLike[str]) -> Scene:
    """Read and validate a scene file whose map may contain doors."""
    lines = read_lines(path)
    paths, ceiling, floor, start = parse_bonus_header(lines)
    if any(value is None for value in paths.values()):
        raise MapError("path_error")
    map_lines = lines[start:]
    grid = pad_map(lines)[start:]
    width = longest_line(_rstrip_space(line) for line in map_lines)
    check_extension(str(path))
    last_line = check_bonus_walls(grid)
    check_doors(grid)
    col, row, char = find_player(grid)
    _check_enclosed(grid, last_line)
    textures = {key: value for key, value in paths.items() if value is not None}
    return Scene(
        textures=textures,
        ceiling=ceiling,
        floor=floor,
        grid=grid,
        width=width,
        last_line=last_line,
        spawn=(col, row),
        spawn_char=char,
    )