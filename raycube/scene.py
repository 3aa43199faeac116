"""Loading and validation of ``.cub`` scene description files."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from os import PathLike

from .colors import create_trgb, parse_rgb
from .constants import DOOR, FLOOR, PLAYER_CHARS, TILE_SIZE, WALL, spawn_angle
from .errors import MapError

TEXTURE_KEYS = ("NO", "WE", "SO", "EA")

_MAP_CHARS = frozenset("10NSEW")
_WALL_ROW_CHARS = frozenset("1 \n")
_DUPLICATE_TEXTURE = {
    "NO": "error_NO",
    "WE": "error_we",
    "SO": "error_so",
    "EA": "error_ea",
}

__all__ = [
    "DOOR",
    "Scene",
    "check_enclosed",
    "check_extension",
    "check_walls",
    "find_player",
    "is_map_line",
    "is_space",
    "load_scene",
    "longest_line",
    "matches_key",
    "pad_map",
    "parse_header",
    "read_lines",
    "value_after_key",
]


@dataclass
class Scene:
    """A validated scene: texture paths, colours and the padded map grid."""

    textures: dict[str, str]
    ceiling: tuple[int, int, int] | None
    floor: tuple[int, int, int] | None
    grid: list[str]
    width: int
    last_line: int
    spawn: tuple[int, int]
    spawn_char: str

    @property
    def ceiling_color(self) -> int:
        """Packed ceiling colour, 0 when the scene declares none."""
        return create_trgb(0, *self.ceiling) if self.ceiling else 0

    @property
    def floor_color(self) -> int:
        """Packed floor colour, 0 when the scene declares none."""
        return create_trgb(0, *self.floor) if self.floor else 0

    @property
    def player_position(self) -> tuple[float, float]:
        """World coordinates of the centre of the spawn tile."""
        col, row = self.spawn
        return (
            float(col * TILE_SIZE + TILE_SIZE // 2),
            float(row * TILE_SIZE + TILE_SIZE // 2),
        )

    @property
    def player_angle(self) -> float:
        """Initial view angle given by the spawn character."""
        return spawn_angle(self.spawn_char)

    @property
    def height(self) -> int:
        """Number of rows that take part in rendering."""
        return self.last_line + 1


def is_space(char: str) -> bool:
    """True for a space, tab, newline, vertical tab or form feed."""
    return char == " " or "\t" <= char <= "\f"


def _rstrip_space(line: str) -> str:
    end = len(line)
    while end and is_space(line[end - 1]):
        end -= 1
    return line[:end]


def _lstrip_space(line: str) -> str:
    start = 0
    while start < len(line) and is_space(line[start]):
        start += 1
    return line[start:]


def is_map_line(line: str) -> bool:
    """True when the line holds anything other than whitespace."""
    return any(not is_space(char) for char in line)


def matches_key(line: str, key: str) -> bool:
    """True when the line, after leading whitespace, starts with ``key`` and a separator.

    The end of the line counts as a separator.
    """
    rest = _lstrip_space(line)
    if not rest.startswith(key):
        return False
    after = rest[len(key):]
    return not after or is_space(after[0])


def value_after_key(line: str) -> str | None:
    """The text after the first two characters and any whitespace, or None if empty."""
    value = _lstrip_space(line[2:])
    return value or None


def read_lines(path: str | PathLike[str]) -> list[str]:
    """Read a file into lines without their line terminators."""
    with open(path, encoding="utf-8", errors="replace", newline="") as handle:
        text = handle.read()
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def longest_line(lines: Iterable[str]) -> int:
    """Length of the longest line, 0 for no lines."""
    return max((len(line) for line in lines), default=0)


def _parse_color(line: str, message: str) -> tuple[int, int, int]:
    try:
        return parse_rgb(value_after_key(line))
    except MapError as exc:
        if exc.message == "color":
            raise MapError(message) from exc
        raise


def parse_header(
    lines: Sequence[str],
) -> tuple[dict[str, str | None], tuple[int, int, int] | None, tuple[int, int, int] | None, int]:
    """Parse texture and colour lines up to the first map line.

    Returns the texture paths by key, the ceiling and floor colours and the
    index of the first map line.
    """
    paths: dict[str, str | None] = dict.fromkeys(TEXTURE_KEYS)
    ceiling: tuple[int, int, int] | None = None
    floor: tuple[int, int, int] | None = None
    seen_ceiling = seen_floor = False
    start = len(lines)
    for index, line in enumerate(lines):
        key = next((k for k in TEXTURE_KEYS if matches_key(line, k)), None)
        if key is not None:
            if paths[key] is not None:
                raise MapError(_DUPLICATE_TEXTURE[key])
            paths[key] = value_after_key(line)
        elif matches_key(line, "C"):
            if seen_ceiling:
                raise MapError("ceiling_color")
            seen_ceiling = True
            ceiling = _parse_color(line, "ceiling_color1")
        elif matches_key(line, "F"):
            if seen_floor:
                raise MapError("floor_color")
            seen_floor = True
            floor = _parse_color(line, "floor_color")
        elif is_map_line(line):
            start = index
            break
    return paths, ceiling, floor, start


def pad_map(lines: Sequence[str]) -> list[str]:
    """Pad every line with spaces to the length of the longest one."""
    width = longest_line(lines)
    return [line.ljust(width) for line in lines]


def check_extension(name: str) -> None:
    """Require that the name, from its first dot onwards, is exactly ``.cub``."""
    dot = name.find(".")
    if dot < 0 or name[dot:] != ".cub":
        raise MapError("extension")


def _is_wall_row(row: str) -> bool:
    return all(char in _WALL_ROW_CHARS for char in row)


def _has_only_map_chars(row: str) -> bool:
    return all(is_space(char) or char in _MAP_CHARS for char in row)


def _has_side_walls(row: str) -> bool:
    def closed(char: str) -> bool:
        return is_space(char) or char == WALL

    return closed(row[0]) and closed(row[-1]) and _has_only_map_chars(row)


def check_walls(grid: Sequence[str]) -> int:
    """Check the characters and outer walls of the map; return the last map row."""
    if not grid:
        raise MapError("empty_map")
    last_line = 0
    for index, row in enumerate(grid):
        if not is_map_line(row):
            continue
        if not _has_only_map_chars(row):
            raise MapError("invalid_caracter")
        last_line = index
        if not _is_wall_row(grid[0]):
            raise MapError("wall_line_1")
        if not _has_side_walls(row):
            raise MapError("wall_collone")
    if not _is_wall_row(grid[last_line]):
        raise MapError("wall_last_line")
    return last_line


def find_player(grid: Sequence[str]) -> tuple[int, int, str]:
    """Locate the single spawn character; return its column, row and character."""
    spawns = [
        (col, row, char)
        for row, line in enumerate(grid)
        for col, char in enumerate(line)
        if char in PLAYER_CHARS
    ]
    if len(spawns) != 1:
        raise MapError("player")
    return spawns[0]


def _cell(grid: Sequence[str], row: int, col: int) -> str:
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return ""


def check_enclosed(grid: Sequence[str], last_line: int) -> None:
    """Require every floor cell inside the map to touch only map cells."""
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


def load_scene(path: str | PathLike[str]) -> Scene:
    """Read and validate a scene file."""
    lines = read_lines(path)
    paths, ceiling, floor, start = parse_header(lines)
    if any(value is None for value in paths.values()):
        raise MapError("path_error")
    map_lines = lines[start:]
    grid = pad_map(lines)[start:]
    width = longest_line(_rstrip_space(line) for line in map_lines)
    check_extension(str(path))
    last_line = check_walls(grid)
    col, row, char = find_player(grid)
    check_enclosed(grid, last_line)
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


# Keep the documented value of a full turn close to the geometry helpers.
FULL_TURN = 2 * math.pi