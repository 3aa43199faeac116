"""Wall and sprite textures held as rows of packed RGB pixels."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from .colors import create_trgb
from .constants import TILE_SIZE

__all__ = ["TRANSPARENT", "Texture"]

#: Packed value of a fully transparent pixel.
TRANSPARENT = 0xFF000000

_QUOTED = re.compile(r'"((?:[^"\\]|\\.)*)"')
_CONTEXTS = frozenset({"c", "m", "g", "g4", "s"})
_NAMED_COLORS = {
    "black": 0x000000,
    "white": 0xFFFFFF,
    "red": 0xFF0000,
    "green": 0x00FF00,
    "blue": 0x0000FF,
}


def _parse_color(spec: str) -> int:
    text = spec.strip()
    lowered = text.lower()
    if lowered == "none":
        return TRANSPARENT
    if lowered in _NAMED_COLORS:
        return _NAMED_COLORS[lowered]
    if text.startswith("#"):
        digits = text[1:]
        if not digits or len(digits) % 3:
            raise ValueError(f"bad colour: {spec!r}")
        size = len(digits) // 3
        try:
            channels = [int(digits[i:i + size], 16) for i in range(0, len(digits), size)]
        except ValueError:
            raise ValueError(f"bad colour: {spec!r}") from None
        if size == 1:
            channels = [value * 17 for value in channels]
        elif size > 2:
            channels = [value >> (4 * (size - 2)) for value in channels]
        red, green, blue = channels
        return create_trgb(0, red, green, blue)
    raise ValueError(f"unknown colour: {spec!r}")


def _color_spec(tokens: Sequence[str]) -> str:
    specs: dict[str, list[str]] = {}
    current: list[str] | None = None
    for token in tokens:
        if token in _CONTEXTS and token not in specs:
            current = specs.setdefault(token, [])
        elif current is not None:
            current.append(token)
    if not specs:
        raise ValueError("colour entry without a value")
    words = specs.get("c") or next(iter(specs.values()))
    if not words:
        raise ValueError("colour entry without a value")
    return " ".join(words)


def _parse_xpm(text: str) -> tuple[int, int, list[int]]:
    strings = _QUOTED.findall(text)
    if not strings:
        raise ValueError("not an XPM image")
    header = strings[0].split()
    if len(header) < 4:
        raise ValueError("bad XPM header")
    width, height, ncolors, cpp = (int(value) for value in header[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise ValueError("bad XPM header")
    color_lines = strings[1:1 + ncolors]
    rows = strings[1 + ncolors:1 + ncolors + height]
    if len(color_lines) < ncolors or len(rows) < height:
        raise ValueError("truncated XPM image")
    palette = {
        line[:cpp]: _parse_color(_color_spec(line[cpp:].split()))
        for line in color_lines
    }
    pixels: list[int] = []
    for row in rows:
        if len(row) < width * cpp:
            raise ValueError("short XPM pixel row")
        for start in range(0, width * cpp, cpp):
            key = row[start:start + cpp]
            try:
                pixels.append(palette[key])
            except KeyError:
                raise ValueError(f"undefined XPM pixel {key!r}") from None
    return width, height, pixels


def _load_with_pygame(path: Path) -> tuple[int, int, list[int]]:
    import pygame

    try:
        surface = pygame.image.load(str(path))
    except pygame.error as exc:
        raise ValueError(f"cannot load texture {path}") from exc
    width, height = surface.get_size()
    pixels = []
    for y in range(height):
        for x in range(width):
            color = surface.get_at((x, y))
            pixels.append(
                TRANSPARENT if color.a == 0 else create_trgb(0, color.r, color.g, color.b)
            )
    return width, height, pixels


@dataclass(frozen=True)
class Texture:
    """An image stored row by row as packed ``0xAARRGGBB`` integers."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels", tuple(self.pixels))
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture dimensions must be positive")
        if len(self.pixels) != self.width * self.height:
            raise ValueError("pixel count does not match the texture size")

    @classmethod
    def load(cls, path: str | PathLike[str]) -> Texture:
        """Load an XPM image, or any image format pygame can read."""
        file = Path(path)
        if file.suffix.lower() == ".xpm":
            width, height, pixels = _parse_xpm(file.read_text(encoding="utf-8"))
        else:
            width, height, pixels = _load_with_pygame(file)
        return cls(width, height, tuple(pixels))

    @classmethod
    def solid(cls, width: int, height: int, color: int) -> Texture:
        """A texture of one colour."""
        return cls(width, height, (color,) * (max(width, 0) * max(height, 0)))

    def pixel(self, x: int, y: int) -> int:
        """The pixel at column ``x`` and row ``y``.

        Pixels are addressed as one run, so a column past the end of a row
        reads from the next row. Offsets outside the image, and the very
        first pixel, read as 0.
        """
        linear = int(y) * self.width + int(x)
        if 0 < linear < len(self.pixels):
            return self.pixels[linear]
        return 0

    def column_for(self, offset: float) -> int:
        """The texture column for a hit ``offset`` world units along a wall."""
        scaled = self.width * offset / TILE_SIZE
        if not math.isfinite(scaled):
            return 0
        return int(scaled) % self.width