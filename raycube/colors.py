"""Colour packing and parsing of ``R,G,B`` colour specifications."""

from __future__ import annotations

from .errors import MapError

_INT_MAX = 2**31 - 1
_INT_MIN = -(2**31)


def _is_space(char: str) -> bool:
    return char == " " or "\t" <= char <= "\f"


def create_trgb(t: int, r: int, g: int, b: int) -> int:
    """Pack transparency and RGB channels into one integer."""
    return t << 24 | r << 16 | g << 8 | b


def parse_component(text: str) -> int:
    """Parse one colour component, rejecting stray characters and overflow."""
    pos = 0
    length = len(text)
    while pos < length and text[pos] == " ":
        pos += 1
    sign = 1
    if pos < length and text[pos] in "+-":
        if pos + 1 >= length or not text[pos + 1].isdigit():
            raise MapError("color_error1")
        if text[pos] == "-":
            sign = -1
        pos += 1
    result = 0
    while pos < length and "0" <= text[pos] <= "9":
        result = result * 10 + int(text[pos])
        if not _INT_MIN <= result * sign <= _INT_MAX:
            raise MapError("color_error2")
        pos += 1
    if pos < length and not _is_space(text[pos]):
        raise MapError("color_error3")
    return result * sign


def parse_rgb(text: str | None) -> tuple[int, int, int]:
    """Parse ``R,G,B`` into three components, each at most 255."""
    if not text or text.count(",") != 2 or not ("0" <= text[0] <= "9"):
        raise MapError("color")
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise MapError("color")
    values = []
    for part in parts:
        value = parse_component(part)
        if value > 255:
            raise MapError("color")
        values.append(value)
    return values[0], values[1], values[2]