from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import Tuple, Union

from errors import InvalidColorError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int

    def __post_init__(self):
        for name, v in (("red", self.red), ("green", self.green), ("blue", self.blue)):
            if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 255:
                raise InvalidColorError(f"{name} component must be an int in [0, 255], got {v!r}")

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.red, self.green, self.blue

    def as_unit(self) -> Tuple[float, float, float]:
        return self.red / 255.0, self.green / 255.0, self.blue / 255.0


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
GRID_GRAY = Color(100, 100, 100)
TEXT_GRAY = Color(200, 200, 200)

# fallback per series kind when the hex string does not parse
SERIES_FALLBACK = {"line": RED, "bar": GREEN}

ColorResult = Union[Color, InvalidColorError]


def parse_hex(hex_color: str) -> ColorResult:
    """
    "#rrggbb" / "rrggbb" -> Color, otherwise the InvalidColorError (returned, not raised).
    """
    if not isinstance(hex_color, str):
        return InvalidColorError(f"hex color must be a string, got {type(hex_color).__name__}")
    digits = hex_color.lstrip("#")
    if len(digits) != 6:
        return InvalidColorError(f"expected 6 hex digits, got {hex_color!r}")
    if any(c not in string.hexdigits for c in digits):
        return InvalidColorError(f"not a hex color: {hex_color!r}")
    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    return Color(r, g, b)


def resolve_series_color(hex_color: str, kind: str) -> Color:
    result = parse_hex(hex_color)
    if isinstance(result, InvalidColorError):
        fallback = SERIES_FALLBACK[kind]
        log.debug("%s; using %s fallback %s", result, kind, fallback.as_tuple())
        return fallback
    return result


def require_hex(hex_color: str) -> Color:
    """Like parse_hex but raises, for places without a fallback color."""
    result = parse_hex(hex_color)
    if isinstance(result, InvalidColorError):
        raise result
    return result
