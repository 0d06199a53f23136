"""Hex to HSL conversion for the theme generator."""
from __future__ import annotations

import logging
import math
import string
from typing import NamedTuple

logger = logging.getLogger(__name__)

_HEX_DIGITS = set(string.hexdigits)


class ColorError(ValueError):
    """Raised for malformed hex colors when strict parsing is requested."""


class HSL(NamedTuple):
    hue: int  # degrees, 0-359
    saturation: float  # percent, one decimal
    lightness: float  # percent, one decimal


def _channels(hex_color: str) -> tuple[int, int, int] | None:
    """Return the 0-255 RGB channels, or None when the string is unusable."""
    if not hex_color.startswith("#"):
        return None
    digits = hex_color[1:]
    if len(digits) == 8:  # #RRGGBBAA, alpha is dropped
        digits = digits[:6]
    if not digits or not set(digits) <= _HEX_DIGITS:
        return None
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        return None
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def hex_to_hsl(hex_color: str, *, strict: bool = False) -> HSL:
    """Convert ``#RGB``, ``#RRGGBB`` or ``#RRGGBBAA`` to an HSL triple.

    A malformed string falls back to black unless ``strict`` is set, in which
    case ``ColorError`` is raised.
    """
    channels = _channels(hex_color)
    if channels is None:
        if strict:
            raise ColorError(f"Malformed hex color: {hex_color!r}")
        logger.warning("Malformed hex color %r, falling back to black", hex_color)
        channels = (0, 0, 0)

    r, g, b = (c / 255 for c in channels)
    cmin = min(r, g, b)
    cmax = max(r, g, b)
    delta = cmax - cmin

    if delta == 0:
        hue = 0.0
    elif cmax == r:
        hue = math.fmod((g - b) / delta, 6)
    elif cmax == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4

    degrees = _round_half_up(hue * 60)
    if degrees < 0:
        degrees += 360
    degrees %= 360

    lightness = (cmax + cmin) / 2
    saturation = 0.0 if delta == 0 else delta / (1 - abs(2 * lightness - 1))

    return HSL(degrees, round(saturation * 100, 1), round(lightness * 100, 1))


def _number(value: float) -> str:
    value = round(value, 1)
    if value == int(value):
        return str(int(value))
    return f"{value:g}"


def hsl_css(hue: float, saturation: float, lightness: float) -> str:
    """Format an ``hsl()`` CSS color, e.g. ``hsl(204, 62.4%, 40%)``."""
    return f"hsl({_number(hue)}, {_number(saturation)}%, {_number(lightness)}%)"
