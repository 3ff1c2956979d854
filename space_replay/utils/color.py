"""Deterministic player colors."""

import colorsys
import hashlib
from functools import lru_cache
from typing import Tuple

FALLBACK_COLOR = "#808080"


@lru_cache(maxsize=256)
def player_color(name: str) -> str:
    """Map a player name to a ``#RRGGBB`` color the way the game server does.

    The hue comes from the first 8 bytes of the SHA-256 of the trimmed name
    (mod 360); saturation and lightness are fixed at 0.75 and 0.5. Empty
    names get gray.
    """
    trimmed = name.strip()
    if not trimmed:
        return FALLBACK_COLOR
    digest = hashlib.sha256(trimmed.encode("utf-8")).digest()
    hue = int.from_bytes(digest[:8], "big") % 360
    r, g, b = colorsys.hls_to_rgb(hue / 360.0, 0.5, 0.75)
    return f"#{int(r * 255):02X}{int(g * 255):02X}{int(b * 255):02X}"


def hex_to_rgb(color: str, default: str = "#ffffff") -> Tuple[int, int, int]:
    """Parse ``#RRGGBB``; malformed strings fall back to ``default``."""
    value = color.lstrip("#")
    if len(value) != 6:
        value = default.lstrip("#")
    try:
        return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
    except ValueError:
        return hex_to_rgb(default)
