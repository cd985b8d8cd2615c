"""Colour normalisation helpers."""

from __future__ import annotations

import re
from typing import Optional

_HEX_PATTERN = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)
_RGB_PATTERN = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*[, ]\s*(\d{1,3})\s*[, ]\s*(\d{1,3})\s*(?:[,/]\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)


def normalize_color_to_hex(value: Optional[str]) -> Optional[str]:
    """Return ``#rrggbb`` for hex and rgb()/rgba() input, else the lowercased value."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None

    hex_match = _HEX_PATTERN.match(text)
    if hex_match:
        digits = hex_match.group(1).lower()
        if len(digits) == 3:
            digits = "".join(char * 2 for char in digits)
        return f"#{digits[:6]}"

    rgb_match = _RGB_PATTERN.match(text)
    if rgb_match:
        channels = [min(int(channel), 255) for channel in rgb_match.groups()]
        return "#" + "".join(f"{channel:02x}" for channel in channels)

    return text.lower()


def is_transparent(value: Optional[str]) -> bool:
    if not value:
        return True
    text = value.replace(" ", "").lower()
    return text in {"transparent", "rgba(0,0,0,0)", "none"}


__all__ = ["is_transparent", "normalize_color_to_hex"]
