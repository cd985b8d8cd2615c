"""Box-shadow and text-shadow parsing with a depth-aware list splitter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .dimensions import KEYWORDS, ParsedDimension, parse_dimension

DEFAULT_SHADOW_COLOR = "rgba(0, 0, 0, 0.5)"
_ZERO = ParsedDimension(value=0.0, unit="px", original="0px")


@dataclass(frozen=True)
class ParsedBoxShadow:
    horizontal: ParsedDimension
    vertical: ParsedDimension
    blur: ParsedDimension
    spread: ParsedDimension
    color: str
    inset: bool = False
    original: str = field(default="", compare=False)


@dataclass(frozen=True)
class ParsedTextShadow:
    horizontal: ParsedDimension
    vertical: ParsedDimension
    blur: ParsedDimension
    color: str
    original: str = field(default="", compare=False)


def split_top_level(value: str, separator: str = ",") -> List[str]:
    """Split on ``separator`` only where it is not nested inside parentheses.

    ``separator=" "`` splits on any whitespace run at depth zero.
    """
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    for char in value:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        is_separator = char.isspace() if separator == " " else char == separator
        if is_separator and depth == 0:
            part = "".join(current).strip()
            if part:
                parts.append(part)
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return parts


def _partition(tokens: List[str]) -> tuple[List[ParsedDimension], List[str]]:
    lengths: List[ParsedDimension] = []
    others: List[str] = []
    for token in tokens:
        dimension = parse_dimension(token)
        if dimension is not None and dimension.unit not in KEYWORDS:
            lengths.append(dimension)
        else:
            others.append(token)
    return lengths, others


def parse_box_shadow(value: Optional[str]) -> Optional[ParsedBoxShadow]:
    """Parse one shadow of the form ``[inset] h v [blur] [spread] [color]``."""
    if value is None:
        return None
    text = value.strip()
    if not text or text.lower() == "none":
        return None

    tokens = split_top_level(text, " ")
    inset = any(token.lower() == "inset" for token in tokens)
    tokens = [token for token in tokens if token.lower() != "inset"]
    lengths, others = _partition(tokens)
    if not 2 <= len(lengths) <= 4 or len(others) > 1:
        return None

    return ParsedBoxShadow(
        horizontal=lengths[0],
        vertical=lengths[1],
        blur=lengths[2] if len(lengths) > 2 else _ZERO,
        spread=lengths[3] if len(lengths) > 3 else _ZERO,
        color=others[0] if others else DEFAULT_SHADOW_COLOR,
        inset=inset,
        original=text,
    )


def parse_box_shadows(value: Optional[str]) -> List[ParsedBoxShadow]:
    """Parse a comma-separated shadow list, skipping entries that do not parse."""
    if not value or value.strip().lower() == "none":
        return []
    shadows: List[ParsedBoxShadow] = []
    for part in split_top_level(value):
        parsed = parse_box_shadow(part)
        if parsed is not None:
            shadows.append(parsed)
    return shadows


def parse_text_shadow(value: Optional[str]) -> Optional[ParsedTextShadow]:
    """Parse one text shadow ``h v [blur] [color]``; the colour may lead or trail."""
    if value is None:
        return None
    text = value.strip()
    if not text or text.lower() == "none":
        return None

    lengths, others = _partition(split_top_level(text, " "))
    if not 2 <= len(lengths) <= 3 or len(others) > 1:
        return None

    return ParsedTextShadow(
        horizontal=lengths[0],
        vertical=lengths[1],
        blur=lengths[2] if len(lengths) > 2 else _ZERO,
        color=others[0] if others else DEFAULT_SHADOW_COLOR,
        original=text,
    )


def parse_text_shadows(value: Optional[str]) -> List[ParsedTextShadow]:
    if not value or value.strip().lower() == "none":
        return []
    shadows: List[ParsedTextShadow] = []
    for part in split_top_level(value):
        parsed = parse_text_shadow(part)
        if parsed is not None:
            shadows.append(parsed)
    return shadows


__all__ = [
    "DEFAULT_SHADOW_COLOR",
    "ParsedBoxShadow",
    "ParsedTextShadow",
    "parse_box_shadow",
    "parse_box_shadows",
    "parse_text_shadow",
    "parse_text_shadows",
    "split_top_level",
]
