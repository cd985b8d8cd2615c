"""CSS dimension parsing, shorthand expansion, unit conversion and formatting."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from ..models import StyleSnapshot

UNITS: Tuple[str, ...] = (
    "px",
    "em",
    "rem",
    "%",
    "vh",
    "vw",
    "vmin",
    "vmax",
    "ch",
    "ex",
    "cm",
    "mm",
    "in",
    "pt",
    "pc",
)
KEYWORDS: Tuple[str, ...] = ("auto", "inherit", "initial")
RESPONSIVE_UNITS = frozenset({"%", "vh", "vw", "vmin", "vmax", "em", "rem"})

# Longer alternatives first so "vmin" never matches as "vm" + garbage.
_UNIT_ALTERNATION = "|".join(sorted((re.escape(unit) for unit in UNITS), key=len, reverse=True))
_DIMENSION_PATTERN = re.compile(
    rf"^(-?(?:\d+\.?\d*|\.\d+))({_UNIT_ALTERNATION})?$", re.IGNORECASE
)

_PX_PER_UNIT: Dict[str, float] = {
    "px": 1.0,
    "pt": 1.333,
    "cm": 37.8,
    "mm": 3.78,
    "in": 96.0,
    "pc": 16.0,
}

SIDES: Tuple[str, ...] = ("top", "right", "bottom", "left")

RawValue = Union[str, int, float, None]


@dataclass(frozen=True)
class ParsedDimension:
    """A numeric CSS length (or keyword) with its source text."""

    value: float
    unit: str
    original: str = field(default="", compare=False)
    is_responsive: bool = False


@dataclass(frozen=True)
class DimensionSet:
    """Up to four sides expanded from shorthand or longhand properties."""

    top: Optional[ParsedDimension] = None
    right: Optional[ParsedDimension] = None
    bottom: Optional[ParsedDimension] = None
    left: Optional[ParsedDimension] = None

    def sides(self) -> Iterator[Tuple[str, Optional[ParsedDimension]]]:
        for side in SIDES:
            yield side, getattr(self, side)

    def is_empty(self) -> bool:
        return all(value is None for _, value in self.sides())


@dataclass(frozen=True)
class BoxModel:
    margin: Optional[DimensionSet] = None
    padding: Optional[DimensionSet] = None
    border: Optional[DimensionSet] = None
    width: Optional[ParsedDimension] = None
    height: Optional[ParsedDimension] = None
    min_width: Optional[ParsedDimension] = None
    max_width: Optional[ParsedDimension] = None
    min_height: Optional[ParsedDimension] = None
    max_height: Optional[ParsedDimension] = None


def parse_dimension(value: RawValue) -> Optional[ParsedDimension]:
    """Parse a single CSS length; return None when the value does not match the grammar."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None

    lowered = text.lower()
    if lowered in KEYWORDS:
        return ParsedDimension(value=0.0, unit=lowered, original=text, is_responsive=False)

    match = _DIMENSION_PATTERN.match(text)
    if match is None:
        return None
    number = float(match.group(1))
    unit = (match.group(2) or "px").lower()
    return ParsedDimension(
        value=number,
        unit=unit,
        original=text,
        is_responsive=unit in RESPONSIVE_UNITS,
    )


def parse_shorthand_dimension(value: RawValue) -> Optional[DimensionSet]:
    """Expand 1-4 value CSS shorthand; any unparsable token invalidates the result."""
    if value is None:
        return None
    tokens = str(value).split()
    if not tokens or len(tokens) > 4:
        return None

    parsed = [parse_dimension(token) for token in tokens]
    if any(item is None for item in parsed):
        return None

    if len(parsed) == 1:
        top = right = bottom = left = parsed[0]
    elif len(parsed) == 2:
        top = bottom = parsed[0]
        right = left = parsed[1]
    elif len(parsed) == 3:
        top, right, bottom = parsed
        left = right
    else:
        top, right, bottom, left = parsed
    return DimensionSet(top=top, right=right, bottom=bottom, left=left)


def _longhand_set(
    top: RawValue, right: RawValue, bottom: RawValue, left: RawValue
) -> Optional[DimensionSet]:
    result = DimensionSet(
        top=parse_dimension(top),
        right=parse_dimension(right),
        bottom=parse_dimension(bottom),
        left=parse_dimension(left),
    )
    return None if result.is_empty() else result


def extract_box_model(styles: StyleSnapshot) -> BoxModel:
    """Build a box model, preferring shorthand properties over their longhands."""
    margin = parse_shorthand_dimension(styles.margin) if styles.margin else None
    if margin is None:
        margin = _longhand_set(
            styles.margin_top, styles.margin_right, styles.margin_bottom, styles.margin_left
        )

    padding = parse_shorthand_dimension(styles.padding) if styles.padding else None
    if padding is None:
        padding = _longhand_set(
            styles.padding_top, styles.padding_right, styles.padding_bottom, styles.padding_left
        )

    border = parse_shorthand_dimension(styles.border_width) if styles.border_width else None
    if border is None:
        border = _longhand_set(
            styles.border_top_width,
            styles.border_right_width,
            styles.border_bottom_width,
            styles.border_left_width,
        )

    return BoxModel(
        margin=margin,
        padding=padding,
        border=border,
        width=parse_dimension(styles.width),
        height=parse_dimension(styles.height),
        min_width=parse_dimension(styles.min_width),
        max_width=parse_dimension(styles.max_width),
        min_height=parse_dimension(styles.min_height),
        max_height=parse_dimension(styles.max_height),
    )


def _px_ratio(unit: str, base_size: float) -> Optional[float]:
    if unit in ("em", "rem"):
        return base_size
    return _PX_PER_UNIT.get(unit)


def convert_dimension_to_unit(
    dimension: ParsedDimension, target_unit: str, base_size: float = 16.0
) -> ParsedDimension:
    """Convert through pixels; units without a fixed ratio are returned unchanged."""
    target = target_unit.lower()
    if dimension.unit == target:
        return dimension

    source_ratio = _px_ratio(dimension.unit, base_size)
    target_ratio = _px_ratio(target, base_size)
    if source_ratio is None or target_ratio is None:
        return dimension

    converted = round(dimension.value * source_ratio / target_ratio, 2)
    original = f"{format_number(converted)}{target}"
    return ParsedDimension(
        value=converted,
        unit=target,
        original=original,
        is_responsive=target in RESPONSIVE_UNITS,
    )


def format_number(value: float) -> str:
    """Shortest exact decimal text for ``value``, never in exponent notation."""
    if float(value).is_integer():
        return str(int(value))
    text = format(Decimal(repr(float(value))), "f")
    return text.rstrip("0").rstrip(".") if "." in text else text


def format_dimension(dimension: Optional[ParsedDimension]) -> str:
    if dimension is None:
        return ""
    if dimension.unit in KEYWORDS:
        return dimension.unit
    return f"{format_number(dimension.value)}{dimension.unit}"


def format_dimension_set(dimensions: Optional[DimensionSet]) -> str:
    """Collapse a dimension set back to the shortest equivalent shorthand."""
    if dimensions is None:
        return ""
    top = format_dimension(dimensions.top) or "0"
    right = format_dimension(dimensions.right) or "0"
    bottom = format_dimension(dimensions.bottom) or "0"
    left = format_dimension(dimensions.left) or "0"

    if top == right == bottom == left:
        return top
    if top == bottom and right == left:
        return f"{top} {right}"
    if right == left:
        return f"{top} {right} {bottom}"
    return f"{top} {right} {bottom} {left}"


def parse_pixels(value: RawValue, base_size: float = 16.0) -> float:
    """Return the pixel size of ``value``, 0 when it cannot be resolved."""
    dimension = parse_dimension(value)
    if dimension is None:
        return 0.0
    ratio = _px_ratio(dimension.unit, base_size)
    if ratio is None:
        return dimension.value
    return round(dimension.value * ratio, 2)


def size_setting(value: RawValue) -> Optional[Dict[str, Any]]:
    """Render a dimension as a builder ``{size, unit}`` setting."""
    dimension = parse_dimension(value)
    if dimension is None or dimension.unit in KEYWORDS:
        return None
    return {"size": _number(dimension.value), "unit": dimension.unit}


def dimension_set_setting(
    dimensions: Optional[DimensionSet], *, default_unit: str = "px"
) -> Optional[Dict[str, Any]]:
    """Render a dimension set as a builder box setting with linked-sides flag."""
    if dimensions is None or dimensions.is_empty():
        return None
    unit = default_unit
    values: Dict[str, Any] = {}
    for side, dimension in dimensions.sides():
        if dimension is None or dimension.unit in KEYWORDS:
            values[side] = 0
            continue
        values[side] = _number(dimension.value)
        unit = dimension.unit
    values["unit"] = unit
    values["isLinked"] = len({values[side] for side in SIDES}) == 1
    return values


def _number(value: float) -> Union[int, float]:
    return int(value) if float(value).is_integer() else value


__all__ = [
    "BoxModel",
    "DimensionSet",
    "KEYWORDS",
    "ParsedDimension",
    "RESPONSIVE_UNITS",
    "SIDES",
    "UNITS",
    "convert_dimension_to_unit",
    "dimension_set_setting",
    "extract_box_model",
    "format_dimension",
    "format_dimension_set",
    "format_number",
    "parse_dimension",
    "parse_pixels",
    "parse_shorthand_dimension",
    "size_setting",
]
