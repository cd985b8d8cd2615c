"""Pure parsers for CSS-like style values."""

from .colors import is_transparent, normalize_color_to_hex
from .dimensions import (
    BoxModel,
    DimensionSet,
    ParsedDimension,
    convert_dimension_to_unit,
    dimension_set_setting,
    extract_box_model,
    format_dimension,
    format_dimension_set,
    parse_dimension,
    parse_pixels,
    parse_shorthand_dimension,
    size_setting,
)
from .shadows import (
    ParsedBoxShadow,
    ParsedTextShadow,
    parse_box_shadow,
    parse_box_shadows,
    parse_text_shadow,
    parse_text_shadows,
    split_top_level,
)

__all__ = [
    "BoxModel",
    "DimensionSet",
    "ParsedBoxShadow",
    "ParsedDimension",
    "ParsedTextShadow",
    "convert_dimension_to_unit",
    "dimension_set_setting",
    "extract_box_model",
    "format_dimension",
    "format_dimension_set",
    "is_transparent",
    "normalize_color_to_hex",
    "parse_box_shadow",
    "parse_box_shadows",
    "parse_dimension",
    "parse_pixels",
    "parse_shorthand_dimension",
    "parse_text_shadow",
    "parse_text_shadows",
    "size_setting",
    "split_top_level",
]
