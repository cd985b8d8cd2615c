"""Tests for CSS dimension parsing and conversion."""

from __future__ import annotations

import pytest

from pagebuilder.models import StyleSnapshot
from pagebuilder.parsers.dimensions import (
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


@pytest.mark.parametrize(
    "text", ["16px", "1.5rem", "50%", "-4px", "100vh", "0.25em", "0.12345px", "0.00001px"]
)
def test_parse_then_format_preserves_value(text: str) -> None:
    parsed = parse_dimension(text)
    assert parsed is not None
    assert format_dimension(parsed) == text
    assert parse_dimension(format_dimension(parsed)) == parsed


def test_converted_original_parses_back_to_the_same_dimension() -> None:
    converted = convert_dimension_to_unit(parse_dimension("1px"), "rem")
    assert converted.value == 0.06
    assert converted.original == "0.06rem"
    assert parse_dimension(converted.original) == converted


def test_unitless_numbers_default_to_pixels() -> None:
    parsed = parse_dimension("12")
    assert parsed == ParsedDimension(value=12.0, unit="px")
    assert parsed.is_responsive is False


def test_relative_units_are_flagged_responsive() -> None:
    assert parse_dimension("2rem").is_responsive is True
    assert parse_dimension("30vw").is_responsive is True


def test_keywords_parse_with_zero_value() -> None:
    parsed = parse_dimension("auto")
    assert parsed is not None
    assert parsed.unit == "auto"
    assert parsed.value == 0
    assert format_dimension(parsed) == "auto"


@pytest.mark.parametrize("text", ["", "   ", "abc", "12px 4px", "calc(100% - 10px)", None])
def test_invalid_dimensions_return_none(text: str | None) -> None:
    assert parse_dimension(text) is None


def test_shorthand_two_values_expand_vertical_horizontal() -> None:
    expanded = parse_shorthand_dimension("10px 20px")
    assert expanded is not None
    assert expanded.top.value == 10
    assert expanded.right.value == 20
    assert expanded.bottom.value == 10
    assert expanded.left.value == 20


def test_shorthand_three_values_mirror_right_to_left() -> None:
    expanded = parse_shorthand_dimension("1px 2px 3px")
    assert [dimension.value for _, dimension in expanded.sides()] == [1, 2, 3, 2]


def test_shorthand_rejects_bad_tokens_and_too_many_values() -> None:
    assert parse_shorthand_dimension("10px nope") is None
    assert parse_shorthand_dimension("1px 2px 3px 4px 5px") is None


def test_format_dimension_set_collapses_to_shortest_form() -> None:
    assert format_dimension_set(parse_shorthand_dimension("5px 5px 5px 5px")) == "5px"
    assert format_dimension_set(parse_shorthand_dimension("1px 2px 1px 2px")) == "1px 2px"
    assert format_dimension_set(parse_shorthand_dimension("1px 2px 3px 4px")) == "1px 2px 3px 4px"


def test_pixels_and_rem_convert_both_ways() -> None:
    rem = convert_dimension_to_unit(parse_dimension("16px"), "rem")
    assert rem.value == 1
    assert rem.unit == "rem"
    px = convert_dimension_to_unit(parse_dimension("1rem"), "px")
    assert px.value == 16
    assert px.unit == "px"


def test_conversion_honours_base_font_size() -> None:
    converted = convert_dimension_to_unit(parse_dimension("2em"), "px", base_size=10)
    assert converted.value == 20


def test_conversion_without_fixed_ratio_is_identity() -> None:
    percent = parse_dimension("50%")
    assert convert_dimension_to_unit(percent, "px") is percent


def test_parse_pixels_handles_relative_units() -> None:
    assert parse_pixels("1.5rem") == 24
    assert parse_pixels("12pt") == pytest.approx(16.0, abs=0.01)
    assert parse_pixels("nonsense") == 0


def test_box_model_prefers_shorthand_over_longhand() -> None:
    snapshot = StyleSnapshot(padding="8px", padding_top="40px", margin_left="3px", width="50%")
    box = extract_box_model(snapshot)
    assert box.padding.top.value == 8
    assert box.margin.left.value == 3
    assert box.margin.top is None
    assert box.width.unit == "%"


def test_size_setting_shape() -> None:
    assert size_setting("18px") == {"size": 18, "unit": "px"}
    assert size_setting("1.25em") == {"size": 1.25, "unit": "em"}
    assert size_setting("auto") is None


def test_dimension_set_setting_reports_linked_sides() -> None:
    assert dimension_set_setting(parse_shorthand_dimension("4px")) == {
        "top": 4,
        "right": 4,
        "bottom": 4,
        "left": 4,
        "unit": "px",
        "isLinked": True,
    }
    assert dimension_set_setting(None) is None
