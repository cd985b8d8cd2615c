"""Tests for entrance animations and motion effects."""

from __future__ import annotations

from pagebuilder.enrichment import (
    classify_entrance,
    extract_entrance_animation,
    extract_motion_effects,
    parse_duration,
)
from pagebuilder.models import AnimationInfo
from tests._fixtures.component_builder import make_component


def test_classify_entrance_matches_known_families() -> None:
    assert classify_entrance("fade-in-up") == "fadeIn"
    assert classify_entrance("animate__slideInLeft") == "slideInLeft"
    assert classify_entrance("spin") is None
    assert classify_entrance(None) is None


def test_parse_duration_units() -> None:
    assert parse_duration("0.3s") == 300
    assert parse_duration("450ms") == 450
    assert parse_duration("fast") == 0
    assert parse_duration(None) == 0


def test_entrance_prefers_behavioral_animations() -> None:
    component = make_component(
        style={"animation_name": "zoomIn"},
        animations=[AnimationInfo(name="bounceIn", duration="1s", delay="200ms")],
    )
    entrance = extract_entrance_animation(component)
    assert entrance.name == "bounceIn"
    assert entrance.duration_ms == 1000
    assert entrance.delay_ms == 200


def test_entrance_falls_back_to_style_animation() -> None:
    component = make_component(style={"animation_name": "zoomIn", "animation_duration": "0.5s"})
    entrance = extract_entrance_animation(component)
    assert entrance.name == "zoomIn"
    assert entrance.duration_ms == 500
    assert extract_entrance_animation(make_component(style={"animation_name": "none"})) is None


def test_motion_effects_detect_parallax_sticky_and_scroll() -> None:
    component = make_component(
        classes=["aos-init"],
        style={"background_attachment": "fixed", "position": "sticky", "top": "0px"},
    )
    motion = extract_motion_effects(component)

    assert motion.parallax is not None
    assert motion.sticky is not None
    assert motion.sticky.edge == "top"
    assert motion.scroll.viewport_end == 80


def test_motion_effects_absent() -> None:
    assert extract_motion_effects(make_component(style={"position": "relative"})) is None


def test_data_aos_attribute_counts_as_scroll_animation() -> None:
    motion = extract_motion_effects(make_component(attributes={"data-aos": "fade-up"}))
    assert motion is not None
    assert motion.scroll is not None


def test_sticky_offset_comes_from_the_pinned_edge() -> None:
    top = extract_motion_effects(make_component(style={"position": "sticky", "top": "20px"}))
    assert top.sticky.offset == 20

    bottom = extract_motion_effects(make_component(style={"position": "fixed", "bottom": "1.5rem"}))
    assert bottom.sticky.edge == "bottom"
    assert bottom.sticky.offset == 24

    assert extract_motion_effects(make_component(style={"position": "sticky"})).sticky.offset == 0
