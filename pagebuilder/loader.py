"""Load recognised-component JSON into the typed model."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .enrichment.models import ColorPalette, TypographySystem
from .logging import get_logger
from .models import (
    PROP_FIELDS,
    STYLE_FIELDS,
    AnimationInfo,
    BehavioralAnalysis,
    ComponentProps,
    ComponentType,
    InteractiveStates,
    LayoutNode,
    PseudoElements,
    RecognizedComponent,
    ResponsiveStyles,
    StyleSnapshot,
)

_LOGGER = get_logger("loader")

_CAMEL = re.compile(r"(?<=[a-z0-9])([A-Z])")


class InputError(ValueError):
    """Raised when component input cannot be interpreted."""


@dataclass
class PageInput:
    """One page worth of input: its components plus optional design system and layout."""

    components: List[RecognizedComponent] = field(default_factory=list)
    title: Optional[str] = None
    palette: Optional[ColorPalette] = None
    typography: Optional[TypographySystem] = None
    layout: Optional[List[LayoutNode]] = None
    page_css: Optional[str] = None


def snake_case(name: str) -> str:
    """``backgroundColor`` / ``background-color`` -> ``background_color``."""
    return _CAMEL.sub(r"_\1", name).replace("-", "_").lower()


def parse_styles(data: Any, *, where: str = "styles") -> Optional[StyleSnapshot]:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise InputError(f"{where} must be an object")
    values: Dict[str, str] = {}
    for raw_key, raw_value in data.items():
        key = snake_case(str(raw_key))
        if key not in STYLE_FIELDS:
            _LOGGER.debug("Ignoring unsupported style property '%s' in %s", raw_key, where)
            continue
        if raw_value is None:
            continue
        values[key] = str(raw_value)
    return StyleSnapshot(**values)


def _parse_props(data: Mapping[str, Any], attributes: Mapping[str, str]) -> ComponentProps:
    nested = data.get("props")
    source: Dict[str, Any] = {}
    if isinstance(nested, Mapping):
        source.update({snake_case(str(key)): value for key, value in nested.items()})
    for key, value in data.items():
        snake = snake_case(str(key))
        if snake in PROP_FIELDS and snake not in source:
            source[snake] = value
    for name in ("href", "target", "src", "alt"):
        if name not in source and name in attributes:
            source[name] = attributes[name]
    values = {key: str(value) for key, value in source.items() if key in PROP_FIELDS and value is not None}
    return ComponentProps(**values)


def _parse_classes(data: Mapping[str, Any]) -> List[str]:
    classes = data.get("classes")
    if isinstance(classes, list):
        return [str(item) for item in classes if str(item).strip()]
    class_name = data.get("className") or data.get("class_name") or ""
    if not isinstance(class_name, str):
        raise InputError("className must be a string")
    return class_name.split()


def _parse_states(data: Any) -> InteractiveStates:
    if data is None:
        return InteractiveStates()
    if not isinstance(data, Mapping):
        raise InputError("interactiveStates must be an object")
    return InteractiveStates(
        normal=parse_styles(data.get("normal"), where="interactiveStates.normal"),
        hover=parse_styles(data.get("hover"), where="interactiveStates.hover"),
        focus=parse_styles(data.get("focus"), where="interactiveStates.focus"),
    )


def _parse_pseudo(data: Any) -> PseudoElements:
    if data is None:
        return PseudoElements()
    if not isinstance(data, Mapping):
        raise InputError("pseudoElements must be an object")
    return PseudoElements(
        before=parse_styles(data.get("before"), where="pseudoElements.before"),
        after=parse_styles(data.get("after"), where="pseudoElements.after"),
    )


def _parse_responsive(data: Any) -> ResponsiveStyles:
    if data is None:
        return ResponsiveStyles()
    if not isinstance(data, Mapping):
        raise InputError("responsiveStyles must be an object")
    return ResponsiveStyles(
        **{
            name: parse_styles(data.get(name), where=f"responsiveStyles.{name}")
            for name in ("mobile", "tablet", "laptop", "desktop")
        }
    )


def _parse_behavior(data: Any) -> BehavioralAnalysis:
    if data is None:
        return BehavioralAnalysis()
    if not isinstance(data, Mapping):
        raise InputError("behavior must be an object")
    animations = []
    for item in data.get("animations") or []:
        if not isinstance(item, Mapping) or not item.get("name"):
            raise InputError("behavior.animations entries require a name")
        animations.append(
            AnimationInfo(
                name=str(item["name"]),
                duration=_optional_str(item.get("duration")),
                delay=_optional_str(item.get("delay")),
                timing_function=_optional_str(item.get("timingFunction") or item.get("timing_function")),
                iteration_count=_optional_str(item.get("iterationCount") or item.get("iteration_count")),
            )
        )
    transitions = tuple(str(item) for item in data.get("transitions") or [])
    return BehavioralAnalysis(animations=tuple(animations), transitions=transitions)


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def parse_component(data: Any, depth: int = 0) -> RecognizedComponent:
    """Build a component (and its children) from a camelCase JSON object."""
    if not isinstance(data, Mapping):
        raise InputError("Each component must be an object")
    attributes_raw = data.get("attributes") or {}
    if not isinstance(attributes_raw, Mapping):
        raise InputError("attributes must be an object")
    attributes = {str(key): str(value) for key, value in attributes_raw.items()}

    raw_type = data.get("componentType", data.get("type"))
    component_type = ComponentType.parse(raw_type)
    if raw_type is not None and component_type is ComponentType.UNKNOWN:
        _LOGGER.debug("Unrecognised component type '%s'; treating as unknown", raw_type)

    children_raw = data.get("children") or []
    if not isinstance(children_raw, list):
        raise InputError("children must be a list")
    component_depth = data.get("depth", depth)
    if isinstance(component_depth, bool) or not isinstance(component_depth, int):
        raise InputError("depth must be an integer")

    return RecognizedComponent(
        component_type=component_type,
        tag=str(data.get("tagName") or data.get("tag") or "div").lower(),
        element_id=_optional_str(data.get("id") or data.get("elementId")),
        classes=_parse_classes(data),
        attributes=attributes,
        props=_parse_props(data, attributes),
        styles=parse_styles(data.get("styles") or {}) or StyleSnapshot(),
        states=_parse_states(data.get("interactiveStates")),
        pseudo=_parse_pseudo(data.get("pseudoElements")),
        responsive=_parse_responsive(data.get("responsiveStyles")),
        behavior=_parse_behavior(data.get("behavior")),
        depth=component_depth,
        html=_optional_str(data.get("html") or data.get("outerHTML")),
        children=[parse_component(child, component_depth + 1) for child in children_raw],
    )


def parse_components(data: Any) -> List[RecognizedComponent]:
    if not isinstance(data, list):
        raise InputError("components must be a list")
    return [parse_component(item) for item in data]


def parse_palette(data: Any) -> Optional[ColorPalette]:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise InputError("colorPalette must be an object")
    semantic = data.get("semantic") if isinstance(data.get("semantic"), Mapping) else data
    return ColorPalette(
        primary=_str_list(data.get("primary")),
        secondary=_str_list(data.get("secondary")),
        accent=_str_list(data.get("accent")),
        neutral=_str_list(data.get("neutral")),
        success=_optional_str(semantic.get("success")),
        error=_optional_str(semantic.get("error")),
        warning=_optional_str(semantic.get("warning")),
        info=_optional_str(semantic.get("info")),
    )


def parse_typography(data: Any) -> Optional[TypographySystem]:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise InputError("typography must be an object")
    scale = data.get("typeScale") or data.get("type_scale") or {}
    if not isinstance(scale, Mapping):
        raise InputError("typography.typeScale must be an object")
    return TypographySystem(
        font_families=_str_list(data.get("fontFamilies") or data.get("font_families")),
        type_scale={str(key): str(value) for key, value in scale.items()},
    )


def _str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise InputError("Expected a list of strings")
    return [str(item) for item in value]


def parse_layout(data: Any) -> List[LayoutNode]:
    if not isinstance(data, list):
        raise InputError("layout must be a list")
    return [_parse_layout_node(item) for item in data]


def _parse_layout_node(data: Any) -> LayoutNode:
    if not isinstance(data, Mapping):
        raise InputError("Layout nodes must be objects")
    component = data.get("component")
    try:
        return LayoutNode(
            kind=str(data.get("kind", "widget")),
            component=parse_component(component) if component is not None else None,
            children=[_parse_layout_node(child) for child in data.get("children") or []],
        )
    except ValueError as exc:
        if isinstance(exc, InputError):
            raise
        raise InputError(str(exc)) from exc


def parse_page(data: Any) -> PageInput:
    """Accept either a bare component list or a page object."""
    if isinstance(data, list):
        return PageInput(components=parse_components(data))
    if not isinstance(data, Mapping):
        raise InputError("Input must be a component list or a page object")
    layout = data.get("layout")
    return PageInput(
        components=parse_components(data.get("components") or []),
        title=_optional_str(data.get("title")),
        palette=parse_palette(data.get("colorPalette") or data.get("palette")),
        typography=parse_typography(data.get("typography")),
        layout=parse_layout(layout) if layout is not None else None,
        page_css=_optional_str(data.get("pageCss") or data.get("page_css")),
    )


def parse_pages(data: Any) -> Dict[str, List[RecognizedComponent]]:
    """``{"pages": {id: [...]}}`` or ``{id: [...]}`` -> ``{id: components}``."""
    if isinstance(data, Mapping) and isinstance(data.get("pages"), (Mapping, list)):
        data = data["pages"]
    if isinstance(data, list):
        pages: Dict[str, List[RecognizedComponent]] = {}
        for index, item in enumerate(data):
            if not isinstance(item, Mapping):
                raise InputError("Page entries must be objects")
            page_id = str(item.get("id") or f"page-{index + 1}")
            pages[page_id] = parse_components(item.get("components") or [])
        return pages
    if not isinstance(data, Mapping):
        raise InputError("pages must be an object keyed by page id")
    return {str(page_id): parse_components(components) for page_id, components in data.items()}


def read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputError(f"Cannot read {path}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputError(f"{path.name} is not valid JSON: {exc}") from exc


def load_page(path: Path) -> PageInput:
    return parse_page(read_json(path))


def load_pages(paths: Sequence[Path]) -> Dict[str, List[RecognizedComponent]]:
    """Load one page per file (keyed by file stem) or a single multi-page file."""
    if len(paths) == 1:
        data = read_json(paths[0])
        if isinstance(data, Mapping) and "pages" in data:
            return parse_pages(data)
        return {paths[0].stem: parse_page(data).components}
    return {path.stem: load_page(path).components for path in paths}


__all__ = [
    "InputError",
    "PageInput",
    "load_page",
    "load_pages",
    "parse_component",
    "parse_components",
    "parse_layout",
    "parse_page",
    "parse_pages",
    "parse_palette",
    "parse_styles",
    "parse_typography",
    "snake_case",
]
