"""Helpers for constructing recognised components in tests."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from pagebuilder.models import (
    AnimationInfo,
    BehavioralAnalysis,
    ComponentProps,
    ComponentType,
    InteractiveStates,
    PseudoElements,
    RecognizedComponent,
    ResponsiveStyles,
    StyleSnapshot,
)


def styles(**values: str) -> StyleSnapshot:
    return StyleSnapshot(**values)


def make_component(
    component_type: ComponentType | str = ComponentType.UNKNOWN,
    *,
    tag: str = "div",
    text: Optional[str] = None,
    element_id: Optional[str] = None,
    classes: Iterable[str] = (),
    attributes: Optional[Mapping[str, str]] = None,
    style: Optional[Mapping[str, str]] = None,
    hover: Optional[Mapping[str, str]] = None,
    normal: Optional[Mapping[str, str]] = None,
    responsive: Optional[Mapping[str, Mapping[str, str]]] = None,
    animations: Iterable[AnimationInfo] = (),
    children: Optional[List[RecognizedComponent]] = None,
    depth: int = 0,
    html: Optional[str] = None,
    **props: Any,
) -> RecognizedComponent:
    """Build a component with keyword-friendly defaults."""
    prop_values: Dict[str, Any] = dict(props)
    if text is not None:
        prop_values.setdefault("text_content", text)
    return RecognizedComponent(
        component_type=ComponentType.parse(component_type),
        tag=tag,
        element_id=element_id,
        classes=list(classes),
        attributes=dict(attributes or {}),
        props=ComponentProps(**prop_values),
        styles=StyleSnapshot(**dict(style or {})),
        states=InteractiveStates(
            normal=StyleSnapshot(**dict(normal)) if normal is not None else None,
            hover=StyleSnapshot(**dict(hover)) if hover is not None else None,
        ),
        pseudo=PseudoElements(),
        responsive=ResponsiveStyles(
            **{name: StyleSnapshot(**dict(values)) for name, values in (responsive or {}).items()}
        ),
        behavior=BehavioralAnalysis(animations=tuple(animations)),
        depth=depth,
        html=html,
        children=list(children or []),
    )


__all__ = ["make_component", "styles"]
