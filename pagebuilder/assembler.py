"""Section/column assembly around mapped widgets."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .context import ExportContext
from .enrichment import enrich_widget
from .logging import get_logger
from .mappers import map_component
from .mappers.base import extract_url, image_setting
from .models import LayoutNode, RecognizedComponent, WidgetNode
from .parsers.colors import is_transparent
from .parsers.dimensions import dimension_set_setting, parse_shorthand_dimension

_LOGGER = get_logger("assembler")

DEFAULT_CONTENT_WIDTH = 1140


def section_settings(content_width: int = DEFAULT_CONTENT_WIDTH, columns: int = 1) -> Dict[str, Any]:
    return {
        "layout": "boxed",
        "content_width": {"size": content_width, "unit": "px"},
        "gap": "default",
        "height": "default",
        "structure": f"{max(columns, 1)}0",
    }


def section_style_settings(component: Optional[RecognizedComponent]) -> Dict[str, Any]:
    """Carry a section's background and padding into builder settings."""
    if component is None:
        return {}
    styles = component.styles
    settings: Dict[str, Any] = {}
    background = styles.background_color
    image = image_setting(extract_url(styles.background_image))
    if (background and not is_transparent(background)) or image is not None:
        settings["background_background"] = "classic"
    if background and not is_transparent(background):
        settings["background_color"] = background
    if image is not None:
        settings["background_image"] = image
    padding = dimension_set_setting(parse_shorthand_dimension(styles.padding))
    if padding is not None:
        settings["padding"] = padding
    return settings


def build_widget(
    component: RecognizedComponent,
    context: ExportContext,
    *,
    enrich: bool = True,
    custom_css: bool = True,
) -> WidgetNode:
    widget = map_component(component, context)
    if enrich:
        enrich_widget(widget, component, context, custom_css=custom_css)
    return widget


def column(context: ExportContext, size: int, widgets: Sequence[WidgetNode]) -> WidgetNode:
    return WidgetNode(
        el_type="column",
        id=context.next_id(),
        settings={"_column_size": size, "_inline_size": None},
        elements=list(widgets),
    )


def assemble_document(
    widgets: Sequence[WidgetNode],
    context: ExportContext,
    *,
    content_width: int = DEFAULT_CONTENT_WIDTH,
) -> List[WidgetNode]:
    """Wrap a flat widget list in one boxed section with a full-width column."""
    section = WidgetNode(
        el_type="section",
        id=context.next_id(),
        settings=section_settings(content_width),
        elements=[column(context, 100, widgets)],
    )
    return [section]


def assemble_hierarchy(
    nodes: Sequence[LayoutNode],
    context: ExportContext,
    *,
    content_width: int = DEFAULT_CONTENT_WIDTH,
    enrich: bool = True,
    custom_css: bool = True,
) -> List[WidgetNode]:
    """Preserve multi-column layouts, splitting width evenly between sibling columns."""
    sections: List[WidgetNode] = []
    loose: List[LayoutNode] = []

    def _flush_loose() -> None:
        if loose:
            sections.append(
                _build_section(LayoutNode(kind="section", children=list(loose)), context, content_width, enrich, custom_css)
            )
            loose.clear()

    for node in nodes:
        if node.kind == "section":
            _flush_loose()
            sections.append(_build_section(node, context, content_width, enrich, custom_css))
        else:
            loose.append(node)
    _flush_loose()
    _LOGGER.debug("Assembled %d sections from layout", len(sections))
    return sections


def _build_section(
    node: LayoutNode,
    context: ExportContext,
    content_width: int,
    enrich: bool,
    custom_css: bool,
) -> WidgetNode:
    column_nodes = [child for child in node.children if child.kind == "column"]
    stray = [child for child in node.children if child.kind != "column"]
    if stray or not column_nodes:
        # Loose widgets, or an empty section, get one implicit column.
        column_nodes.append(LayoutNode(kind="column", children=stray))

    section_id = context.next_id()
    size = 100 // len(column_nodes)
    columns = []
    for column_node in column_nodes:
        widgets = [
            build_widget(component, context, enrich=enrich, custom_css=custom_css)
            for component in _widget_components(column_node)
        ]
        columns.append(column(context, size, widgets))

    settings = section_settings(content_width, len(columns))
    settings.update(section_style_settings(node.component))
    return WidgetNode(el_type="section", id=section_id, settings=settings, elements=columns)


def _widget_components(node: LayoutNode) -> List[RecognizedComponent]:
    components: List[RecognizedComponent] = []
    for child in node.children:
        if child.kind == "widget" and child.component is not None:
            components.append(child.component)
        else:
            components.extend(_widget_components(child))
    return components


__all__ = [
    "DEFAULT_CONTENT_WIDTH",
    "assemble_document",
    "assemble_hierarchy",
    "build_widget",
    "section_settings",
    "section_style_settings",
]
