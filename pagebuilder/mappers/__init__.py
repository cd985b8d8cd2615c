"""Component-to-widget mapping with one builder per component type."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

from ..logging import get_logger
from ..models import ComponentType, RecognizedComponent, WidgetNode
from .base import WidgetBuilder
from .collections import (
    map_image_carousel,
    map_image_gallery,
    map_posts_grid,
    map_price_list,
    map_price_table,
    map_tabs,
    map_toggle,
    map_video_playlist,
)
from .content import (
    map_alert,
    map_call_to_action,
    map_counter,
    map_flip_box,
    map_icon_box,
    map_progress,
    map_social_icons,
    map_star_rating,
    map_testimonial,
)
from .generic import PASSTHROUGH_WIDGET, map_generic, map_passthrough

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..context import ExportContext

_LOGGER = get_logger("mappers")

BUILDERS: Dict[ComponentType, WidgetBuilder] = {
    ComponentType.BUTTON: map_generic,
    ComponentType.HEADING: map_generic,
    ComponentType.TEXT: map_generic,
    ComponentType.PARAGRAPH: map_generic,
    ComponentType.IMAGE: map_generic,
    ComponentType.ICON: map_generic,
    ComponentType.SPACER: map_generic,
    ComponentType.DIVIDER: map_generic,
    ComponentType.ICON_BOX: map_icon_box,
    ComponentType.STAR_RATING: map_star_rating,
    ComponentType.SOCIAL_ICONS: map_social_icons,
    ComponentType.PROGRESS_BAR: map_progress,
    ComponentType.COUNTER: map_counter,
    ComponentType.TESTIMONIAL: map_testimonial,
    ComponentType.IMAGE_CAROUSEL: map_image_carousel,
    ComponentType.POSTS_GRID: map_posts_grid,
    ComponentType.CALL_TO_ACTION: map_call_to_action,
    ComponentType.PRICE_LIST: map_price_list,
    ComponentType.PRICE_TABLE: map_price_table,
    ComponentType.ALERT: map_alert,
    ComponentType.TABS: map_tabs,
    ComponentType.TOGGLE: map_toggle,
    ComponentType.FLIP_BOX: map_flip_box,
    ComponentType.IMAGE_GALLERY: map_image_gallery,
    ComponentType.VIDEO_PLAYLIST: map_video_playlist,
    ComponentType.UNKNOWN: map_passthrough,
}

_missing = set(ComponentType) - set(BUILDERS)
if _missing:  # pragma: no cover - guarded by tests
    raise RuntimeError(f"No widget builder for: {', '.join(sorted(item.value for item in _missing))}")


def map_component(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    """Map one component to a widget; every component type yields a node."""
    builder = BUILDERS[ComponentType.parse(component.component_type)]
    if builder is map_passthrough:
        _LOGGER.debug("No dedicated widget for <%s>; using raw HTML", component.tag)
    return builder(component, context)


__all__ = ["BUILDERS", "PASSTHROUGH_WIDGET", "map_component"]
