"""Builders for single-block specialized widgets."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from ..models import RecognizedComponent, WidgetNode
from ..parsers.colors import normalize_color_to_hex
from ..parsers.dimensions import parse_pixels, size_setting
from .base import (
    compact,
    extract_url,
    find_icon_class,
    first_number,
    icon_setting,
    image_setting,
    link_setting,
    make_widget,
    text_of,
    yes_no,
)

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..context import ExportContext

HEADING_TAGS: Tuple[str, ...] = ("h1", "h2", "h3", "h4", "h5", "h6")
_RATING_LABEL = re.compile(r"(\d+(?:\.\d+)?)\s*(?:out of|/)\s*(\d+)", re.IGNORECASE)
_RATING_CLASS = re.compile(r"rating-(\d)")
_PERCENT_CLASS = re.compile(r"(?:progress|skill|bar)-(\d+)")
_PERCENT_TEXT = re.compile(r"(\d+(?:\.\d+)?)\s*%")
_WIDTH_PERCENT = re.compile(r"^(\d+(?:\.\d+)?)%$")
_NUMBER_TOKEN = re.compile(r"-?\d[\d,]*(?:\.\d+)?")

SOCIAL_NETWORKS: Dict[str, Tuple[str, str]] = {
    "facebook": ("fab fa-facebook-f", "#3b5998"),
    "twitter": ("fab fa-twitter", "#1da1f2"),
    "x.com": ("fab fa-x-twitter", "#000000"),
    "instagram": ("fab fa-instagram", "#e4405f"),
    "linkedin": ("fab fa-linkedin-in", "#0077b5"),
    "youtube": ("fab fa-youtube", "#ff0000"),
    "pinterest": ("fab fa-pinterest-p", "#bd081c"),
    "tiktok": ("fab fa-tiktok", "#000000"),
    "snapchat": ("fab fa-snapchat-ghost", "#fffc00"),
    "whatsapp": ("fab fa-whatsapp", "#25d366"),
    "telegram": ("fab fa-telegram-plane", "#0088cc"),
    "reddit": ("fab fa-reddit-alien", "#ff4500"),
    "tumblr": ("fab fa-tumblr", "#35465c"),
    "vimeo": ("fab fa-vimeo-v", "#1ab7ea"),
    "github": ("fab fa-github", "#333333"),
    "dribbble": ("fab fa-dribbble", "#ea4c89"),
    "behance": ("fab fa-behance", "#1769ff"),
    "medium": ("fab fa-medium-m", "#00ab6c"),
    "slack": ("fab fa-slack", "#4a154b"),
    "discord": ("fab fa-discord", "#7289da"),
    "mailto:": ("fas fa-envelope", "#ea4335"),
}

ALERT_COLORS: Dict[str, Dict[str, str]] = {
    "info": {
        "background_color": "#d1ecf1",
        "border_color": "#bee5eb",
        "title_color": "#0c5460",
        "description_color": "#0c5460",
    },
    "success": {
        "background_color": "#d4edda",
        "border_color": "#c3e6cb",
        "title_color": "#155724",
        "description_color": "#155724",
    },
    "warning": {
        "background_color": "#fff3cd",
        "border_color": "#ffeaa7",
        "title_color": "#856404",
        "description_color": "#856404",
    },
    "danger": {
        "background_color": "#f8d7da",
        "border_color": "#f5c6cb",
        "title_color": "#721c24",
        "description_color": "#721c24",
    },
}
ALERT_ICONS = {
    "info": "fas fa-info-circle",
    "success": "fas fa-check-circle",
    "warning": "fas fa-exclamation-triangle",
    "danger": "fas fa-times-circle",
}


def find_title(component: RecognizedComponent) -> Optional[RecognizedComponent]:
    return component.find(tags=HEADING_TAGS) or component.find(class_contains=("title", "heading"))


def find_description(component: RecognizedComponent) -> Optional[RecognizedComponent]:
    return component.find(tags=("p",)) or component.find(class_contains=("desc", "content", "text"))


def find_link(component: RecognizedComponent) -> Optional[RecognizedComponent]:
    if component.props.href:
        return component
    return component.find(tags=("a",))


def find_button(component: RecognizedComponent) -> Optional[RecognizedComponent]:
    return component.find(tags=("button",)) or component.find(class_contains=("btn", "button"))


def _link_of(node: Optional[RecognizedComponent]) -> Optional[Dict[str, str]]:
    if node is None:
        return None
    return link_setting(node.props.href, node.props.target)


def _image_url(component: RecognizedComponent) -> Optional[str]:
    image = component.find(tags=("img",))
    if image is not None and image.props.src:
        return image.props.src
    return extract_url(component.styles.background_image)


def map_icon_box(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    icon_class = find_icon_class(component)
    icon_node = component.find(tags=("i", "svg", "img"))
    title = find_title(component)
    description = find_description(component)
    position = "top"
    if component.styles.flex_direction in ("row", "row-reverse"):
        position = "right" if component.styles.flex_direction == "row-reverse" else "left"

    settings = compact(
        {
            "selected_icon": icon_setting(icon_class) or {"value": "fas fa-star", "library": "fa-solid"},
            "view": "default",
            "shape": "circle",
            "title_text": text_of(title, "Title"),
            "description_text": text_of(description),
            "title_size": title.tag if title is not None and title.tag in HEADING_TAGS else "h3",
            "position": position,
            "primary_color": normalize_color_to_hex(icon_node.styles.color) if icon_node else None,
            "icon_size": size_setting(icon_node.styles.font_size) if icon_node else None,
            "icon_space": {"size": 15, "unit": "px"},
            "title_color": normalize_color_to_hex(title.styles.color) if title else None,
            "description_color": normalize_color_to_hex(description.styles.color) if description else None,
            "text_align": component.styles.text_align or "center",
            "icon_vertical_align": "top",
            "link": _link_of(find_link(component)),
        }
    )
    return make_widget(context, "icon-box", settings)


def extract_rating(component: RecognizedComponent, default_scale: int = 5) -> Tuple[float, int]:
    """Return ``(rating, scale)`` read from labels, star children or star glyphs."""
    label = component.attributes.get("aria-label") or component.attributes.get("title") or component.text
    match = _RATING_LABEL.search(label or "")
    if match:
        scale = int(match.group(2)) or default_scale
        return max(0.0, min(float(match.group(1)), float(scale))), scale

    for cls in component.classes:
        class_match = _RATING_CLASS.search(cls)
        if class_match:
            return float(min(int(class_match.group(1)), default_scale)), default_scale

    stars = [
        node
        for node in component.walk()
        if any("star" in cls.lower() for cls in node.classes)
    ]
    if stars:
        filled = [
            node
            for node in stars
            if not any(cls in {"fa-star-o", "star-empty", "star-outline"} for cls in node.classes)
            and not node.has_class("star-empty")
        ]
        scale = max(len(stars), default_scale)
        return float(min(len(filled), scale)), scale

    glyphs = sum(component.text.count(char) for char in "★⭐")
    if glyphs:
        return float(min(glyphs, default_scale)), default_scale
    return 0.0, default_scale


def map_star_rating(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    rating, scale = extract_rating(component)
    star = component.find(class_contains=("star",))
    label = component.find(class_contains=("rating-label", "review-label"))
    empty = component.find(class_contains=("star-o", "star-empty", "star-outline"))
    settings = compact(
        {
            "rating_scale": scale,
            "rating": rating,
            "star_style": "star_fontawesome",
            "unmarked_star_style": "outline" if empty is not None else "solid",
            "title": text_of(label) or None,
            "stars_color": normalize_color_to_hex(star.styles.color) if star else "#f0ad4e",
            "stars_unmarked_color": "#cccccc",
            "icon_size": size_setting(star.styles.font_size) if star else {"size": 16, "unit": "px"},
            "icon_space": {"size": 0, "unit": "px"},
            "alignment": component.styles.text_align or "left",
            "schema_type": "none",
        }
    )
    return make_widget(context, "star-rating", settings)


def detect_network(link: RecognizedComponent) -> Optional[str]:
    haystack = " ".join([link.props.href or "", link.class_name, *(child.class_name for child in link.walk())])
    haystack = haystack.lower()
    for network in SOCIAL_NETWORKS:
        if network in haystack:
            return network
    return None


def map_social_icons(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    items: List[Dict[str, Any]] = []
    links = component.find_all(tags=("a",))
    for link in links:
        network = detect_network(link)
        if network is None:
            continue
        icon_class, _ = SOCIAL_NETWORKS[network]
        items.append(
            {
                "_id": context.next_id(),
                "social_icon": {"value": icon_class, "library": "fa-brands" if icon_class.startswith("fab") else "fa-solid"},
                "link": {"url": link.props.href or "", "is_external": "on", "nofollow": ""},
            }
        )

    first = links[0] if links else None
    shape = "rounded"
    if first is not None:
        radius = first.styles.border_radius or ""
        if radius.endswith("%") and parse_pixels(radius) >= 50:
            shape = "circle"
        elif parse_pixels(radius) == 0 and radius:
            shape = "square"

    official = first is not None and any(
        normalize_color_to_hex(link.styles.background_color) == SOCIAL_NETWORKS[network][1]
        for link in links
        for network in [detect_network(link)]
        if network is not None
    )
    icon = first.find(tags=("i", "svg")) if first is not None else None
    settings = compact(
        {
            "social_icon_list": items,
            "shape": shape,
            "icon_color": "default" if official or first is None else "custom",
            "icon_primary_color": None if official or first is None else normalize_color_to_hex(first.styles.background_color),
            "icon_secondary_color": None if official or first is None else normalize_color_to_hex(first.styles.color),
            "icon_size": size_setting(icon.styles.font_size) if icon else {"size": 20, "unit": "px"},
            "icon_padding": {"size": 0.5, "unit": "em"},
            "icon_spacing": size_setting(first.styles.margin_right) if first else None,
            "align": component.styles.text_align or "left",
            "columns": 0,
            "columns_mobile": 0,
        }
    )
    return make_widget(context, "social-icons", settings)


def extract_percent(component: RecognizedComponent) -> float:
    """Read a progress percentage from aria values, fill width, classes or text."""
    bar = component.find(class_contains=("progress-bar", "bar", "fill"), attribute="aria-valuenow") or component
    for node in (component, bar):
        now = node.attributes.get("aria-valuenow")
        if now is not None:
            number = first_number(now)
            if number is not None:
                maximum = first_number(node.attributes.get("aria-valuemax")) or 100.0
                return _clamp_percent(number * 100.0 / maximum)

    if bar is not component and bar.styles.width:
        match = _WIDTH_PERCENT.match(bar.styles.width.strip())
        if match:
            return _clamp_percent(float(match.group(1)))

    for cls in component.classes:
        class_match = _PERCENT_CLASS.search(cls)
        if class_match:
            return _clamp_percent(float(class_match.group(1)))

    text_match = _PERCENT_TEXT.search(component.text)
    if text_match:
        return _clamp_percent(float(text_match.group(1)))
    return 0.0


def _clamp_percent(value: float) -> float:
    return round(max(0.0, min(value, 100.0)), 2)


def map_progress(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    percent = extract_percent(component)
    title = component.find(class_contains=("progress-title", "skill-name", "title")) or component.find(tags=("label",))
    bar = component.find(class_contains=("progress-bar", "bar", "fill"))
    progress_type = ""
    for candidate in ("info", "success", "warning", "danger"):
        if component.has_class(candidate) or (bar is not None and bar.has_class(candidate)):
            progress_type = candidate
            break

    settings = compact(
        {
            "title": text_of(title),
            "progress_type": progress_type,
            "percent": {"size": int(percent) if percent.is_integer() else percent, "unit": "%"},
            "display_percentage": "show",
            "inner_text": text_of(bar) or None,
            "bar_color": normalize_color_to_hex(bar.styles.background_color) if bar else None,
            "bar_bg_color": normalize_color_to_hex(component.styles.background_color),
            "bar_height": size_setting(bar.styles.height) if bar else {"size": 10, "unit": "px"},
            "bar_border_radius": {"size": 0, "unit": "px"},
            "title_color": "#333333",
            "text_color": "#ffffff",
            "progress_animation": "yes",
        }
    )
    return make_widget(context, "progress", settings)


def map_counter(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    number_node = component.find(class_contains=("number", "count", "value")) or component
    raw = (
        component.attributes.get("data-count")
        or component.attributes.get("data-target")
        or number_node.attributes.get("data-count")
        or number_node.attributes.get("data-target")
        or number_node.text
    )
    match = _NUMBER_TOKEN.search(raw or "")
    ending = 0.0
    prefix = suffix = ""
    if match:
        token = match.group(0)
        ending = float(token.replace(",", ""))
        source = number_node.text
        if token in source:
            prefix, _, suffix = source.partition(token)
    start = first_number(component.attributes.get("data-from")) or 0.0
    duration = first_number(component.attributes.get("data-duration")) or 2000.0
    title = component.find(class_contains=("title", "label")) or component.find(tags=HEADING_TAGS)

    settings = {
        "starting_number": _int_if_whole(start),
        "ending_number": _int_if_whole(ending),
        "prefix": prefix.strip(),
        "suffix": suffix.strip(),
        "duration": int(duration),
        "thousand_separator": yes_no("," in (match.group(0) if match else "")),
        "thousand_separator_char": ",",
        "title": text_of(title),
        "number_color": normalize_color_to_hex(number_node.styles.color),
        "typography_number_font_size": size_setting(number_node.styles.font_size),
    }
    return make_widget(context, "counter", compact(settings))


def _int_if_whole(value: float) -> Any:
    return int(value) if float(value).is_integer() else value


def map_testimonial(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    content = (
        component.find(tags=("blockquote",))
        or component.find(class_contains=("quote", "content", "text"))
        or component.find(tags=("p",))
    )
    author = component.find(class_contains=("name", "author")) or component.find(tags=("cite", "strong"))
    job = component.find(class_contains=("job", "position", "role", "company"))
    image = component.find(tags=("img",))
    rating, _ = extract_rating(component)

    settings = compact(
        {
            "testimonial_content": text_of(content) or component.text,
            "testimonial_name": text_of(author),
            "testimonial_job": text_of(job),
            "testimonial_image": image_setting(image.props.src) if image else None,
            "testimonial_image_position": "aside",
            "testimonial_alignment": "center",
            "rating": max(1, min(int(round(rating)), 5)) if rating else None,
        }
    )
    return make_widget(context, "testimonial", settings)


def map_call_to_action(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    title = find_title(component)
    description = find_description(component)
    button = find_button(component) or component.find(tags=("a",))
    background = _image_url(component)

    settings = compact(
        {
            "skin": "cover" if background else "classic",
            "layout": "left" if component.styles.flex_direction == "row" else "above",
            "title": text_of(title),
            "description": text_of(description),
            "button": text_of(button) or None,
            "link": _link_of(button),
            "bg_image": image_setting(background),
            "background_color": normalize_color_to_hex(component.styles.background_color),
            "title_color": normalize_color_to_hex(title.styles.color) if title else None,
            "description_color": normalize_color_to_hex(description.styles.color) if description else None,
            "alignment": component.styles.text_align or "center",
            "min-height": size_setting(component.styles.min_height),
        }
    )
    return make_widget(context, "call-to-action", settings)


def map_alert(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    alert_type = "info"
    for candidate, aliases in (
        ("success", ("success",)),
        ("warning", ("warning",)),
        ("danger", ("danger", "error")),
        ("info", ("info",)),
    ):
        if any(component.has_class(alias) for alias in aliases):
            alert_type = candidate
            break

    title = component.find(tags=("strong", "b")) or find_title(component)
    description = component.find(tags=("p",))
    dismiss = component.find(class_contains=("close", "dismiss"))
    icon_class = find_icon_class(component) or ALERT_ICONS[alert_type]
    description_text = text_of(description)
    if not description_text:
        description_text = component.text.replace(text_of(title), "", 1).strip()

    settings: Dict[str, Any] = {
        "alert_type": alert_type,
        "alert_title": text_of(title),
        "alert_description": description_text,
        "show_dismiss": "yes" if dismiss is not None else "no",
        "icon": icon_setting(icon_class),
        "title_typography_typography": "custom",
        "title_typography_font_size": {"size": 16, "unit": "px"},
        "title_typography_font_weight": "600",
        "description_typography_typography": "custom",
        "description_typography_font_size": {"size": 14, "unit": "px"},
        "padding": {"top": 15, "right": 20, "bottom": 15, "left": 20, "unit": "px", "isLinked": False},
    }
    settings.update(ALERT_COLORS[alert_type])
    return make_widget(context, "alert", settings)


def map_flip_box(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    front = component.find(class_contains=("front",)) or component
    back = component.find(class_contains=("back",))
    front_title = find_title(front)
    back_title = find_title(back) if back is not None else None
    button = find_button(back) if back is not None else None
    icon_class = find_icon_class(front)

    settings = compact(
        {
            "graphic_element": "icon" if icon_class else "none",
            "selected_icon": icon_setting(icon_class),
            "title_text_a": text_of(front_title),
            "description_text_a": text_of(find_description(front)),
            "title_text_b": text_of(back_title),
            "description_text_b": text_of(find_description(back)) if back is not None else "",
            "button_text": text_of(button) or None,
            "link": _link_of(button) if button is not None else None,
            "background_color_a": normalize_color_to_hex(front.styles.background_color),
            "background_color_b": normalize_color_to_hex(back.styles.background_color) if back else None,
            "background_image_a": image_setting(extract_url(front.styles.background_image)),
            "height": size_setting(component.styles.height) or {"size": 280, "unit": "px"},
            "flip_effect": "flip",
            "flip_direction": "up" if component.has_class("vertical") else "right",
        }
    )
    return make_widget(context, "flip-box", settings)


__all__ = [
    "extract_percent",
    "extract_rating",
    "map_alert",
    "map_call_to_action",
    "map_counter",
    "map_flip_box",
    "map_icon_box",
    "map_progress",
    "map_social_icons",
    "map_star_rating",
    "map_testimonial",
]
