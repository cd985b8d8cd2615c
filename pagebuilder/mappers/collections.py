"""Builders for widgets that repeat an item structure (slides, plans, tabs...)."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..models import RecognizedComponent, WidgetNode
from ..parsers.colors import normalize_color_to_hex
from .base import compact, find_icon_class, icon_setting, image_setting, link_setting, make_widget, text_of, yes_no
from .content import HEADING_TAGS, find_button

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..context import ExportContext

_COLUMN_CLASS = re.compile(r"(?:col|cols|columns|grid)-(\d+)")
_PRICE = re.compile(r"([$€£¥₹])?\s*(\d+(?:[.,]\d{1,2})?)")
_PERIOD = re.compile(r"/\s*(mo|month|yr|year|week|day)|per\s+(month|year|week|day)", re.IGNORECASE)
_YOUTUBE = re.compile(r"(youtube\.com|youtu\.be)", re.IGNORECASE)
_VIMEO = re.compile(r"vimeo\.com", re.IGNORECASE)


def _items(component: RecognizedComponent, *fragments: str, tags: tuple = ()) -> List[RecognizedComponent]:
    """Direct children matching a class fragment or tag, else matching descendants."""
    matched = [
        child
        for child in component.children
        if any(child.has_class(fragment) for fragment in fragments) or child.tag.lower() in tags
    ]
    if matched:
        return matched
    nested = component.find_all(class_contains=fragments, tags=tags)
    return nested


def _column_count(component: RecognizedComponent, default: int) -> int:
    for cls in component.classes:
        match = _COLUMN_CLASS.search(cls)
        if match:
            return max(1, min(int(match.group(1)), 12))
    return default


def _images(component: RecognizedComponent) -> List[RecognizedComponent]:
    return [node for node in component.find_all(tags=("img",)) if node.props.src]


def map_image_carousel(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    slides = [
        {"_id": context.next_id(), "id": "", "url": image.props.src, "alt": image.props.alt or ""}
        for image in _images(component)
    ]
    has_arrows = component.find(class_contains=("arrow", "prev", "next")) is not None
    has_dots = component.find(class_contains=("dot", "pagination", "bullet")) is not None
    if has_arrows and has_dots:
        navigation = "both"
    elif has_arrows:
        navigation = "arrows"
    elif has_dots:
        navigation = "dots"
    else:
        navigation = "both"

    speed = component.attributes.get("data-autoplay-speed") or component.attributes.get("data-interval")
    settings = compact(
        {
            "carousel": slides,
            "slides_to_show": component.attributes.get("data-slides-to-show", "1"),
            "slides_to_scroll": "1",
            "navigation": navigation,
            "autoplay": "no" if component.attributes.get("data-autoplay") == "false" else "yes",
            "autoplay_speed": int(speed) if speed and speed.isdigit() else 3000,
            "pause_on_hover": "yes",
            "infinite": "yes",
            "effect": "fade" if component.has_class("fade") else "slide",
            "speed": 300,
            "image_stretch": "no",
        }
    )
    return make_widget(context, "image-carousel", settings)


def map_posts_grid(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    posts = _items(component, "post", "card", "entry", tags=("article",))
    columns = _column_count(component, min(len(posts), 3) or 3)
    has_meta_date = component.find(class_contains=("date",), tags=("time",)) is not None
    has_meta_author = component.find(class_contains=("author",)) is not None
    meta = [name for name, present in (("date", has_meta_date), ("author", has_meta_author)) if present]
    settings = compact(
        {
            "_skin": "classic",
            "classic_columns": str(columns),
            "posts_per_page": len(posts) or 6,
            "classic_thumbnail": "top" if _images(component) else "none",
            "classic_show_title": "yes",
            "classic_title_tag": "h3",
            "classic_show_excerpt": yes_no(component.find(tags=("p",)) is not None),
            "classic_meta_data": meta,
            "classic_show_read_more": yes_no(component.find(class_contains=("read-more", "more-link")) is not None),
            "posts_post_type": "post",
        }
    )
    return make_widget(context, "posts", settings)


def _price_parts(text: str) -> Dict[str, str]:
    match = _PRICE.search(text)
    period_match = _PERIOD.search(text)
    period = ""
    if period_match:
        period = (period_match.group(1) or period_match.group(2) or "").lower()
    return {
        "currency": (match.group(1) or "") if match else "",
        "price": match.group(2) if match else "",
        "period": period,
    }


def map_price_list(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    items: List[Dict[str, Any]] = []
    for item in _items(component, "item", "menu-item", tags=("li",)):
        title = item.find(class_contains=("title", "name")) or item.find(tags=HEADING_TAGS)
        price = item.find(class_contains=("price", "cost", "amount"))
        description = item.find(class_contains=("desc",)) or item.find(tags=("p",))
        link = item.find(tags=("a",))
        price_text = text_of(price) or item.text
        price_parts = _price_parts(price_text)
        items.append(
            compact(
                {
                    "_id": context.next_id(),
                    "title": text_of(title) or item.text,
                    "price": f"{price_parts['currency']}{price_parts['price']}" if price_parts["price"] else "",
                    "item_description": text_of(description),
                    "image": image_setting(_images(item)[0].props.src) if _images(item) else None,
                    "link": link_setting(link.props.href) if link else None,
                }
            )
        )
    return make_widget(context, "price-list", {"price_list": items, "separator_style": "dotted"})


def _plan(plan: RecognizedComponent, context: "ExportContext") -> Dict[str, Any]:
    heading = plan.find(tags=HEADING_TAGS) or plan.find(class_contains=("title", "name"))
    price_node = plan.find(class_contains=("price", "amount", "cost"))
    parts = _price_parts(text_of(price_node) or plan.text)
    features = [
        {"_id": context.next_id(), "item_text": feature.text}
        for feature in plan.find_all(tags=("li",))
        if feature.text
    ]
    button = find_button(plan) or plan.find(tags=("a",))
    highlighted = any(
        plan.has_class(flag) for flag in ("featured", "popular", "highlight", "recommended", "active")
    )
    ribbon = plan.find(class_contains=("ribbon", "badge"))
    return {
        "title": text_of(heading),
        "price": parts["price"],
        "currency": parts["currency"],
        "period": parts["period"],
        "features": features,
        "button_text": text_of(button),
        "button_url": button.props.href if button is not None and button.props.href else "",
        "highlight": highlighted,
        "ribbon_title": text_of(ribbon) or ("Popular" if highlighted else ""),
    }


def map_price_table(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    nodes = _items(component, "plan", "pricing", "price-table", "tier", "package")
    # A table with no plan-like children is itself a single plan.
    plans = [_plan(node, context) for node in (nodes or [component])]
    lead = next((plan for plan in plans if plan["highlight"]), plans[0])
    settings = compact(
        {
            "plans": plans,
            "heading": lead["title"],
            "price": lead["price"],
            "currency_symbol": "custom" if lead["currency"] else "dollar",
            "currency_symbol_custom": lead["currency"] or None,
            "period": lead["period"],
            "features_list": lead["features"],
            "button_text": lead["button_text"] or None,
            "link": link_setting(lead["button_url"]),
            "show_ribbon": yes_no(lead["highlight"]),
            "ribbon_title": lead["ribbon_title"] or None,
            "header_bg_color": normalize_color_to_hex(component.styles.background_color),
        }
    )
    return make_widget(context, "price-table", settings)


def _tab_pairs(component: RecognizedComponent) -> List[Dict[str, str]]:
    titles = component.find_all(class_contains=("tab-title", "tab-link", "nav-link"), attribute="aria-controls")
    if not titles:
        titles = [node for node in component.walk() if node.attributes.get("role") == "tab"]
    panels = [node for node in component.walk() if node.attributes.get("role") == "tabpanel"]
    if not panels:
        panels = component.find_all(class_contains=("tab-pane", "tab-content-item", "tab-panel"))
    pairs: List[Dict[str, str]] = []
    for index, title in enumerate(titles):
        panel = panels[index] if index < len(panels) else None
        pairs.append(
            {
                "tab_title": title.text or f"Tab #{index + 1}",
                "tab_content": (panel.props.inner_html or panel.text) if panel is not None else "",
            }
        )
    return pairs


def map_tabs(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    tabs = [{"_id": context.next_id(), **pair} for pair in _tab_pairs(component)]
    settings = {
        "tabs": tabs,
        "type": "vertical" if component.has_class("vertical") else "horizontal",
        "tabs_align": "start",
    }
    return make_widget(context, "tabs", settings)


def map_toggle(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    entries = _items(component, "item", "toggle", "accordion-item", "panel", "faq", tags=("details",))
    tabs: List[Dict[str, Any]] = []
    for entry in entries:
        title = (
            entry.find(tags=("summary", "button"))
            or entry.find(class_contains=("title", "header", "question"))
            or entry.find(tags=HEADING_TAGS)
        )
        body = entry.find(class_contains=("content", "body", "answer", "collapse")) or entry.find(tags=("p",))
        tabs.append(
            {
                "_id": context.next_id(),
                "tab_title": text_of(title) or entry.text,
                "tab_content": (body.props.inner_html or body.text) if body is not None else "",
            }
        )
    icon_class = find_icon_class(component)
    settings = compact(
        {
            "tabs": tabs,
            "selected_icon": icon_setting(icon_class) or {"value": "fas fa-caret-right", "library": "fa-solid"},
            "selected_active_icon": {"value": "fas fa-caret-up", "library": "fa-solid"},
            "title_html_tag": "div",
            "faq_schema": yes_no(component.has_class("faq")),
        }
    )
    return make_widget(context, "toggle", settings)


def map_image_gallery(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    images = _images(component)
    gallery = [{"id": context.next_id(), "url": image.props.src} for image in images]
    columns = _column_count(component, min(len(images), 4) or 4)
    settings = {
        "wp_gallery": gallery,
        "gallery_columns": str(columns),
        "gallery_link": "file",
        "open_lightbox": "default",
        "thumbnail_size": "medium",
        "gallery_rand": "",
        "image_spacing": "",
    }
    return make_widget(context, "image-gallery", settings)


def _video_source(node: RecognizedComponent) -> Optional[str]:
    return (
        node.attributes.get("data-video")
        or node.attributes.get("data-src")
        or node.props.src
        or node.props.href
    )


def map_video_playlist(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    candidates = _items(component, "video", "playlist-item", "item", tags=("li", "iframe", "video"))
    tabs: List[Dict[str, Any]] = []
    for index, item in enumerate(candidates):
        source = _video_source(item)
        if not source:
            nested = item.find(tags=("iframe", "video", "a"), attribute="data-video")
            source = _video_source(nested) if nested is not None else None
        if not source:
            continue
        if _YOUTUBE.search(source):
            kind, url_key = "youtube", "youtube_url"
        elif _VIMEO.search(source):
            kind, url_key = "vimeo", "vimeo_url"
        else:
            kind, url_key = "hosted", "hosted_url"
        title = item.find(class_contains=("title",)) or item.find(tags=HEADING_TAGS)
        thumbnail = item.find(tags=("img",))
        tabs.append(
            compact(
                {
                    "_id": context.next_id(),
                    "type": kind,
                    "title": text_of(title) or item.attributes.get("title") or f"Video {index + 1}",
                    url_key: {"url": source} if kind == "hosted" else source,
                    "thumbnail": image_setting(thumbnail.props.src) if thumbnail else None,
                }
            )
        )
    heading = component.find(tags=HEADING_TAGS)
    settings = {
        "tabs": tabs,
        "playlist_title": text_of(heading, "Playlist"),
        "show_video_count": "yes",
        "show_duration": "yes",
        "play_icon": {"value": "fas fa-play-circle", "library": "fa-solid"},
        "layout": "inline",
    }
    return make_widget(context, "video-playlist", settings)


__all__ = [
    "map_image_carousel",
    "map_image_gallery",
    "map_posts_grid",
    "map_price_list",
    "map_price_table",
    "map_tabs",
    "map_toggle",
    "map_video_playlist",
]
