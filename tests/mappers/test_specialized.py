"""Tests for the specialised widget builders."""

from __future__ import annotations

from pagebuilder.context import ExportContext
from pagebuilder.mappers import map_component
from tests._fixtures.component_builder import make_component


def test_progress_reads_aria_value(context: ExportContext) -> None:
    bar = make_component(
        "progress-bar",
        attributes={"aria-valuenow": "75", "aria-valuemax": "100"},
        children=[make_component(tag="span", classes=["progress-title"], text="PHP")],
    )
    widget = map_component(bar, context)
    assert widget.widget_type == "progress"
    assert widget.settings["percent"] == {"size": 75, "unit": "%"}
    assert widget.settings["title"] == "PHP"


def test_counter_splits_prefix_and_suffix(context: ExportContext) -> None:
    counter = make_component(
        "counter",
        children=[
            make_component(tag="span", classes=["counter-number"], text="$1,250+"),
            make_component(tag="span", classes=["counter-title"], text="Customers"),
        ],
    )
    widget = map_component(counter, context)
    assert widget.settings["ending_number"] == 1250
    assert widget.settings["prefix"] == "$"
    assert widget.settings["suffix"] == "+"
    assert widget.settings["thousand_separator"] == "yes"
    assert widget.settings["title"] == "Customers"


def test_star_rating_from_label(context: ExportContext) -> None:
    rating = make_component("star-rating", attributes={"aria-label": "Rated 4.5 out of 5"})
    widget = map_component(rating, context)
    assert widget.settings["rating"] == 4.5
    assert widget.settings["rating_scale"] == 5


def test_testimonial_rating_is_clamped(context: ExportContext) -> None:
    testimonial = make_component(
        "testimonial",
        children=[
            make_component(tag="blockquote", text="Great service"),
            make_component(tag="span", classes=["author-name"], text="Ana"),
            make_component(tag="div", classes=["rating-5"]),
        ],
        classes=["rating-9"],
    )
    widget = map_component(testimonial, context)
    assert widget.settings["testimonial_content"] == "Great service"
    assert widget.settings["testimonial_name"] == "Ana"
    assert widget.settings["rating"] == 5


def test_social_icons_detect_networks(context: ExportContext) -> None:
    social = make_component(
        "social-icons",
        children=[
            make_component(tag="a", href="https://facebook.com/acme"),
            make_component(tag="a", href="https://github.com/acme"),
            make_component(tag="a", href="https://example.com"),
        ],
    )
    widget = map_component(social, context)
    icons = [item["social_icon"]["value"] for item in widget.settings["social_icon_list"]]
    assert icons == ["fab fa-facebook-f", "fab fa-github"]


def test_alert_type_from_class(context: ExportContext) -> None:
    alert = make_component(
        "alert",
        classes=["alert", "alert-danger"],
        children=[make_component(tag="strong", text="Oops"), make_component(tag="p", text="Failed")],
    )
    widget = map_component(alert, context)
    assert widget.settings["alert_type"] == "danger"
    assert widget.settings["alert_title"] == "Oops"
    assert widget.settings["alert_description"] == "Failed"
    assert widget.settings["icon"]["value"] == "fas fa-times-circle"


def test_price_table_keeps_every_plan(context: ExportContext) -> None:
    def plan(name: str, price: str, featured: bool = False) -> object:
        return make_component(
            tag="div",
            classes=["plan", "featured"] if featured else ["plan"],
            children=[
                make_component(tag="h3", text=name),
                make_component(tag="span", classes=["price"], text=price),
                make_component(tag="li", text="Feature A"),
                make_component(tag="a", classes=["btn"], text="Buy", href=f"/buy/{name.lower()}"),
            ],
        )

    table = make_component("price-table", children=[plan("Basic", "$9/mo"), plan("Pro", "$29/mo", True)])
    widget = map_component(table, context)

    plans = widget.settings["plans"]
    assert [item["title"] for item in plans] == ["Basic", "Pro"]
    assert plans[1]["price"] == "29"
    assert plans[1]["currency"] == "$"
    assert plans[1]["period"] == "mo"
    assert widget.settings["heading"] == "Pro"
    assert widget.settings["show_ribbon"] == "yes"
    assert widget.settings["link"]["url"] == "/buy/pro"


def test_tabs_pair_titles_with_panels(context: ExportContext) -> None:
    tabs = make_component(
        "tabs",
        children=[
            make_component(tag="button", attributes={"role": "tab"}, text="One"),
            make_component(tag="button", attributes={"role": "tab"}, text="Two"),
            make_component(tag="div", attributes={"role": "tabpanel"}, text="First"),
            make_component(tag="div", attributes={"role": "tabpanel"}, inner_html="<p>Second</p>"),
        ],
    )
    widget = map_component(tabs, context)
    assert [(tab["tab_title"], tab["tab_content"]) for tab in widget.settings["tabs"]] == [
        ("One", "First"),
        ("Two", "<p>Second</p>"),
    ]


def test_gallery_and_carousel_collect_images(context: ExportContext) -> None:
    images = [make_component(tag="img", src=f"/img/{index}.jpg") for index in range(3)]
    gallery = map_component(make_component("gallery", classes=["grid-3"], children=images), context)
    carousel = map_component(make_component("slider", children=images), context)

    assert [item["url"] for item in gallery.settings["wp_gallery"]] == ["/img/0.jpg", "/img/1.jpg", "/img/2.jpg"]
    assert gallery.settings["gallery_columns"] == "3"
    assert len(carousel.settings["carousel"]) == 3
    assert carousel.widget_type == "image-carousel"


def test_video_playlist_classifies_sources(context: ExportContext) -> None:
    playlist = make_component(
        "video-playlist",
        children=[
            make_component(tag="li", attributes={"data-video": "https://youtu.be/abc"}, classes=["video"]),
            make_component(tag="li", attributes={"data-video": "/clip.mp4"}, classes=["video"]),
        ],
    )
    widget = map_component(playlist, context)
    kinds = [tab["type"] for tab in widget.settings["tabs"]]
    assert kinds == ["youtube", "hosted"]
    assert widget.settings["tabs"][1]["hosted_url"] == {"url": "/clip.mp4"}
