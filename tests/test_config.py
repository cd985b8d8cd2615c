"""Tests for pagebuilder.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagebuilder.config import ConfigError, PageBuilderConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, PageBuilderConfig)
    assert config.root == tmp_path.resolve()
    assert config.export.target == "elementor"
    assert config.export.content_width == 1140
    assert config.export.validate is True
    assert config.export.optimize is False
    assert config.base_font_size == 16.0
    assert config.templates.presence_threshold == 60
    assert config.templates.scores.tag == 40


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".pagebuilder.yml"
    config_file.write_text(
        """
export:
  target: Bricks
  title: "Home"
  schema_version: "3.21.0"
  content_width: 1200
  validate: false
  optimize: "yes"
  custom_css: false
units:
  base_font_size: 10
templates:
  presence_threshold: 70
  recurring_ratio: 0.75
  max_depth: 2
  scores:
    tag: 50
    class: 15
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.export.target == "bricks"
    assert config.export.title == "Home"
    assert config.export.schema_version == "3.21.0"
    assert config.export.content_width == 1200
    assert config.export.validate is False
    assert config.export.optimize is True
    assert config.export.custom_css is False
    assert config.base_font_size == 10.0
    assert config.templates.presence_threshold == 70
    assert config.templates.recurring_ratio == 0.75
    assert config.templates.max_depth == 2
    assert config.templates.scores.tag == 50
    assert config.templates.scores.class_ == 15
    assert config.templates.scores.id == 40


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".pagebuilder.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).export.target == "elementor"


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "export: [unclosed\n",
        "units:\n  base_font_size: -4\n",
        "templates:\n  presence_threshold: 140\n",
        "templates:\n  recurring_ratio: 0\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str) -> None:
    (tmp_path / ".pagebuilder.yml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)
