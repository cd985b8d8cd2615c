"""Configuration loading for pagebuilder (.pagebuilder.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".pagebuilder.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ExportConfig:
    """Export defaults applied when the caller does not override them."""

    target: str = "elementor"
    title: str = "Imported Page"
    schema_version: str = "3.16.0"
    content_width: int = 1140
    validate: bool = True
    optimize: bool = False
    custom_css: bool = True


@dataclass
class ScoringWeights:
    """Additive points awarded per template-part signal."""

    tag: int = 40
    id: int = 40
    class_: int = 30
    navigation: int = 20
    copyright: int = 20
    widgets: int = 20
    social_links: int = 10
    sticky: int = 10
    top_level: int = 10


@dataclass
class TemplatePolicy:
    """Thresholds and weights used by the template-part detector."""

    presence_threshold: int = 60
    recurring_ratio: float = 0.5
    max_depth: int = 3
    scores: ScoringWeights = field(default_factory=ScoringWeights)


@dataclass
class PageBuilderConfig:
    """Represents the settings defined in .pagebuilder.yml."""

    root: Path
    export: ExportConfig = field(default_factory=ExportConfig)
    base_font_size: float = 16.0
    templates: TemplatePolicy = field(default_factory=TemplatePolicy)


def load_config(config_path: Path) -> PageBuilderConfig:
    """Load configuration from disk, falling back to defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PageBuilderConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    export_data = _as_dict(data.get("export"))
    defaults = ExportConfig()
    export = ExportConfig(
        target=(_as_str(export_data.get("target")) or defaults.target).lower(),
        title=_as_str(export_data.get("title")) or defaults.title,
        schema_version=_as_str(export_data.get("schema_version")) or defaults.schema_version,
        content_width=_as_int(export_data.get("content_width")) or defaults.content_width,
        validate=_pick_bool(export_data.get("validate"), defaults.validate),
        optimize=_pick_bool(export_data.get("optimize"), defaults.optimize),
        custom_css=_pick_bool(export_data.get("custom_css"), defaults.custom_css),
    )

    units_data = _as_dict(data.get("units"))
    base_font_size = _as_float(units_data.get("base_font_size")) or 16.0
    if base_font_size <= 0:
        raise ConfigError("units.base_font_size must be positive")

    templates = _parse_templates(_as_dict(data.get("templates")))

    return PageBuilderConfig(
        root=root,
        export=export,
        base_font_size=base_font_size,
        templates=templates,
    )


def _parse_templates(data: Dict[str, Any]) -> TemplatePolicy:
    policy = TemplatePolicy()
    if not data:
        return policy

    threshold = _as_int(data.get("presence_threshold"))
    if threshold is not None:
        if not 0 <= threshold <= 100:
            raise ConfigError("templates.presence_threshold must be between 0 and 100")
        policy.presence_threshold = threshold

    ratio = _as_float(data.get("recurring_ratio"))
    if ratio is not None:
        if not 0 < ratio <= 1:
            raise ConfigError("templates.recurring_ratio must be in (0, 1]")
        policy.recurring_ratio = ratio

    max_depth = _as_int(data.get("max_depth"))
    if max_depth is not None:
        policy.max_depth = max(0, max_depth)

    scores_data = _as_dict(data.get("scores"))
    for item in fields(ScoringWeights):
        key = item.name.rstrip("_")
        value = _as_int(scores_data.get(key))
        if value is not None:
            setattr(policy.scores, item.name, value)
    return policy


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _pick_bool(value: Any, default: bool) -> bool:
    parsed = _as_bool(value)
    return default if parsed is None else parsed


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ExportConfig",
    "PageBuilderConfig",
    "ScoringWeights",
    "TemplatePolicy",
    "load_config",
]
