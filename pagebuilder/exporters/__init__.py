"""Exporter plugin implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable, List, Optional

from ..config import ExportConfig
from .base import Exporter
from .bricks import BricksExporter
from .elementor import ElementorExporter

_ENTRY_POINT_GROUP = "pagebuilder.exporters"

_BUILTIN_FACTORIES: Dict[str, Callable[..., Exporter]] = {
    "elementor": ElementorExporter,
    "bricks": BricksExporter,
}


def available_exporters() -> List[str]:
    names = list(_BUILTIN_FACTORIES)
    for entry in _iter_entry_points():
        if entry.name.lower() not in names:
            names.append(entry.name.lower())
    return names


def get_exporter(name: str, config: Optional[ExportConfig] = None) -> Exporter:
    """Return an exporter for ``name``, consulting plugins after the built-ins."""
    key = name.lower()
    factory = _BUILTIN_FACTORIES.get(key)
    if factory is not None:
        return factory(config)

    for entry in _iter_entry_points():
        if entry.name.lower() != key:
            continue
        try:
            loaded = entry.load()
        except (ImportError, AttributeError) as exc:
            raise RuntimeError(f"Failed to load exporter entry point '{name}': {exc}") from exc
        return _coerce_exporter(loaded, config)

    known = ", ".join(available_exporters())
    raise ValueError(f"Unknown export target '{name}' (available: {known})")


def _coerce_exporter(obj: object, config: Optional[ExportConfig]) -> Exporter:
    if isinstance(obj, Exporter):
        return obj
    if isinstance(obj, type) and issubclass(obj, Exporter):
        return obj(config)
    if callable(obj):
        instance = obj(config)
        if isinstance(instance, Exporter):
            return instance
    raise TypeError("Exporter entry point must be an Exporter subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    entry_points = metadata.entry_points()
    if hasattr(entry_points, "select"):
        return entry_points.select(group=_ENTRY_POINT_GROUP)  # type: ignore[return-value]
    return entry_points.get(_ENTRY_POINT_GROUP, [])  # type: ignore[return-value]


__all__ = [
    "BricksExporter",
    "ElementorExporter",
    "Exporter",
    "available_exporters",
    "get_exporter",
]
