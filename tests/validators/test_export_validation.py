"""Tests for export validation and optimisation."""

from __future__ import annotations

from pagebuilder.validators import ValidationReport, optimize_export, validate_export


def test_duplicate_ids_yield_exactly_one_error() -> None:
    data = {
        "content": [
            {"id": "a", "elements": [{"id": "b"}, {"id": "a"}]},
            {"id": "c"},
        ]
    }
    report = validate_export(data)
    assert report.errors == ["Duplicate ID found: a"]
    assert report.is_valid is False


def test_none_export_is_an_error() -> None:
    report = validate_export(None)
    assert report.errors == ["Export data is empty"]


def test_empty_exports_only_warn() -> None:
    assert validate_export([]).warnings == ["Export contains no elements"]
    report = validate_export({"content": []})
    assert report.is_valid
    assert report.warnings == ["Export contains no elements"]


def test_report_merge_and_serialisation() -> None:
    merged = ValidationReport(errors=["x"]).merge(ValidationReport(warnings=["y"]))
    assert merged.to_dict() == {"is_valid": False, "errors": ["x"], "warnings": ["y"]}


def test_optimize_drops_empty_values_bottom_up() -> None:
    data = {
        "a": 1,
        "b": {},
        "c": [],
        "d": "",
        "e": None,
        "f": {"g": {}, "h": [None, ""]},
        "zero": 0,
        "off": False,
        "items": [{"x": None}, {"y": 2}],
    }
    assert optimize_export(data) == {"a": 1, "zero": 0, "off": False, "items": [{"y": 2}]}


def test_optimize_does_not_mutate_input() -> None:
    data = {"a": {}, "b": 1}
    optimize_export(data)
    assert data == {"a": {}, "b": 1}
