"""Structural validation and optimisation of export trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Set


@dataclass
class ValidationReport:
    """Outcome of validating an export; callers decide whether to accept it."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        return ValidationReport(
            errors=[*self.errors, *other.errors],
            warnings=[*self.warnings, *other.warnings],
        )

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors), "warnings": list(self.warnings)}


class ExportValidationError(RuntimeError):
    """Raised when a strict run produces an export with validation errors."""

    def __init__(self, message: str, report: ValidationReport) -> None:
        super().__init__(message)
        self.report = report


def validate_export(data: Any) -> ValidationReport:
    """Report duplicate ids anywhere in the tree and warn on empty exports."""
    report = ValidationReport()
    if data is None:
        report.errors.append("Export data is empty")
        return report

    seen: Set[str] = set()
    _check_ids(data, seen, report)

    if isinstance(data, list) and not data:
        report.warnings.append("Export contains no elements")
    elif isinstance(data, Mapping) and "content" in data and not data.get("content"):
        report.warnings.append("Export contains no elements")
    return report


def _check_ids(node: Any, seen: Set[str], report: ValidationReport) -> None:
    if isinstance(node, Mapping):
        identifier = node.get("id")
        if isinstance(identifier, (str, int)) and identifier != "":
            key = str(identifier)
            if key in seen:
                report.errors.append(f"Duplicate ID found: {key}")
            else:
                seen.add(key)
        for value in node.values():
            _check_ids(value, seen, report)
    elif isinstance(node, list):
        for item in node:
            _check_ids(item, seen, report)


def optimize_export(data: Any) -> Any:
    """Return a copy without None, empty strings, empty mappings or empty lists.

    Containers are cleaned bottom-up, so a mapping whose values were all
    removed is itself removed. 0 and False are kept.
    """
    return _clean(data)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and value == "":
        return True
    if isinstance(value, (Mapping, list)) and len(value) == 0:
        return True
    return False


def _clean(value: Any) -> Any:
    if isinstance(value, Mapping):
        result = {}
        for key, item in value.items():
            cleaned = _clean(item)
            if not _is_empty(cleaned):
                result[key] = cleaned
        return result
    if isinstance(value, list):
        items = [_clean(item) for item in value]
        return [item for item in items if not _is_empty(item)]
    return value
