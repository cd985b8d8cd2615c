"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pagebuilder.cli import _build_parser, main


def _write_page(path: Path) -> Path:
    path.write_text(
        json.dumps(
            {
                "title": "CLI Page",
                "components": [
                    {"componentType": "heading", "tagName": "h2", "id": "intro", "textContent": "Hi", "styles": {"color": "#333"}},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "compile", "page.json"])
    assert args.verbose is True
    assert args.command == "compile"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["compile", "page.json", "--verbose"])
    assert args.verbose is True


def test_cli_compile_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(["compile", "page.json", "--target", "bricks", "--strict", "--no-validate", "--optimize"])
    assert args.target == "bricks"
    assert args.strict is True
    assert args.validate is False
    assert args.optimize is True


def test_cli_compile_defaults_defer_to_config() -> None:
    args = _build_parser().parse_args(["compile", "page.json"])
    assert args.validate is None
    assert args.optimize is None


def test_compile_writes_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    page = _write_page(tmp_path / "page.json")
    output = tmp_path / "out.json"

    main(["--config", str(tmp_path), "compile", str(page), "-o", str(output)])

    document = json.loads(output.read_text(encoding="utf-8"))
    assert document["title"] == "CLI Page"
    assert document["content"][0]["elements"][0]["elements"][0]["widgetType"] == "heading"
    assert "Wrote" in capsys.readouterr().out


def test_compile_rejects_unknown_target(tmp_path: Path) -> None:
    page = _write_page(tmp_path / "page.json")
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), "compile", str(page), "--target", "wix"])
    assert excinfo.value.code == 1


def test_compile_reports_missing_input(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), "compile", str(tmp_path / "missing.json")])
    assert excinfo.value.code == 1


def test_css_command_prints_rules(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    page = _write_page(tmp_path / "page.json")
    main(["--config", str(tmp_path), "css", str(page)])
    assert "#intro {\n  color: #333;\n}" in capsys.readouterr().out


def test_css_command_prints_every_block_for_a_shared_class(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    page = tmp_path / "page.json"
    buttons = [
        {"componentType": "button", "classes": ["btn"], "textContent": label, "styles": {"color": color}}
        for label, color in (("Buy", "red"), ("Sell", "blue"))
    ]
    page.write_text(json.dumps({"components": buttons}), encoding="utf-8")

    main(["--config", str(tmp_path), "css", str(page)])

    out = capsys.readouterr().out
    assert ".btn {\n  color: red;\n}" in out
    assert ".btn {\n  color: blue;\n}" in out


def test_template_parts_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    header = {"tagName": "header", "depth": 1, "children": [{"tagName": "nav", "depth": 2}]}
    for name in ("home", "about"):
        (tmp_path / f"{name}.json").write_text(json.dumps([header]), encoding="utf-8")

    main(["--config", str(tmp_path), "template-parts", str(tmp_path / "home.json"), str(tmp_path / "about.json")])

    data = json.loads(capsys.readouterr().out)
    assert data["header"]["page_ids"] == ["home", "about"]
    assert data["header"]["recurring"] is True
