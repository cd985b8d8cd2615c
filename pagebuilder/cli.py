"""CLI entrypoints for pagebuilder commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .config import ConfigError
from .loader import InputError, load_page, load_pages
from .logging import configure_logging
from .pipeline import Compiler
from .validators import ExportValidationError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_output_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write JSON to this file instead of stdout.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagebuilder",
        description="Compile recognised page components into page-builder exports.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Path to .pagebuilder.yml or the directory containing it.",
    )
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile a component JSON file into an export document.",
    )
    _add_verbose_option(compile_parser, suppress_default=True)
    _add_output_option(compile_parser)
    compile_parser.add_argument("input", type=Path, help="Component JSON file.")
    compile_parser.add_argument("--target", help="Export schema (elementor, bricks, ...).")
    compile_parser.add_argument("--title", help="Document title.")
    compile_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when the export does not pass validation.",
    )
    compile_parser.add_argument(
        "--no-validate",
        dest="validate",
        action="store_false",
        default=None,
        help="Skip export validation.",
    )
    compile_parser.add_argument(
        "--optimize",
        action="store_true",
        default=None,
        help="Strip empty values from the export.",
    )

    parts_parser = subparsers.add_parser(
        "template-parts",
        help="Detect recurring header/footer/sidebar regions across pages.",
    )
    _add_verbose_option(parts_parser, suppress_default=True)
    _add_output_option(parts_parser)
    parts_parser.add_argument(
        "pages",
        type=Path,
        nargs="+",
        help="One JSON file per page, or a single file with a 'pages' mapping.",
    )

    css_parser = subparsers.add_parser(
        "css",
        help="Print generated custom CSS for every component in a file.",
    )
    _add_verbose_option(css_parser, suppress_default=True)
    css_parser.add_argument("input", type=Path, help="Component JSON file.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for pagebuilder commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        compiler = Compiler.from_path(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "compile":
        try:
            page = load_page(args.input)
            result = compiler.compile(
                page.components,
                title=args.title or page.title,
                target=args.target,
                palette=page.palette,
                typography=page.typography,
                layout=page.layout,
                page_css=page.page_css,
                validate=args.validate,
                optimize=args.optimize,
                strict=bool(args.strict),
            )
        except InputError as exc:
            parser.exit(1, f"{exc}\n")
        except ExportValidationError as exc:
            details = "\n".join(f"  - {error}" for error in exc.report.errors)
            parser.exit(1, f"{exc}\n{details}\n")
        except ValueError as exc:
            parser.exit(1, f"pagebuilder compile failed: {exc}\n")
        _emit(result.document, getattr(args, "output", None))
    elif args.command == "template-parts":
        try:
            pages = load_pages(args.pages)
        except InputError as exc:
            parser.exit(1, f"{exc}\n")
        parts = compiler.detect_template_parts(pages)
        _emit(parts.to_dict(), getattr(args, "output", None))
    elif args.command == "css":
        try:
            page = load_page(args.input)
        except InputError as exc:
            parser.exit(1, f"{exc}\n")
        blocks = compiler.custom_css(page.components)
        print("\n\n".join(css for _, css in blocks))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _emit(data: Any, output: Path | None) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output is None:
        print(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    print(f"Wrote {_relativize(output)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
