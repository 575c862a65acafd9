"""Command-line interface for codedeco.

Usage:
    codedeco highlight <path> [--language LANG] [--format preview|table|json]
    codedeco languages

``<path>`` is either a source file (one code line per source line) or a
``.json`` raw document state.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from codedeco.document.model import Block, Document
    from codedeco.highlight.decorate import Decorator
    from codedeco.highlight.mapper import AnnotationRange

console = Console()

FORMATS = ("preview", "table", "json")


def _build_parser() -> argparse.ArgumentParser:
    """Build argparse parser for codedeco subcommands."""
    from codedeco import __version__

    parser = argparse.ArgumentParser(
        prog="codedeco",
        description="Syntax decorations for tree-structured documents.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    sub = parser.add_subparsers(dest="command", required=True)

    # highlight
    hl_p = sub.add_parser("highlight", help="Decorate a source file or raw state")
    hl_p.add_argument("path", type=Path, help="Source file or .json raw state")
    hl_p.add_argument(
        "--language",
        default=None,
        help="Language for source files (default: HIGHLIGHT__DEFAULT_LANGUAGE)",
    )
    hl_p.add_argument(
        "--format",
        choices=FORMATS,
        default="preview",
        help="Output format (default: preview)",
    )

    # languages
    sub.add_parser("languages", help="List languages with a registered grammar")

    return parser


def _make_decorator() -> Decorator:
    from codedeco.config import get_settings
    from codedeco.highlight import Decorator, Tokenizer, default_grammars

    return Decorator(Tokenizer(default_grammars()), get_settings().highlight)


def _load(path: Path, language: str | None, decorator: Decorator) -> Document:
    """Load *path* as a raw state (``.json``) or as source text."""
    from codedeco.document import Document, code_block, load_state_file

    if path.suffix == ".json":
        return load_state_file(path)

    config = decorator.config
    block = code_block(
        path.read_text(encoding="utf-8"),
        language or config.default_language,
        block_type=config.code_block_type,
        line_type=config.code_line_type,
        language_key=config.language_key,
    )
    return Document(nodes=(block,))


def _print_table(
    con: Console, block: Block, ranges: list[AnnotationRange]
) -> None:
    from codedeco.highlight import walk_texts

    line_of = {text.key: i + 1 for i, text in enumerate(walk_texts(block))}
    table = Table(title=f"Block {block.key}")
    table.add_column("Label", style="cyan")
    table.add_column("Anchor")
    table.add_column("Focus")
    for annotation in ranges:
        table.add_row(
            ", ".join(annotation.labels),
            f"{line_of[annotation.anchor.key]}:{annotation.anchor.offset}",
            f"{line_of[annotation.focus.key]}:{annotation.focus.offset}",
        )
    con.print(table)


def _cmd_highlight(
    path: Path,
    *,
    language: str | None = None,
    output_format: str = "preview",
    console: Console | None = None,
) -> int:
    """Decorate every code block in *path* and print the result."""
    from codedeco.document import find_node
    from codedeco.highlight import MappingConsistencyError
    from codedeco.render import render_block

    con = console or globals()["console"]
    decorator = _make_decorator()

    try:
        document = _load(path, language, decorator)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        con.print(f"[red]Error:[/] cannot load {path}: {exc}")
        return 1

    try:
        decorations = decorator.decorate_document(document)
    except MappingConsistencyError as exc:
        con.print(f"[red]Error:[/] highlighting failed: {exc}")
        return 1

    if not decorations:
        con.print("[yellow]No code blocks found.[/]")
        return 0

    if output_format == "json":
        payload = {
            key: [annotation.to_dict() for annotation in ranges]
            for key, ranges in decorations.items()
        }
        con.print_json(json.dumps(payload))
        return 0

    for key, ranges in decorations.items():
        block = find_node(document, key)
        if output_format == "table":
            _print_table(con, block, ranges)  # type: ignore[arg-type]
        else:
            con.print(render_block(block, ranges))  # type: ignore[arg-type]
    return 0


def _cmd_languages(*, console: Console | None = None) -> int:
    """List registered grammar identifiers."""
    con = console or globals()["console"]
    for language in _make_decorator().tokenizer.languages:
        con.print(language)
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    from codedeco import _setup_logging

    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    _setup_logging()

    match args.command:
        case "highlight":
            status = _cmd_highlight(
                args.path,
                language=args.language,
                output_format=args.format,
            )
        case "languages":
            status = _cmd_languages()
        case _:
            parser.error(f"unknown command {args.command!r}")

    sys.exit(status)
