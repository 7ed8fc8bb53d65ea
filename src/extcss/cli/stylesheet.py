"""CLI command: extcss stylesheet -- split a stylesheet into rule data."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from extcss.config import ParserConfig
from extcss.errors import ExtCssError
from extcss.stylesheet import parse_stylesheet


@click.command()
@click.argument("cssfile", type=click.Path(exists=True))
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation.")
@click.pass_obj
def stylesheet(config: ParserConfig, cssfile: str, indent: int) -> None:
    """Parse an extended CSS stylesheet and print its rules as JSON."""
    css_path = Path(cssfile)

    try:
        source = css_path.read_text(encoding="utf-8")
        rules = parse_stylesheet(source, config)
    except ExtCssError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    click.echo(json.dumps([r.to_dict() for r in rules], indent=indent, ensure_ascii=False))
