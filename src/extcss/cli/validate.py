"""CLI command: extcss validate -- check that a stylesheet compiles."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from extcss.config import ParserConfig
from extcss.errors import ExtCssError
from extcss.stylesheet import parse_stylesheet


@click.command()
@click.argument("cssfile", type=click.Path(exists=True))
@click.pass_obj
def validate(config: ParserConfig, cssfile: str) -> None:
    """Parse an extended CSS stylesheet and report whether it is valid.

    Prints a per-rule summary and exits with code 0 if every rule compiles,
    or prints the error and exits with code 1 otherwise.
    """
    css_path = Path(cssfile)

    try:
        source = css_path.read_text(encoding="utf-8")
        rules = parse_stylesheet(source, config)
    except ExtCssError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    for rule in rules:
        parts = [f"  {rule.selector}"]
        if rule.is_remove:
            parts.append("remove")
        elif rule.style:
            parts.append(f"{len(rule.style)} declaration(s)")
        if rule.debug:
            parts.append(f"debug={rule.debug}")
        click.echo("  ".join(parts))

    click.echo()
    click.echo(f"OK: {css_path.name} is valid ({len(rules)} rule(s))")
