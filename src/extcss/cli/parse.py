"""CLI commands: extcss parse / extcss inspect -- compile a single selector."""

from __future__ import annotations

import json
import sys

import click

from extcss.config import ParserConfig
from extcss.errors import ExtCssError
from extcss.selector import (
    AbsolutePseudoClass,
    Node,
    RegularSelector,
    RelativePseudoClass,
    SelectorList,
    parse_selector,
)


def _compile(selector: str, config: ParserConfig) -> SelectorList:
    try:
        return parse_selector(selector, config)
    except ExtCssError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)


def _describe(node: Node) -> str:
    if isinstance(node, RegularSelector):
        return f"{node.type.value} '{node.value}'"
    if isinstance(node, AbsolutePseudoClass):
        return f"{node.type.value} :{node.name}({node.value})"
    if isinstance(node, RelativePseudoClass):
        return f"{node.type.value} :{node.name}"
    return node.type.value


def _render_tree(node: Node, depth: int = 0) -> list[str]:
    lines = ["  " * depth + _describe(node)]
    for child in node.children:
        lines.extend(_render_tree(child, depth + 1))
    return lines


@click.command()
@click.argument("selector")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation.")
@click.pass_obj
def parse(config: ParserConfig, selector: str, indent: int) -> None:
    """Compile SELECTOR and print its AST as JSON."""
    ast = _compile(selector, config)
    click.echo(json.dumps(ast.to_dict(), indent=indent, ensure_ascii=False))


@click.command()
@click.argument("selector")
@click.pass_obj
def inspect(config: ParserConfig, selector: str) -> None:
    """Compile SELECTOR and display its AST as an indented tree.

    Regular parts are shown quoted, absolute pseudo-classes with their raw
    argument, relative pseudo-classes by name.
    """
    ast = _compile(selector, config)
    for line in _render_tree(ast):
        click.echo(line)
