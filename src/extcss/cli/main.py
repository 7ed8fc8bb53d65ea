"""extcss CLI entry point: Click group with subcommands."""

import logging

import click

from extcss import __version__
from extcss.config import ParserConfig


@click.group()
@click.version_option(version=__version__, prog_name="extcss")
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=ParserConfig.max_nesting_depth,
    show_default=True,
    help="Maximum nesting of relative pseudo-class arguments.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log parser decisions to stderr.")
@click.pass_context
def cli(ctx: click.Context, max_depth: int, verbose: bool) -> None:
    """extcss - compile extended CSS selectors and stylesheets."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = ParserConfig(max_nesting_depth=max_depth)


# Import and register subcommands
from extcss.cli.parse import inspect, parse  # noqa: E402
from extcss.cli.stylesheet import stylesheet  # noqa: E402
from extcss.cli.validate import validate  # noqa: E402

cli.add_command(parse)
cli.add_command(inspect)
cli.add_command(stylesheet)
cli.add_command(validate)
