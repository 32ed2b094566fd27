"""Main CLI entry point"""

import logging

import click
from rich.console import Console
from rowguide_cli.utils.output import OutputFormatter
from rowguide_cli.commands.summary import summary
from rowguide_cli.commands.zip import zip_rows
from rowguide_cli.commands.navigate import navigate


def setup_logging(debug: bool = False) -> None:
    """Configure logging"""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.option('--json', 'json_mode', is_flag=True, help='Output as JSON')
@click.option('--verbose', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, json_mode: bool, verbose: bool):
    """Rowguide CLI - Track progress through a beading pattern

    Examples:
        rowguide summary pattern.yaml
        rowguide zip pattern.yaml --first 0 --second 1
        rowguide navigate pattern.yaml next next-row mark:0:1
        rowguide --json navigate pattern.yaml advance:3
    """
    setup_logging(verbose)

    # Initialize context
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    # Initialize output formatter
    console = Console()
    ctx.obj['console'] = console
    ctx.obj['formatter'] = OutputFormatter(json_mode=json_mode, console=console)


# Register commands
cli.add_command(summary)
cli.add_command(zip_rows)
cli.add_command(navigate)


if __name__ == '__main__':
    cli()
