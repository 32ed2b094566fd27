"""Zip command - combine two rows"""

import click

from rowguide_cli.commands._common import load_or_abort
from rowguide_zipper import Zipper


@click.command('zip')
@click.argument('pattern_file', type=click.Path(exists=True))
@click.option('--first', default=0, show_default=True, help='Index of the first row')
@click.option('--second', default=1, show_default=True, help='Index of the second row')
@click.pass_context
def zip_rows(ctx, pattern_file: str, first: int, second: int):
    """Zip two rows into one alternating row

    Example:
        rowguide zip pattern.yaml --first 0 --second 1
    """
    formatter = ctx.obj['formatter']
    project = load_or_abort(formatter, pattern_file)

    row_a = project.row_at(first)
    row_b = project.row_at(second)
    if row_a is None or row_b is None:
        formatter.error("Row index out of range", f"pattern has {len(project.rows)} rows")
        raise click.Abort()

    result = Zipper().zip(row_a.steps, row_b.steps)
    if not result.ok:
        formatter.error("Rows cannot be zipped", str(result.error))
        raise click.Abort()

    steps = [step.to_dict() for step in result.steps]
    formatter.success(f"Zipped rows {first} and {second}", {
        "steps": len(steps),
        "beads": sum(step["count"] for step in steps),
    } if not formatter.json_mode else {"steps": steps})
    formatter.steps("Zipped row", steps)
