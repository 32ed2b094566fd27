"""Summary command - pattern statistics"""

import click

from rowguide_cli.commands._common import load_or_abort


@click.command()
@click.argument('pattern_file', type=click.Path(exists=True))
@click.pass_context
def summary(ctx, pattern_file: str):
    """Show rows, beads and colours of a pattern

    Example:
        rowguide summary pattern.yaml
    """
    formatter = ctx.obj['formatter']
    project = load_or_abort(formatter, pattern_file)

    formatter.success(f"Pattern: {project.name or pattern_file}", {
        "rows": len(project.rows),
        "steps": project.total_steps,
        "total_beads": project.total_beads,
        "longest_row": project.longest_row,
        "colors": project.total_colors,
        "position": project.position.to_dict() if project.position else None,
    })
