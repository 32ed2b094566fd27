"""Navigate command - replay navigation actions on a pattern"""

import asyncio
from typing import Any, Dict, Tuple

import click
from rowguide_core.ir import Project
from rowguide_loader import save_pattern_to_file
from rowguide_nav import create_navigator
from rowguide_nav.config import Settings

from rowguide_cli.commands._common import load_or_abort

# action name -> (command, payload field names)
ACTIONS: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    "next": ("next", ()),
    "prev": ("prev", ()),
    "next-row": ("next_row", ()),
    "prev-row": ("prev_row", ()),
    "next-one": ("advance_one", ()),
    "prev-one": ("retreat_one", ()),
    "advance": ("advance", ("count",)),
    "retreat": ("retreat", ("count",)),
    "select": ("select", ("row", "step")),
    "mode": ("mark_mode", ("mode",)),
    "cycle": ("cycle_mode", ()),
    "mark": ("mark_step", ("row", "step")),
    "mark-row": ("mark_row", ("row",)),
}


def parse_action(action: str) -> Tuple[str, Dict[str, Any]]:
    """Parse "name[:arg[:arg]]" into a navigator command and payload

    Example:
        >>> parse_action("select:2:0")
        ('select', {'row': 2, 'step': 0})
    """
    name, *args = action.split(":")
    if name not in ACTIONS:
        raise click.BadParameter(f"Unknown action '{name}'", param_hint="ACTIONS")
    command, fields = ACTIONS[name]

    # advance / retreat fall back to the multiadvance setting
    if len(args) > len(fields) or (len(args) < len(fields) and command not in ("advance", "retreat")):
        raise click.BadParameter(
            f"'{name}' takes {len(fields)} argument(s): {action}", param_hint="ACTIONS"
        )
    try:
        values = [int(arg) for arg in args]
    except ValueError:
        raise click.BadParameter(f"Arguments must be integers: {action}", param_hint="ACTIONS")
    return command, dict(zip(fields, values))


@click.command()
@click.argument('pattern_file', type=click.Path(exists=True))
@click.argument('actions', nargs=-1)
@click.option('--combine', is_flag=True, help='Zip rows 1 and 2 into one row')
@click.option('--reset', 'reset_behavior', type=click.Choice(['wrap', 'clamp']),
              default=None, help='Behaviour at either end of the pattern')
@click.option('--save', is_flag=True, help='Write the final position and marks back to the file')
@click.pass_context
def navigate(ctx, pattern_file: str, actions, combine: bool, reset_behavior, save: bool):
    """Open a pattern and apply navigation actions in order

    Actions: next, prev, next-row, prev-row, next-one, prev-one,
    advance[:N], retreat[:N], select:R:S, mode:M, cycle, mark:R:S,
    mark-row:R

    Example:
        rowguide navigate pattern.yaml next next-row mode:2 mark:1:0
    """
    formatter = ctx.obj['formatter']
    commands = [parse_action(action) for action in actions]
    project = load_or_abort(formatter, pattern_file)

    overrides: Dict[str, Any] = {}
    if combine:
        overrides["combine12"] = True
    if reset_behavior:
        overrides["reset_behavior"] = reset_behavior
    navigator = create_navigator(settings=Settings(**overrides))

    navigator.start()
    try:
        opened = navigator.open(project)
        if opened.position is None:
            formatter.error("Pattern has no steps to navigate")
            raise click.Abort()
        combine_result = navigator.engine.last_combine
        if combine_result is not None and not combine_result.ok:
            formatter.info(f"Rows not combined: {combine_result.error}")

        for action, (command, payload) in zip(actions, commands):
            result = navigator.handle(command, payload)
            if not result.success:
                formatter.error(f"{action}: {result.message}")
            elif ctx.obj.get('verbose'):
                formatter.info(f"{action}: {result.data}")

        asyncio.run(navigator.bridge.flush())
    finally:
        navigator.stop()

    engine = navigator.engine
    overlay = navigator.overlay
    step = engine.current_step
    data = {
        "position": engine.position.to_dict(),
        "step": step.to_dict() if step else None,
        "bead_count": engine.bead_count(),
        "mode": overlay.mode,
        **overlay.marks.to_dict(),
        "persisted": navigator.bridge.delivered,
    }

    if save:
        saved = Project.create(
            rows=project.rows,
            position=engine.position,
            id=project.id,
            name=project.name,
            marked_steps=overlay.marks.steps,
            marked_rows=overlay.marks.rows,
        )
        save_pattern_to_file(saved, pattern_file)
        formatter.info(f"Saved position to {pattern_file}")

    formatter.success(f"At row {engine.position.row}, step {engine.position.step}", data)
