"""
Rowguide Navigation Engine

Stateful cursor over one open pattern view:
- load a project (optionally combining rows 1 and 2)
- step / row / multi-step navigation with boundary signals
- project reset at either end of the pattern (wrap or clamp)
- fire-and-forget position persistence through the PositionBridge

Transitions are computed by the pure functions in transitions.py; this
class only commits their results. Dependencies are injected via the
constructor; use create_navigator() for production instances.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import ValidationError

from rowguide_core.exceptions import OutOfRangeError, SanityCheckError
from rowguide_core.ir.position import Position
from rowguide_core.ir.project import Project
from rowguide_core.ir.row import Row
from rowguide_core.ir.step import Step
from rowguide_core.protocols import ResetHook
from rowguide_zipper import TransformResult, Zipper, combine_rows

from ..commands import AdvanceCommand, ResetCommand, SelectCommand
from ..config import Settings
from ..config import settings as default_settings
from ..ipc import PositionBridge
from ..result import CommandResult
from ..state import NavigationState
from . import transitions
from .transitions import Boundary, Transition

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], CommandResult]
Move = Callable[[tuple[Row, ...], Position], Transition]
RowEntryListener = Callable[[Position], None]


class NavigationEngine:
    """
    Navigation state machine for one pattern view.

    Every operation returns a Transition. Without a loaded pattern the
    boundary is NO_POSITION, and an invalid position gives OUT_OF_RANGE;
    state is untouched in both cases.
    """

    def __init__(
        self,
        bridge: PositionBridge | None = None,
        settings: Settings | None = None,
        reset_hook: ResetHook | None = None,
        zipper: Zipper | None = None,
    ):
        """
        Initialize NavigationEngine with injected dependencies.

        Args:
            bridge: Position bridge (None disables persistence)
            settings: Navigation settings (default: module settings)
            reset_hook: Called after a project reset
            zipper: Zipper used for row combine
        """
        self.state = NavigationState()

        self._bridge = bridge
        self._settings = settings or default_settings
        self._reset_hook = reset_hook
        self._zipper = zipper or Zipper()

        # Outcome of the last row combine (None if not attempted)
        self.last_combine: TransformResult | None = None

        # Called after a forward row move lands on a new row
        self._row_entry_listeners: list[RowEntryListener] = []

        self._handlers: dict[str, Handler] = {}
        self._register_handlers()

    @property
    def bridge(self) -> PositionBridge | None:
        return self._bridge

    @property
    def settings(self) -> Settings:
        return self._settings

    # ================================================================
    # Loading
    # ================================================================

    def load(self, project: Project) -> Transition:
        """Open a project and restore its saved position."""
        rows = project.rows
        self.last_combine = None
        if self._settings.combine12:
            rows, self.last_combine = combine_rows(rows, self._zipper)
        combined = self.last_combine is not None and self.last_combine.ok

        self.state.load(project, rows, combined)

        restore = project.position or Position(0, 0)
        target = project.with_rows(rows).clamp_position(restore)
        if target is None:
            logger.warning(f"Project {project.name or project.id} has no steps to navigate")
            return Transition(None, Boundary.NO_POSITION)

        if target != restore:
            logger.info(f"Saved position {restore} out of range, clamped to {target}")

        self._commit(target)
        logger.info(
            f"Loaded project {project.name or project.id} "
            f"({len(rows)} rows, combined={combined}) at {target}"
        )
        return Transition(target, moved=True)

    # ================================================================
    # Navigation
    # ================================================================

    def select(self, row: int, step: int) -> Transition:
        """Make (row, step) current."""
        target = Position(row, step)

        def move(rows: tuple[Row, ...], position: Position) -> Transition:
            transitions.check_position(rows, target)
            return Transition(target, moved=target != position)

        return self._run("select", move)

    def step_forward(self) -> Transition:
        return self._run("step_forward", transitions.step_forward)

    def step_backward(self) -> Transition:
        return self._run("step_backward", transitions.step_backward)

    def row_forward(self) -> Transition:
        """First step of the next row, activated as if it had been selected."""
        result = self._run("row_forward", transitions.row_forward)
        if result.moved:
            self._enter_row(result.position)
        return result

    def row_backward(self) -> Transition:
        return self._run("row_backward", transitions.row_backward)

    def advance(self, count: int) -> Transition:
        """Step forward up to count times within the current row."""
        return self._run(
            "advance", lambda rows, position: transitions.advance(rows, position, count)
        )

    def retreat(self, count: int) -> Transition:
        """Step backward up to count times within the current row."""
        return self._run(
            "retreat", lambda rows, position: transitions.retreat(rows, position, count)
        )

    def advance_multi(self) -> Transition:
        return self.advance(self._settings.multiadvance)

    def retreat_multi(self) -> Transition:
        return self.retreat(self._settings.multiadvance)

    def advance_one(self) -> Transition:
        """
        Next step, crossing into the next row at a row end.

        Running off the end of the pattern resets the project forward.
        """
        previous = self.state.position
        result = self._run("advance_one", _step_then_row_forward)
        if result.boundary is Boundary.PATTERN_END:
            return self.reset_project(forward=True)
        if result.moved and previous is not None and result.position.row != previous.row:
            self._enter_row(result.position)
        return result

    def retreat_one(self) -> Transition:
        """
        Previous step, crossing into the previous row at a row start.

        Landing in a new row snaps to its last step; running off the start
        of the pattern resets the project backward.
        """
        result = self._run("retreat_one", _step_then_row_backward)
        if result.boundary is Boundary.PATTERN_START:
            return self.reset_project(forward=False)
        return result

    def reset_project(self, forward: bool = True) -> Transition:
        """
        Handle running off either end of the pattern.

        "wrap" moves to the first step (forward) or the last step of the
        last row (backward); "clamp" leaves the position where it is.
        """
        position = self.state.position
        if position is None:
            return Transition(None, Boundary.NO_POSITION)

        boundary = Boundary.PATTERN_END if forward else Boundary.PATTERN_START
        if self._settings.reset_behavior == "wrap":
            if forward:
                target = transitions.first_position(self.state.rows)
            else:
                target = transitions.last_position(self.state.rows)
            assert target is not None
            if target != position:
                self._commit(target)
            result = Transition(target, boundary, moved=target != position)
        else:
            result = Transition(position, boundary)

        logger.info(
            f"Project reset ({'forward' if forward else 'backward'}, "
            f"{self._settings.reset_behavior}) -> {result.position}"
        )
        if self._reset_hook is not None:
            self._reset_hook.on_reset(forward)
        return result

    # ================================================================
    # Queries
    # ================================================================

    @property
    def position(self) -> Position | None:
        return self.state.position

    @property
    def current_step(self) -> Step | None:
        return self.state.current_step

    @property
    def rows(self) -> tuple[Row, ...]:
        return self.state.rows

    def bead_count(self) -> int:
        """Beads in the current row up to and including the current step."""
        return self.state.bead_count()

    def progress(self) -> dict[str, int] | None:
        position = self.state.position
        if position is None:
            return None
        return {
            "row": position.row,
            "step": position.step,
            "row_length": len(self.state.rows[position.row].steps),
            "total_rows": len(self.state.rows),
        }

    def check_consistency(self) -> None:
        """Raise SanityCheckError if current_step is not the step at position."""
        if not self._settings.sanity_checks:
            return
        position = self.state.position
        if position is None:
            if self.state.current_step is not None:
                raise SanityCheckError("Current step set without a position")
            return
        expected = self.state.step_at(position)
        if expected is None or expected is not self.state.current_step:
            raise SanityCheckError(
                f"Current step {self.state.current_step} does not match position {position}"
            )

    # ================================================================
    # Internals
    # ================================================================

    def _run(self, name: str, move: Move) -> Transition:
        position = self.state.position
        if position is None:
            logger.debug(f"{name}: no pattern loaded")
            return Transition(None, Boundary.NO_POSITION)

        try:
            result = move(self.state.rows, position)
        except OutOfRangeError as e:
            logger.warning(f"{name} rejected: {e}")
            return Transition(position, Boundary.OUT_OF_RANGE)

        if result.moved:
            self._commit(result.position)
        logger.debug(f"{name}: {position} -> {result.position} ({result.boundary.value})")
        return result

    def add_row_entry_listener(self, listener: RowEntryListener) -> None:
        """Register a callback for forward row moves (e.g. the mark overlay)."""
        self._row_entry_listeners.append(listener)

    def _enter_row(self, position: Position) -> None:
        for listener in self._row_entry_listeners:
            listener(position)

    def _commit(self, position: Position) -> None:
        self.state.commit(position)
        self.check_consistency()
        if self._bridge is not None:
            self._bridge.notify_position(position.row, position.step)

    # ================================================================
    # Command handlers
    # ================================================================

    def register_handler(self, command: str, handler: Handler) -> None:
        self._handlers[command] = handler

    def handle(self, command: str, payload: dict[str, Any] | None = None) -> CommandResult:
        """Dispatch a named command with an untyped payload."""
        handler = self._handlers.get(command)
        if handler is None:
            return CommandResult.error(f"Unknown command: {command}")
        return handler(payload or {})

    def _register_handlers(self) -> None:
        """Register command handlers"""
        self.register_handler("next", lambda _: self.result_of(self.step_forward()))
        self.register_handler("prev", lambda _: self.result_of(self.step_backward()))
        self.register_handler("next_row", lambda _: self.result_of(self.row_forward()))
        self.register_handler("prev_row", lambda _: self.result_of(self.row_backward()))
        self.register_handler("advance_one", lambda _: self.result_of(self.advance_one()))
        self.register_handler("retreat_one", lambda _: self.result_of(self.retreat_one()))
        self.register_handler("advance", self._handle_advance)
        self.register_handler("retreat", self._handle_retreat)
        self.register_handler("select", self._handle_select)
        self.register_handler("reset", self._handle_reset)
        self.register_handler("status", lambda _: CommandResult.ok(data=self.state.to_status_dict()))

    def result_of(self, transition: Transition) -> CommandResult:
        """Convert a Transition into a CommandResult."""
        data = transition.to_dict()
        if transition.boundary is Boundary.NO_POSITION:
            return CommandResult.error("No pattern loaded", data)
        if transition.boundary is Boundary.OUT_OF_RANGE:
            return CommandResult.error("Position out of range", data)
        data["bead_count"] = self.bead_count()
        return CommandResult.ok(data=data)

    def _handle_advance(self, payload: dict[str, Any]) -> CommandResult:
        try:
            cmd = AdvanceCommand(**payload)
        except ValidationError as e:
            return CommandResult.error(f"Invalid advance command: {e}")
        return self.result_of(self.advance(cmd.count or self._settings.multiadvance))

    def _handle_retreat(self, payload: dict[str, Any]) -> CommandResult:
        try:
            cmd = AdvanceCommand(**payload)
        except ValidationError as e:
            return CommandResult.error(f"Invalid retreat command: {e}")
        return self.result_of(self.retreat(cmd.count or self._settings.multiadvance))

    def _handle_select(self, payload: dict[str, Any]) -> CommandResult:
        try:
            cmd = SelectCommand(**payload)
        except ValidationError as e:
            return CommandResult.error(f"Invalid select command: {e}")
        return self.result_of(self.select(cmd.row, cmd.step))

    def _handle_reset(self, payload: dict[str, Any]) -> CommandResult:
        try:
            cmd = ResetCommand(**payload)
        except ValidationError as e:
            return CommandResult.error(f"Invalid reset command: {e}")
        return self.result_of(self.reset_project(cmd.forward))


def _step_then_row_forward(rows: tuple[Row, ...], position: Position) -> Transition:
    result = transitions.step_forward(rows, position)
    if result.boundary is Boundary.ROW_END:
        return transitions.row_forward(rows, position)
    return result


def _step_then_row_backward(rows: tuple[Row, ...], position: Position) -> Transition:
    result = transitions.step_backward(rows, position)
    if result.boundary is not Boundary.ROW_START:
        return result
    result = transitions.row_backward(rows, position)
    if not result.moved:
        return result
    snapped = transitions.row_end(rows, result.position)
    return Transition(snapped.position, moved=True)
