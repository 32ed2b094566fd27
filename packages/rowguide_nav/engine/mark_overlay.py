"""
Mark Overlay

Routes "activate" actions either to marking or to navigation, depending
on the mark mode:

    mode 0      activate step -> engine.select(row, step)
                activate row  -> engine.select(row, 0)
    mode 1..6   toggle the step/row mark (same mode clears, other overwrites)

Forward row moves on the engine activate the step they land on, so in
mark mode that step is toggled too.

Mark changes are pushed through the position bridge as "marks" messages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from rowguide_core.constants.marks import UNMARKED
from rowguide_core.ir.position import Position
from rowguide_core.ir.project import Project

from ..commands import MarkModeCommand, MarkRowCommand, MarkStepCommand
from ..ipc import PositionBridge
from ..result import CommandResult
from ..state import MarkModeContext, MarkState
from .navigation_engine import NavigationEngine
from .transitions import Boundary, Transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Activation:
    """
    Outcome of activating a step or row.

    Attributes:
        mark: Mark value after activation (unchanged when navigating)
        transition: Navigation result when mode was 0 or the target was invalid
    """

    mark: int = UNMARKED
    transition: Transition | None = None

    @property
    def marked(self) -> bool:
        return self.transition is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "mark": self.mark,
            "transition": self.transition.to_dict() if self.transition else None,
        }


class MarkOverlay:
    """Mark mode and marks layered over a NavigationEngine."""

    def __init__(
        self,
        engine: NavigationEngine,
        context: MarkModeContext | None = None,
        marks: MarkState | None = None,
        bridge: PositionBridge | None = None,
    ):
        self._engine = engine
        self.context = context or MarkModeContext()
        self.marks = marks or MarkState()
        self._bridge = bridge if bridge is not None else engine.bridge

        engine.register_handler("mark_mode", self._handle_mark_mode)
        engine.register_handler("cycle_mode", lambda _: self._mode_result(self.context.cycle()))
        engine.register_handler("undo_mode", self._handle_undo_mode)
        engine.register_handler("mark_step", self._handle_mark_step)
        engine.register_handler("mark_row", self._handle_mark_row)
        engine.register_handler("clear_marks", self._handle_clear)
        engine.add_row_entry_listener(self._on_row_entered)

    @property
    def mode(self) -> int:
        return self.context.current_mode

    def load(self, project: Project) -> None:
        """Replace marks with the ones saved in project."""
        self.marks = MarkState.from_project(project)

    def activate_step(self, row: int, step: int) -> Activation:
        mode = self.context.current_mode
        if mode == UNMARKED:
            transition = self._engine.select(row, step)
            return Activation(self.marks.step_mark(row, step), transition)

        invalid = self._check_target(row, step)
        if invalid is not None:
            return Activation(self.marks.step_mark(row, step), invalid)

        mark = self.marks.toggle_step(row, step, mode)
        logger.debug(f"Step ({row}, {step}) mark -> {mark}")
        self._notify()
        return Activation(mark)

    def activate_row(self, row: int) -> Activation:
        mode = self.context.current_mode
        if mode == UNMARKED:
            return Activation(self.marks.row_mark(row), self._engine.select(row, 0))

        invalid = self._check_target(row)
        if invalid is not None:
            return Activation(self.marks.row_mark(row), invalid)

        mark = self.marks.toggle_row(row, mode)
        logger.debug(f"Row {row} mark -> {mark}")
        self._notify()
        return Activation(mark)

    def step_mark(self, row: int, step: int) -> int:
        return self.marks.step_mark(row, step)

    def row_mark(self, row: int) -> int:
        return self.marks.row_mark(row)

    def clear(self) -> None:
        self.marks.clear()
        logger.info("Cleared all marks")
        self._notify()

    def to_dict(self) -> dict[str, Any]:
        return {"mode": self.context.current_mode, **self.marks.to_dict()}

    def _on_row_entered(self, position: Position) -> None:
        """Row moves activate the landing step: in mark mode that toggles its mark."""
        mode = self.context.current_mode
        if mode == UNMARKED:
            return
        mark = self.marks.toggle_step(position.row, position.step, mode)
        logger.debug(f"Entered row {position.row}, step {position.step} mark -> {mark}")
        self._notify()

    def _check_target(self, row: int, step: int | None = None) -> Transition | None:
        state = self._engine.state
        if not state.is_loaded:
            return Transition(None, Boundary.NO_POSITION)
        if step is None:
            valid = 0 <= row < len(state.rows)
        else:
            valid = state.step_at(Position(row, step)) is not None
        if not valid:
            logger.warning(f"Cannot mark row={row} step={step}: out of range")
            return Transition(state.position, Boundary.OUT_OF_RANGE)
        return None

    def _notify(self) -> None:
        if self._bridge is not None:
            self._bridge.notify_marks(self.marks.to_dict())

    # ================================================================
    # Command handlers
    # ================================================================

    def _mode_result(self, mode: int) -> CommandResult:
        logger.debug(f"Mark mode -> {mode}")
        return CommandResult.ok(data={"mode": mode})

    def _activation_result(self, activation: Activation) -> CommandResult:
        if activation.transition is not None:
            result = self._engine.result_of(activation.transition)
            if result.data is not None:
                result.data["mark"] = activation.mark
            return result
        return CommandResult.ok(data=activation.to_dict())

    def _handle_mark_mode(self, payload: dict[str, Any]) -> CommandResult:
        try:
            cmd = MarkModeCommand(**payload)
        except ValidationError as e:
            return CommandResult.error(f"Invalid mark mode command: {e}")
        return self._mode_result(self.context.set_mode(cmd.mode))

    def _handle_undo_mode(self, payload: dict[str, Any]) -> CommandResult:
        if not self.context.undo():
            return CommandResult.error("No previous mark mode")
        return self._mode_result(self.context.current_mode)

    def _handle_mark_step(self, payload: dict[str, Any]) -> CommandResult:
        try:
            cmd = MarkStepCommand(**payload)
        except ValidationError as e:
            return CommandResult.error(f"Invalid mark step command: {e}")
        return self._activation_result(self.activate_step(cmd.row, cmd.step))

    def _handle_mark_row(self, payload: dict[str, Any]) -> CommandResult:
        try:
            cmd = MarkRowCommand(**payload)
        except ValidationError as e:
            return CommandResult.error(f"Invalid mark row command: {e}")
        return self._activation_result(self.activate_row(cmd.row))

    def _handle_clear(self, payload: dict[str, Any]) -> CommandResult:
        self.clear()
        return CommandResult.ok(data=self.marks.to_dict())
