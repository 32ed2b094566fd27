"""Tests for NavigationEngine."""

from __future__ import annotations

import pytest
from mocks import MockPositionSink, MockResetHook, make_row
from rowguide_core.exceptions import LengthMismatchError, SanityCheckError
from rowguide_core.ir import Position, Project, Row, Step
from rowguide_nav.config import Settings
from rowguide_nav.engine import Boundary, NavigationEngine
from rowguide_nav.ipc import PositionBridge


def make_engine(
    sink: MockPositionSink | None = None,
    hook: MockResetHook | None = None,
    **overrides,
) -> NavigationEngine:
    return NavigationEngine(
        bridge=PositionBridge(sink or MockPositionSink()),
        settings=Settings(sanity_checks=True, **overrides),
        reset_hook=hook,
    )


class TestLoad:
    """Test loading a project."""

    def test_load_starts_at_origin(self, engine: NavigationEngine, project: Project) -> None:
        result = engine.load(project)
        assert result.position == Position(0, 0)
        assert engine.position == Position(0, 0)
        assert engine.current_step == project.rows[0].steps[0]
        assert engine.state.shown_rows == {0}

    def test_load_restores_saved_position(
        self, engine: NavigationEngine, project: Project
    ) -> None:
        engine.load(project.with_position(Position(1, 1)))
        assert engine.position == Position(1, 1)
        assert engine.current_step.description == "E"

    def test_load_clamps_invalid_saved_position(
        self, engine: NavigationEngine, project: Project
    ) -> None:
        engine.load(project.with_position(Position(5, 9)))
        assert engine.position == Position(1, 1)

    def test_load_without_steps(self, engine: NavigationEngine) -> None:
        result = engine.load(Project.create(rows=[Row.create(1)]))
        assert result.boundary is Boundary.NO_POSITION
        assert engine.position is None
        assert engine.current_step is None

    def test_load_notifies_bridge(self, engine: NavigationEngine, project: Project) -> None:
        engine.load(project)
        assert engine.bridge.pending == 1


class TestRowCombine:
    """Test combining rows 1 and 2 at load time."""

    def test_combine_zips_first_two_rows(self, combine_project: Project) -> None:
        """A×3 and B×2 interleave to A B A B A."""
        engine = make_engine(combine12=True)
        engine.load(combine_project)

        assert len(engine.rows) == 1
        assert [(s.count, s.description) for s in engine.rows[0].steps] == [
            (1, "A"), (1, "B"), (1, "A"), (1, "B"), (1, "A"),
        ]
        assert engine.rows[0].id == 1
        assert engine.state.combined
        assert engine.last_combine.ok

    def test_combine_disabled(self, combine_project: Project) -> None:
        engine = make_engine(combine12=False)
        engine.load(combine_project)
        assert engine.rows == combine_project.rows
        assert engine.last_combine is None
        assert not engine.state.combined

    def test_combine_mismatch_keeps_rows(self) -> None:
        project = Project.create(rows=[make_row(1, (3, "A")), make_row(2, (1, "B"))])
        engine = make_engine(combine12=True)
        engine.load(project)

        assert engine.rows == project.rows
        assert isinstance(engine.last_combine.error, LengthMismatchError)
        assert not engine.state.combined
        assert engine.position == Position(0, 0)

    def test_combine_keeps_later_rows(self) -> None:
        project = Project.create(rows=[
            make_row(1, (1, "A")),
            make_row(2, (1, "B")),
            make_row(3, (2, "C")),
        ])
        engine = make_engine(combine12=True)
        engine.load(project)
        assert [row.id for row in engine.rows] == [1, 3]


class TestStepNavigation:
    """Test step and row navigation on rows of 3 and 2 steps."""

    def test_step_forward_then_row_forward(self, loaded_engine: NavigationEngine) -> None:
        visited = [loaded_engine.position]
        while True:
            result = loaded_engine.step_forward()
            if result.at_boundary:
                break
            visited.append(loaded_engine.position)

        assert visited == [Position(0, 0), Position(0, 1), Position(0, 2)]
        assert result.boundary is Boundary.ROW_END

        result = loaded_engine.row_forward()
        assert result.position == Position(1, 0)
        assert loaded_engine.current_step.description == "D"
        assert loaded_engine.state.shown_rows == {0, 1}

    def test_row_backward_lands_on_last_step(
        self, engine: NavigationEngine, project: Project, at_position
    ) -> None:
        at_position(engine, project, 1, 0)
        result = engine.row_backward()
        assert result.position == Position(0, 2)
        assert engine.current_step.description == "C"

    def test_boundary_leaves_state_untouched(self, loaded_engine: NavigationEngine) -> None:
        pending = loaded_engine.bridge.pending
        result = loaded_engine.step_backward()
        assert result.boundary is Boundary.ROW_START
        assert loaded_engine.position == Position(0, 0)
        assert loaded_engine.bridge.pending == pending

    def test_advance_stops_at_row_end(self, loaded_engine: NavigationEngine) -> None:
        result = loaded_engine.advance(5)
        assert result.position == Position(0, 2)
        assert result.steps_taken == 2
        assert result.boundary is Boundary.ROW_END
        assert loaded_engine.position == Position(0, 2)

    def test_retreat(self, engine: NavigationEngine, project: Project, at_position) -> None:
        at_position(engine, project, 0, 2)
        result = engine.retreat(1)
        assert result.position == Position(0, 1)
        assert result.boundary is Boundary.NONE

    def test_advance_multi_uses_setting(self, project: Project) -> None:
        engine = make_engine(multiadvance=1)
        engine.load(project)
        result = engine.advance_multi()
        assert result.position == Position(0, 1)
        assert result.steps_taken == 1

    def test_retreat_multi_default(self, engine: NavigationEngine, project: Project, at_position) -> None:
        at_position(engine, project, 0, 2)
        result = engine.retreat_multi()
        assert result.position == Position(0, 0)
        assert result.steps_taken == 2
        assert result.boundary is Boundary.ROW_START

    def test_select(self, loaded_engine: NavigationEngine) -> None:
        result = loaded_engine.select(1, 1)
        assert result.position == Position(1, 1)
        assert loaded_engine.current_step.description == "E"

    def test_select_out_of_range(self, loaded_engine: NavigationEngine) -> None:
        for row, step in [(0, 3), (2, 0), (-1, 0)]:
            result = loaded_engine.select(row, step)
            assert result.boundary is Boundary.OUT_OF_RANGE
            assert loaded_engine.position == Position(0, 0)


class TestSingleStep:
    """Test advance_one / retreat_one chaining and project reset."""

    def test_advance_one_crosses_row(self, engine: NavigationEngine, project: Project, at_position) -> None:
        at_position(engine, project, 0, 2)
        assert engine.advance_one().position == Position(1, 0)

    def test_retreat_one_snaps_to_row_end(
        self, engine: NavigationEngine, project: Project, at_position
    ) -> None:
        at_position(engine, project, 1, 0)
        assert engine.retreat_one().position == Position(0, 2)

    def test_retreat_one_within_row(self, engine: NavigationEngine, project: Project, at_position) -> None:
        at_position(engine, project, 0, 1)
        result = engine.retreat_one()
        assert result.position == Position(0, 0)
        assert result.boundary is Boundary.NONE

    def test_advance_past_end_wraps(
        self,
        engine: NavigationEngine,
        project: Project,
        mock_reset_hook: MockResetHook,
        at_position,
    ) -> None:
        at_position(engine, project, 1, 1)
        result = engine.advance_one()
        assert result.boundary is Boundary.PATTERN_END
        assert result.position == Position(0, 0)
        assert engine.position == Position(0, 0)
        assert mock_reset_hook.calls == [True]

    def test_retreat_past_start_wraps(
        self,
        loaded_engine: NavigationEngine,
        mock_reset_hook: MockResetHook,
    ) -> None:
        result = loaded_engine.retreat_one()
        assert result.boundary is Boundary.PATTERN_START
        assert loaded_engine.position == Position(1, 1)
        assert mock_reset_hook.calls == [False]

    def test_clamp_reset_keeps_position(self, project: Project) -> None:
        hook = MockResetHook()
        engine = make_engine(hook=hook, reset_behavior="clamp")
        engine.load(project.with_position(Position(1, 1)))

        result = engine.advance_one()
        assert result.boundary is Boundary.PATTERN_END
        assert not result.moved
        assert engine.position == Position(1, 1)
        assert hook.calls == [True]

    def test_full_cycle_visits_every_step(self, loaded_engine: NavigationEngine) -> None:
        seen = [loaded_engine.position]
        for _ in range(4):
            seen.append(loaded_engine.advance_one().position)
        assert seen == [
            Position(0, 0), Position(0, 1), Position(0, 2), Position(1, 0), Position(1, 1),
        ]
        assert loaded_engine.advance_one().position == Position(0, 0)


class TestNoPattern:
    """Operations before a pattern is loaded."""

    def test_every_operation_reports_no_position(self, engine: NavigationEngine) -> None:
        for operation in (
            engine.step_forward,
            engine.step_backward,
            engine.row_forward,
            engine.row_backward,
            engine.advance_one,
            engine.retreat_one,
            engine.advance_multi,
            engine.reset_project,
            lambda: engine.select(0, 0),
        ):
            result = operation()
            assert result.boundary is Boundary.NO_POSITION
            assert result.position is None
        assert engine.position is None
        assert engine.bridge.pending == 0

    def test_out_of_range_state(self, loaded_engine: NavigationEngine) -> None:
        """A corrupted position is reported, not followed."""
        loaded_engine.state.position = Position(7, 7)
        result = loaded_engine.step_forward()
        assert result.boundary is Boundary.OUT_OF_RANGE
        assert loaded_engine.position == Position(7, 7)


class TestQueries:
    """Test bead_count, progress and consistency checks."""

    def test_bead_count(self, engine: NavigationEngine, project: Project, at_position) -> None:
        at_position(engine, project, 0, 2)
        assert engine.bead_count() == 7

    def test_progress(self, engine: NavigationEngine, project: Project, at_position) -> None:
        at_position(engine, project, 1, 0)
        assert engine.progress() == {"row": 1, "step": 0, "row_length": 2, "total_rows": 2}

    def test_progress_without_pattern(self, engine: NavigationEngine) -> None:
        assert engine.progress() is None
        assert engine.bead_count() == 0

    def test_consistency_check_detects_mismatch(self, loaded_engine: NavigationEngine) -> None:
        loaded_engine.state.current_step = Step.create(99, 1, "Z")
        with pytest.raises(SanityCheckError):
            loaded_engine.check_consistency()

    def test_consistency_check_disabled(self, project: Project) -> None:
        engine = NavigationEngine(settings=Settings(sanity_checks=False))
        engine.load(project)
        engine.state.current_step = Step.create(99, 1, "Z")
        engine.check_consistency()


class TestCommandHandlers:
    """Test handle() with untyped payloads."""

    def test_next(self, loaded_engine: NavigationEngine) -> None:
        result = loaded_engine.handle("next")
        assert result.success
        assert result.data["position"] == {"row": 0, "step": 1}
        assert result.data["bead_count"] == 3

    def test_advance_with_count(self, loaded_engine: NavigationEngine) -> None:
        result = loaded_engine.handle("advance", {"count": 2})
        assert result.success
        assert result.data["steps_taken"] == 2

    def test_advance_invalid_count(self, loaded_engine: NavigationEngine) -> None:
        result = loaded_engine.handle("advance", {"count": 0})
        assert not result.success
        assert "Invalid advance command" in result.message
        assert loaded_engine.position == Position(0, 0)

    def test_select(self, loaded_engine: NavigationEngine) -> None:
        result = loaded_engine.handle("select", {"row": 1, "step": 1})
        assert result.success
        assert loaded_engine.position == Position(1, 1)

    def test_select_out_of_range(self, loaded_engine: NavigationEngine) -> None:
        result = loaded_engine.handle("select", {"row": 9, "step": 0})
        assert not result.success
        assert result.message == "Position out of range"

    def test_no_pattern(self, engine: NavigationEngine) -> None:
        result = engine.handle("next_row")
        assert not result.success
        assert result.message == "No pattern loaded"

    def test_reset_backward(self, loaded_engine: NavigationEngine) -> None:
        result = loaded_engine.handle("reset", {"forward": False})
        assert result.success
        assert result.data["boundary"] == "pattern_start"
        assert loaded_engine.position == Position(1, 1)

    def test_unknown_command(self, loaded_engine: NavigationEngine) -> None:
        result = loaded_engine.handle("jump")
        assert not result.success
        assert "Unknown command" in result.message

    def test_status(self, loaded_engine: NavigationEngine) -> None:
        result = loaded_engine.handle("status")
        assert result.success
        assert result.data["loaded"]
        assert result.data["total_rows"] == 2


class TestPersistenceOrder:
    """Committed positions reach the sink in order."""

    @pytest.mark.asyncio
    async def test_positions_delivered_in_order(
        self, engine: NavigationEngine, project: Project, mock_sink: MockPositionSink
    ) -> None:
        engine.load(project)
        engine.step_forward()
        engine.step_forward()
        engine.step_forward()  # row end, not committed
        engine.row_forward()
        await engine.bridge.flush()

        assert mock_sink.coordinates() == [(0, 0), (0, 1), (0, 2), (1, 0)]
        sequences = [p["sequence"] for p in mock_sink.positions]
        assert sequences == sorted(sequences)

    def test_navigation_returns_before_delivery(
        self, loaded_engine: NavigationEngine, mock_sink: MockPositionSink
    ) -> None:
        """Without an event loop nothing is sent, but navigation proceeds."""
        loaded_engine.step_forward()
        assert loaded_engine.position == Position(0, 1)
        assert mock_sink.positions == []
        assert loaded_engine.bridge.pending == 2
