"""
Pytest fixtures for rowguide_nav tests.

Provides mock dependencies, sample projects and test engine configurations.
"""

from __future__ import annotations

import pytest
from mocks import MockPositionSink, MockResetHook, make_row
from rowguide_core.ir import Position, Project
from rowguide_nav.config import Settings
from rowguide_nav.engine import MarkOverlay, NavigationEngine
from rowguide_nav.ipc import PositionBridge


@pytest.fixture
def mock_sink() -> MockPositionSink:
    """Create a fresh MockPositionSink for testing."""
    return MockPositionSink()


@pytest.fixture
def mock_reset_hook() -> MockResetHook:
    """Create a fresh MockResetHook for testing."""
    return MockResetHook()


@pytest.fixture
def bridge(mock_sink: MockPositionSink) -> PositionBridge:
    return PositionBridge(mock_sink)


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults and sanity checks on."""
    return Settings(sanity_checks=True)


@pytest.fixture
def project() -> Project:
    """
    Rows of 3 and 2 steps:

        row 0: A×2, B×1, C×4
        row 1: D×3, E×1
    """
    return Project.create(
        rows=[
            make_row(1, (2, "A"), (1, "B"), (4, "C")),
            make_row(2, (3, "D"), (1, "E")),
        ],
        name="Sample",
    )


@pytest.fixture
def combine_project() -> Project:
    """Row 0 is A×3, row 1 is B×2."""
    return Project.create(
        rows=[make_row(1, (3, "A")), make_row(2, (2, "B"))],
    )


@pytest.fixture
def engine(
    bridge: PositionBridge,
    settings: Settings,
    mock_reset_hook: MockResetHook,
) -> NavigationEngine:
    """
    Create a NavigationEngine with all mock dependencies.

    This engine can be tested without any real store.
    """
    return NavigationEngine(bridge=bridge, settings=settings, reset_hook=mock_reset_hook)


@pytest.fixture
def loaded_engine(engine: NavigationEngine, project: Project) -> NavigationEngine:
    """Engine with the sample project loaded at (0, 0)."""
    engine.load(project)
    return engine


@pytest.fixture
def overlay(loaded_engine: NavigationEngine) -> MarkOverlay:
    return MarkOverlay(loaded_engine)


@pytest.fixture
def at_position():
    """Factory: load a project at a saved position."""

    def _load(engine: NavigationEngine, project: Project, row: int, step: int) -> NavigationEngine:
        engine.load(project.with_position(Position(row, step)))
        return engine

    return _load
