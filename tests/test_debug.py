"""
Tests for debug formatting and logging helpers.
"""

import io
import logging

import pytest

from obstacle_route import plan_route
from obstacle_route.debug import (
    PACKAGE_LOGGER_NAME,
    disable_debug_logging,
    format_path,
    format_point,
    format_segment,
    setup_debug_logging,
)
from obstacle_route.geometry import PathVertex, Segment, Side, Vector2


@pytest.fixture
def debug_stream():
    """Capture package debug output, detaching the handler afterwards."""
    stream = io.StringIO()
    setup_debug_logging(stream=stream)
    yield stream
    disable_debug_logging()


class TestFormatting:
    """Tests for format_point(), format_segment() and format_path()."""

    def test_integer_point(self):
        assert format_point(Vector2(1.0, -2.0)) == "(1,-2)"

    def test_fractional_point(self):
        assert format_point(PathVertex.at(0.5, 2)) == "(0.500000,2.000000)"

    def test_segment(self):
        assert format_segment(Segment.between((0, 0), (3, 4))) == "[(0,0), (3,4)]"

    def test_path_tags(self):
        path = [
            PathVertex.at(0, 0),
            PathVertex.at(1, 2, on_obstacle=True, side=Side.LEFT),
            PathVertex.at(3, 4, on_obstacle=True, side=Side.RIGHT),
        ]
        assert format_path(path) == "[(start)-?(0,0)-L(1,2)-R(3,4)(end)]"

    def test_empty_path(self):
        assert format_path([]) == "[(start)(end)]"


class TestDebugLogging:
    """Tests for setup_debug_logging() / disable_debug_logging()."""

    def test_setup_returns_package_logger(self, debug_stream):
        logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        assert logger.level == logging.DEBUG

    def test_planning_is_logged(self, debug_stream):
        square = [(0, 0), (4, 0), (4, 4), (0, 4)]

        plan_route((-2, 1), (6, 1), [square])

        output = debug_stream.getvalue()
        assert "obstacle_route.planner DEBUG" in output
        assert "obstacle 0 blocks [(-2,1), (6,1)]" in output
        assert "chose ccw" in output

    def test_shortcuts_are_logged(self, debug_stream):
        square = [(0, 0), (4, 0), (4, 4), (0, 4)]

        plan_route((-2, 1), (6, 1), [square])

        output = debug_stream.getvalue()
        assert "obstacle_route.optimizer DEBUG" in output
        assert "optimization done after 2 shortcut(s)" in output

    def test_setup_twice_keeps_one_handler(self):
        logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        before = len(logger.handlers)
        try:
            setup_debug_logging(stream=io.StringIO())
            setup_debug_logging(stream=io.StringIO())
            assert len(logger.handlers) == before + 1
        finally:
            disable_debug_logging()
        assert len(logger.handlers) == before

    def test_disable_silences_output(self):
        stream = io.StringIO()
        setup_debug_logging(stream=stream)
        disable_debug_logging()

        plan_route((0, 0), (1, 1), [])

        assert stream.getvalue() == ""

    def test_level_argument(self):
        stream = io.StringIO()
        try:
            setup_debug_logging(level=logging.WARNING, stream=stream)
            plan_route((-2, 1), (6, 1), [[(0, 0), (4, 0), (4, 4), (0, 4)]])
        finally:
            disable_debug_logging()
        assert stream.getvalue() == ""
