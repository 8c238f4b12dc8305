"""
Tests for the main API function plan_route and PlannerConfig.
"""

import dataclasses
import math

import numpy as np
import pytest
from numpy.typing import NDArray

from obstacle_route import (
    DestinationInsideObstacleError,
    PlannerConfig,
    PlanningDepthError,
    RouteResult,
    Side,
    ValidationError,
    plan_route,
)


# =============================================================================
# Helper functions for creating test fixtures
# =============================================================================

def make_square(center: tuple, half_size: float = 2.0) -> NDArray[np.float32]:
    """Create a counter-clockwise square centered at given point."""
    cx, cy = center
    return np.array([
        [cx - half_size, cy - half_size],  # bottom-left
        [cx + half_size, cy - half_size],  # bottom-right
        [cx + half_size, cy + half_size],  # top-right
        [cx - half_size, cy + half_size],  # top-left
    ], dtype=np.float32)


def make_teardrop() -> NDArray[np.float64]:
    """Concave obstacle leaning to the upper left."""
    return np.array([
        [24, 6], [28, 6], [28, 12], [26, 17], [25, 19], [23, 25], [21, 30],
        [19, 34], [15, 34], [14, 31], [14, 26], [15, 22], [19, 12], [20, 5],
    ], dtype=np.float64)


def make_triangle() -> NDArray[np.float64]:
    return np.array([[10, 10], [15, 2], [12, 15]], dtype=np.float64)


START = np.array([6.0, 7.0])
END = np.array([32.0, 23.0])


# =============================================================================
# Test: Open field
# =============================================================================

class TestPlanRouteOpenField:
    """Routes that meet no obstacle."""

    def test_no_obstacles(self):
        result = plan_route((0, 0), (3, 4), [])

        assert isinstance(result, RouteResult)
        assert len(result) == 2
        assert result.length == pytest.approx(5.0)
        assert result.unoptimized_length == pytest.approx(5.0)
        assert result.shortcuts == 0

    def test_obstacle_beside_the_line(self):
        result = plan_route((0, 10), (20, 10), [make_square((10, 0))])

        np.testing.assert_allclose(result.points, [[0, 10], [20, 10]])
        assert result.sides == [None, None]

    def test_default_config_attached(self):
        result = plan_route((0, 0), (1, 0), [])
        assert result.config == PlannerConfig()


# =============================================================================
# Test: Single square obstacle
# =============================================================================

class TestPlanRouteSquare:
    """Probe through the middle of a 4x4 square."""

    def test_unoptimized(self):
        config = PlannerConfig(optimize=False)

        result = plan_route((-2, 1), (6, 1), [make_square((2, 2))], config)

        np.testing.assert_allclose(
            result.points, [[-2, 1], [0, 1], [0, 0], [4, 0], [4, 1], [6, 1]], atol=1e-9
        )
        assert result.sides == [None, Side.RIGHT, Side.RIGHT, Side.RIGHT, Side.RIGHT, None]
        assert result.length == pytest.approx(10.0)
        assert result.shortcuts == 0

    def test_optimized(self):
        result = plan_route((-2, 1), (6, 1), [make_square((2, 2))])

        np.testing.assert_allclose(result.points, [[-2, 1], [0, 0], [4, 0], [6, 1]], atol=1e-9)
        assert result.shortcuts == 2
        assert result.length == pytest.approx(2 * math.sqrt(5) + 4)
        assert result.unoptimized_length == pytest.approx(10.0)

    def test_closed_contour_accepted(self):
        square = make_square((2, 2))
        closed = np.vstack([square, square[:1]])

        open_result = plan_route((-2, 1), (6, 1), [square])
        closed_result = plan_route((-2, 1), (6, 1), [closed])

        np.testing.assert_allclose(open_result.points, closed_result.points)

    def test_winding_does_not_matter(self):
        square = make_square((2, 2))

        ccw = plan_route((-2, 1), (6, 1), [square])
        cw = plan_route((-2, 1), (6, 1), [square[::-1]])

        np.testing.assert_allclose(ccw.points, cw.points)

    def test_list_of_tuples_accepted(self):
        result = plan_route([-2, 1], [6, 1], [[(0, 0), (4, 0), (4, 4), (0, 4)]])
        assert len(result) == 4


# =============================================================================
# Test: Two obstacles
# =============================================================================

class TestPlanRouteTwoObstacles:
    """Concave teardrop plus a triangle close to the start."""

    def test_optimized_route(self):
        result = plan_route(START, END, [make_teardrop(), make_triangle()])

        np.testing.assert_allclose(
            result.points, [[6, 7], [12, 15], [20, 5], [28, 6], [32, 23]], atol=1e-9
        )
        assert result.sides == [None, Side.LEFT, Side.RIGHT, Side.RIGHT, None]
        assert result.shortcuts == 9

    def test_lengths(self):
        result = plan_route(START, END, [make_teardrop(), make_triangle()])

        assert result.unoptimized_length == pytest.approx(59.9898, abs=1e-3)
        assert result.length == pytest.approx(48.3328, abs=1e-3)
        assert result.length >= np.hypot(*(END - START))

    def test_unoptimized_route(self):
        config = PlannerConfig(optimize=False)

        result = plan_route(START, END, [make_teardrop(), make_triangle()], config)

        assert len(result) == 14
        assert result.length == result.unoptimized_length
        assert result.vertices[0].on_obstacle is False
        assert all(v.on_obstacle for v in result.vertices[1:-1])

    def test_endpoints_exact(self):
        result = plan_route(START, END, [make_teardrop(), make_triangle()])

        np.testing.assert_array_equal(result.points[0], START)
        np.testing.assert_array_equal(result.points[-1], END)

    def test_destination_on_boundary_is_exact(self):
        square = [(0.1, 0.1), (0.7, 0.1), (0.7, 0.7), (0.1, 0.7)]
        end = np.array([0.7, 0.20326633165829147])

        result = plan_route((-1.0, end[1]), end, [square])

        np.testing.assert_array_equal(result.points[-1], end)

    def test_depth_limit(self):
        config = PlannerConfig(max_depth=1)
        with pytest.raises(PlanningDepthError):
            plan_route(START, END, [make_teardrop(), make_triangle()], config)


# =============================================================================
# Test: Error handling
# =============================================================================

class TestPlanRouteValidation:
    """Input validation."""

    def test_destination_inside_obstacle(self):
        with pytest.raises(DestinationInsideObstacleError) as exc_info:
            plan_route((-2, 2), (2, 2), [make_square((2, 2))])
        assert exc_info.value.obstacle_index == 0

    def test_start_wrong_shape(self):
        with pytest.raises(ValidationError, match=r"start must have shape \(2,\)"):
            plan_route((0, 0, 0), (1, 1), [])

    def test_end_not_finite(self):
        with pytest.raises(ValidationError, match="end must be finite"):
            plan_route((0, 0), (np.inf, 1), [])

    def test_start_not_numeric(self):
        with pytest.raises(ValidationError, match="start"):
            plan_route(("a", "b"), (1, 1), [])

    def test_obstacles_must_be_a_sequence(self):
        with pytest.raises(ValidationError, match="sequence"):
            plan_route((0, 0), (1, 1), "square")

    def test_degenerate_contour_names_its_index(self):
        contours = [make_square((10, 10)), [(0, 0), (1, 1)]]
        with pytest.raises(ValidationError, match=r"obstacle_contours\[1\]"):
            plan_route((0, 0), (1, 0), contours)

    def test_non_numeric_contour(self):
        with pytest.raises(ValidationError, match=r"obstacle_contours\[0\]"):
            plan_route((0, 0), (1, 0), [[(0, 0), (1, "x"), (2, 2)]])

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            plan_route((0, 0), (1, 1, 1), [])


# =============================================================================
# Test: PlannerConfig
# =============================================================================

class TestPlannerConfig:
    """Tests for PlannerConfig validation."""

    def test_defaults(self):
        config = PlannerConfig()
        assert config.tolerance == 0.0
        assert config.shortcut_tolerance == pytest.approx(1e-3)
        assert config.optimize is True
        assert config.max_depth == 256

    def test_is_frozen(self):
        config = PlannerConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.tolerance = 0.1

    @pytest.mark.parametrize("value", [-0.1, 0.5, 1.0])
    def test_tolerance_range(self, value):
        with pytest.raises(ValidationError, match="tolerance"):
            PlannerConfig(tolerance=value)

    def test_shortcut_tolerance_range(self):
        with pytest.raises(ValidationError, match="shortcut_tolerance"):
            PlannerConfig(shortcut_tolerance=0.6)

    def test_negative_point_tolerance(self):
        with pytest.raises(ValidationError, match="point_tolerance"):
            PlannerConfig(point_tolerance=-1e-9)

    @pytest.mark.parametrize("value", [0, -3, True, 2.5])
    def test_max_depth(self, value):
        with pytest.raises(ValidationError, match="max_depth"):
            PlannerConfig(max_depth=value)
