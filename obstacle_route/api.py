"""
Public entry point: plan and optimize a route around polygonal obstacles.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union
import logging

import numpy as np
from numpy.typing import NDArray

from obstacle_route.config import PlannerConfig
from obstacle_route.errors import ValidationError
from obstacle_route.geometry import PathVertex, Segment, Side, Vector2, path_length
from obstacle_route.optimizer import optimize_path
from obstacle_route.planner import find_path
from obstacle_route.ring import ObstacleRing

logger = logging.getLogger(__name__)

ContourLike = Union[NDArray[np.floating], Sequence[Sequence[float]]]


@dataclass
class RouteResult:
    """
    Result of planning a route.

    Attributes:
        vertices: Route from start to end, with planning metadata
        length: Total length of the returned route
        unoptimized_length: Length before corner cutting (equal to length
            when optimization is disabled)
        shortcuts: Number of corner-cutting replacements applied
    """
    vertices: List[PathVertex]
    length: float
    unoptimized_length: float
    shortcuts: int = 0
    config: PlannerConfig = field(default_factory=PlannerConfig)

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def points(self) -> NDArray[np.float64]:
        """Route coordinates as an (N, 2) array, for renderers and exporters."""
        return np.array([[v.x, v.y] for v in self.vertices], dtype=np.float64).reshape(-1, 2)

    @property
    def sides(self) -> List[Optional[Side]]:
        return [v.side for v in self.vertices]


def plan_route(
    start: Union[NDArray[np.floating], Sequence[float]],
    end: Union[NDArray[np.floating], Sequence[float]],
    obstacle_contours: Sequence[ContourLike],
    config: Optional[PlannerConfig] = None
) -> RouteResult:
    """
    Find a route from start to end around the given obstacles.

    Parameters:
        start: (x, y) start point, shape (2,)
        end: (x, y) destination, shape (2,); must not lie inside an obstacle
        obstacle_contours: Obstacle polygons, each an (N, 2) array or sequence
            of (x, y) points. Rings are closed internally; a repeated first
            vertex at the end is accepted.
        config: Planner settings (defaults to PlannerConfig())

    Returns:
        RouteResult with the planned (and, if enabled, optimized) route

    Raises:
        ValidationError: If inputs have invalid shapes or values
        DestinationInsideObstacleError: If end lies inside an obstacle

    Example:
        >>> triangle = [(10, 10), (15, 2), (12, 15)]
        >>> result = plan_route((6, 7), (32, 23), [triangle])
        >>> result.points[0], result.points[-1]
    """
    if config is None:
        config = PlannerConfig()

    # -------------------------------------------------------------------------
    # Step 1: Input validation
    # -------------------------------------------------------------------------
    start_point = _as_point("start", start)
    end_point = _as_point("end", end)

    if isinstance(obstacle_contours, (str, bytes)) or not isinstance(obstacle_contours, Sequence):
        raise ValidationError("obstacle_contours must be a sequence of polygons")

    rings: List[ObstacleRing] = []
    for i, contour in enumerate(obstacle_contours):
        try:
            rings.append(ObstacleRing.from_points(contour, config.point_tolerance))
        except ValidationError as e:
            raise ValidationError(f"obstacle_contours[{i}]: {e}") from e
        except (TypeError, ValueError, IndexError) as e:
            raise ValidationError(f"obstacle_contours[{i}] is not a valid polygon: {e}") from e

    # -------------------------------------------------------------------------
    # Step 2: Plan
    # -------------------------------------------------------------------------
    segment = Segment(PathVertex(start_point), PathVertex(end_point))
    route = find_path(
        segment, rings, config.tolerance,
        point_tolerance=config.point_tolerance, max_depth=config.max_depth
    )
    unoptimized_length = path_length(route)
    logger.debug("planned %d vertices, length %.6g", len(route), unoptimized_length)

    # -------------------------------------------------------------------------
    # Step 3: Cut corners
    # -------------------------------------------------------------------------
    shortcuts = 0
    if config.optimize:
        shortcuts = optimize_path(
            route, rings, config.shortcut_tolerance,
            point_tolerance=config.point_tolerance, max_depth=config.max_depth
        )

    return RouteResult(
        vertices=route,
        length=path_length(route),
        unoptimized_length=unoptimized_length,
        shortcuts=shortcuts,
        config=config,
    )


def _as_point(name: str, value: Union[NDArray[np.floating], Sequence[float]]) -> Vector2:
    try:
        array = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be an (x, y) pair: {e}") from e
    if array.shape != (2,):
        raise ValidationError(f"{name} must have shape (2,), got {array.shape}")
    if not np.all(np.isfinite(array)):
        raise ValidationError(f"{name} must be finite, got {array}")
    return Vector2.from_array(array)
