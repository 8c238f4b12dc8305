"""
Obstacle Route
==============

Public API for planning a collision-free route between two points around
simple polygonal obstacles, with greedy corner cutting.
"""

import logging

from obstacle_route.api import plan_route, RouteResult
from obstacle_route.config import PlannerConfig
from obstacle_route.errors import (
    RouteError,
    ValidationError,
    SplitPointNotFoundError,
    DestinationInsideObstacleError,
    PlanningDepthError,
)
from obstacle_route.geometry import (
    Vector2,
    Side,
    PathVertex,
    Segment,
    segment_intersect,
    path_length,
)
from obstacle_route.ring import ObstacleRing, SplitResult
from obstacle_route.scan import IntersectionRecord, edge_intersections, scan_obstacle
from obstacle_route.circumvent import circumvent, min_circumvent
from obstacle_route.planner import find_path, detour_candidates
from obstacle_route.optimizer import optimize_path
from obstacle_route.debug import (
    format_point,
    format_path,
    format_segment,
    setup_debug_logging,
    disable_debug_logging,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Main API
    'plan_route',
    'RouteResult',
    'PlannerConfig',
    # Errors
    'RouteError',
    'ValidationError',
    'SplitPointNotFoundError',
    'DestinationInsideObstacleError',
    'PlanningDepthError',
    # Geometry
    'Vector2',
    'Side',
    'PathVertex',
    'Segment',
    'segment_intersect',
    'path_length',
    'ObstacleRing',
    'SplitResult',
    # Planning
    'IntersectionRecord',
    'edge_intersections',
    'scan_obstacle',
    'circumvent',
    'min_circumvent',
    'find_path',
    'detour_candidates',
    'optimize_path',
    # Debug utilities
    'format_point',
    'format_path',
    'format_segment',
    'setup_debug_logging',
    'disable_debug_logging',
]
__version__ = '0.1.0'
