"""
Exception types raised by the route planner.
"""

from typing import Optional


class RouteError(Exception):
    """Base class for every error raised by obstacle_route."""

    pass


class ValidationError(RouteError, ValueError):
    """Raised when input or configuration validation fails."""

    pass


class SplitPointNotFoundError(RouteError, LookupError):
    """Raised when a ring is split at a point that is not one of its vertices."""

    def __init__(self, point: object, ring_size: int):
        self.point = point
        self.ring_size = ring_size
        super().__init__(
            f"split point {point} is not a vertex of the ring ({ring_size} vertices)"
        )


class DestinationInsideObstacleError(RouteError):
    """Raised when the destination lies strictly inside an obstacle."""

    def __init__(self, destination: object, obstacle_index: Optional[int] = None):
        self.destination = destination
        self.obstacle_index = obstacle_index
        super().__init__(
            f"destination {destination} lies inside obstacle {obstacle_index}"
        )


class PlanningDepthError(RouteError):
    """Raised when nested obstructions exceed the configured recursion depth."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"path finding exceeded max_depth={max_depth} nested obstructions")
