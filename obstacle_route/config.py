"""
Planner configuration.
"""

from dataclasses import dataclass

from obstacle_route.errors import ValidationError
from obstacle_route.geometry import DEFAULT_POINT_TOLERANCE

# Deepest allowed nesting of obstructions in one find_path call.
DEFAULT_MAX_DEPTH = 256

# Endpoint tolerance for optimizer shortcut probes, which usually start and
# end on ring vertices.
DEFAULT_SHORTCUT_TOLERANCE = 1e-3


@dataclass(frozen=True)
class PlannerConfig:
    """Immutable settings for plan_route().

    Attributes:
        tolerance: Fraction of a probe's length near either endpoint within
            which obstacle crossings are ignored while planning. Must lie in
            [0, 0.5). Defaults to 0.0.
        shortcut_tolerance: Same, for the probes tried by the optimizer.
            Defaults to 1e-3 so that probes between boundary vertices do not
            report crossings at their own endpoints.
        optimize: Run the corner-cutting pass after planning.
        point_tolerance: Coordinate tolerance for matching ring vertices,
            deduplicating route vertices and the boundary margin of the
            destination check.
        max_depth: Maximum nesting of obstructions before PlanningDepthError.

    Raises:
        ValidationError: If any field is out of range
    """

    tolerance: float = 0.0
    shortcut_tolerance: float = DEFAULT_SHORTCUT_TOLERANCE
    optimize: bool = True
    point_tolerance: float = DEFAULT_POINT_TOLERANCE
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        for name in ("tolerance", "shortcut_tolerance"):
            value = getattr(self, name)
            if not 0.0 <= value < 0.5:
                raise ValidationError(f"{name} must be in [0, 0.5), got {value}")
        if self.point_tolerance < 0:
            raise ValidationError(
                f"point_tolerance must be non-negative, got {self.point_tolerance}"
            )
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValidationError(f"max_depth must be a positive integer, got {self.max_depth!r}")
