"""
Corner cutting: greedy removal of route waypoints.
"""

import logging
from typing import List, Sequence

from obstacle_route.config import DEFAULT_MAX_DEPTH
from obstacle_route.debug import format_path, format_point
from obstacle_route.geometry import (
    DEFAULT_POINT_TOLERANCE,
    PathVertex,
    Segment,
    Side,
    path_length,
)
from obstacle_route.planner import find_path
from obstacle_route.ring import ObstacleRing

logger = logging.getLogger(__name__)


def optimize_path(
    route: List[PathVertex],
    obstacles: Sequence[ObstacleRing],
    tolerance: float = 0.0,
    *,
    point_tolerance: float = DEFAULT_POINT_TOLERANCE,
    max_depth: int = DEFAULT_MAX_DEPTH
) -> int:
    """
    Shorten a route in place by cutting corners.

    Sweeps left to right over (anchor, candidate, next) triples. When the
    turn at candidate points away from the obstacle it was routed around,
    the path from anchor straight to next is planned; if that is shorter,
    it replaces candidate and the same next vertex is examined again.

    A splice can open a shortcut behind the cursor, so sweeps repeat until
    one applies no shortcut. The result is a fixed point: running
    optimize_path() on its own output changes nothing.

    Parameters:
        route: Route to shorten, modified in place
        obstacles: Obstacle rings the shortcuts are planned against
        tolerance: Endpoint tolerance for shortcut probes
        point_tolerance: Coordinate tolerance passed to find_path()
        max_depth: Obstruction nesting limit passed to find_path()

    Returns:
        Number of shortcuts applied
    """
    shortcuts = 0
    sweeps = 0
    while True:
        applied = _sweep(route, obstacles, tolerance, point_tolerance, max_depth)
        sweeps += 1
        if not applied:
            break
        shortcuts += applied

    logger.debug("optimization done after %d shortcut(s) in %d sweep(s)", shortcuts, sweeps)
    return shortcuts


def _sweep(
    route: List[PathVertex],
    obstacles: Sequence[ObstacleRing],
    tolerance: float,
    point_tolerance: float,
    max_depth: int
) -> int:
    """One left-to-right corner-cutting pass; returns the shortcuts applied."""
    shortcuts = 0
    cursor = 2
    while cursor < len(route):
        anchor, candidate, nxt = route[cursor - 2], route[cursor - 1], route[cursor]

        if not _turn_allows_shortcut(anchor, candidate, nxt):
            cursor += 1
            continue

        alternative = find_path(
            Segment(anchor, nxt), obstacles, tolerance,
            point_tolerance=point_tolerance, max_depth=max_depth
        )
        if path_length(alternative) >= path_length([anchor, candidate, nxt]):
            cursor += 1
            continue

        interior = alternative[1:-1]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s replaced by %s", format_point(candidate),
                format_path(interior) if interior else "nothing"
            )
        route[cursor - 1:cursor] = interior
        shortcuts += 1
        # Stay on the same next vertex so the new corner is examined too
        cursor = max(cursor - 1 + len(interior), 2)

    return shortcuts


def _turn_allows_shortcut(anchor: PathVertex, candidate: PathVertex, nxt: PathVertex) -> bool:
    """
    Sign test on the corner at candidate.

    A shortcut is only worth planning when next lies on the side of
    anchor->candidate away from the obstacle candidate was routed around.
    Untagged candidates are always tried.
    """
    if candidate.side is None:
        return True

    v = candidate.point - anchor.point
    w = nxt.point - anchor.point
    vperp = v.normal()
    if candidate.side is Side.RIGHT:
        vperp = -vperp
    return vperp.dot(w) > 0
