"""
Recursive obstacle-avoiding path finder.

A straight segment is checked against the obstacles in order. The first
obstacle that blocks it is walked around (whichever way is shorter), and the
pieces before and after the detour are planned again against the obstacles
that follow it in the list.
"""

import logging
from typing import List, Sequence, Tuple

from obstacle_route.circumvent import circumvent
from obstacle_route.config import DEFAULT_MAX_DEPTH
from obstacle_route.debug import format_path, format_segment
from obstacle_route.errors import DestinationInsideObstacleError, PlanningDepthError
from obstacle_route.geometry import (
    DEFAULT_POINT_TOLERANCE,
    PathVertex,
    Segment,
    dedupe_consecutive,
    path_length,
)
from obstacle_route.ring import ObstacleRing
from obstacle_route.scan import IntersectionRecord, scan_obstacle

logger = logging.getLogger(__name__)


def find_path(
    segment: Segment,
    obstacles: Sequence[ObstacleRing],
    tolerance: float = 0.0,
    *,
    point_tolerance: float = DEFAULT_POINT_TOLERANCE,
    max_depth: int = DEFAULT_MAX_DEPTH
) -> List[PathVertex]:
    """
    Plan a route along segment that detours around obstacles.

    Only the first and last crossing of each blocking obstacle are used; a
    probe that leaves and re-enters an obstacle is treated as one obstruction.

    Parameters:
        segment: Travel segment from start to destination
        obstacles: Obstacle rings, scanned in order
        tolerance: Fraction of a probe's length near its endpoints within
            which crossings are ignored
        point_tolerance: Coordinate tolerance for vertex matching and dedup
        max_depth: Maximum nesting of obstructions

    Returns:
        Route from segment.start to segment.end

    Raises:
        DestinationInsideObstacleError: If segment.end lies inside an obstacle
        PlanningDepthError: If obstructions nest deeper than max_depth
    """
    rings = tuple(obstacles)
    for index, ring in enumerate(rings):
        if ring.contains(segment.end, point_tolerance):
            raise DestinationInsideObstacleError(segment.end.point, index)

    return _find_path(segment, rings, 0, tolerance, point_tolerance, 1, max_depth)


def detour_candidates(
    records: Sequence[IntersectionRecord],
    ring: ObstacleRing,
    point_tolerance: float = DEFAULT_POINT_TOLERANCE
) -> Tuple[List[PathVertex], List[PathVertex]]:
    """
    Both ways around an obstacle between its first and last crossing.

    Parameters:
        records: Crossings sorted by k, at least two
        ring: The obstacle crossed

    Returns:
        (clockwise, counter_clockwise) detours, each running from the entry
        crossing to the exit crossing, which are tagged on_obstacle and with
        the side of the walk they frame
    """
    edge_in = records[0].edge
    edge_out = records[-1].edge
    entry = PathVertex(records[0].point)
    exit_ = PathVertex(records[-1].point)

    clockwise_arc = circumvent(Segment(edge_in.end, edge_out.start), ring, True, point_tolerance)
    counter_arc = circumvent(Segment(edge_in.start, edge_out.end), ring, False, point_tolerance)

    detours = []
    for arc in (clockwise_arc, counter_arc):
        side = arc[0].side
        detours.append([entry.on_boundary(side)] + arc + [exit_.on_boundary(side)])
    return detours[0], detours[1]


def _find_path(
    segment: Segment,
    rings: Tuple[ObstacleRing, ...],
    first: int,
    tolerance: float,
    point_tolerance: float,
    depth: int,
    max_depth: int
) -> List[PathVertex]:
    # -------------------------------------------------------------------------
    # Skip obstacles that do not block this segment
    # -------------------------------------------------------------------------
    index = first
    records: List[IntersectionRecord] = []
    while index < len(rings):
        records = scan_obstacle(segment, rings[index], tolerance)
        if records:
            break
        index += 1

    if index > first and logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s passes %d obstacle(s) unobstructed", format_segment(segment), index - first)

    if not records:
        return [segment.start, segment.end]

    if depth > max_depth:
        raise PlanningDepthError(max_depth)

    # -------------------------------------------------------------------------
    # Walk around the blocking obstacle, the shorter way
    # -------------------------------------------------------------------------
    ring = rings[index]
    clockwise, counter = detour_candidates(records, ring, point_tolerance)
    clockwise_length = path_length(clockwise)
    counter_length = path_length(counter)
    detour = clockwise if clockwise_length < counter_length else counter

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "obstacle %d blocks %s (%d crossings); detour lengths cw=%.6g ccw=%.6g, chose %s",
            index, format_segment(segment), len(records), clockwise_length, counter_length,
            "cw" if detour is clockwise else "ccw",
        )
        logger.debug("detour %s", format_path(detour))

    # -------------------------------------------------------------------------
    # Plan the approach and the departure against the remaining obstacles
    # -------------------------------------------------------------------------
    entry, exit_ = detour[0], detour[-1]
    prefix = _find_path(
        Segment(segment.start, entry), rings, index + 1,
        tolerance, point_tolerance, depth + 1, max_depth
    )
    suffix = _find_path(
        Segment(exit_, segment.end), rings, index + 1,
        tolerance, point_tolerance, depth + 1, max_depth
    )

    route = dedupe_consecutive(prefix[:-1] + detour + suffix[1:], point_tolerance)
    # A crossing computed at k == 0 or 1 may absorb an endpoint; the endpoints
    # themselves are returned exactly as given.
    route[0] = segment.start
    if len(route) > 1:
        route[-1] = segment.end
    else:
        route.append(segment.end)
    return route
