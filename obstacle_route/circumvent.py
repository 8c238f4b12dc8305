"""
Walking an obstacle boundary between two of its vertices.
"""

import logging
from typing import List

from obstacle_route.geometry import DEFAULT_POINT_TOLERANCE, PathVertex, Segment, path_length
from obstacle_route.ring import ObstacleRing

logger = logging.getLogger(__name__)


def circumvent(
    chord: Segment,
    ring: ObstacleRing,
    clockwise: bool,
    point_tolerance: float = DEFAULT_POINT_TOLERANCE
) -> List[PathVertex]:
    """
    Walk along ring from chord.start to chord.end.

    The ring is rotated so the walk starts at chord.start, reversed when
    walking counter-clockwise, then cut at the first occurrence of chord.end.
    A chord with coinciding endpoints yields the single vertex [chord.start].

    Parameters:
        chord: Entry and exit vertices, both of which must be ring vertices
        ring: Obstacle boundary, stored in clockwise order
        clockwise: True walks the stored order, False walks it backwards
        point_tolerance: Tolerance used to locate the chord endpoints

    Returns:
        Boundary vertices from chord.start to chord.end inclusive, tagged
        with the side of the chosen walking direction

    Raises:
        SplitPointNotFoundError: If either chord endpoint is not on the ring
    """
    split = ring.split(chord.start, point_tolerance)
    walk = ObstacleRing(split.after).concatenate(split.before)

    if not clockwise:
        walk.reverse()

    return list(walk.split(chord.end, point_tolerance).before)


def min_circumvent(
    chord: Segment,
    ring: ObstacleRing,
    point_tolerance: float = DEFAULT_POINT_TOLERANCE
) -> List[PathVertex]:
    """Shorter of the clockwise and counter-clockwise walks (ties go counter-clockwise)."""
    cw_path = circumvent(chord, ring, True, point_tolerance)
    ccw_path = circumvent(chord, ring, False, point_tolerance)

    cw_length = path_length(cw_path)
    ccw_length = path_length(ccw_path)
    logger.debug("circumvent lengths: clockwise=%.6g counter-clockwise=%.6g", cw_length, ccw_length)

    return cw_path if cw_length < ccw_length else ccw_path
