"""
Probe/obstacle intersection scanning.
"""

from dataclasses import dataclass
from typing import List

from obstacle_route.geometry import Segment, Vector2, segment_intersect
from obstacle_route.ring import ObstacleRing

# A detour needs both an entry and an exit crossing.
MIN_OBSTRUCTION_CROSSINGS = 2


@dataclass(frozen=True)
class IntersectionRecord:
    """
    One crossing of a probe segment with an obstacle edge.

    Attributes:
        k: Fraction along the probe at which the crossing occurs
        point: Crossing coordinates
        edge: Obstacle edge that was hit
    """
    k: float
    point: Vector2
    edge: Segment


def edge_intersections(
    probe: Segment,
    ring: ObstacleRing,
    tolerance: float = 0.0
) -> List[IntersectionRecord]:
    """
    Intersect a probe with every edge of a ring.

    Crossings within tolerance (a fraction of the probe length) of either
    probe endpoint are discarded, so probes starting or ending on the
    boundary do not register there.

    Parameters:
        probe: Segment being tested
        ring: Obstacle boundary
        tolerance: Keep crossings with tolerance <= k <= 1 - tolerance

    Returns:
        Qualifying records sorted by ascending k (stable for equal k)
    """
    records: List[IntersectionRecord] = []
    for edge in ring.edges():
        hit = segment_intersect(probe, edge)
        if hit is None:
            continue
        k, point = hit
        if tolerance <= k <= 1 - tolerance:
            records.append(IntersectionRecord(k=k, point=point, edge=edge))

    records.sort(key=lambda record: record.k)
    return records


def scan_obstacle(
    probe: Segment,
    ring: ObstacleRing,
    tolerance: float = 0.0
) -> List[IntersectionRecord]:
    """
    Report how a probe is obstructed by a ring.

    Same records as edge_intersections(), except that fewer than two
    qualifying crossings count as no obstruction and yield an empty list:
    a lone crossing is a graze (or an endpoint inside the obstacle) and
    gives no entry/exit pair to detour between.
    """
    records = edge_intersections(probe, ring, tolerance)
    if len(records) < MIN_OBSTRUCTION_CROSSINGS:
        return []
    return records
