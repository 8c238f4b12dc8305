"""
Obstacle rings: closed polygon boundaries built from PathVertex sequences.

Rings are closed internally. Callers pass the open vertex list (a trailing
copy of the first vertex is accepted and stripped) and edges() supplies the
closing edge. Rings built by from_points are normalized to clockwise winding,
so walking the stored order is a clockwise walk around the obstacle.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from obstacle_route.errors import SplitPointNotFoundError, ValidationError
from obstacle_route.geometry import (
    DEFAULT_POINT_TOLERANCE,
    PathVertex,
    PointLike,
    Segment,
    Side,
    Vector2,
    as_vertex,
    same_point,
)

# Tag carried by ring vertices walked in stored (clockwise) order: the
# obstacle stays on the traveller's right, so the route passes on its left.
CLOCKWISE_SIDE = Side.LEFT


@dataclass(frozen=True)
class SplitResult:
    """
    Result of splitting a ring at one of its vertices.

    Attributes:
        index: Zero-based index of the split vertex
        before: Vertices up to and including the split vertex
        after: Vertices from the split vertex (inclusive) to the end
    """
    index: int
    before: Tuple[PathVertex, ...]
    after: Tuple[PathVertex, ...]


class ObstacleRing:
    """Ordered, closed sequence of PathVertex forming a polygon boundary."""

    def __init__(self, vertices: Iterable[PathVertex] = ()):
        self._vertices: List[PathVertex] = list(vertices)

    @classmethod
    def from_points(
        cls,
        points: Union[Sequence[PointLike], NDArray[np.floating]],
        point_tolerance: float = DEFAULT_POINT_TOLERANCE
    ) -> "ObstacleRing":
        """
        Build a validated obstacle ring from raw points.

        Parameters:
            points: (N, 2) array or sequence of points, open or closed
            point_tolerance: Tolerance used to detect repeated vertices

        Returns:
            Clockwise ring whose vertices are flagged on_obstacle

        Raises:
            ValidationError: If points are malformed, have fewer than 3
                distinct vertices or enclose no area
        """
        if not isinstance(points, np.ndarray):
            points = list(points)
        try:
            if len(points) and all(isinstance(p, (PathVertex, Vector2)) for p in points):
                coords = np.array([[p.x, p.y] for p in points], dtype=np.float64)
            else:
                coords = np.asarray(points, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"ring points must be numeric (x, y) pairs: {e}") from e
        if coords.size == 0:
            coords = coords.reshape(0, 2)

        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValidationError(f"ring points must have shape (N, 2), got {coords.shape}")
        if not np.all(np.isfinite(coords)):
            raise ValidationError("ring points must be finite")

        distinct: List[NDArray[np.float64]] = []
        for row in coords:
            if distinct and np.all(np.abs(row - distinct[-1]) <= point_tolerance):
                continue
            distinct.append(row)
        if len(distinct) > 1 and np.all(np.abs(distinct[0] - distinct[-1]) <= point_tolerance):
            distinct.pop()

        if len(distinct) < 3:
            raise ValidationError(
                f"ring must have at least 3 distinct vertices, got {len(distinct)}"
            )

        ring_coords = np.array(distinct)
        area = _shoelace_area(ring_coords)
        if area == 0:
            raise ValidationError("ring encloses zero area")
        if area > 0:
            ring_coords = ring_coords[::-1]

        return cls(
            PathVertex(Vector2(float(x), float(y)), on_obstacle=True, side=CLOCKWISE_SIDE)
            for x, y in ring_coords
        )

    @property
    def vertices(self) -> Tuple[PathVertex, ...]:
        return tuple(self._vertices)

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[PathVertex]:
        return iter(self._vertices)

    def __getitem__(self, index: int) -> PathVertex:
        return self._vertices[index]

    def __repr__(self) -> str:
        return f"ObstacleRing({len(self._vertices)} vertices)"

    def copy(self) -> "ObstacleRing":
        return ObstacleRing(self._vertices)

    def is_closed_walk(self) -> bool:
        """True if the stored sequence already ends on its first vertex."""
        return len(self._vertices) > 1 and self._vertices[0].point == self._vertices[-1].point

    def find(self, point: PointLike, tolerance: float = DEFAULT_POINT_TOLERANCE) -> int:
        """Index of the first vertex matching point within tolerance, or -1."""
        target = as_vertex(point)
        for i, vertex in enumerate(self._vertices):
            if same_point(vertex, target, tolerance):
                return i
        return -1

    def split(self, at: PointLike, tolerance: float = DEFAULT_POINT_TOLERANCE) -> SplitResult:
        """
        Split the ring at the first vertex matching at.

        Both arcs include the split vertex.

        Raises:
            SplitPointNotFoundError: If no vertex matches at
        """
        index = self.find(at, tolerance)
        if index < 0:
            raise SplitPointNotFoundError(as_vertex(at).point, len(self._vertices))
        return SplitResult(
            index=index,
            before=tuple(self._vertices[:index + 1]),
            after=tuple(self._vertices[index:]),
        )

    def reverse(self) -> None:
        """Reverse traversal direction in place, flipping every vertex's side tag."""
        self._vertices.reverse()
        self._vertices = [v.with_flipped_side() for v in self._vertices]

    def concatenate(self, other: Union["ObstacleRing", Sequence[PathVertex]]) -> "ObstacleRing":
        """New ring holding this ring's vertices followed by other's."""
        return ObstacleRing(list(self._vertices) + list(other))

    def edges(self) -> List[Segment]:
        """Consecutive vertex pairs, plus the closing edge unless already closed."""
        vertices = self._vertices
        edges = [Segment(vertices[i], vertices[i + 1]) for i in range(len(vertices) - 1)]
        if len(vertices) > 2 and not self.is_closed_walk():
            edges.append(Segment(vertices[-1], vertices[0]))
        return edges

    def points_array(self) -> NDArray[np.float64]:
        """Vertex coordinates as an (N, 2) array."""
        if not self._vertices:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array([[v.x, v.y] for v in self._vertices], dtype=np.float64)

    def signed_area(self) -> float:
        """Shoelace area; positive for counter-clockwise winding."""
        return _shoelace_area(self.points_array())

    def is_clockwise(self) -> bool:
        return self.signed_area() < 0

    def contains(self, point: PointLike, tolerance: float = DEFAULT_POINT_TOLERANCE) -> bool:
        """
        Strict interior test (even-odd rule).

        Points within tolerance of the boundary are reported as outside.
        """
        coords = self.points_array()
        if self.is_closed_walk():
            coords = coords[:-1]
        if coords.shape[0] < 3:
            return False

        p = as_vertex(point).point.to_array()
        starts = coords
        ends = np.roll(coords, -1, axis=0)

        # Distance from point to every edge
        seg = ends - starts
        rel = p - starts
        seg_len_sq = np.sum(seg * seg, axis=1)
        t = np.divide(
            np.sum(rel * seg, axis=1), seg_len_sq,
            out=np.zeros_like(seg_len_sq), where=seg_len_sq > 0
        )
        nearest = starts + np.clip(t, 0.0, 1.0)[:, None] * seg
        offsets = p - nearest
        if np.any(np.hypot(offsets[:, 0], offsets[:, 1]) <= tolerance):
            return False

        # Cast a ray towards +x and count edge crossings
        y0 = starts[:, 1]
        y1 = ends[:, 1]
        straddles = (y0 > p[1]) != (y1 > p[1])
        with np.errstate(divide='ignore', invalid='ignore'):
            x_cross = starts[:, 0] + (p[1] - y0) * seg[:, 0] / (y1 - y0)
        crossings = np.count_nonzero(straddles & (x_cross > p[0]))
        return bool(crossings % 2 == 1)


def _shoelace_area(coords: NDArray[np.float64]) -> float:
    if coords.shape[0] < 3:
        return 0.0
    x = coords[:, 0]
    y = coords[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))
