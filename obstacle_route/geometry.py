"""
Geometry primitives: 2D vectors, route vertices, segments and segment intersection.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union
import math

import numpy as np
from numpy.typing import NDArray

# Default coordinate tolerance used when matching ring vertices and
# deduplicating route vertices.
DEFAULT_POINT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Vector2:
    """
    Immutable 2D vector / point.

    Equality is exact coordinate match; use is_close() when rounding matters.
    """
    x: float
    y: float

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return self.scale(scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def dot(self, other: "Vector2") -> float:
        """Dot product of this vector with other."""
        return self.x * other.x + self.y * other.y

    def scale(self, k: float) -> "Vector2":
        """Scalar multiple of this vector."""
        return Vector2(k * self.x, k * self.y)

    def normal(self) -> "Vector2":
        """This vector rotated by +90 degrees: (x, y) -> (-y, x)."""
        return Vector2(-self.y, self.x)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Vector2") -> float:
        return (other - self).length()

    def signed_angle(self, other: "Vector2") -> float:
        """
        Signed angle in degrees from this vector to other.

        The magnitude comes from acos of the normalized dot product and the
        sign from normal(self)·other, so counter-clockwise turns are positive.
        Returns 0.0 when either vector has zero length.
        """
        denom = math.sqrt(self.dot(self) * other.dot(other))
        if denom == 0:
            return 0.0

        cosine = float(np.clip(self.dot(other) / denom, -1.0, 1.0))
        radians = math.acos(cosine)
        if self.normal().dot(other) < 0:
            radians = -radians
        return float(np.rad2deg(radians))

    def is_close(self, other: "Vector2", tolerance: float = DEFAULT_POINT_TOLERANCE) -> bool:
        """True if both coordinates differ by at most tolerance."""
        return abs(self.x - other.x) <= tolerance and abs(self.y - other.y) <= tolerance

    def to_array(self) -> NDArray[np.float64]:
        """Return the vector as a numpy array of shape (2,)."""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, values: Union[Sequence[float], NDArray[np.floating]]) -> "Vector2":
        return cls(float(values[0]), float(values[1]))


class Side(Enum):
    """Which side of an avoided obstacle a route passes on."""
    LEFT = "L"
    RIGHT = "R"

    def flipped(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


@dataclass(frozen=True)
class PathVertex:
    """
    A route or ring vertex: a point plus path-planning metadata.

    Attributes:
        point: Location of the vertex
        on_obstacle: True for vertices lying on an obstacle boundary
        side: Side of the obstacle the route passes on; None until planning
              assigns it (caller-supplied start and end points)
    """
    point: Vector2
    on_obstacle: bool = False
    side: Optional[Side] = None

    @classmethod
    def at(cls, x: float, y: float, on_obstacle: bool = False,
           side: Optional[Side] = None) -> "PathVertex":
        return cls(Vector2(float(x), float(y)), on_obstacle, side)

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    def with_side(self, side: Optional[Side]) -> "PathVertex":
        return replace(self, side=side)

    def with_flipped_side(self) -> "PathVertex":
        if self.side is None:
            return self
        return replace(self, side=self.side.flipped())

    def on_boundary(self, side: Optional[Side]) -> "PathVertex":
        """Copy tagged as lying on an obstacle, passed on the given side."""
        return replace(self, on_obstacle=True, side=side)


PointLike = Union[PathVertex, Vector2, Sequence[float], NDArray[np.floating]]


def as_vertex(value: PointLike) -> PathVertex:
    """Coerce a PathVertex, Vector2, (x, y) pair or shape (2,) array to a PathVertex."""
    if isinstance(value, PathVertex):
        return value
    if isinstance(value, Vector2):
        return PathVertex(value)
    return PathVertex(Vector2.from_array(value))


def same_point(first: PathVertex, second: PathVertex,
               tolerance: float = DEFAULT_POINT_TOLERANCE) -> bool:
    """Coordinate match of two vertices within tolerance, ignoring metadata."""
    return first.point.is_close(second.point, tolerance)


@dataclass(frozen=True)
class Segment:
    """Directed line segment, used as probe, chord and obstacle edge."""
    start: PathVertex
    end: PathVertex

    @classmethod
    def between(cls, start: PointLike, end: PointLike) -> "Segment":
        return cls(as_vertex(start), as_vertex(end))

    @property
    def vector(self) -> Vector2:
        return self.end.point - self.start.point

    def length(self) -> float:
        return self.vector.length()


def solve_2x2(
    A: float, B: float, a: float, b: float, c: float, d: float
) -> Optional[Tuple[float, float]]:
    """
    Solve the linear system A = a*x + b*y, B = c*x + d*y.

    Returns:
        (x, y), or None if the system is singular (determinant exactly zero)
    """
    denom = b * c - a * d
    if denom == 0:
        return None
    return (b * B - d * A) / denom, (c * A - a * B) / denom


def segment_intersect(first: Segment, second: Segment) -> Optional[Tuple[float, Vector2]]:
    """
    Intersect two segments parametrically.

    Solves a - c = k*(a - b) + m*(d - c) for first = a->b and second = c->d.

    Parameters:
        first: Segment a->b along which k is measured
        second: Segment c->d

    Returns:
        (k, point) where k in [0, 1] is the fraction along first at which the
        crossing occurs, or None if the segments are parallel/collinear or the
        crossing falls outside either segment. Bounds are compared exactly.
    """
    a = first.start.point
    c = second.start.point
    alpha = a - first.end.point
    beta = second.end.point - c

    soln = solve_2x2(a.x - c.x, a.y - c.y, alpha.x, beta.x, alpha.y, beta.y)
    if soln is None:
        return None

    k, m = soln
    if k < 0 or k > 1 or m < 0 or m > 1:
        return None

    return k, a - alpha * k


def path_length(vertices: Sequence[Union[PathVertex, Vector2]]) -> float:
    """Sum of Euclidean distances between consecutive vertices."""
    if len(vertices) < 2:
        return 0.0
    coords = np.array([[v.x, v.y] for v in vertices], dtype=np.float64)
    steps = np.diff(coords, axis=0)
    return float(np.sum(np.hypot(steps[:, 0], steps[:, 1])))


def dedupe_consecutive(
    vertices: Iterable[PathVertex],
    tolerance: float = DEFAULT_POINT_TOLERANCE
) -> List[PathVertex]:
    """Drop vertices that repeat their predecessor's coordinates; the first of a run is kept."""
    result: List[PathVertex] = []
    for vertex in vertices:
        if result and same_point(result[-1], vertex, tolerance):
            continue
        result.append(vertex)
    return result
