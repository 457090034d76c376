import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np
from shewchuk import orientation

from pyvdt.utils import PointLike, TriangleLike


class MalformedTriangleError(ValueError): ...


class DegenerateTriangleError(ValueError): ...


@dataclass(frozen=True, order=True)
class Point:
    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y])


@dataclass(frozen=True, eq=False)
class Edge:
    """Unordered pair of points: (a, b) and (b, a) are the same edge."""

    a: Point
    b: Point

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return {self.a, self.b} == {other.a, other.b}

    def __hash__(self) -> int:
        return hash(frozenset((self.a, self.b)))

    def __iter__(self) -> Iterator[Point]:
        yield self.a
        yield self.b

    @property
    def length(self) -> float:
        return math.sqrt((self.a.x - self.b.x) ** 2 + (self.a.y - self.b.y) ** 2)


# A Voronoi segment joins two circumcenters
Segment: TypeAlias = Edge


@dataclass(frozen=True)
class Circumcircle:
    center: Point
    radius: float

    def contains(self, point: PointLike) -> bool:
        """Inclusive test: a point on the circle counts as inside."""
        p = as_point(point)
        dx = self.center.x - p.x
        dy = self.center.y - p.y
        return math.sqrt(dx * dx + dy * dy) <= self.radius


@dataclass(frozen=True, eq=False)
class Triangle:
    """
    Unordered triple of points.

    Equality and hashing ignore the vertex order, so (a, b, c) == (c, a, b) == (b, a, c).
    Building a triangle from anything other than exactly three points raises
    MalformedTriangleError.
    """

    vertices: tuple[Point, Point, Point]

    def __post_init__(self) -> None:
        vertices = tuple(as_point(v) for v in self.vertices)
        if len(vertices) != 3:
            raise MalformedTriangleError(
                f"Triangle should have exactly 3 points, got {len(vertices)}"
            )
        object.__setattr__(self, "vertices", vertices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Triangle):
            return NotImplemented
        return sorted(self.vertices) == sorted(other.vertices)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.vertices)))

    def __iter__(self) -> Iterator[Point]:
        return iter(self.vertices)

    def __repr__(self) -> str:
        a, b, c = self.vertices
        return f"Triangle(({a.x}, {a.y}), ({b.x}, {b.y}), ({c.x}, {c.y}))"

    def circumcircle(self) -> Circumcircle:
        return circumcircle(*self.vertices)

    def as_array(self) -> np.ndarray:
        return np.array([[v.x, v.y] for v in self.vertices])


def as_point(point: PointLike) -> Point:
    if isinstance(point, Point):
        return point
    coords = np.asarray(point, dtype=float)
    if coords.shape != (2,):
        raise ValueError(f"Expected a 2D point, got shape {coords.shape}")
    return Point(float(coords[0]), float(coords[1]))


def as_triangle(triangle: Triangle | TriangleLike) -> Triangle:
    if isinstance(triangle, Triangle):
        return triangle
    return Triangle(tuple(triangle))  # type: ignore[reportArgumentType]


def is_collinear(p1: PointLike, p2: PointLike, p3: PointLike) -> bool:
    """Exact collinearity check based on Shewchuk's orientation predicate."""
    a, b, c = as_point(p1), as_point(p2), as_point(p3)
    return orientation(a.x, a.y, b.x, b.y, c.x, c.y) == 0


def distance_to_line(point: PointLike, a: PointLike, b: PointLike) -> float:
    """Unsigned distance from `point` to the line through `a` and `b`."""
    p, a, b = as_point(point), as_point(a), as_point(b)
    cross = (b.x - a.x) * (p.y - a.y) - (b.y - a.y) * (p.x - a.x)
    return abs(cross) / math.hypot(b.x - a.x, b.y - a.y)


def circumcircle(p1: PointLike, p2: PointLike, p3: PointLike) -> Circumcircle:
    """
    Compute the unique circle passing through three points.

    Parameters
    ----------
    p1, p2, p3 : PointLike
        Triangle vertices, in any order.

    Returns
    -------
    Circumcircle
        Center and radius of the circle.

    Raises
    ------
    DegenerateTriangleError
        If the points are collinear. Collinearity is decided with the exact
        orientation predicate and, as a second guard, by a zero denominator in
        floating point, so non-finite centers are never returned.
    """
    p1, p2, p3 = as_point(p1), as_point(p2), as_point(p3)
    if is_collinear(p1, p2, p3):
        raise DegenerateTriangleError(f"Points {p1}, {p2}, {p3} are collinear")

    d = 2 * (p1.x * (p2.y - p3.y) + p2.x * (p3.y - p1.y) + p3.x * (p1.y - p2.y))
    if d == 0:
        raise DegenerateTriangleError(
            f"Points {p1}, {p2}, {p3} are numerically collinear"
        )

    sq1 = p1.x * p1.x + p1.y * p1.y
    sq2 = p2.x * p2.x + p2.y * p2.y
    sq3 = p3.x * p3.x + p3.y * p3.y
    ux = (sq1 * (p2.y - p3.y) + sq2 * (p3.y - p1.y) + sq3 * (p1.y - p2.y)) / d
    uy = (sq1 * (p3.x - p2.x) + sq2 * (p1.x - p3.x) + sq3 * (p2.x - p1.x)) / d

    radius = math.sqrt((p1.x - ux) ** 2 + (p1.y - uy) ** 2)
    return Circumcircle(center=Point(ux, uy), radius=radius)


def is_inside_circumcircle(point: PointLike, triangle: Triangle | TriangleLike) -> bool:
    """
    Check whether a point lies within the circumcircle of a triangle.

    Points exactly on the circle are reported as inside.
    """
    return as_triangle(triangle).circumcircle().contains(point)


def triangle_edges(triangle: Triangle | TriangleLike) -> tuple[Edge, Edge, Edge]:
    a, b, c = as_triangle(triangle).vertices
    return Edge(a, b), Edge(b, c), Edge(c, a)


def shares_edge(edge: Edge, triangle: Triangle) -> bool:
    # both endpoints must be vertices of the triangle
    return edge.a in triangle.vertices and edge.b in triangle.vertices


def shares_vertex(t1: Triangle, t2: Triangle) -> bool:
    return any(v in t2.vertices for v in t1.vertices)
