"""Query functions for checking triangulation results."""

from collections.abc import Iterable

from shewchuk import incircle_test, orientation

from pyvdt.geometry import Point, Triangle, as_point, as_triangle
from pyvdt.utils import PointLike, TriangleLike


def _orient(a: Point, b: Point, c: Point) -> int:
    return orientation(a.x, a.y, b.x, b.y, c.x, c.y)


def convex_hull(points: Iterable[PointLike]) -> list[Point]:
    """
    Convex hull with Andrew's monotone chain.

    Returns the hull vertices in counterclockwise order, without collinear points
    along the hull edges. Duplicated input points are ignored.
    """
    pts = sorted({as_point(p) for p in points})
    if len(pts) < 3:
        return pts

    lower: list[Point] = []
    for p in pts:
        while len(lower) >= 2 and _orient(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: list[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and _orient(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    # last point of each chain is the first of the other
    return lower[:-1] + upper[:-1]


def is_strictly_inside_circumcircle(point: Point, triangle: Triangle) -> bool:
    """
    Exact in-circle test with Shewchuk's predicate.

    Unlike `is_inside_circumcircle`, points on the circle are not inside.
    """
    a, b, c = triangle.vertices
    if _orient(a, b, c) < 0:
        b, c = c, b
    return incircle_test(point.x, point.y, a.x, a.y, b.x, b.y, c.x, c.y) > 0


def find_delaunay_violations(
    triangles: Iterable[Triangle | TriangleLike],
    points: Iterable[PointLike],
) -> list[tuple[Triangle, Point]]:
    """
    Find (triangle, point) pairs breaking the empty-circumcircle property.

    :param triangles: triangulation to check
    :param points: input points
    :return: every pair where a point that is not a vertex of the triangle lies
        strictly inside its circumcircle
    """
    tris = [as_triangle(t) for t in triangles]
    pts = [as_point(p) for p in points]
    return [
        (triangle, point)
        for triangle in tris
        for point in pts
        if point not in triangle.vertices
        and is_strictly_inside_circumcircle(point, triangle)
    ]


def is_delaunay(
    triangles: Iterable[Triangle | TriangleLike],
    points: Iterable[PointLike],
) -> bool:
    return not find_delaunay_violations(triangles, points)
