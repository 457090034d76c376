from collections.abc import Iterable

from loguru import logger
from shewchuk import orientation

from pyvdt.cavity import find_cavity
from pyvdt.delaunay import Triangulation
from pyvdt.geometry import (
    Edge,
    Point,
    Triangle,
    as_point,
    distance_to_line,
    is_collinear,
    shares_vertex,
    triangle_edges,
)
from pyvdt.utils import EPS, SQRT3, PointLike


class PointOutsideBoundsError(ValueError): ...


def create_supra_triangle(width: float, height: float) -> Triangle:
    """
    Build the bootstrap triangle enclosing the region [0, width] x [0, height].

    The base lies on y = 0 and is extended by h/sqrt(3) on both sides; the apex
    sits above the region at x = width / 2.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Bounds must be positive, got {width}x{height}")

    b = height / SQRT3
    t = width * SQRT3 / 2
    return Triangle(
        (
            Point(-b, 0.0),
            Point(width + b, 0.0),
            Point(width / 2, height + t),
        )
    )


def initialize_triangulation(width: float, height: float) -> Triangulation:
    """
    Initialize the triangulation with the supra-triangle as its only triangle.

    :param width: width of the region holding the input points
    :param height: height of the region holding the input points
    :return: a fresh Triangulation
    """
    supra = create_supra_triangle(width, height)
    triangulation = Triangulation(supra_triangle=supra)
    triangulation.add_triangle(supra)
    return triangulation


def is_outside_triangle(triangle: Triangle, point: Point, eps: float = EPS) -> bool:
    """
    True if `point` is outside `triangle` by more than `eps` times the length of
    the edge it lies beyond.

    The supra-triangle corners are rounded, so points that lie on its sloped sides
    in exact arithmetic (the top corners of the region) can end up a hair outside.
    """
    a, b, c = triangle.vertices
    winding = orientation(a.x, a.y, b.x, b.y, c.x, c.y)
    for edge in triangle_edges(triangle):
        start, end = edge
        if orientation(start.x, start.y, end.x, end.y, point.x, point.y) * winding < 0:
            if distance_to_line(point, start, end) > eps * edge.length:
                return True
    return False


def is_flat_fan_triangle(
    triangulation: Triangulation, point: Point, edge: Edge, eps: float = EPS
) -> bool:
    """
    True if joining `point` to the cavity boundary `edge` gives a zero-area triangle.

    Besides exact collinearity, a point within `eps` of a supra-triangle side
    counts as lying on it.
    """
    if is_collinear(point, edge.a, edge.b):
        return True
    if edge in triangle_edges(triangulation.supra_triangle):
        return distance_to_line(point, edge.a, edge.b) <= eps * edge.length
    return False


def insert_point(triangulation: Triangulation, point: PointLike) -> Triangulation:
    """
    Insert a point into the triangulation (one Bowyer-Watson step).

    Every triangle whose circumcircle contains the point is removed and the
    resulting cavity is re-triangulated by connecting the point to each boundary
    edge. Modifies the triangulation in place.

    :param triangulation: working triangulation, still containing the supra-triangle
    :param point: the point to insert
    :return: the updated triangulation
    """
    p = as_point(point)

    if is_outside_triangle(triangulation.supra_triangle, p):
        raise PointOutsideBoundsError(
            f"Point {p} lies outside the supra-triangle {triangulation.supra_triangle}"
        )

    if p in triangulation.points or p in triangulation.supra_triangle.vertices:
        logger.debug(f"Point {p} coincides with an existing vertex! Not adding it again")
        return triangulation

    cavity = find_cavity(triangulation, p)
    for idx in cavity.bad_triangles:
        triangulation.remove_triangle(idx)

    for edge in cavity.boundary:
        # only happens for points on the current hull
        if is_flat_fan_triangle(triangulation, p, edge):
            logger.trace(f"Skipping degenerate triangle ({p}, {edge.a}, {edge.b})")
            continue
        triangulation.add_triangle(Triangle((p, edge.a, edge.b)))

    triangulation.points.append(p)
    logger.debug(
        f"Inserted {p}: removed {len(cavity.bad_triangles)} triangles, "
        f"{len(triangulation)} triangles in total"
    )
    return triangulation


def remove_supra_triangle_triangles(triangulation: Triangulation) -> None:
    """
    Modify the Triangulation object in-place by removing triangles
    that share a vertex with the supra-triangle.
    """
    to_remove = [
        idx
        for idx, triangle in triangulation.triangles.items()
        if shares_vertex(triangle, triangulation.supra_triangle)
    ]
    for idx in to_remove:
        triangulation.remove_triangle(idx)
    logger.debug(f"Removed {len(to_remove)} triangles touching the supra-triangle")


def build_triangulation(
    points: Iterable[PointLike],
    width: float,
    height: float,
    debug: bool = False,
) -> Triangulation:
    """
    Delaunay triangulation with the Bowyer-Watson algorithm.

    Points are inserted in the given order. With fewer than 3 distinct points no
    triangle can survive the supra-triangle removal, so an empty triangulation is
    returned right away.

    :param points: input points, all within the supra-triangle built from the bounds
    :param width: width of the region holding the points
    :param height: height of the region holding the points
    :param debug: record a plot frame after every insertion (needs matplotlib)
    :return: the final Triangulation, supra-triangle removed
    """
    point_list = [as_point(p) for p in points]
    triangulation = initialize_triangulation(width, height)

    if len(set(point_list)) < 3:
        logger.warning(
            f"Need at least 3 distinct points to triangulate, got {len(set(point_list))}"
        )
        triangulation.triangles.clear()
        return triangulation

    for point_idx, point in enumerate(point_list):
        insert_point(triangulation, point)
        if debug:
            triangulation.plot(title=f"After inserting P{point_idx}")

    remove_supra_triangle_triangles(triangulation)

    if not triangulation.triangles:
        logger.warning("Triangulation is empty, input points are collinear")
    return triangulation


def triangulate(
    points: Iterable[PointLike], width: float, height: float
) -> list[Triangle]:
    """
    Compute the Delaunay triangulation of `points` lying in [0, width] x [0, height].

    :return: list of triangles; empty if fewer than 3 distinct or only collinear points
    """
    return build_triangulation(points, width, height).to_triangles()
