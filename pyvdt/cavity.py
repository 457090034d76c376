from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from pyvdt.delaunay import Triangulation
from pyvdt.geometry import Edge, Triangle, is_inside_circumcircle, triangle_edges
from pyvdt.utils import PointLike


@dataclass
class Cavity:
    bad_triangles: list[int]
    boundary: list[Edge]


def find_bad_triangles(triangulation: Triangulation, point: PointLike) -> list[int]:
    """Ids of the triangles whose circumcircle contains `point` (boundary included)."""
    return [
        idx
        for idx, triangle in triangulation.triangles.items()
        if is_inside_circumcircle(point, triangle)
    ]


def extract_boundary(bad_triangles: Sequence[Triangle]) -> list[Edge]:
    """
    Boundary polygon of the cavity formed by the given triangles.

    An edge is on the boundary iff no other bad triangle contains both of its
    endpoints. In a planar triangulation an edge bounds at most two triangles,
    so interior edges show up exactly twice and cancel out.

    :param bad_triangles: triangles invalidated by the new point
    :return: boundary edges, in triangle order then edge order
    """
    edges = [edge for triangle in bad_triangles for edge in triangle_edges(triangle)]
    counts = Counter(edges)
    return [edge for edge in edges if counts[edge] == 1]


def find_cavity(triangulation: Triangulation, point: PointLike) -> Cavity:
    bad_ids = find_bad_triangles(triangulation, point)
    boundary = extract_boundary([triangulation.triangles[idx] for idx in bad_ids])
    logger.trace(
        f"Cavity for {point}: {len(bad_ids)} bad triangles, {len(boundary)} boundary edges"
    )
    return Cavity(bad_triangles=bad_ids, boundary=boundary)
