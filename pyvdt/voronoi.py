from collections.abc import Iterable
from itertools import combinations

from loguru import logger

from pyvdt.geometry import Point, Segment, Triangle, as_triangle
from pyvdt.topology import build_edge_map, check_adjacency, find_shared_edge
from pyvdt.utils import TriangleLike


def circumcenters(triangles: Iterable[Triangle | TriangleLike]) -> list[Point]:
    return [as_triangle(t).circumcircle().center for t in triangles]


def voronoi(triangles: Iterable[Triangle | TriangleLike]) -> list[Segment]:
    """
    Derive the Voronoi diagram as the dual of a Delaunay triangulation.

    Every pair of triangles sharing an edge contributes the segment joining their
    circumcenters. Edges on the hull have a single triangle and contribute nothing,
    so the diagram stays open there (no clipping).

    Parameters
    ----------
    triangles : Iterable[Triangle | TriangleLike]
        Final triangulation. It is copied into a list and never modified.

    Returns
    -------
    list[Segment]
        Voronoi segments without duplicates; (a, b) and (b, a) count as the same.
        Cocircular neighbours produce a zero-length segment.

    Raises
    ------
    NonManifoldEdgeError
        If an edge is bounded by more than two triangles.
    SharedEdgeError
        If two triangles have the same vertex set.
    """
    snapshot = [as_triangle(t) for t in triangles]
    centers = circumcenters(snapshot)
    edge_map = build_edge_map(snapshot)

    diagram: list[Segment] = []
    seen: set[Segment] = set()
    for i, j in combinations(range(len(snapshot)), 2):
        edge = find_shared_edge(snapshot[i], snapshot[j])
        if edge is None:
            continue
        check_adjacency(edge_map, edge, i, j)

        segment = Segment(centers[i], centers[j])
        if segment in seen:
            continue
        seen.add(segment)
        diagram.append(segment)

    logger.debug(
        f"Voronoi diagram: {len(diagram)} segments from {len(snapshot)} triangles"
    )
    return diagram
