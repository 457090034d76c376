from collections.abc import Sequence

from pyvdt.geometry import Edge, Triangle, shares_edge, triangle_edges


class SharedEdgeError(Exception): ...


class NonManifoldEdgeError(Exception): ...


def find_shared_edge(tri1: Triangle, tri2: Triangle) -> Edge | None:
    """
    Find the edge shared by two triangles.

    Returns the edge of `tri1` whose endpoints are both vertices of `tri2`,
    or None if the triangles share at most one vertex.
    Raises SharedEdgeError if the two triangles have the same vertex set.
    """
    shared = [edge for edge in triangle_edges(tri1) if shares_edge(edge, tri2)]
    if not shared:
        return None
    if len(shared) > 1:
        raise SharedEdgeError(
            f"Triangles must share exactly one edge. Shared edges: {shared}"
        )
    return shared[0]


def build_edge_map(triangles: Sequence[Triangle]) -> dict[Edge, list[int]]:
    """Map every edge to the indices of the triangles bounded by it."""
    edge_map: dict[Edge, list[int]] = {}
    for idx, triangle in enumerate(triangles):
        for edge in triangle_edges(triangle):
            edge_map.setdefault(edge, []).append(idx)
    return edge_map


def check_adjacency(
    edge_map: dict[Edge, list[int]], edge: Edge, tri1_idx: int, tri2_idx: int
) -> None:
    """
    Verify that `edge` is bounded by exactly triangles `tri1_idx` and `tri2_idx`.

    Raises NonManifoldEdgeError otherwise.
    """
    owners = edge_map.get(edge, [])
    if sorted(owners) != sorted((tri1_idx, tri2_idx)):
        raise NonManifoldEdgeError(
            f"Edge {edge} is bounded by triangles {owners}, "
            f"expected exactly ({tri1_idx}, {tri2_idx})"
        )
