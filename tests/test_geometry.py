"""Tests for geometry primitives and predicates (pyvdt/geometry.py)."""

import math

import numpy as np
import pytest

from pyvdt.geometry import (
    DegenerateTriangleError,
    Edge,
    MalformedTriangleError,
    Point,
    Triangle,
    circumcircle,
    is_inside_circumcircle,
    shares_edge,
    shares_vertex,
    triangle_edges,
)


class TestPrimitives:
    """Tests for value semantics of Point, Edge and Triangle."""

    def test_point_value_equality(self):
        """Points with equal coordinates are the same point."""
        assert Point(1.0, 2.0) == Point(1.0, 2.0)
        assert hash(Point(1.0, 2.0)) == hash(Point(1.0, 2.0))
        assert Point(1.0, 2.0) != Point(2.0, 1.0)

    def test_edge_is_unordered(self):
        """An edge equals its reversed version."""
        a, b = Point(0.0, 0.0), Point(1.0, 1.0)
        assert Edge(a, b) == Edge(b, a)
        assert len({Edge(a, b), Edge(b, a)}) == 1

    def test_triangle_is_unordered(self):
        """Triangle equality ignores the vertex order."""
        t1 = Triangle(((0, 0), (4, 0), (0, 4)))
        t2 = Triangle(((0, 4), (0, 0), (4, 0)))
        assert t1 == t2
        assert hash(t1) == hash(t2)

    def test_triangle_from_numpy(self):
        """Triangles can be built from a (3, 2) array."""
        t = Triangle(np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]))
        assert t.vertices[1] == Point(1.0, 0.0)
        assert t.as_array().shape == (3, 2)

    @pytest.mark.parametrize(
        "vertices",
        [
            ((0, 0), (1, 0)),
            ((0, 0), (1, 0), (0, 1), (1, 1)),
        ],
    )
    def test_wrong_arity_raises(self, vertices):
        """Anything but 3 vertices is a malformed triangle."""
        with pytest.raises(MalformedTriangleError):
            Triangle(vertices)

    def test_triangle_edges(self):
        """A triangle decomposes into 3 edges covering all vertex pairs."""
        a, b, c = Point(0, 0), Point(1, 0), Point(0, 1)
        edges = triangle_edges(Triangle((a, b, c)))
        assert set(edges) == {Edge(a, b), Edge(b, c), Edge(c, a)}

    def test_triangle_edges_malformed(self):
        """Edge extraction rejects malformed triangles."""
        with pytest.raises(MalformedTriangleError):
            triangle_edges([(0, 0), (1, 0)])

    def test_shares_edge_and_vertex(self):
        """Sharing is decided by coordinate values."""
        t1 = Triangle(((0, 0), (2, 0), (1, 1)))
        t2 = Triangle(((2.0, 0.0), (0.0, 0.0), (1.0, -1.0)))
        t3 = Triangle(((2, 0), (3, 0), (3, 1)))
        assert shares_edge(Edge(Point(0, 0), Point(2, 0)), t2)
        assert not shares_edge(Edge(Point(0, 0), Point(1, 1)), t2)
        assert shares_vertex(t1, t3)
        assert not shares_vertex(t2, Triangle(((5, 5), (6, 5), (5, 6))))


class TestCircumcircle:
    """Tests for the circumcircle solver."""

    def test_right_triangle(self):
        """The circumcenter of a right triangle is the hypotenuse midpoint."""
        circle = circumcircle((0, 0), (4, 0), (0, 4))
        assert circle.center == Point(2.0, 2.0)
        assert math.isclose(circle.radius, 2 * math.sqrt(2))

    def test_vertex_order_does_not_matter(self):
        """Permuting the vertices gives the same circle."""
        c1 = circumcircle((1, 1), (5, 2), (3, 7))
        c2 = circumcircle((3, 7), (1, 1), (5, 2))
        assert math.isclose(c1.center.x, c2.center.x)
        assert math.isclose(c1.center.y, c2.center.y)
        assert math.isclose(c1.radius, c2.radius)

    def test_all_vertices_on_circle(self):
        """Each vertex is at distance radius from the center."""
        pts = [Point(1.5, -2.0), Point(7.0, 3.0), Point(-4.0, 6.5)]
        circle = circumcircle(*pts)
        for p in pts:
            d = math.hypot(p.x - circle.center.x, p.y - circle.center.y)
            assert math.isclose(d, circle.radius)

    def test_collinear_points_raise(self):
        """Collinear points don't define a circle."""
        with pytest.raises(DegenerateTriangleError):
            circumcircle((0, 0), (1, 1), (2, 2))

    def test_repeated_point_raises(self):
        """Two coincident vertices are degenerate too."""
        with pytest.raises(DegenerateTriangleError):
            circumcircle((0, 0), (0, 0), (1, 2))

    def test_degenerate_triangle_method(self):
        """Triangle.circumcircle goes through the same checks."""
        with pytest.raises(DegenerateTriangleError):
            Triangle(((0, 0), (1, 0), (2, 0))).circumcircle()


class TestInsideCircumcircle:
    """Tests for the point-in-circumcircle predicate."""

    triangle = Triangle(((0, 0), (4, 0), (0, 4)))

    def test_center_is_inside(self):
        assert is_inside_circumcircle((2, 2), self.triangle)

    def test_far_point_is_outside(self):
        assert not is_inside_circumcircle((10, 10), self.triangle)

    def test_boundary_counts_as_inside(self):
        """A cocircular point is reported as inside."""
        # (4, 4) lies on the circle centered at (2, 2) through (0, 0)
        assert is_inside_circumcircle((4, 4), self.triangle)
        assert is_inside_circumcircle((0, 0), self.triangle)

    def test_raw_sequence_triangle(self):
        """Triangles may be given as plain sequences of points."""
        assert is_inside_circumcircle((1, 1), [(0, 0), (4, 0), (0, 4)])

    def test_malformed_triangle_raises(self):
        with pytest.raises(MalformedTriangleError):
            is_inside_circumcircle((1, 1), [(0, 0), (4, 0)])

    def test_degenerate_triangle_raises(self):
        with pytest.raises(DegenerateTriangleError):
            is_inside_circumcircle((1, 1), [(0, 0), (1, 0), (2, 0)])
