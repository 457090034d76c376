from pyvdt.build import triangulate
from pyvdt.delaunay import plot_diagram
from pyvdt.voronoi import voronoi


if __name__ == "__main__":
    points = [
        (2, 2),
        (12, 2),
        (12, 12),
        (2, 12),
        (7, 5),
    ]

    triangles = triangulate(points, 20, 20)
    for t in triangles:
        print(t)

    segments = voronoi(triangles)
    plot_diagram(triangles, segments, circumcircles=True, show=True)
