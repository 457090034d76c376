from pyvdt.build import build_triangulation
from pyvdt.sampling import random_points
from pyvdt.voronoi import voronoi


if __name__ == "__main__":
    width, height = 800.0, 600.0
    points = random_points(100, width, height, seed=0)

    tri = build_triangulation(points, width, height)
    segments = voronoi(tri.to_triangles())
    print(f"{len(tri)} triangles, {len(segments)} Voronoi segments")

    tri.plot(show=True, segments=segments, title="Delaunay / Voronoi")
