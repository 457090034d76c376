from pyvdt.build import build_triangulation
from pyvdt.sampling import random_points


if __name__ == "__main__":
    width, height = 100.0, 100.0
    points = random_points(20, width, height, seed=42)

    # one frame per inserted point
    tri = build_triangulation(points, width, height, debug=True)
    tri.plot(title="Final triangulation", circumcircles=True)
    tri.export_animation_matplotlib("bowyer_watson.gif", fps=2)
