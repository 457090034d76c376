from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from pyvdt.geometry import (
    DegenerateTriangleError,
    Point,
    Segment,
    Triangle,
    shares_vertex,
)

# file suffix -> matplotlib animation writer
ANIMATION_WRITERS = {".gif": "pillow", ".mp4": "ffmpeg"}


@dataclass
class Triangulation:
    """
    Working state of one Bowyer-Watson run.

    Triangles live in an arena keyed by a stable integer id. Ids are handed out by
    a counter and never reused, so removing a triangle can't affect any other entry.
    """

    supra_triangle: Triangle
    triangles: dict[int, Triangle] = field(default_factory=dict)
    points: list[Point] = field(default_factory=list)
    next_triangle_id: int = 0
    debug_plots: list[NDArray[np.uint8]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.triangles)

    def add_triangle(self, triangle: Triangle) -> int:
        idx = self.next_triangle_id
        self.triangles[idx] = triangle
        self.next_triangle_id += 1
        return idx

    def remove_triangle(self, idx: int) -> Triangle:
        try:
            return self.triangles.pop(idx)
        except KeyError:
            raise KeyError(f"Triangle {idx} is not part of the triangulation") from None

    def vertices(self) -> set[Point]:
        return {v for t in self.triangles.values() for v in t.vertices}

    def to_triangles(self) -> list[Triangle]:
        """Snapshot of the current triangles, in insertion (id) order."""
        return [self.triangles[idx] for idx in sorted(self.triangles)]

    def plot(
        self,
        show: bool = False,
        title: str = "Triangulation",
        exclude_supra_t: bool = True,
        segments: Iterable[Segment] = (),
        circumcircles: bool = False,
    ) -> NDArray[np.uint8]:
        """
        Plot the current state and store the frame in `debug_plots`.

        :param show: Whether to call plt.show() after plotting
        :param title: Title of the plot
        :param exclude_supra_t: Whether to hide triangles touching the supra-triangle
        :param segments: Voronoi segments to overlay
        :param circumcircles: Whether to draw the circumcircle of every triangle
        :return: RGB image of the figure
        """
        triangles = self.to_triangles()
        if exclude_supra_t:
            triangles = [t for t in triangles if not shares_vertex(t, self.supra_triangle)]

        img = plot_diagram(
            triangles,
            segments=segments,
            points=self.points,
            circumcircles=circumcircles,
            title=title,
            show=show,
        )
        self.debug_plots.append(img)
        return img

    def export_animation_matplotlib(
        self,
        filepath: str | Path,
        fps: int = 2,
        writer: str | None = None,
    ) -> None:
        """
        Export the recorded frames as an animation, one frame per `debug_plots` entry.

        :param filepath: Output file
        :param fps: Frames per second
        :param writer: matplotlib writer name; picked from the file suffix when None
        """
        import matplotlib.pyplot as plt
        import matplotlib.animation as animation

        if not self.debug_plots:
            raise ValueError("No debug plots to export.")

        filepath = Path(filepath)
        if writer is None:
            if filepath.suffix not in ANIMATION_WRITERS:
                raise ValueError(
                    f"Can't pick a writer for '{filepath.suffix}', "
                    f"use one of {sorted(ANIMATION_WRITERS)} or pass `writer`"
                )
            writer = ANIMATION_WRITERS[filepath.suffix]

        fig, ax = plt.subplots()
        ax.axis("off")
        frames = [[ax.imshow(img, animated=True)] for img in self.debug_plots]
        anim = animation.ArtistAnimation(fig, frames, interval=1000 / fps, blit=True)
        try:
            anim.save(filepath, fps=fps, writer=writer)
        finally:
            plt.close(fig)


def plot_diagram(
    triangles: Iterable[Triangle],
    segments: Iterable[Segment] = (),
    points: Iterable[Point] = (),
    circumcircles: bool = False,
    title: str = "Delaunay / Voronoi",
    show: bool = False,
) -> NDArray[np.uint8]:
    """
    Draw triangle edges, vertices and Voronoi segments with matplotlib.

    Degenerate triangles are skipped when drawing circumcircles.
    Returns the rendered figure as an RGB array.
    """
    import matplotlib.pyplot as plt
    from matplotlib.patches import Circle

    fig, ax = plt.subplots()

    vertices: set[Point] = set(points)
    for triangle in triangles:
        pts = triangle.as_array()
        tri_closed = np.vstack([pts, pts[0]])
        ax.plot(tri_closed[:, 0], tri_closed[:, 1], "k-", linewidth=1.0)
        vertices.update(triangle.vertices)

        if circumcircles:
            try:
                circle = triangle.circumcircle()
            except DegenerateTriangleError:
                continue
            center = (circle.center.x, circle.center.y)
            ax.add_patch(Circle(center, circle.radius, fill=False, color="red"))
            ax.plot(*center, "r.", markersize=4)

    for segment in segments:
        ax.plot(
            [segment.a.x, segment.b.x],
            [segment.a.y, segment.b.y],
            "b-",
            linewidth=1.0,
        )

    if vertices:
        xy = np.array([[v.x, v.y] for v in vertices])
        ax.plot(xy[:, 0], xy[:, 1], "ko", markersize=3, zorder=11)

    ax.set_aspect("equal")
    ax.set_title(title)

    if show:
        plt.show()

    fig.canvas.draw()
    buf = fig.canvas.buffer_rgba()  # type: ignore[reportAttributeAccessIssue]
    img = np.asarray(buf)[:, :, :3].copy()
    plt.close(fig)
    return img
