import numpy as np
from numpy.typing import NDArray


def random_points(
    n: int, width: float, height: float, seed: int | None = None
) -> NDArray[np.floating]:
    """
    Sample `n` points uniformly in [0, width) x [0, height).

    :param n: number of points
    :param width: width of the sampling region
    :param height: height of the sampling region
    :param seed: seed for numpy's default generator, for reproducible samples
    :return: array of shape (n, 2)
    """
    if n < 0:
        raise ValueError(f"Number of points must be non-negative, got {n}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Bounds must be positive, got {width}x{height}")

    rng = np.random.default_rng(seed)
    return rng.random((n, 2)) * np.array([width, height])
