from collections.abc import Sequence
from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

EPS = 1e-9
SQRT3 = float(np.sqrt(3.0))
Vec2d: TypeAlias = tuple[float, float] | NDArray[np.floating]
PointLike: TypeAlias = Vec2d | Sequence[float]
TriangleLike: TypeAlias = Sequence[PointLike] | NDArray[np.floating]
