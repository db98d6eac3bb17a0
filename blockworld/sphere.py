"""Even distribution of points over a sphere."""

from __future__ import annotations

import math
from collections.abc import Iterator

_GOLDEN_RATIO = (1.0 + math.sqrt(5.0)) / 2.0


def fibonacci_spiral(n: int) -> Iterator[tuple[float, float, float]]:
    """Yield ``n`` points spread evenly over the surface of a unit sphere."""
    for i in range(n):
        # Map to the unit square.
        x = i / _GOLDEN_RATIO % 1.0
        y = i / n

        # Map from the unit square to the unit sphere.
        theta = x * math.tau
        phi = math.acos(1.0 - 2.0 * y)
        yield (
            math.cos(theta) * math.sin(phi),
            math.sin(theta) * math.sin(phi),
            math.cos(phi),
        )