"""Circular node layout for MetricGraph.

Places nodes evenly around a circle by list index. Positions never depend on
any metric value.
"""

from __future__ import annotations

import math
from typing import List, Tuple


def circular_position(index: int, count: int, radius: float) -> Tuple[int, int]:
    """Return the integer canvas position of node ``index`` out of ``count``.

    Node i sits at angle 2πi/n and the coordinates are rounded to the
    nearest integer.
    """
    if count <= 0:
        raise ValueError(f"count must be positive, got {count}")
    angle = 2.0 * math.pi * index / count
    return int(round(radius * math.cos(angle))), int(round(radius * math.sin(angle)))


def circular_layout(count: int, radius: float) -> List[Tuple[int, int]]:
    """Return positions for ``count`` nodes on a circle of ``radius``.

    ``count == 0`` yields an empty list; a single node sits at angle 0.
    """
    return [circular_position(i, count, radius) for i in range(count)]
