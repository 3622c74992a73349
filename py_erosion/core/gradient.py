"""Local terrain gradient used to steer droplets."""

import math
from typing import Tuple

import numpy as np

# Blend factors between the two forward differences along each axis.
# The blend is fixed at the cell midpoint and ignores where inside the
# cell the position falls.
BLEND_U = 0.5
BLEND_V = 0.5


def compute_gradient(heights: np.ndarray, position: Tuple[float, float]) -> Tuple[float, float]:
    """
    Compute the gradient at a position from a (height, width) array.

    Returns (0, 0) when the containing cell is within one cell of the
    border, there is no edge gradient.

    Args:
        heights: Height array indexed [y, x]
        position: Continuous (x, y) position

    Returns:
        Tuple of (gx, gy)
    """
    rows, cols = heights.shape
    x = math.floor(position[0])
    y = math.floor(position[1])

    if x < 1 or x >= cols - 1 or y < 1 or y >= rows - 1:
        return (0.0, 0.0)

    h00 = float(heights[y, x])
    h10 = float(heights[y, x + 1])
    h01 = float(heights[y + 1, x])
    h11 = float(heights[y + 1, x + 1])

    gx = (h10 - h00) * (1.0 - BLEND_V) + (h11 - h01) * BLEND_V
    gy = (h01 - h00) * (1.0 - BLEND_U) + (h11 - h10) * BLEND_U
    return (gx, gy)
