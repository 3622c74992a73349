"""
Heightmap storage and the local deposition/erosion primitives.

The grid is a dense row-major NumPy array of shape (height, width),
indexed [y, x]. Public methods take (x, y) order.
"""

import math
from functools import lru_cache
from typing import NamedTuple, Tuple

import numpy as np

from .gradient import compute_gradient

EPSILON = 0.00001


class ErosionWeights(NamedTuple):
    """Cells of an erosion disc and their linear falloff weights."""

    xs: np.ndarray
    ys: np.ndarray
    weights: np.ndarray

    @property
    def total_weight(self) -> float:
        return float(self.weights.sum())


@lru_cache(maxsize=32)
def _disc_offsets(radius: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Integer offsets inside a disc of `radius` with weight radius - distance."""
    span = np.arange(-radius, radius + 1)
    dy, dx = np.meshgrid(span, span, indexing="ij")
    dist = np.sqrt(dx * dx + dy * dy)
    inside = dist <= radius
    return dx[inside], dy[inside], (radius - dist[inside])


class HeightGrid:
    """Fixed-size terrain heightmap mutated in place by the simulation."""

    def __init__(self, width: int, height: int):
        """
        Create an all-zero grid.

        Args:
            width: Number of columns
            height: Number of rows
        """
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self._heights = np.zeros((height, width), dtype=np.float64)

    @classmethod
    def from_array(cls, heights: np.ndarray) -> "HeightGrid":
        """Build a grid from a 2D array indexed [y, x]. The data is copied."""
        array = np.asarray(heights, dtype=np.float64)
        if array.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {array.shape}")
        grid = cls(array.shape[1], array.shape[0])
        grid._heights[...] = array
        return grid

    @property
    def width(self) -> int:
        return self._heights.shape[1]

    @property
    def height(self) -> int:
        return self._heights.shape[0]

    @property
    def heights(self) -> np.ndarray:
        """Underlying array. Values may be edited, the shape may not."""
        return self._heights

    def copy(self) -> "HeightGrid":
        return HeightGrid.from_array(self._heights)

    def total(self) -> float:
        return float(self._heights.sum())

    def min(self) -> float:
        return float(self._heights.min())

    def max(self) -> float:
        return float(self._heights.max())

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def sample(self, x: int, y: int) -> float:
        """Read the height of cell (x, y)."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return float(self._heights[y, x])

    def gradient(self, position: Tuple[float, float]) -> Tuple[float, float]:
        return compute_gradient(self._heights, position)

    def deposit(self, position: Tuple[float, float], amount: float) -> float:
        """
        Spread `amount` over the (up to) four cells around `position`.

        Uses bilinear weights renormalized to sum to 1. Neighbours past the
        last row/column are clamped onto the border cell, so weights can
        land on the same cell twice. Only strictly positive contributions
        are applied.

        Args:
            position: Continuous (x, y) position
            amount: Material to add

        Returns:
            Total amount actually added to the grid
        """
        px, py = position
        x1 = math.floor(px)
        y1 = math.floor(py)
        if not self.in_bounds(x1, y1):
            raise IndexError(f"Deposit position ({px}, {py}) outside {self.width}x{self.height} grid")

        x2 = min(x1 + 1, self.width - 1)
        y2 = min(y1 + 1, self.height - 1)

        dx = px - x1
        dy = py - y1

        w11 = (1.0 - dx) * (1.0 - dy)
        w12 = (1.0 - dx) * dy
        w21 = dx * (1.0 - dy)
        w22 = dx * dy

        sum_w = w11 + w12 + w21 + w22
        if sum_w <= EPSILON:
            return 0.0

        deposited = 0.0
        for cx, cy, w in ((x1, y1, w11), (x1, y2, w12), (x2, y1, w21), (x2, y2, w22)):
            dropped = amount * (w / sum_w)
            if dropped > 0.0:
                self._heights[cy, cx] += dropped
                deposited += dropped
        return deposited

    def erosion_weights(self, center: Tuple[float, float], radius: int) -> ErosionWeights:
        """Collect the in-bounds cells of the erosion disc around `center`."""
        dx, dy, weights = _disc_offsets(int(radius))
        xs = math.floor(center[0]) + dx
        ys = math.floor(center[1]) + dy
        used = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        return ErosionWeights(xs[used], ys[used], weights[used])

    def erode(self, center: Tuple[float, float], total_gain: float, radius: int) -> float:
        """
        Remove `total_gain` from the disc of `radius` around `center`.

        Each cell gives up total_gain * weight / total_weight with a linear
        falloff weight of radius - distance, so the removed material sums to
        `total_gain`. Nothing happens when the total weight is zero.

        Returns:
            Sediment credited to the caller
        """
        disc = self.erosion_weights(center, radius)
        total_weight = disc.total_weight
        if total_weight <= 0.0:
            return 0.0

        quantities = total_gain * (disc.weights / total_weight)
        self._heights[disc.ys, disc.xs] -= quantities
        return float(quantities.sum())
