"""
Initial terrain generation.

Builds a heightmap by superposing randomized Gaussian-like bumps and
normalizing the result to the 0-255 range.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import structlog

from .height_grid import HeightGrid
from .random_stream import RandomStream

logger = structlog.get_logger()

OUTPUT_MAX = 255.0


@dataclass
class TerrainConfig:
    """Configuration for bump terrain generation."""

    width: int = 512
    height: int = 512
    num_bumps: int = 500
    scale: float = 10.0
    width_range: Tuple[float, float] = (5.0, 20.0)
    amplitude_range: Tuple[float, float] = (1.0, 15.0)


class TerrainGenerator:
    """Generates initial heightmaps from random bumps."""

    def __init__(self, stream: RandomStream):
        self.stream = stream

    def generate(self, config: TerrainConfig) -> HeightGrid:
        return self.generate_gaussian_bumps(
            config.width,
            config.height,
            config.num_bumps,
            config.scale,
            config.width_range,
            config.amplitude_range,
        )

    def generate_gaussian_bumps(
        self,
        width: int,
        height: int,
        num_bumps: int,
        scale: float,
        width_range: Tuple[float, float],
        amplitude_range: Tuple[float, float],
    ) -> HeightGrid:
        """
        Superpose `num_bumps` random bumps and normalize to [0, 255].

        Each bump adds A * 2^(-d^2 / (2 sigma^2)) to every cell, where d is
        the distance from the cell to the bump centre. The base-2
        exponential makes bumps narrower than a natural Gaussian of the same
        sigma.

        Args:
            width: Grid width
            height: Grid height
            num_bumps: Number of bumps
            scale: Factor applied to the summed heights before normalization
            width_range: (min, max) bump width sigma
            amplitude_range: (min, max) bump amplitude

        Returns:
            New HeightGrid. All zero when the terrain is flat.
        """
        if num_bumps < 0:
            raise ValueError(f"num_bumps must be non-negative, got {num_bumps}")
        if width_range[0] <= 0 or width_range[1] < width_range[0]:
            raise ValueError(f"Invalid bump width range {width_range}")
        if amplitude_range[1] < amplitude_range[0]:
            raise ValueError(f"Invalid amplitude range {amplitude_range}")

        grid = HeightGrid(width, height)
        ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
        heights = np.zeros((height, width), dtype=np.float64)

        for _ in range(num_bumps):
            cx, cy = self.stream.random_position(width, height)
            sigma = self.stream.uniform_range(width_range[0], width_range[1])
            amplitude = self.stream.uniform_range(amplitude_range[0], amplitude_range[1])

            dist2 = (xs - cx) ** 2 + (ys - cy) ** 2
            heights += np.exp2(-dist2 / (2.0 * sigma * sigma)) * amplitude

        heights *= scale
        h_min = float(heights.min())
        h_max = float(heights.max())
        logger.info("Bumps generated", num_bumps=num_bumps, min=h_min, max=h_max)

        if h_max == h_min:
            logger.warning("Flat terrain, normalizing to zero", value=h_min)
            return grid

        grid.heights[...] = (heights - h_min) / (h_max - h_min) * OUTPUT_MAX
        return grid
