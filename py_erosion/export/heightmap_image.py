"""
Heightmap raster export.

Heights map to one byte per channel in a grayscale RGB triplet. Values
outside 0-255 are clamped, never wrapped, and the number of clamped cells
is reported.
"""

from pathlib import Path
from typing import Tuple, Union

import numpy as np
import structlog
from matplotlib import image as mpimg

from ..core.height_grid import HeightGrid

logger = structlog.get_logger()


def heightmap_to_rgb(grid: HeightGrid) -> Tuple[np.ndarray, int]:
    """
    Convert a grid to a (height, width, 3) uint8 grayscale image.

    Returns:
        Tuple of (rgb array, number of clamped cells). NaN cells count as
        clamped and map to 0.
    """
    heights = grid.heights
    finite = np.isfinite(heights)
    in_range = finite.copy()
    in_range[finite] = (heights[finite] >= 0.0) & (heights[finite] <= 255.0)
    clamped = int(np.count_nonzero(~in_range))

    values = np.clip(np.nan_to_num(heights, nan=0.0), 0.0, 255.0).astype(np.uint8)
    return np.repeat(values[:, :, np.newaxis], 3, axis=2), clamped


def heightmap_to_bytes(grid: HeightGrid) -> bytes:
    """Row-major RGB raster bytes of the grid."""
    rgb, clamped = heightmap_to_rgb(grid)
    if clamped:
        logger.warning("Clamped heights during export", clamped=clamped)
    return rgb.tobytes()


def save_heightmap_png(grid: HeightGrid, path: Union[str, Path]) -> Path:
    """
    Save the grid as a grayscale PNG, creating parent directories.

    Args:
        grid: Heightmap to save
        path: Output file path

    Returns:
        The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    rgb, clamped = heightmap_to_rgb(grid)
    if clamped:
        logger.warning("Clamped heights during export", path=str(path), clamped=clamped)

    mpimg.imsave(path, rgb, format="png")
    logger.info("Heightmap saved", path=str(path))
    return path


class PngSnapshotWriter:
    """Snapshot callback writing `{prefix}{index}.png` files."""

    def __init__(self, prefix: Union[str, Path]):
        self.prefix = str(prefix)

    def path_for(self, index: int) -> Path:
        return Path(f"{self.prefix}{index}.png")

    def __call__(self, grid: HeightGrid, index: int) -> None:
        save_heightmap_png(grid, self.path_for(index))
