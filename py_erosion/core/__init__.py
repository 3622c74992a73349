"""
Core erosion simulation functionality.
"""

from .random_stream import RandomStream, pcg_hash, random_double, random_double_range
from .height_grid import HeightGrid, ErosionWeights, EPSILON
from .gradient import compute_gradient
from .parameters import ErosionParameters
from .droplet import Droplet, DropletResult, TerminationReason, DirectionResampleError
from .erosion import ErosionEngine, SnapshotCallback
from .terrain_generator import TerrainGenerator, TerrainConfig

__all__ = ['RandomStream', 'pcg_hash', 'random_double', 'random_double_range',
           'HeightGrid', 'ErosionWeights', 'EPSILON', 'compute_gradient',
           'ErosionParameters', 'Droplet', 'DropletResult', 'TerminationReason',
           'DirectionResampleError', 'ErosionEngine', 'SnapshotCallback',
           'TerrainGenerator', 'TerrainConfig']
