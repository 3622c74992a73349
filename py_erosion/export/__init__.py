"""
Heightmap export.
"""

from .heightmap_image import heightmap_to_rgb, heightmap_to_bytes, save_heightmap_png, PngSnapshotWriter

__all__ = ['heightmap_to_rgb', 'heightmap_to_bytes', 'save_heightmap_png', 'PngSnapshotWriter']
