"""
Particle-based hydraulic erosion on heightmaps.
"""

__version__ = "0.1.0"
