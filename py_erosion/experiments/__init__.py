"""
Erosion experiment drivers.
"""

from .parameter_sweep import PARAMETER_VARIATIONS, SweepRun, iter_sweep, ParameterSweep

__all__ = ['PARAMETER_VARIATIONS', 'SweepRun', 'iter_sweep', 'ParameterSweep']
