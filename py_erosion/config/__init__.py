"""
Configuration for erosion runs.
"""

from .config import Settings, settings

__all__ = ['Settings', 'settings']
