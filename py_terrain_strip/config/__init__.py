"""
Configuration modules for terrain generation.
"""

from .config import settings
from .terrain_presets import get_preset, list_presets, PRESETS

__all__ = ['get_preset', 'list_presets', 'PRESETS', 'settings']
