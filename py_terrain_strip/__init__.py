"""
py-terrain-strip: procedural 2D cross-section terrain generation.
"""

__version__ = "0.1.0"
