"""
UI logic package - portable across platforms.

Board geometry: tap hit-testing and cell sizing. No UI
framework dependencies.
"""
from .grid_layout import GridLayout, GridDimensions

__all__ = [
    'GridLayout',
    'GridDimensions',
]
