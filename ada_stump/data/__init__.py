"""
Data Package

Synthetic labelled point sets for training and testing.
"""

from .synthetic import (
    generate_sample,
    generate_synthetic_data,
    generate_grid_quadrant_data,
    PATTERNS
)

__all__ = [
    'generate_sample',
    'generate_synthetic_data',
    'generate_grid_quadrant_data',
    'PATTERNS'
]
