"""Numerical tolerances and defaults shared across robustgeom.

Centralizes the few thresholds that are not derived from machine epsilon
so they can be tuned in one place.
"""
from __future__ import annotations

import numpy as np

# width used when no operand carries one (plain python numbers)
DEFAULT_DTYPE = np.float64

# determinant of a rotation must be 1 within DETERMINANT_SCALE * max|m_ij| * epsilon;
# one unit per multiply-add of the 3x3 cofactor expansion
DETERMINANT_SCALE: int = 12

# absolute tolerance for M * M^T == I, per width
ROTATION_IDENTITY_TOLERANCE = {
    'single': 1e-6,
    'double': 1e-14,
}

__all__ = [
    'DEFAULT_DTYPE',
    'DETERMINANT_SCALE',
    'ROTATION_IDENTITY_TOLERANCE',
]
