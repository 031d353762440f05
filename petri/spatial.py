"""
Spatial utility functions for 2D geometry.

Helper functions for reflection and normals.
All helpers operate on float64 numpy arrays and carry no simulation state.
"""

import numpy as np
from typing import Optional, Tuple


def reflect_velocity(velocity: np.ndarray, normal: np.ndarray) -> np.ndarray:
    """
    Reflect velocity vector across surface normal.

    Uses formula: v' = v - 2 * (v . n) * n

    Args:
        velocity: Incident velocity vector [vx, vy]
        normal: Surface normal (must be unit vector)

    Returns:
        Reflected velocity vector
    """
    return velocity - 2.0 * np.dot(velocity, normal) * normal


def normalize(vec: np.ndarray) -> Tuple[Optional[np.ndarray], float]:
    """
    Normalize vector to unit length.

    Args:
        vec: Vector to normalize [x, y]

    Returns:
        Tuple of (normalized vector, original length). The vector is None
        for a zero-length input, which has no direction.
    """
    length = float(np.sqrt(np.dot(vec, vec)))

    if length == 0.0:
        return None, 0.0

    return vec / length, length
