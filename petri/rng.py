"""
Deterministic RNG utilities for the petri dish simulation.

Uses SHA256 hashing to derive stable seeds from hierarchical components
(run seed, purpose name). All engine randomness is drawn from a
numpy.random.Generator(PCG64), or from any object exposing the same
``random()`` / ``uniform(low, high)`` methods (scripted sources in tests).
"""

import hashlib
import math
import numpy as np
from typing import Any, Optional


def make_seed(*components: Any) -> int:
    """
    Generate deterministic 64-bit seed from hierarchical components.

    Uses SHA256 to hash components into stable seed value.

    Args:
        *components: Seed components (run seed, purpose name, etc.)

    Returns:
        64-bit integer seed for numpy RNG

    Example:
        engine_seed = make_seed(run_seed, "petri")
    """
    # Join all components with colon separator
    hash_input = ":".join(str(c) for c in components)

    # SHA256 hash and extract 64-bit integer
    hash_bytes = hashlib.sha256(hash_input.encode('utf-8')).digest()
    seed = int.from_bytes(hash_bytes[:8], byteorder='big')

    return seed


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Build the engine's random source.

    Args:
        seed: Run seed, or None for OS entropy (non-reproducible runs)

    Returns:
        numpy Generator backed by PCG64
    """
    if seed is None:
        return np.random.Generator(np.random.PCG64())
    return np.random.Generator(np.random.PCG64(make_seed(seed, "petri")))


def random_direction(rng) -> np.ndarray:
    """
    Draw a 2D unit vector with angle uniform on [0, 2*pi).

    Args:
        rng: Random source

    Returns:
        2D unit vector as numpy array [x, y]
    """
    angle = rng.uniform(0.0, 2.0 * math.pi)
    return np.array([math.cos(angle), math.sin(angle)], dtype=np.float64)


def random_position_in_disk(rng, center: np.ndarray, radius: float) -> np.ndarray:
    """
    Draw a position with uniform areal density inside a disk.

    Uses r = sqrt(u) * radius; plain u * radius would crowd the centre.

    Args:
        rng: Random source
        center: Disk center [x, y]
        radius: Disk radius (non-positive collapses to the centre)

    Returns:
        Position as numpy array [x, y]
    """
    angle = rng.uniform(0.0, 2.0 * math.pi)
    r = math.sqrt(rng.random()) * max(0.0, radius)
    return center + np.array([r * math.cos(angle), r * math.sin(angle)], dtype=np.float64)
