"""
Circular container (the dish) that grows toward a cap while running.
"""

import numpy as np
from dataclasses import dataclass, field

from .constants import (
    DISH_CENTER,
    INITIAL_CONTAINER_RADIUS,
    MAX_CONTAINER_RADIUS,
    CONTAINER_GROWTH_RATE,
)


@dataclass
class ContainerState:
    """
    Container geometry.

    Invariant: initial_radius <= radius <= max_radius, and radius only
    changes through grow() (non-decreasing) or reset().
    """
    initial_radius: float = INITIAL_CONTAINER_RADIUS
    max_radius: float = MAX_CONTAINER_RADIUS
    growth_rate: float = CONTAINER_GROWTH_RATE
    center: np.ndarray = field(default_factory=lambda: np.array(DISH_CENTER, dtype=np.float64))
    radius: float = None

    def __post_init__(self):
        self.center = np.asarray(self.center, dtype=np.float64)
        self.max_radius = max(self.max_radius, self.initial_radius)
        if self.radius is None:
            self.radius = self.initial_radius

    def grow(self, is_running: bool) -> float:
        """
        Grow by one tick's worth, capped. No-op when paused or at cap.

        Returns:
            Current radius after growth
        """
        if is_running and self.radius < self.max_radius:
            self.radius = min(self.max_radius, self.radius + self.growth_rate)
        return self.radius

    def reset(self):
        """Restore the initial radius"""
        self.radius = self.initial_radius

    @property
    def at_cap(self) -> bool:
        return self.radius >= self.max_radius
