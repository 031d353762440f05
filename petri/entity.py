"""
Entity runtime representation.

Entities are spawned by EntityFactory and live in the engine's entity list.
Each entity has a unique instance_id, position, velocity, radius and type.
"""

import numpy as np
from dataclasses import dataclass

from .data_types import EntityType
from .constants import TYPE_A_COLOR, TYPE_B_COLOR


@dataclass
class Entity:
    """
    Runtime entity ("ball") in the dish.

    Attributes:
        instance_id: Unique identifier ("init-0003", "born-000042")
        position: 2D position [x, y]
        velocity: 2D velocity [vx, vy] in units per tick
        radius: Size, always within [MIN_RADIUS, MAX_RADIUS]
        entity_type: EntityType.A or EntityType.B
        created_at_ms: Simulated creation time (includes newborn grace)
        last_breed_ms: Simulated time of last breeding (or creation)
        age_ticks: Number of ticks this entity has moved
    """
    instance_id: str
    position: np.ndarray  # [x, y] float64
    velocity: np.ndarray  # [vx, vy] float64
    radius: float
    entity_type: EntityType
    created_at_ms: float = 0.0
    last_breed_ms: float = 0.0
    age_ticks: int = 0

    def __post_init__(self):
        """Ensure position and velocity are float64 arrays"""
        if not isinstance(self.position, np.ndarray):
            self.position = np.array(self.position, dtype=np.float64)
        else:
            self.position = self.position.astype(np.float64, copy=False)

        if not isinstance(self.velocity, np.ndarray):
            self.velocity = np.array(self.velocity, dtype=np.float64)
        else:
            self.velocity = self.velocity.astype(np.float64, copy=False)

    @property
    def mass(self) -> float:
        """Areal mass model: proportional to radius squared"""
        return self.radius * self.radius

    @property
    def color(self) -> str:
        """Display colour for renderers"""
        return TYPE_A_COLOR if self.entity_type is EntityType.A else TYPE_B_COLOR

    def to_dict(self) -> dict:
        """
        Serialize entity to JSON-compatible dict.

        Returns:
            Dict with all entity fields (builtin types only)
        """
        return {
            'instance_id': self.instance_id,
            'position': self.position.tolist(),
            'velocity': self.velocity.tolist(),
            'radius': float(self.radius),
            'entity_type': self.entity_type.value,
            'color': self.color,
            'created_at_ms': float(self.created_at_ms),
            'last_breed_ms': float(self.last_breed_ms),
            'age_ticks': int(self.age_ticks)
        }
