"""
Entity spawning system.

Builds the initial population and offspring with randomized kinematics.
All randomness is drawn from the injected random source, so a seeded
source gives identical populations across runs.
"""

import numpy as np
from typing import List

from .entity import Entity
from .data_types import EntityType
from .rng import random_direction, random_position_in_disk
from .constants import (
    REFERENCE_RADIUS,
    MIN_RADIUS,
    MAX_RADIUS,
    INITIAL_RADIUS_VARIANCE,
    OFFSPRING_RADIUS_VARIANCE,
    SPEED_FACTOR_MIN,
    SPEED_FACTOR_MAX,
    TWIN_OFFSET,
    NEWBORN_GRACE_MS,
)


def clamp_radius(radius: float) -> float:
    """Clamp radius into [MIN_RADIUS, MAX_RADIUS]; NaN maps to MIN_RADIUS"""
    if not radius >= MIN_RADIUS:
        return MIN_RADIUS
    return min(MAX_RADIUS, radius)


class EntityFactory:
    """
    Constructs initial entities and offspring.

    Ids are counter-based ("init-0000", "born-000001") so seeded runs
    replay with identical ids.
    """

    def __init__(self, rng, center: np.ndarray):
        """
        Args:
            rng: Random source (numpy Generator or compatible)
            center: Container center [x, y]
        """
        self.rng = rng
        self.center = np.asarray(center, dtype=np.float64)
        self._born_count = 0

    def spawn_kinematics(self, radius: float, speed_scale: float) -> np.ndarray:
        """
        Draw an initial velocity for an entity of the given radius.

        Direction is uniform; magnitude is
        uniform(0.5, 1.0) * speed_scale * (REFERENCE_RADIUS / radius),
        so small entities are fast and large ones slow.

        Args:
            radius: Entity radius (non-positive treated as MIN_RADIUS)
            speed_scale: Config ball_speed

        Returns:
            Velocity [vx, vy]
        """
        if not radius > 0.0:
            radius = MIN_RADIUS
        direction = random_direction(self.rng)
        size_multiplier = REFERENCE_RADIUS / radius
        speed = self.rng.uniform(SPEED_FACTOR_MIN, SPEED_FACTOR_MAX) * speed_scale * size_multiplier
        return direction * speed

    def spawn_initial(
        self,
        count: int,
        container_radius: float,
        speed_scale: float,
        now_ms: float = 0.0
    ) -> List[Entity]:
        """
        Spawn the starting population inside the current container.

        Types alternate A, B, A, ... so counts are balanced within one.
        Positions have uniform areal density in a disk of radius
        container_radius - 2 * REFERENCE_RADIUS.

        Args:
            count: Number of entities
            container_radius: Current container radius
            speed_scale: Config ball_speed
            now_ms: Simulated time of the spawn

        Returns:
            List of spawned Entity instances
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        entities = []
        spawn_radius = container_radius - 2.0 * REFERENCE_RADIUS

        for i in range(count):
            entity_type = EntityType.A if i % 2 == 0 else EntityType.B

            position = random_position_in_disk(self.rng, self.center, spawn_radius)

            variance = self.rng.uniform(-INITIAL_RADIUS_VARIANCE, INITIAL_RADIUS_VARIANCE)
            radius = clamp_radius(REFERENCE_RADIUS + variance)

            velocity = self.spawn_kinematics(radius, speed_scale)

            entities.append(Entity(
                instance_id=f"init-{i:04d}",
                position=position,
                velocity=velocity,
                radius=radius,
                entity_type=entity_type,
                created_at_ms=now_ms + NEWBORN_GRACE_MS,
                last_breed_ms=now_ms + NEWBORN_GRACE_MS
            ))

        return entities

    def spawn_offspring(
        self,
        parent_a: Entity,
        parent_b: Entity,
        now_ms: float,
        speed_scale: float,
        twin: bool = False
    ) -> List[Entity]:
        """
        Spawn one or two offspring at the parents' midpoint.

        Each child gets radius avg(parents) + uniform(-1, 1) (clamped) and a
        uniformly random type. The second twin is offset by TWIN_OFFSET on
        both axes so the pair never starts exactly coincident.

        Args:
            parent_a: First parent
            parent_b: Second parent
            now_ms: Simulated time of the breeding event
            speed_scale: Config ball_speed
            twin: Produce two offspring instead of one

        Returns:
            List with one or two new entities
        """
        midpoint = (parent_a.position + parent_b.position) / 2.0
        avg_radius = (parent_a.radius + parent_b.radius) / 2.0
        stamp = now_ms + NEWBORN_GRACE_MS

        offspring = []
        for k in range(2 if twin else 1):
            variance = self.rng.uniform(-OFFSPRING_RADIUS_VARIANCE, OFFSPRING_RADIUS_VARIANCE)
            radius = clamp_radius(avg_radius + variance)

            entity_type = EntityType.A if self.rng.random() < 0.5 else EntityType.B

            position = midpoint + k * TWIN_OFFSET

            velocity = self.spawn_kinematics(radius, speed_scale)

            offspring.append(Entity(
                instance_id=f"born-{self._born_count:06d}",
                position=position,
                velocity=velocity,
                radius=radius,
                entity_type=entity_type,
                created_at_ms=stamp,
                last_breed_ms=stamp
            ))
            self._born_count += 1

        return offspring

    def reset_ids(self):
        """Restart the offspring id counter (called on engine reset)"""
        self._born_count = 0
