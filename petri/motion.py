"""
Motion integration and wall reflection.

Movement and boundary handling are separate passes: every entity is
advanced before any entity is reflected, so no entity sees another's
half-updated state within a tick.
"""

from typing import List

from .entity import Entity
from .container import ContainerState
from .spatial import normalize, reflect_velocity


def advance(entity: Entity):
    """Single explicit Euler step (one tick): position += velocity, age += 1"""
    entity.position += entity.velocity
    entity.age_ticks += 1


def advance_all(entities: List[Entity]):
    for entity in entities:
        advance(entity)


def reflect(entity: Entity, container: ContainerState) -> bool:
    """
    Reflect an entity off the container wall if it pokes through.

    When dist + radius > container radius:
    1. Outward normal n = offset / dist
    2. Reflect velocity across n (using the pre-correction velocity)
    3. Push the entity inward along n by the overlap

    An entity exactly at the centre has no normal and is left alone.

    Args:
        entity: Entity to check
        container: Container geometry

    Returns:
        True if the entity was reflected
    """
    offset = entity.position - container.center
    normal, dist = normalize(offset)

    if dist + entity.radius <= container.radius or normal is None:
        return False

    entity.velocity = reflect_velocity(entity.velocity, normal)

    overlap = dist + entity.radius - container.radius
    entity.position = entity.position - normal * overlap

    return True


def reflect_all(entities: List[Entity], container: ContainerState) -> int:
    """
    Reflect every entity against the wall.

    Returns:
        Number of entities reflected
    """
    bounces = 0
    for entity in entities:
        if reflect(entity, container):
            bounces += 1
    return bounces
