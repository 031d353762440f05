"""
Lifecycle bookkeeping: age-based expiry and commit of deferred kills/births.
"""

from typing import Iterable, List, Set, Tuple

from .entity import Entity
from .constants import ENTITY_LIFETIME_MS


def is_expired(entity: Entity, now_ms: float, lifetime_ms: float = ENTITY_LIFETIME_MS) -> bool:
    return now_ms - entity.created_at_ms >= lifetime_ms


def expire_by_age(
    entities: List[Entity],
    now_ms: float,
    lifetime_ms: float = ENTITY_LIFETIME_MS
) -> Tuple[List[Entity], int]:
    """
    Drop entities whose lifetime has elapsed.

    Runs before motion, so an entity never moves or collides in the tick
    that expires it.

    Returns:
        (surviving entities in original order, number expired)
    """
    survivors = [e for e in entities if not is_expired(e, now_ms, lifetime_ms)]
    return survivors, len(entities) - len(survivors)


def commit(entities: List[Entity], killed: Set[int], births: Iterable[Entity]) -> List[Entity]:
    """
    Apply a pass's deferred mutations: remove killed indices, append births.

    Args:
        entities: The list that was scanned (indices refer to it)
        killed: Indices of entities killed this tick
        births: Pending offspring, in creation order

    Returns:
        New entity list for the next tick
    """
    if killed:
        survivors = [e for idx, e in enumerate(entities) if idx not in killed]
    else:
        survivors = list(entities)
    survivors.extend(births)
    return survivors
