"""
Pairwise interaction pass: same-type kills, elastic collisions, breeding.

SNAPSHOT CONTRACT (Critical Invariant):

The pass walks every unordered pair (i, j), i < j, of the entity list as it
stood when the pass started. The list is never resized during the pass:

- Deaths are recorded in a kill set (by index) and checked, not removed.
  A pair with a member already in the kill set is skipped.
- Offspring are appended to a separate pending list and are not visited.

The caller commits both after the pass (lifecycle.commit).

Population cap policy: strict per-pair re-check. Before each breeding
event the projected population live + pending_births - pending_deaths is
re-evaluated, and a twin roll only yields two offspring when both fit.
The committed population therefore never exceeds max_population.
"""

import math
from dataclasses import dataclass, field
from typing import List, Set

from .entity import Entity
from .data_types import SimulationConfig
from .spawning import EntityFactory
from .constants import KILL_CHANCE, TWIN_CHANCE


@dataclass
class InteractionResult:
    """Deferred mutations and counters produced by one pass"""
    killed: Set[int] = field(default_factory=set)  # Indices into the scanned list
    births: List[Entity] = field(default_factory=list)
    collisions: int = 0
    breedings: int = 0


def resolve_collision(e1: Entity, e2: Entity, nx: float, ny: float, dist: float) -> bool:
    """
    Resolve an elastic collision along the contact normal (e1 -> e2).

    Only approaching pairs are resolved; separating or tangential contacts
    are left alone so no energy is added. Masses are radius squared.
    Momentum along the normal is conserved; equal masses swap normal
    velocity components.

    Args:
        e1: First entity
        e2: Second entity
        nx, ny: Unit normal pointing from e1 to e2
        dist: Current centre distance

    Returns:
        True if the collision was resolved (pair was approaching)
    """
    dvx = e2.velocity[0] - e1.velocity[0]
    dvy = e2.velocity[1] - e1.velocity[1]
    dot = dvx * nx + dvy * ny

    if dot >= 0.0:
        return False

    m1 = e1.mass
    m2 = e2.mass
    impulse = (2.0 * dot) / (m1 + m2)

    e1.velocity[0] += impulse * m2 * nx
    e1.velocity[1] += impulse * m2 * ny
    e2.velocity[0] -= impulse * m1 * nx
    e2.velocity[1] -= impulse * m1 * ny

    # Separate by half the penetration each
    overlap = (e1.radius + e2.radius - dist) / 2.0
    e1.position[0] -= nx * overlap
    e1.position[1] -= ny * overlap
    e2.position[0] += nx * overlap
    e2.position[1] += ny * overlap

    return True


def can_breed(e1: Entity, e2: Entity, now_ms: float, cooldown_ms: float) -> bool:
    """Both parents must be of different types and past their cooldown"""
    return (
        e1.entity_type is not e2.entity_type
        and now_ms - e1.last_breed_ms > cooldown_ms
        and now_ms - e2.last_breed_ms > cooldown_ms
    )


def resolve_pairs(
    entities: List[Entity],
    now_ms: float,
    config: SimulationConfig,
    rng,
    factory: EntityFactory
) -> InteractionResult:
    """
    Run the O(n^2) interaction pass over a fixed snapshot.

    Per overlapping pair (distance < r1 + r2):
    1. Same type: roll KILL_CHANCE[type]; on success kill one of the two
       (chosen uniformly) and skip physics/breeding for the pair.
    2. Otherwise resolve an elastic collision if approaching.
    3. After a resolved collision between different types, attempt to
       breed (cap pre-check, cooldowns, breed roll, twin roll).

    Pairs with coincident centres have no contact normal; they can still
    trigger a kill roll but get no physics and so never breed.

    Args:
        entities: Live entities after motion and wall reflection
        now_ms: Simulated time
        config: Accepted (sanitized) simulation config
        rng: Random source
        factory: Offspring constructor

    Returns:
        InteractionResult with kill indices and pending births
    """
    result = InteractionResult()
    killed = result.killed
    births = result.births
    n = len(entities)

    for i in range(n):
        if i in killed:
            continue
        e1 = entities[i]

        for j in range(i + 1, n):
            if j in killed:
                continue
            e2 = entities[j]

            dx = e2.position[0] - e1.position[0]
            dy = e2.position[1] - e1.position[1]
            dist_sq = dx * dx + dy * dy
            min_dist = e1.radius + e2.radius

            if dist_sq >= min_dist * min_dist:
                continue

            # Same-type contact: potential destruction, no bounce
            if e1.entity_type is e2.entity_type:
                if rng.random() < KILL_CHANCE[e1.entity_type.value]:
                    victim = i if rng.random() < 0.5 else j
                    killed.add(victim)
                    if victim == i:
                        break
                    continue

            dist = math.sqrt(dist_sq)
            if dist == 0.0:
                continue

            if not resolve_collision(e1, e2, dx / dist, dy / dist, dist):
                continue
            result.collisions += 1

            if not can_breed(e1, e2, now_ms, config.breed_cooldown_ms):
                continue

            projected = n + len(births) - len(killed)
            if projected >= config.max_population:
                continue

            if rng.random() < config.breed_chance:
                twin = rng.random() < TWIN_CHANCE and projected + 2 <= config.max_population
                births.extend(factory.spawn_offspring(
                    e1, e2, now_ms, config.ball_speed, twin=twin
                ))
                e1.last_breed_ms = now_ms
                e2.last_breed_ms = now_ms
                result.breedings += 1

    return result
