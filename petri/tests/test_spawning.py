"""
Tests for entity spawning (initial population and offspring).
"""

import math
import numpy as np
import pytest

from petri.spawning import EntityFactory, clamp_radius
from petri.data_types import EntityType
from petri.rng import make_rng
from petri.constants import (
    DISH_CENTER,
    REFERENCE_RADIUS,
    MIN_RADIUS,
    MAX_RADIUS,
    NEWBORN_GRACE_MS,
    TWIN_OFFSET,
)
from petri.tests.harness import ScriptedRandom, make_entity


CENTER = np.array(DISH_CENTER, dtype=np.float64)


def test_initial_population_types_alternate():
    factory = EntityFactory(make_rng(7), CENTER)
    entities = factory.spawn_initial(count=21, container_radius=120.0, speed_scale=2.0)

    assert len(entities) == 21
    types = [e.entity_type for e in entities]
    assert types[:4] == [EntityType.A, EntityType.B, EntityType.A, EntityType.B]

    count_a = types.count(EntityType.A)
    count_b = types.count(EntityType.B)
    assert abs(count_a - count_b) <= 1


def test_initial_positions_inside_spawn_disk():
    factory = EntityFactory(make_rng(11), CENTER)
    container_radius = 120.0
    entities = factory.spawn_initial(count=200, container_radius=container_radius, speed_scale=2.0)

    spawn_radius = container_radius - 2 * REFERENCE_RADIUS
    for e in entities:
        dist = np.linalg.norm(e.position - CENTER)
        assert dist <= spawn_radius + 1e-9, f"{e.instance_id} spawned at {dist:.2f}"
        assert MIN_RADIUS <= e.radius <= MAX_RADIUS


def test_initial_positions_have_uniform_areal_density():
    """Half the area lies inside r/sqrt(2); about half the entities should too"""
    factory = EntityFactory(make_rng(3), CENTER)
    entities = factory.spawn_initial(count=2000, container_radius=120.0, speed_scale=2.0)

    spawn_radius = 120.0 - 2 * REFERENCE_RADIUS
    inner = sum(1 for e in entities
                if np.linalg.norm(e.position - CENTER) < spawn_radius / math.sqrt(2))
    assert 0.45 < inner / len(entities) < 0.55


def test_initial_ids_are_unique_and_timestamps_have_grace():
    factory = EntityFactory(make_rng(1), CENTER)
    entities = factory.spawn_initial(count=10, container_radius=120.0, speed_scale=2.0, now_ms=500.0)

    assert len({e.instance_id for e in entities}) == 10
    for e in entities:
        assert e.created_at_ms == 500.0 + NEWBORN_GRACE_MS
        assert e.last_breed_ms == 500.0 + NEWBORN_GRACE_MS
        assert e.age_ticks == 0


def test_negative_count_rejected():
    factory = EntityFactory(make_rng(1), CENTER)
    with pytest.raises(ValueError):
        factory.spawn_initial(count=-1, container_radius=120.0, speed_scale=2.0)


def test_speed_inversely_proportional_to_radius():
    # uniform(0.5, 1.0) -> 0.75 under the scripted source
    factory = EntityFactory(ScriptedRandom(), CENTER)

    small = factory.spawn_kinematics(radius=4.0, speed_scale=2.0)
    nominal = factory.spawn_kinematics(radius=REFERENCE_RADIUS, speed_scale=2.0)
    large = factory.spawn_kinematics(radius=16.0, speed_scale=2.0)

    assert np.isclose(np.linalg.norm(small), 0.75 * 2.0 * 2.0)
    assert np.isclose(np.linalg.norm(nominal), 0.75 * 2.0)
    assert np.isclose(np.linalg.norm(large), 0.75 * 2.0 * 0.5)


def test_kinematics_guards_zero_radius():
    factory = EntityFactory(make_rng(5), CENTER)
    velocity = factory.spawn_kinematics(radius=0.0, speed_scale=2.0)

    assert np.all(np.isfinite(velocity))
    assert np.linalg.norm(velocity) <= 1.0 * 2.0 * (REFERENCE_RADIUS / MIN_RADIUS) + 1e-9


def test_kinematics_speed_range():
    factory = EntityFactory(make_rng(9), CENTER)
    for _ in range(200):
        speed = np.linalg.norm(factory.spawn_kinematics(REFERENCE_RADIUS, 2.0))
        assert 0.5 * 2.0 - 1e-9 <= speed <= 1.0 * 2.0 + 1e-9


def test_offspring_at_midpoint_with_grace():
    factory = EntityFactory(ScriptedRandom(), CENTER)
    parent_a = make_entity("a", (100.0, 100.0), radius=6.0, entity_type=EntityType.A)
    parent_b = make_entity("b", (110.0, 120.0), radius=10.0, entity_type=EntityType.B)

    children = factory.spawn_offspring(parent_a, parent_b, now_ms=1000.0, speed_scale=2.0)

    assert len(children) == 1
    child = children[0]
    assert np.allclose(child.position, [105.0, 110.0])
    # Scripted variance is the midpoint of (-1, 1) = 0
    assert np.isclose(child.radius, 8.0)
    assert child.created_at_ms == 1000.0 + NEWBORN_GRACE_MS
    assert child.last_breed_ms == 1000.0 + NEWBORN_GRACE_MS
    # Scripted random() default 0.99 -> type B
    assert child.entity_type is EntityType.B


def test_twins_are_offset_and_distinct():
    factory = EntityFactory(ScriptedRandom(values=[0.1, 0.9]), CENTER)
    parent_a = make_entity("a", (100.0, 100.0), entity_type=EntityType.A)
    parent_b = make_entity("b", (110.0, 100.0), entity_type=EntityType.B)

    twins = factory.spawn_offspring(parent_a, parent_b, now_ms=0.0, speed_scale=2.0, twin=True)

    assert len(twins) == 2
    assert twins[0].instance_id != twins[1].instance_id
    assert np.allclose(twins[1].position - twins[0].position, [TWIN_OFFSET, TWIN_OFFSET])
    # Type is drawn per child, not inherited
    assert twins[0].entity_type is EntityType.A
    assert twins[1].entity_type is EntityType.B


def test_offspring_radius_clamped():
    factory = EntityFactory(make_rng(13), CENTER)
    big_a = make_entity("a", (0.0, 0.0), radius=MAX_RADIUS, entity_type=EntityType.A)
    big_b = make_entity("b", (1.0, 0.0), radius=MAX_RADIUS, entity_type=EntityType.B)
    tiny_a = make_entity("c", (0.0, 0.0), radius=MIN_RADIUS, entity_type=EntityType.A)
    tiny_b = make_entity("d", (1.0, 0.0), radius=MIN_RADIUS, entity_type=EntityType.B)

    for _ in range(50):
        for child in factory.spawn_offspring(big_a, big_b, 0.0, 2.0, twin=True):
            assert MIN_RADIUS <= child.radius <= MAX_RADIUS
        for child in factory.spawn_offspring(tiny_a, tiny_b, 0.0, 2.0, twin=True):
            assert MIN_RADIUS <= child.radius <= MAX_RADIUS


def test_clamp_radius():
    assert clamp_radius(1.0) == MIN_RADIUS
    assert clamp_radius(99.0) == MAX_RADIUS
    assert clamp_radius(float('nan')) == MIN_RADIUS
    assert clamp_radius(9.5) == 9.5
