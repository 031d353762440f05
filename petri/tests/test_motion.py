"""
Tests for motion integration and wall reflection.
"""

import numpy as np

from petri.motion import advance, advance_all, reflect, reflect_all
from petri.container import ContainerState
from petri.tests.harness import make_entity


def make_container(radius: float = 100.0) -> ContainerState:
    return ContainerState(initial_radius=radius, max_radius=radius, center=np.array([0.0, 0.0]))


def test_advance_moves_and_ages():
    e = make_entity("e", (10.0, 20.0), velocity=(1.5, -2.0))
    advance(e)
    assert np.allclose(e.position, [11.5, 18.0])
    assert e.age_ticks == 1

    advance(e)
    assert np.allclose(e.position, [13.0, 16.0])
    assert e.age_ticks == 2


def test_advance_does_not_bound_check():
    container = make_container(10.0)
    e = make_entity("e", (0.0, 0.0), velocity=(50.0, 0.0))
    advance_all([e])
    # Far outside the wall until the reflection pass runs
    assert np.linalg.norm(e.position - container.center) > container.radius


def test_tangent_entity_moving_outward_reflects():
    """Entity touching the wall from inside and moving out bounces straight back"""
    container = make_container(100.0)
    r = 8.0
    v = 3.0
    e = make_entity("e", (100.0 - r, 0.0), velocity=(v, 0.0), radius=r)

    advance(e)
    assert reflect(e, container)

    assert np.allclose(e.velocity, [-v, 0.0])
    # Pushed back so it touches the wall again
    assert np.isclose(np.linalg.norm(e.position) + r, container.radius)


def test_inside_entity_not_reflected():
    container = make_container(100.0)
    e = make_entity("e", (50.0, 0.0), velocity=(3.0, 0.0))
    assert not reflect(e, container)
    assert np.allclose(e.velocity, [3.0, 0.0])
    assert np.allclose(e.position, [50.0, 0.0])


def test_entity_at_center_is_skipped():
    """Zero-length normal: no reflection even if the entity is bigger than the dish"""
    container = make_container(5.0)
    e = make_entity("e", (0.0, 0.0), velocity=(1.0, 1.0), radius=8.0)
    assert not reflect(e, container)
    assert np.allclose(e.velocity, [1.0, 1.0])
    assert np.all(np.isfinite(e.position))


def test_oblique_reflection_preserves_speed():
    container = make_container(100.0)
    e = make_entity("e", (70.0, 70.0), velocity=(2.0, 1.0), radius=10.0)

    speed_before = np.linalg.norm(e.velocity)
    assert reflect(e, container)

    normal = np.array([1.0, 1.0]) / np.sqrt(2.0)
    assert np.isclose(np.linalg.norm(e.velocity), speed_before)
    # Normal component flipped to inward, tangential component kept
    assert np.dot(e.velocity, normal) < 0
    tangent = np.array([-1.0, 1.0]) / np.sqrt(2.0)
    assert np.isclose(np.dot(e.velocity, tangent), np.dot([2.0, 1.0], tangent))
    assert np.linalg.norm(e.position) + e.radius <= container.radius + 1e-9


def test_reflect_all_counts_bounces():
    container = make_container(50.0)
    entities = [
        make_entity("in", (0.0, 10.0), radius=5.0),
        make_entity("out1", (48.0, 0.0), velocity=(1.0, 0.0), radius=5.0),
        make_entity("out2", (0.0, -60.0), velocity=(0.0, -1.0), radius=5.0),
    ]
    assert reflect_all(entities, container) == 2
    for e in entities:
        assert np.linalg.norm(e.position - container.center) + e.radius <= container.radius + 1e-9
