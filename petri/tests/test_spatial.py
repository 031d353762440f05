import numpy as np

from petri.spatial import reflect_velocity, normalize


def test_reflect_velocity_head_on():
    v = np.array([3.0, 0.0])
    n = np.array([1.0, 0.0])
    assert np.allclose(reflect_velocity(v, n), [-3.0, 0.0])


def test_reflect_velocity_keeps_tangential_part():
    v = np.array([2.0, 5.0])
    n = np.array([1.0, 0.0])
    assert np.allclose(reflect_velocity(v, n), [-2.0, 5.0])


def test_reflect_velocity_preserves_speed():
    v = np.array([1.5, -0.7])
    n = np.array([1.0, 1.0]) / np.sqrt(2.0)
    r = reflect_velocity(v, n)
    assert np.isclose(np.linalg.norm(r), np.linalg.norm(v))


def test_normalize():
    unit, length = normalize(np.array([3.0, 4.0]))
    assert np.isclose(length, 5.0)
    assert np.allclose(unit, [0.6, 0.8])


def test_normalize_zero_vector():
    unit, length = normalize(np.zeros(2))
    assert unit is None
    assert length == 0.0
