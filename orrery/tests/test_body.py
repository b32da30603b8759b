import math

import numpy as np
import pytest

from orrery.config import SimulationConfig
from orrery.errors import DegenerateGeometryError, DomainError
from orrery.system import Simulator

G = 6.673e-11
EPS = 3e4


def _pair(pos_a=(0.0, 0.0), pos_b=(1e6, 0.0), m_a=1e24, m_b=1e22, config=None):
    sim = Simulator(config=config)
    a = sim.add_body("a", m_a, pos_a, (0.0, 0.0))
    b = sim.add_body("b", m_b, pos_b, (0.0, 0.0))
    return sim, a, b


def test_force_law_matches_softened_magnitude_and_plain_direction():
    _, a, b = _pair(pos_b=(3e5, 4e5))
    force = a.add_force_from(b)
    r = 5e5
    magnitude = G * 1e24 * 1e22 / (r * r + EPS * EPS)
    assert force[0] == pytest.approx(magnitude * 3e5 / r, rel=1e-12)
    assert force[1] == pytest.approx(magnitude * 4e5 / r, rel=1e-12)
    np.testing.assert_array_equal(a.force, force)
    np.testing.assert_array_equal(b.force, [0.0, 0.0])


def test_force_symmetry():
    rng = np.random.default_rng(7)
    for _ in range(20):
        pos_a, pos_b = rng.uniform(-1e9, 1e9, size=(2, 2))
        m_a, m_b = rng.uniform(1e20, 1e27, size=2)
        _, a, b = _pair(pos_a, pos_b, m_a, m_b)
        np.testing.assert_allclose(a.add_force_from(b), -b.add_force_from(a), rtol=1e-12)


def test_softening_bounds_force_at_short_range():
    m1, m2 = 1e22, 5e21
    bound = G * m1 * m2 / EPS**2
    for r in (1e-3, 1.0, 1e3, 1e4, 2.9e4):
        _, a, b = _pair(pos_b=(r, 0.0), m_a=m1, m_b=m2)
        magnitude = np.linalg.norm(a.add_force_from(b))
        assert math.isfinite(magnitude)
        assert magnitude < bound


def test_coincident_bodies_raise_degenerate_geometry():
    _, a, b = _pair(pos_b=(0.0, 0.0))
    with pytest.raises(DegenerateGeometryError):
        a.add_force_from(b)
    np.testing.assert_array_equal(a.force, [0.0, 0.0])


def test_min_separation_widens_degenerate_region():
    config = SimulationConfig(min_separation=10.0)
    _, a, b = _pair(pos_b=(6.0, 8.0), config=config)
    with pytest.raises(DegenerateGeometryError):
        a.add_force_from(b)
    _, a, b = _pair(pos_b=(6.0, 9.0), config=config)
    assert np.all(np.isfinite(a.add_force_from(b)))


def test_integrate_updates_velocity_before_position():
    sim = Simulator()
    body = sim.add_body("probe", 2.0, (10.0, -5.0), (3.0, 4.0))
    body.apply_force((8.0, -2.0))
    dt = 0.5

    vx = 3.0 + dt * 8.0 / 2.0
    vy = 4.0 + dt * -2.0 / 2.0
    x = 10.0 + dt * vx
    y = -5.0 + dt * vy

    body.integrate(dt)
    assert body.velocity.tolist() == pytest.approx([vx, vy])
    assert body.position.tolist() == pytest.approx([x, y])


@pytest.mark.parametrize("dt", [0.0, -1.0, float("nan"), float("inf")])
def test_integrate_rejects_bad_timestep(dt):
    sim = Simulator()
    body = sim.add_body("probe", 1.0, (0.0, 0.0), (1.0, 0.0))
    with pytest.raises(DomainError):
        body.integrate(dt)
    assert body.position.tolist() == [0.0, 0.0]


def test_reset_force_is_idempotent():
    _, a, b = _pair()
    a.reset_force()
    np.testing.assert_array_equal(a.force, [0.0, 0.0])
    a.add_force_from(b)
    a.reset_force()
    a.reset_force()
    np.testing.assert_array_equal(a.force, [0.0, 0.0])


@pytest.mark.parametrize("mass", [0.0, -1.0, float("nan")])
def test_non_positive_mass_is_rejected_at_construction(mass):
    sim = Simulator()
    with pytest.raises(DomainError):
        sim.add_body("bad", mass, (0.0, 0.0), (0.0, 0.0))
    assert sim.bodies == []


def test_state_is_read_only():
    _, a, _ = _pair()
    with pytest.raises(ValueError):
        a.force[0] = 1.0
    with pytest.raises(ValueError):
        a.velocity[0] = 1.0
    with pytest.raises(AttributeError):
        a.mass = 2.0


def test_vectors_must_be_planar():
    sim = Simulator()
    with pytest.raises(ValueError):
        sim.add_body("x", 1.0, (0.0, 0.0, 0.0), (0.0, 0.0))


def test_distance_to():
    _, a, b = _pair(pos_a=(1.0, 1.0), pos_b=(4.0, 5.0))
    assert a.distance_to(b) == pytest.approx(5.0)
    assert b.distance_to(a) == pytest.approx(5.0)
