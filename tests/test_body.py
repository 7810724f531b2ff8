import numpy as np
import pytest

from orbitsim.body import RESTITUTION, CelestialBody

WHITE = (1.0, 1.0, 1.0, 1.0)


def make(pos, vel=(0, 0, 0), radius=1.0, mass=1.0):
    return CelestialBody(radius, WHITE, pos, vel, mass)


def test_mesh_detail_clamps():
    assert make((0, 0, 0), radius=1.0).mesh_detail() == 10
    assert make((0, 0, 0), radius=10.0).mesh_detail() == 30
    assert make((0, 0, 0), radius=3.0).mesh_detail() == 15


def test_mesh_uses_detail():
    body = make((0, 0, 0), radius=4.0)
    detail = body.mesh_detail()
    assert body.mesh.latitude_bands == detail
    assert body.mesh.longitude_bands == detail
    assert body.mesh.radius == 4.0


def test_lone_body_moves_in_straight_line():
    body = make((1, 2, 3), vel=(0.5, -1.0, 2.0))
    body.update([body], 2.0, 1.0)
    assert np.allclose(body.velocity, [0.5, -1.0, 2.0])
    assert np.allclose(body.position, [2.0, 0.0, 7.0])


def test_gravity_pulls_towards_other_body():
    a = make((0, 0, 0))
    b = make((5, 0, 0), mass=100.0)
    a.update([a, b], 0.1, 1.0)
    assert a.velocity[0] > 0
    assert a.velocity[1] == 0 and a.velocity[2] == 0


def test_heavier_attractor_pulls_harder():
    a1, a2 = make((0, 0, 0)), make((0, 0, 0))
    light, heavy = make((3, 0, 0), mass=1.0), make((3, 0, 0), mass=10.0)
    a1.update([a1, light], 0.1, 1.0)
    a2.update([a2, heavy], 0.1, 1.0)
    assert np.isclose(a2.velocity[0], 10.0 * a1.velocity[0])


def test_zero_gravity_leaves_velocity():
    a = make((0, 0, 0), vel=(1, 0, 0))
    b = make((2, 0, 0), mass=1000.0)
    a.update([a, b], 0.5, 0.0)
    assert np.allclose(a.velocity, [1, 0, 0])


def test_very_close_bodies_do_not_attract():
    a = make((0, 0, 0))
    b = make((0.05, 0, 0), mass=1000.0)
    a.update([a, b], 1.0, 1.0)
    assert np.allclose(a.velocity, 0)
    assert np.allclose(a.position, 0)


def test_check_collision():
    a = make((0, 0, 0), radius=1.0)
    assert a.check_collision(make((1.9, 0, 0), radius=1.0))
    assert not a.check_collision(make((2.1, 0, 0), radius=1.0))
    assert not a.check_collision(make((2.0, 0, 0), radius=1.0))


def test_resolve_separates_to_touching():
    a = make((0, 0, 0), radius=1.0)
    b = make((1.5, 0, 0), radius=1.0)
    a.resolve_collision(b)
    assert np.isclose(np.linalg.norm(b.position - a.position), 2.0)
    assert np.isclose((a.position[0] + b.position[0]) / 2, 0.75)


def test_resolve_head_on_applies_restitution_and_conserves_momentum():
    a = make((0, 0, 0), vel=(1, 0, 0), mass=2.0)
    b = make((1.5, 0, 0), vel=(-1, 0, 0), mass=3.0)
    momentum = a.mass * a.velocity + b.mass * b.velocity
    rel_before = (b.velocity - a.velocity)[0]
    a.resolve_collision(b)
    rel_after = (b.velocity - a.velocity)[0]
    assert np.isclose(rel_after, -RESTITUTION * rel_before)
    assert np.allclose(a.mass * a.velocity + b.mass * b.velocity, momentum)


def test_resolve_separating_bodies_keep_velocity():
    a = make((0, 0, 0), vel=(-1, 0, 0))
    b = make((1.5, 0, 0), vel=(1, 0, 0))
    a.resolve_collision(b)
    assert np.allclose(a.velocity, [-1, 0, 0])
    assert np.allclose(b.velocity, [1, 0, 0])


def test_resolve_coincident_bodies_pushed_along_x():
    a = make((0, 0, 0))
    b = make((0, 0, 0))
    a.resolve_collision(b)
    assert a.position[0] < 0 < b.position[0]
    assert np.allclose(a.position[1:], 0) and np.allclose(b.position[1:], 0)


@pytest.mark.parametrize("bad", [(1, 2), (1, 2, 3, 4)])
def test_position_must_be_three_components(bad):
    with pytest.raises(ValueError):
        make(bad)