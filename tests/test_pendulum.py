"""Tests for the double pendulum: equations of motion, kinematics, energy."""

import numpy as np
import pytest

from chaoslab.core.errors import NumericalInstability
from chaoslab.physics import (
    DoublePendulum,
    EulerIntegrator,
    RK4Integrator,
    joint_positions,
    pendulum_energy,
    pendulum_rhs,
)

DEFAULTS = dict(DoublePendulum.default_params)


def _simulate_energy(state, params, integrator, n_steps=1000, dt=0.01):
    model = DoublePendulum(integrator=integrator)
    x = np.array(state, dtype=float)
    energies = [pendulum_energy(x, params)]
    for k in range(n_steps):
        x = model.advance(x, params, k * dt, dt)
        energies.append(pendulum_energy(x, params))
    return np.array(energies)


def test_hanging_at_rest_is_equilibrium() -> None:
    d = pendulum_rhs(np.zeros(4), DEFAULTS)
    np.testing.assert_allclose(d, np.zeros(4), atol=1e-15)


def test_derivative_returns_angular_velocities() -> None:
    x = np.array([0.3, 1.5, -0.2, -0.7])
    d = pendulum_rhs(x, DEFAULTS)
    assert d[0] == 1.5
    assert d[2] == -0.7


def test_single_bob_limit() -> None:
    """With a negligible second mass the first rod is a simple pendulum: alpha = -(g/l) sin(theta)."""
    p = {**DEFAULTS, "m2": 1e-9}
    d = pendulum_rhs(np.array([0.4, 0.0, 0.4, 0.0]), p)
    assert d[1] == pytest.approx(-9.81 * np.sin(0.4), rel=1e-6)


def test_one_rk4_step_from_horizontal() -> None:
    """Both rods start horizontal: gravity pulls both bobs down on the first step."""
    model = DoublePendulum()
    x0 = model.initial_state()
    x1 = model.advance(x0, DEFAULTS, 0.0, 0.01)
    theta1, omega1, theta2, omega2 = x1
    assert theta1 < np.pi / 2
    assert theta2 < np.pi / 2
    assert omega1 < 0
    assert omega2 < 0


def test_rk4_conserves_energy_regular_motion() -> None:
    energies = _simulate_energy([0.5, 0.0, 0.3, 0.0], DEFAULTS, RK4Integrator())
    drift = np.abs(energies - energies[0]) / abs(energies[0])
    assert drift.max() < 0.01


def test_rk4_energy_bounded_from_horizontal() -> None:
    """Chaotic regime: energy starts near zero, so the drift is measured against the potential span."""
    model = DoublePendulum()
    energies = _simulate_energy(model.initial_state(), DEFAULTS, RK4Integrator())
    scale = model.energy_scale(DEFAULTS)
    assert np.abs(energies - energies[0]).max() < 0.01 * scale


def test_euler_drifts_more_than_rk4() -> None:
    """Explicit Euler is not usable for the pendulum: its energy error dominates RK4's."""
    state = [0.5, 0.0, 0.3, 0.0]
    rk4 = _simulate_energy(state, DEFAULTS, RK4Integrator(), n_steps=500)
    euler = _simulate_energy(state, DEFAULTS, EulerIntegrator(), n_steps=500)
    assert np.abs(euler - euler[0]).max() > 10 * np.abs(rk4 - rk4[0]).max()
    # Euler pumps energy into the system.
    assert euler[-1] > euler[0]


def test_damping_dissipates_energy() -> None:
    p = {**DEFAULTS, "damping": 0.5}
    energies = _simulate_energy([0.5, 0.0, 0.3, 0.0], p, RK4Integrator(), n_steps=500)
    assert energies[-1] < energies[0]


def test_singular_denominator_raises() -> None:
    p = {**DEFAULTS, "m1": 0.0}
    with pytest.raises(NumericalInstability):
        pendulum_rhs(np.array([0.3, 0.0, 0.3, 0.0]), p)


def test_zero_length_raises() -> None:
    p = {**DEFAULTS, "l2": 0.0}
    with pytest.raises(NumericalInstability):
        pendulum_rhs(np.array([0.3, 0.0, 0.1, 0.0]), p)


def test_joint_positions() -> None:
    bob1, bob2 = joint_positions(np.array([np.pi / 2, 0.0, np.pi / 2, 0.0]), DEFAULTS)
    assert bob1 == pytest.approx((1.0, 0.0, 0.0), abs=1e-12)
    assert bob2 == pytest.approx((2.0, 0.0, 0.0), abs=1e-12)
    bob1, bob2 = joint_positions(np.zeros(4), {**DEFAULTS, "l1": 2.0, "l2": 0.5})
    assert bob1 == pytest.approx((0.0, -2.0, 0.0))
    assert bob2 == pytest.approx((0.0, -2.5, 0.0))


def test_energy_values() -> None:
    assert pendulum_energy(np.zeros(4), DEFAULTS) == pytest.approx(-3 * 9.81)
    assert pendulum_energy(np.array([np.pi / 2, 0.0, np.pi / 2, 0.0]), DEFAULTS) == pytest.approx(0.0, abs=1e-12)
    # Both rods aligned and spinning together: T = 1/2 m1 (l1 w)^2 + 1/2 m2 ((l1 + l2) w)^2
    e = pendulum_energy(np.array([np.pi / 2, 1.0, np.pi / 2, 1.0]), DEFAULTS)
    assert e == pytest.approx(0.5 * 1.0 + 0.5 * 4.0, abs=1e-12)


def test_position_and_velocity() -> None:
    model = DoublePendulum()
    x = np.array([np.pi / 2, 3.0, np.pi / 2, 4.0])
    assert model.position(x, DEFAULTS) == pytest.approx((2.0, 0.0, 0.0), abs=1e-12)
    assert model.velocity(np.zeros(4), x, DEFAULTS, 0.0) == pytest.approx(5.0)
