"""Tests for SimulationSession: lifecycle, stepping, buffers, instability handling."""

import numpy as np
import pytest

from chaoslab import SessionConfig, SimulationSession
from chaoslab.core.errors import InvalidSystem
from chaoslab.physics import RK4Integrator


class Recorder:
    def __init__(self) -> None:
        self.results = []

    def on_step(self, result) -> None:
        self.results.append(result)


def test_lorenz_one_euler_step() -> None:
    session = SimulationSession("lorenz")
    np.testing.assert_array_equal(session.get_state(), [1.0, 1.0, 1.0])
    result = session.step(0.01)
    expected = [1.0, 1.0 + (1.0 * (28 - 1) - 1) * 0.01, 1.0 + (1.0 - 8.0 / 3.0) * 0.01]
    np.testing.assert_allclose(session.get_state(), expected, rtol=1e-12)
    np.testing.assert_allclose(result.position, expected, rtol=1e-12)
    assert session.get_state()[2] == pytest.approx(0.9973333333333333)
    assert result.time == pytest.approx(0.01)


def test_velocity_is_derivative_norm_before_step() -> None:
    session = SimulationSession("lorenz")
    result = session.step()
    assert result.velocity == pytest.approx(np.linalg.norm([0.0, 26.0, 1.0 - 8.0 / 3.0]))
    assert len(result.color) == 3


def test_step_fills_buffers() -> None:
    session = SimulationSession("rossler")
    for _ in range(10):
        session.step()
    assert len(session.trajectory) == 10
    assert set(session.projections) == {"xy", "yz", "xz"}
    for name, buf in session.projections.items():
        assert len(buf) == 10
    last = session.get_state()
    np.testing.assert_allclose(session.projections["yz"].points()[-1], last[1:])
    np.testing.assert_allclose(session.projections["xz"].points()[-1], last[[0, 2]])
    np.testing.assert_allclose(session.time_series.times(), np.arange(1, 11) * 0.01)
    np.testing.assert_allclose(session.time_series.get("z")[-1], last[2])


def test_buffers_respect_config_bounds() -> None:
    config = SessionConfig(trajectory_length=20, projection_length=15, time_series_length=5)
    session = SimulationSession("vanDerPol", config=config)
    assert session.run(50) == 50
    assert len(session.trajectory) == 20
    assert len(session.projections["xy"]) == 15
    assert len(session.time_series) == 5


def test_session_config_validation() -> None:
    with pytest.raises(ValueError):
        SessionConfig(dt=0.0)
    with pytest.raises(ValueError):
        SessionConfig(time_series_length=0)


def test_van_der_pol_z_projection_degenerate() -> None:
    session = SimulationSession("vanDerPol")
    session.run(100)
    assert session.get_state()[2] == 0.0
    np.testing.assert_array_equal(session.projections["xz"].points()[:, 1], 0.0)


def test_paused_step_is_noop() -> None:
    session = SimulationSession("lorenz")
    session.pause()
    before = session.get_state()
    assert session.step() is None
    np.testing.assert_array_equal(session.get_state(), before)
    assert len(session.trajectory) == 0
    assert session.toggle_running() is True
    assert session.step() is not None


def test_dt_must_be_positive() -> None:
    session = SimulationSession()
    with pytest.raises(ValueError):
        session.step(0.0)
    with pytest.raises(ValueError):
        session.step(-0.01)


def test_initialize_unknown_system_keeps_session() -> None:
    session = SimulationSession("rossler")
    session.run(5)
    state = session.get_state()
    with pytest.raises(InvalidSystem):
        session.initialize("duffing")
    assert session.system_key == "rossler"
    np.testing.assert_array_equal(session.get_state(), state)
    assert len(session.trajectory) == 5


def test_constructor_rejects_unknown_system() -> None:
    with pytest.raises(InvalidSystem):
        SimulationSession("duffing")
    assert SimulationSession("pointRepeller").system.key == "pointRepeller"


def test_initialize_resets_parameters_and_buffers() -> None:
    session = SimulationSession("lorenz")
    session.set_parameters({"rho": 99.0})
    session.run(5)
    session.initialize("lorenz")
    assert session.get_parameters()["rho"] == 28.0
    assert len(session.trajectory) == 0
    assert session.time == 0.0


def test_reset_keeps_parameters() -> None:
    session = SimulationSession("pointAttractor")
    session.set_parameters({"lambda": 2.0})
    session.run(20)
    session.reset()
    assert session.get_parameters() == {"lambda": 2.0}
    np.testing.assert_array_equal(session.get_state(), [1.0, 1.0, 1.0])
    assert len(session.trajectory) == 0
    assert len(session.time_series) == 0
    assert all(len(b) == 0 for b in session.projections.values())


def test_set_parameters_merges_without_validation() -> None:
    session = SimulationSession("doublePendulum")
    session.set_parameters({"damping": -0.3})
    params = session.get_parameters()
    assert params["damping"] == -0.3
    assert params["g"] == 9.81
    params["g"] = 0.0
    assert session.get_parameters()["g"] == 9.81


def test_set_state_checks_dimension() -> None:
    session = SimulationSession("doublePendulum")
    with pytest.raises(ValueError):
        session.set_state([0.1, 0.2, 0.3])
    with pytest.raises(ValueError):
        session.set_state([0.1, float("nan"), 0.3, 0.0])
    session.set_state([0.1, 0.0, 0.2, 0.0])
    np.testing.assert_array_equal(session.get_state(), [0.1, 0.0, 0.2, 0.0])


def test_point_attractor_euler_drift() -> None:
    """Euler underestimates exp(-t): after t = 1 the gap to the exact decay is visible."""
    session = SimulationSession("pointAttractor")
    session.run(100)
    x = session.get_state()[0]
    np.testing.assert_allclose(session.get_state(), 0.99 ** 100, rtol=1e-10)
    assert 1e-3 < np.exp(-1.0) - x < 5e-3


def test_integrator_override() -> None:
    session = SimulationSession("pointAttractor", integrator=RK4Integrator())
    session.step(0.1)
    factor = 1 - 0.1 + 0.1**2 / 2 - 0.1**3 / 6 + 0.1**4 / 24
    np.testing.assert_allclose(session.get_state(), factor, rtol=1e-12)
    session.initialize("lorenz")
    assert isinstance(session.system.integrator, RK4Integrator)


def test_double_pendulum_session() -> None:
    session = SimulationSession("doublePendulum")
    bob1, bob2 = session.joint_positions
    assert bob2 == pytest.approx((2.0, 0.0, 0.0), abs=1e-12)
    result = session.step()
    theta1, omega1, theta2, omega2 = session.get_state()
    assert theta1 < np.pi / 2 and theta2 < np.pi / 2
    assert result.position == session.joint_positions[1]
    assert result.position[2] == 0.0
    assert result.velocity == pytest.approx(np.hypot(omega1, omega2))
    assert result.energy == pytest.approx(session.get_energy())
    assert session.time_series.get("x")[-1] == pytest.approx(result.position[0])


def test_energy_only_for_pendulum() -> None:
    session = SimulationSession("lorenz")
    assert session.get_energy() is None
    assert session.joint_positions is None
    assert session.step().energy is None


def test_blow_up_pauses_and_keeps_last_finite_state() -> None:
    session = SimulationSession("pointRepeller")
    session.set_parameters({"lambda": 1e150})
    assert session.step() is not None
    good = session.get_state()
    assert np.all(np.isfinite(good))
    assert session.step() is None
    assert not session.running
    assert session.instability is not None
    np.testing.assert_array_equal(session.get_state(), good)
    assert len(session.trajectory) == 1
    assert np.all(np.isfinite(session.trajectory.positions()))
    assert session.step() is None


def test_lorenz_large_dt_blows_up_cleanly() -> None:
    session = SimulationSession("lorenz")
    taken = session.run(500, dt=1.0)
    assert taken < 500
    assert session.instability is not None
    assert np.all(np.isfinite(session.get_state()))
    assert np.all(np.isfinite(session.trajectory.positions()))
    assert np.all(np.isfinite(session.time_series.get("x")))


def test_singular_pendulum_pauses() -> None:
    session = SimulationSession("doublePendulum")
    session.set_parameters({"m1": 0.0})
    assert session.step() is None
    assert not session.running
    assert "singular" in session.instability
    assert len(session.trajectory) == 0


def test_reset_recovers_from_instability() -> None:
    session = SimulationSession("pointRepeller")
    session.set_parameters({"lambda": 1e150})
    session.run(5)
    assert session.instability is not None
    session.set_parameters({"lambda": 1.0})
    session.reset()
    assert session.running
    assert session.instability is None
    assert session.step() is not None


def test_reset_does_not_resume_manual_pause() -> None:
    session = SimulationSession("lorenz")
    session.pause()
    session.reset()
    assert not session.running


def test_observers_receive_results() -> None:
    recorder = Recorder()
    session = SimulationSession("lorenz", observers=[recorder])
    session.run(3)
    assert len(recorder.results) == 3
    assert recorder.results[-1].time == pytest.approx(0.03)
    np.testing.assert_array_equal(recorder.results[-1].state, session.get_state())


def test_independent_sessions() -> None:
    a = SimulationSession("lorenz")
    b = SimulationSession("lorenz")
    a.run(10)
    np.testing.assert_array_equal(b.get_state(), [1.0, 1.0, 1.0])
    assert len(b.trajectory) == 0


def test_state_dict() -> None:
    session = SimulationSession("doublePendulum")
    session.run(2)
    d = session.state_dict()
    assert d["system"] == "doublePendulum"
    assert d["state_names"] == ["theta1", "omega1", "theta2", "omega2"]
    assert d["time"] == pytest.approx(0.02)
    assert d["running"] is True
    assert d["instability"] is None
    assert len(d["state"]) == 4
