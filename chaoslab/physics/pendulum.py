"""
Double pendulum: two point masses on rigid massless rods, linear damping on each joint.

State [theta1, omega1, theta2, omega2], angles measured from the downward vertical.
Integrated with RK4: under Euler the energy visibly drifts within seconds.
"""

from typing import Mapping, Tuple

import numpy as np

from chaoslab.core.errors import NumericalInstability
from chaoslab.core.signals import SignalSpec
from chaoslab.physics.integrators import RK4Integrator
from chaoslab.physics.ode import ODEModel

# Below this the mass matrix is treated as singular.
SINGULAR_TOLERANCE = 1e-12

Point = Tuple[float, float, float]


def pendulum_rhs(x: np.ndarray, p: Mapping[str, float], t: float = 0.0) -> np.ndarray:
    """
    Returns [omega1, alpha1, omega2, alpha2].

    With d = theta1 - theta2 and D = m1 + m2 sin^2(d), both angular accelerations
    share the factor 1 / (l_i D). Raises NumericalInstability when l1 D or l2 D
    vanishes (degenerate masses or lengths) instead of dividing by it.
    """
    theta1, omega1, theta2, omega2 = x[0], x[1], x[2], x[3]
    m1, m2, l1, l2, g = p["m1"], p["m2"], p["l1"], p["l2"], p["g"]
    damping = p.get("damping", 0.0)

    delta = theta1 - theta2
    sin_d = np.sin(delta)
    cos_d = np.cos(delta)
    mass = m1 + m2 - m2 * cos_d * cos_d
    den1 = l1 * mass
    den2 = l2 * mass
    if abs(den1) < SINGULAR_TOLERANCE or abs(den2) < SINGULAR_TOLERANCE:
        raise NumericalInstability(
            "Double pendulum equations are singular for these masses and angles",
            {"delta": float(delta), "denominator": float(min(abs(den1), abs(den2)))},
        )

    alpha1 = (
        -m2 * l1 * omega1 * omega1 * sin_d * cos_d
        + m2 * g * np.sin(theta2) * cos_d
        - m2 * l2 * omega2 * omega2 * sin_d
        - (m1 + m2) * g * np.sin(theta1)
        - damping * omega1
    ) / den1
    alpha2 = (
        (m1 + m2) * (l1 * omega1 * omega1 * sin_d + g * np.sin(theta1) * cos_d - g * np.sin(theta2))
        + m2 * l2 * omega2 * omega2 * sin_d * cos_d
        - damping * omega2
    ) / den2
    return np.array([omega1, alpha1, omega2, alpha2])


def joint_positions(x: np.ndarray, p: Mapping[str, float]) -> Tuple[Point, Point]:
    """Forward kinematics: positions of bob1 and bob2 in the z = 0 plane, pivot at the origin."""
    l1, l2 = p["l1"], p["l2"]
    theta1, theta2 = float(x[0]), float(x[2])
    x1 = l1 * np.sin(theta1)
    y1 = -l1 * np.cos(theta1)
    x2 = x1 + l2 * np.sin(theta2)
    y2 = y1 - l2 * np.cos(theta2)
    return (float(x1), float(y1), 0.0), (float(x2), float(y2), 0.0)


def pendulum_energy(x: np.ndarray, p: Mapping[str, float]) -> float:
    """Total mechanical energy T + V, potential measured from the pivot height."""
    m1, m2, l1, l2, g = p["m1"], p["m2"], p["l1"], p["l2"], p["g"]
    theta1, omega1, theta2, omega2 = (float(v) for v in x[:4])

    v1_sq = l1 * l1 * omega1 * omega1
    v2_sq = (
        l1 * l1 * omega1 * omega1
        + l2 * l2 * omega2 * omega2
        + 2 * l1 * l2 * omega1 * omega2 * np.cos(theta1 - theta2)
    )
    kinetic = 0.5 * m1 * v1_sq + 0.5 * m2 * v2_sq

    y1 = -l1 * np.cos(theta1)
    y2 = y1 - l2 * np.cos(theta2)
    potential = m1 * g * y1 + m2 * g * y2
    return float(kinetic + potential)


class DoublePendulum(ODEModel):
    """
    Double pendulum with RK4 integration.
    The trajectory point is the second bob; velocity is |(omega1, omega2)|.
    """

    key = "doublePendulum"
    name = "Double Pendulum"
    default_params = {"m1": 1.0, "m2": 1.0, "l1": 1.0, "l2": 1.0, "g": 9.81, "damping": 0.0}
    default_state = (np.pi / 2, 0.0, np.pi / 2, 0.0)
    signals = (
        SignalSpec("theta1", "rad", "angle of the first rod"),
        SignalSpec("omega1", "rad/s", "angular velocity of the first rod"),
        SignalSpec("theta2", "rad", "angle of the second rod"),
        SignalSpec("omega2", "rad/s", "angular velocity of the second rod"),
    )
    integrator_cls = RK4Integrator

    def rhs(self, x: np.ndarray, p: Mapping[str, float], t: float) -> np.ndarray:
        return pendulum_rhs(x, p, t)

    def joints(self, x: np.ndarray, p: Mapping[str, float]) -> Tuple[Point, Point]:
        return joint_positions(x, p)

    def position(self, x: np.ndarray, p: Mapping[str, float]) -> Point:
        return joint_positions(x, p)[1]

    def velocity(self, x_prev: np.ndarray, x_next: np.ndarray, p: Mapping[str, float], t: float) -> float:
        return float(np.hypot(x_next[1], x_next[3]))

    def energy(self, x: np.ndarray, p: Mapping[str, float]) -> float:
        return pendulum_energy(x, p)

    def energy_scale(self, p: Mapping[str, float]) -> float:
        """Potential energy span between fully inverted and hanging at rest."""
        return 2.0 * (p["m1"] + p["m2"]) * p["g"] * p["l1"] + 2.0 * p["m2"] * p["g"] * p["l2"]
