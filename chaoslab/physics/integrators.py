"""
Numerical integrators for ODEs: time step x_{n+1} = step(f, x_n, p, t_n, dt).

Pure numerical level: no dependency on sessions or buffers.
Interface: step(f, x, params, t, dt) -> x_next.
"""

from typing import Callable, Mapping

import numpy as np

# Type for ODE right-hand side: (x, params, t) -> dx/dt
RHS = Callable[[np.ndarray, Mapping[str, float], float], np.ndarray]


def euler_step(f: RHS, x: np.ndarray, p: Mapping[str, float], t: float, dt: float) -> np.ndarray:
    """Explicit Euler, order 1: x_{n+1} = x_n + dt * f(x_n, p, t_n)."""
    return x + dt * f(x, p, t)


def rk4_step(f: RHS, x: np.ndarray, p: Mapping[str, float], t: float, dt: float) -> np.ndarray:
    """Runge-Kutta 4, order 4."""
    k1 = f(x, p, t)
    k2 = f(x + 0.5 * dt * k1, p, t + 0.5 * dt)
    k3 = f(x + 0.5 * dt * k2, p, t + 0.5 * dt)
    k4 = f(x + dt * k3, p, t + dt)
    return x + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


class EulerIntegrator:
    """Explicit Euler integrator, order 1. Drifts on long runs; fast."""

    name = "euler"
    order = 1

    @staticmethod
    def step(f: RHS, x: np.ndarray, p: Mapping[str, float], t: float, dt: float) -> np.ndarray:
        return euler_step(f, x, p, t, dt)


class RK4Integrator:
    """Runge-Kutta 4 integrator, order 4."""

    name = "rk4"
    order = 4

    @staticmethod
    def step(f: RHS, x: np.ndarray, p: Mapping[str, float], t: float, dt: float) -> np.ndarray:
        return rk4_step(f, x, p, t, dt)


INTEGRATORS = {
    EulerIntegrator.name: EulerIntegrator,
    RK4Integrator.name: RK4Integrator,
}


def get_integrator(name: str):
    """Integrator instance by name ('euler' or 'rk4')."""
    try:
        return INTEGRATORS[name]()
    except KeyError:
        raise ValueError(f"Unknown integrator {name!r}; expected one of {sorted(INTEGRATORS)}") from None
