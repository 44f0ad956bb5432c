"""
Three-variable systems ready to use.

Each one has a pure right-hand side function rhs(x, params, t) and an
ODEModel subclass binding it to default parameters and state.
Integrated with explicit Euler unless overridden.
"""

from typing import List, Mapping, Tuple

import numpy as np

from chaoslab.core.signals import SignalSpec
from chaoslab.physics.ode import ODEModel

XYZ = (SignalSpec("x"), SignalSpec("y"), SignalSpec("z"))


def lorenz_rhs(x: np.ndarray, p: Mapping[str, float], t: float = 0.0) -> np.ndarray:
    """dx = sigma(y - x), dy = x(rho - z) - y, dz = xy - beta z."""
    x1, y1, z1 = x[0], x[1], x[2]
    return np.array([
        p["sigma"] * (y1 - x1),
        x1 * (p["rho"] - z1) - y1,
        x1 * y1 - p["beta"] * z1,
    ])


def rossler_rhs(x: np.ndarray, p: Mapping[str, float], t: float = 0.0) -> np.ndarray:
    """dx = -y - z, dy = x + a y, dz = b + z(x - c)."""
    x1, y1, z1 = x[0], x[1], x[2]
    return np.array([
        -y1 - z1,
        x1 + p["a"] * y1,
        p["b"] + z1 * (x1 - p["c"]),
    ])


def van_der_pol_rhs(x: np.ndarray, p: Mapping[str, float], t: float = 0.0) -> np.ndarray:
    """dx = y, dy = mu(1 - x^2) y - x, dz = 0 (z is padding)."""
    x1, y1 = x[0], x[1]
    return np.array([
        y1,
        p["mu"] * (1 - x1 * x1) * y1 - x1,
        0.0,
    ])


def point_attractor_rhs(x: np.ndarray, p: Mapping[str, float], t: float = 0.0) -> np.ndarray:
    """dx/dt = -lambda x on every axis."""
    return -p["lambda"] * np.asarray(x, dtype=float)


def point_repeller_rhs(x: np.ndarray, p: Mapping[str, float], t: float = 0.0) -> np.ndarray:
    """dx/dt = lambda x on every axis."""
    return p["lambda"] * np.asarray(x, dtype=float)


class AttractorModel(ODEModel):
    """Three-variable system whose trajectory point is the state itself."""

    signals = XYZ

    def fixed_points(self, params: Mapping[str, float]) -> List[np.ndarray]:
        """States where all derivatives vanish."""
        return [np.zeros(3)]


class Lorenz(AttractorModel):
    """
    Lorenz system. Pitchfork bifurcation at rho = 1, Hopf at rho ~ 24.74.
    """

    key = "lorenz"
    name = "Lorenz Attractor"
    default_params = {"sigma": 10.0, "rho": 28.0, "beta": 8.0 / 3.0}
    default_state = (1.0, 1.0, 1.0)

    def rhs(self, x: np.ndarray, p: Mapping[str, float], t: float) -> np.ndarray:
        return lorenz_rhs(x, p, t)

    def fixed_points(self, params: Mapping[str, float]) -> List[np.ndarray]:
        """Origin, plus C+ and C- when rho > 1."""
        points = [np.zeros(3)]
        rho, beta = params["rho"], params["beta"]
        if rho > 1 and beta > 0:
            r = np.sqrt(beta * (rho - 1))
            points.append(np.array([r, r, rho - 1]))
            points.append(np.array([-r, -r, rho - 1]))
        return points


class Rossler(AttractorModel):
    """Rössler system; period doubling as c increases."""

    key = "rossler"
    name = "Rössler Attractor"
    default_params = {"a": 0.2, "b": 0.2, "c": 5.7}
    default_state = (1.0, 1.0, 1.0)

    def rhs(self, x: np.ndarray, p: Mapping[str, float], t: float) -> np.ndarray:
        return rossler_rhs(x, p, t)

    def fixed_points(self, params: Mapping[str, float]) -> List[np.ndarray]:
        """The two roots of a z^2 - c z + b = 0 mapped to (az, -z, z); none if c^2 < 4ab."""
        a, b, c = params["a"], params["b"], params["c"]
        if a == 0:
            return []
        disc = c * c - 4 * a * b
        if disc < 0:
            return []
        points = []
        for sign in (-1.0, 1.0):
            z = (c + sign * np.sqrt(disc)) / (2 * a)
            points.append(np.array([a * z, -z, z]))
        return points


class VanDerPol(AttractorModel):
    """Van der Pol oscillator padded to three variables; z stays constant."""

    key = "vanDerPol"
    name = "Van der Pol Oscillator"
    default_params = {"mu": 1.0}
    default_state = (1.0, 1.0, 0.0)

    def rhs(self, x: np.ndarray, p: Mapping[str, float], t: float) -> np.ndarray:
        return van_der_pol_rhs(x, p, t)

    def fixed_points(self, params: Mapping[str, float]) -> List[np.ndarray]:
        # z is free, so every point of the z axis is fixed; report the origin.
        return [np.zeros(3)]


class PointAttractor(AttractorModel):
    """Linear sink; globally stable origin for lambda > 0."""

    key = "pointAttractor"
    name = "Point Attractor"
    default_params = {"lambda": 1.0}
    default_state = (1.0, 1.0, 1.0)

    def rhs(self, x: np.ndarray, p: Mapping[str, float], t: float) -> np.ndarray:
        return point_attractor_rhs(x, p, t)


class PointRepeller(AttractorModel):
    """Linear source; unstable origin for lambda > 0."""

    key = "pointRepeller"
    name = "Point Repeller"
    default_params = {"lambda": 1.0}
    default_state = (0.1, 0.1, 0.1)

    def rhs(self, x: np.ndarray, p: Mapping[str, float], t: float) -> np.ndarray:
        return point_repeller_rhs(x, p, t)


def vector_field(
    model: ODEModel,
    params: Mapping[str, float],
    grid_size: int = 5,
    spacing: float = 5.0,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Samples the normalized derivative on a cubic grid.

    Args:
        model: a three-variable system.
        params: parameter mapping.
        grid_size: the grid spans -grid_size..grid_size on each axis.
        spacing: distance between grid nodes.

    Returns:
        (points, directions), both (n, 3) arrays with n = (2 * grid_size + 1) ** 3.
        Directions are unit vectors, or zero where the derivative vanishes.
    """
    if not isinstance(model, AttractorModel):
        raise ValueError(f"{model.name} has no 3-D vector field")
    ticks = np.arange(-grid_size, grid_size + 1) * spacing
    gx, gy, gz = np.meshgrid(ticks, ticks, ticks, indexing="ij")
    points = np.column_stack([gx.ravel(), gy.ravel(), gz.ravel()])
    directions = np.array([model.rhs(pt, params, 0.0) for pt in points], dtype=float)
    norms = np.linalg.norm(directions, axis=1, keepdims=True)
    np.divide(directions, norms, out=directions, where=norms > 0)
    return points, directions
