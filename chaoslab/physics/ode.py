"""Base class for the dynamical systems: dx/dt = rhs(x, params, t)."""

from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from chaoslab.core.signals import SignalSpec, signal_names
from chaoslab.physics.info import SystemInfo, system_info
from chaoslab.physics.integrators import EulerIntegrator


class ODEModel:
    """
    System described by an ODE: dx/dt = f(x, params, t).
    Subclasses set the class attributes below and implement rhs().

    Class attributes:
        key: identifier used for selection ("lorenz", ...)
        name: human-readable name, also used in saved configurations
        default_params: parameter mapping restored on initialize
        default_state: state restored on initialize/reset
        signals: one SignalSpec per state component
        integrator_cls: integrator used unless the caller overrides it
    """

    key: str = ""
    name: str = ""
    default_params: Mapping[str, float] = {}
    default_state: Tuple[float, ...] = ()
    signals: Tuple[SignalSpec, ...] = ()
    integrator_cls: Any = EulerIntegrator

    def __init__(self, integrator: Optional[Any] = None) -> None:
        """
        Args:
            integrator: object with method step(f, x, params, t, dt). Default: integrator_cls().
        """
        self.integrator = integrator or self.integrator_cls()

    @property
    def state_dim(self) -> int:
        return len(self.default_state)

    @property
    def state_names(self) -> Tuple[str, ...]:
        return signal_names(self.signals)

    @property
    def info(self) -> SystemInfo:
        """Equations, parameter meanings and stability notes for this system."""
        return system_info(self.key)

    def default_parameters(self) -> Dict[str, float]:
        return dict(self.default_params)

    def initial_state(self) -> np.ndarray:
        return np.array(self.default_state, dtype=float)

    def check_state(self, x: Sequence[float]) -> np.ndarray:
        """State as a float array; raises ValueError on a dimension mismatch."""
        arr = np.asarray(x, dtype=float).ravel()
        if arr.size != self.state_dim:
            raise ValueError(
                f"{self.name} expects a state of dimension {self.state_dim}, got {arr.size}"
            )
        return arr

    def rhs(self, x: np.ndarray, p: Mapping[str, float], t: float) -> np.ndarray:
        """
        Right-hand side of the ODE: dx/dt = rhs(x, params, t).
        To be implemented in subclasses.
        """
        raise NotImplementedError("Subclasses must implement rhs(x, params, t).")

    def derivative(
        self,
        x: Sequence[float],
        params: Optional[Mapping[str, float]] = None,
        t: float = 0.0,
    ) -> np.ndarray:
        """rhs() with the default parameters filled in for missing keys."""
        p = self.default_parameters()
        if params:
            p.update(params)
        return self.rhs(self.check_state(x), p, t)

    def advance(self, x: np.ndarray, p: Mapping[str, float], t: float, dt: float) -> np.ndarray:
        """One integrator step from x."""
        return self.integrator.step(self.rhs, x, p, t, dt)

    def position(self, x: np.ndarray, p: Mapping[str, float]) -> Tuple[float, float, float]:
        """3-D point recorded in the trajectory. Default: the state itself."""
        return (float(x[0]), float(x[1]), float(x[2]))

    def velocity(
        self,
        x_prev: np.ndarray,
        x_next: np.ndarray,
        p: Mapping[str, float],
        t: float,
    ) -> float:
        """
        Velocity scalar used to color the trajectory.
        Default: norm of the derivative at the state the step started from.
        """
        return float(np.linalg.norm(self.rhs(x_prev, p, t)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(integrator={type(self.integrator).__name__})"
