"""Simulation session: owns state, parameters and buffers of the active system."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from chaoslab.core.config import SessionConfig
from chaoslab.core.errors import NumericalInstability
from chaoslab.core.history import (
    ProjectionBuffer,
    TimeSeriesBuffer,
    TrajectoryBuffer,
    velocity_color,
)
from chaoslab.physics.ode import ODEModel
from chaoslab.physics.pendulum import DoublePendulum
from chaoslab.physics.systems import get_system

logger = logging.getLogger(__name__)

Point = Tuple[float, float, float]

PROJECTION_AXES = {"xy": (0, 1), "yz": (1, 2), "xz": (0, 2)}


@dataclass
class StepResult:
    """Result of one session step, as handed to observers."""

    state: np.ndarray
    position: Point
    velocity: float
    color: Tuple[float, float, float]
    time: float
    joints: Optional[Tuple[Point, Point]] = None
    energy: Optional[float] = None


class SimulationSession:
    """
    One simulated system and everything derived from it.

    Driven from outside, once per frame: step(dt), then read the buffers.
    Calls are expected to be serialized; nothing here is thread-safe.
    Observers are any objects with an on_step(result) method; they receive
    each StepResult and are the only way the session talks to renderers.
    """

    def __init__(
        self,
        system: str = "lorenz",
        config: Optional[SessionConfig] = None,
        integrator: Optional[Any] = None,
        observers: Optional[Iterable[Any]] = None,
    ) -> None:
        """
        Args:
            system: selection key of the initial system
            config: time step and buffer bounds (default SessionConfig())
            integrator: overrides each system's own integrator (object with step(f, x, p, t, dt))
            observers: objects notified after every successful step
        """
        self.config = config or SessionConfig()
        self._integrator = integrator
        self.observers: List[Any] = list(observers or [])

        self.trajectory = TrajectoryBuffer(self.config.trajectory_length)
        self.projections: Dict[str, ProjectionBuffer] = {
            name: ProjectionBuffer(axes, self.config.projection_length)
            for name, axes in PROJECTION_AXES.items()
        }
        self.time_series = TimeSeriesBuffer(("x", "y", "z"), self.config.time_series_length)

        self._model: ODEModel
        self._params: Dict[str, float] = {}
        self._state: np.ndarray = np.array([])
        self._joints: Optional[Tuple[Point, Point]] = None
        self._time = 0.0
        self._running = True
        self._instability: Optional[str] = None
        self.initialize(system)

    # --- lifecycle ---

    def initialize(self, system_key: str) -> None:
        """
        Switches to a system: default parameters and state, empty buffers, running.
        Raises InvalidSystem for an unknown key and leaves the session unchanged.
        """
        model = get_system(system_key, integrator=self._integrator)
        self._model = model
        self._params = model.default_parameters()
        self._state = model.initial_state()
        self._clear()
        self._running = True
        logger.info("Initialized %s (%s)", model.name, type(model.integrator).__name__)

    def reset(self) -> None:
        """Restores the default state and clears the buffers; parameters are kept."""
        self._state = self.system.initial_state()
        if self._instability is not None:
            self._running = True
        self._clear()
        logger.debug("Reset %s", self.system.name)

    def _clear(self) -> None:
        self.trajectory.clear()
        for buf in self.projections.values():
            buf.clear()
        self.time_series.clear()
        self._time = 0.0
        self._instability = None
        self._joints = self._compute_joints(self._state)

    # --- stepping ---

    def step(self, dt: Optional[float] = None) -> Optional[StepResult]:
        """
        Advances the state by one integrator call and records the new point.

        Returns None when paused, or when the step blew up: in that case the
        session pauses itself, keeps the last finite state and sets `instability`.
        """
        dt = self.config.dt if dt is None else float(dt)
        if not dt > 0:
            raise ValueError(f"dt must be > 0, got {dt}")
        if not self._running:
            return None

        model = self.system
        x = self._state
        p = dict(self._params)
        t = self._time
        try:
            with np.errstate(all="ignore"):
                x_next = model.advance(x, p, t, dt)
                velocity = model.velocity(x, x_next, p, t)
                position = model.position(x_next, p)
        except NumericalInstability as exc:
            self._flag_instability(str(exc))
            return None
        if not (np.all(np.isfinite(x_next)) and np.isfinite(velocity) and np.all(np.isfinite(position))):
            self._flag_instability(f"Non-finite state after step at t={t + dt:.6g}")
            return None

        self._state = np.asarray(x_next, dtype=float)
        self._time = t + dt
        color = velocity_color(velocity)
        self.trajectory.push(position, color)
        for buf in self.projections.values():
            buf.push(position)
        self.time_series.push(position, self._time)
        self._joints = self._compute_joints(self._state)

        result = StepResult(
            state=self._state.copy(),
            position=position,
            velocity=float(velocity),
            color=color,
            time=self._time,
            joints=self._joints,
            energy=self.get_energy(),
        )
        for observer in self.observers:
            observer.on_step(result)
        return result

    def run(self, n_steps: int, dt: Optional[float] = None) -> int:
        """Calls step() up to n_steps times; stops early once paused. Returns the steps taken."""
        taken = 0
        for _ in range(n_steps):
            if self.step(dt) is None:
                break
            taken += 1
        return taken

    def _flag_instability(self, message: str) -> None:
        self._running = False
        self._instability = message
        logger.warning("%s paused: %s", self.system.name, message)

    def _compute_joints(self, x: np.ndarray) -> Optional[Tuple[Point, Point]]:
        if isinstance(self._model, DoublePendulum):
            return self._model.joints(x, self._params)
        return None

    # --- running flag ---

    def pause(self) -> None:
        self._running = False

    def resume(self) -> None:
        self._running = True

    def toggle_running(self) -> bool:
        self._running = not self._running
        return self._running

    @property
    def running(self) -> bool:
        return self._running

    @property
    def instability(self) -> Optional[str]:
        """Diagnostic of the last blow-up, None while the integration is healthy."""
        return self._instability

    # --- accessors ---

    @property
    def system(self) -> ODEModel:
        return self._model

    @property
    def system_key(self) -> str:
        return self.system.key

    @property
    def time(self) -> float:
        """Simulated time since the last initialize/reset."""
        return self._time

    @property
    def joint_positions(self) -> Optional[Tuple[Point, Point]]:
        """Bob positions of the double pendulum, None for the other systems."""
        return self._joints

    def get_parameters(self) -> Dict[str, float]:
        return dict(self._params)

    def set_parameters(self, partial: Mapping[str, float]) -> None:
        """Merges new values into the parameters. Physical plausibility is not checked."""
        updates = {str(k): float(v) for k, v in partial.items()}
        self._params.update(updates)
        self._joints = self._compute_joints(self._state)
        logger.debug("Parameters of %s updated: %s", self.system.name, updates)

    def get_state(self) -> np.ndarray:
        return self._state.copy()

    def set_state(self, values: Sequence[float]) -> None:
        """Replaces the current state (buffers untouched)."""
        x = self.system.check_state(values)
        if not np.all(np.isfinite(x)):
            raise ValueError("State components must be finite")
        self._state = x
        self._joints = self._compute_joints(self._state)

    def get_energy(self) -> Optional[float]:
        """Total mechanical energy for the double pendulum, None otherwise."""
        if isinstance(self._model, DoublePendulum):
            return self._model.energy(self._state, self._params)
        return None

    def state_dict(self) -> Dict[str, Any]:
        """Full session state for checkpointing."""
        return {
            "system": self.system_key,
            "parameters": self.get_parameters(),
            "state": self._state.tolist(),
            "state_names": list(self.system.state_names),
            "time": self._time,
            "running": self._running,
            "instability": self._instability,
        }
