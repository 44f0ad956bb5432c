"""Core: session, bounded buffers, errors and settings."""

from chaoslab.core.errors import (
    ChaosLabError,
    InvalidConfiguration,
    InvalidSystem,
    NumericalInstability,
)
from chaoslab.core.signals import SignalSpec
from chaoslab.core.history import (
    BoundedBuffer,
    ProjectionBuffer,
    TimeSeriesBuffer,
    TrajectoryBuffer,
    velocity_color,
)
from chaoslab.core.config import SessionConfig
from chaoslab.core.session import SimulationSession, StepResult

__all__ = [
    "ChaosLabError",
    "InvalidSystem",
    "InvalidConfiguration",
    "NumericalInstability",
    "SignalSpec",
    "BoundedBuffer",
    "TrajectoryBuffer",
    "ProjectionBuffer",
    "TimeSeriesBuffer",
    "velocity_color",
    "SessionConfig",
    "SimulationSession",
    "StepResult",
]
