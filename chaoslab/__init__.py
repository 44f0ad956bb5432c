"""
ChaosLab: real-time simulation of continuous-time dynamical systems
(Lorenz, Rössler, Van der Pol, point attractor/repeller, double pendulum).
"""

__version__ = "0.1.0"

from chaoslab.core.errors import InvalidConfiguration, InvalidSystem, NumericalInstability
from chaoslab.core.session import SimulationSession, StepResult
from chaoslab.core.config import SessionConfig

__all__ = [
    "__version__",
    "SimulationSession",
    "StepResult",
    "SessionConfig",
    "InvalidSystem",
    "InvalidConfiguration",
    "NumericalInstability",
]
