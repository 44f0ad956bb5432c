"""
Physics of the simulated systems.

Hierarchy:
  - integrators: numerical integration (Euler, RK4)
  - ode: base ODE model (ODEModel)
  - info: reference notes per system (SystemInfo)
  - library: the three-variable systems (Lorenz, Rossler, VanDerPol, PointAttractor, PointRepeller)
  - pendulum: double pendulum (DoublePendulum), forward kinematics, energy
  - systems: registry (SystemKind, get_system)
"""

# --- Integrators (numerical level) ---
from chaoslab.physics.integrators import (
    EulerIntegrator,
    RK4Integrator,
    euler_step,
    get_integrator,
    rk4_step,
)

# --- Reference notes ---
from chaoslab.physics.info import SYSTEM_INFO, SystemInfo, system_info

# --- Base ODE model ---
from chaoslab.physics.ode import ODEModel

# --- Three-variable systems ---
from chaoslab.physics.library import (
    AttractorModel,
    Lorenz,
    PointAttractor,
    PointRepeller,
    Rossler,
    VanDerPol,
    lorenz_rhs,
    point_attractor_rhs,
    point_repeller_rhs,
    rossler_rhs,
    van_der_pol_rhs,
    vector_field,
)

# --- Double pendulum ---
from chaoslab.physics.pendulum import (
    DoublePendulum,
    joint_positions,
    pendulum_energy,
    pendulum_rhs,
)

# --- Registry ---
from chaoslab.physics.systems import SystemKind, get_system, system_keys

__all__ = [
    # Integrators
    "EulerIntegrator",
    "RK4Integrator",
    "euler_step",
    "rk4_step",
    "get_integrator",
    # Base
    "ODEModel",
    # Reference notes
    "SystemInfo",
    "SYSTEM_INFO",
    "system_info",
    # Three-variable systems
    "AttractorModel",
    "Lorenz",
    "Rossler",
    "VanDerPol",
    "PointAttractor",
    "PointRepeller",
    "lorenz_rhs",
    "rossler_rhs",
    "van_der_pol_rhs",
    "point_attractor_rhs",
    "point_repeller_rhs",
    "vector_field",
    # Double pendulum
    "DoublePendulum",
    "pendulum_rhs",
    "pendulum_energy",
    "joint_positions",
    # Registry
    "SystemKind",
    "get_system",
    "system_keys",
]
