"""Reference notes shown next to each system: equations, parameter meanings, stability."""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from chaoslab.core.errors import InvalidSystem


@dataclass(frozen=True)
class SystemInfo:
    """
    Descriptive text for one system.

    Attributes:
        title: display name
        description: what the system models
        equations: one line per state derivative, then any shorthand they use
        parameters: parameter key -> meaning
        stability: fixed points and their stability
        bifurcation: qualitative changes as parameters vary
    """

    title: str
    description: str
    equations: Tuple[str, ...]
    parameters: Dict[str, str] = field(default_factory=dict)
    stability: str = ""
    bifurcation: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "title": self.title,
            "description": self.description,
            "equations": list(self.equations),
            "parameters": dict(self.parameters),
            "stability": self.stability,
            "bifurcation": self.bifurcation,
        }


SYSTEM_INFO: Dict[str, SystemInfo] = {
    "lorenz": SystemInfo(
        title="Lorenz Attractor",
        description=(
            "Three coupled ODEs first studied by Edward Lorenz as a model of atmospheric "
            "convection. Chaotic for a wide range of parameters and initial conditions."
        ),
        equations=(
            "dx/dt = σ(y - x)",
            "dy/dt = x(ρ - z) - y",
            "dz/dt = xy - βz",
        ),
        parameters={
            "sigma": "Prandtl number, ratio of momentum diffusivity to thermal diffusivity",
            "rho": "Rayleigh number, temperature difference across the convection layer",
            "beta": "aspect ratio of the convection cell",
        },
        stability=(
            "Chaotic for ρ > 24.74. Fixed points at the origin and, for ρ > 1, "
            "at (±√(β(ρ-1)), ±√(β(ρ-1)), ρ-1)."
        ),
        bifurcation="Pitchfork bifurcation at ρ = 1, Hopf bifurcation at ρ ≈ 24.74.",
    ),
    "rossler": SystemInfo(
        title="Rössler Attractor",
        description=(
            "Chaotic attractor introduced by Otto Rössler in 1976, behaving like the Lorenz "
            "attractor with a simpler, single nonlinear term."
        ),
        equations=(
            "dx/dt = -y - z",
            "dy/dt = x + ay",
            "dz/dt = b + z(x - c)",
        ),
        parameters={
            "a": "rotation speed around the unstable focus",
            "b": "size of the attractor",
            "c": "onset of chaotic behavior",
        },
        stability=(
            "Periodic for c < 4.2, chaotic for larger values. Fixed points at (az, -z, z) "
            "with az² - cz + b = 0 when c² ≥ 4ab."
        ),
        bifurcation="Period-doubling cascade into chaos as c increases.",
    ),
    "vanDerPol": SystemInfo(
        title="Van der Pol Oscillator",
        description=(
            "Non-conservative oscillator with nonlinear damping, developed by Balthasar "
            "van der Pol while studying vacuum tube circuits."
        ),
        equations=(
            "dx/dt = y",
            "dy/dt = μ(1 - x²)y - x",
            "dz/dt = 0",
        ),
        parameters={"mu": "nonlinear damping coefficient"},
        stability=(
            "Unique limit cycle for μ > 0. The origin is an unstable focus for μ > 0 "
            "and a stable focus for μ < 0."
        ),
        bifurcation="Hopf bifurcation at μ = 0, from a stable fixed point to a stable limit cycle.",
    ),
    "pointAttractor": SystemInfo(
        title="Point Attractor",
        description="Simplest attractor: every trajectory converges to a single stable equilibrium.",
        equations=(
            "dx/dt = -λx",
            "dy/dt = -λy",
            "dz/dt = -λz",
        ),
        parameters={"lambda": "rate of convergence to the origin"},
        stability="For λ > 0 the origin is globally stable; trajectories decay as exp(-λt).",
        bifurcation="None; the behavior is the same for every positive λ.",
    ),
    "pointRepeller": SystemInfo(
        title="Point Repeller",
        description="Opposite of the point attractor: trajectories diverge from an unstable equilibrium.",
        equations=(
            "dx/dt = λx",
            "dy/dt = λy",
            "dz/dt = λz",
        ),
        parameters={"lambda": "rate of divergence from the origin"},
        stability="The origin is unstable; every other trajectory grows as exp(λt).",
        bifurcation="None; the behavior is the same for every positive λ.",
    ),
    "doublePendulum": SystemInfo(
        title="Double Pendulum",
        description=(
            "A pendulum hanging from the bob of another pendulum: a simple mechanical "
            "system with chaotic motion."
        ),
        equations=(
            "dθ₁/dt = ω₁",
            "dω₁/dt = [-m₂l₁ω₁²sinΔcosΔ + m₂g sinθ₂cosΔ - m₂l₂ω₂²sinΔ - (m₁+m₂)g sinθ₁ - damping·ω₁] / (l₁D)",
            "dθ₂/dt = ω₂",
            "dω₂/dt = [(m₁+m₂)(l₁ω₁²sinΔ + g sinθ₁cosΔ - g sinθ₂) + m₂l₂ω₂²sinΔcosΔ - damping·ω₂] / (l₂D)",
            "Δ = θ₁ - θ₂, D = m₁ + m₂sin²Δ",
        ),
        parameters={
            "m1": "mass of the first bob",
            "m2": "mass of the second bob",
            "l1": "length of the first rod",
            "l2": "length of the second rod",
            "g": "gravitational acceleration",
            "damping": "energy dissipation coefficient",
        },
        stability="Equilibria at (0, 0), hanging down and stable, and at (π, π), upright and unstable.",
        bifurcation="Sensitive dependence on initial conditions: nearby starts diverge quickly.",
    ),
}


def system_info(key: str) -> SystemInfo:
    """Notes for a selection key; raises InvalidSystem for an unknown key."""
    try:
        return SYSTEM_INFO[key]
    except KeyError:
        raise InvalidSystem(f"Unknown system {key!r}", {"system": key}) from None
