"""
Double pendulum: energy drift of RK4 versus explicit Euler from the same start.

RK4 keeps the undamped energy within a small band; Euler pumps energy in.
Damping (--damping) makes the energy decay under both.
"""

import argparse
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from chaoslab import SimulationSession
from chaoslab.physics import EulerIntegrator, RK4Integrator


def energy_history(integrator, n_steps: int, dt: float, damping: float) -> np.ndarray:
    session = SimulationSession("doublePendulum", integrator=integrator)
    session.set_parameters({"damping": damping})
    energies = [session.get_energy()]
    for _ in range(n_steps):
        result = session.step(dt)
        if result is None:
            print(f"{type(integrator).__name__} stopped: {session.instability}")
            break
        energies.append(result.energy)
    return np.array(energies)


def main() -> None:
    parser = argparse.ArgumentParser(description="Double pendulum energy drift")
    parser.add_argument("--steps", type=int, default=1000)
    parser.add_argument("--dt", type=float, default=0.01)
    parser.add_argument("--damping", type=float, default=0.0)
    parser.add_argument("--plot", action="store_true")
    args = parser.parse_args()

    rk4 = energy_history(RK4Integrator(), args.steps, args.dt, args.damping)
    euler = energy_history(EulerIntegrator(), args.steps, args.dt, args.damping)
    print(f"RK4   energy: start {rk4[0]:+.6f}  end {rk4[-1]:+.6f}  max drift {np.abs(rk4 - rk4[0]).max():.2e}")
    print(f"Euler energy: start {euler[0]:+.6f}  end {euler[-1]:+.6f}  max drift {np.abs(euler - euler[0]).max():.2e}")

    if args.plot:
        try:
            import matplotlib.pyplot as plt
        except ImportError:
            print("matplotlib not available, skip saving plots")
            return
        fig, ax = plt.subplots(figsize=(8, 4))
        ax.plot(np.arange(len(rk4)) * args.dt, rk4, label="RK4")
        ax.plot(np.arange(len(euler)) * args.dt, euler, label="Euler")
        ax.set_xlabel("time")
        ax.set_ylabel("energy")
        ax.legend()
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        fig.savefig(Path(__file__).resolve().parent / "energy_drift.png", dpi=120)
        plt.close(fig)
        print("Saved energy_drift.png")


if __name__ == "__main__":
    main()
