"""
Headless explorer: run one of the three-variable systems for a number of frames
and save projections, time series and the colored 3-D trajectory.

    python examples/attractor_explorer/run_attractor.py --system rossler --steps 3000 --plot
"""

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from chaoslab import SimulationSession
from chaoslab.physics import system_keys, vector_field


def main() -> None:
    parser = argparse.ArgumentParser(description="ChaosLab attractor explorer")
    parser.add_argument("--system", default="lorenz", choices=system_keys())
    parser.add_argument("--steps", type=int, default=2000)
    parser.add_argument("--dt", type=float, default=0.01)
    parser.add_argument("--param", action="append", default=[], metavar="NAME=VALUE",
                        help="Override a parameter, e.g. --param rho=99.96")
    parser.add_argument("--plot", action="store_true", help="Save plots next to this script")
    parser.add_argument("--csv", action="store_true", help="Export the time series to CSV")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    session = SimulationSession(args.system)
    overrides = {}
    for item in args.param:
        name, _, value = item.partition("=")
        overrides[name] = float(value)
    if overrides:
        session.set_parameters(overrides)

    taken = session.run(args.steps, dt=args.dt)
    print(f"{session.system.name}: {taken} steps, t = {session.time:.2f}")
    print(f"  parameters: {session.get_parameters()}")
    print(f"  final state: {session.get_state()}")
    if session.instability:
        print(f"  paused: {session.instability}")
    if session.get_energy() is not None:
        print(f"  energy: {session.get_energy():.6f}")
    fixed_points = getattr(session.system, "fixed_points", None)
    if fixed_points is not None:
        for pt in fixed_points(session.get_parameters()):
            print(f"  fixed point: {pt}")

    out_dir = Path(__file__).resolve().parent
    stem = session.system_key
    if args.csv:
        session.time_series.to_csv(out_dir / f"{stem}_time_series.csv")
        print(f"Saved {stem}_time_series.csv")

    if args.plot:
        try:
            import matplotlib.pyplot as plt
        except ImportError:
            print("matplotlib not available, skip saving plots")
            return
        from chaoslab.simulation import plot_projections, plot_state_vs_time, plot_trajectory_3d

        plot_projections(session.projections).savefig(out_dir / f"{stem}_projections.png", dpi=120)
        plot_state_vs_time(session.time_series, title=session.system.name).savefig(
            out_dir / f"{stem}_time_series.png", dpi=120
        )
        ax = plot_trajectory_3d(session.trajectory, title=session.system.name)
        if args.system != "doublePendulum":
            points, directions = vector_field(session.system, session.get_parameters())
            ax.quiver(*points.T, *directions.T, length=2.0, color="#00fff2", alpha=0.2)
        ax.figure.savefig(out_dir / f"{stem}_trajectory.png", dpi=120)
        plt.close("all")
        print(f"Saved {stem}_projections.png, {stem}_time_series.png, {stem}_trajectory.png")


if __name__ == "__main__":
    main()
