"""
Visualization utilities: 2-D projections, time series and the colored 3-D trajectory.

All functions consume buffer snapshots only, never the session internals.
Matplotlib is optional; if not installed, functions raise ImportError.
"""

from typing import Any, Dict, List, Optional

import numpy as np

from chaoslab.core.history import ProjectionBuffer, TimeSeriesBuffer, TrajectoryBuffer

AXIS_LABELS = "xyz"


def _pyplot() -> Any:
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plotting (pip install chaoslab[plot]).")
    return plt


def plot_projection(
    buffer: ProjectionBuffer,
    ax: Optional[Any] = None,
    title: Optional[str] = None,
    **kwargs: Any,
) -> Any:
    """
    Plot one 2-D projection of the trajectory.

    Args:
        buffer: projection buffer (e.g. session.projections["xy"]).
        ax: matplotlib axes (if None, creates new figure).
        title: defaults to "X-Y Projection" style names.
        **kwargs: passed to ax.plot().

    Returns:
        matplotlib axes.
    """
    plt = _pyplot()
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(5, 5))
    pts = buffer.points()
    kwargs.setdefault("color", "#00fff2")
    kwargs.setdefault("linewidth", 1)
    if len(pts):
        ax.plot(pts[:, 0], pts[:, 1], **kwargs)
    i, j = buffer.axes
    ax.set_xlabel(AXIS_LABELS[i])
    ax.set_ylabel(AXIS_LABELS[j])
    ax.set_title(title or f"{AXIS_LABELS[i].upper()}-{AXIS_LABELS[j].upper()} Projection")
    ax.grid(True, alpha=0.3)
    return ax


def plot_projections(projections: Dict[str, ProjectionBuffer], **kwargs: Any) -> Any:
    """One panel per projection buffer, side by side. Returns the figure."""
    plt = _pyplot()
    names = list(projections)
    fig, axes = plt.subplots(1, len(names), figsize=(4 * len(names), 4))
    axes = np.atleast_1d(axes)
    for ax, name in zip(axes, names):
        plot_projection(projections[name], ax=ax, **kwargs)
    fig.tight_layout()
    return fig


def plot_state_vs_time(
    series: TimeSeriesBuffer,
    names: Optional[List[str]] = None,
    ax: Optional[Any] = None,
    title: str = "Time series",
    **kwargs: Any,
) -> Any:
    """
    Plot each recorded component vs time.

    Args:
        series: time-series buffer.
        names: components to plot (default: all).
        ax: matplotlib axes (if None, one subplot per component).
        title: figure/subplot title.
        **kwargs: passed to ax.plot().

    Returns:
        matplotlib figure, or the given axes.
    """
    plt = _pyplot()
    names = list(names or series.names)
    t = series.times()
    if ax is None:
        fig, axes = plt.subplots(len(names), 1, sharex=True, figsize=(8, max(2 * len(names), 4)))
        axes = list(np.atleast_1d(axes))
        fig_ref = fig
    else:
        fig_ref = ax.figure
        axes = [ax] * len(names)
    for a, name in zip(axes, names):
        a.plot(t, series.get(name), label=name, **kwargs)
        a.set_ylabel(name)
        a.legend(loc="upper right", fontsize=8)
        a.grid(True, alpha=0.3)
    axes[-1].set_xlabel("time")
    if title:
        fig_ref.suptitle(title)
    return fig_ref if ax is None else ax


def plot_trajectory_3d(
    buffer: TrajectoryBuffer,
    ax: Optional[Any] = None,
    title: str = "Trajectory",
) -> Any:
    """3-D trajectory, each segment colored by the velocity color of its end point."""
    plt = _pyplot()
    from mpl_toolkits.mplot3d.art3d import Line3DCollection

    if ax is None:
        fig = plt.figure(figsize=(6, 6))
        ax = fig.add_subplot(111, projection="3d")
    pos = buffer.positions()
    if len(pos) > 1:
        segments = np.stack([pos[:-1], pos[1:]], axis=1)
        ax.add_collection3d(Line3DCollection(segments, colors=buffer.colors()[1:], linewidths=1.5))
        lo, hi = pos.min(axis=0), pos.max(axis=0)
        pad = np.where(hi > lo, 0.05 * (hi - lo), 1.0)
        ax.set_xlim(lo[0] - pad[0], hi[0] + pad[0])
        ax.set_ylim(lo[1] - pad[1], hi[1] + pad[1])
        ax.set_zlim(lo[2] - pad[2], hi[2] + pad[2])
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    ax.set_title(title)
    return ax


class FigureRecorder:
    """
    Observer that redraws the projection panels every `every` steps.
    Attach with session.observers.append(FigureRecorder(session)).
    """

    def __init__(self, session: Any, every: int = 50) -> None:
        self.session = session
        self.every = max(1, int(every))
        self.frames = 0
        self.figure: Optional[Any] = None

    def on_step(self, result: Any) -> None:
        self.frames += 1
        if self.frames % self.every:
            return
        if self.figure is not None:
            _pyplot().close(self.figure)
        self.figure = plot_projections(self.session.projections)
