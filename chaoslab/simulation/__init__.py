"""
Simulation views: plots of the buffers a session fills.

Use _utils for visualization (projections, time series, 3-D trajectory).
"""

from chaoslab.simulation._utils import (
    FigureRecorder,
    plot_projection,
    plot_projections,
    plot_state_vs_time,
    plot_trajectory_3d,
)

__all__ = [
    "FigureRecorder",
    "plot_projection",
    "plot_projections",
    "plot_state_vs_time",
    "plot_trajectory_3d",
]
