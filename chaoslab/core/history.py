"""Bounded in-memory buffers feeding trajectory, projection and time-series views."""

import colorsys
from collections import deque
from pathlib import Path
from typing import Any, Deque, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

TRAJECTORY_LENGTH = 1000
PROJECTION_LENGTH = 1000
TIME_SERIES_LENGTH = 200

Color = Tuple[float, float, float]


def velocity_color(velocity: float) -> Color:
    """
    Color of a trajectory segment from the velocity scalar.
    hue = (velocity * 0.1) mod 1, full saturation, half lightness, as RGB in [0, 1].
    """
    hue = (float(velocity) * 0.1) % 1.0
    r, g, b = colorsys.hls_to_rgb(hue, 0.5, 1.0)
    return (r, g, b)


class BoundedBuffer:
    """
    FIFO of the N most recent entries, in chronological order.
    Once the bound is exceeded the oldest entry is evicted.
    """

    def __init__(self, max_length: int) -> None:
        """
        Args:
            max_length: maximum number of entries kept (N > 0).
        """
        if max_length <= 0:
            raise ValueError(f"max_length must be positive, got {max_length}")
        self._entries: Deque[Any] = deque(maxlen=max_length)

    @property
    def maxlen(self) -> int:
        return self._entries.maxlen  # type: ignore[return-value]

    def push(self, entry: Any) -> None:
        self._entries.append(entry)

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> List[Any]:
        """Current entries, oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self.snapshot())


class TrajectoryBuffer(BoundedBuffer):
    """Recent 3-D positions with the color derived from the velocity at each point."""

    def __init__(self, max_length: int = TRAJECTORY_LENGTH) -> None:
        super().__init__(max_length)

    def push(self, position: Sequence[float], color: Color) -> None:  # type: ignore[override]
        pos = tuple(float(v) for v in position)
        if len(pos) != 3:
            raise ValueError(f"Expected a 3-D position, got {len(pos)} components")
        self._entries.append((pos, tuple(float(c) for c in color)))

    def positions(self) -> np.ndarray:
        """Positions as an (n, 3) array."""
        if not self._entries:
            return np.empty((0, 3))
        return np.array([p for p, _ in self._entries], dtype=float)

    def colors(self) -> np.ndarray:
        """RGB colors as an (n, 3) array."""
        if not self._entries:
            return np.empty((0, 3))
        return np.array([c for _, c in self._entries], dtype=float)


class ProjectionBuffer(BoundedBuffer):
    """2-D view of the trajectory obtained by keeping two position axes."""

    AXIS_NAMES = "xyz"

    def __init__(self, axes: Tuple[int, int], max_length: int = PROJECTION_LENGTH) -> None:
        super().__init__(max_length)
        if len(axes) != 2 or not all(0 <= a < 3 for a in axes):
            raise ValueError(f"axes must be two indices in [0, 3), got {axes}")
        self.axes = (int(axes[0]), int(axes[1]))

    @property
    def name(self) -> str:
        return self.AXIS_NAMES[self.axes[0]] + self.AXIS_NAMES[self.axes[1]]

    def push(self, position: Sequence[float]) -> None:  # type: ignore[override]
        i, j = self.axes
        self._entries.append((float(position[i]), float(position[j])))

    def points(self) -> np.ndarray:
        """Points as an (n, 2) array."""
        if not self._entries:
            return np.empty((0, 2))
        return np.array(self._entries, dtype=float)


class TimeSeriesBuffer:
    """
    Per-component scalar history with timestamps.
    All components share one bound; a push appends one sample to each of them.
    """

    def __init__(
        self,
        names: Sequence[str] = ("x", "y", "z"),
        max_length: int = TIME_SERIES_LENGTH,
    ) -> None:
        """
        Args:
            names: component names, in the order of pushed values.
            max_length: number of samples kept (N > 0).
        """
        if max_length <= 0:
            raise ValueError(f"max_length must be positive, got {max_length}")
        self.names = tuple(names)
        self._max_length = max_length
        self._times: Deque[float] = deque(maxlen=max_length)
        self._data: Dict[str, Deque[float]] = {n: deque(maxlen=max_length) for n in self.names}

    @property
    def maxlen(self) -> int:
        return self._max_length

    def push(self, components: Sequence[float], timestamp: float) -> None:
        """Appends one sample per component, evicting the oldest when full."""
        if len(components) != len(self.names):
            raise ValueError(
                f"Expected {len(self.names)} components, got {len(components)}"
            )
        for name, value in zip(self.names, components):
            self._data[name].append(float(value))
        self._times.append(float(timestamp))

    def clear(self) -> None:
        self._times.clear()
        for series in self._data.values():
            series.clear()

    def get(self, key: str) -> np.ndarray:
        """Series for one component (or 'time') as a numpy array."""
        if key == "time":
            return np.array(self._times, dtype=float)
        if key not in self._data:
            return np.array([])
        return np.array(self._data[key], dtype=float)

    def times(self) -> np.ndarray:
        return self.get("time")

    def snapshot(self) -> List[Tuple[float, Tuple[float, ...]]]:
        """(timestamp, components) pairs, oldest first."""
        columns = [self._data[n] for n in self.names]
        return [(t, tuple(vals)) for t, *vals in zip(self._times, *columns)]

    def to_dict(self) -> Dict[str, np.ndarray]:
        """All series plus 'time' as a dictionary of arrays."""
        out = {"time": self.times()}
        out.update({n: self.get(n) for n in self.names})
        return out

    def to_csv(
        self,
        path: Union[str, Path],
        keys: Optional[List[str]] = None,
        delimiter: str = ",",
    ) -> None:
        """
        Exports to CSV: one column per key ('time' first by default), one row per sample.
        """
        path = Path(path)
        keys = keys or ["time", *self.names]
        arrays = [self.get(k) for k in keys]
        rows = [delimiter.join(repr(float(a[i])) for a in arrays) for i in range(len(self))]
        header = delimiter.join(keys)
        path.write_text(header + "\n" + "\n".join(rows), encoding="utf-8")

    def __len__(self) -> int:
        return len(self._times)
