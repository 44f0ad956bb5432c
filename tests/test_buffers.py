"""Tests for the bounded trajectory, projection and time-series buffers."""

import numpy as np
import pytest

from chaoslab.core.history import (
    BoundedBuffer,
    ProjectionBuffer,
    TimeSeriesBuffer,
    TrajectoryBuffer,
    velocity_color,
)


def test_trajectory_keeps_last_n_in_order() -> None:
    buf = TrajectoryBuffer()
    assert buf.maxlen == 1000
    for i in range(1500):
        buf.push((i, 2 * i, 3 * i), (0.0, 0.0, 1.0))
        assert len(buf) <= 1000
    snap = buf.snapshot()
    assert len(snap) == 1000
    assert [p[0] for p, _ in snap] == [float(i) for i in range(500, 1500)]
    assert buf.positions().shape == (1000, 3)
    assert buf.colors().shape == (1000, 3)


def test_trajectory_small_bound() -> None:
    buf = TrajectoryBuffer(max_length=3)
    for i in range(5):
        buf.push((i, 0, 0), velocity_color(i))
    np.testing.assert_array_equal(buf.positions()[:, 0], [2.0, 3.0, 4.0])
    buf.clear()
    assert len(buf) == 0
    assert buf.positions().shape == (0, 3)


def test_trajectory_rejects_2d_point() -> None:
    with pytest.raises(ValueError):
        TrajectoryBuffer().push((1.0, 2.0), (1.0, 0.0, 0.0))


def test_bound_must_be_positive() -> None:
    with pytest.raises(ValueError):
        BoundedBuffer(0)
    with pytest.raises(ValueError):
        TimeSeriesBuffer(max_length=-1)


def test_projection_buffer() -> None:
    buf = ProjectionBuffer((1, 2), max_length=2)
    assert buf.name == "yz"
    buf.push((1.0, 2.0, 3.0))
    buf.push((4.0, 5.0, 6.0))
    buf.push((7.0, 8.0, 9.0))
    np.testing.assert_array_equal(buf.points(), [[5.0, 6.0], [8.0, 9.0]])
    with pytest.raises(ValueError):
        ProjectionBuffer((0, 3))


def test_time_series_bound_and_columns() -> None:
    ts = TimeSeriesBuffer()
    assert ts.maxlen == 200
    for i in range(250):
        ts.push((i, -i, 0.5), i * 0.01)
    assert len(ts) == 200
    np.testing.assert_array_equal(ts.get("x"), np.arange(50, 250, dtype=float))
    np.testing.assert_array_equal(ts.get("y"), -np.arange(50, 250, dtype=float))
    np.testing.assert_allclose(ts.times(), np.arange(50, 250) * 0.01)
    assert ts.get("w").size == 0
    first_t, first_vals = ts.snapshot()[0]
    assert first_t == pytest.approx(0.5)
    assert first_vals == (50.0, -50.0, 0.5)
    assert set(ts.to_dict()) == {"time", "x", "y", "z"}


def test_time_series_rejects_wrong_width() -> None:
    ts = TimeSeriesBuffer(("a", "b"))
    with pytest.raises(ValueError):
        ts.push((1.0, 2.0, 3.0), 0.0)


def test_time_series_to_csv(tmp_path) -> None:
    ts = TimeSeriesBuffer(max_length=3)
    for i in range(4):
        ts.push((i, i + 0.5, 0.0), i * 0.25)
    path = tmp_path / "series.csv"
    ts.to_csv(path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "time,x,y,z"
    assert len(lines) == 4
    assert lines[1].split(",") == ["0.25", "1.0", "1.5", "0.0"]


@pytest.mark.parametrize(
    "velocity, expected",
    [
        (0.0, (1.0, 0.0, 0.0)),
        (10.0, (1.0, 0.0, 0.0)),
        (5.0, (0.0, 1.0, 1.0)),
        (10.0 / 3.0, (0.0, 1.0, 0.0)),
        (20.0 / 3.0, (0.0, 0.0, 1.0)),
    ],
)
def test_velocity_color(velocity, expected) -> None:
    assert velocity_color(velocity) == pytest.approx(expected, abs=1e-9)


def test_velocity_color_in_unit_cube() -> None:
    for v in np.linspace(0, 50, 101):
        assert all(0.0 <= c <= 1.0 for c in velocity_color(v))
