# tests/integration/test_poincare.py
"""
Integration tests for Poincaré sections.

Tests verify:
1. Crossing points lie on the section plane
2. Direction filtering and crossing times
3. 2D projections and the empty-section case
4. Validation of direction, dimensions and coordinate indices
"""
from __future__ import annotations

import math

import numpy as np
import pytest

from dynmodels import (
    AnalysisConfig,
    InvalidParameterError,
    poincare_crossings,
    poincare_map_2d,
    poincare_section,
)


def test_lorenz_z_plane(lorenz):
    pts = poincare_section(
        lorenz, [1.0, 1.0, 1.0], [0.0, 0.0, 1.0], [0.0, 0.0, 27.0],
        t_max=50.0, dt=0.01, direction="positive",
    )
    assert pts.ndim == 2 and pts.shape[1] == 3
    assert pts.shape[0] > 10
    np.testing.assert_allclose(pts[:, 2], 27.0, atol=1e-9)


def test_rossler_y_plane(rossler):
    sec = poincare_crossings(
        rossler, [1.0, 1.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 0.0],
        t_max=200.0, dt=0.01, direction="positive",
    )
    assert len(sec) > 10
    np.testing.assert_allclose(sec.points[:, 1], 0.0, atol=1e-9)
    # y increases through zero only on the x > 0 side
    assert np.all(sec.points[:, 0] > 0.0)
    assert np.all(sec.directions == 1)
    assert np.all(np.diff(sec.times) > 0.0)


def test_harmonic_crossing_times(harmonic):
    # x = cos t crosses zero upwards at t = 3pi/2 + 2pi k with velocity 1
    sec = poincare_crossings(
        harmonic, [1.0, 0.0], [1.0, 0.0], [0.0, 0.0], t_max=20.0, dt=0.01, direction="positive",
    )
    expected = 1.5 * math.pi + 2.0 * math.pi * np.arange(3)
    np.testing.assert_allclose(sec.times, expected, atol=1e-4)
    np.testing.assert_allclose(sec.points[:, 0], 0.0, atol=1e-12)
    np.testing.assert_allclose(sec.points[:, 1], 1.0, atol=1e-3)


def test_harmonic_negative_direction(harmonic):
    sec = poincare_crossings(
        harmonic, [1.0, 0.0], [1.0, 0.0], [0.0, 0.0], t_max=20.0, dt=0.01, direction="negative",
    )
    expected = 0.5 * math.pi + 2.0 * math.pi * np.arange(3)
    np.testing.assert_allclose(sec.times, expected, atol=1e-4)
    np.testing.assert_allclose(sec.points[:, 1], -1.0, atol=1e-3)
    assert np.all(sec.directions == -1)


def test_options_reach_field(harmonic):
    # k = 4: x = cos 2t, first upward crossing at t = 3pi/4 with velocity 2
    sec = poincare_crossings(
        harmonic, [1.0, 0.0], [1.0, 0.0], [0.0, 0.0], t_max=3.0, dt=0.01,
        direction="positive", k=4.0,
    )
    assert len(sec) == 1
    assert sec.times[0] == pytest.approx(0.75 * math.pi, abs=1e-4)
    assert sec.points[0, 1] == pytest.approx(2.0, abs=1e-3)


def test_both_is_union_of_directions(lorenz):
    args = (lorenz, [1.0, 1.0, 1.0], [0.0, 0.0, 1.0], [0.0, 0.0, 27.0], 30.0, 0.01)
    both = poincare_crossings(*args, direction="both")
    pos = poincare_section(*args, direction="positive")
    neg = poincare_section(*args, direction="negative")

    assert len(both) == len(pos) + len(neg)
    assert abs(len(pos) - len(neg)) <= 1
    np.testing.assert_array_equal(both.points[both.directions == 1], pos)
    np.testing.assert_array_equal(both.points[both.directions == -1], neg)


def test_direction_default_from_config(harmonic):
    cfg = AnalysisConfig(direction="negative", dt=0.01)
    args = (harmonic, [1.0, 0.0], [1.0, 0.0], [0.0, 0.0], 20.0)
    np.testing.assert_array_equal(
        poincare_section(*args, config=cfg),
        poincare_section(*args, dt=0.01, direction="negative"),
    )


def test_normal_is_normalized(harmonic):
    args = (harmonic, [1.0, 0.0])
    a = poincare_section(*args, [1.0, 0.0], [0.0, 0.0], 20.0, 0.01, "both")
    b = poincare_section(*args, [5.0, 0.0], [0.0, 0.0], 20.0, 0.01, "both")
    np.testing.assert_allclose(a, b)


def test_map_2d_projection(lorenz):
    args = (lorenz, [1.0, 1.0, 1.0])
    plane = ([0.0, 0.0, 1.0], [0.0, 0.0, 27.0], 30.0, 0.01, "positive")
    xs, zs = poincare_map_2d(*args, (0, 2), *plane)
    pts = poincare_section(*args, *plane)

    np.testing.assert_array_equal(xs, pts[:, 0])
    np.testing.assert_array_equal(zs, pts[:, 2])


def test_no_crossings(harmonic):
    args = (harmonic, [1.0, 0.0], [1.0, 0.0], [5.0, 0.0], 10.0, 0.01)
    pts = poincare_section(*args)
    assert pts.shape == (0, 2)

    xs, ys = poincare_map_2d(harmonic, [1.0, 0.0], (0, 1), [1.0, 0.0], [5.0, 0.0], 10.0, 0.01)
    assert xs.shape == (0,) and ys.shape == (0,)


def test_invalid_direction(harmonic):
    with pytest.raises(InvalidParameterError, match="direction"):
        poincare_section(harmonic, [1.0, 0.0], [1.0, 0.0], [0.0, 0.0], 1.0, 0.01, "upward")


def test_dimension_mismatch(lorenz):
    with pytest.raises(InvalidParameterError, match="plane_normal"):
        poincare_section(lorenz, [1.0, 1.0, 1.0], [0.0, 1.0], [0.0, 0.0, 27.0], 1.0, 0.01)
    with pytest.raises(InvalidParameterError, match="plane_point"):
        poincare_section(lorenz, [1.0, 1.0, 1.0], [0.0, 0.0, 1.0], [27.0], 1.0, 0.01)


@pytest.mark.parametrize("indices", [(0, 3), (-1, 0)])
def test_coordinate_index_out_of_range(lorenz, indices):
    with pytest.raises(InvalidParameterError):
        poincare_map_2d(lorenz, [1.0, 1.0, 1.0], indices, [0.0, 0.0, 1.0], [0.0, 0.0, 27.0], 1.0, 0.01)
