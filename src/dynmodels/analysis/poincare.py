# src/dynmodels/analysis/poincare.py
"""
Poincaré sections of flows.

The section is the hyperplane through ``plane_point`` with normal
``plane_normal``. The trajectory is integrated with fixed RK4 steps; whenever
the signed distance ``(x - plane_point) . n`` changes sign between two steps,
the crossing point is estimated by linear interpolation along the step.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable, Literal
import numpy as np

from dynmodels.config import DIRECTIONS, AnalysisConfig, resolve_config
from dynmodels.errors import InvalidParameterError
from dynmodels.steppers.ode.rk4 import rk4
from dynmodels.utils.arrays import as_state, require_dim

__all__ = ["PoincareSection", "poincare_crossings", "poincare_section", "poincare_map_2d"]

Direction = Literal["positive", "negative", "both"]


@dataclass
class PoincareSection:
    points: np.ndarray      # (k, d) interpolated crossing points
    times: np.ndarray       # (k,) interpolated crossing times
    directions: np.ndarray  # (k,) +1 for increasing distance, -1 otherwise

    def __len__(self) -> int:
        return int(self.points.shape[0])


def _resolve_direction(direction: str | None, cfg: AnalysisConfig) -> str:
    direction = cfg.direction if direction is None else direction
    if direction not in DIRECTIONS:
        raise InvalidParameterError(
            f"direction must be one of {sorted(DIRECTIONS)}; got {direction!r}"
        )
    return direction


def poincare_crossings(
    f: Callable,
    x0,
    plane_normal,
    plane_point,
    t_max: float,
    dt: float | None = None,
    direction: Direction | None = None,
    *,
    config: AnalysisConfig | None = None,
    **options,
) -> PoincareSection:
    """
    Integrate from ``t = 0`` for ``ceil(t_max/dt)`` RK4 steps and collect the
    section crossings together with their interpolated times and directions.

    A zero-length ``plane_normal`` is a caller error: the distances become
    NaN and no crossing is ever detected.
    """
    cfg = resolve_config(config)
    dt = cfg.dt if dt is None else dt
    if not dt > 0.0:
        raise InvalidParameterError(f"dt must be positive; got {dt}")
    direction = _resolve_direction(direction, cfg)
    keep_positive = direction in ("positive", "both")
    keep_negative = direction in ("negative", "both")

    x = as_state(x0)
    dim = x.size
    normal = require_dim(as_state(plane_normal, "plane_normal"), dim, "plane_normal")
    point = require_dim(as_state(plane_point, "plane_point"), dim, "plane_point")
    normal = normal / np.linalg.norm(normal)

    points: list[np.ndarray] = []
    times: list[float] = []
    signs: list[int] = []

    t = 0.0
    dist_prev = float(np.dot(x - point, normal))
    for _ in range(math.ceil(t_max / dt)):
        x_new = rk4(f, t, x, dt, **options)
        dist_new = float(np.dot(x_new - point, normal))

        if dist_prev * dist_new < 0.0:
            positive = dist_new > dist_prev
            if (positive and keep_positive) or (not positive and keep_negative):
                alpha = abs(dist_prev) / (abs(dist_prev) + abs(dist_new))
                points.append(x + alpha * (x_new - x))
                times.append(t + alpha * dt)
                signs.append(1 if positive else -1)

        x = x_new
        t += dt
        dist_prev = dist_new

    return PoincareSection(
        points=np.array(points, dtype=float).reshape(len(points), dim),
        times=np.array(times, dtype=float),
        directions=np.array(signs, dtype=np.int8),
    )


def poincare_section(
    f: Callable,
    x0,
    plane_normal,
    plane_point,
    t_max: float,
    dt: float | None = None,
    direction: Direction | None = None,
    *,
    config: AnalysisConfig | None = None,
    **options,
) -> np.ndarray:
    """
    Crossing points of the trajectory through the section plane.

    Args:
        f: Vector field ``f(t, x, **options)``.
        x0: Initial condition.
        plane_normal: Normal of the plane (normalized internally, must be non-zero).
        plane_point: Any point on the plane.
        t_max: Integration horizon.
        dt: RK4 step (default ``config.dt``).
        direction: ``"positive"``, ``"negative"`` or ``"both"``
            (default ``config.direction``).

    Returns:
        Array of shape ``(k, d)`` in temporal order; ``(0, d)`` if the plane
        is never crossed.

    Raises:
        InvalidParameterError: unknown ``direction`` or mismatched dimensions.
    """
    return poincare_crossings(
        f, x0, plane_normal, plane_point, t_max, dt, direction, config=config, **options
    ).points


def poincare_map_2d(
    f: Callable,
    x0,
    coord_indices: tuple[int, int],
    plane_normal,
    plane_point,
    t_max: float,
    dt: float | None = None,
    direction: Direction | None = None,
    *,
    config: AnalysisConfig | None = None,
    **options,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Project the section points onto two coordinates.

    ``coord_indices`` are 0-based, e.g. ``(0, 2)`` for (x, z). Returns two
    parallel arrays, both empty when there are no crossings.
    """
    i1, i2 = (int(i) for i in coord_indices)
    dim = as_state(x0).size
    for idx in (i1, i2):
        if not 0 <= idx < dim:
            raise InvalidParameterError(f"coordinate index {idx} out of range for dimension {dim}")

    points = poincare_section(
        f, x0, plane_normal, plane_point, t_max, dt, direction, config=config, **options
    )
    return points[:, i1].copy(), points[:, i2].copy()
