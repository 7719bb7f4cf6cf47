# src/dynmodels/analysis/dimension.py
"""
Fractal dimension estimators.

- Kaplan-Yorke: closed form from a Lyapunov spectrum.
- Correlation (Grassberger-Procaccia): slope of log C(r) against log r.
- Box counting: slope of log N(eps) against log(1/eps).

Slope fits that do not have at least two usable points return NaN with a
RuntimeWarning instead of raising, so parameter sweeps keep running.
"""
from __future__ import annotations

import math
import warnings
import numpy as np
from numba import njit

from dynmodels.config import AnalysisConfig, resolve_config
from dynmodels.errors import InsufficientDataError, InvalidParameterError
from dynmodels.utils.arrays import as_count, as_points

__all__ = [
    "NUMERICAL_EPSILON",
    "linear_slope",
    "kaplan_yorke_dimension",
    "correlation_dimension",
    "box_counting_dimension",
]

# floor added to C(r) before taking logs; also the "occupied" threshold
NUMERICAL_EPSILON = 1e-10


def linear_slope(x, y) -> float:
    """Least-squares slope of ``y`` against ``x``; NaN if it is undetermined."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = x.size
    if n < 2:
        return math.nan
    sum_x = x.sum()
    sum_y = y.sum()
    denom = n * np.dot(x, x) - sum_x * sum_x
    if denom == 0.0:
        return math.nan
    return float((n * np.dot(x, y) - sum_x * sum_y) / denom)


def kaplan_yorke_dimension(exponents) -> float:
    """
    Kaplan-Yorke (Lyapunov) dimension.

        D_KY = j + (l_1 + ... + l_j) / |l_{j+1}|

    where ``j`` is the largest index whose cumulative sum is non-negative.
    The exponents are re-sorted in descending order first. Returns 0.0 when
    no cumulative sum is non-negative and ``len(exponents)`` when none is
    negative.
    """
    lams = np.sort(np.asarray(exponents, dtype=float).ravel())[::-1]
    cums = np.cumsum(lams)
    nonneg = np.flatnonzero(cums >= 0.0)
    if nonneg.size == 0:
        return 0.0
    j = int(nonneg[-1]) + 1
    if j == lams.size:
        return float(lams.size)
    return float(j + cums[j - 1] / abs(lams[j]))


def _count_pairs_impl(points: np.ndarray, radii: np.ndarray) -> np.ndarray:
    # counts[i] = #{(j, k): j < k, |p_j - p_k| < radii[i]}; radii ascending
    n = points.shape[0]
    d = points.shape[1]
    n_r = radii.shape[0]
    hist = np.zeros((n_r + 1,), dtype=np.int64)
    for j in range(n):
        for k in range(j + 1, n):
            acc = 0.0
            for m in range(d):
                diff = points[j, m] - points[k, m]
                acc += diff * diff
            dist = math.sqrt(acc)
            # first radius strictly above dist
            lo = 0
            hi = n_r
            while lo < hi:
                mid = (lo + hi) // 2
                if radii[mid] > dist:
                    hi = mid
                else:
                    lo = mid + 1
            hist[lo] += 1

    counts = np.empty((n_r,), dtype=np.int64)
    running = 0
    for i in range(n_r):
        running += hist[i]
        counts[i] = running
    return counts


_count_pairs_py = _count_pairs_impl
_count_pairs_jit = njit(cache=True)(_count_pairs_impl)


def correlation_dimension(
    points,
    r_min: float | None = None,
    r_max: float | None = None,
    n_r: int | None = None,
    *,
    config: AnalysisConfig | None = None,
    jit: bool | None = None,
) -> tuple[np.ndarray, np.ndarray, float]:
    """
    Correlation dimension of a point set (Grassberger-Procaccia).

    For each of ``n_r`` log-spaced radii the correlation sum

        C(r) = 2 / (N (N - 1)) * #{(j, k): j < k, |p_j - p_k| < r}

    is computed. The slope of ``log C`` against ``log r`` is fitted over the
    middle of the ``L`` radii with ``C > 1e-10``: valid entries ``L//5 - 1``
    (0 when ``L < 5``) through ``4L//5 - 1``, i.e. the 20% to the 80% position.
    This skips sparse small-r counts and large-r saturation.

    Args:
        points: ``(N, d)`` array or sequence of points (1D input = scalars).
        r_min, r_max: Radius range, ``0 < r_min < r_max``.
        n_r: Number of radii.
        jit: Use the numba pair counter (default ``config.jit``).

    Returns:
        ``(radii, C, dimension)``; ``dimension`` is NaN when fewer than two
        radii have a non-zero correlation sum.

    Raises:
        InsufficientDataError: fewer than 2 points.
        InvalidParameterError: invalid radius range or ``n_r < 1``.
    """
    cfg = resolve_config(config)
    r_min = cfg.r_min if r_min is None else float(r_min)
    r_max = cfg.r_max if r_max is None else float(r_max)
    n_r = cfg.n_r if n_r is None else as_count(n_r, "n_r")
    use_jit = cfg.jit if jit is None else bool(jit)

    if not r_min > 0.0:
        raise InvalidParameterError(f"r_min must be positive; got {r_min}")
    if not r_max > r_min:
        raise InvalidParameterError(f"r_max must exceed r_min; got r_min={r_min}, r_max={r_max}")
    if n_r < 1:
        raise InvalidParameterError(f"n_r must be >= 1; got {n_r}")

    pts = as_points(points)
    n_pts = pts.shape[0]
    if n_pts < 2:
        raise InsufficientDataError("Need at least 2 points to calculate correlation dimension")

    radii = np.exp(np.linspace(math.log(r_min), math.log(r_max), n_r))
    counter = _count_pairs_jit if use_jit else _count_pairs_py
    counts = counter(pts, radii)
    C = 2.0 * counts / (n_pts * (n_pts - 1))

    log_r = np.log(radii)
    log_C = np.log(C + NUMERICAL_EPSILON)

    valid = np.flatnonzero(C > NUMERICAL_EPSILON)
    n_valid = valid.size
    if n_valid < 2:
        warnings.warn(
            f"correlation_dimension: only {n_valid} radii with non-zero correlation sum "
            f"in [{r_min}, {r_max}]; returning NaN",
            RuntimeWarning,
            stacklevel=2,
        )
        return radii, C, math.nan

    # 20%..80% positions of the valid entries; always at least two points
    lo = max(n_valid // 5 - 1, 0)
    hi = max(4 * n_valid // 5 - 1, lo + 1)
    mid_start = valid[lo]
    mid_end = valid[hi]
    dimension = linear_slope(log_r[mid_start : mid_end + 1], log_C[mid_start : mid_end + 1])
    return radii, C, dimension


def box_counting_dimension(
    trajectory,
    box_sizes=None,
    *,
    config: AnalysisConfig | None = None,
) -> tuple[np.ndarray, np.ndarray, float]:
    """
    Box-counting (capacity) dimension of a point set.

    Each point is assigned to the grid cell ``floor((p - min) / eps)``; the
    number of distinct occupied cells ``N(eps)`` is fitted against ``1/eps``
    on a log-log scale.

    Args:
        trajectory: ``(N, d)`` array or sequence of points.
        box_sizes: Cell sizes to test. Default: ``extent / 2**k`` for
            ``k = 1..config.n_boxes``, ``extent`` being the largest side of the
            bounding box.

    Returns:
        ``(box_sizes, counts, dimension)``

    Raises:
        InsufficientDataError: empty trajectory.
        InvalidParameterError: a non-positive box size (also the case for the
            default sizes of a single-point trajectory).
    """
    cfg = resolve_config(config)
    pts = as_points(trajectory, "trajectory")
    if pts.shape[0] == 0:
        raise InsufficientDataError("Trajectory is empty")

    mins = pts.min(axis=0)
    extent = float(np.max(pts.max(axis=0) - mins))

    if box_sizes is None:
        sizes = extent / 2.0 ** np.arange(1, cfg.n_boxes + 1)
    else:
        sizes = np.asarray(box_sizes, dtype=float).ravel()
    if sizes.size == 0 or not np.all(sizes > 0.0):
        raise InvalidParameterError(f"box sizes must be positive; got {sizes}")

    counts = np.empty((sizes.size,), dtype=np.int64)
    for i, eps in enumerate(sizes):
        cells = np.floor((pts - mins) / eps).astype(np.int64)
        counts[i] = np.unique(cells, axis=0).shape[0]

    dimension = linear_slope(np.log(1.0 / sizes), np.log(counts.astype(float)))
    if math.isnan(dimension):
        warnings.warn(
            "box_counting_dimension: slope undetermined (need at least two distinct box sizes); "
            "returning NaN",
            RuntimeWarning,
            stacklevel=2,
        )
    return sizes, counts, dimension
