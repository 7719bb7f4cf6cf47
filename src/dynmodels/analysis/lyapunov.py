# src/dynmodels/analysis/lyapunov.py
"""
Lyapunov exponents by finite-perturbation renormalization.

Largest exponent (Benettin):
    A reference point ``x`` and a perturbed point ``x + delta`` with
    ``|delta| = eps`` are advanced together over one renormalization interval.
    The evolved separation is measured, ``log(|delta'| / eps)`` is
    accumulated, and ``delta'`` is rescaled back to norm ``eps``.

Spectrum (Shimada-Nagashima / QR):
    ``d`` perturbations along the columns of an orthonormal frame ``Q`` are
    advanced; the evolved tangent vectors are re-orthonormalized with a QR
    decomposition and ``log|R_jj|`` is accumulated per direction.

Flows use RK4 with step ``dt`` over intervals of length ``time_step``;
maps apply the map once per interval (time unit 1).

Precondition: the local dynamics must separate nearby points. At a fixed
point with a vanishing vector field the separation can collapse to zero and
the estimate becomes non-finite; this is reported with a RuntimeWarning but
not corrected.
"""
from __future__ import annotations

from typing import Callable
import warnings
import numpy as np

from dynmodels.config import AnalysisConfig, resolve_config
from dynmodels.errors import InvalidParameterError
from dynmodels.runtime.solvers import integrate
from dynmodels.steppers.discrete.map import map_step
from dynmodels.utils.arrays import as_count, as_state

__all__ = [
    "lyapunov_exponent",
    "lyapunov_spectrum",
    "lyapunov_exponent_map",
    "lyapunov_spectrum_map",
]

# advance(clock, x) -> (x_new, clock_new); clock is time (flows) or index (maps)
Advance = Callable[[float, np.ndarray], tuple[np.ndarray, float]]


def _check_counts(warmup: int, n_iterations: int) -> tuple[int, int]:
    warmup = as_count(warmup, "warmup")
    n_iterations = as_count(n_iterations, "n_iterations")
    if warmup < 0:
        raise InvalidParameterError(f"warmup must be >= 0; got {warmup}")
    if n_iterations < 1:
        raise InvalidParameterError(f"n_iterations must be positive; got {n_iterations}")
    return warmup, n_iterations


def _flow_advance(f: Callable, time_step: float, dt: float, options: dict) -> Advance:
    if not time_step > 0.0:
        raise InvalidParameterError(f"time_step must be positive; got {time_step}")
    if not dt > 0.0:
        raise InvalidParameterError(f"dt must be positive; got {dt}")
    if int(round(time_step / dt)) < 1:
        raise InvalidParameterError(
            f"time_step ({time_step}) must span at least one integration step dt ({dt})"
        )

    def _advance(t, x):
        return integrate(f, t, x, time_step, dt, "rk4", **options)

    return _advance


def _map_advance(f: Callable, options: dict) -> Advance:
    def _advance(n, x):
        return map_step(f, n, x, **options), n + 1

    return _advance


def _largest(
    advance: Advance,
    x0,
    clock0,
    interval: float,
    warmup: int,
    n_iterations: int,
    eps: float,
    rng,
) -> float:
    x = as_state(x0)
    rng = np.random.default_rng(rng)
    delta = rng.standard_normal(x.size)
    delta *= eps / np.linalg.norm(delta)

    clock = clock0
    sum_log = 0.0
    for i in range(warmup + n_iterations):
        x_new, clock_new = advance(clock, x)
        x_pert, _ = advance(clock, x + delta)
        delta_new = x_pert - x_new

        d = np.linalg.norm(delta_new)
        if i >= warmup:
            sum_log += np.log(d / eps)

        x = x_new
        delta = delta_new * (eps / d)
        clock = clock_new

    return float(sum_log / (n_iterations * interval))


def _spectrum(
    advance: Advance,
    x0,
    clock0,
    interval: float,
    warmup: int,
    n_iterations: int,
    eps: float,
) -> np.ndarray:
    x = as_state(x0)
    dim = x.size
    Q = np.eye(dim)

    clock = clock0
    sum_log = np.zeros(dim)
    evolved = np.empty((dim, dim))
    for i in range(warmup + n_iterations):
        x_new, clock_new = advance(clock, x)
        for j in range(dim):
            x_pert, _ = advance(clock, x + eps * Q[:, j])
            evolved[:, j] = (x_pert - x_new) / eps

        Q, R = np.linalg.qr(evolved)
        if i >= warmup:
            sum_log += np.log(np.abs(np.diag(R)))

        x = x_new
        clock = clock_new

    exponents = sum_log / (n_iterations * interval)
    return np.sort(exponents)[::-1]


def _warn_non_finite(value, who: str) -> None:
    if not np.all(np.isfinite(value)):
        warnings.warn(
            f"{who} produced a non-finite estimate; the perturbed trajectory did not "
            "separate from the reference (fixed point or vanishing vector field?)",
            RuntimeWarning,
            stacklevel=3,
        )


def lyapunov_exponent(
    f: Callable,
    x0,
    time_step: float,
    dt: float | None = None,
    warmup: int | None = None,
    n_iterations: int | None = None,
    *,
    rng: np.random.Generator | int | None = None,
    config: AnalysisConfig | None = None,
    **options,
) -> float:
    """
    Largest Lyapunov exponent of the flow ``dx/dt = f(t, x)``.

    Args:
        f: Vector field ``f(t, x, **options)``.
        x0: Initial condition.
        time_step: Renormalization interval (integration time per iteration).
        dt: RK4 step inside each interval (default ``config.dt``).
        warmup: Iterations discarded before accumulating (default ``config.warmup``).
        n_iterations: Accumulated iterations (default ``config.n_iterations``).
        rng: Seed or generator for the initial perturbation direction.
        config: Source of defaults; ``load_config()`` when None.
        **options: Forwarded to ``f``.

    Returns:
        ``sum(log(|delta'|/eps)) / (n_iterations * time_step)``
    """
    cfg = resolve_config(config)
    dt = cfg.dt if dt is None else dt
    warmup, n_iterations = _check_counts(
        cfg.warmup if warmup is None else warmup,
        cfg.n_iterations if n_iterations is None else n_iterations,
    )
    advance = _flow_advance(f, time_step, dt, options)
    value = _largest(advance, x0, 0.0, time_step, warmup, n_iterations, cfg.perturbation, rng)
    _warn_non_finite(value, "lyapunov_exponent")
    return value


def lyapunov_spectrum(
    f: Callable,
    x0,
    time_step: float,
    dt: float | None = None,
    warmup: int | None = None,
    n_iterations: int | None = None,
    *,
    config: AnalysisConfig | None = None,
    **options,
) -> np.ndarray:
    """
    Full Lyapunov spectrum of the flow ``dx/dt = f(t, x)`` (QR method).

    The frame starts as the identity basis, so the result is deterministic.
    Returns exactly ``d`` exponents in descending order; their sum is the
    mean phase-space volume growth rate.
    """
    cfg = resolve_config(config)
    dt = cfg.dt if dt is None else dt
    warmup, n_iterations = _check_counts(
        cfg.warmup if warmup is None else warmup,
        cfg.n_iterations if n_iterations is None else n_iterations,
    )
    advance = _flow_advance(f, time_step, dt, options)
    exponents = _spectrum(advance, x0, 0.0, time_step, warmup, n_iterations, cfg.perturbation)
    _warn_non_finite(exponents, "lyapunov_spectrum")
    return exponents


def lyapunov_exponent_map(
    f: Callable,
    x0,
    warmup: int | None = None,
    n_iterations: int | None = None,
    *,
    rng: np.random.Generator | int | None = None,
    config: AnalysisConfig | None = None,
    **options,
) -> float:
    """Largest Lyapunov exponent (per iteration) of the map ``x_{n+1} = f(n, x_n)``."""
    cfg = resolve_config(config)
    warmup, n_iterations = _check_counts(
        cfg.warmup if warmup is None else warmup,
        cfg.n_iterations if n_iterations is None else n_iterations,
    )
    advance = _map_advance(f, options)
    value = _largest(advance, x0, 0, 1.0, warmup, n_iterations, cfg.perturbation, rng)
    _warn_non_finite(value, "lyapunov_exponent_map")
    return value


def lyapunov_spectrum_map(
    f: Callable,
    x0,
    warmup: int | None = None,
    n_iterations: int | None = None,
    *,
    config: AnalysisConfig | None = None,
    **options,
) -> np.ndarray:
    """Lyapunov spectrum (per iteration, descending) of the map ``x_{n+1} = f(n, x_n)``."""
    cfg = resolve_config(config)
    warmup, n_iterations = _check_counts(
        cfg.warmup if warmup is None else warmup,
        cfg.n_iterations if n_iterations is None else n_iterations,
    )
    advance = _map_advance(f, options)
    exponents = _spectrum(advance, x0, 0, 1.0, warmup, n_iterations, cfg.perturbation)
    _warn_non_finite(exponents, "lyapunov_spectrum_map")
    return exponents
