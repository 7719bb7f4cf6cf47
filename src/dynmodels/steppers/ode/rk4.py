# src/dynmodels/steppers/ode/rk4.py
"""
RK4 (Runge-Kutta 4th order, explicit, fixed-step) stepper implementation.
"""
from __future__ import annotations
from typing import TYPE_CHECKING
import numpy as np

from ..base import StepperMeta

if TYPE_CHECKING:
    from typing import Callable

__all__ = ["RK4Spec", "rk4"]


def rk4(f: Callable, t: float, x, h: float, **options) -> np.ndarray:
    """Advance ``x`` by one classic RK4 step of size ``h``."""
    x = np.asarray(x, dtype=float)
    half_h = 0.5 * h

    # Stage 1: k1 = f(t, x)
    k1 = np.asarray(f(t, x, **options), dtype=float)
    # Stage 2: k2 = f(t + h/2, x + h/2 * k1)
    k2 = np.asarray(f(t + half_h, x + half_h * k1, **options), dtype=float)
    # Stage 3: k3 = f(t + h/2, x + h/2 * k2)
    k3 = np.asarray(f(t + half_h, x + half_h * k2, **options), dtype=float)
    # Stage 4: k4 = f(t + h, x + h * k3)
    k4 = np.asarray(f(t + h, x + h * k3, **options), dtype=float)

    return x + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


class RK4Spec:
    """
    Classic 4th-order Runge-Kutta stepper (explicit, fixed-step).

    Formula:
        k1 = f(t, x)
        k2 = f(t + h/2, x + h/2 * k1)
        k3 = f(t + h/2, x + h/2 * k2)
        k4 = f(t + h, x + h * k3)
        x_{n+1} = x_n + h/6 * (k1 + 2*k2 + 2*k3 + k4)

    Fixed-step, order 4, explicit scheme for ODEs.
    """
    def __init__(self, meta: StepperMeta | None = None):
        if meta is None:
            meta = StepperMeta(
                name="rk4",
                kind="ode",
                family="runge-kutta",
                order=4,
                stages=4,
                aliases=("rk4_classic", "classical_rk4"),
            )
        self.meta = meta

    def emit(self) -> Callable:
        return rk4


# Auto-register on module import
def _auto_register():
    from ..registry import register
    spec = RK4Spec()
    register(spec)

_auto_register()
