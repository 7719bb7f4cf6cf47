# src/dynmodels/steppers/ode/euler.py
"""
Euler (explicit, fixed-step) stepper implementation.

    x_{n+1} = x_n + h * f(t_n, x_n)

Local error O(h^2), global error O(h).
"""
from __future__ import annotations
from typing import TYPE_CHECKING
import numpy as np

from ..base import StepperMeta

if TYPE_CHECKING:
    from typing import Callable

__all__ = ["EulerSpec", "euler"]


def euler(f: Callable, t: float, x, h: float, **options) -> np.ndarray:
    """Advance ``x`` by one explicit Euler step of size ``h``."""
    x = np.asarray(x, dtype=float)
    return x + h * np.asarray(f(t, x, **options), dtype=float)


class EulerSpec:
    """
    Explicit Euler stepper.

    Fixed-step, order 1, one RHS evaluation per step.
    """
    def __init__(self, meta: StepperMeta | None = None):
        if meta is None:
            meta = StepperMeta(
                name="euler",
                kind="ode",
                family="euler",
                order=1,
                stages=1,
                aliases=("fwd_euler", "forward_euler"),
            )
        self.meta = meta

    def emit(self) -> Callable:
        return euler


# Auto-register on module import
def _auto_register():
    from ..registry import register
    spec = EulerSpec()
    register(spec)

_auto_register()
