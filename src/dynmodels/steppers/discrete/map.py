# src/dynmodels/steppers/discrete/map.py
"""
Map (discrete-time) stepper implementation.

The user callable computes the NEXT STATE directly:
    f(n, x, **options) -> x_{n+1}

``n`` is the 0-based iteration index; there is no step size.
"""
from __future__ import annotations
from typing import TYPE_CHECKING
import numpy as np

from ..base import StepperMeta

if TYPE_CHECKING:
    from typing import Callable

__all__ = ["MapSpec", "map_step"]


def map_step(f: Callable, n: int, x, **options) -> np.ndarray:
    """Apply the map once; the result keeps the shape of ``x``."""
    x = np.asarray(x, dtype=float)
    return np.asarray(f(n, x, **options), dtype=float).reshape(x.shape)


class MapSpec:
    """
    Discrete-time map stepper: x_{n+1} = F(n, x_n; options)
    """
    def __init__(self, meta: StepperMeta | None = None):
        if meta is None:
            meta = StepperMeta(
                name="map",
                kind="map",
                family="iter",
                order=1,
                stages=1,
                aliases=("iter", "discrete"),
            )
        self.meta = meta

    def emit(self) -> Callable:
        return map_step


# Auto-register on module import
def _auto_register():
    from ..registry import register
    spec = MapSpec()
    register(spec)

_auto_register()
