# src/dynmodels/steppers/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Literal, Protocol
import numpy as np

__all__ = ["Kind", "StepperMeta", "StepperSpec", "StepFn"]

Kind = Literal["ode", "map"]

# ODE: step(f, t, x, h, **options) -> x_new
# map: step(f, n, x, **options) -> x_next
StepFn = Callable[..., np.ndarray]


@dataclass(frozen=True)
class StepperMeta:
    """
    Public metadata for a stepper.

    ``stages`` is the number of right-hand-side evaluations per step.
    """
    name: str
    kind: Kind
    family: str = ""
    order: int = 1
    stages: int = 1
    aliases: tuple[str, ...] = ()


class StepperSpec(Protocol):
    """
    Interface for stepper specs held by the registry.
    Implementations MUST:
      - accept `meta: StepperMeta | None` in __init__
      - provide `emit() -> Callable` returning the (stateless) step function
    """

    meta: StepperMeta

    def __init__(self, meta: StepperMeta | None = None) -> None: ...
    def emit(self) -> StepFn: ...
