from .base import StepperMeta, StepperSpec
from . import registry as _registry_mod
from .registry import get_stepper, registry, resolve_stepper, list_steppers

# Import concrete steppers to trigger auto-registration
from .discrete.map import MapSpec, map_step
from .ode.euler import EulerSpec, euler
from .ode.heun import HeunSpec, heun
from .ode.rk2_midpoint import RK2Spec, midpoint
from .ode.rk4 import RK4Spec, rk4

# The built-in set is complete; later register() calls raise RegistryError
_registry_mod._seal()

__all__ = [
    "StepperMeta", "StepperSpec",
    "get_stepper", "registry", "resolve_stepper", "list_steppers",
    "EulerSpec", "HeunSpec", "RK2Spec", "RK4Spec", "MapSpec",
    "euler", "heun", "midpoint", "rk4", "map_step",
]
