# src/dynmodels/steppers/registry.py
from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Mapping

from dynmodels.errors import RegistryError, UnsupportedSolverError
from .base import Kind, StepperSpec

__all__ = ["get_stepper", "registry", "resolve_stepper", "list_steppers"]

# name/alias -> spec instance; filled by the built-in stepper modules, then sealed
_registry: Dict[str, StepperSpec] = {}
_view: Mapping[str, StepperSpec] = MappingProxyType(_registry)
_sealed = False


def register(spec: StepperSpec) -> None:
    """
    Register a stepper spec by its meta.name and meta.aliases.
    Only the built-in stepper modules call this, while ``dynmodels.steppers``
    is being imported. Enforces uniqueness of the canonical name; aliases may
    overlap only if they point to the same spec instance.
    """
    if _sealed:
        raise RegistryError(
            f"Cannot register stepper '{spec.meta.name}': the stepper registry is fixed "
            f"to {list_steppers()}"
        )
    name = spec.meta.name
    if name in _registry and _registry[name] is not spec:
        raise RegistryError(f"Stepper '{name}' already registered with a different spec.")
    _registry[name] = spec

    for alias in spec.meta.aliases:
        if alias in _registry and _registry[alias] is not spec:
            raise RegistryError(f"Alias '{alias}' already registered for a different spec.")
        _registry[alias] = spec


def _seal() -> None:
    global _sealed
    _sealed = True


def registry() -> Mapping[str, StepperSpec]:
    """Read-only view of the registry (names and aliases)."""
    return _view


def list_steppers(kind: Kind | None = None) -> list[str]:
    """Canonical names of registered steppers, optionally filtered by kind."""
    names = {
        spec.meta.name
        for spec in _registry.values()
        if kind is None or spec.meta.kind == kind
    }
    return sorted(names)


def get_stepper(name: str) -> StepperSpec:
    """
    Return the registered spec for 'name' or raise UnsupportedSolverError.
    """
    try:
        return _registry[name]
    except KeyError:
        raise UnsupportedSolverError(name, list_steppers()) from None


def resolve_stepper(stepper, kind: Kind = "ode") -> StepperSpec:
    """
    Find the spec behind ``stepper``.

    ``stepper`` may be a registered step function (e.g. ``rk4``), a spec
    instance, or a registered name/alias. The spec must be of ``kind``.
    """
    spec = None
    if isinstance(stepper, str):
        spec = _registry.get(stepper)
    else:
        for candidate in _registry.values():
            if candidate is stepper or candidate.emit() is stepper:
                spec = candidate
                break
    if spec is None or spec.meta.kind != kind:
        raise UnsupportedSolverError(stepper, list_steppers(kind))
    return spec
