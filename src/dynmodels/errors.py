# src/dynmodels/errors.py
from __future__ import annotations
from typing import Sequence

__all__ = [
    "DynmodelsError",
    "ConfigError",
    "InvalidParameterError",
    "RegistryError",
    "UnsupportedSolverError",
    "InsufficientDataError",
]


class DynmodelsError(Exception):
    """Base error for the dynmodels package."""


class ConfigError(DynmodelsError):
    """Raised when a configuration file is missing, malformed or invalid."""
    def __init__(self, message: str):
        super().__init__(message)


class InvalidParameterError(DynmodelsError, ValueError):
    """Raised when a call-time argument is outside its accepted range or set."""


class RegistryError(DynmodelsError):
    """Raised when a stepper cannot be added to the registry."""


class UnsupportedSolverError(InvalidParameterError):
    """Raised when a stepper is not registered or has the wrong kind."""
    def __init__(self, stepper: object, available: Sequence[str]):
        self.stepper = stepper
        self.available = tuple(available)
        label = getattr(stepper, "__name__", None) or repr(stepper)
        msg = f"Unsupported solver: {label}\n"
        msg += "Available solvers are: " + ", ".join(self.available)
        super().__init__(msg)


class InsufficientDataError(DynmodelsError, ValueError):
    """Raised when a point set is too small for the requested estimate."""
