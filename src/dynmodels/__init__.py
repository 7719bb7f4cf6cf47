# src/dynmodels/__init__.py
from __future__ import annotations

from .errors import (
    DynmodelsError,
    ConfigError,
    InvalidParameterError,
    RegistryError,
    UnsupportedSolverError,
    InsufficientDataError,
)
from .config import AnalysisConfig, load_config

from .steppers import (
    StepperMeta, StepperSpec,
    get_stepper, registry, resolve_stepper, list_steppers,
    euler, heun, midpoint, rk4, map_step,
)
from .runtime.solvers import ode_solver, map_solver, solve_trajectory, integrate
from .analysis import (
    lyapunov_exponent,
    lyapunov_spectrum,
    lyapunov_exponent_map,
    lyapunov_spectrum_map,
    PoincareSection,
    poincare_crossings,
    poincare_section,
    poincare_map_2d,
    kaplan_yorke_dimension,
    correlation_dimension,
    box_counting_dimension,
    numerical_jacobian,
    jacobian_trace,
)


__all__ = [
    # Steppers
    "euler", "heun", "midpoint", "rk4", "map_step",
    "StepperMeta", "StepperSpec",
    "get_stepper", "registry", "resolve_stepper", "list_steppers",
    # Solvers
    "ode_solver", "map_solver", "solve_trajectory", "integrate",
    # Analysis
    "lyapunov_exponent", "lyapunov_spectrum",
    "lyapunov_exponent_map", "lyapunov_spectrum_map",
    "PoincareSection", "poincare_crossings", "poincare_section", "poincare_map_2d",
    "kaplan_yorke_dimension", "correlation_dimension", "box_counting_dimension",
    "numerical_jacobian", "jacobian_trace",
    # Configuration
    "AnalysisConfig", "load_config",
    # Errors
    "DynmodelsError", "ConfigError", "InvalidParameterError", "RegistryError",
    "UnsupportedSolverError", "InsufficientDataError",
]
