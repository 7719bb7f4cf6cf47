# src/dynmodels/analysis/__init__.py
"""Chaos diagnostics: Lyapunov exponents, Poincaré sections, dimensions."""

from dynmodels.analysis.dimension import (
    box_counting_dimension,
    correlation_dimension,
    kaplan_yorke_dimension,
    linear_slope,
)
from dynmodels.analysis.jacobian import jacobian_trace, numerical_jacobian
from dynmodels.analysis.lyapunov import (
    lyapunov_exponent,
    lyapunov_exponent_map,
    lyapunov_spectrum,
    lyapunov_spectrum_map,
)
from dynmodels.analysis.poincare import (
    PoincareSection,
    poincare_crossings,
    poincare_map_2d,
    poincare_section,
)

__all__ = [
    # Lyapunov
    "lyapunov_exponent",
    "lyapunov_spectrum",
    "lyapunov_exponent_map",
    "lyapunov_spectrum_map",
    # Poincaré
    "PoincareSection",
    "poincare_crossings",
    "poincare_section",
    "poincare_map_2d",
    # Dimensions
    "kaplan_yorke_dimension",
    "correlation_dimension",
    "box_counting_dimension",
    "linear_slope",
    # Jacobians
    "numerical_jacobian",
    "jacobian_trace",
]
