# src/dynmodels/utils/arrays.py
from __future__ import annotations
import numpy as np

from dynmodels.errors import InvalidParameterError

__all__ = ["as_state", "as_points", "require_dim", "as_count"]


def as_state(x, name: str = "x0") -> np.ndarray:
    """
    Copy 'x' into a fresh 1D float64 state vector.
    Scalars become length-1 vectors. Raise InvalidParameterError otherwise.
    """
    arr = np.array(x, dtype=float)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1 or arr.size == 0:
        raise InvalidParameterError(f"{name} must be a non-empty 1D state vector; got shape {arr.shape}")
    return arr


def as_points(points, name: str = "points") -> np.ndarray:
    """
    Stack a point set into a 2D float64 array of shape (N, d).
    A 1D input is read as N scalar points. An empty input gives shape (0, 0).
    """
    arr = np.asarray(points, dtype=float)
    if arr.size == 0:
        return np.zeros((0, arr.shape[1] if arr.ndim == 2 else 0), dtype=float)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise InvalidParameterError(f"{name} must be a sequence of points; got shape {arr.shape}")
    return np.ascontiguousarray(arr)


def require_dim(a: np.ndarray, dim: int, name: str = "array") -> np.ndarray:
    """
    Ensure 'a' is 1D with length 'dim'. Raise InvalidParameterError if not.
    """
    if a.shape != (dim,):
        raise InvalidParameterError(f"{name} must have length {dim}; got shape {a.shape}")
    return a


def as_count(value, name: str = "count") -> int:
    """
    Return 'value' as an int. Integral floats (e.g. 10.0) are accepted;
    anything else raises InvalidParameterError instead of being truncated.
    """
    if isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be an integer; got {value!r}")
    if isinstance(value, (int, np.integer)):
        return int(value)
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"{name} must be an integer; got {value!r}") from None
    if not as_float.is_integer():
        raise InvalidParameterError(f"{name} must be an integer; got {value!r}")
    return int(as_float)
