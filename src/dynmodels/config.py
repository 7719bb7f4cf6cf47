# src/dynmodels/config.py
"""
Analysis defaults and their TOML override file.

A config file holds a single ``[analysis]`` table::

    [analysis]
    dt = 0.005
    warmup = 200
    n_iterations = 2000
    direction = "positive"

The file is taken from the ``path`` argument of :func:`load_config` or, when
none is given, from the ``DYNMODELS_CONFIG`` environment variable. Without
either, the built-in defaults are used.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
import os
from pathlib import Path
import tomllib

from dynmodels.errors import ConfigError

__all__ = ["AnalysisConfig", "load_config", "resolve_config", "CONFIG_ENV_VAR", "DIRECTIONS"]

CONFIG_ENV_VAR = "DYNMODELS_CONFIG"

# Poincaré crossing filters
DIRECTIONS = frozenset({"positive", "negative", "both"})


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Default numerical settings shared by the analysis routines.

    Any routine argument left as ``None`` is taken from here.
    """
    dt: float = 0.01
    warmup: int = 1000
    n_iterations: int = 10000
    perturbation: float = 1e-8
    direction: str = "both"
    r_min: float = 0.01
    r_max: float = 10.0
    n_r: int = 50
    n_boxes: int = 10
    jit: bool = True

    def __post_init__(self) -> None:
        if not self.dt > 0.0:
            raise ConfigError(f"analysis.dt must be positive; got {self.dt}")
        if self.warmup < 0:
            raise ConfigError(f"analysis.warmup must be >= 0; got {self.warmup}")
        if self.n_iterations < 1:
            raise ConfigError(f"analysis.n_iterations must be >= 1; got {self.n_iterations}")
        if not self.perturbation > 0.0:
            raise ConfigError(f"analysis.perturbation must be positive; got {self.perturbation}")
        if self.direction not in DIRECTIONS:
            raise ConfigError(
                f"analysis.direction must be one of {sorted(DIRECTIONS)}; got {self.direction!r}"
            )
        if not 0.0 < self.r_min < self.r_max:
            raise ConfigError(
                f"analysis.r_min/r_max must satisfy 0 < r_min < r_max; got {self.r_min}, {self.r_max}"
            )
        if self.n_r < 1:
            raise ConfigError(f"analysis.n_r must be >= 1; got {self.n_r}")
        if self.n_boxes < 1:
            raise ConfigError(f"analysis.n_boxes must be >= 1; got {self.n_boxes}")

    def replace(self, **changes) -> "AnalysisConfig":
        """Return a copy with ``changes`` applied (validated again)."""
        return dataclasses.replace(self, **changes)


# field name -> accepted python types for TOML values
_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "dt": (int, float),
    "warmup": (int,),
    "n_iterations": (int,),
    "perturbation": (int, float),
    "direction": (str,),
    "r_min": (int, float),
    "r_max": (int, float),
    "n_r": (int,),
    "n_boxes": (int,),
    "jit": (bool,),
}


def _coerce_table(table: dict, source: str) -> dict:
    unknown = set(table) - set(_FIELD_TYPES)
    if unknown:
        raise ConfigError(
            f"Unknown keys in [analysis] of {source}: {sorted(unknown)}. "
            f"Valid keys: {sorted(_FIELD_TYPES)}"
        )
    values = {}
    for key, raw in table.items():
        accepted = _FIELD_TYPES[key]
        # bool is an int subclass; only "jit" takes booleans
        if isinstance(raw, bool) and bool not in accepted:
            raise ConfigError(f"analysis.{key} in {source} must not be a boolean")
        if not isinstance(raw, accepted):
            names = "/".join(t.__name__ for t in accepted)
            raise ConfigError(
                f"analysis.{key} in {source} must be {names}; got {type(raw).__name__}"
            )
        values[key] = float(raw) if float in accepted else raw
    return values


def load_config(path: str | os.PathLike | None = None) -> AnalysisConfig:
    """
    Load analysis defaults.

    Args:
        path: TOML file to read. When None, ``$DYNMODELS_CONFIG`` is used if set.

    Returns:
        AnalysisConfig built from the file's ``[analysis]`` table on top of
        the built-in defaults.

    Raises:
        ConfigError: file missing, invalid TOML, unknown keys or bad values.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return AnalysisConfig()

    cfg_path = Path(path).expanduser()
    try:
        with open(cfg_path, "rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {cfg_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {cfg_path}: {e}") from e

    table = data.get("analysis", {})
    if not isinstance(table, dict):
        raise ConfigError(f"[analysis] in {cfg_path} must be a table")
    return AnalysisConfig(**_coerce_table(table, str(cfg_path)))


def resolve_config(config: AnalysisConfig | None) -> AnalysisConfig:
    """Return ``config`` or the defaults from :func:`load_config`."""
    return config if config is not None else load_config()
