# tests/conftest.py
"""Shared test systems (the package itself ships no model equations)."""
from __future__ import annotations

import numpy as np
import pytest

from dynmodels.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def _lorenz(t, x, sigma=10.0, rho=28.0, beta=8.0 / 3.0):
    return np.array([
        sigma * (x[1] - x[0]),
        x[0] * (rho - x[2]) - x[1],
        x[0] * x[1] - beta * x[2],
    ])


def _rossler(t, x, a=0.2, b=0.2, c=5.7):
    return np.array([
        -x[1] - x[2],
        x[0] + a * x[1],
        b + x[2] * (x[0] - c),
    ])


def _van_der_pol(t, x, eps=1.0, F=0.0, omega=0.0):
    return np.array([
        x[1],
        (eps - x[0] ** 2) * x[1] - x[0] + F * np.sin(omega * t),
    ])


def _harmonic(t, x, k=1.0, m=1.0):
    return np.array([x[1], -k * x[0] / m])


def _harmonic_exact(t, x0, k=1.0, m=1.0):
    w = np.sqrt(k / m)
    A = x0[0]
    B = x0[1] / w
    return np.array([
        A * np.cos(w * t) + B * np.sin(w * t),
        -A * w * np.sin(w * t) + B * w * np.cos(w * t),
    ])


def _henon(n, x, a=1.4, b=0.3):
    return np.array([1.0 - a * x[0] ** 2 + x[1], b * x[0]])


def _logistic(n, x, r=4.0):
    return r * x * (1.0 - x)


@pytest.fixture
def lorenz():
    return _lorenz


@pytest.fixture
def rossler():
    return _rossler


@pytest.fixture
def van_der_pol():
    return _van_der_pol


@pytest.fixture
def harmonic():
    return _harmonic


@pytest.fixture
def harmonic_exact():
    return _harmonic_exact


@pytest.fixture
def henon():
    return _henon


@pytest.fixture
def logistic():
    return _logistic
