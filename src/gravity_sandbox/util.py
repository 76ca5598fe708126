# MIT License (see LICENSE)
"""
Vector helpers for the sandbox.

A 2D vector is a numpy float64 array of shape (2,). Positions, velocities
and forces are all stored this way; cloning a vector is ``v.copy()``.
"""
from __future__ import annotations
import math

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.
    
    Lets callers pass tuples or lists for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def zeros2() -> np.ndarray:
    """A fresh zero vector."""
    return np.zeros(2, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return math.sqrt(norm2(v))


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    dx = float(a[0] - b[0])
    dy = float(a[1] - b[1])
    return math.sqrt(dx * dx + dy * dy)


def is_finite(v: np.ndarray) -> bool:
    return bool(np.all(np.isfinite(v)))
