"""
Interpolation bases used by the curve variants.

All functions take and return numpy arrays of shape (3,). ``t`` is not
clamped, so callers may extrapolate slightly past a segment end (the
forward difference in ``get_direction`` relies on this).
"""

from typing import Callable

import numpy as np

Ease = Callable[[float], float]


def linear_ease(t: float) -> float:
    """Identity easing."""
    return t


def lerp(p0: np.ndarray, p1: np.ndarray, t: float) -> np.ndarray:
    """Unclamped linear interpolation."""
    return p0 + (p1 - p0) * t


def quadratic(p0: np.ndarray, c0: np.ndarray, p1: np.ndarray, t: float) -> np.ndarray:
    """Quadratic bezier through ``p0`` and ``p1`` with control ``c0``."""
    t_rev = 1.0 - t
    return p0 * (t_rev * t_rev) + c0 * (2.0 * t_rev * t) + p1 * (t * t)


def quadratic_derivative(p0: np.ndarray, c0: np.ndarray, p1: np.ndarray, t: float) -> np.ndarray:
    """First derivative of :func:`quadratic` with respect to ``t``."""
    return (c0 - p0) * (2.0 * (1.0 - t)) + (p1 - c0) * (2.0 * t)


def hermite(t0: np.ndarray, p0: np.ndarray, p1: np.ndarray, t1: np.ndarray, t: float) -> np.ndarray:
    """Cubic hermite between ``p0`` (out tangent ``t0``) and ``p1`` (in tangent ``t1``)."""
    t2 = t * t
    t3 = t2 * t

    a = 2 * t3 - 3 * t2 + 1
    b = t3 - 2 * t2 + t
    c = t3 - t2
    d = -2 * t3 + 3 * t2

    return p0 * a + t0 * b + t1 * c + p1 * d


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along ``v``; the zero vector stays zero."""
    length = float(np.linalg.norm(v))
    if length == 0.0:
        return np.zeros_like(v)
    return v / length


def distance(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.linalg.norm(b - a))


def next_power_of_two(value: int) -> int:
    if value <= 1:
        return 1
    return 1 << (int(value) - 1).bit_length()
