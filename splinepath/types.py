"""
Plain data types shared by every curve.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Union

import numpy as np

PointLike = Union[Sequence[float], np.ndarray]


def as_point(value: Optional[PointLike]) -> np.ndarray:
    """Convert a 2D or 3D sequence to a float array of shape (3,).

    2D input is placed on the z = 0 plane. ``None`` maps to the origin.
    """
    if value is None:
        return np.zeros(3)
    arr = np.asarray(value, dtype=float).reshape(-1)
    if arr.shape[0] == 2:
        return np.array([arr[0], arr[1], 0.0])
    if arr.shape[0] != 3:
        raise ValueError(f"Expected a 2D or 3D point, got shape {np.shape(value)}")
    return arr.copy()


class SplineType(Enum):
    """Kind of curve."""

    SIMPLE = "simple"  # quadratic bezier: start, end, one control point
    LINEAR = "linear"  # polygonal path, no controls
    CSPLINE = "cspline"  # cubic hermite with explicit tangents
    CARDINAL = "cardinal"  # cubic hermite with generated tangents


class SplineLerp(Enum):
    """How a traversal percent is distributed along the curve.

    VERTEX gives each segment an equal share. DIRECT distributes by chord
    length between vertices. PRECISE distributes by length sampled along
    the actual curve.
    """

    VERTEX = "vertex"
    DIRECT = "direct"
    PRECISE = "precise"


@dataclass
class Vertex:
    """A curve vertex with optional hermite tangents and a caller-owned tag."""

    point: np.ndarray = field(default_factory=lambda: np.zeros(3))
    in_tangent: np.ndarray = field(default_factory=lambda: np.zeros(3))
    out_tangent: np.ndarray = field(default_factory=lambda: np.zeros(3))
    user_data: Any = None

    def __post_init__(self):
        self.point = as_point(self.point)
        self.in_tangent = as_point(self.in_tangent)
        self.out_tangent = as_point(self.out_tangent)

    @classmethod
    def from_point(cls, point: PointLike, user_data: Any = None) -> "Vertex":
        return cls(point=point, user_data=user_data)

    @classmethod
    def with_tangent(cls, point: PointLike, tangent: PointLike) -> "Vertex":
        """Vertex whose in and out tangents are equal."""
        return cls(point=point, in_tangent=tangent, out_tangent=tangent)

    def copy(self) -> "Vertex":
        return Vertex(self.point, self.in_tangent, self.out_tangent, self.user_data)


@dataclass(frozen=True)
class Segment:
    """Location on a curve: two vertex indices and the fraction between them."""

    vertex_a: int
    vertex_b: int
    interpolation: float


@dataclass
class UpdateInfo:
    """Point and direction at a percent, as consumed by an update loop."""

    spline: Any
    percent: float
    point: np.ndarray
    direction: np.ndarray
