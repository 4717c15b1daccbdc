"""
Coordinate-space wrapper around a curve.

``TransformedSpline`` maps every point it returns through a rigid transform
(position, rotation, scale) and every direction through the rotation and
scale only. Setters go through the inverse transform, so the wrapped curve
keeps storing local-space data. The wrapper holds no cached state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence

import numpy as np

from splinepath.spline_math import Ease, linear_ease
from splinepath.types import PointLike, Segment, SplineLerp, SplineType, as_point


class TransformProvider(Protocol):
    def transform_point(self, point: np.ndarray) -> np.ndarray: ...

    def transform_vector(self, vector: np.ndarray) -> np.ndarray: ...

    def inverse_transform_point(self, point: np.ndarray) -> np.ndarray: ...


def _rotation_from_euler(degrees_xyz: Sequence[float]) -> np.ndarray:
    """Rotation matrix applying z, then x, then y (degrees)."""
    x, y, z = np.radians(np.asarray(degrees_xyz, dtype=float))
    cx, sx = np.cos(x), np.sin(x)
    cy, sy = np.cos(y), np.sin(y)
    cz, sz = np.cos(z), np.sin(z)

    rot_x = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    rot_y = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    rot_z = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return rot_y @ rot_x @ rot_z


@dataclass
class RigidTransform:
    """Position, rotation matrix and per-axis scale.

    Points map as ``R @ (S * p) + position``.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.eye(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self):
        self.position = as_point(self.position)
        self.rotation = np.asarray(self.rotation, dtype=float).reshape(3, 3)
        self.scale = np.broadcast_to(np.asarray(self.scale, dtype=float), (3,)).copy()

    @classmethod
    def identity(cls) -> "RigidTransform":
        return cls()

    @classmethod
    def from_euler(
        cls,
        position: Optional[PointLike] = None,
        degrees_xyz: Sequence[float] = (0.0, 0.0, 0.0),
        scale: Any = 1.0,
    ) -> "RigidTransform":
        return cls(position=as_point(position), rotation=_rotation_from_euler(degrees_xyz), scale=scale)

    @property
    def matrix(self) -> np.ndarray:
        """Linear part (rotation times scale)."""
        return self.rotation * self.scale

    def transform_point(self, point: np.ndarray) -> np.ndarray:
        return self.matrix @ as_point(point) + self.position

    def transform_vector(self, vector: np.ndarray) -> np.ndarray:
        return self.matrix @ as_point(vector)

    def inverse_transform_point(self, point: np.ndarray) -> np.ndarray:
        return np.linalg.solve(self.matrix, as_point(point) - self.position)

    def inverse_transform_vector(self, vector: np.ndarray) -> np.ndarray:
        return np.linalg.solve(self.matrix, as_point(vector))


class TransformedSpline:
    """Curve adapter that reports results in a transform's parent space."""

    def __init__(self, transform: TransformProvider, spline):
        self.transform = transform
        self.inner = spline

    @property
    def on_updated(self):
        return self.inner.on_updated

    @on_updated.setter
    def on_updated(self, callback) -> None:
        self.inner.on_updated = callback

    # Basic info

    def spline_type(self) -> SplineType:
        return self.inner.spline_type()

    def is_looped(self) -> bool:
        return self.inner.is_looped()

    def is_dirty(self) -> bool:
        return self.inner.is_dirty()

    def get_distance(self) -> float:
        return self.inner.get_distance()

    def get_direct_distance(self) -> float:
        return self.inner.get_direct_distance()

    # Vertex access

    def vertex_count(self) -> int:
        return self.inner.vertex_count()

    def get_vertex(self, index: int) -> np.ndarray:
        return self.transform.transform_point(self.inner.get_vertex(index))

    def set_vertex(self, index: int, point: PointLike) -> None:
        self.inner.set_vertex(index, self.transform.inverse_transform_point(as_point(point)))

    def get_vertex_user_data(self, index: int) -> Any:
        return self.inner.get_vertex_user_data(index)

    def set_vertex_user_data(self, index: int, user_data: Any) -> None:
        self.inner.set_vertex_user_data(index, user_data)

    def control_count(self) -> int:
        return self.inner.control_count()

    def get_control_point(self, index: int) -> np.ndarray:
        return self.transform.transform_point(self.inner.get_control_point(index))

    def set_control_point(self, index: int, point: PointLike) -> None:
        self.inner.set_control_point(index, self.transform.inverse_transform_point(as_point(point)))

    # Evaluation

    def transform_percent(self, percent: float, lerp: SplineLerp = SplineLerp.VERTEX) -> float:
        return self.inner.transform_percent(percent, lerp)

    def inv_transform_percent(self, percent: float, lerp: SplineLerp = SplineLerp.VERTEX) -> float:
        return self.inner.inv_transform_percent(percent, lerp)

    def get_point(self, percent: float, ease: Ease = linear_ease) -> np.ndarray:
        return self.transform.transform_point(self.inner.get_point(percent, ease))

    def get_direction(self, percent: float, ease: Ease = linear_ease) -> np.ndarray:
        return self.transform.transform_vector(self.inner.get_direction(percent, ease))

    def get_segment(self, percent: float) -> Segment:
        return self.inner.get_segment(percent)

    # Operations

    def process(self) -> bool:
        return self.inner.process()
