"""
Quadratic bezier curve with a start, an end and a single control point.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from splinepath.base import BaseSpline
from splinepath.spline_math import Ease, linear_ease, normalize, quadratic, quadratic_derivative
from splinepath.types import PointLike, SplineLerp, SplineType, Vertex, as_point


class SimpleSpline(BaseSpline):
    """Quadratic bezier. Two vertices, one control point, never looped."""

    def __init__(
        self,
        start: PointLike,
        end: PointLike,
        control: PointLike,
        subdivisions: Optional[int] = None,
        lookahead: Optional[float] = None,
    ):
        super().__init__(subdivisions=subdivisions, lookahead=lookahead)
        self._start = Vertex.from_point(start)
        self._end = Vertex.from_point(end)
        self._control = as_point(control)

    @property
    def start(self) -> np.ndarray:
        return self._start.point.copy()

    @start.setter
    def start(self, value: PointLike) -> None:
        value = as_point(value)
        if not np.array_equal(value, self._start.point):
            self._start.point = value
            self._dirty = True

    @property
    def end(self) -> np.ndarray:
        return self._end.point.copy()

    @end.setter
    def end(self, value: PointLike) -> None:
        value = as_point(value)
        if not np.array_equal(value, self._end.point):
            self._end.point = value
            self._dirty = True

    @property
    def control(self) -> np.ndarray:
        return self._control.copy()

    @control.setter
    def control(self, value: PointLike) -> None:
        value = as_point(value)
        if not np.array_equal(value, self._control):
            self._control = value
            self._dirty = True

    def spline_type(self) -> SplineType:
        return SplineType.SIMPLE

    def vertex_count(self) -> int:
        return 2

    def _vertex_at(self, index: int) -> Vertex:
        return self._start if index == 0 else self._end

    def control_count(self) -> int:
        return 1

    def _control_at(self, index: int) -> np.ndarray:
        return self._control

    def _store_control(self, index: int, point: np.ndarray) -> None:
        self._control = point

    def _evaluate_segment(self, vertex_a: int, vertex_b: int, t: float) -> np.ndarray:
        return quadratic(self._start.point, self._control, self._end.point, t)

    def get_direction(self, percent: float, ease: Ease = linear_ease) -> np.ndarray:
        """Unit direction from the bezier derivative; zero when the curve is a point."""
        self._ensure_processed()
        t = ease(self.get_segment(percent).interpolation)
        return normalize(quadratic_derivative(self._start.point, self._control, self._end.point, t))

    def _lerp_tier(self, lerp: SplineLerp) -> Optional[bool]:
        # A single segment: the chord table is always the identity
        if lerp == SplineLerp.PRECISE:
            return True
        return None
