"""
Cubic hermite spline.

A CSpline runs in one of two tangent modes:

- explicit (``SplineType.CSPLINE``): tangents are taken from the vertices as
  given by the caller.
- cardinal (``SplineType.CARDINAL``): tangents are regenerated on every
  rebuild from neighbouring points and a tension parameter. Tension 0 is
  Catmull-Rom. An open cardinal curve has two control points that stand in
  for the missing neighbour before the first vertex and after the last.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from splinepath.base import VertexSpline
from splinepath.exceptions import NotEnoughVerticesError, UnsupportedOperationError
from splinepath.spline_math import hermite
from splinepath.types import PointLike, SplineType, as_point


class CSpline(VertexSpline):
    """Cubic hermite curve with explicit or cardinal-generated tangents."""

    def __init__(
        self,
        subdivisions: Optional[int] = None,
        lookahead: Optional[float] = None,
    ):
        super().__init__(subdivisions=subdivisions, lookahead=lookahead)
        self._spline_type = SplineType.CSPLINE
        self._tension = 0.0

        self._control_a = np.zeros(3)
        self._control_b = np.zeros(3)
        # Until set explicitly, open cardinal controls follow the end vertices
        self._controls_set = False

    # -------------------------------------------------------------------------
    # Mode
    # -------------------------------------------------------------------------

    def spline_type(self) -> SplineType:
        return self._spline_type

    @property
    def tension(self) -> float:
        return self._tension

    def set_as_cspline(self) -> None:
        """Use the tangents stored on the vertices."""
        if self._spline_type != SplineType.CSPLINE:
            self._spline_type = SplineType.CSPLINE
            self._dirty = True

    def set_as_catmull_rom(self) -> None:
        self.set_as_cardinal(0.0)

    def set_as_cardinal(self, tension: float) -> None:
        tension = float(tension)
        if self._spline_type != SplineType.CARDINAL or self._tension != tension:
            self._spline_type = SplineType.CARDINAL
            self._tension = tension
            self._dirty = True

    # -------------------------------------------------------------------------
    # Control points
    # -------------------------------------------------------------------------

    def _has_controls(self) -> bool:
        return self._spline_type == SplineType.CARDINAL and not self._looped

    def _no_controls_reason(self) -> str:
        if self._spline_type != SplineType.CARDINAL:
            return "CSpline does not have any control points"
        return "looped cardinal splines do not have control points"

    def _require_controls(self) -> None:
        if not self._has_controls():
            raise UnsupportedOperationError(self.name, self._no_controls_reason())

    def _require_endpoints(self) -> None:
        if self.vertex_count() < 2:
            raise NotEnoughVerticesError(self.name, self.vertex_count())

    def control_count(self) -> int:
        return 2 if self._has_controls() else 0

    def _effective_controls(self) -> Tuple[np.ndarray, np.ndarray]:
        if self._controls_set or self.vertex_count() == 0:
            return self._control_a, self._control_b
        return self._vertices[0].point, self._vertices[-1].point

    def _control_at(self, index: int) -> np.ndarray:
        return self._effective_controls()[index]

    def _store_control(self, index: int, point: np.ndarray) -> None:
        if not self._controls_set:
            self._control_a, self._control_b = (p.copy() for p in self._effective_controls())
            self._controls_set = True
        if index == 0:
            self._control_a = point
        else:
            self._control_b = point

    def set_control_points(self, control_start: PointLike, control_end: PointLike) -> None:
        self._require_controls()
        self._control_a = as_point(control_start)
        self._control_b = as_point(control_end)
        self._controls_set = True
        self._dirty = True

    def set_control_points_by_offset(self, start_offset: PointLike, end_offset: PointLike) -> None:
        """Place the controls relative to the first and last vertex."""
        self._require_controls()
        self._require_endpoints()
        self._control_a = as_point(start_offset) + self._vertices[0].point
        self._control_b = as_point(end_offset) + self._vertices[-1].point
        self._controls_set = True
        self._dirty = True

    def clear_control_points(self) -> None:
        """Let the controls follow the first and last vertex again."""
        if self._controls_set:
            self._controls_set = False
            self._dirty = True

    def reset_control_points(self) -> None:
        """Snap the controls onto the first and last vertex."""
        self._require_controls()
        self._require_endpoints()
        self._control_a = self._vertices[0].point.copy()
        self._control_b = self._vertices[-1].point.copy()
        self._controls_set = True
        self._dirty = True

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def _evaluate_segment(self, vertex_a: int, vertex_b: int, t: float) -> np.ndarray:
        a = self._vertices[vertex_a]
        b = self._vertices[vertex_b]
        return hermite(a.out_tangent, a.point, b.point, b.in_tangent, t)

    def _generate_tangents(self) -> None:
        if self._spline_type != SplineType.CARDINAL:
            return

        multiplier = (1.0 - self._tension) * 0.5
        vertices = self._vertices
        count = len(vertices)

        if self._looped:
            for i in range(count):
                prev = vertices[(i + count - 1) % count].point
                nxt = vertices[(i + 1) % count].point
                tangent = (nxt - prev) * multiplier
                vertices[i].in_tangent = tangent
                vertices[i].out_tangent = tangent.copy()
            return

        control_a, control_b = self._effective_controls()
        for i in range(count):
            prev = control_a if i == 0 else vertices[i - 1].point
            nxt = control_b if i == count - 1 else vertices[i + 1].point
            tangent = (nxt - prev) * multiplier
            vertices[i].in_tangent = tangent
            vertices[i].out_tangent = tangent.copy()

    def get_tangents(self) -> np.ndarray:
        """``(n, 2, 3)`` array of (in, out) tangents after any pending rebuild."""
        self._ensure_processed()
        return np.array([[v.in_tangent, v.out_tangent] for v in self._vertices])
