"""
Polygonal spline. Straight path between consecutive vertices.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from splinepath.base import VertexSpline
from splinepath.spline_math import lerp
from splinepath.types import SplineLerp, SplineType


class LinearSpline(VertexSpline):
    """Piecewise-linear curve. Tangents are ignored and there are no control points."""

    def spline_type(self) -> SplineType:
        return SplineType.LINEAR

    def _no_controls_reason(self) -> str:
        return "linear splines do not have control points"

    def _evaluate_segment(self, vertex_a: int, vertex_b: int, t: float) -> np.ndarray:
        return lerp(self._vertices[vertex_a].point, self._vertices[vertex_b].point, t)

    def _table_subdivisions(self) -> int:
        # Sampling a straight segment adds nothing over its chord
        return 1

    def _lerp_tier(self, lerp_method: SplineLerp) -> Optional[bool]:
        if lerp_method == SplineLerp.VERTEX:
            return None
        return False
