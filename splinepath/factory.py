"""
Shortcuts for building configured curves.
"""

from typing import Iterable, Sequence

from splinepath.base import VertexInput
from splinepath.hermite import CSpline
from splinepath.linear import LinearSpline
from splinepath.simple import SimpleSpline
from splinepath.types import PointLike, as_point


def simple(start: PointLike, end: PointLike, control: PointLike) -> SimpleSpline:
    """Quadratic bezier from ``start`` to ``end`` bent towards ``control``."""
    return SimpleSpline(start, end, control)


def simple_offset(
    start: PointLike,
    end: PointLike,
    control_percent: float,
    control_offset: PointLike,
) -> SimpleSpline:
    """Quadratic bezier whose control sits ``control_percent`` of the way to ``end``, then offset."""
    start_p = as_point(start)
    end_p = as_point(end)
    control = start_p + (end_p - start_p) * control_percent + as_point(control_offset)
    return SimpleSpline(start_p, end_p, control)


def linear(looped: bool, points: Iterable[VertexInput]) -> LinearSpline:
    spline = LinearSpline()
    spline.set_looped(looped)
    spline.set_vertices(points)
    return spline


def cspline(looped: bool, vertices: Iterable[VertexInput]) -> CSpline:
    """Hermite curve using the tangents carried by ``vertices``."""
    spline = CSpline()
    spline.set_as_cspline()
    spline.set_looped(looped)
    spline.set_vertices(vertices)
    return spline


def cardinal(looped: bool, tension: float, points: Sequence[VertexInput]) -> CSpline:
    """Cardinal curve; open curves get controls on their end vertices."""
    spline = CSpline()
    spline.set_as_cardinal(tension)
    spline.set_looped(looped)
    spline.set_vertices(points)
    if not looped:
        spline.reset_control_points()
    return spline


def catmull_rom(looped: bool, points: Sequence[VertexInput]) -> CSpline:
    return cardinal(looped, 0.0, points)
