"""
Helpers for consumers that read many points off a curve.
"""

import numpy as np

from splinepath.logging import timed
from splinepath.spline_math import Ease, linear_ease
from splinepath.types import SplineLerp, UpdateInfo


@timed
def sample(
    spline,
    count: int,
    start: float = 0.0,
    end: float = 1.0,
    lerp: SplineLerp = SplineLerp.VERTEX,
) -> np.ndarray:
    """Sample ``count`` points at evenly spaced ``lerp``-space percents.

    Args:
        spline: Any curve (engine, wrapper or host).
        count: Number of samples, including both ends.
        start: First percent.
        end: Last percent.
        lerp: Space in which the percents are evenly spaced.

    Returns:
        ``(count, 3)`` array of points.
    """
    if count <= 0:
        return np.zeros((0, 3))
    if count == 1:
        return np.array([spline.get_point(spline.transform_percent(start, lerp))])

    delta = end - start
    points = np.zeros((count, 3))
    for i in range(count):
        t = i / (count - 1)
        points[i] = spline.get_point(spline.transform_percent(start + t * delta, lerp))
    return points


def get_update_info(
    spline,
    percent: float,
    lerp: SplineLerp = SplineLerp.VERTEX,
    ease: Ease = linear_ease,
) -> UpdateInfo:
    """Point and direction at a ``lerp``-space percent."""
    vertex_percent = spline.transform_percent(percent, lerp)
    return UpdateInfo(
        spline=spline,
        percent=vertex_percent,
        point=spline.get_point(vertex_percent, ease),
        direction=spline.get_direction(vertex_percent, ease),
    )
