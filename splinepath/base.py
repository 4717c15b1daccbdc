"""
Common curve contract and shared evaluation logic.

Every concrete curve keeps a dirty flag. Mutations set it; queries call
``_ensure_processed`` which rebuilds tangents (where the variant generates
them) and the arc-length tables before answering. ``process`` is the
explicit rebuild trigger and reports whether a rebuild happened.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List, Optional, Union

import numpy as np

from splinepath.arc_length import ArcLengthTable
from splinepath.config import get_config
from splinepath.exceptions import (
    ControlPointIndexError,
    NotEnoughVerticesError,
    UnsupportedOperationError,
    VertexIndexError,
)
from splinepath.logging import LOG_DEBUG, profile_scope
from splinepath.spline_math import Ease, linear_ease, normalize
from splinepath.types import PointLike, Segment, SplineLerp, SplineType, Vertex, as_point

UpdateCallback = Callable[[Any], None]


class BaseSpline(ABC):
    """Abstract curve.

    Subclasses provide vertex/control storage and the per-segment basis
    through ``_evaluate_segment``. Segment location, percent transforms,
    direction sampling and the rebuild discipline live here.
    """

    def __init__(self, subdivisions: Optional[int] = None, lookahead: Optional[float] = None):
        settings = get_config().config.evaluation
        self._subdivisions = max(1, int(subdivisions if subdivisions is not None else settings.subdivisions))
        self._lookahead = float(lookahead if lookahead is not None else settings.lookahead)

        self._looped = False
        self._dirty = True
        self._table = ArcLengthTable()
        self.on_updated: Optional[UpdateCallback] = None
        self.name = self.__class__.__name__

    # -------------------------------------------------------------------------
    # Storage hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def spline_type(self) -> SplineType:
        """Kind of curve."""

    @abstractmethod
    def vertex_count(self) -> int:
        pass

    @abstractmethod
    def _vertex_at(self, index: int) -> Vertex:
        """Stored vertex, without bounds checking."""

    @abstractmethod
    def _evaluate_segment(self, vertex_a: int, vertex_b: int, t: float) -> np.ndarray:
        """Point at local parameter ``t`` between two vertices."""

    def control_count(self) -> int:
        return 0

    def _control_at(self, index: int) -> np.ndarray:
        raise UnsupportedOperationError(self.name, "no control points")

    def _store_control(self, index: int, point: np.ndarray) -> None:
        raise UnsupportedOperationError(self.name, "no control points")

    def _no_controls_reason(self) -> str:
        return "curve does not have control points"

    def _generate_tangents(self) -> None:
        """Recompute derived tangents before the tables are rebuilt."""

    def _table_subdivisions(self) -> int:
        return self._subdivisions

    def _lerp_tier(self, lerp: SplineLerp) -> Optional[bool]:
        """Table used for a precision tier: None (identity), False (direct) or True (precise)."""
        if lerp == SplineLerp.DIRECT:
            return False
        if lerp == SplineLerp.PRECISE:
            return True
        return None

    # -------------------------------------------------------------------------
    # Basic info
    # -------------------------------------------------------------------------

    def is_looped(self) -> bool:
        return self._looped

    def is_dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    def segment_count(self) -> int:
        count = self.vertex_count()
        return count if self._looped else count - 1

    @property
    def subdivisions(self) -> int:
        return self._subdivisions

    def set_subdivisions(self, subdivisions: int) -> None:
        subdivisions = max(1, int(subdivisions))
        if subdivisions != self._subdivisions:
            self._subdivisions = subdivisions
            self._dirty = True

    @property
    def table(self) -> ArcLengthTable:
        return self._table

    def get_distance(self) -> float:
        """Length along the sampled curve."""
        self._ensure_processed()
        return self._table.precise_distance

    def get_direct_distance(self) -> float:
        """Sum of straight chords between consecutive vertices."""
        self._ensure_processed()
        return self._table.direct_distance

    # -------------------------------------------------------------------------
    # Vertex access
    # -------------------------------------------------------------------------

    def _check_vertex_index(self, index: int) -> None:
        if index < 0 or index >= self.vertex_count():
            raise VertexIndexError(index, self.vertex_count())

    def get_vertex(self, index: int) -> np.ndarray:
        self._check_vertex_index(index)
        return self._vertex_at(index).point.copy()

    def set_vertex(self, index: int, point: PointLike) -> None:
        self._check_vertex_index(index)
        self._vertex_at(index).point = as_point(point)
        self._dirty = True

    def get_vertex_user_data(self, index: int) -> Any:
        self._check_vertex_index(index)
        return self._vertex_at(index).user_data

    def set_vertex_user_data(self, index: int, user_data: Any) -> None:
        """Attach caller data to a vertex. Does not dirty the curve."""
        self._check_vertex_index(index)
        self._vertex_at(index).user_data = user_data

    def _check_control_index(self, index: int) -> None:
        count = self.control_count()
        if count == 0:
            raise UnsupportedOperationError(self.name, self._no_controls_reason())
        if index < 0 or index >= count:
            raise ControlPointIndexError(index, count)

    def get_control_point(self, index: int) -> np.ndarray:
        self._check_control_index(index)
        return self._control_at(index).copy()

    def set_control_point(self, index: int, point: PointLike) -> None:
        self._check_control_index(index)
        self._store_control(index, as_point(point))
        self._dirty = True

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def _wrap(self, percent: float) -> float:
        if self._looped:
            return (percent + 1) % 1
        return percent

    def get_segment(self, percent: float) -> Segment:
        """Locate the segment for a uniform percent."""
        vertex_count = self.vertex_count()
        if vertex_count < 2:
            raise NotEnoughVerticesError(self.name, vertex_count)

        seg_count = self.segment_count()
        percent = self._wrap(percent)

        scaled = percent * seg_count
        vertex_a = int(np.floor(scaled))
        if not self._looped:
            if vertex_a < 0:
                vertex_a = 0
            elif vertex_a >= seg_count:
                vertex_a = seg_count - 1

        return Segment(
            vertex_a=vertex_a,
            vertex_b=(vertex_a + 1) % vertex_count,
            interpolation=scaled - vertex_a,
        )

    def get_point(self, percent: float, ease: Ease = linear_ease) -> np.ndarray:
        self._ensure_processed()
        segment = self.get_segment(percent)
        return self._evaluate_segment(segment.vertex_a, segment.vertex_b, ease(segment.interpolation))

    def get_direction(self, percent: float, ease: Ease = linear_ease) -> np.ndarray:
        """Unit direction at ``percent`` by forward difference.

        Returns the zero vector when both samples coincide.
        """
        self._ensure_processed()
        segment = self.get_segment(percent)

        p1 = ease(segment.interpolation)
        p2 = p1 + self._lookahead

        v1 = self._evaluate_segment(segment.vertex_a, segment.vertex_b, p1)
        v2 = self._evaluate_segment(segment.vertex_a, segment.vertex_b, p2)
        return normalize(v2 - v1)

    def transform_percent(self, percent: float, lerp: SplineLerp = SplineLerp.VERTEX) -> float:
        """Convert a ``lerp``-space percent into a uniform (vertex) percent."""
        self._ensure_processed()
        percent = self._wrap(percent)

        if percent == 0 or percent == 1:
            return percent

        tier = self._lerp_tier(lerp)
        if tier is None:
            return percent
        return self._table.transform(percent, tier)

    def inv_transform_percent(self, percent: float, lerp: SplineLerp = SplineLerp.VERTEX) -> float:
        """Convert a uniform (vertex) percent into a ``lerp``-space percent."""
        self._ensure_processed()
        percent = self._wrap(percent)

        if percent == 0 or percent == 1:
            return percent

        tier = self._lerp_tier(lerp)
        if tier is None:
            return percent
        return self._table.inverse(percent, tier)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def _ensure_processed(self) -> None:
        if self._dirty:
            self.process()

    def process(self) -> bool:
        """Rebuild cached state if dirty.

        Returns:
            True if a rebuild happened.

        Raises:
            NotEnoughVerticesError: Fewer than 2 vertices. The curve stays
                dirty and previously cached tables are kept.
        """
        if not self._dirty:
            return False

        vertex_count = self.vertex_count()
        if vertex_count < 2:
            raise NotEnoughVerticesError(self.name, vertex_count)

        with profile_scope(f"{self.name}.process"):
            self._generate_tangents()
            points = [self._vertex_at(i).point for i in range(vertex_count)]
            self._table.rebuild(
                points,
                lambda i, t: self._evaluate_segment(i, (i + 1) % vertex_count, t),
                self.segment_count(),
                self._looped,
                self._table_subdivisions(),
            )

        self._dirty = False
        LOG_DEBUG(
            f"{self.name} rebuilt: vertices={vertex_count}, looped={self._looped}, "
            f"direct={self._table.direct_distance:.4f}, precise={self._table.precise_distance:.4f}"
        )
        if self.on_updated is not None:
            self.on_updated(self)
        return True


VertexInput = Union[Vertex, PointLike]


class VertexSpline(BaseSpline):
    """Curve backed by a resizable list of vertices (linear and hermite)."""

    def __init__(
        self,
        subdivisions: Optional[int] = None,
        lookahead: Optional[float] = None,
    ):
        super().__init__(subdivisions=subdivisions, lookahead=lookahead)
        self._vertices: List[Vertex] = []

    def vertex_count(self) -> int:
        return len(self._vertices)

    def _vertex_at(self, index: int) -> Vertex:
        return self._vertices[index]

    def set_looped(self, looped: bool) -> None:
        if self._looped != looped:
            self._looped = bool(looped)
            self._dirty = True

    def set_vertices(self, vertices: Iterable[VertexInput]) -> None:
        """Replace all vertices.

        Items may be :class:`Vertex` or 2D/3D points. A :class:`Vertex` is
        stored as given, tangents and user data included. A plain point only
        moves the vertex already at its index, keeping that vertex's tangents
        and user data; points past the old end become fresh vertices.
        """
        incoming = list(vertices)
        previous = self._vertices
        updated: List[Vertex] = []
        for i, item in enumerate(incoming):
            if isinstance(item, Vertex):
                vertex = item.copy()
            elif i < len(previous):
                vertex = previous[i].copy()
                vertex.point = as_point(item)
            else:
                vertex = Vertex.from_point(item)
            updated.append(vertex)

        self._vertices = updated
        self._dirty = True

    def get_vertices(self) -> List[Vertex]:
        """Copies of the stored vertices."""
        return [v.copy() for v in self._vertices]
