"""
Reconfigurable spline host.

``MultiSpline`` stores a curve description (kind, vertices, control points,
tension, loop flag and an optional transform) and lazily turns it into a
concrete engine. The host has its own dirty flag, separate from the
engine's. When the host is refreshed, an engine of a compatible kind is
reconfigured in place. A change of kind replaces the engine.

The editing helpers (``convert_to``, ``recenter``, ``insert_vertex_*`` and
``delete_vertex``) operate on the stored description.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

import numpy as np

from splinepath.base import BaseSpline, VertexInput
from splinepath.config import get_config
from splinepath.exceptions import ConfigurationError, VertexIndexError
from splinepath.hermite import CSpline
from splinepath.logging import LOG_DEBUG, LOG_INFO, LOG_WARN
from splinepath.registry import get_spline_class
from splinepath.spline_math import Ease, linear_ease
from splinepath.transformed import TransformedSpline, TransformProvider
from splinepath.types import PointLike, Segment, SplineLerp, SplineType, Vertex, as_point

_HERMITE_TYPES = (SplineType.CSPLINE, SplineType.CARDINAL)


class MultiSpline:
    """Curve host that can switch between spline kinds at runtime."""

    def __init__(
        self,
        kind: Optional[SplineType] = None,
        vertices: Iterable[VertexInput] = (),
        control_a: Optional[PointLike] = None,
        control_b: Optional[PointLike] = None,
        tension: Optional[float] = None,
        looped: Optional[bool] = None,
        transform: Optional[TransformProvider] = None,
    ):
        host_defaults = get_config().config.host

        self._kind = kind
        self._vertices: List[Vertex] = [self._to_vertex(v) for v in vertices]
        self._control_a = None if control_a is None else as_point(control_a)
        self._control_b = None if control_b is None else as_point(control_b)
        self._tension = float(host_defaults.tension if tension is None else tension)
        self._looped = bool(host_defaults.looped if looped is None else looped)
        self._transform = transform

        self._engine: Optional[BaseSpline] = None
        self._view = None
        self._dirty = True
        self.on_updated = None

    @staticmethod
    def _to_vertex(item: VertexInput) -> Vertex:
        return item.copy() if isinstance(item, Vertex) else Vertex.from_point(item)

    # -------------------------------------------------------------------------
    # Configuration surface
    # -------------------------------------------------------------------------

    @property
    def kind(self) -> Optional[SplineType]:
        return self._kind

    @property
    def tension(self) -> float:
        return self._tension

    @property
    def looped(self) -> bool:
        return self._looped

    @property
    def control_points(self):
        return self._control_a, self._control_b

    @property
    def engine(self) -> Optional[BaseSpline]:
        """Concrete curve currently held, or None before the first refresh."""
        return self._engine

    def get_vertices(self) -> List[Vertex]:
        return [v.copy() for v in self._vertices]

    def set_type(self, kind: SplineType) -> None:
        if self._kind != kind:
            self._kind = kind
            self._dirty = True

    def set_vertices(self, vertices: Iterable[VertexInput]) -> None:
        self._vertices = [self._to_vertex(v) for v in vertices]
        self._dirty = True

    def set_control_points(self, control_a: Optional[PointLike], control_b: Optional[PointLike] = None) -> None:
        """Set the host controls. Simple curves only use ``control_a``.

        ``None`` lets an open cardinal curve default the control to its
        adjacent end vertex.
        """
        self._control_a = None if control_a is None else as_point(control_a)
        self._control_b = None if control_b is None else as_point(control_b)
        self._dirty = True

    def set_tension(self, tension: float) -> None:
        tension = float(tension)
        if self._tension != tension:
            self._tension = tension
            self._dirty = True

    def set_looped(self, looped: bool) -> None:
        if self._looped != looped:
            self._looped = bool(looped)
            self._dirty = True

    def set_transform(self, transform: Optional[TransformProvider]) -> None:
        if self._transform is not transform:
            self._transform = transform
            self._dirty = True

    def is_host_dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    # -------------------------------------------------------------------------
    # Engine generation
    # -------------------------------------------------------------------------

    def _validate(self) -> None:
        if self._kind is None:
            raise ConfigurationError("MultiSpline has not been set up with a spline type")
        count = len(self._vertices)
        if self._kind == SplineType.SIMPLE and count != 2:
            raise ConfigurationError(
                "Simple splines require exactly 2 vertices",
                details={"vertices": count},
            )
        if count < 2:
            raise ConfigurationError(
                f"{self._kind.value} splines require at least 2 vertices",
                details={"vertices": count},
            )

    def _generate(self) -> bool:
        """Configure the engine slot from the description; True if a new engine was created."""
        self._validate()

        engine = self._engine
        current = engine.spline_type() if engine is not None else None
        created = False

        if self._kind == SplineType.SIMPLE:
            control = self._control_a if self._control_a is not None else np.zeros(3)
            if current != SplineType.SIMPLE:
                engine = get_spline_class(SplineType.SIMPLE)(
                    self._vertices[0].point, self._vertices[1].point, control
                )
                created = True
            else:
                engine.start = self._vertices[0].point
                engine.end = self._vertices[1].point
                engine.control = control
            for i in range(2):
                engine.set_vertex_user_data(i, self._vertices[i].user_data)

        elif self._kind == SplineType.LINEAR:
            if current != SplineType.LINEAR:
                engine = get_spline_class(SplineType.LINEAR)()
                created = True
            engine.set_looped(self._looped)
            engine.set_vertices(self._vertices)

        else:
            if current not in _HERMITE_TYPES:
                engine = get_spline_class(self._kind)()
                created = True
            if self._kind == SplineType.CSPLINE:
                engine.set_as_cspline()
            else:
                engine.set_as_cardinal(self._tension)
            engine.set_looped(self._looped)
            engine.set_vertices(self._vertices)
            if self._kind == SplineType.CARDINAL and not self._looped:
                if self._control_a is None or self._control_b is None:
                    engine.clear_control_points()
                else:
                    engine.set_control_points(self._control_a, self._control_b)

        if created:
            LOG_DEBUG(
                f"MultiSpline created {engine.name} for {self._kind.value}"
                + (f" (replacing {current.value})" if current is not None else "")
            )
        self._engine = engine
        return created

    def refresh(self):
        """Bring the engine up to date with the description and return the queryable view."""
        if self._dirty or self._engine is None:
            created = self._generate()
            if self._transform is None:
                self._view = self._engine
            elif created or not isinstance(self._view, TransformedSpline) or self._view.transform is not self._transform:
                self._view = TransformedSpline(self._transform, self._engine)
            self._dirty = False
        return self._view

    # -------------------------------------------------------------------------
    # Curve contract
    # -------------------------------------------------------------------------

    def spline_type(self) -> SplineType:
        return self.refresh().spline_type()

    def is_looped(self) -> bool:
        return self.refresh().is_looped()

    def get_distance(self) -> float:
        return self.refresh().get_distance()

    def get_direct_distance(self) -> float:
        return self.refresh().get_direct_distance()

    def vertex_count(self) -> int:
        return self.refresh().vertex_count()

    def get_vertex(self, index: int) -> np.ndarray:
        return self.refresh().get_vertex(index)

    def set_vertex(self, index: int, point: PointLike) -> None:
        view = self.refresh()
        view.set_vertex(index, point)
        self._vertices[index].point = self._engine.get_vertex(index)

    def get_vertex_user_data(self, index: int) -> Any:
        return self.refresh().get_vertex_user_data(index)

    def set_vertex_user_data(self, index: int, user_data: Any) -> None:
        self.refresh().set_vertex_user_data(index, user_data)
        self._vertices[index].user_data = user_data

    def control_count(self) -> int:
        return self.refresh().control_count()

    def get_control_point(self, index: int) -> np.ndarray:
        return self.refresh().get_control_point(index)

    def set_control_point(self, index: int, point: PointLike) -> None:
        view = self.refresh()
        view.set_control_point(index, point)
        if isinstance(self._engine, CSpline):
            # Setting one cardinal control fixes both in place
            self._control_a = self._engine.get_control_point(0)
            self._control_b = self._engine.get_control_point(1)
        else:
            self._control_a = self._engine.get_control_point(0)

    def transform_percent(self, percent: float, lerp: SplineLerp = SplineLerp.VERTEX) -> float:
        return self.refresh().transform_percent(percent, lerp)

    def inv_transform_percent(self, percent: float, lerp: SplineLerp = SplineLerp.VERTEX) -> float:
        return self.refresh().inv_transform_percent(percent, lerp)

    def get_point(self, percent: float, ease: Ease = linear_ease) -> np.ndarray:
        return self.refresh().get_point(percent, ease)

    def get_direction(self, percent: float, ease: Ease = linear_ease) -> np.ndarray:
        return self.refresh().get_direction(percent, ease)

    def get_segment(self, percent: float) -> Segment:
        return self.refresh().get_segment(percent)

    def process(self) -> bool:
        if self.refresh().process():
            if self.on_updated is not None:
                self.on_updated(self)
            return True
        return False

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def _vertex_points(self) -> List[np.ndarray]:
        return [v.point for v in self._vertices]

    def convert_to(self, kind: SplineType) -> None:
        """Change the spline kind, deriving vertices and controls that keep the shape."""
        previous = self._kind
        if previous == kind:
            return

        if previous is None:
            LOG_INFO(f"Initializing MultiSpline as {kind.value} with default geometry")

        if kind == SplineType.SIMPLE:
            self._convert_to_simple()
        elif kind == SplineType.LINEAR:
            self._convert_to_linear()
        elif kind == SplineType.CSPLINE:
            self._convert_to_cspline()
        else:
            self._convert_to_cardinal()

        self._kind = kind
        self._dirty = True

    def _convert_to_simple(self) -> None:
        previous = self._kind
        if previous is None:
            start, end, control = np.array([-1.0, 0, 0]), np.array([1.0, 0, 0]), np.array([0, 1.0, 0])
        else:
            last = len(self._vertices) - 1
            start = self._vertices[0].point.copy()
            end = self._vertices[last].point.copy()
            if previous == SplineType.LINEAR:
                if last > 1:
                    control = np.mean(self._vertex_points()[1:last], axis=0)
                else:
                    control = (start + end) * 0.5
            else:
                # Average the handle tips of the two end tangents
                control = ((start - self._vertices[0].out_tangent) + (end + self._vertices[last].in_tangent)) * 0.5

        self._vertices = [Vertex.from_point(start), Vertex.from_point(end)]
        self._control_a = control
        self._control_b = None
        self._looped = False

    def _convert_to_linear(self) -> None:
        previous = self._kind
        if previous is None:
            self._looped = False
            self._vertices = [Vertex.from_point((-1, 0, 0)), Vertex.from_point((1, 0, 0))]
        elif previous == SplineType.SIMPLE:
            control = self._control_a if self._control_a is not None else np.zeros(3)
            self._vertices = [self._vertices[0], Vertex.from_point(control), self._vertices[1]]
            self._looped = False
        # Hermite kinds already share their vertex positions

    def _convert_to_cspline(self) -> None:
        previous = self._kind
        if previous is None:
            self._looped = False
            self._vertices = [Vertex.from_point((-1, 0, 0)), Vertex.from_point((1, 0, 0))]
        elif previous == SplineType.SIMPLE:
            start, end = self._vertices[0].point, self._vertices[1].point
            control = self._control_a if self._control_a is not None else np.zeros(3)
            # Exact cubic form of the quadratic: end tangents are the bezier derivatives
            self._vertices = [
                Vertex.with_tangent(start, 2.0 * (control - start)),
                Vertex.with_tangent(end, 2.0 * (end - control)),
            ]
            self._looped = False
        elif previous == SplineType.LINEAR:
            for vertex in self._vertices:
                vertex.in_tangent = np.zeros(3)
                vertex.out_tangent = np.zeros(3)
        elif previous == SplineType.CARDINAL:
            tangents = self._engine_tangents()
            for vertex, (tan_in, tan_out) in zip(self._vertices, tangents):
                vertex.in_tangent = tan_in
                vertex.out_tangent = tan_out
        self._control_a = self._control_b = None

    def _convert_to_cardinal(self) -> None:
        previous = self._kind
        if previous is None:
            self._tension = 0.0
            self._looped = False
            self._vertices = [
                Vertex.from_point(p) for p in ((-1, -1, 0), (-1, 0, 0), (1, 0, 0), (1, -1, 0))
            ]
            self._control_a = self._control_b = None
        elif previous == SplineType.SIMPLE:
            start, end = self._vertices[0].point, self._vertices[1].point
            control = self._control_a if self._control_a is not None else np.zeros(3)
            self._control_a = start + 0.5 * (start - control)
            self._control_b = end + 0.5 * (end - control)
            self._looped = False
        else:
            self._control_a = self._vertices[0].point.copy()
            self._control_b = self._vertices[-1].point.copy()

    def _engine_tangents(self) -> np.ndarray:
        """Tangents the current hermite engine generated for the stored vertices."""
        self.refresh()
        return self._engine.get_tangents()

    def recenter(self, center: PointLike = (0, 0, 0)) -> None:
        """Translate vertices and controls so their vertex centroid lands on ``center``."""
        if not self._vertices:
            return
        offset = as_point(center) - np.mean(self._vertex_points(), axis=0)
        for vertex in self._vertices:
            vertex.point = vertex.point + offset
        if self._control_a is not None:
            self._control_a = self._control_a + offset
        if self._control_b is not None:
            self._control_b = self._control_b + offset
        self._dirty = True

    def _editable(self, action: str) -> bool:
        if self._kind is None or self._kind == SplineType.SIMPLE:
            LOG_WARN(f"MultiSpline: cannot {action} on a {self._kind.value if self._kind else 'uninitialized'} spline")
            return False
        return True

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._vertices):
            raise VertexIndexError(index, len(self._vertices))

    def _sample_new_vertex(self, uniform_percent: float) -> Vertex:
        self.refresh()
        engine = self._engine
        point = engine.get_point(uniform_percent)
        direction = engine.get_direction(uniform_percent)
        tangent = direction if self._kind == SplineType.CSPLINE else np.zeros(3)
        return Vertex.with_tangent(point, tangent)

    def insert_vertex_after(self, index: int) -> None:
        """Insert a vertex halfway to the next one, or past the end of an open curve."""
        if not self._editable("insert vertices"):
            return
        self._check_index(index)

        count = len(self._vertices)
        seg_count = count if self._looped else count - 1
        current = index
        lerp = 0.5
        append = index == count - 1
        if append and not self._looped:
            current -= 1
            lerp = 1.5

        vertex = self._sample_new_vertex((current + lerp) / seg_count)
        if append:
            self._vertices.append(vertex)
        else:
            self._vertices.insert(index + 1, vertex)
        self._dirty = True

    def insert_vertex_before(self, index: int) -> None:
        """Insert a vertex halfway to the previous one, or before the start of an open curve."""
        if not self._editable("insert vertices"):
            return
        self._check_index(index)

        count = len(self._vertices)
        seg_count = count if self._looped else count - 1
        current = index
        lerp = -0.5
        if index == 0 and not self._looped:
            current = 1
            lerp = -1.5

        vertex = self._sample_new_vertex((current + lerp) / seg_count)
        self._vertices.insert(index, vertex)
        self._dirty = True

    def delete_vertex(self, index: int) -> None:
        if not self._editable("delete vertices"):
            return
        self._check_index(index)
        if len(self._vertices) < 3:
            LOG_WARN("MultiSpline: cannot delete below 2 vertices")
            return
        del self._vertices[index]
        self._dirty = True
