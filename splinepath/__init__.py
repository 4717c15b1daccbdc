"""
splinepath - Spline evaluation for moving objects along smooth paths.

This package evaluates parametric curves built from control vertices:
- linear: Polygonal paths
- simple: Quadratic bezier with one control point
- cspline: Cubic hermite with explicit tangents
- cardinal: Cubic hermite with generated (Cardinal / Catmull-Rom) tangents

Each curve reports points and directions, plus percents remapped for
constant-speed traversal, from lazily rebuilt arc-length tables.

Basic Usage:
    from splinepath import catmull_rom, SplineLerp

    spline = catmull_rom(False, [(0, 0, 0), (1, 0, 0), (2, 1, 0), (3, 1, 0)])
    percent = spline.transform_percent(0.25, SplineLerp.PRECISE)
    point = spline.get_point(percent)

For runtime reconfiguration:
    from splinepath import MultiSpline, SplineType
    from splinepath.transformed import RigidTransform
"""

from __future__ import annotations

__version__ = "0.1.0"

# =============================================================================
# Core API
# =============================================================================

from splinepath.types import (
    SplineType,
    SplineLerp,
    Vertex,
    Segment,
    UpdateInfo,
    as_point,
)

from splinepath.base import BaseSpline, VertexSpline
from splinepath.arc_length import ArcLengthTable
from splinepath.linear import LinearSpline
from splinepath.simple import SimpleSpline
from splinepath.hermite import CSpline
from splinepath.transformed import RigidTransform, TransformedSpline
from splinepath.multi import MultiSpline

from splinepath.registry import (
    register_spline_type,
    get_spline_class,
    list_spline_types,
    SPLINE_TYPES,
)

from splinepath.factory import (
    simple,
    simple_offset,
    linear,
    cspline,
    cardinal,
    catmull_rom,
)

from splinepath.sampling import sample, get_update_info

from splinepath.config import (
    create_default_config,
    load_config,
    SplineConfig,
    ConfigManager,
    get_config,
    init_config,
)

# =============================================================================
# Logging
# =============================================================================

from splinepath.logging import (
    LOG_DEBUG,
    LOG_INFO,
    LOG_WARN,
    LOG_WARNING,
    LOG_ERROR,
    LOG_CRITICAL,
    profile_scope,
    get_logger,
    setup_logging,
    timed,
)

# =============================================================================
# Exceptions
# =============================================================================

from splinepath.exceptions import (
    SplineError,
    ConfigurationError,
    NotEnoughVerticesError,
    ConfigNotFoundError,
    ConfigValidationError,
    VertexIndexError,
    ControlPointIndexError,
    UnsupportedOperationError,
)

# =============================================================================
# Public API
# =============================================================================

__all__ = [
    # Version
    "__version__",
    # Types
    "SplineType",
    "SplineLerp",
    "Vertex",
    "Segment",
    "UpdateInfo",
    "as_point",
    # Curves
    "BaseSpline",
    "VertexSpline",
    "ArcLengthTable",
    "LinearSpline",
    "SimpleSpline",
    "CSpline",
    "RigidTransform",
    "TransformedSpline",
    "MultiSpline",
    # Registry
    "register_spline_type",
    "get_spline_class",
    "list_spline_types",
    "SPLINE_TYPES",
    # Factory
    "simple",
    "simple_offset",
    "linear",
    "cspline",
    "cardinal",
    "catmull_rom",
    # Sampling
    "sample",
    "get_update_info",
    # Config
    "create_default_config",
    "load_config",
    "SplineConfig",
    "ConfigManager",
    "get_config",
    "init_config",
    # Logging
    "LOG_DEBUG",
    "LOG_INFO",
    "LOG_WARN",
    "LOG_WARNING",
    "LOG_ERROR",
    "LOG_CRITICAL",
    "profile_scope",
    "get_logger",
    "setup_logging",
    "timed",
    # Exceptions
    "SplineError",
    "ConfigurationError",
    "NotEnoughVerticesError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "VertexIndexError",
    "ControlPointIndexError",
    "UnsupportedOperationError",
]
