"""
Spline type registry.

Maps each :class:`SplineType` to the concrete class that implements it.
The dynamic host uses this to instantiate engines.
"""

from typing import Dict, List, Optional, Type

from splinepath.base import BaseSpline
from splinepath.hermite import CSpline
from splinepath.linear import LinearSpline
from splinepath.logging import LOG_DEBUG
from splinepath.simple import SimpleSpline
from splinepath.types import SplineType

SPLINE_TYPES: Dict[SplineType, Type[BaseSpline]] = {}


def register_spline_type(kind: SplineType, spline_class: Type[BaseSpline]) -> None:
    """Register the class implementing a spline type.

    Args:
        kind: The spline type.
        spline_class: The class to instantiate for it.
    """
    SPLINE_TYPES[kind] = spline_class
    LOG_DEBUG(f"Registered {spline_class.__name__} for {kind.value}")


def get_spline_class(kind: SplineType) -> Optional[Type[BaseSpline]]:
    """Get the class for a spline type, or None if not registered."""
    return SPLINE_TYPES.get(kind)


def list_spline_types() -> List[SplineType]:
    """List all registered spline types."""
    return list(SPLINE_TYPES.keys())


def _register_all_spline_types():
    register_spline_type(SplineType.SIMPLE, SimpleSpline)
    register_spline_type(SplineType.LINEAR, LinearSpline)
    # Both hermite tangent modes share one engine class
    register_spline_type(SplineType.CSPLINE, CSpline)
    register_spline_type(SplineType.CARDINAL, CSpline)


_register_all_spline_types()
