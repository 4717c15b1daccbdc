"""
splinepath Exception Hierarchy.

This module defines all custom exceptions used in the splinepath package.
Structural problems (bad indices, missing vertices, control points on a
curve that has none) are raised synchronously at the call that triggers
them. Numeric degeneracies such as zero-length segments are not errors and
never raise.
"""

from typing import Any, Optional


class SplineError(Exception):
    """Base exception for all splinepath errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(SplineError):
    """A curve or host is not configured well enough to be evaluated."""

    pass


class NotEnoughVerticesError(ConfigurationError):
    """Fewer vertices than a rebuild requires."""

    def __init__(self, spline_name: str, vertex_count: int, required: int = 2):
        super().__init__(
            f"Fewer than {required} vertices provided to {spline_name}",
            details={"vertices": vertex_count, "required": required},
        )


class ConfigNotFoundError(ConfigurationError):
    """Configuration file not found."""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file not found: {config_path}",
            details={"path": config_path},
        )


class ConfigValidationError(ConfigurationError):
    """Configuration validation failed."""

    def __init__(self, key: str, reason: str, value: Any = None):
        details = {"key": key, "reason": reason}
        if value is not None:
            details["value"] = str(value)
        super().__init__(
            f"Invalid configuration for '{key}': {reason}",
            details=details,
        )


# =============================================================================
# Access Errors
# =============================================================================


class VertexIndexError(SplineError, IndexError):
    """Vertex index out of range."""

    def __init__(self, index: int, vertex_count: int):
        super().__init__(
            f"Vertex index {index} out of range",
            details={"index": index, "count": vertex_count},
        )


class ControlPointIndexError(SplineError, IndexError):
    """Control point index out of range."""

    def __init__(self, index: int, control_count: int):
        super().__init__(
            f"Control point index {index} out of range",
            details={"index": index, "count": control_count},
        )


class UnsupportedOperationError(SplineError):
    """Operation is not applicable to this curve variant or topology."""

    def __init__(self, spline_name: str, reason: str):
        super().__init__(
            f"{spline_name}: {reason}",
            details={"spline": spline_name},
        )
