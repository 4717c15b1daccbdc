"""
Pytest configuration and fixtures for splinepath tests.

This module provides shared fixtures for testing:
- Configuration fixtures
- Curve fixtures
- Point set fixtures
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

import numpy as np
import pytest


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Start every test from default configuration with no env overrides."""
    from splinepath.config import reset_config

    for key in list(os.environ):
        if key.startswith("SPLINEPATH_") and not key.startswith("SPLINEPATH_LOG"):
            monkeypatch.delenv(key)

    reset_config()
    yield
    reset_config()


@pytest.fixture
def default_config():
    """Create typed default configuration."""
    from splinepath.config import SplineConfig

    return SplineConfig()


# =============================================================================
# Point Set Fixtures
# =============================================================================


@pytest.fixture
def corner_points() -> List[tuple]:
    """Two equal legs with a right-angle corner."""
    return [(0, 0, 0), (10, 0, 0), (10, 10, 0)]


@pytest.fixture
def uneven_points() -> List[tuple]:
    """Two legs of length 30 and 10."""
    return [(0, 0, 0), (30, 0, 0), (30, 10, 0)]


@pytest.fixture
def square_points() -> List[tuple]:
    """Unit square, counter-clockwise."""
    return [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]


@pytest.fixture
def wave_points() -> List[tuple]:
    """Four points for a short S-shaped cardinal curve."""
    return [(0, 0, 0), (1, 0, 0), (2, 1, 0), (3, 1, 0)]


# =============================================================================
# Curve Fixtures
# =============================================================================


@pytest.fixture
def corner_linear(corner_points):
    """Open linear curve around a corner."""
    from splinepath import linear

    return linear(False, corner_points)


@pytest.fixture
def looped_square(square_points):
    """Closed linear unit square."""
    from splinepath import linear

    return linear(True, square_points)


@pytest.fixture
def arch_simple():
    """Quadratic bezier arching over the x axis."""
    from splinepath import simple

    return simple((0, 0, 0), (10, 0, 0), (5, 10, 0))


@pytest.fixture
def wave_catmull_rom(wave_points):
    """Open Catmull-Rom curve with controls on the end vertices."""
    from splinepath import catmull_rom

    return catmull_rom(False, wave_points)


# =============================================================================
# Temporary Files Fixtures
# =============================================================================


@pytest.fixture
def temp_config_file(tmp_path) -> Path:
    """Create a temporary configuration file."""
    import yaml

    config = {
        "evaluation": {
            "subdivisions": 4,
            "lookahead": 0.01,
        },
        "host": {
            "tension": 0.5,
        },
    }

    config_path = tmp_path / "test_config.yml"
    with open(config_path, "w") as f:
        yaml.dump(config, f)

    return config_path


# =============================================================================
# Helpers
# =============================================================================


def assert_point(actual, expected, atol: float = 1e-9) -> None:
    """Compare a returned point against a 2D or 3D expectation."""
    from splinepath.types import as_point

    np.testing.assert_allclose(actual, as_point(expected), atol=atol)

