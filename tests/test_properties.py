"""
Property checks that every curve kind must satisfy.
"""

from __future__ import annotations

import numpy as np
import pytest

from conftest import assert_point
from splinepath import (
    CSpline,
    RigidTransform,
    SplineLerp,
    TransformedSpline,
    cardinal,
    catmull_rom,
    cspline,
    linear,
    simple,
)


def _curves():
    """One of each kind, open and looped where the kind allows it."""
    zigzag = [(0, 0, 0), (2, 1, 0), (3, -1, 1), (6, 0, 0), (7, 2, 0)]
    return {
        "linear-open": linear(False, zigzag),
        "linear-looped": linear(True, zigzag),
        "simple": simple((0, 0, 0), (10, 0, 0), (5, 10, 0)),
        "cspline-open": cspline(False, zigzag),
        "cardinal-open": cardinal(False, 0.3, zigzag),
        "cardinal-looped": cardinal(True, -0.4, zigzag),
        "catmull-rom-open": catmull_rom(False, zigzag),
    }


CURVE_NAMES = list(_curves().keys())


@pytest.fixture(params=CURVE_NAMES)
def any_curve(request):
    return _curves()[request.param]


class TestSegmentPartition:
    """Uniform percents k/S should land on vertex k."""

    @pytest.mark.parametrize("segments", [1, 2, 3, 4, 8])
    def test_open(self, segments):
        spline = linear(False, [(i, 0, 0) for i in range(segments + 1)])
        for k in range(segments + 1):
            segment = spline.get_segment(k / segments)
            assert segment.vertex_a == min(k, segments - 1)
            # The last percent sits at the end of the final segment
            assert segment.interpolation == (1.0 if k == segments else 0.0)

    @pytest.mark.parametrize("segments", [2, 4, 8])
    def test_looped(self, segments):
        spline = linear(True, [(np.cos(i), np.sin(i), 0) for i in range(segments)])
        for k in range(segments):
            segment = spline.get_segment(k / segments)
            assert segment.vertex_a == k
            assert segment.vertex_b == (k + 1) % segments
            assert segment.interpolation == 0.0


class TestArcLengthMonotonicity:
    """Markers should be non-decreasing and end at 1."""

    @pytest.mark.parametrize("precise", [False, True])
    def test_tiers(self, any_curve, precise):
        any_curve.process()
        entries = any_curve.table.entries(precise)
        assert np.all(np.diff(entries[:, 0]) >= 0)
        assert entries[-1, 0] + entries[-1, 1] == pytest.approx(1.0)


class TestRoundTrip:
    """transform_percent should undo inv_transform_percent."""

    @pytest.mark.parametrize("lerp", [SplineLerp.DIRECT, SplineLerp.PRECISE])
    def test_round_trip(self, any_curve, lerp):
        for p in (0.1, 0.37, 0.5, 0.73, 0.9):
            arc = any_curve.inv_transform_percent(p, lerp)
            assert any_curve.transform_percent(arc, lerp) == pytest.approx(p, abs=1e-9)

    def test_transform_is_monotonic(self, any_curve):
        """Larger arc percents should never map to smaller uniform percents."""
        values = [any_curve.transform_percent(p, SplineLerp.PRECISE) for p in np.linspace(0, 1, 41)[:-1]]
        assert np.all(np.diff(values) >= -1e-12)


class TestLoopedWrap:
    """point(p) and point(p + 1) should coincide on looped curves."""

    @pytest.mark.parametrize("name", ["linear-looped", "cardinal-looped"])
    def test_wrap(self, name):
        spline = _curves()[name]
        for p in (0.0, 0.125, 0.5, 0.875):
            assert_point(spline.get_point(p + 1.0), spline.get_point(p))
            assert_point(spline.get_point(p - 1.0), spline.get_point(p))


class TestTensionZero:
    """Cardinal tension 0 and Catmull-Rom should be the same curve."""

    @pytest.mark.parametrize("looped", [False, True])
    def test_equivalence(self, wave_points, looped):
        a = CSpline()
        a.set_as_cardinal(0)
        a.set_looped(looped)
        a.set_vertices(wave_points)
        b = CSpline()
        b.set_as_catmull_rom()
        b.set_looped(looped)
        b.set_vertices(wave_points)
        np.testing.assert_array_equal(a.get_tangents(), b.get_tangents())


class TestScenarios:
    """Worked examples."""

    def test_corner_polyline(self, corner_linear):
        assert corner_linear.get_direct_distance() == pytest.approx(20.0)
        assert_point(corner_linear.get_point(0.5), (10, 0, 0))

    def test_arch_endpoints(self, arch_simple):
        assert_point(arch_simple.get_point(0.0), (0, 0, 0))
        assert_point(arch_simple.get_point(1.0), (10, 0, 0))

    def test_wave_lengths(self, wave_catmull_rom):
        assert wave_catmull_rom.get_distance() >= wave_catmull_rom.get_direct_distance()
        assert wave_catmull_rom.get_direct_distance() == pytest.approx(2.0 + np.sqrt(2.0))


class TestWrapperTransparency:
    """An identity wrapper should match its curve for every query."""

    def test_identity(self, any_curve):
        view = TransformedSpline(RigidTransform.identity(), any_curve)
        for p in np.linspace(-0.2, 1.2, 15):
            assert_point(view.get_point(p), any_curve.get_point(p))
            assert_point(view.get_direction(p), any_curve.get_direction(p))
        for lerp in SplineLerp:
            assert view.transform_percent(0.4, lerp) == any_curve.transform_percent(0.4, lerp)
            assert view.inv_transform_percent(0.4, lerp) == any_curve.inv_transform_percent(0.4, lerp)
        assert view.get_direct_distance() == any_curve.get_direct_distance()
        assert view.vertex_count() == any_curve.vertex_count()
        assert view.control_count() == any_curve.control_count()
        assert view.is_looped() == any_curve.is_looped()
