"""Unit tests for curve fitting."""

import math

import pytest

from topomap.core.curves import (
    closed_basis_curve_points,
    control_points_from_tangents,
    fit_closed_curve,
    fit_open_curve,
    monotone_tangents,
)
from topomap.core.polygon import point_in_polygon
from topomap.domain import Point


class TestMonotoneTangents:
    """Tests for monotone_tangents."""

    def test_straight_line(self) -> None:
        """Equal secants give equal tangents along the line."""
        tangents = monotone_tangents([Point(0, 0), Point(1, 1), Point(2, 2)])
        for t in tangents:
            assert t.x == pytest.approx(1 / 6)
            assert t.y == pytest.approx(1 / 6)

    def test_flat_secant_flattens_neighbours(self) -> None:
        """A horizontal run forces horizontal tangents at both its ends."""
        tangents = monotone_tangents([Point(0, 0), Point(1, 0), Point(2, 5)])
        assert tangents[0].y == 0
        assert tangents[1].y == 0
        assert tangents[1].x == pytest.approx(1 / 3)
        assert tangents[2].y != 0

    def test_overshoot_limited(self) -> None:
        """Steep neighbouring slopes are scaled back."""
        points = [Point(0, 0), Point(1, 1), Point(2, 10), Point(3, 11)]
        tangents = monotone_tangents(points)
        assert all(math.isfinite(t.x) and math.isfinite(t.y) for t in tangents)

    def test_vertical_secant_is_finite(self) -> None:
        """Coincident x coordinates never produce NaN or infinity."""
        tangents = monotone_tangents([Point(0, 0), Point(0, 5), Point(1, 6)])
        for t in tangents:
            assert math.isfinite(t.x)
            assert math.isfinite(t.y)

    def test_degenerate(self) -> None:
        assert monotone_tangents([]) == []
        assert monotone_tangents([Point(3, 3)]) == [Point(0.0, 0.0)]


class TestControlPoints:
    """Tests for control_points_from_tangents."""

    def test_count(self) -> None:
        """Each segment gets two handles."""
        for n in (2, 3, 7):
            points = [Point(i, (i * 7) % 5) for i in range(n)]
            cps = control_points_from_tangents(points, monotone_tangents(points))
            assert len(cps) == 2 * (n - 1)

    def test_handles_along_line(self) -> None:
        points = [Point(0, 0), Point(1, 1), Point(2, 2)]
        cps = control_points_from_tangents(points, monotone_tangents(points))
        assert cps[0].x == pytest.approx(1 / 6)
        assert cps[1].x == pytest.approx(5 / 6)
        assert cps[1].y == pytest.approx(5 / 6)

    def test_fit_open_curve(self) -> None:
        points = [Point(0, 0), Point(1, 1), Point(2, 0)]
        curve = fit_open_curve(points)
        assert curve.points == points
        assert len(curve.control_points) == 4
        assert fit_open_curve([Point(0, 0)]).control_points == []


class TestClosedBasisCurve:
    """Tests for closed B-spline conversion."""

    def test_square(self, square) -> None:
        """n control vertices give n + 1 knots and 2n handles."""
        knots, controls = closed_basis_curve_points(square)
        assert len(knots) == 5
        assert len(controls) == 8

    def test_closed(self, square) -> None:
        """The last knot coincides with the first."""
        knots, _ = closed_basis_curve_points(square)
        assert knots[-1] == knots[0]
        assert knots[0].x == pytest.approx(50 / 6)
        assert knots[0].y == pytest.approx(10 / 6)

    def test_curve_stays_inside_control_polygon(self, square) -> None:
        """B-splines lie in the convex hull of their control points."""
        curve = fit_closed_curve(square)
        for p in curve.to_polyline(tolerance=0.1):
            assert -1e-9 <= p.x <= 10 + 1e-9
            assert -1e-9 <= p.y <= 10 + 1e-9
        assert point_in_polygon(square, curve.points[0])

    def test_too_few_points(self) -> None:
        """Triangles and smaller give no curve."""
        triangle = [Point(0, 0), Point(10, 0), Point(5, 5)]
        assert closed_basis_curve_points(triangle) == ([], [])
        assert fit_closed_curve(triangle).is_empty()

    def test_fit_closed_curve_segments(self, square) -> None:
        curve = fit_closed_curve(square)
        assert curve.segment_count() == 4
