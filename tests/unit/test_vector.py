"""Unit tests for vector arithmetic."""

import math

import pytest

from topomap.core.vector import (
    add,
    angle_between,
    centroid,
    cross,
    distance,
    distance_squared,
    dot,
    is_close,
    is_zero,
    magnitude,
    normalize,
    scale,
    subtract,
    vector_between,
)
from topomap.domain import Point
from topomap.exceptions import GeometryError, ZeroLengthVectorError


class TestArithmetic:
    """Tests for basic vector operations."""

    def test_add_many(self) -> None:
        assert add(Point(1, 2), Point(3, 4), Point(-1, -1)) == Point(3, 5)

    def test_add_nothing(self) -> None:
        assert add() == Point(0.0, 0.0)

    def test_subtract_and_between(self) -> None:
        """vector_between(p1, p2) is p2 - p1."""
        p1, p2 = Point(1, 1), Point(4, 5)
        assert subtract(p2, p1) == Point(3, 4)
        assert vector_between(p1, p2) == Point(3, 4)

    def test_scale(self) -> None:
        assert scale(Point(1, -2), 3) == Point(3, -6)

    def test_dot_and_cross(self) -> None:
        assert dot(Point(1, 2), Point(3, 4)) == 11
        assert cross(Point(1, 0), Point(0, 1)) == 1
        assert cross(Point(0, 1), Point(1, 0)) == -1

    def test_magnitude_and_distance(self) -> None:
        assert magnitude(Point(3, 4)) == 5
        assert distance(Point(1, 1), Point(4, 5)) == 5
        assert distance_squared(Point(1, 1), Point(4, 5)) == 25

    def test_centroid(self) -> None:
        square = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        assert centroid(square) == Point(5, 5)


class TestNormalize:
    """Tests for normalize."""

    def test_unit_length(self) -> None:
        n = normalize(Point(3, 4))
        assert n.x == pytest.approx(0.6)
        assert n.y == pytest.approx(0.8)

    def test_zero_vector_raises(self) -> None:
        """The zero vector has no direction."""
        with pytest.raises(ZeroLengthVectorError):
            normalize(Point(0, 0))

    def test_zero_vector_error_hierarchy(self) -> None:
        """ZeroLengthVectorError is both a GeometryError and a ValueError."""
        with pytest.raises(GeometryError):
            normalize(Point(0, 0))
        with pytest.raises(ValueError):
            normalize(Point(0, 0))


class TestAngleBetween:
    """Tests for signed angles."""

    def test_quarter_turns(self) -> None:
        assert angle_between(Point(1, 0), Point(0, 1)) == pytest.approx(math.pi / 2)
        assert angle_between(Point(0, 1), Point(1, 0)) == pytest.approx(-math.pi / 2)

    def test_half_turn_is_positive_pi(self) -> None:
        """The range is (-pi, pi]."""
        assert angle_between(Point(1, 0), Point(-1, 0)) == pytest.approx(math.pi)

    def test_wraparound(self) -> None:
        """Angles across the negative x axis wrap to a small value."""
        angle = angle_between(Point(-1, -0.001), Point(-1, 0.001))
        assert angle == pytest.approx(-0.002, abs=1e-6)


class TestTolerance:
    """Tests for tolerant comparisons."""

    def test_is_zero(self) -> None:
        assert is_zero(0.0)
        assert is_zero(1e-12)
        assert not is_zero(1e-6)

    def test_is_close(self) -> None:
        assert is_close(Point(1, 1), Point(1 + 1e-12, 1 - 1e-12))
        assert not is_close(Point(1, 1), Point(1.001, 1))
