"""Tests for domain models to verify they work correctly."""

import pytest

from topomap.domain import (
    Curve,
    Intersection,
    Interval,
    Layer,
    Point,
    Pointset,
    Segment,
    WindingDirection,
)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        p = Point(100.0, 200.0)
        assert p.to_tuple() == (100.0, 200.0)
        assert p.to_list() == [100.0, 200.0]

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(100.0, 200.0)
        p2 = Point.from_dict(p1.to_dict())
        assert p2 == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_point_hashable(self) -> None:
        """Equal points collapse in sets."""
        assert len({Point(1.0, 2.0), Point(1.0, 2.0), Point(2.0, 1.0)}) == 2


class TestSmallTypes:
    """Tests for Segment, Interval and Intersection."""

    def test_interval_validity(self) -> None:
        assert Interval(0.0, 1.0).is_valid()
        assert Interval(0.5, 0.5).is_valid()
        assert not Interval(1.0, 0.0).is_valid()

    def test_segment_is_directed(self) -> None:
        a, b = Point(0, 0), Point(1, 1)
        assert Segment(a, b) != Segment(b, a)

    def test_intersection_fields(self) -> None:
        inters = Intersection(0.25, 0.75)
        assert inters.u == 0.25
        assert inters.v == 0.75

    def test_winding_values_distinct(self) -> None:
        assert WindingDirection.CLOCKWISE != WindingDirection.COUNTER_CLOCKWISE


class TestCurve:
    """Tests for Curve class."""

    @pytest.fixture
    def straight_curve(self) -> Curve:
        """Two segments along the x axis with handles on the line."""
        return Curve(
            points=[Point(0, 0), Point(3, 0), Point(6, 0)],
            control_points=[Point(1, 0), Point(2, 0), Point(4, 0), Point(5, 0)],
        )

    def test_empty_curve(self) -> None:
        """A curve needs two points to be drawable."""
        assert Curve().is_empty()
        assert Curve(points=[Point(0, 0)]).is_empty()
        assert Curve().segment_count() == 0

    def test_segments(self, straight_curve: Curve) -> None:
        """Segments pair knots with their two handles."""
        segs = list(straight_curve.segments())
        assert len(segs) == 2
        assert segs[1] == (Point(3, 0), Point(4, 0), Point(5, 0), Point(6, 0))

    def test_point_at_endpoints(self, straight_curve: Curve) -> None:
        """t=0 and t=1 hit the segment's knots."""
        assert straight_curve.point_at(0, 0.0) == Point(0, 0)
        assert straight_curve.point_at(0, 1.0) == Point(3, 0)

    def test_point_at_midpoint(self, straight_curve: Curve) -> None:
        """Evenly spaced handles on a line give a linear parametrization."""
        mid = straight_curve.point_at(1, 0.5)
        assert mid.x == pytest.approx(4.5)
        assert mid.y == pytest.approx(0.0)

    def test_to_polyline_straight(self, straight_curve: Curve) -> None:
        """A straight curve flattens to its knots."""
        assert straight_curve.to_polyline() == [Point(0, 0), Point(3, 0), Point(6, 0)]

    def test_to_polyline_curved(self) -> None:
        """A bent segment is subdivided and keeps its endpoints."""
        curve = Curve(
            points=[Point(0, 0), Point(100, 0)],
            control_points=[Point(0, 100), Point(100, 100)],
        )
        polyline = curve.to_polyline(tolerance=0.5)
        assert len(polyline) > 2
        assert polyline[0] == Point(0, 0)
        assert polyline[-1] == Point(100, 0)

    def test_serialization(self, straight_curve: Curve) -> None:
        """Curves serialize to points and controlPoints arrays."""
        data = straight_curve.to_dict()
        assert data["points"][1] == [3, 0]
        assert len(data["controlPoints"]) == 4
        assert Curve.from_dict(data) == straight_curve


class TestLayer:
    """Tests for Layer class."""

    def test_color_hex(self) -> None:
        """Test color formatting."""
        layer = Layer(amount=0.0, color=0xA5EB34)
        assert layer.color_hex == "#a5eb34"

    def test_point_count(self) -> None:
        """Knots of all curves are counted."""
        curve = Curve(points=[Point(0, 0), Point(1, 0), Point(1, 1)])
        layer = Layer(amount=20.0, color=0, curves=[curve, curve])
        assert layer.point_count() == 6

    def test_from_dict_accepts_hex_color(self) -> None:
        """Layer files store colors as #rrggbb strings."""
        layer = Layer(
            amount=20.0,
            color=0x34EB52,
            polygons=[[Point(0, 0), Point(1, 0), Point(1, 1)]],
        )
        data = layer.to_dict()
        assert data["color"] == "#34eb52"

        restored = Layer.from_dict(data)
        assert restored.color == 0x34EB52
        assert restored.polygons == layer.polygons
        assert restored.amount == 20.0


class TestPointsetModel:
    """Tests for Pointset construction and serialization."""

    def test_zero_diffs_filled(self) -> None:
        """Missing diffs default to zero, two per segment."""
        ps = Pointset(points=[Point(0, 0), Point(1, 1), Point(2, 0)])
        assert len(ps.control_point_diffs) == 4
        assert all(d == Point(0.0, 0.0) for d in ps.control_point_diffs)

    def test_empty(self) -> None:
        """Test empty pointset."""
        ps = Pointset()
        assert ps.is_empty()
        assert len(ps) == 0
        assert ps.control_point_diffs == []
        assert ps.base_control_points() == []

    def test_serialization(self) -> None:
        """Test pointset serialization and deserialization."""
        ps = Pointset(
            points=[Point(0, 0), Point(10, 5)],
            control_point_diffs=[Point(1, 1), Point(-1, 0)],
        )
        restored = Pointset.from_dict(ps.to_dict())
        assert restored.points == ps.points
        assert restored.control_point_diffs == ps.control_point_diffs
