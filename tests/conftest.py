"""Shared fixtures for topomap tests."""

import pytest

from topomap.domain import Point, Polygon


@pytest.fixture
def square() -> Polygon:
    """10x10 square at the origin, clockwise on screen."""
    return [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


@pytest.fixture
def bowtie() -> Polygon:
    """Self-intersecting quadrilateral crossing at (5, 5)."""
    return [Point(0, 0), Point(10, 10), Point(10, 0), Point(0, 10)]
