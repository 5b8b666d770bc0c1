"""
Tests for bounding box computation.
"""

import pytest
from plykit import examples
from plykit.bounds import Bounds, compute_bounds
from plykit.errors import UsageError
from plykit.readers import BufferedElementReader, ListElementReader
from plykit.schema import ElementType, ScalarType, scalar_property


class TestComputeBounds:
    """Test compute_bounds()."""

    def test_tetrahedron(self):
        bounds = compute_bounds(examples.build_tetrahedron()[0])
        assert bounds == Bounds(-1, 1, -1, 1, -1, 1)
        assert bounds.center == (0.0, 0.0, 0.0)
        assert bounds.size == (2, 2, 2)

    def test_single_point(self):
        vertex_reader, _ = examples.build_mesh([(3, -2, 0.5)], [])
        bounds = compute_bounds(vertex_reader)
        assert bounds == Bounds(3, 3, -2, -2, 0.5, 0.5)

    def test_empty_stream(self):
        assert compute_bounds(examples.build_mesh([], [])[0]) is None

    def test_buffer_is_reset_first(self):
        """A partly read buffer still yields the bounds of every vertex."""
        vertices = BufferedElementReader(examples.build_two_faces()[0])
        vertices.read_element()
        vertices.read_element()
        bounds = compute_bounds(vertices)
        assert bounds.min_x == 0.0
        assert bounds.max_z == pytest.approx(0.70710678)

    def test_missing_coordinates(self):
        t = ElementType("vertex", scalar_property("x", ScalarType.FLOAT))
        with pytest.raises(UsageError):
            compute_bounds(ListElementReader(t, []))


class TestBounds:
    """Test the Bounds value object."""

    def test_contains(self):
        bounds = Bounds(0, 1, 0, 1, 0, 1)
        assert bounds.contains(0.5, 0.5, 0.5)
        assert bounds.contains(1, 1, 1)
        assert not bounds.contains(1.5, 0.5, 0.5)
