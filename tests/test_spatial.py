"""
Unit Tests for Spatial Module (geocluster/spatial)

Tests geometry primitives, extent helpers, and the in-memory feature store.
"""

from unittest.mock import Mock

import pytest

from geocluster.spatial import (
    Feature,
    LineString,
    Point,
    VectorStore,
    buffer_extent,
    create_extent_from_coordinate,
    extent_of,
    intersects,
)

from tests.conftest import make_line, make_point, make_points


# ==============================================================================
# Geometry Tests
# ==============================================================================

class TestGeometry:
    """Test points, line strings and extent helpers."""

    def test_point_coordinates_and_extent(self):
        p = Point(3.0, -2.0)
        assert p.coordinates == (3.0, -2.0)
        assert p.extent == (3.0, -2.0, 3.0, -2.0)

    def test_line_string_extent(self):
        line = LineString(((0, 5), (10, -5), (4, 2)))
        assert line.extent == (0.0, -5.0, 10.0, 5.0)

    def test_line_string_needs_two_coordinates(self):
        with pytest.raises(ValueError, match="at least 2"):
            LineString(((1, 1),))

    def test_buffer_extent(self):
        extent = create_extent_from_coordinate((10, 20))
        assert extent == (10, 20, 10, 20)
        assert buffer_extent(extent, 5) == (5, 15, 15, 25)

    def test_intersects_is_edge_inclusive(self):
        assert intersects((0, 0, 10, 10), (10, 10, 20, 20))
        assert intersects((0, 0, 10, 10), (2, 2, 3, 3))
        assert not intersects((0, 0, 10, 10), (10.5, 0, 20, 10))

    def test_extent_of_missing_geometry(self):
        assert extent_of(None) is None
        assert extent_of(Point(1, 2)) == (1, 2, 1, 2)


# ==============================================================================
# Feature Tests
# ==============================================================================

class TestFeature:
    """Test feature identity and properties."""

    def test_identity_semantics(self):
        a = Feature(Point(0, 0), {"name": "x"})
        b = Feature(Point(0, 0), {"name": "x"})

        assert a != b
        assert len({a, b}) == 2
        assert a in {a}

    def test_get_and_set(self):
        feature = make_point(1, 1, name="cafe")
        assert feature.get("name") == "cafe"
        assert feature.get("missing", 42) == 42

        feature.set("rating", 4.5)
        assert feature.properties["rating"] == 4.5


# ==============================================================================
# Store Tests
# ==============================================================================

class TestVectorStore:
    """Test the in-memory feature store."""

    def test_preserves_insertion_order(self):
        features = make_points([(5, 5), (0, 0), (3, 3)])
        store = VectorStore(features)

        assert store.get_features() == features
        assert list(store) == features
        assert len(store) == 3

    def test_get_features_returns_copy(self, three_point_store):
        snapshot = three_point_store.get_features()
        snapshot.clear()
        assert len(three_point_store) == 3

    def test_extent_query(self, three_point_store):
        a, b, c = three_point_store.get_features()

        assert three_point_store.get_features_in_extent((-1, -1, 2, 1)) == [a, b]
        assert three_point_store.get_features_in_extent((50, 50, 150, 150)) == [c]
        assert three_point_store.get_features_in_extent((10, 10, 20, 20)) == []

    def test_extent_query_includes_boundary(self, three_point_store):
        a = three_point_store.get_features()[0]
        assert a in three_point_store.get_features_in_extent((0, 0, 0, 0))

    def test_extent_query_on_empty_store(self, empty_store):
        assert empty_store.get_features_in_extent((0, 0, 1, 1)) == []

    def test_line_strings_match_by_bounding_box(self):
        line = make_line((0, 0), (10, 10))
        store = VectorStore([line])

        assert store.get_features_in_extent((9, 0, 11, 1)) == [line]

    def test_features_without_geometry_never_match(self):
        bare = Feature(properties={"name": "nowhere"})
        point = make_point(0, 0)
        store = VectorStore([bare, point])

        assert store.get_features_in_extent((-1e9, -1e9, 1e9, 1e9)) == [point]

    def test_query_sees_added_features(self, three_point_store):
        new = make_point(0.5, 0.5)
        three_point_store.add_feature(new)

        assert new in three_point_store.get_features_in_extent((0, 0, 1, 1))

    def test_query_follows_moved_geometry(self, three_point_store):
        a, b, c = three_point_store.get_features()
        assert three_point_store.get_features_in_extent((-1, -1, 2, 1)) == [a, b]

        b.geometry = Point(500, 500)

        assert three_point_store.get_features_in_extent((-1, -1, 2, 1)) == [a]
        assert three_point_store.get_features_in_extent((499, 499, 501, 501)) == [b]

    def test_add_features_notifies_once(self, empty_store):
        listener = Mock()
        empty_store.on_change(listener)

        empty_store.add_features(make_points([(0, 0), (1, 1), (2, 2)]))

        listener.assert_called_once_with(empty_store)

    def test_add_empty_batch_is_silent(self, empty_store):
        listener = Mock()
        empty_store.on_change(listener)

        empty_store.add_features([])

        listener.assert_not_called()

    def test_remove_feature(self, three_point_store):
        listener = Mock()
        three_point_store.on_change(listener)
        target = three_point_store.get_features()[1]

        assert three_point_store.remove_feature(target) is True
        assert target not in three_point_store.get_features()
        assert three_point_store.remove_feature(target) is False
        assert listener.call_count == 1

    def test_clear(self, three_point_store):
        listener = Mock()
        three_point_store.on_change(listener)

        three_point_store.clear()

        assert len(three_point_store) == 0
        assert three_point_store.get_features_in_extent((0, 0, 200, 200)) == []
        listener.assert_called_once()

    def test_off_change(self, empty_store):
        listener = Mock()
        empty_store.on_change(listener)
        empty_store.off_change(listener)
        empty_store.off_change(listener)

        empty_store.add_feature(make_point(0, 0))

        listener.assert_not_called()

    def test_load_features_calls_loader(self):
        loader = Mock()
        store = VectorStore(loader=loader)

        store.load_features((0, 0, 10, 10), 2.0)

        loader.assert_called_once_with(store, (0, 0, 10, 10), 2.0)

    def test_load_features_without_loader_is_noop(self, three_point_store):
        three_point_store.load_features((0, 0, 1, 1), 1.0)
        assert len(three_point_store) == 3

    def test_metadata(self):
        store = VectorStore(extent=(0, 0, 100, 100), projection="EPSG:3857")
        assert store.extent == (0, 0, 100, 100)
        assert store.projection == "EPSG:3857"
