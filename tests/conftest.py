"""
Pytest configuration and fixtures for geovalidate tests.

This module provides:
- Test environment configuration
- Sample GeoJSON data for testing
"""

import os

import pytest

from geovalidate.config import ValidatorSettings

os.environ.setdefault("LOG_LEVEL", "DEBUG")


# ============================================================================
# Settings Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return ValidatorSettings(_env_file=None)


@pytest.fixture
def strict_settings():
    """Strict profile settings."""
    return ValidatorSettings(_env_file=None, strict=True)


# ============================================================================
# Sample GeoJSON Data Fixtures
# ============================================================================

@pytest.fixture
def sample_point():
    """Sample Point geometry."""
    return {
        "type": "Point",
        "coordinates": [102.0, 0.5]
    }


@pytest.fixture
def sample_point_3d():
    """Sample Point geometry with altitude."""
    return {
        "type": "Point",
        "coordinates": [102.0, 0.5, 12.0]
    }


@pytest.fixture
def sample_linestring():
    """Sample LineString geometry."""
    return {
        "type": "LineString",
        "coordinates": [
            [102.0, 0.0],
            [103.0, 1.0],
            [104.0, 0.0],
            [105.0, 1.0]
        ]
    }


@pytest.fixture
def sample_polygon():
    """Sample Polygon geometry (closed, counter-clockwise ring)."""
    return {
        "type": "Polygon",
        "coordinates": [[
            [100.0, 0.0],
            [101.0, 0.0],
            [101.0, 1.0],
            [100.0, 1.0],
            [100.0, 0.0]  # Closed
        ]]
    }


@pytest.fixture
def sample_polygon_with_hole():
    """Sample Polygon with a clockwise hole."""
    return {
        "type": "Polygon",
        "coordinates": [
            # Exterior ring
            [
                [100.0, 0.0],
                [101.0, 0.0],
                [101.0, 1.0],
                [100.0, 1.0],
                [100.0, 0.0]
            ],
            # Hole
            [
                [100.8, 0.8],
                [100.8, 0.2],
                [100.2, 0.2],
                [100.2, 0.8],
                [100.8, 0.8]
            ]
        ]
    }


@pytest.fixture
def sample_multipoint():
    """Sample MultiPoint geometry."""
    return {
        "type": "MultiPoint",
        "coordinates": [
            [100.0, 0.0],
            [101.0, 1.0]
        ]
    }


@pytest.fixture
def sample_multilinestring():
    """Sample MultiLineString geometry."""
    return {
        "type": "MultiLineString",
        "coordinates": [
            [[100.0, 0.0], [101.0, 1.0]],
            [[102.0, 2.0], [103.0, 3.0]]
        ]
    }


@pytest.fixture
def sample_multipolygon():
    """Sample MultiPolygon geometry."""
    return {
        "type": "MultiPolygon",
        "coordinates": [
            [[[102.0, 2.0], [103.0, 2.0], [103.0, 3.0], [102.0, 3.0], [102.0, 2.0]]],
            [[[100.0, 0.0], [101.0, 0.0], [101.0, 1.0], [100.0, 1.0], [100.0, 0.0]]]
        ]
    }


@pytest.fixture
def sample_geometry_collection(sample_point, sample_linestring):
    """Sample GeometryCollection."""
    return {
        "type": "GeometryCollection",
        "geometries": [sample_point, sample_linestring]
    }


@pytest.fixture
def sample_feature(sample_point):
    """Sample GeoJSON Feature."""
    return {
        "type": "Feature",
        "geometry": sample_point,
        "properties": {"prop0": "value0"}
    }


@pytest.fixture
def sample_feature_collection(sample_point, sample_linestring, sample_polygon):
    """The FeatureCollection example from RFC 7946 section 1.5."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": sample_point,
                "properties": {"prop0": "value0"}
            },
            {
                "type": "Feature",
                "geometry": sample_linestring,
                "properties": {"prop0": "value0", "prop1": 0.0}
            },
            {
                "type": "Feature",
                "geometry": sample_polygon,
                "properties": {"prop0": "value0", "prop1": {"this": "that"}}
            }
        ]
    }


@pytest.fixture
def nested_collection():
    """Builder for `depth` GeometryCollections nested around a Point."""

    def build(depth: int) -> dict:
        geometry = {"type": "Point", "coordinates": [0.0, 0.0]}
        for _ in range(depth):
            geometry = {"type": "GeometryCollection", "geometries": [geometry]}
        return geometry

    return build
