"""
Tests for geovalidate.

Test modules:
- test_position.py / test_bbox.py: Position and bounding box models
- test_geometry.py: Geometry validation
- test_feature.py: Feature and FeatureCollection validation
- test_dispatcher.py: Top-level validate() entry point
- test_diagnostics.py, test_config.py, test_errors.py, test_logger.py: Support modules

Running tests:
    pip install -e ".[test]"
    pytest tests/ -v
"""
