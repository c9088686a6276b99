"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import pytest

from tests.auxiliaries import (
    feature_collection,
    polygon_feature,
    square_ring,
    write_zipped_geojson,
    zero_height_ring,
)


def pytest_configure(config):
    """
    Register custom markers for different types of tests.
    """
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


@pytest.fixture
def single_zone_document():
    """one valid square for "Test/Zone" and a zero height ring of another zone"""
    return feature_collection(
        polygon_feature("Test/Zone", square_ring(0.0, 0.0, 1.0)),
        polygon_feature("Other/Zone", zero_height_ring(5.0, 5.0)),
    )


@pytest.fixture
def single_zone_archive(tmp_path, single_zone_document):
    return write_zipped_geojson(
        single_zone_document, tmp_path / "tz-combined-with-oceans.json.zip"
    )
