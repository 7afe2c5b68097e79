"""Tests for core config and return models."""
import pytest
from pydantic import ValidationError


class TestQualityThresholds:
    def test_defaults(self):
        from geo_compare.core.models import QualityThresholds
        t = QualityThresholds()
        assert t.min_area_ratio == 0.01
        assert t.max_polygons == 10
        assert t.max_fragmentation_ratio == 0.8
        assert t.min_points == 50
        assert t.tolerance == 1e-4

    def test_ratio_above_one_rejected(self):
        from geo_compare.core.models import QualityThresholds
        with pytest.raises(ValidationError):
            QualityThresholds(max_fragmentation_ratio=1.5)

    def test_zero_tolerance_rejected(self):
        from geo_compare.core.models import QualityThresholds
        with pytest.raises(ValidationError):
            QualityThresholds(tolerance=0)

    def test_assignment_validated(self):
        from geo_compare.core.models import QualityThresholds
        t = QualityThresholds()
        with pytest.raises(ValidationError):
            t.max_polygons = 0


class TestQualityReport:
    def test_kept_cannot_exceed_original(self):
        from geo_compare.core.models import QualityReport
        with pytest.raises(ValidationError):
            QualityReport(
                is_valid=True, polygons=[], original_count=1, kept_count=2,
                fragmentation_ratio=0.0,
            )


class TestBoundaryStats:
    def test_center_and_bbox_polygon(self):
        from geo_compare.core.models import BoundaryStats
        s = BoundaryStats(
            point_count=5, min_lng=0.0, min_lat=0.0, max_lng=2.0, max_lat=1.0, area_km2=1.0,
        )
        assert s.center == (1.0, 0.5)
        assert s.bbox == (0.0, 0.0, 2.0, 1.0)
        ring = s.bbox_polygon()["coordinates"][0]
        assert ring[0] == ring[-1] == [0.0, 0.0]
        assert ring[2] == [2.0, 1.0]
