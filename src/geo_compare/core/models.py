"""Pydantic config and return models for core computation functions."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from geo_compare.models import BoundaryRecord


class QualityThresholds(BaseModel):
    """Tunable limits for the fragmentation gate and ring assembly."""
    model_config = ConfigDict(validate_assignment=True)

    min_area_ratio: float = Field(default=0.01, ge=0, lt=1)
    max_polygons: int = Field(default=10, ge=1)
    max_fragmentation_ratio: float = Field(default=0.8, gt=0, le=1)
    min_points: int = Field(default=50, ge=0)
    tolerance: float = Field(default=1e-4, gt=0, le=0.1)


class QualityReport(BaseModel):
    """Return type for check_quality."""
    is_valid: bool
    polygons: list[list[list[list[float]]]]
    original_count: int = Field(ge=0)
    kept_count: int = Field(ge=0)
    fragmentation_ratio: float = Field(ge=0, le=1)

    @model_validator(mode="after")
    def kept_must_not_exceed_original(self) -> "QualityReport":
        if self.kept_count > self.original_count:
            raise ValueError(
                f"kept_count ({self.kept_count}) exceeds original_count ({self.original_count})"
            )
        return self


class BoundaryStats(BaseModel):
    """Return type for compute_stats."""
    point_count: int = Field(ge=0)
    min_lng: float
    min_lat: float
    max_lng: float
    max_lat: float
    area_km2: float = Field(ge=0)

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_lng + self.max_lng) / 2, (self.min_lat + self.max_lat) / 2)

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        return (self.min_lng, self.min_lat, self.max_lng, self.max_lat)

    def bbox_polygon(self) -> dict:
        w, s, e, n = self.bbox
        return {
            "type": "Polygon",
            "coordinates": [[[w, s], [e, s], [e, n], [w, n], [w, s]]],
        }


class BuiltBoundary(BaseModel):
    """Return type for build_boundary."""
    record: BoundaryRecord
    stats: BoundaryStats
    rings: int = Field(ge=1)
    original_polygons: int = Field(ge=1)
    relation_id: Optional[int] = None
