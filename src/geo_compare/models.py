"""Pydantic domain models for OSM elements, boundary requests and boundaries."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OsmNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class OsmPoint(BaseModel):
    """Inline coordinate embedded in an Overpass ``out geom`` way."""
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class OsmWay(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    nodes: list[int] = Field(default_factory=list)
    geometry: list[Optional[OsmPoint]] = Field(default_factory=list)
    tags: dict = Field(default_factory=dict)


class OsmMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["way", "node", "relation"]
    ref: int
    role: str = ""

    @field_validator("role", mode="before")
    @classmethod
    def missing_role_is_empty(cls, v):
        return "" if v is None else v


class OsmRelation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    members: list[OsmMember] = Field(default_factory=list)
    tags: dict = Field(default_factory=dict)


class BoundaryRequest(BaseModel):
    """A location to fetch from Overpass and store."""
    name: str = Field(min_length=1)
    country: Optional[str] = None
    admin_level: Optional[int] = Field(default=None, ge=1, le=11)
    relation_id: Optional[int] = None
    osm_id: Optional[int] = None
    osm_type: Optional[str] = None


class BoundaryProperties(BaseModel):
    name: str
    area: Optional[float] = None
    center: Optional[tuple[float, float]] = None


class BoundaryFeature(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: dict
    properties: BoundaryProperties


class LocationBounds(BaseModel):
    """Read-model snapshot of one stored boundary, rebuilt on every retrieval."""
    model_config = ConfigDict(frozen=True)

    boundary: BoundaryFeature
    center: tuple[float, float]
    bbox: tuple[float, float, float, float]  # west, south, east, north
    area_km2: Optional[float] = None
    population: Optional[int] = None
    coordinate_count: Optional[int] = None

    @property
    def name(self) -> str:
        return self.boundary.properties.name


class BoundaryRecord(BaseModel):
    """Row written to the boundary store, upserted by normalized name."""
    name: str
    normalized_name: str
    geometry: dict
    bbox: dict
    center_lng: float
    center_lat: float
    area_km2: float
    admin_level: Optional[int] = None
    country_code: Optional[str] = None
    relation_id: Optional[int] = None
    population: Optional[int] = None


class FetchResult(BaseModel):
    name: str
    success: bool
    coordinate_count: Optional[int] = None
    before_points: Optional[int] = None
    after_points: Optional[int] = None
    rings: Optional[int] = None
    area_km2: Optional[float] = None
    relation_id: Optional[int] = None
    error: Optional[str] = None
    message: Optional[str] = None
    existing: Optional[bool] = None
