"""Build LocationBounds snapshots from stored records or a fallback circle."""

import math

from geo_compare.models import (
    BoundaryFeature,
    BoundaryProperties,
    BoundaryRecord,
    LocationBounds,
)
from .stats import KM_PER_DEGREE


def _geometry_point_count(geometry: dict) -> int:
    coords = geometry.get("coordinates", [])
    if geometry.get("type") == "Polygon":
        return sum(len(ring) for ring in coords)
    if geometry.get("type") == "MultiPolygon":
        return sum(len(ring) for polygon in coords for ring in polygon)
    return 0


def location_bounds_from_record(record: BoundaryRecord) -> LocationBounds:
    """Rehydrate a stored record; the bbox comes from bbox polygon corners 0 and 2."""
    center = (record.center_lng, record.center_lat)
    ring = record.bbox["coordinates"][0]
    west, south = ring[0]
    east, north = ring[2]

    return LocationBounds(
        boundary=BoundaryFeature(
            geometry=record.geometry,
            properties=BoundaryProperties(
                name=record.name,
                area=record.area_km2,
                center=center,
            ),
        ),
        center=center,
        bbox=(west, south, east, north),
        area_km2=record.area_km2,
        population=record.population,
        coordinate_count=_geometry_point_count(record.geometry),
    )


def fallback_bounds(
    name: str, center: tuple[float, float], radius: float = 0.1, points: int = 32,
) -> LocationBounds:
    """Approximate an unknown boundary as a circle of ``radius`` degrees."""
    lng, lat = center
    ring = []
    for i in range(points + 1):
        angle = (i / points) * 2 * math.pi
        ring.append([lng + radius * math.cos(angle), lat + radius * math.sin(angle)])

    area = math.pi * (radius * KM_PER_DEGREE) ** 2
    return LocationBounds(
        boundary=BoundaryFeature(
            geometry={"type": "Polygon", "coordinates": [ring]},
            properties=BoundaryProperties(name=name, area=area, center=center),
        ),
        center=center,
        bbox=(lng - radius, lat - radius, lng + radius, lat + radius),
        area_km2=area,
        coordinate_count=len(ring),
    )
