"""Summary statistics for finished boundary geometry."""

import numpy as np

from .models import BoundaryStats

# 1 degree ~ 111 km, applied to both axes without a latitude correction
KM_PER_DEGREE = 111.0


def flatten_coordinates(polygons) -> list[list[float]]:
    return [coord for polygon in polygons for ring in polygon for coord in ring]


def compute_stats(polygons) -> BoundaryStats:
    """Point count, bounding box and approximate area of a MultiPolygon.

    The area is the bounding box area in km^2, not the polygon area.
    """
    coords = flatten_coordinates(polygons)
    if not coords:
        raise ValueError("Cannot compute statistics for empty geometry")

    pts = np.asarray(coords, dtype=float)
    min_lng, min_lat = pts.min(axis=0)
    max_lng, max_lat = pts.max(axis=0)
    area_km2 = abs((max_lng - min_lng) * (max_lat - min_lat)) * KM_PER_DEGREE * KM_PER_DEGREE

    return BoundaryStats(
        point_count=len(coords),
        min_lng=float(min_lng),
        min_lat=float(min_lat),
        max_lng=float(max_lng),
        max_lat=float(max_lat),
        area_km2=float(area_km2),
    )
