"""Rescale and move one boundary on top of another for size comparison."""

import math

import numpy as np

from geo_compare.models import LocationBounds


def _area_or_default(bounds: LocationBounds) -> float:
    area = bounds.boundary.properties.area or bounds.area_km2
    return area if area else 1.0


def scale_ratio(base: LocationBounds, overlay: LocationBounds) -> float:
    """Linear factor that gives ``overlay`` the same area as ``base``.

    Missing or zero areas count as 1, so a degenerate input yields an
    unscaled overlay instead of an error.
    """
    return math.sqrt(_area_or_default(base) / _area_or_default(overlay))


def transform_overlay(
    overlay: LocationBounds,
    base_center: tuple[float, float],
    ratio: float = 1.0,
) -> dict:
    """Scale ``overlay`` about its own center, then translate it to ``base_center``.

    Polygon and MultiPolygon geometries are transformed ring by ring; any other
    geometry type is returned untouched. Positions keep any members past
    lng/lat unchanged, and empty rings stay empty.

    Returns:
        GeoJSON Feature dict whose ``properties.center`` is ``base_center``.
    """
    boundary = overlay.boundary
    geometry = boundary.geometry
    geom_type = geometry.get("type")

    if geom_type not in ("Polygon", "MultiPolygon"):
        return boundary.model_dump()

    center = np.asarray(boundary.properties.center or overlay.center, dtype=float)
    target = np.asarray(base_center, dtype=float)

    def transform_ring(ring):
        # Only lng/lat move; extra position members such as altitude ride along
        if not ring:
            return []
        pts = np.asarray([position[:2] for position in ring], dtype=float)
        moved = target + (pts - center) * ratio
        return [[*xy, *position[2:]] for xy, position in zip(moved.tolist(), ring)]

    if geom_type == "Polygon":
        coordinates = [transform_ring(ring) for ring in geometry["coordinates"]]
    else:
        coordinates = [
            [transform_ring(ring) for ring in polygon]
            for polygon in geometry["coordinates"]
        ]

    properties = boundary.properties.model_dump()
    properties["center"] = [float(target[0]), float(target[1])]
    return {
        "type": "Feature",
        "geometry": {"type": geom_type, "coordinates": coordinates},
        "properties": properties,
    }


def overlay_feature(base: LocationBounds, overlay: LocationBounds) -> dict:
    """Overlay ``overlay`` on ``base`` at equal visual area."""
    return transform_overlay(overlay, base.center, scale_ratio(base, overlay))
