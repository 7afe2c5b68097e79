"""MultiPolygon assembly and the fragmentation quality gate.

Areas are planar (degrees squared) and only ever compared with each other.
Note the primary ring is picked by bounding-box area while the gate filters
by shoelace area; both are kept as-is so stored results stay comparable.
"""

import numpy as np

from .models import QualityThresholds, QualityReport


def ring_area(ring) -> float:
    """Shoelace area of a closed ring, absolute, in degrees squared."""
    if len(ring) < 3:
        return 0.0
    pts = np.asarray(ring, dtype=float)
    x, y = pts[:, 0], pts[:, 1]
    return float(abs(np.sum(x[:-1] * y[1:] - x[1:] * y[:-1])) / 2)


def bbox_area(ring) -> float:
    pts = np.asarray(ring, dtype=float)
    spans = pts.max(axis=0) - pts.min(axis=0)
    return float(spans[0] * spans[1])


def count_points(polygons) -> int:
    return sum(len(ring) for polygon in polygons for ring in polygon)


def build_multipolygon(outer_rings: list, inner_rings: list) -> list:
    """Group rings into polygons, primary first.

    The outer ring with the largest bounding box becomes the primary shell and
    receives every inner ring as a hole; containment is not checked. Remaining
    outer rings become hole-less polygons in their original order.
    """
    if not outer_rings:
        return []

    primary_idx = 0
    max_area = 0.0
    for i, ring in enumerate(outer_rings):
        area = bbox_area(ring)
        if area > max_area:
            max_area = area
            primary_idx = i

    polygons = [[outer_rings[primary_idx], *inner_rings]]
    polygons.extend([ring] for i, ring in enumerate(outer_rings) if i != primary_idx)
    return polygons


def check_quality(polygons: list, thresholds: QualityThresholds | None = None) -> QualityReport:
    """Drop noise fragments and decide whether what is left is trustworthy.

    Secondary polygons whose outer ring covers no more than
    ``min_area_ratio`` of the primary are dropped. The result is invalid when
    more than ``max_polygons`` survive or when the dropped share reaches
    ``max_fragmentation_ratio``. The point floor is checked separately by the
    caller.
    """
    thresholds = thresholds or QualityThresholds()
    original_count = len(polygons)
    if original_count == 0:
        return QualityReport(
            is_valid=False, polygons=[], original_count=0, kept_count=0, fragmentation_ratio=0.0,
        )

    main_area = ring_area(polygons[0][0])
    kept = [polygons[0]]
    for polygon in polygons[1:]:
        if ring_area(polygon[0]) > main_area * thresholds.min_area_ratio:
            kept.append(polygon)

    ratio = (original_count - len(kept)) / original_count if original_count > 1 else 0.0
    is_valid = (
        len(kept) <= thresholds.max_polygons
        and ratio < thresholds.max_fragmentation_ratio
    )
    return QualityReport(
        is_valid=is_valid,
        polygons=kept,
        original_count=original_count,
        kept_count=len(kept),
        fragmentation_ratio=ratio,
    )
