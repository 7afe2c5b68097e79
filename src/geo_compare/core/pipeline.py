"""Fetch, assemble, validate and store administrative boundaries.

Locations are processed one after another. Each one either ends with a
stored record or a failed FetchResult; a failure never stops the batch.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from pydantic import TypeAdapter

from geo_compare.models import BoundaryRecord, BoundaryRequest, FetchResult
from .elements import index_elements
from .errors import (
    BoundaryError,
    FragmentedBoundary,
    InsufficientDetail,
    NoElementsReturned,
    NoRelationsFound,
    NoValidGeometryFragments,
    NoValidRingsAssembled,
)
from .members import extract_fragments, select_relation
from .models import BuiltBoundary, QualityThresholds
from .osm import fetch_boundary_elements
from .polygons import build_multipolygon, check_quality, count_points
from .rings import assemble_rings
from .stats import compute_stats
from .store import BoundaryStore, normalize_name

logger = logging.getLogger(__name__)

FetchElements = Callable[[BoundaryRequest], Awaitable[dict]]

# OSM rate limit: 1 req/sec between Overpass calls
RATE_LIMIT_DELAY_S = 1.0

_requests_adapter = TypeAdapter(list[BoundaryRequest])


def build_boundary(
    request: BoundaryRequest,
    payload: dict,
    thresholds: QualityThresholds | None = None,
) -> BuiltBoundary:
    """Turn one Overpass payload into a validated, storable boundary.

    Raises:
        BoundaryError: one of the per-location failures, in pipeline order.
    """
    thresholds = thresholds or QualityThresholds()

    elements = payload.get("elements") or []
    if not elements:
        raise NoElementsReturned()

    index = index_elements(elements)
    relation = select_relation(index.relations)
    if relation is None:
        raise NoRelationsFound()
    logger.info(
        "Selected relation %s for %s with %d members",
        relation.id, request.name, len(relation.members),
    )

    outer_fragments, inner_fragments = extract_fragments(relation, index)
    if not outer_fragments:
        raise NoValidGeometryFragments()

    outer_rings = assemble_rings(outer_fragments, thresholds.tolerance)
    inner_rings = assemble_rings(inner_fragments, thresholds.tolerance)
    if not outer_rings:
        raise NoValidRingsAssembled()

    polygons = build_multipolygon(outer_rings, inner_rings)
    report = check_quality(polygons, thresholds)
    if not report.is_valid:
        raise FragmentedBoundary(report.original_count, report.kept_count, report.fragmentation_ratio)

    total_points = count_points(report.polygons)
    if total_points < thresholds.min_points:
        raise InsufficientDetail(total_points, thresholds.min_points)

    stats = compute_stats(report.polygons)
    center_lng, center_lat = stats.center
    record = BoundaryRecord(
        name=request.name,
        normalized_name=normalize_name(request.name),
        geometry={"type": "MultiPolygon", "coordinates": report.polygons},
        bbox=stats.bbox_polygon(),
        center_lng=center_lng,
        center_lat=center_lat,
        area_km2=stats.area_km2,
        admin_level=request.admin_level,
        country_code=request.country,
        relation_id=relation.id,
    )
    return BuiltBoundary(
        record=record,
        stats=stats,
        rings=len(outer_rings),
        original_polygons=report.original_count,
        relation_id=relation.id,
    )


def _stored_point_count(record: BoundaryRecord | None) -> int:
    if record is None:
        return 0
    return sum(len(ring) for polygon in record.geometry.get("coordinates", []) for ring in polygon)


async def process_location(
    request: BoundaryRequest,
    store: BoundaryStore,
    thresholds: QualityThresholds | None = None,
    fetch_elements: FetchElements | None = None,
    reuse_existing: bool = False,
) -> FetchResult:
    """Run one location end to end and report the outcome."""
    before_points = 0
    try:
        existing = store.get(request.name)
        before_points = _stored_point_count(existing)

        if reuse_existing and existing is not None:
            logger.info("Using existing data for %s", request.name)
            return FetchResult(
                name=request.name,
                success=True,
                message=f"Using existing data for {request.name}",
                coordinate_count=before_points,
                before_points=before_points,
                after_points=before_points,
                area_km2=round(existing.area_km2),
                relation_id=existing.relation_id,
                existing=True,
            )

        payload = await (fetch_elements or fetch_boundary_elements)(request)
        built = build_boundary(request, payload, thresholds)
        store.upsert(built.record)
    except BoundaryError as e:
        logger.warning("Boundary for %s rejected: %s", request.name, e)
        after_points = e.point_count if isinstance(e, InsufficientDetail) else 0
        return FetchResult(
            name=request.name, success=False, error=str(e),
            before_points=before_points, after_points=after_points,
        )
    except Exception as e:
        logger.exception("Unexpected error processing %s", request.name)
        return FetchResult(
            name=request.name, success=False, error=str(e) or type(e).__name__,
            before_points=before_points, after_points=0,
        )

    logger.info(
        "Processed %s with %d coordinate points (%d rings)",
        request.name, built.stats.point_count, built.rings,
    )
    return FetchResult(
        name=request.name,
        success=True,
        coordinate_count=built.stats.point_count,
        before_points=before_points,
        after_points=built.stats.point_count,
        rings=built.rings,
        area_km2=round(built.stats.area_km2),
        relation_id=built.relation_id,
    )


async def fetch_boundaries(
    locations,
    store: BoundaryStore,
    thresholds: QualityThresholds | None = None,
    fetch_elements: FetchElements | None = None,
    reuse_existing: bool = False,
    delay_s: float = RATE_LIMIT_DELAY_S,
) -> list[FetchResult]:
    """Process a batch of locations sequentially, results in input order.

    Raises:
        ValueError: ``locations`` is not a list.
        pydantic.ValidationError: an entry is not a valid BoundaryRequest.
    """
    if not isinstance(locations, list):
        raise ValueError("Invalid request. Expected array of locations.")
    requests = _requests_adapter.validate_python(locations)

    logger.info("Fetching OSM boundaries for %d locations", len(requests))
    results = []
    for i, request in enumerate(requests):
        if i > 0 and delay_s > 0:
            await asyncio.sleep(delay_s)
        results.append(
            await process_location(
                request, store, thresholds,
                fetch_elements=fetch_elements, reuse_existing=reuse_existing,
            )
        )

    succeeded = sum(1 for r in results if r.success)
    logger.info("Processed %d locations, %d successful", len(results), succeeded)
    return results
