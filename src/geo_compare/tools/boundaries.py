"""Boundary acquisition tools: fetch_boundaries, set_quality_thresholds, get_boundary."""

import json
import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..core.bounds import location_bounds_from_record
from ..core.errors import PersistenceError
from ..core.models import QualityThresholds
from ..core.pipeline import fetch_boundaries as run_fetch_batch

logger = logging.getLogger(__name__)


def register_boundary_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def fetch_boundaries(locations: list[dict], reuse_existing: bool = False) -> str:
        """Fetch administrative boundaries from OpenStreetMap and store them.

        Each location is queried on Overpass, stitched into a MultiPolygon,
        checked for fragmentation and upserted by normalized name. Locations
        are processed one at a time; each query can take 10-30 seconds.
        **Next:** select_location for a base and an overlay, then compare_locations.

        Args:
            locations: Entries like {"name": "Austin", "country": "US", "admin_level": 8}.
                Optional keys: relation_id, osm_id, osm_type.
            reuse_existing: Skip the fetch for names that are already stored.
        """
        try:
            results = await run_fetch_batch(
                locations,
                state.store(),
                state.thresholds,
                reuse_existing=reuse_existing,
            )
        except ValueError as e:
            return f"Error: {e}"

        state.last_results = results
        succeeded = sum(1 for r in results if r.success)
        return json.dumps(
            {
                "success": True,
                "results": [r.model_dump(exclude_none=True) for r in results],
                "message": f"Processed {len(results)} locations. {succeeded} successful.",
            },
            indent=2,
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_quality_thresholds(
        min_area_ratio: float | None = None,
        max_polygons: int | None = None,
        max_fragmentation_ratio: float | None = None,
        min_points: int | None = None,
        tolerance: float | None = None,
    ) -> str:
        """Tune the limits used to reject fragmented or sparse boundaries.

        Omitted arguments keep their current value.

        Args:
            min_area_ratio: Secondary polygons at or below this share of the primary are dropped (default 0.01).
            max_polygons: Reject when more polygons than this survive (default 10).
            max_fragmentation_ratio: Reject when this share of polygons was dropped (default 0.8).
            min_points: Reject boundaries with fewer coordinate points (default 50).
            tolerance: Endpoint match tolerance in degrees for ring stitching (default 1e-4).
        """
        updates = {
            k: v for k, v in {
                "min_area_ratio": min_area_ratio,
                "max_polygons": max_polygons,
                "max_fragmentation_ratio": max_fragmentation_ratio,
                "min_points": min_points,
                "tolerance": tolerance,
            }.items() if v is not None
        }
        try:
            state.thresholds = QualityThresholds(**{**state.thresholds.model_dump(), **updates})
        except ValidationError as e:
            return f"Error: Invalid thresholds: {e.errors()[0]['msg']}"
        return f"Quality thresholds: {state.thresholds.model_dump()}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_boundary(name: str) -> str:
        """Return the stored boundary for a location as LocationBounds JSON.

        Args:
            name: Location name; text after the first comma is ignored.
        """
        try:
            record = state.store().find(name)
        except PersistenceError as e:
            return f"Error: {e}"
        if record is None:
            return f"Error: Boundary not found for '{name}'. Fetch it first with fetch_boundaries."
        return location_bounds_from_record(record).model_dump_json(indent=2)
