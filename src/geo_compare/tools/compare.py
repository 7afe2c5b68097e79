"""Comparison tools: select_location, compare_locations."""

import json
from typing import Literal

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.bounds import fallback_bounds, location_bounds_from_record
from ..core.errors import PersistenceError
from ..core.transform import overlay_feature, scale_ratio
from ._prereqs import require_state


def register_compare_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def select_location(
        role: Literal["base", "overlay"],
        name: str,
        lat: float | None = None,
        lon: float | None = None,
    ) -> str:
        """Load a stored boundary as the base or overlay of the comparison.

        If the name is not stored and lat/lon are given, a circle of ~11 km
        radius around that point is used instead.
        **Prior:** fetch_boundaries for locations not yet stored.
        **Next:** compare_locations once both roles are selected.

        Args:
            role: 'base' (stays in place) or 'overlay' (moved and rescaled).
            name: Location name as stored.
            lat: Fallback center latitude.
            lon: Fallback center longitude.
        """
        try:
            record = state.store().find(name)
        except PersistenceError as e:
            return f"Error: {e}"

        if record is not None:
            bounds = location_bounds_from_record(record)
            note = ""
        elif lat is not None and lon is not None:
            bounds = fallback_bounds(name, (lon, lat))
            note = " (approximate circular boundary, no stored data)"
        else:
            return f"Error: Boundary not found for '{name}'. Fetch it first with fetch_boundaries."

        setattr(state, role, bounds)
        return (
            f"{role.capitalize()} set to '{bounds.name}'{note}: "
            f"center {bounds.center[1]:.5f}, {bounds.center[0]:.5f}, "
            f"~{bounds.area_km2:.0f} km², {bounds.coordinate_count} points"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def compare_locations() -> str:
        """Rescale the overlay to the base's area and move it onto the base center.

        Returns a GeoJSON Feature for the repositioned overlay plus the scale
        ratio used.
        **Requires:** select_location for both 'base' and 'overlay'.
        """
        try:
            require_state(state, base=True, overlay=True)
        except ValueError as e:
            return f"Error: {e}"

        return json.dumps(
            {
                "base": state.base.name,
                "overlay": state.overlay.name,
                "scale_ratio": scale_ratio(state.base, state.overlay),
                "feature": overlay_feature(state.base, state.overlay),
            }
        )
